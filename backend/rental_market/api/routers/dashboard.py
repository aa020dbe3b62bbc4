from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.api.dependencies import get_current_user
from rental_market.db.session import get_db
from rental_market.services.dashboard import get_dashboard
from rental_market.schemas.dashboard import DashboardItemOut
from rental_market.schemas.rental_item import RentalItemOut
from rental_market.schemas.rental_request import RentalRequestOut

router = APIRouter()


@router.get("")
async def dashboard(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    summary = await get_dashboard(db, current_user.id)
    return {
        "success": True,
        "data": {
            "my_items": [
                DashboardItemOut(
                    **RentalItemOut.model_validate(i).model_dump(),
                    recent_requests=[
                        RentalRequestOut.model_validate(r) for r in summary["item_requests"][i.id]
                    ],
                )
                for i in summary["my_items"]
            ],
            "pending_requests": [
                RentalRequestOut.model_validate(r) for r in summary["pending_requests"]
            ],
            "my_requests": [RentalRequestOut.model_validate(r) for r in summary["my_requests"]],
            "stats": summary["stats"],
        },
    }
