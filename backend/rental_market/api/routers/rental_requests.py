# rental_market/api/routers/rental_requests.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.api.dependencies import get_current_user
from rental_market.db.session import get_db
from rental_market.services import rental_requests as request_service
from rental_market.schemas.rental_request import (
    RentalRequestCreate,
    RentalRequestOut,
    RentalRequestRespond,
    RentalRequestsPage,
)

router = APIRouter()


def _page(section: dict) -> RentalRequestsPage:
    return RentalRequestsPage(
        items=[RentalRequestOut.model_validate(r) for r in section["items"]],
        total=section["total"],
        page=section["page"],
        per_page=section["per_page"],
    )


@router.get("")
async def list_rental_requests(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
    sent_page: int = Query(1, ge=1),
    received_page: int = Query(1, ge=1),
):
    """
    Requests I made (as renter) and requests I received (as lister).
    """
    sections = await request_service.list_requests_for_actor(
        db,
        current_user.id,
        sent_page=sent_page,
        received_page=received_page,
    )
    return {
        "success": True,
        "data": {
            "my_requests": _page(sections["my_requests"]),
            "received_requests": _page(sections["received_requests"]),
        },
    }


@router.post("", status_code=201)
async def submit_rental_request(
    body: RentalRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    rental_request = await request_service.submit_request(
        db,
        renter_id=current_user.id,
        item_id=body.rental_item_id,
        start_date=body.start_date,
        end_date=body.end_date,
        message=body.message,
    )
    return {
        "success": True,
        "message": "Rental request submitted successfully.",
        "data": RentalRequestOut.model_validate(rental_request),
    }


@router.get("/{request_id}")
async def get_rental_request(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    rental_request = await request_service.view_request(db, current_user.id, request_id)
    return {
        "success": True,
        "data": {
            "rental_request": RentalRequestOut.model_validate(rental_request),
            "is_lister": rental_request.lister_id == current_user.id,
            "is_renter": rental_request.renter_id == current_user.id,
        },
    }


@router.put("/{request_id}")
async def respond_to_rental_request(
    request_id: int,
    body: RentalRequestRespond,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    rental_request = await request_service.respond_to_request(
        db,
        current_user.id,
        request_id,
        decision=body.status,
        response_message=body.response_message,
    )
    return {
        "success": True,
        "message": "Rental request response sent successfully.",
        "data": RentalRequestOut.model_validate(rental_request),
    }
