# rental_market/api/routers/rental_items.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.api.dependencies import get_current_user, get_optional_user
from rental_market.core.config import settings
from rental_market.db.session import get_db
from rental_market.services import rental_items as item_service
from rental_market.schemas.rental_item import (
    RentalItemCreate,
    RentalItemDetail,
    RentalItemOut,
    RentalItemsPage,
    RentalItemUpdate,
)

router = APIRouter()


@router.get("")
async def list_rental_items(
    db: AsyncSession = Depends(get_db),
    type: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
):
    """
    Public listings – ALWAYS available & active only.
    """
    items, total = await item_service.list_available(
        db,
        category=type,
        search=search,
        page=page,
    )
    page_obj = RentalItemsPage(
        items=[RentalItemOut.model_validate(i) for i in items],
        total=total,
        page=page,
        per_page=settings.ITEMS_PER_PAGE,
    )
    return {"success": True, "data": page_obj}


@router.get("/{item_id}")
async def get_rental_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_optional_user),
):
    """
    Item detail with owner. Anyone may look; `can_request` tells the
    frontend whether to show the request form to this caller.
    """
    actor_id = current_user.id if current_user else None
    item, can_request = await item_service.get_item_detail(db, item_id, actor_id)
    return {
        "success": True,
        "data": {
            "rental_item": RentalItemDetail.model_validate(item),
            "can_request": can_request,
        },
    }


@router.post("", status_code=201)
async def create_rental_item(
    body: RentalItemCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    item = await item_service.create_item(db, current_user.id, body.model_dump())
    return {
        "success": True,
        "message": "Rental item created successfully.",
        "data": RentalItemOut.model_validate(item),
    }


@router.put("/{item_id}")
async def update_rental_item(
    item_id: int,
    body: RentalItemUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    item = await item_service.update_item(
        db,
        item_id,
        current_user.id,
        body.model_dump(exclude_unset=True),
    )
    return {
        "success": True,
        "message": "Rental item updated successfully.",
        "data": RentalItemOut.model_validate(item),
    }


@router.delete("/{item_id}")
async def delete_rental_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    await item_service.delete_item(db, item_id, current_user.id)
    return {"success": True, "message": "Rental item deleted successfully."}
