from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.core.config import settings
from rental_market.db.session import get_db
from rental_market.db import crud_rental_types
from rental_market.schemas.rental_type import RentalTypeOut

router = APIRouter()


@router.get("")
async def list_rental_types(
    db: AsyncSession = Depends(get_db),
    locale: Optional[str] = None,
):
    """
    Active categories in display order, names in `locale` (falls back to en).
    """
    types = await crud_rental_types.list_active_types(db)
    locale = locale or settings.DEFAULT_LOCALE
    return {"success": True, "data": [RentalTypeOut.from_model(t, locale) for t in types]}
