# rental_market/db/crud_rental_types.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.db.models import RentalType


async def list_active_types(db: AsyncSession) -> List[RentalType]:
    stmt = (
        select(RentalType)
        .where(RentalType.is_active.is_(True))
        .order_by(RentalType.sort_order.asc(), RentalType.key.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_active_type(db: AsyncSession, key: str) -> Optional[RentalType]:
    res = await db.execute(
        select(RentalType)
        .where(RentalType.key == key)
        .where(RentalType.is_active.is_(True))
    )
    return res.scalar_one_or_none()


async def get_type(db: AsyncSession, key: str) -> Optional[RentalType]:
    res = await db.execute(select(RentalType).where(RentalType.key == key))
    return res.scalar_one_or_none()


async def create_type(db: AsyncSession, **kwargs) -> RentalType:
    rental_type = RentalType(**kwargs)
    db.add(rental_type)
    await db.commit()
    await db.refresh(rental_type)
    return rental_type


DEFAULT_RENTAL_TYPES = [
    {
        "key": "car",
        "name": {"en": "Car", "id": "Mobil"},
        "description": {"en": "Rent cars for transportation", "id": "Sewa mobil untuk transportasi"},
        "icon": "car",
        "sort_order": 1,
    },
    {
        "key": "motorcycle",
        "name": {"en": "Motorcycle", "id": "Motor"},
        "description": {"en": "Rent motorcycles for quick trips", "id": "Sewa motor untuk perjalanan cepat"},
        "icon": "motorcycle",
        "sort_order": 2,
    },
    {
        "key": "storage",
        "name": {"en": "Storage", "id": "Penyimpanan"},
        "description": {"en": "Rent storage spaces for your items", "id": "Sewa ruang penyimpanan untuk barang Anda"},
        "icon": "package",
        "sort_order": 3,
    },
    {
        "key": "property",
        "name": {"en": "Property", "id": "Properti"},
        "description": {"en": "Rent properties for accommodation", "id": "Sewa properti untuk akomodasi"},
        "icon": "home",
        "sort_order": 4,
    },
    {
        "key": "equipment",
        "name": {"en": "Equipment", "id": "Peralatan"},
        "description": {"en": "Rent tools and equipment", "id": "Sewa alat dan peralatan"},
        "icon": "tool",
        "sort_order": 5,
    },
]


async def seed_default_types(db: AsyncSession) -> List[RentalType]:
    """
    Insert the standard categories that are missing. Safe to re-run.
    """
    created = []
    for data in DEFAULT_RENTAL_TYPES:
        if await get_type(db, data["key"]) is None:
            created.append(await create_type(db, **data))
    return created
