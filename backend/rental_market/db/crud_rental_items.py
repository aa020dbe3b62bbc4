# rental_market/db/crud_rental_items.py
from typing import Tuple, List, Optional

from sqlalchemy import select, func, and_, or_, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rental_market.db.models import RentalItem, RentalRequest, User, ITEM_ACTIVE


def _available_clauses() -> list:
    return [
        RentalItem.is_available.is_(True),
        RentalItem.status == ITEM_ACTIVE,
    ]


async def list_available_items(
    db: AsyncSession,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    per_page: int = 12,
) -> Tuple[List[RentalItem], int]:
    """
    Public listing: ALWAYS only available & active items, newest first.
    """
    where_clauses = _available_clauses()

    if category:
        where_clauses.append(RentalItem.rental_type == category)
    if search:
        # match % and _ literally
        escaped = (
            search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        )
        pattern = f"%{escaped}%"
        where_clauses.append(
            or_(
                func.lower(RentalItem.title).like(pattern, escape="\\"),
                func.lower(RentalItem.description).like(pattern, escape="\\"),
                func.lower(RentalItem.location).like(pattern, escape="\\"),
            )
        )

    stmt = (
        select(RentalItem)
        .where(and_(*where_clauses))
        .order_by(RentalItem.created_at.desc(), RentalItem.id.desc())
    )

    # count total
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total_res = await db.execute(count_stmt)
    total = total_res.scalar_one()

    offset = (page - 1) * per_page
    stmt = stmt.offset(offset).limit(per_page)
    res = await db.execute(stmt)
    items = list(res.scalars().all())
    return items, int(total)


async def get_item(db: AsyncSession, item_id: int) -> RentalItem | None:
    res = await db.execute(select(RentalItem).where(RentalItem.id == item_id))
    return res.scalars().first()


async def get_item_with_owner(db: AsyncSession, item_id: int) -> RentalItem | None:
    """
    Eagerly load owner + owner profile so serialization never lazy-loads
    (which raises MissingGreenlet under asyncio).
    """
    stmt = (
        select(RentalItem)
        .options(selectinload(RentalItem.owner).selectinload(User.profile))
        .where(RentalItem.id == item_id)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_items_for_owner(
    db: AsyncSession,
    owner_id: int,
    limit: Optional[int] = None,
) -> List[RentalItem]:
    """
    Owner view: ALL their items regardless of availability/status.
    """
    stmt = (
        select(RentalItem)
        .where(RentalItem.user_id == owner_id)
        .order_by(RentalItem.created_at.desc(), RentalItem.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def count_items_for_owner(
    db: AsyncSession,
    owner_id: int,
    available_only: bool = False,
) -> int:
    stmt = select(func.count(RentalItem.id)).where(RentalItem.user_id == owner_id)
    if available_only:
        stmt = stmt.where(and_(*_available_clauses()))
    res = await db.execute(stmt)
    return int(res.scalar_one())


async def create_item(db: AsyncSession, **kwargs) -> RentalItem:
    item = RentalItem(**kwargs)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def update_item(db: AsyncSession, item: RentalItem, data: dict) -> RentalItem:
    # data is the full, already validated record; None clears optional fields
    for k, v in data.items():
        setattr(item, k, v)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def delete_item(db: AsyncSession, item: RentalItem) -> bool:
    """
    Remove the item and every request made against it in one transaction.
    """
    await db.execute(
        delete(RentalRequest).where(RentalRequest.rental_item_id == item.id)
    )
    await db.delete(item)
    await db.commit()
    return True
