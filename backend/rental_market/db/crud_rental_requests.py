# rental_market/db/crud_rental_requests.py

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rental_market.db.models import RentalRequest


def _with_relations(stmt):
    return stmt.options(
        selectinload(RentalRequest.rental_item),
        selectinload(RentalRequest.renter),
        selectinload(RentalRequest.lister),
    )


async def _paginate(
    db: AsyncSession,
    stmt,
    page: int,
    per_page: int,
) -> Tuple[List[RentalRequest], int]:
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    stmt = _with_relations(stmt).offset((page - 1) * per_page).limit(per_page)
    res = await db.execute(stmt)
    return list(res.scalars().all()), int(total)


async def create_request(db: AsyncSession, **kwargs) -> RentalRequest:
    rental_request = RentalRequest(**kwargs)
    db.add(rental_request)
    await db.commit()
    await db.refresh(rental_request)
    return rental_request


async def get_request(db: AsyncSession, request_id: int) -> Optional[RentalRequest]:
    # populate_existing: pick up changes written by transition_request
    stmt = _with_relations(
        select(RentalRequest).where(RentalRequest.id == request_id)
    ).execution_options(populate_existing=True)
    res = await db.execute(stmt)
    return res.scalars().first()


async def transition_request(
    db: AsyncSession,
    request_id: int,
    *,
    from_status: str,
    to_status: str,
    response_message: Optional[str],
    responded_at: datetime,
) -> bool:
    """
    Compare-and-set status change. Returns False when the row was no longer
    in `from_status` (someone else responded first); nothing is written then.
    """
    stmt = (
        update(RentalRequest)
        .where(RentalRequest.id == request_id, RentalRequest.status == from_status)
        .values(
            status=to_status,
            response_message=response_message,
            responded_at=responded_at,
            updated_at=responded_at,
        )
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    if res.rowcount != 1:
        await db.rollback()
        return False
    await db.commit()
    return True


async def list_requests_for_renter(
    db: AsyncSession,
    renter_id: int,
    page: int = 1,
    per_page: int = 10,
) -> Tuple[List[RentalRequest], int]:
    stmt = (
        select(RentalRequest)
        .where(RentalRequest.renter_id == renter_id)
        .order_by(RentalRequest.created_at.desc(), RentalRequest.id.desc())
    )
    return await _paginate(db, stmt, page, per_page)


async def list_requests_for_lister(
    db: AsyncSession,
    lister_id: int,
    page: int = 1,
    per_page: int = 10,
) -> Tuple[List[RentalRequest], int]:
    stmt = (
        select(RentalRequest)
        .where(RentalRequest.lister_id == lister_id)
        .order_by(RentalRequest.created_at.desc(), RentalRequest.id.desc())
    )
    return await _paginate(db, stmt, page, per_page)


async def list_recent_requests(
    db: AsyncSession,
    *,
    rental_item_id: Optional[int] = None,
    renter_id: Optional[int] = None,
    lister_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 5,
) -> List[RentalRequest]:
    stmt = select(RentalRequest)
    if rental_item_id is not None:
        stmt = stmt.where(RentalRequest.rental_item_id == rental_item_id)
    if renter_id is not None:
        stmt = stmt.where(RentalRequest.renter_id == renter_id)
    if lister_id is not None:
        stmt = stmt.where(RentalRequest.lister_id == lister_id)
    if status is not None:
        stmt = stmt.where(RentalRequest.status == status)
    stmt = _with_relations(
        stmt.order_by(RentalRequest.created_at.desc(), RentalRequest.id.desc()).limit(limit)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def count_requests(
    db: AsyncSession,
    *,
    renter_id: Optional[int] = None,
    lister_id: Optional[int] = None,
    status: Optional[str] = None,
) -> int:
    stmt = select(func.count(RentalRequest.id))
    if renter_id is not None:
        stmt = stmt.where(RentalRequest.renter_id == renter_id)
    if lister_id is not None:
        stmt = stmt.where(RentalRequest.lister_id == lister_id)
    if status is not None:
        stmt = stmt.where(RentalRequest.status == status)
    res = await db.execute(stmt)
    return int(res.scalar_one())
