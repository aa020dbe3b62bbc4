"""Per-user overview: own listings, incoming and outgoing requests."""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.core.config import settings
from rental_market.db import crud_rental_items, crud_rental_requests
from rental_market.db.models import REQUEST_PENDING


async def get_dashboard(db: AsyncSession, user_id: int) -> Dict[str, Any]:
    limit = settings.DASHBOARD_LIMIT

    my_items = await crud_rental_items.list_items_for_owner(db, user_id, limit=limit)
    item_requests = {
        item.id: await crud_rental_requests.list_recent_requests(
            db, rental_item_id=item.id, limit=limit
        )
        for item in my_items
    }
    pending_requests = await crud_rental_requests.list_recent_requests(
        db, lister_id=user_id, status=REQUEST_PENDING, limit=limit
    )
    my_requests = await crud_rental_requests.list_recent_requests(
        db, renter_id=user_id, limit=limit
    )

    stats = {
        "total_items": await crud_rental_items.count_items_for_owner(db, user_id),
        "active_items": await crud_rental_items.count_items_for_owner(
            db, user_id, available_only=True
        ),
        "pending_requests": await crud_rental_requests.count_requests(
            db, lister_id=user_id, status=REQUEST_PENDING
        ),
        "my_requests": await crud_rental_requests.count_requests(db, renter_id=user_id),
    }

    return {
        "my_items": my_items,
        "item_requests": item_requests,
        "pending_requests": pending_requests,
        "my_requests": my_requests,
        "stats": stats,
    }
