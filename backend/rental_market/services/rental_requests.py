# rental_market/services/rental_requests.py
"""
Rental request lifecycle.

    pending --(lister approves)--> approved
    pending --(lister rejects)---> rejected

Both outcomes are terminal. `cancelled` is a valid stored status but no
operation here produces it. Price, currency and lister are copied from the
item when the request is submitted and never re-read afterwards.

Overlapping requests for the same item and dates are accepted; nothing here
reserves the item.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.core.config import settings
from rental_market.core.errors import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    add_error,
)
from rental_market.db import crud_rental_items, crud_rental_requests
from rental_market.db.models import (
    RentalRequest,
    REQUEST_APPROVED,
    REQUEST_PENDING,
    REQUEST_REJECTED,
)
from rental_market.services import authorization, pricing

logger = logging.getLogger(__name__)

RESPONSE_DECISIONS = (REQUEST_APPROVED, REQUEST_REJECTED)
MAX_MESSAGE_LENGTH = 1000


def _clean_message(
    errors: Dict[str, List[str]],
    field: str,
    message: Optional[str],
) -> Optional[str]:
    if message is None:
        return None
    message = message.strip()
    if len(message) > MAX_MESSAGE_LENGTH:
        add_error(errors, field, f"Your message cannot exceed {MAX_MESSAGE_LENGTH} characters.")
    return message or None


async def submit_request(
    db: AsyncSession,
    renter_id: int,
    item_id: int,
    start_date: date,
    end_date: date,
    message: Optional[str] = None,
    today: Optional[date] = None,
) -> RentalRequest:
    item = await crud_rental_items.get_item(db, item_id)
    if item is None:
        raise NotFoundError()

    today = today or date.today()
    errors: Dict[str, List[str]] = {}

    if start_date < today:
        add_error(errors, "start_date", "Start date must be today or later.")

    total_days = None
    if end_date <= start_date:
        add_error(errors, "end_date", "End date must be after the start date.")
    else:
        total_days = pricing.rental_days(start_date, end_date)
        if total_days < item.minimum_rental_days:
            add_error(
                errors,
                "end_date",
                f"Minimum rental period is {item.minimum_rental_days} days.",
            )
        if item.maximum_rental_days and total_days > item.maximum_rental_days:
            add_error(
                errors,
                "end_date",
                f"Maximum rental period is {item.maximum_rental_days} days.",
            )

    message = _clean_message(errors, "message", message)

    if not authorization.can_request_item(renter_id, item):
        if renter_id == item.user_id:
            add_error(errors, "rental_item_id", "You cannot request your own rental item.")
        else:
            add_error(errors, "rental_item_id", "The selected rental item is not available.")

    if errors:
        raise ValidationError(errors)

    rental_request = await crud_rental_requests.create_request(
        db,
        rental_item_id=item.id,
        renter_id=renter_id,
        lister_id=item.user_id,
        start_date=start_date,
        end_date=end_date,
        total_days=total_days,
        price_per_day=item.price_per_day,
        total_amount=pricing.compute_total(item.price_per_day, start_date, end_date),
        currency=item.currency,
        status=REQUEST_PENDING,
        message=message,
    )
    logger.info(
        "rental request %s submitted by user %s for item %s (%s days)",
        rental_request.id,
        renter_id,
        item.id,
        total_days,
    )
    return await crud_rental_requests.get_request(db, rental_request.id)


async def respond_to_request(
    db: AsyncSession,
    actor_id: int,
    request_id: int,
    decision: str,
    response_message: Optional[str] = None,
) -> RentalRequest:
    rental_request = await crud_rental_requests.get_request(db, request_id)
    if rental_request is None:
        raise NotFoundError()
    if not authorization.can_respond_to_request(actor_id, rental_request):
        raise AuthorizationError()

    errors: Dict[str, List[str]] = {}
    if decision not in RESPONSE_DECISIONS:
        add_error(errors, "status", "Invalid response status.")
    response_message = _clean_message(errors, "response_message", response_message)
    if errors:
        raise ValidationError(errors)

    if rental_request.status != REQUEST_PENDING:
        raise InvalidStateError(
            f"This rental request has already been {rental_request.status}."
        )

    changed = await crud_rental_requests.transition_request(
        db,
        request_id,
        from_status=REQUEST_PENDING,
        to_status=decision,
        response_message=response_message,
        responded_at=datetime.utcnow(),
    )
    if not changed:
        logger.warning("rental request %s was answered concurrently", request_id)
        raise InvalidStateError("This rental request has already been responded to.")

    logger.info("rental request %s %s by user %s", request_id, decision, actor_id)
    return await crud_rental_requests.get_request(db, request_id)


async def view_request(db: AsyncSession, actor_id: int, request_id: int) -> RentalRequest:
    rental_request = await crud_rental_requests.get_request(db, request_id)
    if rental_request is None:
        raise NotFoundError()
    if not authorization.can_view_request(actor_id, rental_request):
        raise AuthorizationError()
    return rental_request


async def list_requests_for_actor(
    db: AsyncSession,
    actor_id: int,
    sent_page: int = 1,
    received_page: int = 1,
) -> Dict[str, Dict[str, Any]]:
    """
    Requests the actor made as renter and requests they received as lister,
    each newest first and paginated on its own.
    """
    per_page = settings.REQUESTS_PER_PAGE
    sent_page = max(sent_page, 1)
    received_page = max(received_page, 1)

    sent, sent_total = await crud_rental_requests.list_requests_for_renter(
        db, actor_id, page=sent_page, per_page=per_page
    )
    received, received_total = await crud_rental_requests.list_requests_for_lister(
        db, actor_id, page=received_page, per_page=per_page
    )
    return {
        "my_requests": {
            "items": sent,
            "total": sent_total,
            "page": sent_page,
            "per_page": per_page,
        },
        "received_requests": {
            "items": received,
            "total": received_total,
            "page": received_page,
            "per_page": per_page,
        },
    }
