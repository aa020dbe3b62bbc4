"""
Who may do what.

Plain predicates over an actor id and a record; no session, no globals.
`actor_id` is None for anonymous callers.
"""
from typing import Optional

from rental_market.db.models import RentalItem, RentalRequest, ITEM_ACTIVE


def is_item_available(item: RentalItem) -> bool:
    return bool(item.is_available) and item.status == ITEM_ACTIVE


def can_mutate_item(actor_id: Optional[int], item: RentalItem) -> bool:
    return actor_id is not None and actor_id == item.user_id


def can_request_item(actor_id: Optional[int], item: RentalItem) -> bool:
    return (
        actor_id is not None
        and actor_id != item.user_id
        and is_item_available(item)
    )


def can_view_request(actor_id: Optional[int], rental_request: RentalRequest) -> bool:
    return actor_id is not None and actor_id in (
        rental_request.renter_id,
        rental_request.lister_id,
    )


def can_respond_to_request(actor_id: Optional[int], rental_request: RentalRequest) -> bool:
    return actor_id is not None and actor_id == rental_request.lister_id
