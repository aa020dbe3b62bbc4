# rental_market/services/rental_items.py
"""
Rental item registry: validation, owner-only mutation and public listing.

Every function takes plain values (ids, dicts) and returns ORM rows or
raises one of the errors from rental_market.core.errors.
"""
import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.core.config import settings
from rental_market.core.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
    add_error,
)
from rental_market.db import crud_rental_items, crud_rental_types
from rental_market.db.models import RentalItem, ITEM_ACTIVE, ITEM_STATUSES
from rental_market.services import authorization

logger = logging.getLogger(__name__)

ITEM_FIELDS = (
    "title",
    "description",
    "rental_type",
    "price_per_day",
    "currency",
    "images",
    "specifications",
    "location",
    "latitude",
    "longitude",
    "is_available",
    "minimum_rental_days",
    "maximum_rental_days",
    "terms_and_conditions",
    "status",
)

MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("999999.99")
MAX_RENTAL_DAYS = 365
MAX_IMAGES = 10


def _text(
    errors: Dict[str, List[str]],
    attrs: Dict[str, Any],
    field: str,
    max_length: int,
    required: bool,
    required_message: Optional[str] = None,
) -> Optional[str]:
    value = attrs.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            add_error(errors, field, required_message or f"The {field} field is required.")
        return None
    if not isinstance(value, str):
        add_error(errors, field, f"The {field} field must be a string.")
        return None
    if len(value) > max_length:
        add_error(errors, field, f"The {field} field must not exceed {max_length} characters.")
    return value


def _decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"\s*-?\d+\s*", value, re.ASCII):
        return int(value)
    return None


def _coordinate(
    errors: Dict[str, List[str]],
    attrs: Dict[str, Any],
    field: str,
    bound: int,
) -> Optional[Decimal]:
    raw = attrs.get(field)
    if raw is None or raw == "":
        return None
    value = _decimal(raw)
    if value is None:
        add_error(errors, field, f"The {field} field must be a number.")
        return None
    if not -bound <= value <= bound:
        add_error(errors, field, f"The {field} field must be between -{bound} and {bound}.")
    return value


async def validate_item_attributes(
    db: AsyncSession,
    attrs: Dict[str, Any],
    current_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Check a complete item record and return the cleaned values.

    Collects every violation before raising ValidationError. `current_type`
    is the item's existing category on update; keeping it is allowed even if
    that type has since been deactivated.
    """
    errors: Dict[str, List[str]] = {}
    clean: Dict[str, Any] = {}

    clean["title"] = _text(
        errors, attrs, "title", 255, True,
        "Please provide a title for your rental item.",
    )
    clean["description"] = _text(
        errors, attrs, "description", 5000, True,
        "Please provide a description of your rental item.",
    )
    clean["location"] = _text(
        errors, attrs, "location", 255, True,
        "Please specify the location of your rental item.",
    )
    clean["terms_and_conditions"] = _text(errors, attrs, "terms_and_conditions", 5000, False)

    rental_type = _text(errors, attrs, "rental_type", 50, True, "Please select a rental type.")
    if rental_type is not None and "rental_type" not in errors:
        if rental_type == current_type:
            known = await crud_rental_types.get_type(db, rental_type)
        else:
            known = await crud_rental_types.get_active_type(db, rental_type)
        if known is None:
            add_error(errors, "rental_type", "The selected rental type is invalid.")
    clean["rental_type"] = rental_type

    # price
    raw_price = attrs.get("price_per_day")
    price = None
    if raw_price is None or raw_price == "":
        add_error(errors, "price_per_day", "Please set a daily rental price.")
    else:
        price = _decimal(raw_price)
        if price is None:
            add_error(errors, "price_per_day", "The daily price must be a number.")
        elif price < MIN_PRICE:
            add_error(errors, "price_per_day", "The daily price must be at least 0.01.")
        elif price > MAX_PRICE:
            add_error(errors, "price_per_day", "The daily price must not exceed 999999.99.")
        else:
            price = price.quantize(MIN_PRICE, rounding=ROUND_HALF_UP)
    clean["price_per_day"] = price

    currency = _text(errors, attrs, "currency", 3, True, "Please choose a currency.")
    if currency is not None and len(currency) != 3 and "currency" not in errors:
        add_error(errors, "currency", "The currency must be exactly 3 characters.")
    clean["currency"] = currency

    clean["latitude"] = _coordinate(errors, attrs, "latitude", 90)
    clean["longitude"] = _coordinate(errors, attrs, "longitude", 180)

    # rental period bounds
    minimum = _integer(attrs.get("minimum_rental_days"))
    if attrs.get("minimum_rental_days") is None:
        add_error(errors, "minimum_rental_days", "Please set the minimum rental period.")
    elif minimum is None:
        add_error(errors, "minimum_rental_days", "The minimum rental days must be an integer.")
    elif not 1 <= minimum <= MAX_RENTAL_DAYS:
        add_error(errors, "minimum_rental_days", "The minimum rental days must be between 1 and 365.")
    clean["minimum_rental_days"] = minimum

    maximum = None
    if attrs.get("maximum_rental_days") not in (None, ""):
        maximum = _integer(attrs.get("maximum_rental_days"))
        if maximum is None:
            add_error(errors, "maximum_rental_days", "The maximum rental days must be an integer.")
        elif not 1 <= maximum <= MAX_RENTAL_DAYS:
            add_error(errors, "maximum_rental_days", "The maximum rental days must be between 1 and 365.")
        elif minimum is not None and maximum < minimum:
            add_error(
                errors,
                "maximum_rental_days",
                "Maximum rental days must be greater than or equal to minimum rental days.",
            )
    clean["maximum_rental_days"] = maximum

    images = attrs.get("images")
    if images is None:
        images = []
    if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
        add_error(errors, "images", "The images field must be a list of strings.")
    elif len(images) > MAX_IMAGES:
        add_error(errors, "images", f"No more than {MAX_IMAGES} images are allowed.")
    clean["images"] = images

    specifications = attrs.get("specifications")
    if specifications is None:
        specifications = {}
    if not isinstance(specifications, dict):
        add_error(errors, "specifications", "The specifications field must be a key/value map.")
    clean["specifications"] = specifications

    is_available = attrs.get("is_available", True)
    if not isinstance(is_available, bool):
        add_error(errors, "is_available", "The is_available field must be true or false.")
    clean["is_available"] = is_available

    item_status = attrs.get("status") or ITEM_ACTIVE
    if item_status not in ITEM_STATUSES:
        add_error(errors, "status", "The status must be active or inactive.")
    clean["status"] = item_status

    if errors:
        raise ValidationError(errors)
    return clean


def _current_values(item: RentalItem) -> Dict[str, Any]:
    return {field: getattr(item, field) for field in ITEM_FIELDS}


async def create_item(db: AsyncSession, owner_id: int, attributes: Dict[str, Any]) -> RentalItem:
    data = await validate_item_attributes(db, attributes)
    item = await crud_rental_items.create_item(db, user_id=owner_id, **data)
    logger.info("rental item %s created by user %s", item.id, owner_id)
    return item


async def get_item(db: AsyncSession, item_id: int) -> RentalItem:
    item = await crud_rental_items.get_item(db, item_id)
    if item is None:
        raise NotFoundError()
    return item


async def get_item_detail(
    db: AsyncSession,
    item_id: int,
    actor_id: Optional[int] = None,
) -> Tuple[RentalItem, bool]:
    """
    Item with owner and owner profile loaded, plus whether `actor_id` may
    submit a request for it.
    """
    item = await crud_rental_items.get_item_with_owner(db, item_id)
    if item is None:
        raise NotFoundError()
    return item, authorization.can_request_item(actor_id, item)


async def update_item(
    db: AsyncSession,
    item_id: int,
    actor_id: int,
    attributes: Dict[str, Any],
) -> RentalItem:
    item = await get_item(db, item_id)
    if not authorization.can_mutate_item(actor_id, item):
        raise AuthorizationError()

    merged = _current_values(item)
    merged.update({k: v for k, v in attributes.items() if k in ITEM_FIELDS})
    data = await validate_item_attributes(db, merged, current_type=item.rental_type)

    item = await crud_rental_items.update_item(db, item, data)
    logger.info("rental item %s updated by user %s", item_id, actor_id)
    return item


async def delete_item(db: AsyncSession, item_id: int, actor_id: int) -> None:
    item = await get_item(db, item_id)
    if not authorization.can_mutate_item(actor_id, item):
        raise AuthorizationError()

    await crud_rental_items.delete_item(db, item)
    logger.info("rental item %s deleted by user %s", item_id, actor_id)


async def list_available(
    db: AsyncSession,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
) -> Tuple[List[RentalItem], int]:
    """Available & active items, newest first, one fixed-size page."""
    search = search.strip() if search else None
    return await crud_rental_items.list_available_items(
        db,
        category=category or None,
        search=search or None,
        page=max(page, 1),
        per_page=settings.ITEMS_PER_PAGE,
    )


async def list_items_for_owner(
    db: AsyncSession,
    owner_id: int,
    limit: Optional[int] = None,
) -> List[RentalItem]:
    return await crud_rental_items.list_items_for_owner(db, owner_id, limit=limit)
