# rental_market/schemas/rental_item.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel

from rental_market.schemas.user import OwnerInfo


class RentalItemOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    rental_type: str
    price_per_day: Decimal
    currency: str
    images: List[str]
    specifications: Dict[str, Any]
    location: str
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    is_available: bool
    minimum_rental_days: int
    maximum_rental_days: Optional[int] = None
    terms_and_conditions: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RentalItemDetail(RentalItemOut):
    owner: OwnerInfo


class RentalItemSummary(BaseModel):
    id: int
    title: str
    rental_type: str
    location: str

    model_config = {"from_attributes": True}


class RentalItemCreate(BaseModel):
    """
    Types only; ranges and cross-field rules are checked by the service so
    that every problem is reported together.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    rental_type: Optional[str] = None
    price_per_day: Optional[Decimal] = None
    currency: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Dict[str, Any]] = None
    location: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    is_available: bool = True
    minimum_rental_days: Optional[int] = None
    maximum_rental_days: Optional[int] = None
    terms_and_conditions: Optional[str] = None
    status: Optional[str] = None


class RentalItemUpdate(BaseModel):
    # only fields the client actually sent are applied (exclude_unset)
    title: Optional[str] = None
    description: Optional[str] = None
    rental_type: Optional[str] = None
    price_per_day: Optional[Decimal] = None
    currency: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Dict[str, Any]] = None
    location: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    is_available: Optional[bool] = None
    minimum_rental_days: Optional[int] = None
    maximum_rental_days: Optional[int] = None
    terms_and_conditions: Optional[str] = None
    status: Optional[str] = None


class RentalItemsPage(BaseModel):
    items: list[RentalItemOut]
    total: int
    page: int
    per_page: int
