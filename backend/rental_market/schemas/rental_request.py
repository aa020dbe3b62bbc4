# rental_market/schemas/rental_request.py
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from rental_market.schemas.rental_item import RentalItemSummary
from rental_market.schemas.user import UserSummary


class RentalRequestCreate(BaseModel):
    rental_item_id: int
    start_date: date
    end_date: date
    message: Optional[str] = None


class RentalRequestRespond(BaseModel):
    # "approved" | "rejected"
    status: str
    response_message: Optional[str] = None


class RentalRequestOut(BaseModel):
    id: int
    rental_item_id: int
    renter_id: int
    lister_id: int
    start_date: date
    end_date: date
    total_days: int
    price_per_day: Decimal
    total_amount: Decimal
    currency: str
    status: str
    message: Optional[str] = None
    response_message: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    rental_item: Optional[RentalItemSummary] = None
    renter: Optional[UserSummary] = None
    lister: Optional[UserSummary] = None

    model_config = {"from_attributes": True}


class RentalRequestsPage(BaseModel):
    items: list[RentalRequestOut]
    total: int
    page: int
    per_page: int
