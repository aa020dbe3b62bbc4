# rental_market/schemas/rental_type.py
from typing import Optional
from pydantic import BaseModel

from rental_market.db.models import RentalType


class RentalTypeOut(BaseModel):
    key: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int

    @classmethod
    def from_model(cls, rental_type: RentalType, locale: str = "en") -> "RentalTypeOut":
        return cls(
            key=rental_type.key,
            name=rental_type.localized_name(locale),
            description=rental_type.localized_description(locale),
            icon=rental_type.icon,
            sort_order=rental_type.sort_order,
        )
