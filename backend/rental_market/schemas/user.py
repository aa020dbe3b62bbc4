# rental_market/schemas/user.py
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr


class ProfileOut(BaseModel):
    role: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    language: str
    timezone: str
    rating: Optional[Decimal] = None
    total_reviews: int
    is_verified: bool
    verified_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """
    What other marketplace users may see about someone.
    """
    id: int
    name: str

    model_config = {"from_attributes": True}


class UserOut(UserSummary):
    email: EmailStr
    created_at: datetime
    profile: Optional[ProfileOut] = None


class OwnerInfo(UserSummary):
    profile: Optional[ProfileOut] = None


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: Literal["lister", "renter"] = "renter"
    phone: Optional[str] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str
