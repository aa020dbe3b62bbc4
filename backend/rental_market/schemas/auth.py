# rental_market/schemas/auth.py
from typing import Optional
from pydantic import BaseModel

from rental_market.schemas.user import UserOut


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserOut] = None

    model_config = {"from_attributes": True}
