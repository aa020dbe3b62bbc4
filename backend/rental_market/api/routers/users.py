from fastapi import APIRouter, Depends
from rental_market.api.dependencies import get_current_user
from rental_market.schemas.user import UserOut

router = APIRouter()


@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    return UserOut.model_validate(current_user)
