# rental_market/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rental_market.db.session import get_db
from rental_market.db import crud_users
from rental_market.schemas.auth import Token
from rental_market.schemas.user import UserCreate, UserLogin, UserOut
from rental_market.core.security import create_access_token, verify_password

router = APIRouter()


def _token_response(user) -> Token:
    access = create_access_token({"user_id": user.id})
    return Token(access_token=access, user=UserOut.model_validate(user))


@router.post("/register", response_model=Token)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await crud_users.get_user_by_email(db, payload.email)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists")

    user = await crud_users.create_user(
        db=db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        phone=payload.phone,
    )
    return _token_response(user)


@router.post("/login", response_model=Token)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await crud_users.get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    # reload with profile for the response
    user = await crud_users.get_user(db, user.id)
    return _token_response(user)
