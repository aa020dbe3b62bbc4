# rental_market/db/crud_users.py

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rental_market.db.models import User, UserProfile, ROLE_RENTER
from rental_market.core.security import get_password_hash


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(
        select(User)
        .options(selectinload(User.profile))
        .where(User.id == user_id)
    )
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_RENTER,
    phone: Optional[str] = None,
) -> User:
    """
    Create a user with hashed password and its profile row in one commit.
    """
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
    )
    user.profile = UserProfile(role=role, phone=phone)
    db.add(user)
    await db.commit()
    return await get_user(db, user.id)
