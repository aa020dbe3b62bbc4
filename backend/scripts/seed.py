# scripts/seed.py
import asyncio
import random
from decimal import Decimal

from rental_market.db.base import Base
from rental_market.db.session import AsyncSessionLocal, engine
from rental_market.db.crud_rental_types import DEFAULT_RENTAL_TYPES, seed_default_types
from rental_market.db.crud_users import create_user, get_user_by_email
from rental_market.db.crud_rental_items import create_item


async def seed():
    # create tables (if migrations not run)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await seed_default_types(db)

        listers = []
        for i in range(3):
            email = f"lister{i}@example.com"
            user = await get_user_by_email(db, email)
            if not user:
                user = await create_user(db, name=f"Lister {i}", email=email, password="password", role="lister")
            listers.append(user)

        if not await get_user_by_email(db, "renter@example.com"):
            await create_user(db, name="Renter", email="renter@example.com", password="password")

        cities = ["Jakarta", "Bandung", "Surabaya", "Denpasar"]
        for i in range(20):
            rental_type = random.choice(DEFAULT_RENTAL_TYPES)["key"]
            await create_item(
                db,
                user_id=random.choice(listers).id,
                title=f"{rental_type.title()} {i}",
                description=f"Well kept {rental_type} available for rent.",
                rental_type=rental_type,
                price_per_day=Decimal(25 + i * 5),
                currency="USD",
                location=random.choice(cities),
                minimum_rental_days=1 + i % 3,
                maximum_rental_days=30,
            )
        print("Seed complete")


if __name__ == "__main__":
    asyncio.run(seed())
