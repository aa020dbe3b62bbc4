# rental_market/db/models.py

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    JSON,
    Index,
)
from sqlalchemy.orm import relationship

from rental_market.db.base import Base


# RentalRequest.status values
REQUEST_PENDING = "pending"
REQUEST_APPROVED = "approved"
REQUEST_REJECTED = "rejected"
REQUEST_CANCELLED = "cancelled"
REQUEST_STATUSES = (REQUEST_PENDING, REQUEST_APPROVED, REQUEST_REJECTED, REQUEST_CANCELLED)

# RentalItem.status values
ITEM_ACTIVE = "active"
ITEM_INACTIVE = "inactive"
ITEM_STATUSES = (ITEM_ACTIVE, ITEM_INACTIVE)

# UserProfile.role values
ROLE_LISTER = "lister"
ROLE_RENTER = "renter"
PROFILE_ROLES = (ROLE_LISTER, ROLE_RENTER)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # DB column name: password_hash
    # Python attribute: hashed_password
    hashed_password = Column("password_hash", String(255), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    profile = relationship(
        "UserProfile",
        back_populates="user",
        uselist=False,
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    rental_items = relationship(
        "RentalItem",
        back_populates="owner",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # "lister" | "renter"
    role = Column(String(20), nullable=False, default=ROLE_RENTER, index=True)
    phone = Column(String(32), nullable=True)
    bio = Column(Text, nullable=True)
    avatar = Column(String(255), nullable=True)
    language = Column(String(2), nullable=False, default="en")
    timezone = Column(String(64), nullable=False, default="UTC")

    rating = Column(Numeric(3, 2), nullable=True)
    total_reviews = Column(Integer, nullable=False, default=0)

    is_verified = Column(Boolean, nullable=False, default=False)
    verified_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="profile")


class RentalType(Base):
    __tablename__ = "rental_types"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(50), unique=True, index=True, nullable=False)

    # {"en": "Car", "id": "Mobil"}
    name = Column(JSON, nullable=False, default=dict)
    description = Column(JSON, nullable=True)

    icon = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def localized_name(self, locale: str = "en") -> str:
        names = self.name or {}
        return names.get(locale) or names.get("en") or self.key

    def localized_description(self, locale: str = "en") -> str | None:
        descriptions = self.description or {}
        return descriptions.get(locale) or descriptions.get("en")


class RentalItem(Base):
    __tablename__ = "rental_items"
    __table_args__ = (
        Index("ix_rental_items_type_available", "rental_type", "is_available"),
        Index("ix_rental_items_location_type", "location", "rental_type"),
    )

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # key of a RentalType row
    rental_type = Column(
        String(50),
        ForeignKey("rental_types.key"),
        nullable=False,
        index=True,
    )

    price_per_day = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # list[str] / dict as JSON in DB
    images = Column(JSON, nullable=False, default=list)
    specifications = Column(JSON, nullable=False, default=dict)

    location = Column(String(255), nullable=False)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)

    is_available = Column(Boolean, nullable=False, default=True, index=True)
    minimum_rental_days = Column(Integer, nullable=False, default=1)
    maximum_rental_days = Column(Integer, nullable=True)
    terms_and_conditions = Column(Text, nullable=True)

    # "active" | "inactive"
    status = Column(String(20), nullable=False, default=ITEM_ACTIVE, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="rental_items")

    rental_requests = relationship(
        "RentalRequest",
        back_populates="rental_item",
        cascade="all,delete-orphan",
    )


class RentalRequest(Base):
    __tablename__ = "rental_requests"
    __table_args__ = (
        Index("ix_rental_requests_dates", "start_date", "end_date"),
        Index("ix_rental_requests_lister_status", "lister_id", "status"),
        Index("ix_rental_requests_renter_status", "renter_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)

    rental_item_id = Column(
        Integer,
        ForeignKey("rental_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    renter_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # copy of rental_items.user_id at submission time
    lister_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Integer, nullable=False)

    # snapshot of the item's price at submission; never re-read from the item
    price_per_day = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # "pending" | "approved" | "rejected" | "cancelled"
    status = Column(String(20), nullable=False, default=REQUEST_PENDING, index=True)
    message = Column(Text, nullable=True)
    response_message = Column(Text, nullable=True)
    responded_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    rental_item = relationship("RentalItem", back_populates="rental_requests")
    renter = relationship("User", foreign_keys=[renter_id])
    lister = relationship("User", foreign_keys=[lister_id])
