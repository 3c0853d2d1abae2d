from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from enum import Enum as PyEnum
from sqlalchemy import String, ForeignKey, Numeric, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_object_id

if TYPE_CHECKING:
    from .user import User
    from .room_type import RoomType

class ApprovalStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class RoomListing(Base):
    __tablename__ = "room_listings"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    owner_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    owner_contact_number: Mapped[str] = mapped_column(String(50), nullable=False)
    room_title: Mapped[str] = mapped_column(String(200), nullable=False)
    monthly_price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    location: Mapped[str] = mapped_column(String(300), nullable=False)
    # Plain reference column: deleting a room type leaves listings pointing at it
    room_type_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    videos: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    approval_status: Mapped[str] = mapped_column(String(20), default=ApprovalStatus.PENDING.value, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner: Mapped[User] = relationship(back_populates="room_listings")
    room_type: Mapped[Optional[RoomType]] = relationship(
        primaryjoin="foreign(RoomListing.room_type_id) == RoomType.id",
        viewonly=True,
    )
