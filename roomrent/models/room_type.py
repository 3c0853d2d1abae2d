from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from ..db import Base, new_object_id

class RoomTypeStatus(str, PyEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class RoomType(Base):
    __tablename__ = "room_types"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    type_name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default=RoomTypeStatus.ACTIVE.value, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
