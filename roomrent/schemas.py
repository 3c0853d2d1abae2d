from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Input fields stay loosely typed so the services can report
# missing or malformed values with their own messages.


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    role: str


class RoomTypeIn(CamelModel):
    type_name: Any = None
    status: Any = None


class RoomTypeOut(CamelModel):
    id: str
    type_name: str
    status: str
    created_at: datetime
    updated_at: datetime


class RoomTypeSummary(CamelModel):
    id: str
    type_name: str


class OwnerSummary(CamelModel):
    id: str
    name: str
    email: str


class RoomCreateIn(CamelModel):
    owner_contact_number: Any = None
    room_title: Any = None
    monthly_price: Any = None
    location: Any = None
    room_type: Any = None
    description: Any = None
    images: Any = None
    videos: Any = None


class RoomUpdateIn(RoomCreateIn):
    is_available: Optional[bool] = None
    approval_status: Any = None


class RoomOut(CamelModel):
    id: str
    owner_id: str
    owner: Optional[OwnerSummary] = None
    owner_contact_number: str
    room_title: str
    monthly_price: float
    location: str
    room_type_id: str
    room_type: Optional[RoomTypeSummary] = None
    description: Optional[str] = None
    images: list[str] = []
    videos: list[str] = []
    is_available: bool
    approval_status: str
    created_at: datetime
    updated_at: datetime


def dump(model: type[BaseModel], obj) -> dict:
    return model.model_validate(obj).model_dump(mode="json", by_alias=True)
