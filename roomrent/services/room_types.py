import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import RoomType, RoomTypeStatus

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
STATUSES = {s.value for s in RoomTypeStatus}


def _clean_name(name: str) -> str:
    name = name.strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Room type name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    return name


def _check_status(status: Any) -> str:
    if not isinstance(status, str) or status not in STATUSES:
        raise ValidationError(f"Room type status must be one of: {', '.join(sorted(STATUSES))}")
    return status


class RoomTypeRegistry:
    """The room type taxonomy that listings point to."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, name: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f'Room type "{name}" already exists')

    def create(self, type_name: Any, status: Any = None) -> RoomType:
        if not type_name or not isinstance(type_name, str):
            raise ValidationError("Room type name is required")
        rt = RoomType(
            type_name=_clean_name(type_name),
            status=_check_status(status or RoomTypeStatus.ACTIVE.value),
        )
        self.db.add(rt)
        self._commit(rt.type_name)
        self.db.refresh(rt)
        logger.info("Created room type %s (%s)", rt.id, rt.type_name)
        return rt

    def list(self) -> list[RoomType]:
        return self.db.query(RoomType).order_by(RoomType.created_at.asc(), RoomType.id.asc()).all()

    def get_by_id(self, room_type_id: str) -> RoomType:
        rt = self.db.get(RoomType, room_type_id)
        if not rt:
            raise NotFoundError("Room type not found")
        return rt

    def find_by_name(self, type_name: str) -> RoomType | None:
        return self.db.query(RoomType).filter(RoomType.type_name == type_name).first()

    def update(self, room_type_id: str, type_name: Any = None, status: Any = None) -> RoomType:
        rt = self.get_by_id(room_type_id)
        if type_name and not isinstance(type_name, str):
            raise ValidationError("Room type name must be a string")
        new_name = _clean_name(type_name) if type_name else None
        new_status = _check_status(status) if status else None
        if new_name:
            rt.type_name = new_name
        if new_status:
            rt.status = new_status
        self._commit(rt.type_name)
        self.db.refresh(rt)
        logger.info("Updated room type %s", rt.id)
        return rt

    def delete(self, room_type_id: str) -> None:
        # Listings referencing this type are left as they are
        rt = self.get_by_id(room_type_id)
        self.db.delete(rt)
        self.db.commit()
        logger.info("Deleted room type %s", room_type_id)
