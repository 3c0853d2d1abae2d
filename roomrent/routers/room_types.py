from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..schemas import RoomTypeIn, RoomTypeOut, dump
from ..security import require_api_admin
from ..services.room_types import RoomTypeRegistry

router = APIRouter(prefix="/api/v1/room-types", tags=["room-types"])


def get_registry(db: Session = Depends(get_db)) -> RoomTypeRegistry:
    return RoomTypeRegistry(db)


@router.get("")
def list_room_types(registry: RoomTypeRegistry = Depends(get_registry)):
    return {"success": True, "data": [dump(RoomTypeOut, rt) for rt in registry.list()]}


@router.post("", status_code=201)
def create_room_type(payload: RoomTypeIn, _: User = Depends(require_api_admin), registry: RoomTypeRegistry = Depends(get_registry)):
    rt = registry.create(payload.type_name, payload.status)
    return {"success": True, "data": dump(RoomTypeOut, rt)}


@router.get("/{room_type_id}")
def get_room_type(room_type_id: str, registry: RoomTypeRegistry = Depends(get_registry)):
    return {"success": True, "data": dump(RoomTypeOut, registry.get_by_id(room_type_id))}


@router.put("/{room_type_id}")
def update_room_type(room_type_id: str, payload: RoomTypeIn, _: User = Depends(require_api_admin), registry: RoomTypeRegistry = Depends(get_registry)):
    rt = registry.update(room_type_id, payload.type_name, payload.status)
    return {"success": True, "data": dump(RoomTypeOut, rt)}


@router.delete("/{room_type_id}")
def delete_room_type(room_type_id: str, _: User = Depends(require_api_admin), registry: RoomTypeRegistry = Depends(get_registry)):
    registry.delete(room_type_id)
    return {"success": True}
