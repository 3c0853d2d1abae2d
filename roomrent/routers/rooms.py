from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..schemas import RoomCreateIn, RoomUpdateIn, RoomOut, dump
from ..security import require_api_user
from ..services.media import get_media_store
from ..services.room_listings import RoomListingService, UploadedFile

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


def get_room_service(db: Session = Depends(get_db), media=Depends(get_media_store)) -> RoomListingService:
    return RoomListingService(db, media)


def _to_int(value: str | None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


async def _read_upload(file: UploadFile | None) -> UploadedFile | None:
    if not file or not file.filename:
        return None
    data = await file.read()
    return UploadedFile(filename=file.filename, content=data, size=len(data))


@router.post("/upload-image")
async def upload_room_image(images: UploadFile | None = File(None), user: User = Depends(require_api_user), svc: RoomListingService = Depends(get_room_service)):
    fname = svc.record_upload(await _read_upload(images), "image")
    return {"success": True, "data": fname, "message": "Image uploaded successfully"}


@router.post("/upload-video")
async def upload_room_video(videos: UploadFile | None = File(None), user: User = Depends(require_api_user), svc: RoomListingService = Depends(get_room_service)):
    fname = svc.record_upload(await _read_upload(videos), "video")
    return {"success": True, "data": fname, "message": "Video uploaded successfully"}


@router.post("", status_code=201)
def create_room(payload: RoomCreateIn, user: User = Depends(require_api_user), svc: RoomListingService = Depends(get_room_service)):
    room = svc.create(user.id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": dump(RoomOut, room)}


@router.get("")
def list_rooms(
    page: str | None = None,
    limit: str | None = None,
    owner_id: str | None = Query(None, alias="ownerId"),
    is_available: str | None = Query(None, alias="isAvailable"),
    approval_status: str | None = Query(None, alias="approvalStatus"),
    svc: RoomListingService = Depends(get_room_service),
):
    result = svc.list(
        owner_id=owner_id,
        is_available=None if is_available is None else is_available == "true",
        approval_status=approval_status,
        page=_to_int(page),
        limit=_to_int(limit),
    )
    return {
        "success": True,
        "count": len(result.items),
        "total": result.total,
        "page": result.page,
        "pages": result.pages,
        "data": [dump(RoomOut, r) for r in result.items],
    }


@router.get("/owner/{owner_id}")
def list_rooms_by_owner(owner_id: str, svc: RoomListingService = Depends(get_room_service)):
    rooms = svc.list_by_owner(owner_id)
    return {"success": True, "count": len(rooms), "data": [dump(RoomOut, r) for r in rooms]}


@router.get("/{room_id}")
def get_room(room_id: str, svc: RoomListingService = Depends(get_room_service)):
    return {"success": True, "data": dump(RoomOut, svc.get_by_id(room_id))}


@router.put("/{room_id}")
def update_room(room_id: str, payload: RoomUpdateIn, user: User = Depends(require_api_user), svc: RoomListingService = Depends(get_room_service)):
    room = svc.update(room_id, user.id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": dump(RoomOut, room)}


@router.delete("/{room_id}")
def delete_room(room_id: str, user: User = Depends(require_api_user), svc: RoomListingService = Depends(get_room_service)):
    svc.delete(room_id, user.id)
    return {"success": True, "message": "Room deleted successfully"}
