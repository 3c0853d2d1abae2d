"""
Room listing lifecycle: create, read, update, delete and media uploads.

Writes are owner-only. Reads are public and return listings with their
owner and room type loaded for display.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from ..config import settings
from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import ApprovalStatus, RoomListing
from .listing_rules import (
    can_modify,
    is_object_id,
    merge_update,
    missing_required,
    normalize_page,
    parse_room_type_ref,
    total_pages,
)
from .media import MEDIA_KINDS, get_media_store, looks_like_image
from .room_types import RoomTypeRegistry

logger = logging.getLogger(__name__)

REQUIRED_ON_CREATE = ("room_title", "monthly_price", "location", "room_type")
APPROVAL_STATUSES = {s.value for s in ApprovalStatus}

# Client-facing field names used in error messages
FIELD_LABELS = {
    "owner_contact_number": "ownerContactNumber",
    "room_title": "roomTitle",
    "monthly_price": "monthlyPrice",
    "location": "location",
    "room_type": "roomType",
    "description": "description",
    "images": "images",
    "videos": "videos",
    "is_available": "isAvailable",
    "approval_status": "approvalStatus",
}


@dataclass
class UploadedFile:
    filename: str
    content: bytes
    size: int | None = None


@dataclass
class ListingPage:
    items: list[RoomListing]
    total: int
    page: int
    limit: int
    pages: int


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip()


def _parse_price(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("monthlyPrice must be a number")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("monthlyPrice must be a number")
    if not price.is_finite():
        raise ValidationError("monthlyPrice must be a number")
    return price


def _clean_filenames(value: Any, field: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of filenames")
    return [v.strip() for v in value if v.strip()]


class RoomListingService:
    def __init__(self, db: Session, media=None):
        self.db = db
        self.media = media if media is not None else get_media_store()
        self.room_types = RoomTypeRegistry(db)

    # ---- room type references ----

    def resolve_room_type(self, raw: Any) -> str:
        """Turn an id-or-name room type input into a room type id."""
        ref = parse_room_type_ref(raw)
        if ref.kind == "id":
            # Id-shaped values are trusted without a lookup
            return ref.value
        rt = self.room_types.find_by_name(ref.value)
        if not rt:
            raise ValidationError(
                f'Room type "{ref.value}" not found. Please use a valid room type name or id.'
            )
        return rt.id

    # ---- writes ----

    def create(self, owner_id: str, fields: dict[str, Any]) -> RoomListing:
        fields = {
            **fields,
            "room_title": _clean_text(fields.get("room_title")),
            "location": _clean_text(fields.get("location")),
        }
        missing = missing_required(fields, REQUIRED_ON_CREATE)
        if missing:
            raise ValidationError(
                "Please provide all required fields: " + ", ".join(FIELD_LABELS[f] for f in missing)
            )
        contact = _clean_text(fields.get("owner_contact_number"))
        if not contact:
            raise ValidationError("Owner contact number is required")
        price = _parse_price(fields["monthly_price"])
        room_type_id = self.resolve_room_type(fields["room_type"])

        room = RoomListing(
            owner_id=owner_id,
            owner_contact_number=contact,
            room_title=fields["room_title"],
            monthly_price=price,
            location=fields["location"],
            room_type_id=room_type_id,
            description=_clean_text(fields.get("description")) or None,
            images=_clean_filenames(fields.get("images"), "images"),
            videos=_clean_filenames(fields.get("videos"), "videos"),
            is_available=True,
            approval_status=ApprovalStatus.PENDING.value,
        )
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        logger.info("Room %s created by owner %s", room.id, owner_id)
        return room

    def _normalize_changes(self, changes: dict[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for field, value in changes.items():
            if field == "room_type":
                # No name lookup on update; only direct references are accepted
                if not is_object_id(str(value)):
                    raise ValidationError("roomType must be a room type id when updating a room")
                out["room_type_id"] = str(value).lower()
            elif field == "monthly_price":
                out[field] = _parse_price(value)
            elif field == "approval_status":
                if not isinstance(value, str) or value not in APPROVAL_STATUSES:
                    raise ValidationError(
                        f"approvalStatus must be one of: {', '.join(sorted(APPROVAL_STATUSES))}"
                    )
                out[field] = value
            elif field in ("images", "videos"):
                out[field] = _clean_filenames(value, field)
            elif field == "is_available":
                if not isinstance(value, bool):
                    raise ValidationError("isAvailable must be a boolean")
                out[field] = value
            elif field == "description":
                out[field] = _clean_text(value) or None
            else:
                text = _clean_text(value)
                if not text:
                    raise ValidationError(f"{FIELD_LABELS[field]} cannot be empty")
                out[field] = text
        return out

    def update(self, room_id: str, caller_id: str, fields: dict[str, Any]) -> RoomListing:
        room = self.get_by_id(room_id)
        if not can_modify(room.owner_id, caller_id):
            raise ForbiddenError("Not authorized to update this room")

        changes = self._normalize_changes(merge_update(fields))
        for attr, value in changes.items():
            setattr(room, attr, value)
        self.db.commit()
        self.db.refresh(room)
        logger.info("Room %s updated (%s)", room.id, ", ".join(sorted(changes)) or "no changes")
        return room

    def delete(self, room_id: str, caller_id: str) -> None:
        room = self.get_by_id(room_id)
        if not can_modify(room.owner_id, caller_id):
            raise ForbiddenError("Not authorized to delete this room")

        self._remove_media([*(room.images or []), *(room.videos or [])])
        self.db.delete(room)
        self.db.commit()
        logger.info("Room %s deleted by owner %s", room_id, caller_id)

    def _remove_media(self, filenames: list[str]) -> None:
        """Best-effort: a missing or undeletable file never blocks the delete."""
        for fname in filenames:
            try:
                if not self.media.delete(fname):
                    logger.debug("Media file %s not found, skipping", fname)
            except Exception as e:
                logger.warning("Failed to remove media file %s: %s", fname, e)

    def record_upload(self, upload: UploadedFile | None, kind: str) -> str:
        media_kind = MEDIA_KINDS.get(kind)
        if media_kind is None:
            raise ValidationError(f"Unknown media kind: {kind}")
        noun = "an image" if kind == "image" else "a video"

        if upload is None or not upload.filename or not upload.content:
            raise ValidationError(f"Please upload {noun} file")
        if not upload.filename.lower().endswith(media_kind.extensions):
            raise ValidationError(f"Only {kind} files are allowed")
        size = upload.size if upload.size is not None else len(upload.content)
        if size > media_kind.max_bytes:
            raise ValidationError(f"Please upload {noun} smaller than {media_kind.max_bytes} bytes")
        if kind == "image" and not looks_like_image(upload.content):
            raise ValidationError("Only image files are allowed")

        fname = self.media.save(media_kind, upload.content, upload.filename)
        logger.info("Stored %s upload as %s (%d bytes)", kind, fname, size)
        return fname

    # ---- reads ----

    def get_by_id(self, room_id: str) -> RoomListing:
        room = self.db.get(RoomListing, room_id)
        if not room:
            raise NotFoundError("Room not found")
        return room

    def list(
        self,
        owner_id: str | None = None,
        is_available: bool | None = None,
        approval_status: str | None = None,
        page: int | None = 1,
        limit: int | None = None,
    ) -> ListingPage:
        page, limit = normalize_page(page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        q = self.db.query(RoomListing)
        if owner_id:
            q = q.filter(RoomListing.owner_id == owner_id)
        if is_available is not None:
            q = q.filter(RoomListing.is_available == is_available)
        if approval_status:
            q = q.filter(RoomListing.approval_status == approval_status)

        total = q.count()
        items = (
            q.order_by(RoomListing.created_at.desc(), RoomListing.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return ListingPage(items=items, total=total, page=page, limit=limit, pages=total_pages(total, limit))

    def list_by_owner(self, owner_id: str) -> list[RoomListing]:
        return (
            self.db.query(RoomListing)
            .filter(RoomListing.owner_id == owner_id)
            .order_by(RoomListing.created_at.asc(), RoomListing.id.asc())
            .all()
        )
