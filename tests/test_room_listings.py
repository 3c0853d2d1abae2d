"""RoomListingService tests."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from conftest import PNG_BYTES
from roomrent.config import settings
from roomrent.errors import ForbiddenError, NotFoundError, ValidationError
from roomrent.models import RoomListing
from roomrent.services.room_listings import RoomListingService, UploadedFile
from roomrent.services.room_types import RoomTypeRegistry

STUDIO_LIKE_ID = "507f1f77bcf86cd799439011"


def _fields(**overrides):
    fields = {
        "owner_contact_number": " 9800000000 ",
        "room_title": " Sunny studio ",
        "monthly_price": 1200,
        "location": " Lalitpur ",
        "room_type": STUDIO_LIKE_ID,
        "description": "Close to the ring road",
        "images": ["room-img-a.png"],
        "videos": ["room-vid-a.mp4"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture()
def service(db, media) -> RoomListingService:
    return RoomListingService(db, media)


@pytest.fixture()
def studio(db):
    return RoomTypeRegistry(db).create("Studio")


@pytest.fixture()
def listing(service, users, studio) -> RoomListing:
    return service.create(users["alice"], _fields(room_type="Studio"))


# ---- create ----

@pytest.mark.parametrize("missing", ["room_title", "monthly_price", "location", "room_type"])
def test_create_requires_core_fields(service, db, users, missing) -> None:
    fields = _fields()
    del fields[missing]
    with pytest.raises(ValidationError) as exc:
        service.create(users["alice"], fields)
    assert "Please provide all required fields" in exc.value.message
    assert db.query(RoomListing).count() == 0


def test_create_lists_every_missing_field(service, users) -> None:
    with pytest.raises(ValidationError) as exc:
        service.create(users["alice"], {"room_title": "Room"})
    assert exc.value.message.endswith("monthlyPrice, location, roomType")


def test_create_treats_zero_price_as_missing(service, db, users) -> None:
    with pytest.raises(ValidationError):
        service.create(users["alice"], _fields(monthly_price=0))
    assert db.query(RoomListing).count() == 0


def test_create_requires_contact_number(service, db, users) -> None:
    with pytest.raises(ValidationError):
        service.create(users["alice"], _fields(owner_contact_number="   "))
    assert db.query(RoomListing).count() == 0


def test_create_rejects_non_numeric_price(service, users) -> None:
    with pytest.raises(ValidationError):
        service.create(users["alice"], _fields(monthly_price="a lot"))


def test_create_uses_id_reference_without_lookup(service, users, monkeypatch) -> None:
    def _no_lookup(name):
        raise AssertionError("registry lookup should not happen for id references")

    monkeypatch.setattr(service.room_types, "find_by_name", _no_lookup)
    room = service.create(users["alice"], _fields(room_type=STUDIO_LIKE_ID.upper()))
    assert room.room_type_id == STUDIO_LIKE_ID


def test_create_resolves_room_type_name(service, users, studio) -> None:
    room = service.create(users["alice"], _fields(room_type="Studio"))
    assert room.room_type_id == studio.id
    assert room.room_type.type_name == "Studio"


def test_create_with_unknown_room_type_name(service, db, users) -> None:
    with pytest.raises(ValidationError) as exc:
        service.create(users["alice"], _fields(room_type="Studio"))
    assert 'Room type "Studio" not found' in exc.value.message
    assert db.query(RoomListing).count() == 0


def test_create_sets_owner_and_defaults(service, users, studio) -> None:
    room = service.create(users["alice"], _fields(room_type="Studio", owner_id=users["bob"]))
    assert room.owner_id == users["alice"]
    assert room.approval_status == "pending"
    assert room.is_available is True
    assert room.room_title == "Sunny studio"
    assert room.location == "Lalitpur"
    assert room.owner_contact_number == "9800000000"
    assert float(room.monthly_price) == 1200.0
    assert room.images == ["room-img-a.png"]
    assert room.videos == ["room-vid-a.mp4"]


def test_create_rejects_malformed_media_lists(service, users) -> None:
    with pytest.raises(ValidationError):
        service.create(users["alice"], _fields(images="room-img-a.png"))


# ---- reads ----

def test_get_by_id_joins_owner_and_room_type(service, listing) -> None:
    room = service.get_by_id(listing.id)
    assert room.owner.name == "Alice Owner"
    assert room.owner.email == "alice@example.com"
    assert room.room_type.type_name == "Studio"


def test_get_by_id_not_found(service) -> None:
    with pytest.raises(NotFoundError):
        service.get_by_id(STUDIO_LIKE_ID)


def test_get_by_id_with_dangling_room_type(service, users) -> None:
    room = service.create(users["alice"], _fields())
    assert service.get_by_id(room.id).room_type is None


def _seed_listings(db, owner_id: str, count: int, **extra) -> list[RoomListing]:
    base = datetime(2026, 1, 1, 12, 0, 0)
    rooms = []
    for i in range(count):
        rooms.append(
            RoomListing(
                owner_id=owner_id,
                owner_contact_number="9800000000",
                room_title=f"Room {i}",
                monthly_price=100 + i,
                location="Pokhara",
                room_type_id=STUDIO_LIKE_ID,
                created_at=base + timedelta(minutes=i),
                **extra,
            )
        )
    db.add_all(rooms)
    db.commit()
    return rooms


def test_list_second_page(service, db, users) -> None:
    _seed_listings(db, users["alice"], 25)

    result = service.list(page=2, limit=10)

    assert result.total == 25
    assert result.pages == 3
    assert result.page == 2
    assert [r.room_title for r in result.items] == [f"Room {i}" for i in range(14, 4, -1)]


def test_list_last_page_and_defaults(service, db, users) -> None:
    _seed_listings(db, users["alice"], 25)

    last = service.list(page=3, limit=10)
    assert [r.room_title for r in last.items] == [f"Room {i}" for i in range(4, -1, -1)]

    first = service.list(page=None, limit=None)
    assert first.page == 1
    assert first.limit == settings.DEFAULT_PAGE_SIZE
    assert first.items[0].room_title == "Room 24"


def test_list_clamps_oversized_paging(service, db, users, monkeypatch) -> None:
    _seed_listings(db, users["alice"], 3)
    monkeypatch.setattr(settings, "MAX_PAGE_SIZE", 2)

    result = service.list(page=99999999999999999999, limit=500)
    assert result.limit == 2
    assert result.items == []
    assert result.total == 3

    assert len(service.list(page=1, limit=500).items) == 2


def test_list_filters_are_and_combined(service, db, users) -> None:
    _seed_listings(db, users["alice"], 3)
    _seed_listings(db, users["alice"], 2, is_available=False)
    _seed_listings(db, users["bob"], 4, approval_status="approved")
    _seed_listings(db, users["bob"], 1, approval_status="approved", is_available=False)

    assert service.list(owner_id=users["alice"]).total == 5
    assert service.list(is_available=False).total == 3
    assert service.list(approval_status="approved").total == 5
    assert service.list(owner_id=users["bob"], is_available=True, approval_status="approved").total == 4
    assert service.list(owner_id=users["alice"], approval_status="approved").total == 0


def test_list_by_owner_ignores_availability_and_approval(service, db, users) -> None:
    _seed_listings(db, users["alice"], 2)
    _seed_listings(db, users["alice"], 1, is_available=False, approval_status="rejected")
    _seed_listings(db, users["bob"], 2)

    rooms = service.list_by_owner(users["alice"])
    assert len(rooms) == 3
    assert {r.owner_id for r in rooms} == {users["alice"]}


# ---- update ----

def test_update_by_other_user_is_forbidden(service, db, users, listing) -> None:
    with pytest.raises(ForbiddenError):
        service.update(listing.id, users["bob"], {"approval_status": "approved", "room_title": "Mine now"})
    db.expire_all()
    room = service.get_by_id(listing.id)
    assert room.approval_status == "pending"
    assert room.room_title == "Sunny studio"


def test_owner_can_approve(service, users, listing) -> None:
    service.update(listing.id, users["alice"], {"approval_status": "approved"})
    assert service.get_by_id(listing.id).approval_status == "approved"


def test_update_accepts_false_availability(service, users, listing) -> None:
    room = service.update(listing.id, users["alice"], {"is_available": False})
    assert room.is_available is False


def test_update_ignores_falsy_values(service, users, listing) -> None:
    room = service.update(
        listing.id,
        users["alice"],
        {"monthly_price": 0, "room_title": "", "description": None, "images": []},
    )
    assert float(room.monthly_price) == 1200.0
    assert room.room_title == "Sunny studio"
    assert room.description == "Close to the ring road"
    assert room.images == ["room-img-a.png"]


def test_update_replaces_truthy_values(service, users, listing) -> None:
    room = service.update(
        listing.id,
        users["alice"],
        {"monthly_price": "1500", "location": " Bhaktapur ", "videos": ["room-vid-b.mp4"]},
    )
    assert float(room.monthly_price) == 1500.0
    assert room.location == "Bhaktapur"
    assert room.videos == ["room-vid-b.mp4"]


def test_update_room_type_takes_ids_only(service, users, listing) -> None:
    other_id = "64b7f1f77bcf86cd79943901"
    room = service.update(listing.id, users["alice"], {"room_type": other_id})
    assert room.room_type_id == other_id

    with pytest.raises(ValidationError):
        service.update(listing.id, users["alice"], {"room_type": "Studio"})


def test_update_rejects_unknown_approval_status(service, users, listing) -> None:
    with pytest.raises(ValidationError):
        service.update(listing.id, users["alice"], {"approval_status": "archived"})
    with pytest.raises(ValidationError):
        service.update(listing.id, users["alice"], {"approval_status": {"x": 1}})
    with pytest.raises(ValidationError):
        service.update(listing.id, users["alice"], {"approval_status": ["approved"]})
    assert service.get_by_id(listing.id).approval_status == "pending"


def test_update_missing_room(service, users) -> None:
    with pytest.raises(NotFoundError):
        service.update(STUDIO_LIKE_ID, users["alice"], {"room_title": "x"})


# ---- delete ----

def test_delete_removes_media_then_record(service, db, media, users, studio) -> None:
    media.files = {"room-img-a.png": b"a", "room-vid-a.mp4": b"v"}
    room = service.create(users["alice"], _fields(room_type="Studio"))

    service.delete(room.id, users["alice"])

    assert media.delete_calls == ["room-img-a.png", "room-vid-a.mp4"]
    assert media.files == {}
    assert db.query(RoomListing).count() == 0


def test_delete_skips_missing_and_broken_files(service, db, media, users, studio) -> None:
    media.files = {"room-img-b.png": b"b"}
    media.broken = {"room-vid-a.mp4"}
    room = service.create(
        users["alice"],
        _fields(room_type="Studio", images=["room-img-a.png", "room-img-b.png"]),
    )

    service.delete(room.id, users["alice"])

    assert media.delete_calls == ["room-img-a.png", "room-img-b.png", "room-vid-a.mp4"]
    assert db.query(RoomListing).count() == 0


def test_delete_by_other_user_is_forbidden(service, db, media, users, listing) -> None:
    with pytest.raises(ForbiddenError):
        service.delete(listing.id, users["bob"])
    assert media.delete_calls == []
    assert db.query(RoomListing).count() == 1


def test_delete_missing_room(service, users) -> None:
    with pytest.raises(NotFoundError):
        service.delete(STUDIO_LIKE_ID, users["alice"])


# ---- uploads ----

def test_record_image_upload(service, media) -> None:
    fname = service.record_upload(UploadedFile("Bedroom.PNG", PNG_BYTES), "image")
    assert fname.startswith("room-img-")
    assert fname.endswith(".png")
    assert media.files[fname] == PNG_BYTES


def test_record_video_upload(service, media) -> None:
    fname = service.record_upload(UploadedFile("tour.mp4", b"\x00\x00\x00\x18ftypmp42"), "video")
    assert fname.startswith("room-vid-")
    assert fname in media.files


@pytest.mark.parametrize("upload", [None, UploadedFile("", PNG_BYTES), UploadedFile("a.png", b"")])
def test_record_upload_requires_a_file(service, upload) -> None:
    with pytest.raises(ValidationError) as exc:
        service.record_upload(upload, "image")
    assert exc.value.message == "Please upload an image file"


def test_record_upload_enforces_size_per_kind(service, media, monkeypatch) -> None:
    monkeypatch.setattr(settings, "UPLOAD_IMAGE_MAX_BYTES", 10)
    monkeypatch.setattr(settings, "UPLOAD_VIDEO_MAX_BYTES", 100)

    with pytest.raises(ValidationError):
        service.record_upload(UploadedFile("a.png", PNG_BYTES), "image")
    # Same bytes fit under the video ceiling
    assert service.record_upload(UploadedFile("a.mp4", PNG_BYTES), "video") in media.files
    with pytest.raises(ValidationError):
        service.record_upload(UploadedFile("a.mp4", b"x" * 101), "video")


def test_record_upload_checks_extension_and_content(service) -> None:
    with pytest.raises(ValidationError):
        service.record_upload(UploadedFile("notes.txt", PNG_BYTES), "image")
    with pytest.raises(ValidationError):
        service.record_upload(UploadedFile("fake.png", b"definitely not a png"), "image")
    with pytest.raises(ValidationError):
        service.record_upload(UploadedFile("clip.png", PNG_BYTES), "video")
