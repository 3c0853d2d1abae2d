"""Test fixtures for the RoomRent API."""
from __future__ import annotations

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="roomrent-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_tmp_dir, "uploads")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CLOUDINARY_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from roomrent.config import settings
from roomrent.db import Base, SessionLocal, engine
from roomrent.main import app
from roomrent.models import User, UserRole
from roomrent.security import session_token
from roomrent.services.media import get_media_store, new_filename

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class MemoryMediaStore:
    """In-memory stand-in for the media store; ``broken`` names fail on delete."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.broken: set[str] = set()
        self.delete_calls: list[str] = []

    def save(self, kind, data, original_filename):
        fname = new_filename(kind, original_filename)
        self.files[fname] = data
        return fname

    def delete(self, filename):
        self.delete_calls.append(filename)
        if filename in self.broken:
            raise OSError(f"cannot remove {filename}")
        return self.files.pop(filename, None) is not None


@pytest.fixture(autouse=True)
def reset_database():
    """Drop and recreate the schema for an isolated test."""
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture()
def db(reset_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def media() -> MemoryMediaStore:
    return MemoryMediaStore()


@pytest.fixture()
def users(db) -> dict[str, str]:
    """Two listing owners and an admin; returns their ids by nickname."""
    alice = User(name="Alice Owner", email="alice@example.com", role=UserRole.OWNER.value)
    bob = User(name="Bob Owner", email="bob@example.com", role=UserRole.OWNER.value)
    admin = User(name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN.value)
    db.add_all([alice, bob, admin])
    db.commit()
    return {"alice": alice.id, "bob": bob.id, "admin": admin.id}


@pytest.fixture()
def client(media):
    app.dependency_overrides[get_media_store] = lambda: media
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Cookie": f"{settings.SESSION_COOKIE_NAME}={session_token(user_id)}"}
