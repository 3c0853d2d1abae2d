import logging
import os
import uuid
from dataclasses import dataclass

import cloudinary
import cloudinary.uploader

from ..config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaKind:
    name: str
    folder: str
    prefix: str
    extensions: tuple[str, ...]
    resource_type: str

    @property
    def max_bytes(self) -> int:
        if self.name == "video":
            return settings.UPLOAD_VIDEO_MAX_BYTES
        return settings.UPLOAD_IMAGE_MAX_BYTES


MEDIA_KINDS = {
    "image": MediaKind("image", "room_images", "room-img", (".jpg", ".jpeg", ".png"), "image"),
    "video": MediaKind("video", "room_videos", "room-vid", (".mp4", ".mov", ".avi"), "video"),
}


def _sniff_image_type(data: bytes) -> str | None:
    """Return a lowercase extension if bytes look like a common image, else None."""
    if not data or len(data) < 12:
        return None
    if data.startswith(b"\xFF\xD8\xFF"):
        return "jpg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return "webp"
    if data.startswith(b"BM"):
        return "bmp"
    return None


def looks_like_image(data: bytes) -> bool:
    return _sniff_image_type(data) is not None


def _kind_for_filename(filename: str) -> MediaKind | None:
    for kind in MEDIA_KINDS.values():
        if filename.startswith(kind.prefix + "-"):
            return kind
    return None


def new_filename(kind: MediaKind, original_filename: str) -> str:
    ext = os.path.splitext(original_filename)[1].lower()
    return f"{kind.prefix}-{uuid.uuid4().hex}{ext}"


class LocalMediaStore:
    """Stores uploads on local disk under ``root/<kind folder>/<filename>``."""

    def __init__(self, root: str):
        self.root = root

    def _path(self, kind: MediaKind, filename: str) -> str:
        return os.path.join(self.root, kind.folder, os.path.basename(filename))

    def save(self, kind: MediaKind, data: bytes, original_filename: str) -> str:
        os.makedirs(os.path.join(self.root, kind.folder), exist_ok=True)
        fname = new_filename(kind, original_filename)
        with open(self._path(kind, fname), "wb") as f:
            f.write(data)
        return fname

    def delete(self, filename: str) -> bool:
        """Remove ``filename`` if present. Returns False when there was nothing to remove."""
        kind = _kind_for_filename(filename)
        candidates = [kind] if kind else list(MEDIA_KINDS.values())
        removed = False
        for k in candidates:
            path = self._path(k, filename)
            if os.path.exists(path):
                os.remove(path)
                removed = True
        return removed


class CloudinaryMediaStore:
    """Stores uploads in Cloudinary under ``<folder>/<kind folder>/<filename stem>``."""

    def __init__(self, cloudinary_url: str, folder: str):
        cloudinary.config(cloudinary_url=cloudinary_url)
        self.folder = folder

    def _public_id(self, kind: MediaKind, filename: str) -> str:
        stem = os.path.splitext(os.path.basename(filename))[0]
        return f"{self.folder}/{kind.folder}/{stem}"

    def save(self, kind: MediaKind, data: bytes, original_filename: str) -> str:
        fname = new_filename(kind, original_filename)
        cloudinary.uploader.upload(
            data,
            public_id=self._public_id(kind, fname),
            resource_type=kind.resource_type,
            overwrite=True,
        )
        return fname

    def delete(self, filename: str) -> bool:
        kind = _kind_for_filename(filename) or MEDIA_KINDS["image"]
        res = cloudinary.uploader.destroy(self._public_id(kind, filename), resource_type=kind.resource_type)
        return res.get("result") == "ok"


def get_media_store():
    """Cloudinary if CLOUDINARY_URL is configured, local uploads directory otherwise."""
    url = settings.CLOUDINARY_URL
    if url:
        return CloudinaryMediaStore(url, settings.CLOUDINARY_FOLDER)
    return LocalMediaStore(settings.UPLOAD_DIR)
