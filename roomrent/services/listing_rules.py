"""Pure rules shared by the room listing and room type services.

Nothing in here touches the database, so each rule can be exercised on
plain values.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Literal

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


@dataclass(frozen=True)
class RoomTypeRef:
    """A room type reference as supplied by a client: an id or a type name."""
    kind: Literal["id", "name"]
    value: str


def parse_room_type_ref(raw: Any) -> RoomTypeRef:
    """Tag a raw room type input as a direct id reference or a name to look up."""
    value = str(raw)
    if is_object_id(value):
        return RoomTypeRef(kind="id", value=value.lower())
    return RoomTypeRef(kind="name", value=value)


def can_modify(owner_id: Any, caller_id: Any) -> bool:
    """Only the owner of a listing may change or delete it."""
    if owner_id is None or caller_id is None:
        return False
    return str(owner_id) == str(caller_id)


# Update merge policies
REPLACE_IF_TRUTHY = "replace_if_truthy"
REPLACE_IF_PRESENT = "replace_if_present"

MERGE_POLICY: dict[str, str] = {
    "owner_contact_number": REPLACE_IF_TRUTHY,
    "room_title": REPLACE_IF_TRUTHY,
    "monthly_price": REPLACE_IF_TRUTHY,
    "location": REPLACE_IF_TRUTHY,
    "room_type": REPLACE_IF_TRUTHY,
    "description": REPLACE_IF_TRUTHY,
    "images": REPLACE_IF_TRUTHY,
    "videos": REPLACE_IF_TRUTHY,
    "approval_status": REPLACE_IF_TRUTHY,
    # false must be settable, so only presence matters here
    "is_available": REPLACE_IF_PRESENT,
}


def merge_update(incoming: dict[str, Any]) -> dict[str, Any]:
    """
    Return the subset of ``incoming`` that should overwrite stored values.

    Fields under REPLACE_IF_TRUTHY are kept only when truthy, so an update
    can never blank a text field or set the price to 0. Fields under
    REPLACE_IF_PRESENT are kept whenever they are not None. Keys outside
    the policy table are ignored.
    """
    changes: dict[str, Any] = {}
    for field, policy in MERGE_POLICY.items():
        if field not in incoming:
            continue
        value = incoming[field]
        if policy == REPLACE_IF_TRUTHY and value:
            changes[field] = value
        elif policy == REPLACE_IF_PRESENT and value is not None:
            changes[field] = value
    return changes


def missing_required(fields: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    return [name for name in required if not fields.get(name)]


# Keeps (page - 1) * limit inside a 64-bit SQL offset
MAX_PAGE = 1_000_000


def normalize_page(
    page: int | None, limit: int | None, default_limit: int, max_limit: int = 100
) -> tuple[int, int]:
    """Fall back to defaults for values below 1 and clamp oversized ones."""
    page = min(page, MAX_PAGE) if page and page >= 1 else 1
    limit = min(limit, max_limit) if limit and limit >= 1 else default_limit
    return page, limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
