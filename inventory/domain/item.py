from __future__ import annotations

from pydantic import BaseModel

# largest value a SQLite INTEGER column can hold
MAX_INTEGER = 2 ** 63 - 1


class InventoryItem(BaseModel):
    id: int
    name: str
    quantity: int


def _positive_int(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, int) and 0 < value <= MAX_INTEGER


def validate_id(item_id) -> int:
    if not _positive_int(item_id):
        raise ValueError("invalid_id")
    return item_id


def validate_fields(name, quantity) -> tuple[str, int]:
    """Whitespace-only names count as empty; the name is stored as entered."""
    if not isinstance(name, str) or not name.strip():
        raise ValueError("invalid_name")
    if not _positive_int(quantity):
        raise ValueError("invalid_quantity")
    return name, quantity
