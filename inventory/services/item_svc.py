from __future__ import annotations

# inventory/services/item_svc.py
import os

import pandas as pd

from ..db import get_conn
from ..logs import LogContext
from ..domain.item import InventoryItem, validate_fields, validate_id
from ..repository import item_repo

COLUMNS = ["id", "name", "quantity"]

_INVALID_FIELDS = "Invalid input. Name should not be empty, and quantity should be greater than 0."

MESSAGES = {
    "invalid_id": "Invalid ID. ID should be greater than 0.",
    "invalid_name": _INVALID_FIELDS,
    "invalid_quantity": _INVALID_FIELDS,
    "item_not_found": "Item with the specified ID not found.",
}


def message_for(err: ValueError) -> str:
    code = str(err)
    return MESSAGES.get(code, code)


def ensure_inventory_schema():
    with get_conn() as conn:
        item_repo.ensure_schema(conn)
        conn.commit()


def _to_item(row) -> InventoryItem:
    return InventoryItem(id=row["id"], name=row["name"], quantity=row["quantity"])


def add_item(name: str, quantity: int, log: LogContext) -> InventoryItem:
    log.set_payload({"name": name, "quantity": quantity})
    name, quantity = validate_fields(name, quantity)
    with get_conn() as conn:
        new_id = item_repo.insert_item(conn, name, quantity)
        conn.commit()
    item = InventoryItem(id=new_id, name=name, quantity=quantity)
    log.set_item(new_id)
    log.set_after(item.model_dump())
    return item


def update_item(item_id: int, name: str, quantity: int, log: LogContext) -> InventoryItem:
    log.set_payload({"id": item_id, "name": name, "quantity": quantity})
    validate_id(item_id)
    name, quantity = validate_fields(name, quantity)
    log.set_item(item_id)
    with get_conn() as conn:
        before = item_repo.get_item(conn, item_id)
        affected = item_repo.update_item(conn, item_id, name, quantity)
        if affected == 0:
            raise ValueError("item_not_found")
        conn.commit()
    item = InventoryItem(id=item_id, name=name, quantity=quantity)
    if before is not None:
        log.set_before(_to_item(before).model_dump())
    log.set_after(item.model_dump())
    return item


def delete_item(item_id: int, log: LogContext) -> None:
    log.set_payload({"id": item_id})
    validate_id(item_id)
    log.set_item(item_id)
    with get_conn() as conn:
        before = item_repo.get_item(conn, item_id)
        affected = item_repo.delete_item(conn, item_id)
        if affected == 0:
            raise ValueError("item_not_found")
        conn.commit()
    if before is not None:
        log.set_before(_to_item(before).model_dump())


def list_items() -> list[InventoryItem]:
    with get_conn() as conn:
        rows = item_repo.list_items(conn)
        return [_to_item(r) for r in rows]


def count_items() -> int:
    with get_conn() as conn:
        return item_repo.count_all(conn)


def items_frame() -> pd.DataFrame:
    items = list_items()
    return pd.DataFrame([it.model_dump() for it in items], columns=COLUMNS)


def export_items_csv(out_path: str, log: LogContext) -> int:
    """Write the full listing to CSV; returns the number of rows written."""
    log.set_payload({"out": out_path})
    df = items_frame()
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    df.to_csv(out_path, index=False, encoding="utf-8-sig")
    log.set_after({"rows": len(df)})
    return len(df)
