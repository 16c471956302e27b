"""
Operation log: one row per write the operator performs on the inventory
(ADD_ITEM / UPDATE_ITEM / DELETE_ITEM / EXPORT_ITEMS), failures included.
"""
from __future__ import annotations

import datetime as dt
import json
import logging
import sqlite3
import time
import uuid
from typing import Any

from .db import get_conn

logger = logging.getLogger(__name__)

ITEM_ENTITY = "ITEM"

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT,
  before_json TEXT,
  after_json TEXT,
  payload_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
CREATE INDEX IF NOT EXISTS idx_log_entity ON operation_log(entity_type, entity_id);
"""


def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)
        conn.commit()


def _dumps(obj) -> str | None:
    if obj is None:
        return None
    return json.dumps(obj, ensure_ascii=False)


class LogContext:
    """Collects what one inventory write did; write() persists it."""

    def __init__(self, action: str, user: str = "owner"):
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.item_id: int | None = None
        self.payload: dict | None = None
        self.before: dict | None = None
        self.after: dict | None = None

    def set_item(self, item_id: int):
        self.item_id = item_id

    def set_payload(self, payload: dict):
        self.payload = payload

    def set_before(self, snapshot: dict):
        self.before = snapshot

    def set_after(self, snapshot: dict):
        self.after = snapshot

    def write(self, result: str = "OK", err: str | None = None):
        rec = {
            "ts": dt.datetime.now().astimezone().isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": ITEM_ENTITY if self.item_id is not None else None,
            "entity_id": str(self.item_id) if self.item_id is not None else None,
            "request_id": self.request_id,
            "before_json": _dumps(self.before),
            "after_json": _dumps(self.after),
            "payload_json": _dumps(self.payload),
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.start) * 1000),
        }
        with get_conn() as conn:
            conn.execute(
                "INSERT INTO operation_log"
                "(ts, user, action, entity_type, entity_id, request_id, "
                "before_json, after_json, payload_json, result, err_msg, latency_ms) "
                "VALUES(:ts, :user, :action, :entity_type, :entity_id, :request_id, "
                ":before_json, :after_json, :payload_json, :result, :err_msg, :latency_ms)",
                rec,
            )
            conn.commit()


def write_or_warn(log: LogContext, result: str = "OK", err: str | None = None):
    """Persist the record; a broken store only costs the audit row, not the operation."""
    try:
        log.write(result, err)
    except sqlite3.Error as e:
        logger.warning("operation log write failed for %s: %s", log.action, e)


def search_logs(
    action: str | None = None,
    query: str | None = None,
    item_id: int | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[int, list[dict[str, Any]]]:
    """Newest first. `query` matches inside the payload/before/after JSON."""
    where = []
    params: dict[str, Any] = {}
    if action:
        where.append("action = :action")
        params["action"] = action
    if query:
        where.append("(payload_json LIKE :q OR before_json LIKE :q OR after_json LIKE :q)")
        params["q"] = f"%{query}%"
    if item_id is not None:
        where.append("entity_type = :etype AND entity_id = :eid")
        params["etype"] = ITEM_ENTITY
        params["eid"] = str(item_id)
    wh = " WHERE " + " AND ".join(where) if where else ""
    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{wh}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM operation_log{wh} ORDER BY id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (page - 1) * size},
        ).fetchall()
    return total, [dict(r) for r in rows]
