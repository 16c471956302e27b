from __future__ import annotations

from sqlite3 import Connection


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS inventory (
            id INTEGER PRIMARY KEY,
            name TEXT,
            quantity INTEGER
        )
        """
    )


def insert_item(conn: Connection, name: str, quantity: int) -> int:
    cur = conn.execute(
        "INSERT INTO inventory(name, quantity) VALUES(?, ?)",
        (name, quantity),
    )
    return int(cur.lastrowid)


def update_item(conn: Connection, item_id: int, name: str, quantity: int) -> int:
    cur = conn.execute(
        "UPDATE inventory SET name=?, quantity=? WHERE id=?",
        (name, quantity, item_id),
    )
    return cur.rowcount


def delete_item(conn: Connection, item_id: int) -> int:
    cur = conn.execute("DELETE FROM inventory WHERE id=?", (item_id,))
    return cur.rowcount


def get_item(conn: Connection, item_id: int):
    return conn.execute(
        "SELECT id, name, quantity FROM inventory WHERE id=?", (item_id,)
    ).fetchone()


def list_items(conn: Connection):
    return conn.execute("SELECT id, name, quantity FROM inventory ORDER BY id").fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM inventory").fetchone()["c"])
