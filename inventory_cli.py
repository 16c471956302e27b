#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Inventory tracker (SQLite)

Commands:
  menu                Interactive text menu (default when no command is given)
  init                Create the inventory table and operation log
  add                 Add an item (--name, --quantity)
  update              Replace an item's name and quantity (--id, --name, --quantity)
  delete              Delete an item (--id)
  list                Print all items as a table
  export              Export all items to CSV
  logs                Show recent operation log entries

Notes:
- The DB path comes from --db, then INVENTORY_DB_PATH, then config.yaml (db_path).
- Every add/update/delete/export is recorded in the `operation_log` table.
"""

import argparse
import datetime as dt
import logging
import os
import sqlite3
import sys

import pandas as pd

from inventory import db
from inventory.console import init_storage, run
from inventory.logs import LogContext, search_logs, write_or_warn
from inventory.services import item_svc


def _fail(msg: str) -> int:
    print(msg, file=sys.stderr)
    return 1


def _logged(action: str, op) -> int:
    log = LogContext(action)
    try:
        op(log)
    except ValueError as e:
        write_or_warn(log, "ERROR", str(e))
        return _fail(item_svc.message_for(e))
    except sqlite3.Error as e:
        write_or_warn(log, "ERROR", str(e))
        return _fail(f"Database error: {e}")
    except OSError as e:
        write_or_warn(log, "ERROR", str(e))
        return _fail(f"Cannot write file: {e}")
    write_or_warn(log)
    return 0


# ---------------- Commands ----------------

def cmd_menu(args) -> int:
    return run()


def cmd_init(args) -> int:
    print(f"DB initialized: {db.get_db_path()}")
    return 0


def cmd_add(args) -> int:
    def op(log):
        item = item_svc.add_item(args.name, args.quantity, log)
        print(f"Item added successfully. ID: {item.id}")
    return _logged("ADD_ITEM", op)


def cmd_update(args) -> int:
    def op(log):
        item_svc.update_item(args.id, args.name, args.quantity, log)
        print("Item updated successfully.")
    return _logged("UPDATE_ITEM", op)


def cmd_delete(args) -> int:
    def op(log):
        item_svc.delete_item(args.id, log)
        print("Item deleted successfully.")
    return _logged("DELETE_ITEM", op)


def cmd_list(args) -> int:
    try:
        total = item_svc.count_items()
        df = item_svc.items_frame()
    except sqlite3.Error as e:
        return _fail(f"Database error: {e}")
    pd.set_option("display.max_rows", 500)
    pd.set_option("display.width", 160)
    print(f"\n=== Inventory Items ({total}) ===")
    if not df.empty:
        print(df.to_string(index=False))
    else:
        print("(empty)")
    return 0


def cmd_export(args) -> int:
    out = args.out or os.path.join("exports", f"inventory_{dt.datetime.now().strftime('%Y%m%d')}.csv")

    def op(log):
        n = item_svc.export_items_csv(out, log)
        print(f"Exported {n} item(s) to {out}")
    return _logged("EXPORT_ITEMS", op)


def cmd_logs(args) -> int:
    total, rows = search_logs(
        action=args.action, query=args.query, item_id=args.item, page=args.page, size=args.size
    )
    print(f"\n=== Operation Log ({total} total) ===")
    if not rows:
        print("(none)")
        return 0
    df = pd.DataFrame(rows)
    print(df[["ts", "action", "entity_id", "result", "err_msg", "latency_ms"]].to_string(index=False))
    return 0


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inventory tracker (SQLite)")
    parser.add_argument("--config", default=None, help="YAML config (default config.yaml)")
    parser.add_argument("--db", default=None, help="SQLite file; overrides config and env")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers()

    p_menu = sub.add_parser("menu", help="interactive text menu")
    p_menu.set_defaults(func=cmd_menu)

    p_init = sub.add_parser("init", help="create the schema")
    p_init.set_defaults(func=cmd_init)

    p_add = sub.add_parser("add", help="add an item")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--quantity", required=True, type=int)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="update an item")
    p_upd.add_argument("--id", required=True, type=int)
    p_upd.add_argument("--name", required=True)
    p_upd.add_argument("--quantity", required=True, type=int)
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="delete an item")
    p_del.add_argument("--id", required=True, type=int)
    p_del.set_defaults(func=cmd_delete)

    p_list = sub.add_parser("list", help="list all items")
    p_list.set_defaults(func=cmd_list)

    p_exp = sub.add_parser("export", help="export items to CSV")
    p_exp.add_argument("--out", required=False, help="CSV path (default exports/inventory_YYYYMMDD.csv)")
    p_exp.set_defaults(func=cmd_export)

    p_logs = sub.add_parser("logs", help="show operation log")
    p_logs.add_argument("--action", required=False)
    p_logs.add_argument("--query", required=False)
    p_logs.add_argument("--item", type=int, required=False, help="only entries for this item id")
    p_logs.add_argument("--page", type=int, default=1)
    p_logs.add_argument("--size", type=int, default=20)
    p_logs.set_defaults(func=cmd_logs)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    db.configure(db_path=args.db, config_path=args.config)

    func = getattr(args, "func", cmd_menu)
    if func is not cmd_menu:
        # the menu initializes storage itself and reports its own failure
        try:
            init_storage()
        except sqlite3.Error as e:
            return _fail(f"Database error: {e}")
    return func(args)


if __name__ == "__main__":
    sys.exit(main())
