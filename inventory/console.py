"""
Text-menu console loop: reads a numeric choice and dispatches to item_svc.
"""
from __future__ import annotations

import sqlite3

from .logs import LogContext, ensure_log_schema, write_or_warn
from .services import item_svc

MENU = (
    "Inventory Management System\n"
    "1. Add Item\n"
    "2. Update Item\n"
    "3. Delete Item\n"
    "4. View Items\n"
    "5. Exit"
)

EXIT_CHOICE = 5


def init_storage():
    """Create the inventory table and the operation log; raises sqlite3.Error."""
    item_svc.ensure_inventory_schema()
    ensure_log_schema()


def _read_int(prompt: str) -> int | None:
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        return None


def _perform(log: LogContext, op, success_msg: str):
    try:
        op(log)
    except ValueError as e:
        write_or_warn(log, "ERROR", str(e))
        print(item_svc.message_for(e))
        return
    except sqlite3.Error as e:
        write_or_warn(log, "ERROR", str(e))
        print(f"Database error: {e}")
        return
    write_or_warn(log)
    print(success_msg)


def add_flow():
    name = input("Enter item name: ")
    quantity = _read_int("Enter item quantity: ")
    if quantity is None:
        print("Invalid number. Try again.")
        return
    _perform(
        LogContext("ADD_ITEM"),
        lambda log: item_svc.add_item(name, quantity, log),
        "Item added successfully.",
    )


def update_flow():
    item_id = _read_int("Enter item ID to update: ")
    if item_id is None:
        print("Invalid number. Try again.")
        return
    name = input("Enter new item name: ")
    quantity = _read_int("Enter new item quantity: ")
    if quantity is None:
        print("Invalid number. Try again.")
        return
    _perform(
        LogContext("UPDATE_ITEM"),
        lambda log: item_svc.update_item(item_id, name, quantity, log),
        "Item updated successfully.",
    )


def delete_flow():
    item_id = _read_int("Enter item ID to delete: ")
    if item_id is None:
        print("Invalid number. Try again.")
        return
    _perform(
        LogContext("DELETE_ITEM"),
        lambda log: item_svc.delete_item(item_id, log),
        "Item deleted successfully.",
    )


def view_flow():
    try:
        items = item_svc.list_items()
    except sqlite3.Error as e:
        print(f"Database error: {e}")
        return
    print("Inventory Items:")
    if not items:
        print("(empty)")
        return
    for it in items:
        print(f"ID: {it.id}, Name: {it.name}, Quantity: {it.quantity}")


ACTIONS = {
    1: add_flow,
    2: update_flow,
    3: delete_flow,
    4: view_flow,
}


def run() -> int:
    """Loop until Exit or end of input; returns the process exit status."""
    try:
        init_storage()
    except sqlite3.Error as e:
        print(f"Database error: {e}")
        return 1

    while True:
        print(MENU)
        try:
            choice = _read_int("Enter your choice: ")
            if choice == EXIT_CHOICE:
                return 0
            if choice is None:
                print("Invalid number. Try again.")
                continue
            action = ACTIONS.get(choice)
            if action is None:
                print("Invalid choice. Try again.")
                continue
            action()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
