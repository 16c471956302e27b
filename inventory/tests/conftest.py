import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "inventory_test.db"
    # Point the app at this temp DB
    os.environ["INVENTORY_DB_PATH"] = str(path)
    from inventory.console import init_storage
    init_storage()
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("INVENTORY_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    from inventory import db
    db.reset_overrides()
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("inventory", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        # restart id assignment so tests can rely on ids starting at 1
        conn.execute("DELETE FROM sqlite_sequence WHERE name='operation_log'")
        conn.commit()
    finally:
        conn.close()
    yield
    db.reset_overrides()


@pytest.fixture()
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence; EOFError once exhausted."""
    def _feed(*answers):
        it = iter(answers)

        def fake_input(prompt=""):
            print(prompt, end="")
            try:
                return next(it)
            except StopIteration:
                raise EOFError
        monkeypatch.setattr("builtins.input", fake_input)
    return _feed
