from __future__ import annotations

import os

from inventory import db


def test_env_path_wins_over_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"db_path: {tmp_path / 'from_cfg.db'}\n", encoding="utf-8")
    monkeypatch.setenv("INVENTORY_CONFIG", str(cfg))
    assert db.get_db_path() == os.environ["INVENTORY_DB_PATH"]


def test_config_paths(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test' / 'test.db'}\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("INVENTORY_DB_PATH")
    monkeypatch.setenv("INVENTORY_CONFIG", str(cfg))

    # PYTEST_CURRENT_TEST is set while tests run
    path = db.get_db_path()
    assert path == str(tmp_path / "test" / "test.db")
    assert (tmp_path / "test").is_dir()

    monkeypatch.delenv("PYTEST_CURRENT_TEST")
    monkeypatch.delenv("APP_ENV", raising=False)
    assert db.get_db_path() == str(tmp_path / "prod.db")


def test_explicit_and_override_paths(tmp_path):
    assert db.get_db_path(str(tmp_path / "a.db")) == str(tmp_path / "a.db")
    db.configure(db_path=str(tmp_path / "b.db"))
    assert db.get_db_path() == str(tmp_path / "b.db")


def test_fallback_and_bad_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: [unclosed\n", encoding="utf-8")
    monkeypatch.delenv("INVENTORY_DB_PATH")
    monkeypatch.setenv("INVENTORY_CONFIG", str(cfg))
    assert db.read_config_yaml() == {}
    assert db.get_db_path() == "inventory.db"


def test_get_conn_returns_rows(tmp_path):
    with db.get_conn(str(tmp_path / "x.db")) as conn:
        row = conn.execute("SELECT 1 AS one").fetchone()
        assert row["one"] == 1
