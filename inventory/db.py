from __future__ import annotations

# inventory/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

import yaml

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) explicit db_path argument (CLI --db)
# 2) env INVENTORY_DB_PATH
# 3) config yaml test_db_path (when running under tests)
# 4) config yaml db_path
# 5) fallback: inventory.db in the working directory
_DEFAULT_DB = "inventory.db"
_DEFAULT_CONFIG = "config.yaml"

# set by the CLI --db / --config flags
_overrides: dict[str, str] = {}


def configure(db_path: str | None = None, config_path: str | None = None) -> None:
    if db_path:
        _overrides["db_path"] = db_path
    if config_path:
        _overrides["config_path"] = config_path


def reset_overrides() -> None:
    _overrides.clear()


def _config_path() -> str:
    return _overrides.get("config_path") or os.environ.get("INVENTORY_CONFIG") or _DEFAULT_CONFIG


def read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or _config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path(db_path: str | None = None) -> str:
    env_path = os.environ.get("INVENTORY_DB_PATH")
    cfg = read_config_yaml()
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if db_path:
        path = db_path
    elif _overrides.get("db_path"):
        path = _overrides["db_path"]
    elif env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _DEFAULT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a fresh SQLite connection for a single operation.
    Rows come back as sqlite3.Row; the connection is always closed on exit.
    """
    path = get_db_path(db_path)
    logger.debug("opening sqlite db %s", path)
    conn = sqlite3.connect(path)
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
