"""SQLite cache database.

Connections are opened lazily, one per (thread, file). Each
SqliteTransientStore passes its own path, so two stores on two files
never share a connection. Functions called without a path use the
module default, which set_db_path() overrides.

Default file: ~/.wp-supervisor/cache.db
"""

import contextlib
import sqlite3
import threading
from pathlib import Path
from typing import Iterator

from wp_supervisor.storage.models import ALL_SCHEMAS

_DEFAULT_DB_PATH = Path.home() / ".wp-supervisor" / "cache.db"

_local = threading.local()
_db_path: Path = _DEFAULT_DB_PATH


def set_db_path(path: Path | str) -> None:
    """Change the default cache file (used when no path is passed)."""
    global _db_path
    _db_path = Path(path)


def get_db_path() -> Path:
    return _db_path


def _resolve(path: Path | str | None) -> Path:
    return Path(path) if path is not None else _db_path


def _connections() -> dict[Path, sqlite3.Connection]:
    conns = getattr(_local, "connections", None)
    if conns is None:
        conns = _local.connections = {}
    return conns


def init_db(path: Path | str | None = None) -> None:
    """Create the cache file and its tables if missing."""
    db_path = _resolve(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with contextlib.closing(_connect(db_path)) as conn:
        for ddl in ALL_SCHEMAS:
            conn.execute(ddl)
        conn.commit()


def get_db(path: Path | str | None = None) -> sqlite3.Connection:
    """This thread's connection to ``path`` (the default file when omitted)."""
    db_path = _resolve(path)
    conns = _connections()
    conn = conns.get(db_path)
    if conn is None:
        conn = conns[db_path] = _connect(db_path)
    return conn


def close_db(path: Path | str | None = None) -> None:
    """Close this thread's connection to ``path``, or all of them when omitted."""
    conns = _connections()
    targets = list(conns) if path is None else [Path(path)]
    for db_path in targets:
        conn = conns.pop(db_path, None)
        if conn is not None:
            conn.close()


@contextlib.contextmanager
def transaction(path: Path | str | None = None) -> Iterator[sqlite3.Connection]:
    """Commit on success, roll back if the block raises."""
    conn = get_db(path)
    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    conn.commit()


def _connect(path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn
