"""Transient stores - Key-value caches with a time to live.

A transient that has expired reads as missing and is purged on read.
A ttl of 0 (or less) stores the value without an expiry.
Values must be JSON-serialisable so both backends behave the same.
"""

import copy
import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

from wp_supervisor.storage.db import get_db, get_db_path, init_db, transaction
from wp_supervisor.storage.models import TransientRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

DAY_IN_SECONDS = 24 * 60 * 60
WEEK_IN_SECONDS = 7 * DAY_IN_SECONDS


class TransientStore(ABC):
    """Abstract TTL cache.

    Each implementation must provide get/set/delete/names; ``clear`` and
    ``scoped`` are built on top of them.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or time.time

    @abstractmethod
    def get(self, name: str) -> Any | None:
        """Return the stored value, or None when missing or expired."""
        ...

    @abstractmethod
    def set(self, name: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``name`` for ``ttl`` seconds."""
        ...

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Remove ``name``. Returns True if something was removed."""
        ...

    @abstractmethod
    def names(self) -> list[str]:
        """Names of all unexpired transients."""
        ...

    def clear(self) -> int:
        """Delete every transient. Returns how many were removed."""
        return sum(1 for name in self.names() if self.delete(name))

    def scoped(self, prefix: str) -> "ScopedTransientStore":
        """View of this store whose names are prefixed with ``prefix:``."""
        return ScopedTransientStore(self, prefix)

    def _expires_at(self, ttl: int) -> float | None:
        if ttl <= 0:
            return None
        return self.clock() + ttl


class ScopedTransientStore(TransientStore):
    """Namespaced view over another store (one site's server data, say)."""

    def __init__(self, parent: TransientStore, prefix: str) -> None:
        super().__init__(parent.clock)
        self.parent = parent
        self.prefix = f"{prefix}:"

    def get(self, name: str) -> Any | None:
        return self.parent.get(self.prefix + name)

    def set(self, name: str, value: Any, ttl: int) -> None:
        self.parent.set(self.prefix + name, value, ttl)

    def delete(self, name: str) -> bool:
        return self.parent.delete(self.prefix + name)

    def names(self) -> list[str]:
        return [n[len(self.prefix):] for n in self.parent.names() if n.startswith(self.prefix)]


class MemoryTransientStore(TransientStore):
    """Process-local store; values are copied in and out."""

    def __init__(self, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._items: dict[str, tuple[Any, float | None]] = {}

    def get(self, name: str) -> Any | None:
        item = self._items.get(name)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and expires_at <= self.clock():
            del self._items[name]
            return None
        return copy.deepcopy(value)

    def set(self, name: str, value: Any, ttl: int) -> None:
        self._items[name] = (copy.deepcopy(value), self._expires_at(ttl))

    def delete(self, name: str) -> bool:
        return self._items.pop(name, None) is not None

    def names(self) -> list[str]:
        now = self.clock()
        return [
            name
            for name, (_, expires_at) in self._items.items()
            if expires_at is None or expires_at > now
        ]

    def clear(self) -> int:
        count = len(self._items)
        self._items.clear()
        return count


class SqliteTransientStore(TransientStore):
    """Store backed by the ``transients`` table, shared across runs."""

    def __init__(self, path: Path | str | None = None, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self.path = Path(path) if path is not None else get_db_path()
        init_db(self.path)

    def get(self, name: str) -> Any | None:
        db = get_db(self.path)
        row = db.execute(
            "SELECT name, value_json, expires_at, updated_at FROM transients WHERE name = ?",
            (name,),
        ).fetchone()
        if row is None:
            return None

        record = TransientRecord(**dict(row))
        if record.is_expired(self.clock()):
            logger.debug("Transient %s expired", name)
            self.delete(name)
            return None
        return record.value

    def set(self, name: str, value: Any, ttl: int) -> None:
        with transaction(self.path) as db:
            db.execute(
                """INSERT INTO transients (name, value_json, expires_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(name) DO UPDATE SET
                       value_json = excluded.value_json,
                       expires_at = excluded.expires_at,
                       updated_at = datetime('now')""",
                (name, json.dumps(value), self._expires_at(ttl)),
            )

    def delete(self, name: str) -> bool:
        with transaction(self.path) as db:
            cursor = db.execute("DELETE FROM transients WHERE name = ?", (name,))
        return cursor.rowcount > 0

    def names(self) -> list[str]:
        db = get_db(self.path)
        rows = db.execute(
            "SELECT name FROM transients WHERE expires_at IS NULL OR expires_at > ? ORDER BY name",
            (self.clock(),),
        ).fetchall()
        return [row["name"] for row in rows]

    def clear(self) -> int:
        with transaction(self.path) as db:
            cursor = db.execute("DELETE FROM transients")
        return cursor.rowcount
