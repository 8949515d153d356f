"""Data models and schema DDL for the storage layer.

Provides the record dataclass for the transients table and the DDL
constants used by db.py to initialize the database.
"""

import json
from dataclasses import dataclass
from typing import Any


# ─── Schema DDL ────────────────────────────────────────────────────────────────

SCHEMA_TRANSIENTS = """
CREATE TABLE IF NOT EXISTS transients (
    name TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    expires_at REAL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

ALL_SCHEMAS = [SCHEMA_TRANSIENTS]


# ─── Record Dataclasses ───────────────────────────────────────────────────────


@dataclass
class TransientRecord:
    """A cached value and its absolute expiry (unix seconds, None for never)."""

    name: str
    value_json: str
    expires_at: float | None
    updated_at: str = ""

    @property
    def value(self) -> Any:
        return json.loads(self.value_json)

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at <= now
