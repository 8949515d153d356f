"""Storage layer for wp-supervisor.

Transients are cached values with an expiry. Components receive a
TransientStore instead of reaching for a global cache.
"""

from wp_supervisor.storage.db import get_db, init_db, set_db_path
from wp_supervisor.storage.transients import (
    MemoryTransientStore,
    SqliteTransientStore,
    TransientStore,
)

__all__ = [
    "MemoryTransientStore",
    "SqliteTransientStore",
    "TransientStore",
    "get_db",
    "init_db",
    "set_db_path",
]
