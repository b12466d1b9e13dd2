"""SQLite-backed inventory store."""

from .inventory import InventoryStore
from .schema import SCHEMA_VERSION, ensure_schema, read_schema_version

__all__ = [
    "InventoryStore",
    "SCHEMA_VERSION",
    "ensure_schema",
    "read_schema_version",
]
