"""Food inventory CRUD operations backed by an SQLite file."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from datetime import date, datetime
from pathlib import Path
from typing import Iterator

from ..errors import CorruptStore, InvalidInput, NotFound
from ..freshness import CRITICAL_DAYS, SOON_DAYS, classify, days_remaining
from ..models import FoodItem, ListedItem, normalize_name
from .schema import SCHEMA_VERSION, ensure_schema, read_schema_version

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "~/.config/fridge/fridge.db"

# Largest quantity a record can hold; SQLite INTEGER is a signed 64-bit value.
MAX_QUANTITY = 2**63 - 1


class InventoryStore:
    """Holds the fridge inventory in memory and persists it to a file.

    Records are keyed by (name, best_before). Names are normalized before
    the key is computed so "milk" and "Milk" share a record.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_STORE_PATH,
        critical_days: int = CRITICAL_DAYS,
        soon_days: int = SOON_DAYS,
    ) -> None:
        self._path = Path(path).expanduser()
        self._critical_days = critical_days
        self._soon_days = soon_days
        self._items: dict[tuple[str, date], FoodItem] = {}

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FoodItem]:
        return iter(sorted(self._items.values(), key=_sort_key))

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        name, best_before = key
        if not isinstance(name, str):
            return False
        return (normalize_name(name), best_before) in self._items

    def add(self, name: str, best_before: date, quantity: int = 1) -> FoodItem:
        """Add ``quantity`` units of an item.

        Merges into the record with the same name and best-before date by
        summing quantity, otherwise creates a new record.

        Raises:
            InvalidInput: If the name is empty, quantity is not an integer
                between 1 and MAX_QUANTITY, the merged total would exceed
                MAX_QUANTITY, or best_before is not a date.
        """
        if not isinstance(name, str) or not normalize_name(name):
            raise InvalidInput("Name must not be empty")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidInput(f"Quantity must be an integer, got {quantity!r}")
        if quantity < 1:
            raise InvalidInput(f"Quantity must be at least 1, got {quantity}")
        if quantity > MAX_QUANTITY:
            raise InvalidInput(f"Quantity must be at most {MAX_QUANTITY}, got {quantity}")
        best_before = _as_date(best_before)

        key = (normalize_name(name), best_before)
        item = self._items.get(key)
        if item is not None and item.quantity + quantity > MAX_QUANTITY:
            raise InvalidInput(
                f"{item.name} would exceed {MAX_QUANTITY} units"
            )
        if item is None:
            item = FoodItem(name=key[0], best_before=best_before, quantity=quantity)
            self._items[key] = item
        else:
            item.quantity += quantity
        logger.info(
            "Added %d x %s (best before %s), now %d",
            quantity, item.name, item.best_before, item.quantity,
        )
        return item

    def get(self, name: str, best_before: date) -> FoodItem:
        """Return the record for name and best_before.

        Raises:
            NotFound: If no such record exists.
        """
        key = (normalize_name(name), _as_date(best_before))
        try:
            return self._items[key]
        except KeyError:
            raise NotFound(
                f"{key[0]} (best before {key[1]}) is not in the fridge"
            ) from None

    def list(self, today: date) -> list[ListedItem]:
        """Return all records annotated with their freshness against today.

        Ordered by best-before date, soonest first, then by name.
        """
        return [
            ListedItem(
                item=item,
                freshness=classify(
                    today,
                    item.best_before,
                    critical_days=self._critical_days,
                    soon_days=self._soon_days,
                ),
                days_remaining=days_remaining(today, item.best_before),
            )
            for item in self
        ]

    def remove(self, name: str, best_before: date) -> FoodItem:
        """Delete a record and return it.

        Raises:
            NotFound: If no such record exists.
        """
        item = self.get(name, best_before)
        del self._items[item.key]
        logger.info("Removed %s (best before %s)", item.name, item.best_before)
        return item

    def consume(self, name: str, best_before: date) -> FoodItem | None:
        """Open one unit, or finish the opened one.

        An unopened record becomes opened. An opened record loses one unit
        and is no longer opened; when no units remain the record is removed
        and None is returned.

        Raises:
            NotFound: If no such record exists.
        """
        item = self.get(name, best_before)
        if not item.opened:
            item.opened = True
            logger.info("Opened %s (best before %s)", item.name, item.best_before)
            return item

        item.quantity -= 1
        item.opened = False
        if item.quantity < 1:
            del self._items[item.key]
            logger.info("Finished %s (best before %s)", item.name, item.best_before)
            return None
        logger.info(
            "Ate one %s (best before %s), %d left",
            item.name, item.best_before, item.quantity,
        )
        return item

    def clear(self) -> None:
        self._items = {}

    def load(self) -> None:
        """Replace the in-memory inventory with the contents of the file.

        A missing or empty file yields an empty inventory.

        Raises:
            CorruptStore: If the file cannot be read or holds malformed
                data. The inventory is left empty.
        """
        self._items = {}
        if not self._path.exists() or self._path.stat().st_size == 0:
            logger.info("No store at %s, starting empty", self._path)
            return

        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        try:
            with closing(sqlite3.connect(uri, uri=True)) as conn:
                version = read_schema_version(conn)
                if version > SCHEMA_VERSION:
                    raise CorruptStore(
                        f"{self._path} uses schema version {version}, "
                        f"newer than supported version {SCHEMA_VERSION}"
                    )
                rows = conn.execute(
                    "SELECT name, best_before, quantity, opened FROM food_items"
                ).fetchall()
        except sqlite3.DatabaseError as e:
            raise CorruptStore(f"Cannot read {self._path}: {e}") from e

        items: dict[tuple[str, date], FoodItem] = {}
        for row in rows:
            item = _row_to_item(row)
            existing = items.get(item.key)
            if existing is None:
                items[item.key] = item
            else:
                if existing.quantity + item.quantity > MAX_QUANTITY:
                    raise CorruptStore(
                        f"{item.name} exceeds {MAX_QUANTITY} units in {self._path}"
                    )
                existing.quantity += item.quantity
                existing.opened = existing.opened or item.opened
        self._items = items
        logger.info("Loaded %d records from %s", len(items), self._path)

    def save(self) -> None:
        """Write the inventory to the file.

        The data goes to a temporary file in the same directory which then
        replaces the target, so a crash never leaves a half-written store.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            with closing(sqlite3.connect(tmp_path)) as conn:
                ensure_schema(conn)
                conn.executemany(
                    """INSERT INTO food_items (name, best_before, quantity, opened)
                       VALUES (?, ?, ?, ?)""",
                    [
                        (
                            item.name,
                            item.best_before.isoformat(),
                            item.quantity,
                            int(item.opened),
                        )
                        for item in self
                    ],
                )
                conn.commit()
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info("Saved %d records to %s", len(self._items), self._path)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise InvalidInput(f"Best-before must be a date, got {value!r}")
    return value


def _sort_key(item: FoodItem) -> tuple[date, str]:
    return (item.best_before, item.name)


def _row_to_item(row: tuple) -> FoodItem:
    name, best_before, quantity, opened = row
    try:
        if not isinstance(name, str) or not normalize_name(name):
            raise ValueError("empty name")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"invalid quantity {quantity!r}")
        if opened not in (0, 1):
            raise ValueError(f"invalid opened flag {opened!r}")
        parsed = date.fromisoformat(best_before)
    except (TypeError, ValueError) as e:
        raise CorruptStore(f"Malformed record {row!r}: {e}") from e
    return FoodItem(
        name=normalize_name(name),
        best_before=parsed,
        quantity=quantity,
        opened=bool(opened),
    )
