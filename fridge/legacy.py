"""Import of the JSON fridge file written by earlier versions of the app.

The old format stores day and month only:

    {"foods": [{"name": "Milk", "best_before": {"day": 3, "month": 5},
                "id": 1, "open": false}, ...]}

Every entry is one unit. Entries sharing a name and date merge into one
record whose quantity counts them.
"""

from __future__ import annotations

import calendar
import json
import logging
from datetime import date
from pathlib import Path

from .db.inventory import InventoryStore
from .errors import CorruptStore, InvalidInput

logger = logging.getLogger(__name__)


def read_legacy_json(path: str | Path, year: int) -> list[tuple[str, date, bool]]:
    """Parse a legacy fridge file into (name, best_before, opened) entries.

    Args:
        path: Path to the JSON file.
        year: Year to attach to the stored day and month.

    Raises:
        CorruptStore: If the file is unreadable or not in the legacy format.
    """
    path = Path(path).expanduser()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptStore(f"Cannot read legacy fridge {path}: {e}") from e

    foods = data.get("foods") if isinstance(data, dict) else None
    if not isinstance(foods, list):
        raise CorruptStore(f"{path} has no 'foods' list")

    entries: list[tuple[str, date, bool]] = []
    for food in foods:
        try:
            name = food["name"]
            bb = food["best_before"]
            best_before = _legacy_date(year, int(bb["month"]), int(bb["day"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping legacy entry %r: %s", food, e)
            continue
        entries.append((name, best_before, bool(food.get("open", False))))
    return entries


def import_legacy_json(
    store: InventoryStore, path: str | Path, today: date | None = None
) -> int:
    """Add the entries of a legacy fridge file to the store.

    Returns:
        Number of units imported.

    Raises:
        CorruptStore: If the file is unreadable or not in the legacy format.
    """
    today = today or date.today()
    imported = 0
    opened: set[tuple[str, date]] = set()
    for name, best_before, is_open in read_legacy_json(path, today.year):
        try:
            item = store.add(name, best_before, 1)
        except InvalidInput as e:
            logger.warning("Skipping legacy entry %r: %s", name, e)
            continue
        imported += 1
        if is_open:
            opened.add(item.key)

    for name, best_before in opened:
        store.get(name, best_before).opened = True

    logger.info("Imported %d units from %s", imported, path)
    return imported


def _legacy_date(year: int, month: int, day: int) -> date:
    # The old app allowed Feb 29 in every year; use Feb 28 outside leap years
    if month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return date(year, month, day)
