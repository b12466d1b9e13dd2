"""UI event handlers operating on an explicit inventory store."""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable

from .db.inventory import InventoryStore
from .errors import CorruptStore, FridgeError
from .freshness import CRITICAL_DAYS, SOON_DAYS
from .models import ListedItem, normalize_name

logger = logging.getLogger(__name__)


@dataclass
class HandlerResult:
    """Outcome of a UI action, ready for display."""

    ok: bool
    message: str = ""
    items: list[ListedItem] = field(default_factory=list)


class FridgeEvents(ABC):
    """Callbacks a fridge UI invokes in response to user actions."""

    @abstractmethod
    def today(self) -> date:
        """Day the listing is classified against."""
        ...

    @abstractmethod
    def on_add(self, name: str, best_before: date, quantity: int = 1) -> HandlerResult:
        ...

    @abstractmethod
    def on_remove(self, name: str, best_before: date) -> HandlerResult:
        ...

    @abstractmethod
    def on_list(self) -> HandlerResult:
        ...

    @abstractmethod
    def on_consume(self, name: str, best_before: date) -> HandlerResult:
        ...


class StoreHandlers(FridgeEvents):
    """FridgeEvents backed by an InventoryStore.

    Errors are logged and returned as failed results instead of raised, so
    the UI can show them and carry on. Each successful mutation saves the
    store when ``autosave`` is set.
    """

    def __init__(
        self,
        store: InventoryStore,
        today: Callable[[], date] = date.today,
        autosave: bool = True,
    ) -> None:
        self._store = store
        self._today = today
        self._autosave = autosave

    @property
    def store(self) -> InventoryStore:
        return self._store

    def today(self) -> date:
        return self._today()

    def on_add(self, name: str, best_before: date, quantity: int = 1) -> HandlerResult:
        try:
            item = self._store.add(name, best_before, quantity)
        except FridgeError as e:
            return self._failed("add", e)
        return self._commit(
            f"Added {quantity} x {item.name} (now {item.quantity})"
        )

    def on_remove(self, name: str, best_before: date) -> HandlerResult:
        try:
            item = self._store.remove(name, best_before)
        except FridgeError as e:
            return self._failed("remove", e)
        return self._commit(f"Removed {item.name}")

    def on_consume(self, name: str, best_before: date) -> HandlerResult:
        try:
            item = self._store.consume(name, best_before)
        except FridgeError as e:
            return self._failed("consume", e)
        if item is None:
            message = f"Finished the last {normalize_name(name)}"
        elif item.opened:
            message = f"Opened {item.name}"
        else:
            message = f"Ate one {item.name}, {item.quantity} left"
        return self._commit(message)

    def on_list(self) -> HandlerResult:
        items = self._store.list(self.today())
        return HandlerResult(ok=True, message=f"{len(items)} items", items=items)

    def _commit(self, message: str) -> HandlerResult:
        if self._autosave:
            try:
                self._store.save()
            except (OSError, sqlite3.Error) as e:
                logger.exception("Saving %s failed", self._store.path)
                return HandlerResult(
                    ok=False,
                    message=f"{message}, but saving failed: {e}",
                    items=self._store.list(self.today()),
                )
        return HandlerResult(
            ok=True, message=message, items=self._store.list(self.today())
        )

    def _failed(self, action: str, error: FridgeError) -> HandlerResult:
        logger.warning("Cannot %s: %s", action, error)
        return HandlerResult(
            ok=False, message=str(error), items=self._store.list(self.today())
        )


def open_store(
    path: str | Path,
    critical_days: int = CRITICAL_DAYS,
    soon_days: int = SOON_DAYS,
) -> tuple[InventoryStore, str | None]:
    """Load the store at path, degrading to an empty inventory if corrupt.

    Returns:
        The store and, when its file was corrupt, a message for the user.
    """
    store = InventoryStore(path, critical_days=critical_days, soon_days=soon_days)
    try:
        store.load()
    except CorruptStore as e:
        logger.warning("Starting with an empty fridge: %s", e)
        return store, f"The fridge file could not be read and was reset: {e}"
    return store, None
