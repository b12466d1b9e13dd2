"""Data models for fridge items and their freshness."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum


class Freshness(IntEnum):
    """Freshness band of an item, ordered from worst to best."""

    EXPIRED = 0
    CRITICAL = 1
    SOON = 2
    FRESH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


def normalize_name(name: str) -> str:
    """Strip whitespace and upper-case the first letter."""
    name = name.strip()
    return name[:1].upper() + name[1:]


@dataclass
class FoodItem:
    """A record in the fridge: one name and best-before date, in multiples."""

    name: str
    best_before: date
    quantity: int = 1
    opened: bool = False  # one unit started but not finished

    @property
    def key(self) -> tuple[str, date]:
        return (self.name, self.best_before)


@dataclass
class ListedItem:
    """A FoodItem annotated with its freshness against a given day."""

    item: FoodItem
    freshness: Freshness
    days_remaining: int

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def best_before(self) -> date:
        return self.item.best_before

    @property
    def quantity(self) -> int:
        return self.item.quantity
