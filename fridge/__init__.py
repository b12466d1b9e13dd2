"""Fridge: track food in the fridge and color it by best-before date."""

from .config import (
    FreshnessConfig,
    FridgeConfig,
    LoggingConfig,
    StoreConfig,
    UIConfig,
    load_config,
)
from .db import InventoryStore
from .errors import CorruptStore, FridgeError, InvalidInput, NotFound
from .freshness import BAND_COLORS, CRITICAL_DAYS, SOON_DAYS, classify, days_remaining
from .handlers import FridgeEvents, HandlerResult, StoreHandlers, open_store
from .models import FoodItem, Freshness, ListedItem

__all__ = [
    "InventoryStore",
    "FoodItem",
    "Freshness",
    "ListedItem",
    "classify",
    "days_remaining",
    "CRITICAL_DAYS",
    "SOON_DAYS",
    "BAND_COLORS",
    "FridgeEvents",
    "StoreHandlers",
    "HandlerResult",
    "open_store",
    "FridgeError",
    "InvalidInput",
    "NotFound",
    "CorruptStore",
    "FridgeConfig",
    "StoreConfig",
    "FreshnessConfig",
    "UIConfig",
    "LoggingConfig",
    "load_config",
]
