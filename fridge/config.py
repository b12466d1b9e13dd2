"""TOML configuration loader for the fridge app."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .db.inventory import DEFAULT_STORE_PATH
from .freshness import CRITICAL_DAYS, SOON_DAYS


@dataclass
class StoreConfig:
    path: str = DEFAULT_STORE_PATH


@dataclass
class FreshnessConfig:
    critical_days: int = CRITICAL_DAYS
    soon_days: int = SOON_DAYS


@dataclass
class UIConfig:
    width: int = 660
    height: int = 550
    max_quantity: int = 10


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = ""  # empty: stderr only


@dataclass
class FridgeConfig:
    store: StoreConfig = field(default_factory=StoreConfig)
    freshness: FreshnessConfig = field(default_factory=FreshnessConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> FridgeConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The store path and log level can be overridden via environment
    variables when the file leaves them unset.

    Raises:
        ValueError: If a value has the wrong type, or the freshness
            thresholds or UI limits are invalid.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sto = _section(raw, "store")
    frs = _section(raw, "freshness")
    ui = _section(raw, "ui")
    lg = _section(raw, "logging")

    # Resolve overridable values: config file → environment variable → default
    store_path = sto.get("path") or os.environ.get(
        "FRIDGE_STORE_PATH", DEFAULT_STORE_PATH
    )
    log_level = lg.get("level") or os.environ.get("FRIDGE_LOG_LEVEL", "WARNING")

    _expect(str, "store.path", store_path)
    _expect(str, "logging.level", log_level)
    _expect(str, "logging.file", lg.get("file", ""))
    for section, values in (("freshness", frs), ("ui", ui)):
        for key, value in values.items():
            _expect(int, f"{section}.{key}", value)

    config = FridgeConfig(
        store=StoreConfig(path=store_path),
        freshness=FreshnessConfig(
            critical_days=frs.get("critical_days", CRITICAL_DAYS),
            soon_days=frs.get("soon_days", SOON_DAYS),
        ),
        ui=UIConfig(
            width=ui.get("width", 660),
            height=ui.get("height", 550),
            max_quantity=ui.get("max_quantity", 10),
        ),
        logging=LoggingConfig(
            level=log_level.upper(),
            file=lg.get("file", ""),
        ),
    )
    _validate(config)
    return config


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{name}] must be a table, got {section!r}")
    return section


def _expect(kind: type, name: str, value) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(
            f"{name} must be {kind.__name__}, got {type(value).__name__} {value!r}"
        )


def _validate(config: FridgeConfig) -> None:
    frs = config.freshness
    if frs.critical_days < 0:
        raise ValueError(
            f"freshness.critical_days must be >= 0, got {frs.critical_days}"
        )
    if frs.soon_days < frs.critical_days:
        raise ValueError(
            f"freshness.soon_days ({frs.soon_days}) must be >= "
            f"critical_days ({frs.critical_days})"
        )
    if config.ui.max_quantity < 1:
        raise ValueError(
            f"ui.max_quantity must be >= 1, got {config.ui.max_quantity}"
        )
