"""Expiration classifier: maps a best-before date to a freshness band."""

from __future__ import annotations

from datetime import date

from .models import Freshness

# Days remaining up to which an item is CRITICAL (inclusive).
CRITICAL_DAYS = 1
# Days remaining up to which an item is SOON (inclusive).
SOON_DAYS = 3

BAND_COLORS: dict[Freshness, str] = {
    Freshness.EXPIRED: "#D32F2F",
    Freshness.CRITICAL: "#F57C00",
    Freshness.SOON: "#FBC02D",
    Freshness.FRESH: "#388E3C",
}

ANSI_COLORS: dict[Freshness, str] = {
    Freshness.EXPIRED: "\033[31m",
    Freshness.CRITICAL: "\033[91m",
    Freshness.SOON: "\033[33m",
    Freshness.FRESH: "\033[32m",
}


def days_remaining(today: date, best_before: date) -> int:
    """Return best_before - today in whole days (negative once past)."""
    return (best_before - today).days


def classify(
    today: date,
    best_before: date,
    critical_days: int = CRITICAL_DAYS,
    soon_days: int = SOON_DAYS,
) -> Freshness:
    """Classify a best-before date relative to today.

    Args:
        today: The reference day.
        best_before: The item's best-before date.
        critical_days: Last day count (inclusive) still considered CRITICAL.
        soon_days: Last day count (inclusive) still considered SOON.

    Returns:
        EXPIRED when the date has passed, CRITICAL from today up to
        ``critical_days`` out, SOON up to ``soon_days`` out, FRESH beyond.
    """
    remaining = days_remaining(today, best_before)
    if remaining < 0:
        return Freshness.EXPIRED
    if remaining <= critical_days:
        return Freshness.CRITICAL
    if remaining <= soon_days:
        return Freshness.SOON
    return Freshness.FRESH
