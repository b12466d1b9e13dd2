"""Exceptions raised by the fridge inventory."""

from __future__ import annotations


class FridgeError(Exception):
    """Base class for recoverable inventory errors shown to the user."""


class InvalidInput(FridgeError, ValueError):
    """An item could not be added because its fields are invalid."""


class NotFound(FridgeError, LookupError):
    """No record matches the requested name and best-before date."""


class CorruptStore(FridgeError):
    """The backing store file cannot be read or holds malformed data."""
