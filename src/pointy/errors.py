"""Exceptions raised by pointy."""

from typing import Optional


class PointyError(Exception):
    """Base exception for all pointy errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


class CorruptStoreError(PointyError):
    """The store file exists but does not hold a valid ledger."""


class StoreWriteError(PointyError):
    """The ledger could not be written to the store file."""


class InvalidAmountError(PointyError, ValueError):
    """A point amount buffer is not a plain string of ASCII digits."""
