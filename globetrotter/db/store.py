"""Durable key-value store interface."""

from enum import Enum
from typing import Protocol


class RecordKey(str, Enum):
    """Named records kept in the durable store."""

    USER = "gt_user"
    CURRENCY = "gt_currency"
    TRIPS = "gt_trips"


class RecordStore(Protocol):
    """Whole-record key-value persistence.

    Each record is read and overwritten as a single serialized unit; a save
    is atomic from the caller's perspective.
    """

    def load(self, key: str) -> str | None:
        """Load a serialized record.

        Args:
            key: Record name

        Returns:
            Serialized record or None if absent
        """
        ...

    def save(self, key: str, value: str) -> None:
        """Overwrite a record.

        Args:
            key: Record name
            value: Serialized record
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a record if present.

        Args:
            key: Record name
        """
        ...
