"""In-memory implementation of the record store."""


class InMemoryRecordStore:
    """In-memory implementation of RecordStore."""

    def __init__(self, records: dict[str, str] | None = None) -> None:
        self._records: dict[str, str] = dict(records or {})
        self.save_count = 0

    def load(self, key: str) -> str | None:
        """Load a serialized record."""
        return self._records.get(key)

    def save(self, key: str, value: str) -> None:
        """Overwrite a record."""
        self._records[key] = value
        self.save_count += 1

    def delete(self, key: str) -> None:
        """Remove a record if present."""
        self._records.pop(key, None)
