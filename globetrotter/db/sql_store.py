"""SQL implementation of the record store."""

from sqlalchemy.orm import Session, sessionmaker

from globetrotter.db.models import Record


class SqlRecordStore:
    """SQL implementation of RecordStore.

    Every save runs in its own transaction, so a record is either fully
    replaced or left as it was.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> str | None:
        """Load a serialized record."""
        with self._session_factory() as session:
            record = session.get(Record, key)
            return record.value if record is not None else None

    def save(self, key: str, value: str) -> None:
        """Overwrite a record."""
        with self._session_factory.begin() as session:
            record = session.get(Record, key)
            if record is None:
                session.add(Record(key=key, value=value))
            else:
                record.value = value

    def delete(self, key: str) -> None:
        """Remove a record if present."""
        with self._session_factory.begin() as session:
            record = session.get(Record, key)
            if record is not None:
                session.delete(record)
