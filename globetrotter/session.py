"""Session composition root.

One PlannerSession is built per signed-in session and passed to whatever
needs it. No trip state lives in module globals.
"""

from dataclasses import dataclass, field

from globetrotter.config import Settings, get_settings
from globetrotter.db.engine import create_engine_from_settings, create_session_factory, init_schema
from globetrotter.db.repositories import ProfileRepository, TripRepository
from globetrotter.db.sql_store import SqlRecordStore
from globetrotter.db.store import RecordStore
from globetrotter.models.common import currency_for_code
from globetrotter.suggestions.content_service import ContentService, get_content_service
from globetrotter.suggestions.workflow import SuggestionTracker
from globetrotter.utils.ids import IdGenerator, RandomIdGenerator
from globetrotter.utils.logging import configure_logging


@dataclass
class PlannerSession:
    """Everything the presentation layer may call."""

    settings: Settings
    store: RecordStore
    ids: IdGenerator
    trips: TripRepository
    profile: ProfileRepository
    content: ContentService
    tracker: SuggestionTracker = field(default_factory=SuggestionTracker)


def create_sql_store(settings: Settings) -> SqlRecordStore:
    """SQL-backed record store with its schema in place."""
    engine = create_engine_from_settings(settings)
    init_schema(engine)
    return SqlRecordStore(create_session_factory(engine))


def open_session(
    settings: Settings | None = None,
    *,
    store: RecordStore | None = None,
    content: ContentService | None = None,
    ids: IdGenerator | None = None,
) -> PlannerSession:
    """Build a session, loading all three records from the store.

    Args:
        settings: Settings (defaults to environment)
        store: Record store (defaults to the configured SQL store)
        content: Content service (defaults to the configured one)
        ids: ID generator (defaults to random tokens)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    store = store if store is not None else create_sql_store(settings)
    ids = ids or RandomIdGenerator(settings.id_length)
    return PlannerSession(
        settings=settings,
        store=store,
        ids=ids,
        trips=TripRepository(store, ids),
        profile=ProfileRepository(store, default_currency=currency_for_code(settings.default_currency_code)),
        content=content or get_content_service(settings),
    )
