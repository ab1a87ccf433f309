"""Error taxonomy for the itinerary engine.

Entity invariant violations are reported as ``pydantic.ValidationError`` by
the models themselves; the classes here cover everything else.
"""


class GlobetrotterError(Exception):
    """Base class for engine errors."""


class MalformedSuggestionError(GlobetrotterError):
    """External suggestion payload does not match the expected schema.

    The merge that raised it is aborted and the target trip stays unchanged.
    """

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = problems or []


class ServiceUnavailable(GlobetrotterError):
    """Content service failed or timed out - no suggestion available."""


class NotFound(GlobetrotterError):
    """An operation referenced an id absent from its owning collection."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id
