"""Suggestion merging and the content-service boundary."""

from globetrotter.suggestions.merger import (
    Err,
    Ok,
    ParseResult,
    merge_city_suggestion,
    merge_generated_trip,
    parse_city_plan,
    parse_generated_trip,
)

__all__ = [
    "Ok",
    "Err",
    "ParseResult",
    "parse_city_plan",
    "parse_generated_trip",
    "merge_city_suggestion",
    "merge_generated_trip",
]
