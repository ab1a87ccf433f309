"""Structured logging for repository mutations and content-service calls."""

import logging
from typing import Any

logger = logging.getLogger("globetrotter.events")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler at the given level."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)


class StructuredEventLogger:
    """Structured logger for engine events."""

    def log_mutation(
        self,
        operation: str,
        trip_id: str,
        outcome: str,
        trip_count: int | None = None,
    ) -> None:
        """Log a repository mutation with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "trip_id": trip_id,
            "outcome": outcome,
        }
        if trip_count is not None:
            log_data["trip_count"] = trip_count

        log_msg = f"Trip {operation}: {trip_id} - {outcome}"

        if outcome == "ok":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_service_call(
        self,
        request: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log a content-service request with structured data."""
        log_data: dict[str, Any] = {
            "request": request,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Content service: {request} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
