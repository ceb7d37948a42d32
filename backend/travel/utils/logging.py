"""Logging setup and structured planning logs."""

import logging
from typing import Any
from uuid import UUID

logger = logging.getLogger("backend.travel.planning")


class StructuredFormatter(logging.Formatter):
    """Append the ``structured`` extra payload to each record as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        structured = getattr(record, "structured", None)
        if structured:
            pairs = " ".join(f"{key}={value}" for key, value in structured.items())
            message = f"{message} | {pairs}"
        return message


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process."""
    root = logging.getLogger()
    if any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        root.setLevel(level.upper())
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        StructuredFormatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(level.upper())


class StructuredPlanningLogger:
    """Structured logger for trip mutations and plan handling."""

    def log_operation(
        self,
        operation: str,
        outcome: str,
        *,
        trip_id: UUID | None = None,
        user_id: UUID | None = None,
        error_reason: str | None = None,
        **details: Any,
    ) -> None:
        """Log a planning operation with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": outcome,
            "trip_id": str(trip_id) if trip_id else None,
            "user_id": str(user_id) if user_id else None,
        }
        log_data.update(details)

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Planning: {operation} - {outcome}"

        if outcome in ("success", "attached", "already_added", "existing"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


planning_log = StructuredPlanningLogger()
