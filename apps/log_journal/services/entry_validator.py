"""
Ingestion validation for candidate log entries.

A candidate is accepted only when every rule holds:
  - it is a JSON object
  - level, message, resourceId, timestamp, traceId, spanId, commit, metadata are present
  - level is one of error | warn | info | debug (case-sensitive)
  - the six text fields are strings
  - metadata is an object
  - timestamp parses to an instant

Validation is pure; nothing is stored here.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from ..models.log_models import LogEntry

logger = logging.getLogger("logjournal.ingest")


class LogValidationError(Exception):
    """
    Raised when a candidate entry is rejected.
    `reasons` holds one human-readable line per failed rule.
    """

    def __init__(self, message: str, reasons: Optional[List[str]] = None):
        self.message = message
        self.reasons = reasons or []
        super().__init__(message)


def _describe(exc: ValidationError) -> List[str]:
    reasons: List[str] = []
    for err in exc.errors():
        # Only the top-level field name matters for the caller.
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "entry"
        reasons.append(f"{field}: {err.get('msg', 'invalid value')}")
    return reasons


def validate_entry(candidate: Any) -> LogEntry:
    if not isinstance(candidate, dict):
        raise LogValidationError(
            "Invalid log entry format",
            [f"entry: expected a JSON object, got {type(candidate).__name__}"],
        )

    try:
        entry = LogEntry.model_validate(candidate)
    except ValidationError as exc:
        reasons = _describe(exc)
        logger.warning("Rejected log entry: %s", "; ".join(reasons))
        raise LogValidationError("Invalid log entry format", reasons) from exc

    return entry
