"""
Filter + sort over a snapshot of log entries.

All supplied predicates must hold (AND). Results are ordered newest-first by
parsed timestamp; ties keep store order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..models.log_models import LogEntry, LogFilterCriteria
from ..utils.timestamps import parse_instant


class InvalidQueryError(Exception):
    def __init__(self, message: str, reasons: Optional[List[str]] = None):
        self.message = message
        self.reasons = reasons or []
        super().__init__(message)


# Fields compared with plain string equality.
_EXACT_FIELDS = ("level", "resourceId", "traceId", "spanId", "commit")


@dataclass(frozen=True)
class CompiledQuery:
    exact: Tuple[Tuple[str, str], ...]
    message_lower: Optional[str]
    start: Optional[datetime]
    end: Optional[datetime]

    def matches(self, entry: LogEntry, instant: datetime) -> bool:
        for field, expected in self.exact:
            actual = getattr(entry, field)
            if field == "level":
                actual = actual.value
            if actual != expected:
                return False

        if self.message_lower is not None and self.message_lower not in entry.message.lower():
            return False

        if self.start is not None and instant < self.start:
            return False
        if self.end is not None and instant > self.end:
            return False

        return True


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def compile_criteria(criteria: LogFilterCriteria) -> CompiledQuery:
    """
    Normalize criteria and parse the time bounds once.
    Raises InvalidQueryError if a bound is not a valid timestamp.
    """
    reasons: List[str] = []
    bounds = {}
    for name in ("timestamp_start", "timestamp_end"):
        raw = getattr(criteria, name)
        if not _present(raw):
            bounds[name] = None
            continue
        try:
            bounds[name] = parse_instant(raw)
        except ValueError:
            reasons.append(f"{name}: unparsable timestamp {raw!r}")

    if reasons:
        raise InvalidQueryError("Invalid query", reasons)

    exact = tuple(
        (field, getattr(criteria, field))
        for field in _EXACT_FIELDS
        if _present(getattr(criteria, field))
    )

    return CompiledQuery(
        exact=exact,
        message_lower=criteria.message.lower() if _present(criteria.message) else None,
        start=bounds["timestamp_start"],
        end=bounds["timestamp_end"],
    )


def apply_query(entries: Sequence[LogEntry], compiled: CompiledQuery) -> List[LogEntry]:
    matched: List[Tuple[datetime, LogEntry]] = []
    for entry in entries:
        instant = entry.instant
        if compiled.matches(entry, instant):
            matched.append((instant, entry))

    # sorted() is stable with reverse=True, so equal instants stay in store order
    matched = sorted(matched, key=lambda pair: pair[0], reverse=True)
    return [entry for _, entry in matched]


def query_logs(entries: Sequence[LogEntry], criteria: LogFilterCriteria) -> List[LogEntry]:
    return apply_query(entries, compile_criteria(criteria))
