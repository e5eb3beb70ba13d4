from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, StrictStr, field_validator

from ..utils.timestamps import parse_instant


class LogLevel(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class LogEntry(BaseModel):
    """
    One structured log line, exactly as submitted by the caller.

    Example:
    {
      "level": "error",
      "message": "Database connection failed",
      "resourceId": "server-1234",
      "timestamp": "2023-09-15T08:00:00Z",
      "traceId": "abc-xyz-123",
      "spanId": "span-456",
      "commit": "5e5342f",
      "metadata": {"parentResourceId": "server-5678"}
    }
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel
    message: StrictStr
    resourceId: StrictStr
    timestamp: StrictStr
    traceId: StrictStr
    spanId: StrictStr
    commit: StrictStr

    # Any JSON value tree; opaque to the store.
    metadata: Dict[str, JsonValue]

    @field_validator("timestamp")
    @classmethod
    def _timestamp_must_parse(cls, value: str) -> str:
        parse_instant(value)
        return value

    @property
    def instant(self) -> datetime:
        return parse_instant(self.timestamp)


class LogFilterCriteria(BaseModel):
    """
    Optional query predicates for GET /logs.
    Omitted (or empty) fields put no constraint on the result.
    """
    level: Optional[str] = None
    message: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the log message.",
    )
    resourceId: Optional[str] = None
    traceId: Optional[str] = None
    spanId: Optional[str] = None
    commit: Optional[str] = None
    timestamp_start: Optional[str] = Field(
        default=None,
        description="Inclusive lower bound on the entry timestamp.",
    )
    timestamp_end: Optional[str] = Field(
        default=None,
        description="Inclusive upper bound on the entry timestamp.",
    )
