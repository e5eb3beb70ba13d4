"""
HTTP boundary for the log journal.

Exposes:
- POST /logs  ingest one entry
- GET  /logs  filtered, newest-first query
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from opentelemetry import trace

from ..dependencies import get_log_store
from ..models.log_models import LogFilterCriteria
from ..services.entry_validator import LogValidationError, validate_entry
from ..services.log_store import LogStore, StorageFault
from ..services.query_engine import InvalidQueryError, apply_query, compile_criteria
from ..utils.metrics import INGEST_COUNTER, QUERY_COUNTER, QUERY_RESULTS

ingest_logger = logging.getLogger("logjournal.ingest")
query_logger = logging.getLogger("logjournal.query")
tracer = trace.get_tracer(__name__)

router = APIRouter(
    prefix="/logs",
    tags=["logs"],
)


def _error(status_code: int, message: str, reasons: Optional[List[str]] = None) -> HTTPException:
    detail: Dict[str, Any] = {"error": message}
    if reasons:
        detail["reasons"] = reasons
    return HTTPException(status_code=status_code, detail=detail)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON and cannot be stored back verbatim
    raise ValueError(f"invalid JSON constant {name}")


# ------------------------------------------------------------------------------
# POST /logs
# ------------------------------------------------------------------------------
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Ingest a single structured log entry.",
    response_description="The stored entry.",
)
async def ingest_log(
    request: Request,
    store: LogStore = Depends(get_log_store),
) -> Dict[str, Any]:
    """
    Workflow:
        1. Decode the JSON body (malformed -> 400)
        2. Validate against the entry schema (invalid -> 400)
        3. Append to the store (storage fault -> 500)
    """
    with tracer.start_as_current_span("logs.ingest") as span:
        raw = await request.body()
        try:
            candidate = json.loads(raw, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            INGEST_COUNTER.labels(status="rejected").inc()
            ingest_logger.warning("Malformed request body: %s", exc)
            span.record_exception(exc)
            raise _error(status.HTTP_400_BAD_REQUEST, "Malformed request body", [str(exc)])

        try:
            entry = validate_entry(candidate)
        except LogValidationError as exc:
            INGEST_COUNTER.labels(status="rejected").inc()
            span.set_attribute("logjournal.ingest.rejected", True)
            raise _error(status.HTTP_400_BAD_REQUEST, exc.message, exc.reasons)

        span.set_attribute("logjournal.entry.level", entry.level.value)
        span.set_attribute("logjournal.entry.resourceId", entry.resourceId)
        span.set_attribute("logjournal.entry.traceId", entry.traceId)

        try:
            stored = await run_in_threadpool(store.append_entry, entry)
        except StorageFault as exc:
            INGEST_COUNTER.labels(status="failed").inc()
            ingest_logger.exception("Failed to persist log entry")
            span.record_exception(exc)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

        INGEST_COUNTER.labels(status="accepted").inc()
        ingest_logger.info(
            "Ingested %s entry from %s (trace=%s)",
            stored.level.value,
            stored.resourceId,
            stored.traceId,
        )
        return stored.model_dump(mode="json")


# ------------------------------------------------------------------------------
# GET /logs
# ------------------------------------------------------------------------------
@router.get(
    "",
    summary="Query log entries with optional filters, newest first.",
)
def list_logs(
    level: Optional[str] = Query(None),
    message: Optional[str] = Query(None, description="Case-insensitive substring match."),
    resourceId: Optional[str] = Query(None),
    timestamp_start: Optional[str] = Query(None, description="Inclusive lower bound."),
    timestamp_end: Optional[str] = Query(None, description="Inclusive upper bound."),
    traceId: Optional[str] = Query(None),
    spanId: Optional[str] = Query(None),
    commit: Optional[str] = Query(None),
    store: LogStore = Depends(get_log_store),
) -> List[Dict[str, Any]]:
    criteria = LogFilterCriteria(
        level=level,
        message=message,
        resourceId=resourceId,
        traceId=traceId,
        spanId=spanId,
        commit=commit,
        timestamp_start=timestamp_start,
        timestamp_end=timestamp_end,
    )

    with tracer.start_as_current_span("logs.query") as span:
        active = criteria.model_dump(exclude_none=True)
        span.set_attribute("logjournal.query.filters", sorted(k for k, v in active.items() if v))

        # Reject bad time bounds before touching the store.
        try:
            compiled = compile_criteria(criteria)
        except InvalidQueryError as exc:
            QUERY_COUNTER.labels(status="rejected").inc()
            query_logger.warning("Rejected query: %s", "; ".join(exc.reasons))
            raise _error(status.HTTP_400_BAD_REQUEST, exc.message, exc.reasons)

        try:
            entries = store.read_all()
        except StorageFault as exc:
            QUERY_COUNTER.labels(status="failed").inc()
            query_logger.exception("Failed to read log store")
            span.record_exception(exc)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

        results = apply_query(entries, compiled)

        span.set_attribute("logjournal.query.scanned", len(entries))
        span.set_attribute("logjournal.query.returned", len(results))
        QUERY_COUNTER.labels(status="ok").inc()
        QUERY_RESULTS.observe(len(results))
        query_logger.debug("Query %s matched %d of %d entries", active, len(results), len(entries))

        return [entry.model_dump(mode="json") for entry in results]
