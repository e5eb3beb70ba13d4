"""
File-backed, append-only store for validated log entries.

The whole collection lives in one JSON array. Every append is a full
read-modify-write under a lock, and the new document replaces the old one
atomically (temp file + os.replace), so readers see either the previous
collection or the complete new one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Union

from opentelemetry import trace
from pydantic import ValidationError

from ..models.log_models import LogEntry
from ..utils.metrics import STORE_LATENCY_SECONDS

logger = logging.getLogger("logjournal.store")
tracer = trace.get_tracer(__name__)


class StorageFault(Exception):
    """Raised when the backing file cannot be read, parsed or written."""


class LogStore:
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def ensure_initialized(self) -> None:
        """Create an empty collection if none exists. Never touches existing data."""
        with self._lock:
            self._ensure_file()

    def _ensure_file(self) -> None:
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFault(f"Cannot create log directory {self._path.parent}: {exc}") from exc
        self._write_records([])
        logger.info("Initialized empty log store at %s", self._path)

    # ------------------------------------------------------------------
    # Raw I/O
    # ------------------------------------------------------------------

    def _read_records(self) -> List[Dict[str, Any]]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise StorageFault(f"Log store {self._path} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise StorageFault(f"Cannot read log store {self._path}: {exc}") from exc

        if not isinstance(data, list):
            raise StorageFault(
                f"Log store {self._path} must hold a JSON array, found {type(data).__name__}"
            )
        return data

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        directory = self._path.parent
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(directory)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise StorageFault(f"Cannot write log store {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append_entry(self, entry: LogEntry) -> LogEntry:
        with tracer.start_as_current_span("log_store.append") as span, \
                STORE_LATENCY_SECONDS.labels(operation="append").time():
            span.set_attribute("logjournal.store.path", str(self._path))
            with self._lock:
                self._ensure_file()
                records = self._read_records()
                records.append(entry.model_dump(mode="json"))
                self._write_records(records)

            span.set_attribute("logjournal.store.size", len(records))
            logger.debug("Appended entry #%d to %s", len(records), self._path)
            return entry

    def read_all(self) -> List[LogEntry]:
        """
        Snapshot of every persisted entry in append order.
        Each call re-reads the file.
        """
        with tracer.start_as_current_span("log_store.read_all") as span, \
                STORE_LATENCY_SECONDS.labels(operation="read_all").time():
            span.set_attribute("logjournal.store.path", str(self._path))
            self.ensure_initialized()
            records = self._read_records()

            entries: List[LogEntry] = []
            for index, record in enumerate(records):
                try:
                    entries.append(LogEntry.model_validate(record))
                except ValidationError as exc:
                    raise StorageFault(
                        f"Corrupt record at index {index} in {self._path}: "
                        f"{exc.error_count()} validation error(s)"
                    ) from exc

            span.set_attribute("logjournal.store.size", len(entries))
            return entries
