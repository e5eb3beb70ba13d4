from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Keep tests offline: no OTLP exporter.
os.environ.setdefault("LOG_JOURNAL_OTEL_ENABLED", "false")

from fastapi.testclient import TestClient  # noqa: E402

from apps.log_journal.app import app  # noqa: E402
from apps.log_journal.dependencies import get_log_store  # noqa: E402
from apps.log_journal.services.log_store import LogStore  # noqa: E402


@pytest.fixture
def make_entry() -> Callable[..., Dict[str, Any]]:
    def _make(**overrides: Any) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "level": "info",
            "message": "User authentication successful",
            "resourceId": "auth-service-01",
            "timestamp": "2023-09-15T08:00:00Z",
            "traceId": "ghi-rst-456",
            "spanId": "span-123",
            "commit": "9d1e2f3",
            "metadata": {"userId": "user-12345", "loginMethod": "oauth"},
        }
        entry.update(overrides)
        return entry

    return _make


@pytest.fixture
def store(tmp_path: Path) -> LogStore:
    return LogStore(tmp_path / "logs.json")


@pytest.fixture
def client(store: LogStore):
    app.dependency_overrides[get_log_store] = lambda: store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
