"""
Seed the log journal with sample entries.

Entries go through the same validator and store used by POST /logs, so
existing data is kept and every sample is appended.

Usage:
    python -m apps.log_journal.tools.seed_logs
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from apps.log_journal.config import settings
from apps.log_journal.services.entry_validator import validate_entry
from apps.log_journal.services.log_store import LogStore


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_sample_logs(now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Sample entries, 5 to 40 minutes before `now`, newest first."""
    now = now or datetime.now(timezone.utc)

    def ago(minutes: int) -> str:
        return _iso(now - timedelta(minutes=minutes))

    return [
        {
            "level": "error",
            "message": "Database connection failed - timeout after 30 seconds",
            "resourceId": "server-1234",
            "timestamp": ago(5),
            "traceId": "abc-xyz-123",
            "spanId": "span-456",
            "commit": "5e5342f",
            "metadata": {
                "parentResourceId": "server-5678",
                "errorCode": "DB_CONNECTION_TIMEOUT",
                "retryCount": 3,
            },
        },
        {
            "level": "warn",
            "message": "High memory usage detected on server",
            "resourceId": "server-5678",
            "timestamp": ago(10),
            "traceId": "def-uvw-789",
            "spanId": "span-789",
            "commit": "7a8b9c2",
            "metadata": {
                "memoryUsage": "85%",
                "threshold": "80%",
                "availableMemory": "2.1GB",
            },
        },
        {
            "level": "info",
            "message": "User authentication successful",
            "resourceId": "auth-service-01",
            "timestamp": ago(15),
            "traceId": "ghi-rst-456",
            "spanId": "span-123",
            "commit": "9d1e2f3",
            "metadata": {
                "userId": "user-12345",
                "loginMethod": "oauth",
                "provider": "google",
            },
        },
        {
            "level": "debug",
            "message": "Cache hit for user profile data",
            "resourceId": "cache-server-02",
            "timestamp": ago(20),
            "traceId": "jkl-mno-789",
            "spanId": "span-321",
            "commit": "4g5h6i7",
            "metadata": {
                "cacheKey": "user:12345:profile",
                "ttl": 3600,
                "hitRate": "94.2%",
            },
        },
        {
            "level": "error",
            "message": "Payment processing failed - invalid card number",
            "resourceId": "payment-service-03",
            "timestamp": ago(25),
            "traceId": "mno-pqr-012",
            "spanId": "span-654",
            "commit": "8h9i0j1",
            "metadata": {
                "transactionId": "txn-98765",
                "errorCode": "INVALID_CARD",
                "amount": 99.99,
                "currency": "USD",
            },
        },
        {
            "level": "info",
            "message": "Scheduled backup completed successfully",
            "resourceId": "backup-service-04",
            "timestamp": ago(30),
            "traceId": "stu-vwx-345",
            "spanId": "span-987",
            "commit": "2k3l4m5",
            "metadata": {
                "backupSize": "2.3GB",
                "duration": "45 minutes",
                "destination": "s3://backups/daily",
            },
        },
        {
            "level": "warn",
            "message": "API rate limit approaching for client",
            "resourceId": "api-gateway-05",
            "timestamp": ago(35),
            "traceId": "yzx-abc-678",
            "spanId": "span-147",
            "commit": "6n7o8p9",
            "metadata": {
                "clientId": "client-54321",
                "currentRate": "950/hour",
                "limit": "1000/hour",
                "resetTime": "2023-09-15T09:00:00Z",
            },
        },
        {
            "level": "debug",
            "message": "SQL query executed successfully",
            "resourceId": "database-primary",
            "timestamp": ago(40),
            "traceId": "def-ghi-901",
            "spanId": "span-258",
            "commit": "0q1r2s3",
            "metadata": {
                "query": "SELECT * FROM users WHERE active = true",
                "executionTime": "23ms",
                "rowsReturned": 1247,
            },
        },
    ]


def seed_logs(store: LogStore, now: Optional[datetime] = None) -> int:
    samples = build_sample_logs(now)
    for sample in samples:
        store.append_entry(validate_entry(sample))
    return len(samples)


def main() -> None:
    store = LogStore(settings.DATA_PATH)
    count = seed_logs(store)
    print(f"Seeded {count} log entries to {store.path}")
    print("Start the service and query GET /logs to see them.")


if __name__ == "__main__":
    main()
