# apps/log_journal/app.py

import logging

from fastapi import FastAPI, Request

from apps.log_journal.config import settings
from apps.log_journal.dependencies import get_log_store
from apps.log_journal.routers.logs_router import router as logs_router
from apps.log_journal.routers.metrics_router import router as metrics_router
from apps.log_journal.services.log_store import StorageFault
from apps.log_journal.utils.metrics import REQUEST_COUNTER
from apps.log_journal.utils.otel import setup_otel

logger = logging.getLogger("logjournal.app")


app = FastAPI(
    title="Log Journal",
    description="Ingests structured log entries and serves filtered queries",
    version="0.1.0",
)

# ------------------------------------------------------------------
# OpenTelemetry + logging
# ------------------------------------------------------------------
setup_otel(app, settings)


# ------------------------------------------------------------------
# Prometheus
# ------------------------------------------------------------------
@app.middleware("http")
async def prometheus_middleware(request: Request, call_next):
    REQUEST_COUNTER.labels(method=request.method, endpoint=request.url.path).inc()
    return await call_next(request)


app.include_router(metrics_router)


# ------------------------------------------------------------------
# Business Routers
# ------------------------------------------------------------------
app.include_router(logs_router)


# ------------------------------------------------------------------
# Lifecycle Events
# ------------------------------------------------------------------
@app.on_event("startup")
def startup_event():
    """Make sure the backing file exists before the first request."""
    store = app.dependency_overrides.get(get_log_store, get_log_store)()
    try:
        store.ensure_initialized()
    except StorageFault:
        # Requests will surface the fault as 500; keep the process up.
        logger.exception("Log store initialization failed at %s", store.path)
        return
    logger.info("Log journal ready, store=%s", store.path)


@app.get("/healthz")
def health_check():
    return {"status": "ok", "service": "log-journal"}


if __name__ == "__main__":
    import os

    import uvicorn
    uvicorn.run(
        "apps.log_journal.app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        reload=False,
    )
