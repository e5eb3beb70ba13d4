"""
OpenTelemetry + logging setup for the log journal.

- Configures the OTLP gRPC exporter to the collector (when enabled).
- Instruments FastAPI and the stdlib logging module.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ..config import Settings

logger = logging.getLogger("logjournal.otel")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def setup_otel(app: FastAPI, settings: Settings) -> None:
    """
    Configure tracing for the service.

    With LOG_JOURNAL_OTEL_ENABLED=false only logging is configured; spans
    created by the code then go to the no-op default tracer.
    """
    configure_logging(settings.LOG_LEVEL)

    if not settings.OTEL_ENABLED:
        logger.info("[OTEL] Tracing disabled")
        return

    # OTLP gRPC exporter expects host:port (no scheme)
    endpoint = settings.OTEL_ENDPOINT.replace("http://", "").replace("https://", "")

    resource = Resource.create(
        {
            "service.name": settings.SERVICE_NAME,
            "deployment.environment": settings.ENVIRONMENT,
            "service.version": "0.1.0",
            "logjournal.component": "api",
        }
    )

    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)

    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    )

    FastAPIInstrumentor().instrument_app(app)
    LoggingInstrumentor().instrument(set_logging_format=False)

    logger.info("[OTEL] Tracing initialized, exporting to %s", endpoint)
