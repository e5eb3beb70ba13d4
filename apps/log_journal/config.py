import os


class Settings:
    """
    Centralized log journal configuration.

    Backed by environment variables so the same build runs in dev / stage / prod:
      - LOG_JOURNAL_DATA_PATH: JSON file holding the persisted log entries
      - LOG_JOURNAL_LOG_LEVEL: service log level
      - LOG_JOURNAL_ENV: deployment environment (resource attribute)
      - LOG_JOURNAL_OTEL_ENABLED: export traces over OTLP
      - OTEL_EXPORTER_OTLP_ENDPOINT / OTEL_SERVICE_NAME: standard OTEL variables
    """

    def __init__(self) -> None:
        self.DATA_PATH: str = os.getenv("LOG_JOURNAL_DATA_PATH", "data/logs.json")
        self.LOG_LEVEL: str = os.getenv("LOG_JOURNAL_LOG_LEVEL", "INFO")
        self.ENVIRONMENT: str = os.getenv("LOG_JOURNAL_ENV", "dev")

        self.OTEL_ENABLED: bool = (
            os.getenv("LOG_JOURNAL_OTEL_ENABLED", "true").lower()
            in ("1", "true", "yes", "y")
        )
        self.OTEL_ENDPOINT: str = os.getenv(
            "OTEL_EXPORTER_OTLP_ENDPOINT",
            "http://localhost:4317",
        )
        self.SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "log-journal")


settings = Settings()
