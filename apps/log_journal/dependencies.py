from functools import lru_cache

from .config import settings
from .services.log_store import LogStore


@lru_cache(maxsize=1)
def get_log_store() -> LogStore:
    """Shared store for the configured data path (overridable in tests)."""
    return LogStore(settings.DATA_PATH)
