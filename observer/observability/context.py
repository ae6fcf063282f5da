"""
Observation context management with context-local storage.
"""

import contextvars
from typing import Optional

# Context variable for the pairing key currently being evaluated
_cache_key_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "observer_cache_key", default=None
)


def get_cache_key() -> Optional[str]:
    """Get the current pairing key from context."""
    return _cache_key_var.get()


def set_cache_key(cache_key: str) -> contextvars.Token:
    """Set the pairing key in context. Returns token for reset."""
    return _cache_key_var.set(cache_key)


class ObservationContext:
    """
    Context manager for one pairing evaluation.

    Usage:
        with ObservationContext("wallet-1::2024-12-31"):
            logger.info("Comparing halves")
            # All logs within this block carry the cache key
    """

    def __init__(self, cache_key: str):
        self.cache_key = cache_key
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "ObservationContext":
        self._token = set_cache_key(self.cache_key)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _cache_key_var.reset(self._token)
            self._token = None
