"""
Observability module: structured logging and observation context.

Usage:
    from observer.observability import configure_logging, get_logger, ObservationContext

    configure_logging("DEBUG", json_format=True)
    logger = get_logger(__name__)

    with ObservationContext("wallet-1::2024-12-31"):
        logger.info("Comparing halves")
"""

from .context import ObservationContext, get_cache_key
from .logging import HumanFormatter, JSONFormatter, configure_logging, get_logger

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Context
    "ObservationContext",
    "get_cache_key",
]
