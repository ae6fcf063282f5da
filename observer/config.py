"""
Centralized configuration for the Observer engine.

All values that may vary by deployment belong here.
Override via environment variables where marked.
"""

import os

# ============================================================
# Lenses / horizons
# ============================================================

SHORT_HORIZON: str = os.environ.get("OBSERVER_SHORT_HORIZON", "weekly")
"""Horizon tag of the short-window artifact (also its lens name)."""

LONG_HORIZON: str = os.environ.get("OBSERVER_LONG_HORIZON", "yearly")
"""Horizon tag of the long-window artifact (also its lens name)."""

SHORT_WINDOW_DAYS: int = int(os.environ.get("OBSERVER_SHORT_WINDOW_DAYS", "7"))
"""Window length used when the short artifact does not declare one."""

# ============================================================
# Signatures
# ============================================================

DEFAULT_SPIKE_THRESHOLD: float = float(os.environ.get("OBSERVER_DEFAULT_SPIKE_THRESHOLD", "2.0"))
"""Multiplier over the window baseline that counts as a spike."""

DISTRIBUTION_FITS: tuple[str, ...] = ("normal", "lognormal", "powerlaw")
"""Recognised distribution classes, in tie-break order."""

# ============================================================
# Overlap policy
# ============================================================

FAIL_OPEN = "fail_open"
FAIL_SAFE = "fail_safe"

UNPARSEABLE_WINDOW_POLICY: str = os.environ.get("OBSERVER_UNPARSEABLE_WINDOW_POLICY", FAIL_OPEN)
"""
How the overlap test treats window boundaries that cannot be parsed.

fail_open: the windows are considered non-overlapping (pair may qualify).
fail_safe: the windows are considered overlapping (pair is excluded).
"""

# ============================================================
# Pairing cache
# ============================================================

ANONYMOUS_IDENTITY: str = os.environ.get("OBSERVER_ANONYMOUS_IDENTITY", "anonymous")
"""Identity used in cache keys when the caller supplies none."""

CACHE_KEY_SEPARATOR: str = "::"
"""Separator between identity and dataset fingerprint in cache keys."""

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("OBSERVER_LOG_LEVEL", "INFO")
"""Default level for configure_logging()."""
