from __future__ import annotations

import os
from pathlib import Path

APP_ENV_THRESHOLDS = "OBSERVER_THRESHOLDS_PATH"


def package_root() -> Path:
    """
    Directory of the observer package.
    Holds the bundled thresholds.yaml.
    """
    return Path(__file__).parent.resolve()


def thresholds_path() -> Path:
    """
    Threshold config path.

    Resolution order:
    1. OBSERVER_THRESHOLDS_PATH env var (explicit override)
    2. observer/thresholds.yaml (bundled default)
    """
    if os.environ.get(APP_ENV_THRESHOLDS):
        return Path(os.environ[APP_ENV_THRESHOLDS]).expanduser().resolve()
    return package_root() / "thresholds.yaml"
