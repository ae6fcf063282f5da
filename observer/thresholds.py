"""
Thresholds Module — Signature Binning Cutoffs with Justifications.

Every cutoff used to project a continuous PatternSignature onto coarse,
ordinal bands is named here. Values can be overridden in thresholds.yaml
(see paths.thresholds_path()); a missing or unreadable file falls back to
the defaults below.

THRESHOLD JUSTIFICATIONS:
========================

SHARE_LOW_MAX = 0.3 / SHARE_MEDIUM_MAX = 0.6
  - Band of topPercentileShare: < 0.3 low, 0.3-0.6 medium, > 0.6 high.
  - Why: Identity must survive scale changes between a week and a year.
    Three wide bands keep 0.31 vs 0.33 from breaking sameness.
  - Used by: same_pattern (the canonical identity rule).

SPIKE_TOLERANCE = 0.1
  - Maximum |delta| between two relativeSpikeThreshold values that still
    counts as "the same spike definition".
  - Why: Thresholds are configured, not measured; 0.1 absorbs float noise.

CONCENTRATION_MEDIUM_MIN = 1.5 / CONCENTRATION_HIGH_MIN = 3.0
  - Band of concentrationRatio (peak day over typical day).
  - Descriptive only: shown in coarse projections, not used for identity.

SPIKE_MEDIUM_MIN = 1.5 / SPIKE_HIGH_MIN = 2.5
  - Band of relativeSpikeThreshold.
  - Descriptive only: shown in coarse projections, not used for identity.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from observer import paths

logger = logging.getLogger(__name__)


@dataclass
class ThresholdConfig:
    """Configuration for a single threshold."""

    name: str
    value: float
    description: str
    justification: str


# =============================================================================
# THRESHOLD DEFINITIONS
# =============================================================================

DEFAULT_THRESHOLDS = {
    "share_low_max": ThresholdConfig(
        name="share_low_max",
        value=0.3,
        description="topPercentileShare below this is the low band",
        justification="Coarse bands keep identity stable under scale changes",
    ),
    "share_medium_max": ThresholdConfig(
        name="share_medium_max",
        value=0.6,
        description="topPercentileShare up to and including this is the medium band",
        justification="Above 60% of activity on the busiest decile is a concentrated window",
    ),
    "spike_tolerance": ThresholdConfig(
        name="spike_tolerance",
        value=0.1,
        description="Maximum spike threshold difference for two signatures to match",
        justification="Spike thresholds are configured values; 0.1 absorbs float noise",
    ),
    "concentration_medium_min": ThresholdConfig(
        name="concentration_medium_min",
        value=1.5,
        description="concentrationRatio at or above this is the medium band",
        justification="Peak day at 1.5x the typical day is the first visible spike",
    ),
    "concentration_high_min": ThresholdConfig(
        name="concentration_high_min",
        value=3.0,
        description="concentrationRatio at or above this is the high band",
        justification="Peak day at 3x the typical day dominates the window",
    ),
    "spike_medium_min": ThresholdConfig(
        name="spike_medium_min",
        value=1.5,
        description="relativeSpikeThreshold at or above this is the medium band",
        justification="Matches the default 2.0 multiplier into the medium band",
    ),
    "spike_high_min": ThresholdConfig(
        name="spike_high_min",
        value=2.5,
        description="relativeSpikeThreshold at or above this is the high band",
        justification="Multipliers past 2.5 only flag extreme days",
    ),
}


# =============================================================================
# THRESHOLD ACCESS
# =============================================================================


def _load_overrides(config_path: Path) -> dict:
    """Load the binning section of the YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.debug("Threshold config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load threshold config %s: %s", config_path, exc)
        return {}
    if not isinstance(config, dict):
        logger.error("Threshold config %s is not a mapping, using defaults", config_path)
        return {}
    return config.get("binning", {}) or {}


def load_thresholds(config_path: Path | None = None) -> dict[str, float]:
    """
    Get binning thresholds, defaults overlaid with YAML overrides.

    Unknown keys and non-numeric values in the file are ignored with a warning.
    """
    if config_path is None:
        config_path = paths.thresholds_path()

    thresholds = {k: v.value for k, v in DEFAULT_THRESHOLDS.items()}

    for name, value in _load_overrides(config_path).items():
        if name not in DEFAULT_THRESHOLDS:
            logger.warning("Ignoring unknown threshold %r in %s", name, config_path)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Ignoring non-numeric threshold %s=%r", name, value)
            continue
        thresholds[name] = float(value)

    if thresholds["share_low_max"] > thresholds["share_medium_max"]:
        logger.error("share_low_max exceeds share_medium_max, reverting share bands to defaults")
        thresholds["share_low_max"] = DEFAULT_THRESHOLDS["share_low_max"].value
        thresholds["share_medium_max"] = DEFAULT_THRESHOLDS["share_medium_max"].value

    return thresholds


THRESHOLDS = load_thresholds()


def get_threshold(name: str) -> float:
    """Get a single loaded threshold value."""
    return THRESHOLDS[name]


def reload_thresholds(config_path: Path | None = None) -> dict[str, float]:
    """Reload thresholds from config file (call after editing thresholds.yaml)."""
    THRESHOLDS.clear()
    THRESHOLDS.update(load_thresholds(config_path))
    return THRESHOLDS
