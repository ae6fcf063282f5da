"""
Pattern Signature — structural fingerprint of activity across one window.

A signature describes how activity distributes across a time window
(distribution shape, concentration, active weekdays, spike sensitivity)
without interpreting it. Insufficient or malformed input yields None,
which contributes to the engine's overall silence.
"""

import logging
import math
from dataclasses import dataclass, field

from observer import config
from observer.dates import weekday_index
from observer.distribution import DailyCount, DistributionSummary

logger = logging.getLogger(__name__)


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class PatternSignature:
    """Continuous pattern signature for one window."""

    observed_distribution_fit: str  # 'normal' | 'lognormal' | 'powerlaw'
    concentration_ratio: float  # peak day over typical day
    day_of_week_pattern: frozenset[int]  # 0 = Sunday ... 6 = Saturday
    top_percentile_share: float  # 0.0 to 1.0
    relative_spike_threshold: float = config.DEFAULT_SPIKE_THRESHOLD

    def to_dict(self) -> dict:
        return {
            "observed_distribution_fit": self.observed_distribution_fit,
            "concentration_ratio": self.concentration_ratio,
            "day_of_week_pattern": sorted(self.day_of_week_pattern),
            "top_percentile_share": self.top_percentile_share,
            "relative_spike_threshold": self.relative_spike_threshold,
        }


@dataclass
class PatternSignatureInput:
    """Window-level distribution metrics a signature is computed from."""

    distribution_classification: str | None
    spike_ratio: float | None  # max day / median day
    top10_percent_days_share: float | None
    daily_counts: list[DailyCount] = field(default_factory=list)
    spike_threshold: float | None = None


# =============================================================================
# EXTRACTION
# =============================================================================


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def active_weekdays(daily_counts: list[DailyCount]) -> frozenset[int]:
    """Weekday indices of days with at least one entry (UTC convention)."""
    days = set()
    for day in daily_counts:
        if day.count <= 0:
            continue
        index = weekday_index(day.date)
        if index is None:
            logger.debug("Skipping unparseable daily count date %r", day.date)
            continue
        days.add(index)
    return frozenset(days)


def make_pattern_signature(signature_input: PatternSignatureInput) -> PatternSignature | None:
    """
    Compute a pattern signature from window-level distribution metrics.

    Returns None when:
    - the distribution classification is missing or unknown
    - spike_ratio is not a finite number > 0
    - top10_percent_days_share is not a finite number within [0, 1]
    - no daily count > 0 carries a parseable date
    """
    classification = signature_input.distribution_classification
    if not classification or classification not in config.DISTRIBUTION_FITS:
        return None

    spike_ratio = signature_input.spike_ratio
    if not _is_finite_number(spike_ratio) or spike_ratio <= 0:
        return None

    share = signature_input.top10_percent_days_share
    if not _is_finite_number(share) or share < 0 or share > 1:
        return None

    days = active_weekdays(signature_input.daily_counts or [])
    if not days:
        return None

    spike_threshold = signature_input.spike_threshold
    if spike_threshold is None:
        spike_threshold = config.DEFAULT_SPIKE_THRESHOLD
    elif not _is_finite_number(spike_threshold) or spike_threshold <= 0:
        return None

    return PatternSignature(
        observed_distribution_fit=classification,
        # Concentration is the spike ratio by definition.
        concentration_ratio=float(spike_ratio),
        day_of_week_pattern=days,
        top_percentile_share=float(share),
        relative_spike_threshold=float(spike_threshold),
    )


def infer_classification(fitted_buckets: dict[str, float]) -> str | None:
    """
    Pick the fitted bucket with the strictly highest share.

    Ties keep the earlier class in DISTRIBUTION_FITS order. All-zero
    shares yield None.
    """
    best = None
    best_share = 0.0
    for fit in config.DISTRIBUTION_FITS:
        share = fitted_buckets.get(fit, 0.0) or 0.0
        if share > best_share:
            best = fit
            best_share = share
    return best


def signature_input_from_summary(
    summary: DistributionSummary | None,
    window_classification: str | None = None,
) -> PatternSignatureInput | None:
    """
    Convert a distribution summary into signature input.

    The classification comes from the pre-computed window classification
    when one is supplied, else from the summary, else from its fitted buckets.
    """
    if summary is None or summary.total_entries == 0:
        return None

    classification = (
        window_classification
        or summary.classification
        or infer_classification(summary.fitted_buckets)
    )
    if not classification:
        return None

    return PatternSignatureInput(
        distribution_classification=classification,
        spike_ratio=summary.spike_ratio,
        top10_percent_days_share=summary.top10_percent_days_share,
        daily_counts=list(summary.daily_counts),
        spike_threshold=config.DEFAULT_SPIKE_THRESHOLD,
    )
