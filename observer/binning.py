"""
Signature Binning — coarse, ordinal projection and the identity rule.

Two signatures describe the same pattern iff:
- same observed distribution fit
- identical day-of-week sets (set equality, order irrelevant)
- same top-percentile-share band (low < 0.3 <= medium <= 0.6 < high)
- relative spike thresholds within the spike tolerance (0.1)

Absolute magnitudes and time direction do not matter. Cutoffs live in
observer.thresholds. This is the only identity rule in the engine.
"""

from dataclasses import dataclass
from enum import Enum

from observer import config
from observer.signature import PatternSignature
from observer.thresholds import get_threshold

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class Band(Enum):
    """Coarse ordinal band."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _BAND_RANK[self]


_BAND_RANK = {Band.LOW: 0, Band.MEDIUM: 1, Band.HIGH: 2}


@dataclass(frozen=True)
class CoarsePatternSignature:
    """Ordinal projection of a PatternSignature."""

    distribution_class: str
    concentration_band: Band
    day_of_week_shape: str  # e.g. "Sun,Mon,Fri"
    top_percentile_share_band: Band
    spike_threshold_band: Band

    def to_dict(self) -> dict:
        return {
            "distribution_class": self.distribution_class,
            "concentration_band": self.concentration_band.value,
            "day_of_week_shape": self.day_of_week_shape,
            "top_percentile_share_band": self.top_percentile_share_band.value,
            "spike_threshold_band": self.spike_threshold_band.value,
        }


# =============================================================================
# BANDS
# =============================================================================


def share_band(top_percentile_share: float) -> Band:
    """Band of the top-decile share. Used by the identity rule."""
    if top_percentile_share < get_threshold("share_low_max"):
        return Band.LOW
    if top_percentile_share <= get_threshold("share_medium_max"):
        return Band.MEDIUM
    return Band.HIGH


def concentration_band(concentration_ratio: float) -> Band:
    """Band of the peak-to-typical ratio. Descriptive only."""
    if concentration_ratio >= get_threshold("concentration_high_min"):
        return Band.HIGH
    if concentration_ratio >= get_threshold("concentration_medium_min"):
        return Band.MEDIUM
    return Band.LOW


def spike_threshold_band(relative_spike_threshold: float) -> Band:
    """Band of the spike multiplier. Descriptive only."""
    if relative_spike_threshold >= get_threshold("spike_high_min"):
        return Band.HIGH
    if relative_spike_threshold >= get_threshold("spike_medium_min"):
        return Band.MEDIUM
    return Band.LOW


def day_of_week_shape(days: frozenset[int]) -> str:
    """Serialize an active-day set in Sunday-first order."""
    return ",".join(DAY_NAMES[d] for d in sorted(days) if 0 <= d < len(DAY_NAMES))


def to_coarse_signature(signature: PatternSignature) -> CoarsePatternSignature:
    """Project a continuous signature onto coarse bands."""
    return CoarsePatternSignature(
        distribution_class=signature.observed_distribution_fit,
        concentration_band=concentration_band(signature.concentration_ratio),
        day_of_week_shape=day_of_week_shape(signature.day_of_week_pattern),
        top_percentile_share_band=share_band(signature.top_percentile_share),
        spike_threshold_band=spike_threshold_band(signature.relative_spike_threshold),
    )


# =============================================================================
# IDENTITY
# =============================================================================


def same_pattern(a: PatternSignature, b: PatternSignature) -> bool:
    """Check whether two signatures represent the same pattern. Symmetric."""
    if a.observed_distribution_fit != b.observed_distribution_fit:
        return False

    if frozenset(a.day_of_week_pattern) != frozenset(b.day_of_week_pattern):
        return False

    if share_band(a.top_percentile_share) != share_band(b.top_percentile_share):
        return False

    # A difference equal to the tolerance matches.
    delta = round(abs(a.relative_spike_threshold - b.relative_spike_threshold), 9)
    return delta <= get_threshold("spike_tolerance")


def _fit_rank(fit: str) -> tuple[int, str]:
    if fit in config.DISTRIBUTION_FITS:
        return (config.DISTRIBUTION_FITS.index(fit), fit)
    return (len(config.DISTRIBUTION_FITS), fit)


def signature_sort_key(signature: PatternSignature) -> tuple:
    """
    Total order over signatures, compared field by field.

    Coarse fields first, raw values last so distinct signatures never tie.
    """
    coarse = to_coarse_signature(signature)
    return (
        _fit_rank(coarse.distribution_class),
        coarse.top_percentile_share_band.rank,
        tuple(sorted(signature.day_of_week_pattern)),
        coarse.concentration_band.rank,
        coarse.spike_threshold_band.rank,
        signature.top_percentile_share,
        signature.concentration_ratio,
        signature.relative_spike_threshold,
    )
