"""
Distribution Summary — per-window activity statistics.

Classifies how entries distribute across the days of one window into
normal, lognormal or power law, and reports the figures a pattern
signature is built from (spike ratio, top-decile share, daily counts).

This is the default implementation of the statistics collaborator the
orchestrator calls for the short window. Any callable with the signature
of compute_distribution() can replace it.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from statistics import mean, median, pvariance

from observer.dates import parse_instant, utc_day_key

logger = logging.getLogger(__name__)

# Classification heuristics
POWERLAW_SHARE = 0.6
POWERLAW_SKEW = 2.0
POWERLAW_GAP_VARIANCE = 100.0
LOGNORMAL_SHARE = 0.4
LOGNORMAL_SKEW = 0.8
LOGNORMAL_GAP_VARIANCE = 10.0
NORMAL_SHARE = 0.3
NORMAL_SKEW = 0.4

TOP_DAYS_FRACTION = 0.1
TOP_SPIKE_DATES = 3


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class ReflectionEntry:
    """A timestamped journal entry."""

    id: str
    created_at: str  # ISO 8601
    plaintext: str = ""


@dataclass(frozen=True)
class DailyCount:
    """Number of entries on one calendar day."""

    date: str  # YYYY-MM-DD
    count: int

    def to_dict(self) -> dict:
        return {"date": self.date, "count": self.count}


@dataclass
class DistributionSummary:
    """Distribution statistics for one window."""

    classification: str | None  # 'normal' | 'lognormal' | 'powerlaw'
    spike_ratio: float  # max day / median day
    top10_percent_days_share: float  # 0.0 to 1.0
    daily_counts: list[DailyCount] = field(default_factory=list)
    total_entries: int = 0
    window_days: int = 0
    fitted_buckets: dict[str, float] = field(default_factory=dict)
    skew: float = 0.0
    frequency_per_day: float = 0.0
    magnitude_proxy: float = 0.0  # average word count
    recency_gaps: list[float] = field(default_factory=list)  # days between entries
    top_spike_dates: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "classification": self.classification,
            "spike_ratio": round(self.spike_ratio, 4),
            "top10_percent_days_share": round(self.top10_percent_days_share, 4),
            "daily_counts": [d.to_dict() for d in self.daily_counts],
            "total_entries": self.total_entries,
            "window_days": self.window_days,
            "fitted_buckets": self.fitted_buckets,
            "skew": round(self.skew, 4),
            "frequency_per_day": round(self.frequency_per_day, 4),
            "magnitude_proxy": round(self.magnitude_proxy, 2),
            "recency_gaps": [round(g, 4) for g in self.recency_gaps],
            "top_spike_dates": self.top_spike_dates,
        }


# =============================================================================
# STATISTICS
# =============================================================================


def compute_skew(counts: list[int]) -> float:
    """Population skewness; 0.0 for flat or empty input."""
    if not counts:
        return 0.0
    avg = mean(counts)
    std = math.sqrt(pvariance(counts, avg))
    if std == 0:
        return 0.0
    return mean((c - avg) ** 3 for c in counts) / std**3


def compute_top_share(counts: list[int]) -> float:
    """Share of total activity held by the busiest 10% of days (at least one day)."""
    total = sum(counts)
    if total == 0 or not counts:
        return 0.0
    ranked = sorted(counts, reverse=True)
    top_n = max(1, math.ceil(len(ranked) * TOP_DAYS_FRACTION))
    return sum(ranked[:top_n]) / total


def compute_spike_ratio(counts: list[int]) -> float:
    """Busiest day over the median active day."""
    if not counts:
        return 0.0
    mid = median(counts)
    if mid <= 0:
        return 0.0
    return max(counts) / mid


def compute_recency_gaps(instants: list) -> list[float]:
    """Days between consecutive entries, oldest first."""
    ordered = sorted(instants)
    return [
        (later - earlier).total_seconds() / 86400
        for earlier, later in zip(ordered, ordered[1:], strict=False)
    ]


def classify_distribution(skew: float, top_share: float, gap_variance: float) -> str:
    """
    Classify a window by skew, concentration and gap variance.

    - Power law: very high concentration, extreme skew or huge gap variance
    - Log normal: noticeable right skew, moderate concentration or gap variance
    - Normal: low skew, low concentration and low gap variance
    - Edge cases default to log normal
    """
    if top_share >= POWERLAW_SHARE or skew >= POWERLAW_SKEW or gap_variance > POWERLAW_GAP_VARIANCE:
        return "powerlaw"
    if (
        skew >= LOGNORMAL_SKEW
        or top_share >= LOGNORMAL_SHARE
        or gap_variance > LOGNORMAL_GAP_VARIANCE
    ):
        return "lognormal"
    if abs(skew) <= NORMAL_SKEW and top_share <= NORMAL_SHARE:
        return "normal"
    return "lognormal"


def _word_count(plaintext: str) -> int:
    if not plaintext or not isinstance(plaintext, str):
        return 0
    return len(plaintext.split())


def compute_distribution(
    entries: list[ReflectionEntry],
    window_days: int,
) -> DistributionSummary | None:
    """
    Compute the distribution summary of the entries in one window.

    Entries are grouped by UTC calendar day. Entries whose timestamp cannot
    be parsed are skipped. Returns None when no entry is usable.
    """
    instants = []
    words = []
    for entry in entries:
        instant = parse_instant(entry.created_at)
        if instant is None:
            logger.debug("Skipping entry %s with unparseable created_at", entry.id)
            continue
        instants.append(instant)
        words.append(_word_count(entry.plaintext))

    if not instants:
        return None

    by_day = Counter(utc_day_key(i) for i in instants)
    daily_counts = [DailyCount(date=d, count=by_day[d]) for d in sorted(by_day)]
    counts = [d.count for d in daily_counts]

    skew = compute_skew(counts)
    top_share = compute_top_share(counts)
    gaps = compute_recency_gaps(instants)
    gap_variance = pvariance(gaps) if len(gaps) > 1 else 0.0
    classification = classify_distribution(skew, top_share, gap_variance)

    busiest = sorted(daily_counts, key=lambda d: d.date, reverse=True)
    busiest.sort(key=lambda d: d.count, reverse=True)

    return DistributionSummary(
        classification=classification,
        spike_ratio=compute_spike_ratio(counts),
        top10_percent_days_share=top_share,
        daily_counts=daily_counts,
        total_entries=len(instants),
        window_days=window_days,
        fitted_buckets={
            fit: 1.0 if fit == classification else 0.0
            for fit in ("normal", "lognormal", "powerlaw")
        },
        skew=skew,
        frequency_per_day=len(instants) / window_days if window_days > 0 else 0.0,
        magnitude_proxy=mean(words),
        recency_gaps=gaps,
        top_spike_dates=[d.date for d in busiest[:TOP_SPIKE_DATES]],
    )
