"""
Cross-Artifact Comparison — wires extraction, detection and statement.

Given a short-window artifact (plus the entries its distribution is
computed from) and a long-window artifact carrying a pre-computed
distribution summary, decides whether a pattern persists across both
lenses and, if so, attaches the same persistence payload to both.

Every failure is reported as silence with a machine-readable reason.
Inputs are never mutated.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from observer import config
from observer.artifacts import InsightArtifact, ObserverDebug, PersistencePayload, SignatureDigest
from observer.dates import parse_instant
from observer.distribution import DistributionSummary, ReflectionEntry, compute_distribution
from observer.persistence import PersistenceWindow, detect_pattern_persistence
from observer.signature import make_pattern_signature, signature_input_from_summary
from observer.statement import to_persistence_statement

logger = logging.getLogger(__name__)

DistributionFn = Callable[[list[ReflectionEntry], int], DistributionSummary | None]


class SilenceReason:
    """Why a comparison produced no persistence."""

    MISSING_ARTIFACT = "Missing artifact"
    INVALID_HORIZONS = "Invalid horizons"
    MISSING_DISTRIBUTION = "Missing distribution data"
    SIGNATURES_FAILED = "Failed to compute signatures"
    NO_MATCH = "No pattern match detected"
    STATEMENT_FAILED = "Failed to generate statement"


@dataclass
class ComparisonOutcome:
    """Result of comparing a short and a long artifact."""

    short: InsightArtifact | None
    long: InsightArtifact | None
    debug: ObserverDebug
    persistence: PersistencePayload | None = None

    @property
    def matched(self) -> bool:
        return self.persistence is not None

    def artifact_for(self, horizon: str) -> InsightArtifact | None:
        if horizon == config.SHORT_HORIZON:
            return self.short
        if horizon == config.LONG_HORIZON:
            return self.long
        return None


# =============================================================================
# DISTRIBUTIONS
# =============================================================================


def entries_in_window(
    entries: list[ReflectionEntry],
    artifact: InsightArtifact,
) -> list[ReflectionEntry]:
    """Entries whose created_at lies within the artifact window, bounds inclusive."""
    start = parse_instant(artifact.window.start)
    end = parse_instant(artifact.window.end)
    if start is None or end is None:
        logger.warning(
            "Artifact %s has unparseable window (%r, %r)",
            artifact.id,
            artifact.window.start,
            artifact.window.end,
        )
        return []

    selected = []
    for entry in entries:
        created_at = parse_instant(entry.created_at)
        if created_at is not None and start <= created_at <= end:
            selected.append(entry)
    return selected


def short_window_distribution(
    artifact: InsightArtifact,
    entries: list[ReflectionEntry] | None,
    compute: DistributionFn = compute_distribution,
) -> DistributionSummary | None:
    """Compute the short artifact's distribution from the entries in its window."""
    if not entries:
        return None
    window_entries = entries_in_window(entries, artifact)
    if not window_entries:
        return None
    window_days = artifact.window.days or config.SHORT_WINDOW_DAYS
    return compute(window_entries, window_days)


def long_window_distribution(artifact: InsightArtifact) -> DistributionSummary | None:
    """Read the long artifact's pre-computed distribution."""
    return artifact.distribution


# =============================================================================
# COMPARISON
# =============================================================================


def _silence(
    short: InsightArtifact | None,
    long: InsightArtifact | None,
    debug: ObserverDebug,
    reason: str,
) -> ComparisonOutcome:
    debug.silence_reason = reason
    debug.match = False
    logger.debug("Observer silent: %s", reason)
    return ComparisonOutcome(short=short, long=long, debug=debug)


def compare_artifacts_for_persistence(
    short: InsightArtifact | None,
    long: InsightArtifact | None,
    entries: list[ReflectionEntry] | None = None,
    *,
    compute: DistributionFn = compute_distribution,
    debug: ObserverDebug | None = None,
    policy: str | None = None,
) -> ComparisonOutcome:
    """
    Compare a short-window and a long-window artifact for pattern persistence.

    Args:
        short: Artifact tagged with config.SHORT_HORIZON.
        long: Artifact tagged with config.LONG_HORIZON, carrying its distribution.
        entries: Entries the short-window distribution is computed from.
        compute: Distribution collaborator used for the short window.
        debug: Telemetry to fill in (cache fields are left untouched).
        policy: Unparseable-boundary policy for the overlap test.

    Returns:
        ComparisonOutcome. On a match both artifacts carry the identical
        persistence payload and the telemetry; otherwise they are returned
        unchanged and debug.silence_reason says why.
    """
    if debug is None:
        debug = ObserverDebug()
    debug.short_signature = None
    debug.long_signature = None
    debug.silence_reason = None

    if short is None or long is None:
        return _silence(short, long, debug, SilenceReason.MISSING_ARTIFACT)

    if short.horizon != config.SHORT_HORIZON or long.horizon != config.LONG_HORIZON:
        return _silence(short, long, debug, SilenceReason.INVALID_HORIZONS)

    short_distribution = short_window_distribution(short, entries, compute)
    long_distribution = long_window_distribution(long)
    if short_distribution is None or long_distribution is None:
        return _silence(short, long, debug, SilenceReason.MISSING_DISTRIBUTION)

    short_input = signature_input_from_summary(short_distribution)
    long_input = signature_input_from_summary(long_distribution, long.window_classification)
    short_signature = make_pattern_signature(short_input) if short_input else None
    long_signature = make_pattern_signature(long_input) if long_input else None

    debug.short_signature = SignatureDigest.of(short_signature)
    debug.long_signature = SignatureDigest.of(long_signature)

    if short_signature is None or long_signature is None:
        return _silence(short, long, debug, SilenceReason.SIGNATURES_FAILED)

    windows = [
        PersistenceWindow(
            lens=short.horizon,
            window_start=short.window.start,
            window_end=short.window.end,
            signature=short_signature,
        ),
        PersistenceWindow(
            lens=long.horizon,
            window_start=long.window.start,
            window_end=long.window.end,
            signature=long_signature,
        ),
    ]

    result = detect_pattern_persistence(windows, policy=policy)
    if result is None:
        return _silence(short, long, debug, SilenceReason.NO_MATCH)

    statement = to_persistence_statement(result)
    if statement is None:
        return _silence(short, long, debug, SilenceReason.STATEMENT_FAILED)

    debug.match = True
    payload = PersistencePayload.from_result(result, statement)
    logger.info("Pattern persistence detected across %s", " and ".join(result.lenses))

    return ComparisonOutcome(
        short=short.with_persistence(payload).with_observer_debug(debug),
        long=long.with_persistence(payload).with_observer_debug(debug),
        debug=debug,
        persistence=payload,
    )
