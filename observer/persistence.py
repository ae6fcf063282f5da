"""
Pattern Persistence — cross-lens, non-overlapping signature matching.

Silence unless all of the following hold:
- at least two windows
- at least two windows carry a signature
- at least one pair of signed windows has different lenses, windows that
  share no instant, and signatures that are the same pattern

When several pairs qualify, the smallest under a field-by-field total order
is returned, so the result never depends on input order.
"""

import logging
from dataclasses import dataclass

from observer import config
from observer.binning import same_pattern, signature_sort_key
from observer.dates import parse_instant
from observer.signature import PatternSignature

logger = logging.getLogger(__name__)


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class PersistenceWindow:
    """One lens window and the signature computed for it."""

    lens: str
    window_start: str  # ISO 8601
    window_end: str  # ISO 8601
    signature: PatternSignature | None


@dataclass(frozen=True)
class PatternPersistenceResult:
    """Minimal result of a successful detection."""

    signature: PatternSignature
    lenses: tuple[str, ...]  # exactly two when produced by detection
    window_starts: tuple[str, ...]
    window_ends: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "signature": self.signature.to_dict(),
            "lenses": list(self.lenses),
            "window_starts": list(self.window_starts),
            "window_ends": list(self.window_ends),
        }


# =============================================================================
# OVERLAP
# =============================================================================


def windows_overlap(
    start_a: str,
    end_a: str,
    start_b: str,
    end_b: str,
    policy: str | None = None,
) -> bool:
    """
    Check whether two closed ranges share any instant.

    Ranges overlap if start_a <= end_b and start_b <= end_a. When a boundary
    cannot be parsed the answer follows the unparseable-window policy:
    fail_open reports no overlap, fail_safe reports overlap.
    """
    bounds = [parse_instant(v) for v in (start_a, end_a, start_b, end_b)]
    if any(b is None for b in bounds):
        policy = policy or config.UNPARSEABLE_WINDOW_POLICY
        logger.warning(
            "Unparseable window boundary in (%r, %r) / (%r, %r), applying %s policy",
            start_a,
            end_a,
            start_b,
            end_b,
            policy,
        )
        return policy == config.FAIL_SAFE

    sa, ea, sb, eb = bounds
    return sa <= eb and sb <= ea


# =============================================================================
# DETECTION
# =============================================================================


def _window_order(window: PersistenceWindow) -> tuple[str, str, str]:
    return (window.lens, window.window_start, window.window_end)


def _pair_key(a: PersistenceWindow, b: PersistenceWindow) -> tuple:
    return (
        signature_sort_key(a.signature),
        signature_sort_key(b.signature),
        _window_order(a),
        _window_order(b),
    )


def detect_pattern_persistence(
    windows: list[PersistenceWindow] | None,
    policy: str | None = None,
) -> PatternPersistenceResult | None:
    """
    Detect a pattern that persists across two lenses.

    Args:
        windows: Lens windows with (possibly missing) signatures.
        policy: Unparseable-boundary policy, defaults to config.

    Returns:
        PatternPersistenceResult, or None when any silence rule applies.
    """
    if not windows or len(windows) < 2:
        return None

    signed = [w for w in windows if w.signature is not None]
    if len(signed) < 2:
        return None

    best = None
    best_key = None
    for i, first in enumerate(signed):
        for second in signed[i + 1 :]:
            if first.lens == second.lens:
                continue

            if windows_overlap(
                first.window_start,
                first.window_end,
                second.window_start,
                second.window_end,
                policy=policy,
            ):
                continue

            if not same_pattern(first.signature, second.signature):
                continue

            a, b = sorted((first, second), key=_window_order)
            key = _pair_key(a, b)
            if best_key is None or key < best_key:
                best = (a, b)
                best_key = key

    if best is None:
        return None

    a, b = best
    logger.debug("Pattern persists across %s and %s", a.lens, b.lens)
    return PatternPersistenceResult(
        signature=a.signature,
        lenses=(a.lens, b.lens),
        window_starts=(a.window_start, b.window_start),
        window_ends=(a.window_end, b.window_end),
    )
