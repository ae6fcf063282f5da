"""
Observer — Cross-Lens Pattern Persistence Detector.

Decides whether a structural activity pattern seen in a short window
(weekly) also recurs in a long window (yearly) for the same identity and,
only then, speaks one fixed sentence. Silence is the default outcome.

Usage:
    # Pair independently computed artifacts
    from observer import PairingStore, attach_persistence_to_artifact
    store = PairingStore()
    weekly = attach_persistence_to_artifact(
        weekly, store=store, identity="0xabc", dataset_fingerprint="v42", entries=entries
    )
    yearly = attach_persistence_to_artifact(
        yearly, store=store, identity="0xabc", dataset_fingerprint="v42"
    )

    # Compare two artifacts directly
    from observer import compare_artifacts_for_persistence
    outcome = compare_artifacts_for_persistence(weekly, yearly, entries)

    # Individual components
    from observer import make_pattern_signature, detect_pattern_persistence
"""

from .artifacts import (
    ArtifactWindow,
    InsightArtifact,
    ObserverDebug,
    PersistencePayload,
    SignatureDigest,
)
from .attach import attach_persistence_to_artifact
from .binning import (
    Band,
    CoarsePatternSignature,
    same_pattern,
    signature_sort_key,
    to_coarse_signature,
)
from .cache import CacheEntry, CachedArtifact, PairingStore, make_cache_key
from .compare import ComparisonOutcome, SilenceReason, compare_artifacts_for_persistence
from .contracts import parse_artifact, parse_entries
from .distribution import DailyCount, DistributionSummary, ReflectionEntry, compute_distribution
from .errors import ArtifactContractError, ObserverError
from .persistence import (
    PatternPersistenceResult,
    PersistenceWindow,
    detect_pattern_persistence,
    windows_overlap,
)
from .signature import (
    PatternSignature,
    PatternSignatureInput,
    make_pattern_signature,
    signature_input_from_summary,
)
from .statement import to_persistence_statement

__all__ = [
    # Signatures
    "PatternSignature",
    "PatternSignatureInput",
    "make_pattern_signature",
    "signature_input_from_summary",
    # Binning
    "Band",
    "CoarsePatternSignature",
    "to_coarse_signature",
    "same_pattern",
    "signature_sort_key",
    # Detection
    "PersistenceWindow",
    "PatternPersistenceResult",
    "detect_pattern_persistence",
    "windows_overlap",
    "to_persistence_statement",
    # Distributions
    "DailyCount",
    "DistributionSummary",
    "ReflectionEntry",
    "compute_distribution",
    # Artifacts
    "ArtifactWindow",
    "InsightArtifact",
    "ObserverDebug",
    "PersistencePayload",
    "SignatureDigest",
    "parse_artifact",
    "parse_entries",
    # Comparison / pairing
    "ComparisonOutcome",
    "SilenceReason",
    "compare_artifacts_for_persistence",
    "CacheEntry",
    "CachedArtifact",
    "PairingStore",
    "make_cache_key",
    "attach_persistence_to_artifact",
    # Errors
    "ObserverError",
    "ArtifactContractError",
]
