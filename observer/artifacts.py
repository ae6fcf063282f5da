"""
Insight artifacts and the values the Observer attaches to them.

An artifact is one lens's computed view over a window (e.g. the weekly
or yearly page). The Observer never mutates artifacts: it returns new
ones with a persistence payload and debug telemetry attached.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from observer.distribution import DistributionSummary
from observer.persistence import PatternPersistenceResult
from observer.signature import PatternSignature

DEBUG_KEY = "observer"


@dataclass(frozen=True)
class ArtifactWindow:
    """Window bounds of an artifact."""

    start: str  # ISO 8601
    end: str  # ISO 8601
    days: int | None = None  # declared window length

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "days": self.days}


@dataclass(frozen=True)
class PersistencePayload:
    """Persistence result plus its statement, attached to both artifacts."""

    signature: PatternSignature
    lenses: tuple[str, ...]
    window_starts: tuple[str, ...]
    window_ends: tuple[str, ...]
    statement: str

    @classmethod
    def from_result(cls, result: PatternPersistenceResult, statement: str) -> "PersistencePayload":
        return cls(
            signature=result.signature,
            lenses=tuple(result.lenses),
            window_starts=tuple(result.window_starts),
            window_ends=tuple(result.window_ends),
            statement=statement,
        )

    def to_dict(self) -> dict:
        return {
            "signature": self.signature.to_dict(),
            "lenses": list(self.lenses),
            "window_starts": list(self.window_starts),
            "window_ends": list(self.window_ends),
            "statement": self.statement,
        }


@dataclass(frozen=True)
class SignatureDigest:
    """Compact signature projection for telemetry."""

    observed_distribution_fit: str
    concentration_ratio: float

    @classmethod
    def of(cls, signature: PatternSignature | None) -> "SignatureDigest | None":
        if signature is None:
            return None
        return cls(
            observed_distribution_fit=signature.observed_distribution_fit,
            concentration_ratio=signature.concentration_ratio,
        )

    def to_dict(self) -> dict:
        return {
            "observed_distribution_fit": self.observed_distribution_fit,
            "concentration_ratio": self.concentration_ratio,
        }


@dataclass
class ObserverDebug:
    """Structured telemetry for one pairing attempt."""

    cache_key: str | None = None
    short_in_cache: bool = False
    long_in_cache: bool = False
    short_signature: SignatureDigest | None = None
    long_signature: SignatureDigest | None = None
    match: bool = False
    silence_reason: str | None = None

    def to_dict(self) -> dict:
        data = {
            "cache_key": self.cache_key,
            "short_in_cache": self.short_in_cache,
            "long_in_cache": self.long_in_cache,
            "short_signature": self.short_signature.to_dict() if self.short_signature else None,
            "long_signature": self.long_signature.to_dict() if self.long_signature else None,
            "match": self.match,
        }
        if self.silence_reason is not None:
            data["silence_reason"] = self.silence_reason
        return data


@dataclass(frozen=True)
class InsightArtifact:
    """One lens's computed insight view."""

    id: str
    horizon: str
    window: ArtifactWindow
    created_at: str | None = None
    # Pre-computed summary; expected on long-window artifacts.
    distribution: DistributionSummary | None = None
    # Pre-computed window classification, preferred over the summary's own.
    window_classification: str | None = None
    persistence: PersistencePayload | None = None
    debug: dict[str, Any] = field(default_factory=dict)

    def with_persistence(self, payload: PersistencePayload | None) -> "InsightArtifact":
        return replace(self, persistence=payload)

    def with_observer_debug(self, debug: ObserverDebug) -> "InsightArtifact":
        return replace(self, debug={**self.debug, DEBUG_KEY: debug.to_dict()})

    @property
    def observer_debug(self) -> dict | None:
        return self.debug.get(DEBUG_KEY)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "horizon": self.horizon,
            "window": self.window.to_dict(),
            "created_at": self.created_at,
            "distribution": self.distribution.to_dict() if self.distribution else None,
            "window_classification": self.window_classification,
            "persistence": self.persistence.to_dict() if self.persistence else None,
            "debug": self.debug,
        }
