"""
Contracts Module — Pydantic Models for Raw Artifact Payloads.

These models define the REQUIRED shape of artifacts and entries handed to
the Observer by the presentation layer (camelCase or snake_case keys).
A structurally invalid artifact is rejected here, before it reaches the
engine. Numeric validity of distribution figures is NOT checked: an
unusable summary makes the signature extractor fall silent instead.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from observer.artifacts import ArtifactWindow, InsightArtifact
from observer.distribution import DailyCount, DistributionSummary, ReflectionEntry
from observer.errors import ArtifactContractError


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DailyCountModel(_Contract):
    """Entries on one day."""

    date: str
    count: int = Field(ge=0)


class DistributionSummaryModel(_Contract):
    """Distribution summary of one window."""

    classification: str | None = None
    spike_ratio: float | None = None
    top10_percent_days_share: float | None = None
    daily_counts: list[DailyCountModel] = Field(default_factory=list)
    total_entries: int | None = None
    window_days: int = 0
    fitted_buckets: dict[str, float] = Field(default_factory=dict)

    def to_summary(self) -> DistributionSummary:
        daily_counts = [DailyCount(date=d.date, count=d.count) for d in self.daily_counts]
        total = self.total_entries
        if total is None:
            total = sum(d.count for d in daily_counts)
        return DistributionSummary(
            classification=self.classification,
            spike_ratio=self.spike_ratio,
            top10_percent_days_share=self.top10_percent_days_share,
            daily_counts=daily_counts,
            total_entries=total,
            window_days=self.window_days,
            fitted_buckets=dict(self.fitted_buckets),
        )


class ReflectionEntryModel(_Contract):
    """A timestamped journal entry."""

    id: str
    created_at: str
    plaintext: str = ""

    def to_entry(self) -> ReflectionEntry:
        return ReflectionEntry(id=self.id, created_at=self.created_at, plaintext=self.plaintext)


class ArtifactWindowModel(_Contract):
    """Artifact window bounds."""

    start: str
    end: str
    days: int | None = Field(default=None, gt=0)


class ArtifactModel(_Contract):
    """An insight artifact as produced by a lens."""

    id: str = ""
    horizon: str
    window: ArtifactWindowModel
    created_at: str | None = None
    distribution: DistributionSummaryModel | None = None
    window_classification: Literal["normal", "lognormal", "powerlaw"] | None = None

    @field_validator("horizon")
    @classmethod
    def horizon_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("horizon must not be blank")
        return v

    def to_artifact(self) -> InsightArtifact:
        return InsightArtifact(
            id=self.id,
            horizon=self.horizon,
            window=ArtifactWindow(
                start=self.window.start,
                end=self.window.end,
                days=self.window.days,
            ),
            created_at=self.created_at,
            distribution=self.distribution.to_summary() if self.distribution else None,
            window_classification=self.window_classification,
        )


# =============================================================================
# PARSING
# =============================================================================


def parse_artifact(data: dict[str, Any] | None) -> InsightArtifact:
    """
    Parse a raw artifact payload.

    Raises:
        ArtifactContractError: payload missing or structurally invalid.
    """
    if data is None:
        raise ArtifactContractError("Artifact payload is missing")
    try:
        return ArtifactModel.model_validate(data).to_artifact()
    except ValidationError as e:
        raise ArtifactContractError(f"Invalid artifact payload: {e}", errors=e.errors()) from e


def parse_entries(data: list[dict[str, Any]] | None) -> list[ReflectionEntry]:
    """
    Parse raw entry payloads; None parses to an empty list.

    Raises:
        ArtifactContractError: an entry is structurally invalid.
    """
    if not data:
        return []
    try:
        return [ReflectionEntryModel.model_validate(item).to_entry() for item in data]
    except ValidationError as e:
        raise ArtifactContractError(f"Invalid entry payload: {e}", errors=e.errors()) from e
