"""
Test fixtures for deterministic Observer tests.

This module provides builders for signatures, entries, distribution
summaries and weekly/yearly artifacts that form a matching pair by default.
"""

from .observer_fixtures import (
    WEEKLY_END,
    WEEKLY_START,
    YEARLY_END,
    YEARLY_START,
    make_entries,
    make_signature,
    make_weekly_artifact,
    make_yearly_artifact,
    make_yearly_summary,
)

__all__ = [
    "WEEKLY_START",
    "WEEKLY_END",
    "YEARLY_START",
    "YEARLY_END",
    "make_entries",
    "make_signature",
    "make_weekly_artifact",
    "make_yearly_artifact",
    "make_yearly_summary",
]
