"""
Tests for the persistence statement.
"""

from observer.persistence import PatternPersistenceResult
from observer.statement import format_lens_name, to_persistence_statement
from tests.fixtures import make_signature


def _result(lenses) -> PatternPersistenceResult:
    return PatternPersistenceResult(
        signature=make_signature(),
        lenses=tuple(lenses),
        window_starts=tuple("2024-01-01T00:00:00Z" for _ in lenses),
        window_ends=tuple("2024-01-08T00:00:00Z" for _ in lenses),
    )


class TestToPersistenceStatement:
    def test_weekly_yearly(self):
        statement = to_persistence_statement(_result(["weekly", "yearly"]))
        assert statement == "This pattern appears in Weekly and Yearly."

    def test_no_result(self):
        assert to_persistence_statement(None) is None

    def test_wrong_lens_count(self):
        assert to_persistence_statement(_result(["weekly"])) is None
        assert to_persistence_statement(_result(["weekly", "monthly", "yearly"])) is None
        assert to_persistence_statement(_result([])) is None

    def test_deterministic(self):
        result = _result(["monthly", "yoy"])
        statements = {to_persistence_statement(result) for _ in range(5)}
        assert statements == {"This pattern appears in Monthly and Year over Year."}

    def test_single_sentence_names_only_lenses(self):
        statement = to_persistence_statement(_result(["weekly", "yearly"]))
        assert statement.count(".") == 1
        assert not any(ch.isdigit() for ch in statement)


class TestFormatLensName:
    def test_known_lens_case_insensitive(self):
        assert format_lens_name("WEEKLY") == "Weekly"

    def test_unknown_lens_passthrough(self):
        assert format_lens_name("quarterly") == "quarterly"
