"""
Persistence Statement — the one sentence the Observer may speak.

One sentence, one clause, present tense, naming only the two lenses.
No magnitude, trend, interpretation or value judgment.
"""

from observer.persistence import PatternPersistenceResult

STATEMENT_TEMPLATE = "This pattern appears in {lens_a} and {lens_b}."

LENS_DISPLAY_NAMES = {
    "weekly": "Weekly",
    "yearly": "Yearly",
    "monthly": "Monthly",
    "summary": "Summary",
    "timeline": "Timeline",
    "lifetime": "Lifetime",
    "yoy": "Year over Year",
    "distributions": "Distributions",
}


def format_lens_name(lens: str) -> str:
    """Display name of a lens; unknown lenses are shown as given."""
    return LENS_DISPLAY_NAMES.get(lens.lower(), lens)


def to_persistence_statement(result: PatternPersistenceResult | None) -> str | None:
    """
    Generate the persistence statement for a detection result.

    Returns None for no result or a result without exactly two lenses.
    """
    if result is None:
        return None

    if not result.lenses or len(result.lenses) != 2:
        return None

    lens_a, lens_b = result.lenses
    return STATEMENT_TEMPLATE.format(
        lens_a=format_lens_name(lens_a),
        lens_b=format_lens_name(lens_b),
    )
