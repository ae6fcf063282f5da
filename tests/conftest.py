"""
Test configuration — ensures repo root is in sys.path + isolation guards.

This allows tests to import from top-level packages (observer, tests.fixtures).
Every test gets its own PairingStore, so no pairing state leaks between tests,
and thresholds are reloaded from the bundled config after each test.
"""

import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import observer.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from observer import paths  # noqa: E402
from observer.cache import PairingStore  # noqa: E402
from observer.thresholds import reload_thresholds  # noqa: E402
from tests.fixtures import make_entries  # noqa: E402


@pytest.fixture
def store():
    """Fresh pairing store per test."""
    return PairingStore()


@pytest.fixture
def entries():
    """Weekly entries on Mon/Tue/Wed of the default weekly window."""
    return make_entries()


@pytest.fixture(autouse=True)
def restore_thresholds(monkeypatch):
    """Undo any threshold override a test applies."""
    monkeypatch.delenv("OBSERVER_THRESHOLDS_PATH", raising=False)
    yield
    reload_thresholds(paths.package_root() / "thresholds.yaml")
