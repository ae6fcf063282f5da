"""
Tests for the pairing store and attaching persistence to independently
computed artifacts.
"""

import threading

from observer.artifacts import InsightArtifact
from observer.attach import attach_persistence_to_artifact
from observer.cache import PairingStore, identity_of, make_cache_key
from tests.fixtures import make_weekly_artifact, make_yearly_artifact

IDENTITY = "0xabc"
FINGERPRINT = "2024-01-08"


def _attach(artifact, store, entries=None, identity=IDENTITY, fingerprint=FINGERPRINT):
    return attach_persistence_to_artifact(
        artifact,
        store=store,
        identity=identity,
        dataset_fingerprint=fingerprint,
        entries=entries,
    )


class TestCacheKeys:
    def test_key_format(self):
        assert make_cache_key("0xabc", "v42") == "0xabc::v42"

    def test_anonymous_identity(self):
        assert make_cache_key(None, "fp") == "anonymous::fp"
        assert make_cache_key("", "fp") == "anonymous::fp"

    def test_identity_of(self):
        assert identity_of("0xabc::v42") == "0xabc"

    def test_separator_in_identity_does_not_collide(self):
        assert make_cache_key("a", "b::c") != make_cache_key("a::b", "c")

    def test_identity_round_trip(self):
        assert identity_of(make_cache_key("acct::7", "fp")) == "acct::7"


class TestPairingStore:
    def test_put_keeps_other_slot(self, store):
        store.put("a::1", "weekly", make_weekly_artifact())
        store.put("a::1", "yearly", make_yearly_artifact())
        entry = store.get("a::1")
        assert entry.complete
        assert entry.short.artifact.horizon == "weekly"

    def test_get_returns_copy(self, store):
        store.put("a::1", "weekly", make_weekly_artifact())
        store.get("a::1").slots.clear()
        assert store.get("a::1").short is not None

    def test_get_missing(self, store):
        assert store.get("nobody::1") is None

    def test_delete(self, store):
        store.put("a::1", "weekly", make_weekly_artifact())
        store.delete("a::1")
        assert len(store) == 0

    def test_clear_by_identity(self, store):
        store.put("a::1", "weekly", make_weekly_artifact())
        store.put("a::2", "weekly", make_weekly_artifact())
        store.put("b::1", "weekly", make_weekly_artifact())
        assert store.clear_by_identity("a") == 2
        assert store.keys() == ["b::1"]

    def test_clear_identity_containing_separator(self, store):
        store.put(make_cache_key("acct::7", "fp"), "weekly", make_weekly_artifact())
        assert store.clear_by_identity("acct::7") == 1
        assert len(store) == 0

    def test_explicit_identity_replaces_other_owner(self, store):
        store.put("a::1", "weekly", make_weekly_artifact())
        store.put("a::1", "yearly", make_yearly_artifact(), identity="b")
        entry = store.get("a::1")
        assert entry.identity == "b"
        assert entry.short is None
        assert entry.long is not None

    def test_reset_on_identity_change(self, store):
        assert store.reset_if_identity_changed("a") is True
        store.put("a::1", "weekly", make_weekly_artifact())
        assert store.reset_if_identity_changed("a") is False
        assert len(store) == 1
        assert store.reset_if_identity_changed("b") is True
        assert len(store) == 0

    def test_clear_forgets_identity(self, store):
        store.reset_if_identity_changed("a")
        store.clear()
        assert store.reset_if_identity_changed("a") is True


class TestAttachPersistence:
    def test_short_only_waits(self, store, entries):
        weekly = _attach(make_weekly_artifact(), store, entries)
        assert weekly.persistence is None
        debug = weekly.observer_debug
        assert debug["cache_key"] == "0xabc::2024-01-08"
        assert debug["short_in_cache"] is True
        assert debug["long_in_cache"] is False
        assert debug["match"] is False

    def test_pair_completed_by_long(self, store, entries):
        _attach(make_weekly_artifact(), store, entries)
        yearly = _attach(make_yearly_artifact(), store)
        assert yearly.persistence is not None
        assert yearly.persistence.statement == "This pattern appears in Weekly and Yearly."
        assert yearly.observer_debug["short_in_cache"] is True
        assert yearly.observer_debug["long_in_cache"] is True
        assert yearly.observer_debug["match"] is True

    def test_long_first_then_short(self, store, entries):
        first = _attach(make_yearly_artifact(), store)
        assert first.persistence is None
        weekly = _attach(make_weekly_artifact(), store, entries)
        assert weekly.persistence is not None

    def test_reattach_short_gets_persistence(self, store, entries):
        _attach(make_weekly_artifact(), store, entries)
        yearly = _attach(make_yearly_artifact(), store)
        weekly = _attach(make_weekly_artifact(), store, entries)
        assert weekly.persistence == yearly.persistence

    def test_stored_slot_updated_after_match(self, store, entries):
        _attach(make_weekly_artifact(), store, entries)
        _attach(make_yearly_artifact(), store)
        entry = store.get(make_cache_key(IDENTITY, FINGERPRINT))
        assert entry.long.artifact.persistence is not None
        assert entry.short.entries == tuple(entries)

    def test_different_fingerprint_does_not_pair(self, store, entries):
        _attach(make_weekly_artifact(), store, entries, fingerprint="v1")
        yearly = _attach(make_yearly_artifact(), store, fingerprint="v2")
        assert yearly.persistence is None
        assert yearly.observer_debug["short_in_cache"] is False

    def test_identity_change_isolates_pairs(self, store, entries):
        _attach(make_weekly_artifact(), store, entries, identity="wallet-a")
        yearly = _attach(make_yearly_artifact(), store, identity="wallet-b")
        assert yearly.persistence is None
        assert store.keys() == ["wallet-b::2024-01-08"]

    def test_anonymous_identity(self, store, entries):
        weekly = _attach(make_weekly_artifact(), store, entries, identity=None)
        assert weekly.observer_debug["cache_key"] == "anonymous::2024-01-08"

    def test_identity_with_separator_pairs(self, store, entries):
        _attach(make_weekly_artifact(), store, entries, identity="acct::7")
        yearly = _attach(make_yearly_artifact(), store, identity="acct::7")
        assert yearly.persistence is not None
        assert store.clear_by_identity("acct::7") == 1

    def test_no_match_reports_reason(self, store, entries):
        _attach(make_weekly_artifact(), store, entries)
        yearly = _attach(make_yearly_artifact(window_classification="powerlaw"), store)
        assert yearly.persistence is None
        assert yearly.observer_debug["silence_reason"] == "No pattern match detected"
        assert yearly.observer_debug["short_in_cache"] is True
        assert yearly.observer_debug["long_in_cache"] is True

    def test_other_horizon_unchanged(self, store):
        monthly = InsightArtifact(
            id="m-1", horizon="monthly", window=make_weekly_artifact().window
        )
        assert _attach(monthly, store) is monthly
        assert len(store) == 0

    def test_concurrent_halves_pair(self, entries):
        store = PairingStore()
        barrier = threading.Barrier(2)
        results = {}

        def run(name, artifact, artifact_entries):
            barrier.wait()
            results[name] = _attach(artifact, store, artifact_entries)

        threads = [
            threading.Thread(target=run, args=("weekly", make_weekly_artifact(), entries)),
            threading.Thread(target=run, args=("yearly", make_yearly_artifact(), None)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert any(a.persistence is not None for a in results.values())
