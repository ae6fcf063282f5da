"""
Attach pattern persistence to independently computed artifacts.

Each lens computes its artifact on its own (different page loads). Every
computation hands its artifact here: it is stored under
identity::dataset_fingerprint, and as soon as both halves are present they
are compared and the persistence result is attached.

The whole store → lookup → compare → overwrite sequence runs under the
store lock, so two halves stored concurrently always pair.
"""

import logging

from observer import config
from observer.artifacts import InsightArtifact, ObserverDebug
from observer.cache import PairingStore, make_cache_key
from observer.compare import DistributionFn, compare_artifacts_for_persistence
from observer.distribution import ReflectionEntry, compute_distribution
from observer.observability import ObservationContext

logger = logging.getLogger(__name__)


def attach_persistence_to_artifact(
    artifact: InsightArtifact,
    *,
    store: PairingStore,
    identity: str | None,
    dataset_fingerprint: str,
    entries: list[ReflectionEntry] | None = None,
    compute: DistributionFn = compute_distribution,
    policy: str | None = None,
) -> InsightArtifact:
    """
    Store an artifact half and attach persistence once its pair is present.

    Args:
        artifact: Short- or long-horizon artifact being computed.
        store: Pairing store shared by both lenses.
        identity: Data owner; None uses the anonymous identity.
        dataset_fingerprint: Changes whenever the source data changes.
        entries: Entries for the short-window distribution.
        compute: Distribution collaborator for the short window.
        policy: Unparseable-boundary policy for the overlap test.

    Returns:
        The caller's artifact with debug telemetry attached, and with
        persistence attached when the pair matches. Artifacts of any other
        horizon are returned unchanged.
    """
    if artifact.horizon not in (config.SHORT_HORIZON, config.LONG_HORIZON):
        return artifact

    identity = identity or config.ANONYMOUS_IDENTITY
    cache_key = make_cache_key(identity, dataset_fingerprint)

    with ObservationContext(cache_key), store.transaction():
        store.reset_if_identity_changed(identity)
        store.put(cache_key, artifact.horizon, artifact, entries, identity=identity)

        entry = store.get(cache_key)
        debug = ObserverDebug(
            cache_key=cache_key,
            short_in_cache=entry is not None and entry.short is not None,
            long_in_cache=entry is not None and entry.long is not None,
        )

        if entry is None or not entry.complete:
            logger.debug(
                "Waiting for pair (short=%s, long=%s)", debug.short_in_cache, debug.long_in_cache
            )
            return artifact.with_persistence(None).with_observer_debug(debug)

        short_entries = entry.short.entries
        if short_entries is None and entries is not None:
            short_entries = tuple(entries)

        outcome = compare_artifacts_for_persistence(
            entry.short.artifact,
            entry.long.artifact,
            list(short_entries) if short_entries is not None else None,
            compute=compute,
            debug=debug,
            policy=policy,
        )

        if not outcome.matched:
            return artifact.with_persistence(None).with_observer_debug(outcome.debug)

        updated = outcome.artifact_for(artifact.horizon)
        stored = entry.slots[artifact.horizon]
        store.put(cache_key, artifact.horizon, updated, stored.entries, identity=identity)
        return updated
