"""
Pairing store for short/long artifact halves.

The two artifacts of a pair are normally computed independently. Each
computation stores its half under identity::dataset_fingerprint; once both
halves are present the pair can be compared.

Features:
- One slot per horizon under each key; storing one never disturbs the other
- Thread-safe operations with RLock, plus transaction() for callers that
  must run store + lookup + compare as one atomic unit
- Identity reset: a change of identity clears the entire store
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from urllib.parse import quote, unquote

from observer import config
from observer.artifacts import InsightArtifact
from observer.distribution import ReflectionEntry

logger = logging.getLogger(__name__)


def make_cache_key(identity: str | None, dataset_fingerprint: str) -> str:
    """
    Build the pairing key; a missing identity uses the anonymous sentinel.

    The identity is percent-encoded so it never contains the separator and
    distinct (identity, fingerprint) pairs never share a key.
    """
    identity = quote(identity or config.ANONYMOUS_IDENTITY, safe="")
    return f"{identity}{config.CACHE_KEY_SEPARATOR}{dataset_fingerprint}"


def identity_of(key: str) -> str:
    """Identity part of a pairing key."""
    return unquote(key.split(config.CACHE_KEY_SEPARATOR, 1)[0])


@dataclass(frozen=True)
class CachedArtifact:
    """One stored half: the artifact and the entries its distribution needs."""

    artifact: InsightArtifact
    entries: tuple[ReflectionEntry, ...] | None = None


@dataclass
class CacheEntry:
    """Both halves stored under one key."""

    identity: str
    slots: dict[str, CachedArtifact] = field(default_factory=dict)

    @property
    def short(self) -> CachedArtifact | None:
        return self.slots.get(config.SHORT_HORIZON)

    @property
    def long(self) -> CachedArtifact | None:
        return self.slots.get(config.LONG_HORIZON)

    @property
    def complete(self) -> bool:
        return self.short is not None and self.long is not None


class PairingStore:
    """Thread-safe in-memory store of artifact halves keyed by identity and dataset."""

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._last_identity: str | None = None

    @contextmanager
    def transaction(self) -> Iterator["PairingStore"]:
        """Hold the store lock across several operations."""
        with self._lock:
            yield self

    def get(self, key: str) -> CacheEntry | None:
        """
        Get the entry stored under a key.

        Returns a copy; changing it does not change the store.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return CacheEntry(identity=entry.identity, slots=dict(entry.slots))

    def put(
        self,
        key: str,
        horizon: str,
        artifact: InsightArtifact,
        entries: list[ReflectionEntry] | None = None,
        *,
        identity: str | None = None,
    ) -> None:
        """
        Upsert one horizon's slot under a key.

        The other horizon's slot is left as it is. A key is never shared by
        two identities: an entry recorded for another identity is replaced.

        Args:
            identity: Owner of the artifact; defaults to the identity encoded
                in the key.
        """
        if identity is None:
            identity = identity_of(key)
        stored = CachedArtifact(
            artifact=artifact,
            entries=tuple(entries) if entries is not None else None,
        )
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.identity != identity:
                if entry is not None:
                    logger.warning("Replacing entry %s recorded for another identity", key)
                entry = CacheEntry(identity=identity)
                self._entries[key] = entry
            entry.slots[horizon] = stored

    def delete(self, key: str) -> None:
        """Delete a key and both its slots."""
        with self._lock:
            self._entries.pop(key, None)

    def clear_by_identity(self, identity: str | None) -> int:
        """
        Remove every key belonging to an identity.

        Returns:
            Number of keys removed
        """
        identity = identity or config.ANONYMOUS_IDENTITY
        with self._lock:
            keys = [k for k, e in self._entries.items() if e.identity == identity]
            for key in keys:
                del self._entries[key]
            return len(keys)

    def reset_if_identity_changed(self, identity: str | None) -> bool:
        """
        Clear the entire store when the identity differs from the last one seen.

        Returns:
            True if the identity changed and the store was cleared
        """
        identity = identity or config.ANONYMOUS_IDENTITY
        with self._lock:
            if identity == self._last_identity:
                return False
            if self._entries:
                logger.info("Identity changed, clearing %d pairing entries", len(self._entries))
            self._entries.clear()
            self._last_identity = identity
            return True

    def clear(self) -> None:
        """Clear the entire store and forget the last identity."""
        with self._lock:
            self._entries.clear()
            self._last_identity = None

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
