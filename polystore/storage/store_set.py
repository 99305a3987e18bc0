# ==============================================
# StoreSet
# ==============================================
#
# PURPOSE:
#   The explicitly owned state object holding all four stores.
#   Injected into the orchestrator instead of living as module
#   globals, so tests and callers can create as many isolated
#   instances as they like.
#
# CLASS: StoreSet
# ---------------
#   Constructor:
#   ------------
#   - __init__(cache_config: CacheConfig | None = None, clock=utc_now)
#
#   Methods:
#   --------
#   - adapter_for(kind: StoreKind) -> StoreAdapter
#   - snapshot() -> dict        → per store {name, type, count, records|entries}
#   - counts() -> dict          → {store value: count}
#   - clear() -> None           → empty all stores, counters back to 1
#   - export_state() -> dict    → JSON-serializable state for persistence
#   - restore_state(state)      → inverse of export_state
#
#   Whole-set operations hold every store lock, taken in StoreKind
#   order, so they never observe a half-applied write.
#
# ==============================================

from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Optional

from polystore.config import CacheConfig
from polystore.routing.decision import StoreKind
from .base import Clock, StoreAdapter, utc_now
from .cache_store import CacheStore
from .document_store import DocumentStore
from .graph_store import GraphStore
from .relational_store import RelationalStore


class StoreSet:
    def __init__(self, cache_config: Optional[CacheConfig] = None, clock: Clock = utc_now):
        cache_config = cache_config or CacheConfig()
        self._adapters: Dict[StoreKind, StoreAdapter] = {
            StoreKind.RELATIONAL: RelationalStore(clock=clock),
            StoreKind.DOCUMENT: DocumentStore(clock=clock),
            StoreKind.CACHE: CacheStore(
                ttl_seconds=cache_config.ttl_seconds,
                fallback_key_prefix=cache_config.fallback_key_prefix,
                clock=clock,
            ),
            StoreKind.GRAPH: GraphStore(clock=clock),
        }

    def adapter_for(self, kind: StoreKind) -> StoreAdapter:
        return self._adapters[kind]

    @contextmanager
    def _all_locked(self):
        with ExitStack() as stack:
            for kind in StoreKind:
                stack.enter_context(self._adapters[kind].lock)
            yield

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """
        Read-only dump of every store.

        Returns:
            {store: {name, type, count, records}} for the sequence
            stores and {name, type, count, entries} for the cache.
        """
        result = {}
        with self._all_locked():
            for kind in StoreKind:
                adapter = self._adapters[kind]
                body_key = "entries" if kind is StoreKind.CACHE else "records"
                result[kind.value] = {
                    "name": kind.engine,
                    "type": kind.description,
                    "count": adapter.count(),
                    body_key: adapter.dump(),
                }
        return result

    def counts(self) -> Dict[str, int]:
        with self._all_locked():
            return {kind.value: self._adapters[kind].count() for kind in StoreKind}

    def clear(self) -> None:
        with self._all_locked():
            for adapter in self._adapters.values():
                adapter.clear()

    def export_state(self) -> Dict[str, Dict[str, Any]]:
        with self._all_locked():
            return {kind.value: self._adapters[kind].export_state() for kind in StoreKind}

    def restore_state(self, state: Dict[str, Dict[str, Any]]) -> None:
        with self._all_locked():
            for kind in StoreKind:
                self._adapters[kind].restore_state(state.get(kind.value, {}))
