# ==============================================
# TOPIC 2: STORAGE (Relational + Document + Cache + Graph)
# ==============================================
#
# This package holds the four in-process stores and the router
# that writes a classified payload into exactly one of them.
#
# Modules:
# --------
# - base.py              → StoreAdapter protocol, CountedSequence, helpers
# - relational_store.py  → Integer-id rows (simulated PostgreSQL)
# - document_store.py    → doc_<n> documents (simulated MongoDB)
# - cache_store.py       → Keyed entries with TTL (simulated Redis)
# - graph_store.py       → node_<n> nodes (simulated Neo4j)
# - store_set.py         → Owns all four stores; snapshot / clear / state
# - record_router.py     → Decision → adapter dispatch
#
# ==============================================

from .base import StoreAdapter, CountedSequence
from .relational_store import RelationalStore
from .document_store import DocumentStore
from .cache_store import CacheStore
from .graph_store import GraphStore
from .store_set import StoreSet
from .record_router import RecordRouter

__all__ = [
    "StoreAdapter",
    "CountedSequence",
    "RelationalStore",
    "DocumentStore",
    "CacheStore",
    "GraphStore",
    "StoreSet",
    "RecordRouter",
]
