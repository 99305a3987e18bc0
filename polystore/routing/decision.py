# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of routing, plus the
#   rule entries the classifier evaluates.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the classifier clean.
#   StoreKind is also used by Topic 2 (Storage) to pick an adapter
#   and by Topic 3 (Persistence) to key saved state.
#
# ENUMS:
# ------
# - StoreKind(Enum): RELATIONAL, DOCUMENT, CACHE, GRAPH
#     Which store family a payload is routed to. Each member also
#     carries the simulated engine label and a family description.
#
# CLASSES:
# --------
# - RoutingDecision (frozen dataclass)
#     - store: StoreKind
#     - reason: str             → Human-readable justification
#     - normalized_type: str    → Lowercased, trimmed declared type
#
# - RoutingRule (frozen dataclass)
#     - store: StoreKind
#     - keywords: tuple[str, ...]
#     - reason: str
#     - matches(normalized_type) -> bool
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Tuple


class StoreKind(Enum):
    """
    Enumeration of the four store families.

    - RELATIONAL: transactional records (simulated PostgreSQL)
    - DOCUMENT: schema-flexible documents (simulated MongoDB)
    - CACHE: key/value entries with a TTL (simulated Redis)
    - GRAPH: nodes with labels and relationships (simulated Neo4j)
    """
    RELATIONAL = "relational"
    DOCUMENT = "document"
    CACHE = "cache"
    GRAPH = "graph"

    @property
    def engine(self) -> str:
        return _ENGINES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_ENGINES = {
    StoreKind.RELATIONAL: "PostgreSQL",
    StoreKind.DOCUMENT: "MongoDB",
    StoreKind.CACHE: "Redis",
    StoreKind.GRAPH: "Neo4j",
}

_DESCRIPTIONS = {
    StoreKind.RELATIONAL: "Relational/Transactional",
    StoreKind.DOCUMENT: "Document Store",
    StoreKind.CACHE: "Cache/Key-Value",
    StoreKind.GRAPH: "Graph Database",
}


@dataclass(frozen=True)
class RoutingDecision:
    """
    The classifier's output for one request.

    Produced fresh per request and never persisted.
    """
    store: StoreKind
    reason: str
    normalized_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "store": self.store.value,
            "engine": self.store.engine,
            "reason": self.reason,
            "normalized_type": self.normalized_type,
        }


@dataclass(frozen=True)
class RoutingRule:
    """One row of the routing table."""
    store: StoreKind
    keywords: Tuple[str, ...]
    reason: str

    def matches(self, normalized_type: str) -> bool:
        """
        Bidirectional substring test.

        "payment_event" matches because it contains "payment"; "acc"
        matches because "account" contains it. A one-letter type such
        as "a" matches every keyword containing that letter.
        """
        return any(
            keyword in normalized_type or normalized_type in keyword
            for keyword in self.keywords
        )
