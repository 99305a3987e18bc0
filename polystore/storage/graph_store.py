# ==============================================
# GraphStore
# ==============================================
#
# PURPOSE:
#   Simulated Neo4j node set. Each payload becomes one node with
#   labels, properties and outgoing relationships.
#
# CLASS: GraphStore
# -----------------
#   Stateful — owns an append-only node list and its own counter.
#
#   Methods:
#   --------
#   - store(payload, key=None) -> dict
#       Node shape:
#         nodeId:        "node_<n>"
#         labels:        payload["labels"]         (default ["Entity"])
#         properties:    payload["properties"]     (default: whole payload)
#         relationships: payload["relationships"]  (default [])
#         createdAt:     timestamp
#       Only a missing/None field falls back to its default; an
#       explicit empty list is kept.
#
#   - count / dump / clear / export_state / restore_state
#
# ==============================================

from typing import Any, Dict, List, Optional

from polystore.routing.decision import StoreKind
from .base import Clock, CountedSequence, payload_fields, utc_now


DEFAULT_LABELS = ("Entity",)


class GraphStore:
    kind = StoreKind.GRAPH

    ID_PREFIX = "node_"

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._nodes = CountedSequence()
        self.lock = self._nodes.lock

    def store(self, payload: Any, key: Optional[str] = None) -> Dict[str, Any]:
        def build(counter: int) -> Dict[str, Any]:
            fields = payload_fields(payload)

            labels = fields.get("labels")
            if labels is None:
                labels = list(DEFAULT_LABELS)

            properties = fields.get("properties")
            if properties is None:
                properties = payload_fields(payload)

            relationships = fields.get("relationships")
            if relationships is None:
                relationships = []

            return {
                "nodeId": f"{self.ID_PREFIX}{counter}",
                "labels": labels,
                "properties": properties,
                "relationships": relationships,
                "createdAt": self._clock().isoformat(),
            }

        return self._nodes.append(build)

    def count(self) -> int:
        return self._nodes.count()

    def dump(self) -> List[Dict[str, Any]]:
        return self._nodes.dump()

    def clear(self) -> None:
        self._nodes.clear()

    def export_state(self) -> Dict[str, Any]:
        return self._nodes.export_state()

    def restore_state(self, state: Dict[str, Any]) -> None:
        self._nodes.restore_state(state)
