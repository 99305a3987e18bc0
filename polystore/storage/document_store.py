# ==============================================
# DocumentStore
# ==============================================
#
# PURPOSE:
#   Simulated MongoDB collection. Stores payloads as documents,
#   preserving nested structure as-is.
#
# CLASS: DocumentStore
# --------------------
#   Stateful — owns an append-only document list and its own
#   counter (shared with no other store).
#
#   Methods:
#   --------
#   - store(payload, key=None) -> dict
#       Document shape: {_id: "doc_<n>", createdAt, updatedAt, **payload}
#
#   - count / dump / clear / export_state / restore_state
#
# ==============================================

from typing import Any, Dict, List, Optional

from polystore.routing.decision import StoreKind
from .base import Clock, CountedSequence, payload_fields, utc_now


class DocumentStore:
    kind = StoreKind.DOCUMENT

    ID_PREFIX = "doc_"

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._documents = CountedSequence()
        self.lock = self._documents.lock

    def store(self, payload: Any, key: Optional[str] = None) -> Dict[str, Any]:
        def build(counter: int) -> Dict[str, Any]:
            now = self._clock().isoformat()
            document = payload_fields(payload)
            document.update({
                "_id": f"{self.ID_PREFIX}{counter}",
                "createdAt": now,
                "updatedAt": now,
            })
            return document

        return self._documents.append(build)

    def count(self) -> int:
        return self._documents.count()

    def dump(self) -> List[Dict[str, Any]]:
        return self._documents.dump()

    def clear(self) -> None:
        self._documents.clear()

    def export_state(self) -> Dict[str, Any]:
        return self._documents.export_state()

    def restore_state(self, state: Dict[str, Any]) -> None:
        self._documents.restore_state(state)
