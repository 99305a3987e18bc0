# ==============================================
# RecordRouter
# ==============================================
#
# PURPOSE:
#   Takes a RoutingDecision and a payload and writes the payload
#   to the adapter the decision names.
#
# WHY THIS CLASS EXISTS:
#   The classifier only decides; something has to turn that
#   decision into exactly one adapter call, pass the cache key
#   through to the cache adapter only, and turn unexpected
#   adapter exceptions into AdapterFailure.
#
# CLASS: RecordRouter
# -------------------
#   Stateful — holds a reference to the StoreSet and a log sink.
#
#   Constructor:
#   ------------
#   - __init__(stores: StoreSet, sink=None)
#
#   Methods:
#   --------
#   - route(decision: RoutingDecision, payload, key=None) -> dict
#       Dispatch to the adapter for decision.store. Returns the
#       stored record. Raises AdapterFailure if the adapter raises;
#       the adapter has committed nothing in that case.
#
#   - describe(kind, record) -> str
#       "<Engine> with <id field>: <id>" for log lines.
#
# ==============================================

from typing import Any, Dict, Optional

from polystore.errors import AdapterFailure
from polystore.log_sink import NullSink
from polystore.routing.decision import RoutingDecision, StoreKind


_ID_FIELDS = {
    StoreKind.RELATIONAL: "id",
    StoreKind.DOCUMENT: "_id",
    StoreKind.CACHE: "key",
    StoreKind.GRAPH: "nodeId",
}


class RecordRouter:
    def __init__(self, stores, sink=None):
        self.stores = stores
        self._sink = sink or NullSink()

    def route(self, decision: RoutingDecision, payload: Any, key: Optional[str] = None) -> Dict[str, Any]:
        kind = decision.store
        adapter = self.stores.adapter_for(kind)
        try:
            if kind is StoreKind.CACHE:
                record = adapter.store(payload, key=key)
            else:
                record = adapter.store(payload)
        except Exception as e:
            self._sink.error(f"Failed to store in {kind.engine}", e)
            raise AdapterFailure(
                store=kind.value,
                description=f"{kind.engine} adapter failed: {e}",
                cause=e,
            ) from e

        self._sink.success(f"Stored in {self.describe(kind, record)}")
        return record

    @staticmethod
    def describe(kind: StoreKind, record: Dict[str, Any]) -> str:
        id_field = _ID_FIELDS[kind]
        return f"{kind.engine} with {id_field}: {record.get(id_field)}"
