# ==============================================
# Request / Result (Data Classes)
# ==============================================
#
# - IngestRequest (dataclass)
#     type: str | None      → drives routing
#     payload: Any          → forwarded opaquely to the adapter
#     key: str | None       → explicit cache key, ignored by other stores
#
#     from_dict(body) -> IngestRequest   (classmethod)
#       Raises EmptyRequest for None / empty bodies. A body with no
#       "payload" field, or a null, 0, "" or false one, is its own payload.
#
# - IngestResult (dataclass)
#     decision: RoutingDecision
#     record: dict
#     timestamp: str
#
#     to_dict() -> dict   → response body for callers
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Optional

from polystore.errors import EmptyRequest
from polystore.routing.decision import RoutingDecision


@dataclass
class IngestRequest:
    type: Optional[str] = None
    payload: Any = None
    key: Optional[str] = None

    def is_empty(self) -> bool:
        return self.type is None and self.payload is None and self.key is None

    @classmethod
    def from_dict(cls, body: Optional[Dict[str, Any]]) -> "IngestRequest":
        if not body:
            raise EmptyRequest()
        if not isinstance(body, dict):
            raise EmptyRequest(f"Request body must be an object, got {type(body).__name__}")

        # A falsy scalar payload (0, "", False) counts as missing;
        # empty objects and lists are kept.
        payload = body.get("payload")
        if payload is None or (not payload and not isinstance(payload, (dict, list))):
            payload = body

        data_type = body.get("type")
        key = body.get("key")
        return cls(
            type=None if data_type is None else str(data_type),
            payload=payload,
            key=None if key is None else str(key),
        )


@dataclass
class IngestResult:
    decision: RoutingDecision
    record: Dict[str, Any]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "routed_to": self.decision.store.value,
            "engine": self.decision.store.engine,
            "reason": self.decision.reason,
            "data_type": self.decision.normalized_type,
            "stored": True,
            "record": self.record,
            "timestamp": self.timestamp,
        }
