# ==============================================
# Storage Base
# ==============================================
#
# PURPOSE:
#   The capability every adapter offers, plus the small helpers
#   they share (clock, payload coercion, the locked counted
#   sequence used by the three append-only stores).
#
# PROTOCOL: StoreAdapter
# ----------------------
#   - kind: StoreKind
#   - store(payload, key=None) -> dict     → build + commit one record
#   - count() -> int
#   - dump() -> list | dict                → deep copy of held records
#   - clear() -> None                      → empty + reset counter to 1
#   - export_state() / restore_state(state)
#   - lock                                 → the store's mutex
#
# CLASS: CountedSequence
# ----------------------
#   Append-only list + integer counter guarded by one lock.
#   append(build) calls build(next_id) and only commits (append
#   AND counter bump) if build returns. A failing build leaves
#   both the list and the counter untouched.
#
# ==============================================

import copy
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol

from polystore.routing.decision import StoreKind


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def payload_fields(payload: Any) -> Dict[str, Any]:
    """
    Coerce a payload into top-level fields for merging.

    Mappings are deep-copied, None becomes {}, anything else is
    wrapped as {"value": payload}.
    """
    if payload is None:
        return {}
    if isinstance(payload, dict):
        return copy.deepcopy(payload)
    if hasattr(payload, "keys") and hasattr(payload, "__getitem__"):
        return copy.deepcopy({k: payload[k] for k in payload.keys()})
    return {"value": copy.deepcopy(payload)}


class StoreAdapter(Protocol):
    kind: StoreKind
    lock: Any

    def store(self, payload: Any, key: Optional[str] = None) -> Dict[str, Any]: ...

    def count(self) -> int: ...

    def dump(self) -> Any: ...

    def clear(self) -> None: ...

    def export_state(self) -> Dict[str, Any]: ...

    def restore_state(self, state: Dict[str, Any]) -> None: ...


class CountedSequence:
    """Ordered records plus the next identifier, committed atomically."""

    def __init__(self):
        # Re-entrant so StoreSet can hold every store's lock while
        # calling clear()/dump() on each of them.
        self.lock = threading.RLock()
        self._records: List[Dict[str, Any]] = []
        self._next_id = 1

    def append(self, build: Callable[[int], Dict[str, Any]]) -> Dict[str, Any]:
        with self.lock:
            record = build(self._next_id)
            self._records.append(record)
            self._next_id += 1
            return copy.deepcopy(record)

    def count(self) -> int:
        with self.lock:
            return len(self._records)

    def dump(self) -> List[Dict[str, Any]]:
        with self.lock:
            return copy.deepcopy(self._records)

    def clear(self) -> None:
        with self.lock:
            self._records = []
            self._next_id = 1

    def export_state(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "next_id": self._next_id,
                "records": copy.deepcopy(self._records),
            }

    def restore_state(self, state: Dict[str, Any]) -> None:
        records = copy.deepcopy(state.get("records", []))
        with self.lock:
            self._records = records
            self._next_id = int(state.get("next_id", len(records) + 1))
