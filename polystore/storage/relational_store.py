# ==============================================
# RelationalStore
# ==============================================
#
# PURPOSE:
#   Simulated PostgreSQL table. Each payload becomes one row with
#   an integer primary key and created/updated timestamps.
#
# CLASS: RelationalStore
# ----------------------
#   Stateful — owns an append-only row list and its id counter.
#
#   Constructor:
#   ------------
#   - __init__(clock=utc_now)
#
#   Methods:
#   --------
#   - store(payload, key=None) -> dict
#       Row shape: {id, created_at, updated_at, **payload}
#       id counts 1, 2, 3, ... with no gaps. Generated columns
#       overwrite payload fields of the same name.
#       `key` is accepted for interface symmetry and ignored.
#
#   - count / dump / clear / export_state / restore_state
#
# ==============================================

from typing import Any, Dict, List, Optional

from polystore.routing.decision import StoreKind
from .base import Clock, CountedSequence, payload_fields, utc_now


class RelationalStore:
    kind = StoreKind.RELATIONAL

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._rows = CountedSequence()
        self.lock = self._rows.lock

    def store(self, payload: Any, key: Optional[str] = None) -> Dict[str, Any]:
        def build(row_id: int) -> Dict[str, Any]:
            now = self._clock().isoformat()
            row = payload_fields(payload)
            row.update({
                "id": row_id,
                "created_at": now,
                "updated_at": now,
            })
            return row

        return self._rows.append(build)

    def count(self) -> int:
        return self._rows.count()

    def dump(self) -> List[Dict[str, Any]]:
        return self._rows.dump()

    def clear(self) -> None:
        self._rows.clear()

    def export_state(self) -> Dict[str, Any]:
        return self._rows.export_state()

    def restore_state(self, state: Dict[str, Any]) -> None:
        self._rows.restore_state(state)
