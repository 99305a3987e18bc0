# ==============================================
# CacheStore
# ==============================================
#
# PURPOSE:
#   Simulated Redis keyspace. Maps a key to the most recent
#   entry written under it.
#
# CLASS: CacheStore
# -----------------
#   Stateful — owns a dict of key → entry. No id counter; the key
#   is the identity.
#
#   Constructor:
#   ------------
#   - __init__(ttl_seconds=3600, fallback_key_prefix="cache_", clock=utc_now)
#
#   Methods:
#   --------
#   - store(payload, key=None) -> dict
#       Key resolution, first hit wins:
#         1. explicit `key` argument
#         2. payload["key"]
#         3. "<prefix><epoch milliseconds>"
#       Entry: {value: payload, storedAt, ttl}. Overwrites any
#       previous entry for the same key. The TTL is recorded only;
#       nothing ever expires.
#       Returns {key, value, storedAt, ttl}.
#
#   - resolve_key(payload, key=None) -> str
#   - get(key) -> dict | None
#   - count / dump / clear / export_state / restore_state
#
# ==============================================

import copy
import threading
from typing import Any, Dict, Optional

from polystore.routing.decision import StoreKind
from .base import Clock, utc_now


class CacheStore:
    kind = StoreKind.CACHE

    def __init__(self, ttl_seconds: int = 3600, fallback_key_prefix: str = "cache_", clock: Clock = utc_now):
        self.ttl_seconds = ttl_seconds
        self.fallback_key_prefix = fallback_key_prefix
        self._clock = clock
        self.lock = threading.RLock()
        self._entries: Dict[str, Dict[str, Any]] = {}

    def resolve_key(self, payload: Any, key: Optional[str] = None) -> str:
        if key:
            return str(key)
        if isinstance(payload, dict) and payload.get("key"):
            return str(payload["key"])
        millis = int(self._clock().timestamp() * 1000)
        return f"{self.fallback_key_prefix}{millis}"

    def store(self, payload: Any, key: Optional[str] = None) -> Dict[str, Any]:
        with self.lock:
            cache_key = self.resolve_key(payload, key)
            entry = {
                "value": copy.deepcopy(payload),
                "storedAt": self._clock().isoformat(),
                "ttl": self.ttl_seconds,
            }
            self._entries[cache_key] = entry
            return {"key": cache_key, **copy.deepcopy(entry)}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self.lock:
            entry = self._entries.get(key)
            return copy.deepcopy(entry) if entry is not None else None

    def count(self) -> int:
        with self.lock:
            return len(self._entries)

    def dump(self) -> Dict[str, Dict[str, Any]]:
        with self.lock:
            return copy.deepcopy(self._entries)

    def clear(self) -> None:
        with self.lock:
            self._entries = {}

    def export_state(self) -> Dict[str, Any]:
        return {"entries": self.dump()}

    def restore_state(self, state: Dict[str, Any]) -> None:
        entries = copy.deepcopy(state.get("entries", {}))
        with self.lock:
            self._entries = entries
