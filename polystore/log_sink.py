# ==============================================
# Log Sinks
# ==============================================
#
# PURPOSE:
#   Receive routing decisions and store events from the core.
#   The core never prints directly; it talks to whichever sink
#   was injected, so it runs just as well with NullSink.
#
# CLASSES:
# --------
# - ConsoleSink → timestamped, marker-prefixed lines on stdout
#                   ℹ info   ✓ success   ⚠ warn   ✗ error
#                   🔀 routing decision (multi-line block)
# - NullSink    → same interface, does nothing
#
# Interface (duck-typed):
#   info(message), success(message), warn(message),
#   error(message, error=None), route(data_type, store, reason)
#
# ==============================================

from datetime import datetime, timezone
from typing import Optional


class ConsoleSink:
    """Prints events to stdout."""

    def _timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def info(self, message: str) -> None:
        print(f"[{self._timestamp()}] ℹ {message}")

    def success(self, message: str) -> None:
        print(f"[{self._timestamp()}] ✓ {message}")

    def warn(self, message: str) -> None:
        print(f"[{self._timestamp()}] ⚠ {message}")

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        print(f"[{self._timestamp()}] ✗ {message}")
        if error is not None:
            print(f"    └─ Error: {error}")

    def route(self, data_type: str, store: str, reason: str) -> None:
        print(f"[{self._timestamp()}] 🔀 ROUTING DECISION:")
        print(f"    ├─ Data Type: {data_type}")
        print(f"    ├─ Routed To: {store}")
        print(f"    └─ Reason: {reason}")


class NullSink:
    """Discards every event."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        pass

    def route(self, data_type: str, store: str, reason: str) -> None:
        pass


def make_sink(enabled: bool = True):
    """Return a ConsoleSink when logging is enabled, otherwise a NullSink."""
    return ConsoleSink() if enabled else NullSink()
