# ==============================================
# Errors
# ==============================================
#
# The error taxonomy is narrow on purpose:
#
# - EmptyRequest    → the caller sent no body (or an empty one).
#                     Raised before anything is classified or stored.
# - AdapterFailure  → an unexpected exception while an adapter was
#                     building a record. The store is left untouched.
# - SnapshotError   → saved state could not be written or read back.
#                     A failed save keeps the previous files intact.
#
# Routing is total and has no error type of its own.
#
# Every error knows which phase failed and can render itself as a
# response dict for the outer surface (CLI, stream loop).
#
# ==============================================

from typing import Any, Dict, Optional


class PolystoreError(Exception):
    """Base class for all errors raised by the orchestration core."""

    phase = "unknown"

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "phase": self.phase,
            "error": self.description,
        }


class EmptyRequest(PolystoreError):
    """The request body was absent or empty."""

    phase = "request"

    def __init__(self, description: str = "Request body is required"):
        super().__init__(description)


class AdapterFailure(PolystoreError):
    """
    A store adapter failed while constructing a record.

    The adapter's store is guaranteed to hold no partial record and
    its identifier counter has not advanced.
    """

    phase = "storage"

    def __init__(self, store: str, description: str, cause: Optional[BaseException] = None):
        super().__init__(description)
        self.store = store
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["store"] = self.store
        return result


class SnapshotError(PolystoreError):
    """
    Saved state could not be written or read back.

    A failed save leaves the previous snapshot files as they were.
    """

    phase = "persistence"

    def __init__(self, path: str, description: str):
        super().__init__(description)
        self.path = path

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["path"] = self.path
        return result
