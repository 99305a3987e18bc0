# ==============================================
# TOPIC 3: PERSISTENCE (Store state across restarts)
# ==============================================
#
# This package saves and loads the contents of the stores so
# that records and identifier counters survive process restarts.
#
# Modules:
# --------
# - snapshot_store.py  → Save/load store state and run state
#
# ==============================================

from .snapshot_store import SnapshotStore

__all__ = ["SnapshotStore"]
