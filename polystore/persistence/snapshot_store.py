import json
import os
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from polystore.errors import SnapshotError
from polystore.log_sink import NullSink


# ==============================================
# SnapshotStore
# ==============================================
#
# PURPOSE:
#   Persist the contents of all four stores to disk so that a
#   new process (e.g. the next CLI invocation) continues where
#   the last one stopped instead of starting empty.
#
# WHAT IS PERSISTED:
#   1. Store state   → records / cache entries and next counters
#   2. Run state     → total requests ingested and failed, last save time
#
# Identifiers keep increasing across restarts because the
# counters are saved alongside the records.
#
# CLASS: SnapshotStore
# --------------------
#   Stateful — holds a reference to the storage directory.
#
#   Constructor:
#   ------------
#   - __init__(storage_dir: str = "metadata/", sink=None)
#       Create storage directory if it doesn't exist.
#
class SnapshotStore:
    """
    Handles persistence of store state to disk.

    Files created:
    - metadata/stores.json  → {relational: {next_id, records}, ..., cache: {entries}}
    - metadata/state.json   → {total_ingested, total_failures, last_saved, version}

    Files are replaced whole: content is serialized in memory, written
    to a sibling temp file, then moved over the target with os.replace.
    """

    VERSION = "1.0"

    def __init__(self, storage_dir: str = "metadata/", sink=None):
        self.storage_dir = Path(storage_dir)
        self._sink = sink or NullSink()

        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self.stores_file = self.storage_dir / "stores.json"
        self.state_file = self.storage_dir / "state.json"
#   Methods:
#   --------
#   - save_stores(stores_state: dict) -> None
#   - save_state(total_ingested: int, total_failures: int = 0) -> None
#   - save_all(stores_state, total_ingested, total_failures=0) -> None
#       All raise SnapshotError on failure; existing files are kept.
#
    def _serialize(self, path: Path, data: Dict[str, Any]) -> str:
        try:
            return json.dumps(data, indent=2, default=str)
        except (TypeError, ValueError) as e:
            raise SnapshotError(str(path), f"Could not serialize {path.name}: {e}") from e

    def _replace(self, path: Path, text: str) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, 'w') as f:
                f.write(text)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise SnapshotError(str(path), f"Could not write {path.name}: {e}") from e

    def _run_state(self, total_ingested: int, total_failures: int) -> Dict[str, Any]:
        return {
            "total_ingested": total_ingested,
            "total_failures": total_failures,
            "last_saved": datetime.now(timezone.utc).isoformat(),
            "version": self.VERSION
        }

    def save_stores(self, stores_state: Dict[str, Any]) -> None:
        """
        Save the exported state of every store.

        Args:
            stores_state: Output of StoreSet.export_state()
        """
        self._replace(self.stores_file, self._serialize(self.stores_file, stores_state))
        self._sink.info(f"Saved store state to {self.stores_file}")

    def save_state(self, total_ingested: int, total_failures: int = 0) -> None:
        state = self._run_state(total_ingested, total_failures)
        self._replace(self.state_file, self._serialize(self.state_file, state))

    def save_all(self, stores_state: Dict[str, Any], total_ingested: int, total_failures: int = 0) -> None:
        # Serialize both before touching either file.
        stores_text = self._serialize(self.stores_file, stores_state)
        state_text = self._serialize(self.state_file, self._run_state(total_ingested, total_failures))

        self._replace(self.stores_file, stores_text)
        self._replace(self.state_file, state_text)
        self._sink.info(f"Saved store state to {self.stores_file}")
#   LOADING:
#   - load_stores() -> dict | None   (None if no file)
#   - load_state() -> dict           (defaults if no file)
#       Unreadable or corrupt files raise SnapshotError.
#
    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(str(path), f"Corrupt snapshot file {path.name}: {e}") from e
        except OSError as e:
            raise SnapshotError(str(path), f"Could not read {path.name}: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError(str(path), f"Corrupt snapshot file {path.name}: expected an object")
        return data

    def load_stores(self) -> Optional[Dict[str, Any]]:
        if not self.stores_file.exists():
            return None

        stores_state = self._read(self.stores_file)
        self._sink.info(f"Loaded store state from {self.stores_file}")
        return stores_state

    def load_state(self) -> Dict[str, Any]:
        """
        Load run state from disk.

        Returns:
            Dictionary with state information.
            Default values if file doesn't exist.
        """
        if not self.state_file.exists():
            return {
                "total_ingested": 0,
                "total_failures": 0,
                "last_saved": None,
                "version": self.VERSION
            }

        return self._read(self.state_file)
#   UTILITY:
#   - exists() -> bool
#   - clear() -> None
#
    def exists(self) -> bool:
        return self.stores_file.exists() or self.state_file.exists()

    def clear(self) -> None:
        """
        Delete all snapshot files.
        """
        for file in (self.stores_file, self.state_file):
            if file.exists():
                file.unlink()
                self._sink.info(f"Deleted {file}")
# FILE STRUCTURE:
# ---------------
#   metadata/
#   ├── stores.json   → {relational: {next_id, records}, document: ..., cache: {entries}, graph: ...}
#   └── state.json    → {total_ingested, total_failures, last_saved, version}
#
# =============================================
