# ==============================================
# IngestAndRoute — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the topics together into a
#   single entrypoint. External callers (CLI, stream client, tests)
#   interact with this class only.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                    IngestAndRoute                        │
#   │                                                          │
#   │   raw body ──► IngestRequest.from_dict  (EmptyRequest)   │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: ROUTING                             │        │
#   │  │  Classifier.classify(type) → RoutingDecision │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ decision                               │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: STORAGE                             │        │
#   │  │  RecordRouter → one of four store adapters   │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ record                                 │
#   │                 ▼                                        │
#   │        IngestResult {decision, record, timestamp}        │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: PERSISTENCE (optional)              │        │
#   │  │  SnapshotStore.save_all(...) on save/close   │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: IngestAndRoute
# ---------------------
#
#   Constructor:
#   ------------
#   - __init__(config=None, stores=None, sink=None, persist=False)
#       1. Load config (from .env or passed in)
#       2. Use the given StoreSet or build a fresh one
#       3. Wire Classifier and RecordRouter to the same log sink
#       4. If persist: open SnapshotStore and load previous state
#
#   Public Methods (User-facing API):
#   ---------------------------------
#   - ingest(request: IngestRequest) -> IngestResult
#   - ingest_raw(body: dict | None) -> IngestResult
#   - ingest_batch(bodies: list[dict]) -> list[IngestResult]
#   - get_storage() -> dict         → snapshot of all stores
#   - clear() -> None               → empty all stores, reset counters
#   - load_demo() -> list[IngestResult]
#   - get_status() -> dict
#   - save() -> None                → write state if persisting
#   - close() -> None
#   - stores, classifier            → read-only access to the wired parts
#
#   With persist=True, unreadable saved state and failed saves
#   raise SnapshotError; the last good snapshot stays on disk.
#
# ==============================================

import threading
from typing import Any, Dict, List, Optional

from polystore.config import AppConfig, get_config
from polystore.demo import DEMO_REQUESTS
from polystore.errors import AdapterFailure, EmptyRequest, SnapshotError
from polystore.log_sink import make_sink
from polystore.persistence.snapshot_store import SnapshotStore
from polystore.request import IngestRequest, IngestResult
from polystore.routing.classifier import Classifier
from polystore.storage.base import utc_now
from polystore.storage.record_router import RecordRouter
from polystore.storage.store_set import StoreSet


class IngestAndRoute:
    """
    Main orchestrator: classify a request, store it, report both.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        stores: Optional[StoreSet] = None,
        sink=None,
        persist: bool = False
    ):
        """
        Initialize the orchestrator with all components.

        Args:
            config: Application configuration. If None, loads from environment.
            stores: Store state to operate on. If None, a fresh empty StoreSet.
            sink: Log sink. If None, chosen from config.log.enabled.
            persist: Load state from and save state to config.persistence.snapshot_dir.
        """
        self._config = config or get_config()
        self._sink = sink or make_sink(self._config.log.enabled)

        self._stores = stores or StoreSet(self._config.cache)
        self._classifier = Classifier(sink=self._sink)
        self._record_router = RecordRouter(self._stores, sink=self._sink)

        self._stats_lock = threading.Lock()
        self._total_ingested = 0
        self._total_failures = 0

        self._snapshot_store: Optional[SnapshotStore] = None
        if persist:
            self._snapshot_store = SnapshotStore(
                self._config.persistence.snapshot_dir,
                sink=self._sink
            )
            self._load_previous_state()

    @property
    def stores(self) -> StoreSet:
        return self._stores

    @property
    def classifier(self) -> Classifier:
        return self._classifier

    def ingest(self, request: IngestRequest) -> IngestResult:
        """
        Classify one request and store its payload.

        Args:
            request: The request to route.

        Returns:
            IngestResult with the routing decision and the stored record.

        Raises:
            EmptyRequest: request carries no type, key or payload.
            AdapterFailure: the chosen adapter failed; nothing was stored.
        """
        if request.is_empty():
            raise EmptyRequest()

        decision = self._classifier.classify(request.type)

        try:
            record = self._record_router.route(decision, request.payload, key=request.key)
        except AdapterFailure:
            with self._stats_lock:
                self._total_failures += 1
            raise

        with self._stats_lock:
            self._total_ingested += 1

        self._sink.success(f"Data ingested successfully → {decision.store.engine}")
        return IngestResult(
            decision=decision,
            record=record,
            timestamp=utc_now().isoformat()
        )

    def ingest_raw(self, body: Optional[Dict[str, Any]]) -> IngestResult:
        """
        Parse a raw request body and ingest it.

        Raises:
            EmptyRequest: body is None or empty.
        """
        try:
            request = IngestRequest.from_dict(body)
        except EmptyRequest:
            self._sink.warn("Empty request body received")
            raise
        return self.ingest(request)

    def ingest_batch(self, bodies: List[Dict[str, Any]]) -> List[IngestResult]:
        return [self.ingest_raw(body) for body in bodies]

    def get_storage(self) -> Dict[str, Dict[str, Any]]:
        return self._stores.snapshot()

    def clear(self) -> None:
        self._stores.clear()
        self._sink.info("All storage cleared")

    def load_demo(self) -> List[IngestResult]:
        """
        Reset all stores and ingest the canned demo requests.

        Returns:
            One IngestResult per demo request, in order.
        """
        self.clear()
        results = self.ingest_batch(DEMO_REQUESTS)
        self._sink.success(f"Demo data loaded ({len(results)} items)")
        return results

    def get_status(self) -> Dict[str, Any]:
        with self._stats_lock:
            total_ingested = self._total_ingested
            total_failures = self._total_failures
        return {
            "store_counts": self._stores.counts(),
            "total_ingested": total_ingested,
            "total_failures": total_failures,
            "persistent": self._snapshot_store is not None,
            "timestamp": utc_now().isoformat()
        }

    def save(self) -> None:
        """Write store state to the snapshot directory, if persisting."""
        if self._snapshot_store is None:
            return
        with self._stats_lock:
            total_ingested = self._total_ingested
            total_failures = self._total_failures
        self._snapshot_store.save_all(
            stores_state=self._stores.export_state(),
            total_ingested=total_ingested,
            total_failures=total_failures
        )

    def _load_previous_state(self) -> None:
        """
        Restore stores and counters saved by a previous run.
        """
        if not self._snapshot_store.exists():
            self._sink.info("No previous snapshot found, starting fresh")
            return

        stores_state = self._snapshot_store.load_stores()
        state = self._snapshot_store.load_state()
        try:
            if stores_state:
                self._stores.restore_state(stores_state)
            self._total_ingested = int(state.get("total_ingested", 0))
            self._total_failures = int(state.get("total_failures", 0))
        except (AttributeError, TypeError, ValueError) as e:
            raise SnapshotError(
                str(self._snapshot_store.storage_dir),
                f"Malformed snapshot: {e}"
            ) from e

        counts = self._stores.counts()
        self._sink.success(
            f"Restored state: {self._total_ingested} requests ingested, "
            f"{sum(counts.values())} records held"
        )

    def close(self) -> None:
        self.save()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
