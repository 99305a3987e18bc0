# ==============================================
# Tests for SnapshotStore and persistent pipelines
# ==============================================

import json

import pytest

from polystore.errors import AdapterFailure, SnapshotError
from polystore.ingest_and_route import IngestAndRoute
from polystore.persistence import SnapshotStore


class Uncopyable:
    def __deepcopy__(self, memo):
        raise RuntimeError("cannot copy")


class TestSnapshotStore:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "snap"
        SnapshotStore(str(target))
        assert target.is_dir()

    def test_fresh_store_has_nothing(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        assert not store.exists()
        assert store.load_stores() is None
        assert store.load_state()["total_ingested"] == 0

    def test_save_and_load(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        state = {"relational": {"next_id": 2, "records": [{"id": 1}]}}
        store.save_all(state, total_ingested=1)

        assert store.exists()
        assert store.load_stores() == state
        assert store.load_state()["total_ingested"] == 1
        assert json.loads(store.stores_file.read_text()) == state

    def test_clear_removes_files(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        store.save_all({}, total_ingested=0)
        store.clear()
        assert not store.exists()

    def test_unserializable_state_keeps_previous_files(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        good = {"document": {"next_id": 2, "records": [{"_id": "doc_1"}]}}
        store.save_all(good, total_ingested=1)

        with pytest.raises(SnapshotError) as exc_info:
            store.save_all({"document": {(1, 2): "x"}}, total_ingested=2)

        assert exc_info.value.phase == "persistence"
        assert store.load_stores() == good
        assert store.load_state()["total_ingested"] == 1
        assert not list(tmp_path.glob("*.tmp"))

    def test_corrupt_stores_file_raises(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        store.stores_file.write_text("{\"relational\": ")
        with pytest.raises(SnapshotError) as exc_info:
            store.load_stores()
        assert exc_info.value.path == str(store.stores_file)
        assert exc_info.value.to_dict()["phase"] == "persistence"

    def test_non_object_state_file_raises(self, tmp_path):
        store = SnapshotStore(str(tmp_path))
        store.state_file.write_text("[1, 2]")
        with pytest.raises(SnapshotError):
            store.load_state()


class TestPersistentPipeline:
    def test_state_survives_restart(self, app_config):
        with IngestAndRoute(config=app_config, persist=True) as first:
            first.ingest_raw({"type": "transaction", "payload": {"amount": 1}})
            first.ingest_raw({"type": "cache", "key": "k", "payload": {"v": 1}})

        second = IngestAndRoute(config=app_config, persist=True)
        storage = second.get_storage()
        assert storage["relational"]["count"] == 1
        assert storage["cache"]["entries"]["k"]["value"] == {"v": 1}
        assert second.get_status()["total_ingested"] == 2

        assert second.ingest_raw({"type": "transaction", "payload": {}}).record["id"] == 2

    def test_clear_persists(self, app_config):
        with IngestAndRoute(config=app_config, persist=True) as first:
            first.load_demo()
            first.clear()

        second = IngestAndRoute(config=app_config, persist=True)
        assert sum(second.get_status()["store_counts"].values()) == 0

    def test_non_persistent_pipeline_writes_nothing(self, app_config, tmp_path):
        with IngestAndRoute(config=app_config) as pipeline:
            pipeline.ingest_raw({"type": "graph", "payload": {}})
        assert not (tmp_path / "snapshots").exists()

    def test_failures_survive_restart(self, app_config):
        with IngestAndRoute(config=app_config, persist=True) as first:
            first.ingest_raw({"type": "transaction", "payload": {}})
            with pytest.raises(AdapterFailure):
                first.ingest_raw({"type": "transaction", "payload": {"bad": Uncopyable()}})

        status = IngestAndRoute(config=app_config, persist=True).get_status()
        assert status["total_ingested"] == 1
        assert status["total_failures"] == 1

    def test_failed_save_keeps_last_good_snapshot(self, app_config):
        pipeline = IngestAndRoute(config=app_config, persist=True)
        pipeline.ingest_raw({"type": "json", "payload": {"a": 1}})
        pipeline.save()

        pipeline.ingest_raw({"type": "json", "payload": {(1, 2): "tuple key"}})
        with pytest.raises(SnapshotError):
            pipeline.save()

        reloaded = IngestAndRoute(config=app_config, persist=True)
        documents = reloaded.get_storage()["document"]
        assert documents["count"] == 1
        assert documents["records"][0]["a"] == 1
        assert reloaded.get_status()["total_ingested"] == 1

    def test_corrupt_snapshot_raises_on_open(self, app_config, tmp_path):
        snapshot_dir = tmp_path / "snapshots"
        snapshot_dir.mkdir()
        (snapshot_dir / "stores.json").write_text("not json")

        with pytest.raises(SnapshotError) as exc_info:
            IngestAndRoute(config=app_config, persist=True)
        assert "stores.json" in exc_info.value.description

    def test_malformed_store_state_raises_on_open(self, app_config, tmp_path):
        snapshot_dir = tmp_path / "snapshots"
        snapshot_dir.mkdir()
        (snapshot_dir / "stores.json").write_text(json.dumps({"relational": {"next_id": "x"}}))

        with pytest.raises(SnapshotError):
            IngestAndRoute(config=app_config, persist=True)
