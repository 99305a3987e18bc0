# ==============================================
# Tests for the HTTP stream client
# ==============================================

import json

import pytest
import requests

from polystore.api_stream import fetch_requests, stream_into


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else json.dumps(body).encode()

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._body


class FakeSession:
    """Replays queued responses (or exceptions) one per GET."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    def get(self, url, timeout=None):
        self.calls += 1
        if not self.responses:
            return FakeResponse(None, status_code=204)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def no_sleep(seconds):
    pass


class TestFetchRequests:
    def test_single_object(self):
        session = FakeSession([FakeResponse({"type": "cache", "payload": {}})])
        assert fetch_requests("http://x", session=session) == [{"type": "cache", "payload": {}}]

    def test_list_filters_non_objects(self):
        session = FakeSession([FakeResponse([{"type": "graph"}, 3, "x"])])
        assert fetch_requests("http://x", session=session) == [{"type": "graph"}]

    def test_no_content(self):
        assert fetch_requests("http://x", session=FakeSession([])) == []

    def test_http_error_raises(self):
        session = FakeSession([FakeResponse({}, status_code=500)])
        with pytest.raises(requests.HTTPError):
            fetch_requests("http://x", session=session)


class TestStreamInto:
    def test_ingests_until_exhausted(self, pipeline):
        session = FakeSession([
            FakeResponse({"type": "transaction", "payload": {"amount": 1}}),
            FakeResponse([{"type": "graph", "payload": {}}, {"type": "json", "payload": {}}]),
        ])
        summary = stream_into(pipeline, "http://x", session=session, sleep=no_sleep)
        assert summary["ingested"] == 3
        assert summary["failed"] == 0
        assert pipeline.get_status()["store_counts"] == {
            "relational": 1, "document": 1, "cache": 0, "graph": 1,
        }

    def test_respects_max_records(self, pipeline):
        session = FakeSession([
            FakeResponse([{"type": "log", "payload": {"n": n}} for n in range(5)]),
        ])
        summary = stream_into(pipeline, "http://x", max_records=2, session=session, sleep=no_sleep)
        assert summary["ingested"] == 2
        assert pipeline.get_status()["store_counts"]["document"] == 2

    def test_ingest_failures_counted_not_fatal(self, pipeline):
        session = FakeSession([
            FakeResponse([{}, {"type": "cache", "key": "k", "payload": {}}]),
        ])
        summary = stream_into(pipeline, "http://x", session=session, sleep=no_sleep)
        assert summary["ingested"] == 1
        assert summary["failed"] == 1

    def test_recovers_from_transient_api_error(self, pipeline):
        session = FakeSession([
            requests.ConnectionError("down"),
            FakeResponse({"type": "token", "payload": {}}),
        ])
        summary = stream_into(pipeline, "http://x", session=session, sleep=no_sleep)
        assert summary["api_errors"] == 1
        assert summary["ingested"] == 1

    def test_gives_up_after_too_many_errors(self, pipeline):
        session = FakeSession([requests.ConnectionError("down")] * 5)
        summary = stream_into(pipeline, "http://x", session=session, max_errors=2, sleep=no_sleep)
        assert summary["api_errors"] == 3
        assert summary["ingested"] == 0
        assert session.calls == 3
