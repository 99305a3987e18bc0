# ==============================================
# API Stream
# ==============================================
#
# PURPOSE:
#   Pull ingest request bodies from an HTTP endpoint and feed
#   them into an IngestAndRoute pipeline. The endpoint may return
#   one request object or a list of them per GET.
#
# FUNCTIONS:
# ----------
# - fetch_requests(url, session=None, timeout=10) -> list[dict]
#
# - stream_into(pipeline, url, max_records=None, delay=0.1, ...) -> dict
#     Polls until max_records have been handled, the endpoint
#     returns nothing, or more than max_errors consecutive API
#     errors occur. Ingest failures are counted, never fatal.
#     Returns {ingested, failed, api_errors, elapsed_seconds}.
#
# ==============================================

import time
from typing import Any, Callable, Dict, List, Optional

import requests

from polystore.errors import PolystoreError
from polystore.log_sink import NullSink


def fetch_requests(url: str, session: Optional[requests.Session] = None, timeout: float = 10) -> List[Dict[str, Any]]:
    http = session or requests
    response = http.get(url, timeout=timeout)
    response.raise_for_status()
    if response.status_code == 204 or not response.content:
        return []

    body = response.json()
    if isinstance(body, list):
        return [item for item in body if isinstance(item, dict)]
    if isinstance(body, dict):
        return [body] if body else []
    return []


def stream_into(
    pipeline,
    url: str,
    max_records: Optional[int] = None,
    delay: float = 0.1,
    session: Optional[requests.Session] = None,
    max_errors: int = 10,
    sink=None,
    sleep: Callable[[float], None] = time.sleep
) -> Dict[str, Any]:
    """
    Stream request bodies from `url` into `pipeline`.

    Args:
        pipeline: IngestAndRoute instance
        url: Endpoint returning one request body or a list of them
        max_records: Stop after this many bodies (None = until exhausted)
        delay: Seconds to wait between polls
        session: Optional requests.Session to reuse connections
        max_errors: Consecutive API errors tolerated before giving up
        sink: Log sink for progress lines

    Returns:
        Summary counts for the run.
    """
    sink = sink or NullSink()
    ingested = 0
    failed = 0
    api_errors = 0
    consecutive_errors = 0
    start_time = time.time()

    def handled() -> int:
        return ingested + failed

    while max_records is None or handled() < max_records:
        try:
            bodies = fetch_requests(url, session=session)
        except requests.RequestException as e:
            api_errors += 1
            consecutive_errors += 1
            sink.error("API error", e)
            if consecutive_errors > max_errors:
                sink.warn("Too many errors, stopping stream")
                break
            sleep(1)
            continue

        consecutive_errors = 0
        if not bodies:
            sink.info("Source returned no requests, stopping stream")
            break

        for body in bodies:
            if max_records is not None and handled() >= max_records:
                break
            try:
                pipeline.ingest_raw(body)
                ingested += 1
            except PolystoreError as e:
                failed += 1
                sink.error(f"Ingest failed ({e.phase})", e)

            if handled() % 10 == 0:
                sink.info(f"{ingested} requests ingested, {failed} failed")

        if delay:
            sleep(delay)

    return {
        "ingested": ingested,
        "failed": failed,
        "api_errors": api_errors,
        "elapsed_seconds": round(time.time() - start_time, 3),
    }
