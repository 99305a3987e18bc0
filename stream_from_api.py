#!/usr/bin/env python3
"""
Stream ingest requests from an HTTP endpoint into the routing pipeline
"""

import sys

from polystore.api_stream import stream_into
from polystore.config import get_config
from polystore.ingest_and_route import IngestAndRoute
from polystore.log_sink import ConsoleSink


def stream_data(api_url: str = None, max_records: int = None, delay: float = 0.1):
    """
    Stream data from the API into the pipeline.

    Args:
        api_url: The API endpoint URL (default: DATA_STREAM_URL)
        max_records: Maximum number of requests to ingest (None = until exhausted)
        delay: Delay between requests in seconds
    """
    config = get_config()
    api_url = api_url or config.data_stream_url
    sink = ConsoleSink()

    print("=" * 60)
    print("Streaming Requests from API to PolyStore")
    print("=" * 60)

    print(f"\n1. Initializing pipeline...")
    with IngestAndRoute(config=config, sink=sink, persist=True) as pipeline:
        print("✓ Pipeline initialized successfully")

        print(f"\n2. Starting stream from {api_url}")
        print(f"   Max records: {max_records if max_records else 'unlimited'}")
        print(f"   Delay: {delay}s between requests")
        print("\n   Press Ctrl+C to stop streaming...\n")

        try:
            summary = stream_into(pipeline, api_url, max_records=max_records, delay=delay, sink=sink)
        except KeyboardInterrupt:
            print("\n\n3. Stopping stream (Ctrl+C detected)...")
            summary = None

        status = pipeline.get_status()

    print(f"\n4. Final Statistics:")
    if summary:
        print(f"   - Requests ingested: {summary['ingested']}")
        print(f"   - Ingest failures: {summary['failed']}")
        print(f"   - API errors: {summary['api_errors']}")
        print(f"   - Time elapsed: {summary['elapsed_seconds']:.1f}s")
    for store, count in status["store_counts"].items():
        print(f"   - {store}: {count}")

    print("\n" + "=" * 60)
    print("✓ Streaming completed, state saved")
    print("=" * 60)


if __name__ == "__main__":
    max_records = int(sys.argv[1]) if len(sys.argv) > 1 else None
    url = sys.argv[2] if len(sys.argv) > 2 else None
    stream_data(api_url=url, max_records=max_records)
