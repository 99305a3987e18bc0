# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to the orchestrator.
#   State is loaded from the snapshot directory before each
#   command and saved after it, so records persist between runs.
#
# COMMANDS:
# ---------
# 1. Ingest one request:
#    python -m polystore.cli ingest --type transaction --payload '{"amount": 100}'
#    python -m polystore.cli ingest --type cache --key sess_1 --payload '{"userId": "u1"}'
#    python -m polystore.cli ingest --body '{"type": "graph", "payload": {...}}'
#
# 2. Show everything currently stored:
#    python -m polystore.cli storage
#
# 3. Reset all stores and counters:
#    python -m polystore.cli clear
#
# 4. Load the canned demo data:
#    python -m polystore.cli demo
#
# 5. Show status:
#    python -m polystore.cli status
#
# 6. Stream requests from an HTTP endpoint:
#    python -m polystore.cli stream --url http://127.0.0.1:8000/ingest/next --count 100
#
# Exit codes: 0 success, 1 request/storage failure, 2 usage error.
#
# ==============================================

import argparse
import json
from dataclasses import replace
from typing import Any, List, Optional

from polystore import __version__
from polystore.api_stream import stream_into
from polystore.config import get_config
from polystore.errors import PolystoreError
from polystore.ingest_and_route import IngestAndRoute
from polystore.log_sink import make_sink


def _json_arg(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}")


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polystore",
        description="Route typed payloads to relational, document, cache or graph stores."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--snapshot-dir", help="Directory holding saved store state")
    parser.add_argument("--quiet", action="store_true", help="Suppress log lines, print results only")

    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Classify and store one request")
    ingest.add_argument("--type", dest="data_type", help="Declared data type used for routing")
    ingest.add_argument("--key", help="Explicit cache key")
    ingest.add_argument("--payload", type=_json_arg, help="Payload as a JSON object")
    ingest.add_argument("--body", type=_json_arg, help="Whole request body as JSON (overrides other flags)")

    sub.add_parser("storage", help="Dump the contents of every store")
    sub.add_parser("clear", help="Empty all stores and reset identifiers")
    sub.add_parser("demo", help="Clear and load the canned demo requests")
    sub.add_parser("status", help="Show store counts and totals")

    stream = sub.add_parser("stream", help="Ingest requests pulled from an HTTP endpoint")
    stream.add_argument("--url", help="Endpoint URL (default: DATA_STREAM_URL)")
    stream.add_argument("--count", type=int, default=None, help="Stop after this many requests")
    stream.add_argument("--delay", type=float, default=0.1, help="Seconds between polls")

    return parser


def _request_body(args: argparse.Namespace) -> Optional[dict]:
    if args.body is not None:
        return args.body
    body = {}
    if args.data_type is not None:
        body["type"] = args.data_type
    if args.key is not None:
        body["key"] = args.key
    if args.payload is not None:
        body["payload"] = args.payload
    return body


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    if args.snapshot_dir:
        config = replace(config, persistence=replace(config.persistence, snapshot_dir=args.snapshot_dir))
    if args.quiet:
        config = replace(config, log=replace(config.log, enabled=False))

    sink = make_sink(config.log.enabled)

    # Loading, the command and the save on exit all report the same way.
    try:
        with IngestAndRoute(config=config, sink=sink, persist=True) as pipeline:
            if args.command == "ingest":
                result = pipeline.ingest_raw(_request_body(args))
                _emit(result.to_dict())
            elif args.command == "storage":
                _emit({"success": True, "storage": pipeline.get_storage()})
            elif args.command == "clear":
                pipeline.clear()
                _emit({"success": True, "message": "All storage cleared"})
            elif args.command == "demo":
                results = pipeline.load_demo()
                _emit({"success": True, "message": "Demo data loaded", "items_loaded": len(results)})
            elif args.command == "status":
                _emit(pipeline.get_status())
            elif args.command == "stream":
                url = args.url or config.data_stream_url
                try:
                    summary = stream_into(
                        pipeline, url,
                        max_records=args.count,
                        delay=args.delay,
                        sink=sink
                    )
                except KeyboardInterrupt:
                    sink.warn("Stream stopped (Ctrl+C)")
                    summary = {"interrupted": True}
                _emit({"success": True, **summary})
    except PolystoreError as e:
        sink.error(f"{args.command} failed", e)
        _emit(e.to_dict())
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
