# ==============================================
# PolyStore — Polyglot Persistence Orchestration
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# polystore/
# ├── routing/          # Topic 1: Classify a declared type → target store
# ├── storage/          # Topic 2: Per-store adapters (relational, document, cache, graph)
# ├── persistence/      # Topic 3: Store state across restarts
# ├── config.py         # Configuration management
# ├── errors.py         # Error taxonomy (EmptyRequest, AdapterFailure)
# ├── log_sink.py       # Console / no-op log sinks
# ├── request.py        # IngestRequest / IngestResult
# ├── demo.py           # Canned seed requests
# ├── api_stream.py     # Pull ingest requests from an HTTP endpoint
# ├── ingest_and_route.py  # Final orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
