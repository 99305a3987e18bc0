# ==============================================
# Demo Data
# ==============================================
#
# A fixed set of ingest request bodies, two per routing category.
# IngestAndRoute.load_demo() clears every store and ingests these
# in order, which makes them a handy canned fixture as well.
#
# ==============================================

DEMO_REQUESTS = [
    {"type": "transaction", "payload": {"orderId": "ORD-001", "amount": 299.99, "currency": "USD", "status": "completed"}},
    {"type": "transaction", "payload": {"orderId": "ORD-002", "amount": 149.50, "currency": "USD", "status": "pending"}},
    {"type": "document", "payload": {"title": "Product Catalog", "category": "Electronics", "items": 1500}},
    {"type": "document", "payload": {"title": "User Profile", "userId": "USR-123", "preferences": {"theme": "dark"}}},
    {"type": "cache", "key": "session_abc123", "payload": {"userId": "USR-123", "token": "jwt_token_here", "expires": "1h"}},
    {"type": "cache", "key": "rate_limit_api", "payload": {"requests": 95, "limit": 100, "window": "1m"}},
    {"type": "graph", "payload": {
        "labels": ["User"],
        "properties": {"name": "Alice", "id": "USR-001"},
        "relationships": [{"type": "FOLLOWS", "target": "USR-002"}],
    }},
    {"type": "graph", "payload": {
        "labels": ["User"],
        "properties": {"name": "Bob", "id": "USR-002"},
        "relationships": [{"type": "FOLLOWS", "target": "USR-001"}],
    }},
]
