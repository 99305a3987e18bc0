# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Takes the declared type of an incoming payload and applies
#   an ordered keyword table to produce a RoutingDecision.
#   This is the "brain" — it decides which store gets the data.
#
# CLASS: Classifier
# -----------------
#   Stateless apart from the injected log sink.
#
#   Constructor:
#   ------------
#   - __init__(rules=ROUTING_RULES, sink=None)
#
#   Methods:
#   --------
#   - classify(data_type: str | None) -> RoutingDecision
#       Applies rules in table order, first match wins:
#
#       RULE 1: transaction, sql, payment, ...   → RELATIONAL
#       RULE 2: document, json, log, event, ...  → DOCUMENT
#       RULE 3: cache, session, token, rate, ... → CACHE
#       RULE 4: graph, social, friend, link, ... → GRAPH
#       DEFAULT: nothing matched                 → RELATIONAL
#
#       Unknown data gets the strongest consistency guarantee,
#       not the most permissive store.
#
#   - normalize_type(data_type) -> str  (staticmethod)
#       None / blank → "unknown", otherwise lowercase + strip.
#
# ==============================================

from typing import Optional, Sequence

from polystore.log_sink import NullSink
from .decision import RoutingDecision, RoutingRule, StoreKind


UNKNOWN_TYPE = "unknown"

DEFAULT_STORE = StoreKind.RELATIONAL
DEFAULT_REASON = "Default routing - PostgreSQL provides safe transactional guarantees"

# Order is the tie-break: "transaction_log" hits RELATIONAL before DOCUMENT.
ROUTING_RULES = (
    RoutingRule(
        store=StoreKind.RELATIONAL,
        keywords=("transaction", "transactional", "relational", "sql", "financial",
                  "order", "payment", "account", "user"),
        reason="ACID compliance required for transactional integrity",
    ),
    RoutingRule(
        store=StoreKind.DOCUMENT,
        keywords=("document", "json", "content", "article", "post", "profile",
                  "log", "event", "metadata"),
        reason="Flexible schema for unstructured document storage",
    ),
    RoutingRule(
        store=StoreKind.CACHE,
        keywords=("cache", "session", "token", "temp", "temporary", "fast",
                  "realtime", "counter", "rate"),
        reason="In-memory speed for cache and session data",
    ),
    RoutingRule(
        store=StoreKind.GRAPH,
        keywords=("graph", "relationship", "network", "connection", "social",
                  "recommendation", "path", "link", "friend"),
        reason="Graph traversal for relationship-heavy queries",
    ),
)


class Classifier:
    """
    Maps a declared payload type to a store family.

    The rule table is an explicit ordered sequence; the first rule
    whose keywords match wins, and no match falls back to RELATIONAL.
    """

    def __init__(self, rules: Sequence[RoutingRule] = ROUTING_RULES, sink=None):
        self.rules = tuple(rules)
        self._sink = sink or NullSink()

    @staticmethod
    def normalize_type(data_type: Optional[str]) -> str:
        if data_type is None:
            return UNKNOWN_TYPE
        normalized = str(data_type).strip().lower()
        return normalized or UNKNOWN_TYPE

    def classify(self, data_type: Optional[str]) -> RoutingDecision:
        """
        Decide which store a payload of the given type belongs in.

        Args:
            data_type: The declared type from the request (may be None)

        Returns:
            RoutingDecision with the chosen store and its justification
        """
        normalized = self.normalize_type(data_type)

        decision = RoutingDecision(
            store=DEFAULT_STORE,
            reason=DEFAULT_REASON,
            normalized_type=normalized,
        )
        for rule in self.rules:
            if rule.matches(normalized):
                decision = RoutingDecision(
                    store=rule.store,
                    reason=rule.reason,
                    normalized_type=normalized,
                )
                break

        self._sink.route(normalized, decision.store.engine.upper(), decision.reason)
        return decision
