# ==============================================
# TOPIC 1: ROUTING
# ==============================================
#
# This package decides, from a payload's declared type alone,
# which store family should hold it.
#
# Modules:
# --------
# - decision.py    → StoreKind, RoutingDecision, RoutingRule
# - classifier.py  → Classifier with the ordered keyword table
#
# ==============================================

from .decision import StoreKind, RoutingDecision, RoutingRule
from .classifier import Classifier, ROUTING_RULES, DEFAULT_REASON, UNKNOWN_TYPE

__all__ = [
    "StoreKind",
    "RoutingDecision",
    "RoutingRule",
    "Classifier",
    "ROUTING_RULES",
    "DEFAULT_REASON",
    "UNKNOWN_TYPE",
]
