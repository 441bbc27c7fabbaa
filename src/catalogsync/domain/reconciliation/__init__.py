"""List reconciliation engine.

Flow of one pass:
1) fetch the package list, the deny list and the persisted list concurrently
2) drop denied packages (case-insensitive)
3) diff against the persisted list and apply the diff
4) reconcile each custom collection's bounded membership independently
"""

from __future__ import annotations

from .apply import reconcile_lists
from .canonicalization import CanonicalKey, canonical_key, canonical_set, deduplicate
from .context import LoggingMetricsSink, MetricsSink, ReconciliationContext
from .custom_collections import (
    CollectionReconciliation,
    bound_incoming,
    reconcile_custom_collection,
    truncate,
)
from .deny_list import process_deny_list
from .diff import ListDiff, diff
from .orchestrator import (
    CollectionOutcome,
    ListReconciler,
    ReconciliationResult,
    UnitOfWorkFactory,
    reconcile,
)

__all__ = [
    "CanonicalKey",
    "CollectionOutcome",
    "CollectionReconciliation",
    "ListDiff",
    "ListReconciler",
    "LoggingMetricsSink",
    "MetricsSink",
    "ReconciliationContext",
    "ReconciliationResult",
    "UnitOfWorkFactory",
    "bound_incoming",
    "canonical_key",
    "canonical_set",
    "deduplicate",
    "diff",
    "process_deny_list",
    "reconcile",
    "reconcile_custom_collection",
    "reconcile_lists",
    "truncate",
]
