"""Reconciliation, validation and aggregation engines."""

from salesprep.engines.aggregator import AggregateTables, Aggregator
from salesprep.engines.pipeline import normalize_and_reconcile, summarize
from salesprep.engines.profiler import RawProfiler
from salesprep.engines.quality import build_quality_metrics
from salesprep.engines.reconciliation import Reconciler
from salesprep.engines.validator import Validator

__all__ = [
    "AggregateTables",
    "Aggregator",
    "RawProfiler",
    "Reconciler",
    "Validator",
    "build_quality_metrics",
    "normalize_and_reconcile",
    "summarize",
]
