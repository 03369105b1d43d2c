"""salesprep: normalization and reconciliation of raw sales transaction records."""

from salesprep.config import EngineConfig, load_config
from salesprep.engines.pipeline import normalize_and_reconcile

__all__ = ["EngineConfig", "load_config", "normalize_and_reconcile"]
