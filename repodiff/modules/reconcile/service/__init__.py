from .core import ReconcileService, RunSummary
from .engine import ProbeTally, ReconciliationEngine

__all__ = ["ReconcileService", "RunSummary", "ProbeTally", "ReconciliationEngine"]
