"""Reconcile module exports."""

from .service import ReconcileService, ReconciliationEngine

__all__ = ["ReconcileService", "ReconciliationEngine"]
