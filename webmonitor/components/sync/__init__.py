"""
Sync component - how local project state follows the server after a mutation.

The operation -> strategy table is the single place where optimistic and
pessimistic updates are chosen.
"""

from .component import SYNC_POLICY, run_reconcile, strategy_for
from .models import ReconcileInput, ReconcileOutput, SyncOperation, SyncStrategy

__all__ = [
    # Entry points
    "SYNC_POLICY",
    "run_reconcile",
    "strategy_for",
    # Models
    "ReconcileInput",
    "ReconcileOutput",
    "SyncOperation",
    "SyncStrategy",
]
