from collections.abc import Mapping
from types import MappingProxyType

from .models import ReconcileInput, ReconcileOutput, SyncOperation, SyncStrategy

# Which strategy each successful mutation uses to bring local state in line
# with the server. Count and key are never computed here: REFETCH reads them
# back, PATCH_KEY copies the server's key, INCREMENT_COUNT mirrors the +1 the
# server applies on a report.
SYNC_POLICY: Mapping[SyncOperation, SyncStrategy] = MappingProxyType({
    SyncOperation.CREATE: SyncStrategy.REFETCH,
    SyncOperation.UPDATE: SyncStrategy.REPLACE,
    SyncOperation.DELETE: SyncStrategy.NAVIGATE_AWAY,
    SyncOperation.REGENERATE_KEY: SyncStrategy.PATCH_KEY,
    SyncOperation.REPORT_ALERT: SyncStrategy.INCREMENT_COUNT,
})


def strategy_for(operation: SyncOperation) -> SyncStrategy:
    return SYNC_POLICY[operation]


def run_reconcile(inp: ReconcileInput) -> ReconcileOutput:
    """
    Compute the local project after a successful mutation.
    Pure: never touches the network. Raises ValueError when the strategy
    needs a project that was not supplied.
    """
    strategy = strategy_for(inp.operation)

    if strategy == SyncStrategy.REFETCH:
        return ReconcileOutput(strategy=strategy, project=inp.current, refetch=True)

    if strategy == SyncStrategy.NAVIGATE_AWAY:
        return ReconcileOutput(strategy=strategy, project=None, navigate_away=True)

    if strategy == SyncStrategy.REPLACE:
        if inp.server is None:
            raise ValueError(f"{inp.operation.value} needs the server representation")
        return ReconcileOutput(strategy=strategy, project=inp.server)

    if inp.current is None:
        raise ValueError(f"{inp.operation.value} needs the current project")

    if strategy == SyncStrategy.PATCH_KEY:
        if inp.server is None:
            raise ValueError(f"{inp.operation.value} needs the server representation")
        return ReconcileOutput(
            strategy=strategy,
            project=inp.current.model_copy(update={"key": inp.server.key}),
        )

    if strategy == SyncStrategy.INCREMENT_COUNT:
        return ReconcileOutput(
            strategy=strategy,
            project=inp.current.model_copy(update={"count": inp.current.count + 1}),
        )

    raise ValueError(f"Unknown strategy: {strategy}")
