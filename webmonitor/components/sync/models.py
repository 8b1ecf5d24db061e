from dataclasses import dataclass
from enum import Enum

from webmonitor.domain.entities import Project


class SyncOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REGENERATE_KEY = "regenerate_key"
    REPORT_ALERT = "report_alert"


class SyncStrategy(str, Enum):
    # Pessimistic: throw local state away and fetch again.
    REFETCH = "refetch"
    # Take the server's returned representation as-is.
    REPLACE = "replace"
    # Take only the key from the server's returned representation.
    PATCH_KEY = "patch_key"
    # Optimistic: bump the local count without asking the server.
    INCREMENT_COUNT = "increment_count"
    # The resource is gone; the owner leaves the view.
    NAVIGATE_AWAY = "navigate_away"


@dataclass
class ReconcileInput:
    operation: SyncOperation
    current: Project | None
    server: Project | None = None


@dataclass
class ReconcileOutput:
    strategy: SyncStrategy
    project: Project | None = None
    refetch: bool = False
    navigate_away: bool = False
