from dataclasses import dataclass, field
from typing import Any

from webmonitor.domain.entities import Project, ProjectDraft


@dataclass
class LimitBounds:
    minimum: int = 1
    maximum: int = 1000


@dataclass
class ValidateDraftInput:
    draft: ProjectDraft
    bounds: LimitBounds = field(default_factory=LimitBounds)


@dataclass
class DraftValidationOutput:
    success: bool = False
    error: str | None = None
    limit: int | None = None


@dataclass
class ChangesInput:
    draft: ProjectDraft
    project: Project


@dataclass
class ChangesOutput:
    # Wire names -> new values, only for fields that differ.
    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.changes)
