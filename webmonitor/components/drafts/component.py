import re

from webmonitor.domain.entities import Project, ProjectDraft

from .models import (
    ChangesInput,
    ChangesOutput,
    DraftValidationOutput,
    ValidateDraftInput,
)

_LIMIT_PATTERN = re.compile(r"[0-9]+")


def parse_limit(text: str) -> int | None:
    """
    Parse a typed alert limit. Surrounding whitespace and leading zeros are
    accepted; anything else that is not ASCII digits is rejected (None).
    """
    stripped = text.strip()
    if not _LIMIT_PATTERN.fullmatch(stripped):
        return None
    return int(stripped)


def run_changes(inp: ChangesInput) -> ChangesOutput:
    """
    Field-by-field diff of draft against the authoritative project.

    Name and email compare and are sent with surrounding whitespace removed,
    the same form validation checks. The limit compares numerically; an
    unparsable limit always counts as a change.
    """
    changes: dict[str, object] = {}
    name = inp.draft.name.strip()
    if name != inp.project.project_name:
        changes["projectName"] = name
    email = inp.draft.email.strip()
    if email != inp.project.email:
        changes["email"] = email

    limit = parse_limit(inp.draft.limit)
    if limit is None:
        changes["limit"] = inp.draft.limit
    elif limit != inp.project.limit:
        changes["limit"] = limit

    return ChangesOutput(changes=changes)


def is_changed(draft: ProjectDraft, project: Project) -> bool:
    return run_changes(ChangesInput(draft=draft, project=project)).changed


def run_validate(inp: ValidateDraftInput) -> DraftValidationOutput:
    draft = inp.draft
    if not draft.name.strip():
        return DraftValidationOutput(success=False, error="Project name is required.")

    email = draft.email.strip()
    if not email or "@" not in email:
        return DraftValidationOutput(success=False, error="A valid alert email is required.")

    limit = parse_limit(draft.limit)
    if limit is None:
        return DraftValidationOutput(success=False, error="Alert limit must be a whole number.")

    if not inp.bounds.minimum <= limit <= inp.bounds.maximum:
        return DraftValidationOutput(
            success=False,
            error=f"Alert limit must be between {inp.bounds.minimum} and {inp.bounds.maximum}.",
        )

    return DraftValidationOutput(success=True, limit=limit)
