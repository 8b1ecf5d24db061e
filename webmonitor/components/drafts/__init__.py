"""
Drafts component - edit buffers for project forms.

Change detection and client-side validation for the
{name, email, limit} draft used by the create dialog and the detail editor.
"""

from .component import is_changed, parse_limit, run_changes, run_validate
from .models import (
    ChangesInput,
    ChangesOutput,
    DraftValidationOutput,
    LimitBounds,
    ValidateDraftInput,
)

__all__ = [
    # Entry points
    "is_changed",
    "parse_limit",
    "run_changes",
    "run_validate",
    # Models
    "ChangesInput",
    "ChangesOutput",
    "DraftValidationOutput",
    "LimitBounds",
    "ValidateDraftInput",
]
