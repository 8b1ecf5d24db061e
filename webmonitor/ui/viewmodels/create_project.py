import logging
from collections.abc import Callable

from webmonitor.components.drafts import LimitBounds, ValidateDraftInput, run_validate
from webmonitor.domain.entities import ProjectDraft
from webmonitor.ports.api import AlertsApiPort, display_message

logger = logging.getLogger(__name__)

CREATE_FAILED = "Failed to create project. Please try again."


class CreateProjectModel:
    """State of the "Create Project" dialog."""

    def __init__(
        self,
        api: AlertsApiPort,
        on_created: Callable[[], None] | None = None,
        bounds: LimitBounds | None = None,
        default_limit: int = 10,
    ):
        self.api = api
        self.on_created = on_created
        self.bounds = bounds or LimitBounds()
        self.default_limit = default_limit

        self.is_open = False
        self.submitting = False
        self.error = ""
        self.reset()

    def reset(self) -> None:
        self.name = ""
        self.email = ""
        self.limit = str(self.default_limit)

    def open(self) -> None:
        self.is_open = True
        self.error = ""

    def close(self) -> None:
        self.is_open = False

    def submit(self) -> bool:
        """Create the project. Returns True on success."""
        if self.submitting:
            return False

        draft = ProjectDraft(name=self.name, email=self.email, limit=self.limit)
        validation = run_validate(ValidateDraftInput(draft=draft, bounds=self.bounds))
        if not validation.success or validation.limit is None:
            self.error = validation.error or CREATE_FAILED
            return False

        self.submitting = True
        self.error = ""
        try:
            created = self.api.create_project(draft.name.strip(), draft.email.strip(), validation.limit)
        except Exception as e:
            logger.warning(f"Create project failed: {e}")
            self.error = display_message(e, CREATE_FAILED)
            return False
        finally:
            self.submitting = False

        logger.info(f"Created project {created.id}")
        self.is_open = False
        self.reset()
        if self.on_created is not None:
            self.on_created()
        return True
