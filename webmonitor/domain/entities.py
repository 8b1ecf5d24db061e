from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# --- Session ---

class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    identifier: str = ""
    email: str = ""
    name: str | None = None


class LoginResult(BaseModel):
    token: str
    user: User

# --- Projects ---

class Project(BaseModel):
    """Client-side mirror of a monitored project owned by the backend.

    ``count`` and ``key`` are only ever changed by the server; the client
    asks for a regeneration or reports an alert and mirrors the outcome.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    project_name: str = Field(validation_alias=AliasChoices("projectName", "project_name"))
    email: str
    limit: int
    count: int = 0
    key: str = ""
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at")
    )

    @property
    def limit_exceeded(self) -> bool:
        return self.count >= self.limit


class ProjectDraft(BaseModel):
    """Edit buffer for the three user-editable fields.

    ``limit`` is kept as the raw text the user typed.
    """

    name: str
    email: str
    limit: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDraft":
        return cls(name=project.project_name, email=project.email, limit=str(project.limit))
