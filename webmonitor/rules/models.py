from pydantic import BaseModel, Field, model_validator


class ProjectRules(BaseModel):
    slug: str
    name: str = "WebMonitor"


class ApiRules(BaseModel):
    base_url: str
    # Host shown in the sample curl command; defaults to base_url.
    public_url: str | None = None

    @property
    def report_url(self) -> str:
        return (self.public_url or self.base_url).rstrip("/")


class StorageRules(BaseModel):
    token_key: str = "token"
    path: str = ".webmonitor/client_storage.json"


class UiRules(BaseModel):
    copy_feedback_seconds: float = Field(default=2.0, gt=0)


class ProjectLimitRules(BaseModel):
    default_limit: int = 10
    limit_min: int = 1
    limit_max: int = 1000

    @model_validator(mode="after")
    def _check_range(self) -> "ProjectLimitRules":
        if self.limit_min < 1:
            raise ValueError("limit_min must be a positive integer")
        if self.limit_max < self.limit_min:
            raise ValueError("limit_max must be >= limit_min")
        if not self.limit_min <= self.default_limit <= self.limit_max:
            raise ValueError("default_limit must lie within [limit_min, limit_max]")
        return self


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    api: ApiRules
    storage: StorageRules = Field(default_factory=StorageRules)
    ui: UiRules = Field(default_factory=UiRules)
    projects: ProjectLimitRules = Field(default_factory=ProjectLimitRules)
    ops: OpsRules = Field(default_factory=OpsRules)
