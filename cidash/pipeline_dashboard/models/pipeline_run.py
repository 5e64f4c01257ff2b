"""Models for pipeline runs, jobs, and steps returned by the dashboard API."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _as_text(value: object) -> object:
    """Render scalar payload values as text and anything else as blank."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_status(value: object) -> object:
    # Non-string statuses display as unknown
    return value if isinstance(value, str) else None


class RunStatus(str, Enum):
    """Known pipeline, job, and step statuses."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"
    CANCELLED = "cancelled"


class _ApiModel(BaseModel):
    """Base for API models: camelCase on the wire, frozen once fetched."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Author(_ApiModel):
    """Commit author embedded in a pipeline run."""

    name: str = Field(default="", description="Author display name")
    email: str = Field(default="", description="Author email")
    avatar_url: str = Field(
        default="", alias="avatarUrl", description="Link to the author avatar"
    )

    @field_validator("name", "email", "avatar_url", mode="before")
    @classmethod
    def _text_fields(cls, value: object) -> object:
        return _as_text(value)


class JobStep(_ApiModel):
    """Smallest reported unit of work within a job."""

    name: str = Field(default="", description="Step name")
    status: str | None = Field(default=None, description="Step status")
    duration: str = Field(default="", description="Display duration")
    log: str | None = Field(default=None, description="Optional log reference")

    @field_validator("name", "duration", mode="before")
    @classmethod
    def _text_fields(cls, value: object) -> object:
        return _as_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status_text(cls, value: object) -> object:
        return _as_status(value)


class Job(_ApiModel):
    """Named unit of work within a pipeline run."""

    id: str = Field(default="", description="Job identifier")
    name: str = Field(default="", description="Job name")
    status: str | None = Field(default=None, description="Job status")
    started_at: str = Field(default="", alias="startedAt")
    completed_at: str = Field(default="", alias="completedAt")
    duration: str = Field(default="", description="Display duration")
    steps: list[JobStep] = Field(default_factory=list, description="Ordered steps")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_text(cls, value: object) -> object:
        return _as_status(value)

    @field_validator("steps", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator(
        "name", "started_at", "completed_at", "duration", mode="before"
    )
    @classmethod
    def _text_fields(cls, value: object) -> object:
        return _as_text(value)


class PipelineRun(_ApiModel):
    """One execution of a CI pipeline.

    List responses carry a summary (jobs usually empty); detail responses
    carry the full job and step sequence.
    """

    run_id: str = Field(..., alias="runId", description="Run identifier")
    id: str | None = Field(default=None, description="Backend row identifier")
    status: str | None = Field(default=None, description="Run status")
    branch: str = Field(default="", description="Branch name")
    commit_sha: str = Field(default="", alias="commitSha")
    started_at: str = Field(default="", alias="startedAt")
    duration: str = Field(default="", description="Display duration")
    commit_message: str = Field(default="", alias="commitMessage")
    author: Author | None = Field(default=None, description="Commit author")
    repository_url: str = Field(
        default="",
        validation_alias=AliasChoices("repositoryUrl", "repository_url"),
        serialization_alias="repositoryUrl",
    )
    jobs: list[Job] = Field(default_factory=list, description="Ordered jobs")

    @field_validator("run_id", "id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_text(cls, value: object) -> object:
        return _as_status(value)

    @field_validator("jobs", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator(
        "branch",
        "commit_sha",
        "started_at",
        "duration",
        "commit_message",
        "repository_url",
        mode="before",
    )
    @classmethod
    def _text_fields(cls, value: object) -> object:
        return _as_text(value)

    @property
    def commit_url(self) -> str:
        """Link to the commit on the repository host."""
        base = self.repository_url or "#"
        if self.commit_sha:
            return f"{base}/commit/{self.commit_sha}"
        return base
