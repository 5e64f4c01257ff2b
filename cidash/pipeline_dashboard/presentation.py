"""View models consumed by the table and detail renderers."""

from collections.abc import Callable
from datetime import tzinfo

from pydantic import BaseModel, Field

from cidash.pipeline_dashboard.formatting import (
    PLACEHOLDER,
    format_long_timestamp,
    format_table_timestamp,
    or_placeholder,
)
from cidash.pipeline_dashboard.models.pipeline_run import Job, JobStep, PipelineRun
from cidash.pipeline_dashboard.sorting import (
    SORTABLE_KEYS,
    STARTED_AT_KEY,
    STATUS_KEY,
    SortState,
)
from cidash.pipeline_dashboard.status import (
    COLOR_HEX,
    StatusColor,
    color_for,
    label_for,
)

NO_DATA_MESSAGE = "No data available"
NO_JOBS_MESSAGE = "No jobs available"
NO_STEPS_MESSAGE = "No steps available"
LOADING_MESSAGE = "Loading..."


class StatusChip(BaseModel):
    """Colored status badge."""

    label: str
    color: StatusColor
    hex: str

    @classmethod
    def for_status(cls, status: str | None) -> "StatusChip":
        """Build the chip for a status value."""
        color = color_for(status)
        return cls(label=label_for(status), color=color, hex=COLOR_HEX[color])


class HeadCell(BaseModel):
    """Summary table column header."""

    key: str
    label: str
    sortable: bool = False
    active: bool = False
    direction: str = "asc"


class TableRow(BaseModel):
    """One pipeline run in the summary table."""

    run_id: str
    status: StatusChip
    branch: str
    commit_sha: str
    started_at: str
    duration: str


class StepRow(BaseModel):
    """One step inside an expanded job."""

    name: str
    status: StatusChip
    duration: str


class JobRow(BaseModel):
    """One job in the detail view, collapsed unless toggled open."""

    id: str
    name: str
    status: StatusChip
    duration: str
    expanded: bool = False
    steps: list[StepRow] = Field(default_factory=list)
    message: str | None = None


class DetailView(BaseModel):
    """Everything the detail dialog shows for one run."""

    title: str
    loading: bool = False
    message: str | None = None
    author_name: str = ""
    author_email: str = ""
    avatar_url: str = ""
    commit_message: str = ""
    commit_sha: str = ""
    commit_url: str = ""
    branch: str = ""
    started_at: str = ""
    status: StatusChip | None = None
    duration: str = ""
    jobs: list[JobRow] = Field(default_factory=list)
    jobs_message: str | None = None


_COLUMNS: list[tuple[str, str]] = [
    ("runId", "Run ID"),
    (STATUS_KEY, "Status"),
    ("branch", "Branch"),
    ("commitSha", "Commit SHA"),
    (STARTED_AT_KEY, "Started At"),
    ("duration", "Duration"),
]


def build_head_cells(sort_state: SortState) -> list[HeadCell]:
    """Build table headers, marking the active sort column."""
    cells: list[HeadCell] = []
    for key, label in _COLUMNS:
        sortable = key in SORTABLE_KEYS
        active = sortable and key == sort_state.key
        cells.append(
            HeadCell(
                key=key,
                label=label,
                sortable=sortable,
                active=active,
                direction=sort_state.direction if active else "asc",
            )
        )
    return cells


def build_table_row(run: PipelineRun, tz: tzinfo | None = None) -> TableRow:
    """Build the summary table row for a run."""
    return TableRow(
        run_id=run.run_id,
        status=StatusChip.for_status(run.status),
        branch=or_placeholder(run.branch),
        commit_sha=or_placeholder(run.commit_sha),
        started_at=format_table_timestamp(run.started_at, tz),
        duration=or_placeholder(run.duration),
    )


def build_step_row(step: JobStep) -> StepRow:
    """Build the row for a job step."""
    return StepRow(
        name=or_placeholder(step.name),
        status=StatusChip.for_status(step.status),
        duration=or_placeholder(step.duration),
    )


def job_key(index: int, job: Job) -> str:
    """Key a job's expansion state by id, or by position when it has none."""
    return job.id or f"#{index}"


def build_job_row(job: Job, expanded: bool, key: str | None = None) -> JobRow:
    """Build the row for a job; steps are only listed when expanded."""
    row = JobRow(
        id=job.id if key is None else key,
        name=job.name or "Unnamed Job",
        status=StatusChip.for_status(job.status),
        duration=or_placeholder(job.duration),
        expanded=expanded,
    )
    if not expanded:
        return row

    if not job.steps:
        row.message = NO_STEPS_MESSAGE
    else:
        row.steps = [build_step_row(step) for step in job.steps]
    return row


def build_detail_view(
    run: PipelineRun,
    is_expanded: Callable[[str], bool],
    tz: tzinfo | None = None,
) -> DetailView:
    """Build the detail view for a fetched run."""
    author = run.author
    view = DetailView(
        title=f"Pipeline Run: {or_placeholder(run.run_id)}",
        author_name=author.name if author and author.name else "Unknown",
        author_email=author.email if author and author.email else "N/A",
        avatar_url=author.avatar_url if author else "",
        commit_message=run.commit_message or "No commit message",
        commit_sha=or_placeholder(run.commit_sha),
        commit_url=run.commit_url,
        branch=or_placeholder(run.branch),
        started_at=format_long_timestamp(run.started_at, tz),
        status=StatusChip.for_status(run.status),
        duration=or_placeholder(run.duration),
    )

    if not run.jobs:
        view.jobs_message = NO_JOBS_MESSAGE
    else:
        for index, job in enumerate(run.jobs):
            key = job_key(index, job)
            view.jobs.append(build_job_row(job, is_expanded(key), key))
    return view


def empty_detail_view(run_id: str | None, loading: bool = False) -> DetailView:
    """Build the placeholder detail view shown while loading or on failure."""
    return DetailView(
        title=f"Pipeline Run: {run_id or PLACEHOLDER}",
        loading=loading,
        message=LOADING_MESSAGE if loading else NO_DATA_MESSAGE,
    )
