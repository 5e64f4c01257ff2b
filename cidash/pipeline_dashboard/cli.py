"""CLI entry point for the pipeline dashboard."""

import asyncio
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from cidash.pipeline_dashboard.config_loader import load_config
from cidash.pipeline_dashboard.detail_view import DetailState, DetailViewController
from cidash.pipeline_dashboard.list_view import ListViewController
from cidash.pipeline_dashboard.models.dashboard_config import DashboardConfig
from cidash.pipeline_dashboard.presentation import DetailView, StatusChip, job_key
from cidash.pipeline_dashboard.sorting import STARTED_AT_KEY, STATUS_KEY, SortState
from cidash.pipeline_dashboard.sources.http import HttpPipelineSource
from cidash.pipeline_dashboard.status import StatusColor

logger = logging.getLogger(__name__)

app = typer.Typer(help="Read-only dashboard of CI pipeline runs.")

_CHIP_COLORS: dict[StatusColor, str] = {
    "green": typer.colors.GREEN,
    "red": typer.colors.RED,
    "orange": typer.colors.YELLOW,
    "gray": typer.colors.BRIGHT_BLACK,
}


class SortColumn(str, Enum):
    """Sortable table columns."""

    status = STATUS_KEY
    started_at = STARTED_AT_KEY


class SortOrder(str, Enum):
    """Table sort directions."""

    asc = "asc"
    desc = "desc"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,  # Force reconfiguration even if already set up
    )


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, help="Dashboard API base URL"),
    config: Optional[Path] = typer.Option(  # noqa: B008
        None, help="Path to a YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Read-only dashboard of CI pipeline runs."""
    _configure_logging(verbose)

    try:
        ctx.obj = load_config(config, base_url)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.debug(f"Using dashboard API at {ctx.obj.base_url}")


@app.command("list")
def list_runs(
    ctx: typer.Context,
    sort_by: SortColumn = typer.Option(SortColumn.started_at, help="Sort column"),
    order: SortOrder = typer.Option(SortOrder.desc, help="Sort direction"),
    select: Optional[str] = typer.Option(None, help="Open the detail of a run"),
) -> None:
    """Show the most recent pipeline runs."""
    config: DashboardConfig = ctx.obj
    controller = ListViewController(HttpPipelineSource(config))
    controller.sort_state = SortState(key=sort_by.value, direction=order.value)

    asyncio.run(_load_and_select(controller, select))
    _echo_table(controller)

    if controller.detail.is_open:
        typer.echo("")
        _echo_detail(controller.detail.view())


async def _load_and_select(
    controller: ListViewController, run_id: str | None
) -> None:
    await controller.load()
    if run_id:
        await controller.activate(run_id)


@app.command("show")
def show_run(
    ctx: typer.Context,
    run_id: str = typer.Argument(..., help="Pipeline run identifier"),
    expand: list[str] = typer.Option(  # noqa: B006, B008
        [],
        "--expand",
        help="Job identifier, or #<position> for jobs without one (repeatable)",
    ),
    expand_all: bool = typer.Option(False, "--expand-all", help="Expand every job"),
) -> None:
    """Show one pipeline run with its jobs and steps."""
    config: DashboardConfig = ctx.obj
    controller = DetailViewController(HttpPipelineSource(config))

    asyncio.run(controller.open(run_id))

    if controller.state is DetailState.READY and controller.run is not None:
        job_ids = {job_key(i, job) for i, job in enumerate(controller.run.jobs)}
        for job_id in sorted(job_ids if expand_all else job_ids & set(expand)):
            controller.toggle_job(job_id)

    _echo_detail(controller.view())


def _chip(chip: StatusChip, width: int = 0) -> str:
    return typer.style(chip.label.ljust(width), fg=_CHIP_COLORS[chip.color], bold=True)


def _echo_table(controller: ListViewController) -> None:
    """Print the summary table."""
    headers: list[str] = []
    for cell in controller.head_cells():
        label = cell.label
        if cell.active:
            label += " ▲" if cell.direction == "asc" else " ▼"
        headers.append(label)

    rows = controller.rows()
    columns = [
        [row.run_id for row in rows],
        [row.status.label for row in rows],
        [row.branch for row in rows],
        [row.commit_sha for row in rows],
        [row.started_at for row in rows],
        [row.duration for row in rows],
    ]
    widths = [
        max([len(header)] + [len(value) for value in values])
        for header, values in zip(headers, columns)
    ]

    typer.echo("  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip())
    for row in rows:
        cells = [
            row.run_id.ljust(widths[0]),
            _chip(row.status, widths[1]),
            row.branch.ljust(widths[2]),
            row.commit_sha.ljust(widths[3]),
            row.started_at.ljust(widths[4]),
            row.duration,
        ]
        typer.echo("  ".join(cells))


def _echo_detail(view: DetailView | None) -> None:
    """Print the detail dialog."""
    if view is None:
        return

    typer.echo(typer.style(view.title, bold=True))
    if view.message:
        typer.echo(view.message)
        return

    typer.echo("")
    typer.echo(f"{view.author_name} <{view.author_email}>")
    typer.echo(view.commit_message)
    typer.echo(f"Commit: {view.commit_sha} ({view.commit_url})")

    typer.echo("")
    typer.echo("Pipeline Information")
    typer.echo(f"  Branch:     {view.branch}")
    typer.echo(f"  Started At: {view.started_at}")
    if view.status is not None:
        typer.echo(f"  Status:     {_chip(view.status)}")
    typer.echo(f"  Duration:   {view.duration}")

    typer.echo("")
    typer.echo("Jobs")
    if view.jobs_message:
        typer.echo(f"  {view.jobs_message}")
        return

    for job in view.jobs:
        marker = "v" if job.expanded else ">"
        typer.echo(f"  {marker} {job.name}  {_chip(job.status)}  {job.duration}")
        if not job.expanded:
            continue
        if job.message:
            typer.echo(f"      {job.message}")
        for step in job.steps:
            typer.echo(f"      {step.name}  {_chip(step.status)}  {step.duration}")


if __name__ == "__main__":  # pragma: no cover
    app()
