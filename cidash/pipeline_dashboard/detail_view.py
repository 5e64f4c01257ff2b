"""Controller for the pipeline run detail dialog."""

import logging
from datetime import tzinfo
from enum import Enum

from cidash.pipeline_dashboard.errors import DashboardError
from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun
from cidash.pipeline_dashboard.presentation import (
    DetailView,
    build_detail_view,
    empty_detail_view,
)
from cidash.pipeline_dashboard.sources.base import PipelineSource

logger = logging.getLogger(__name__)


class DetailState(str, Enum):
    """Lifecycle of the detail dialog."""

    CLOSED = "closed"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"


class DetailViewController:
    """Owns the detail of the currently open pipeline run.

    Every ``open`` fetches from scratch. A response is only committed if no
    newer ``open`` or ``close`` happened while it was in flight, so a slow
    response for an earlier selection never replaces a newer one.
    """

    def __init__(self, source: PipelineSource, tz: tzinfo | None = None) -> None:
        """Initialize detail controller with a pipeline source."""
        self.source = source
        self.tz = tz
        self.state = DetailState.CLOSED
        self.run_id: str | None = None
        self.run: PipelineRun | None = None
        self._generation = 0
        self._expanded: dict[str, bool] = {}
        self._expanded_for: str | None = None

    @property
    def is_open(self) -> bool:
        """Whether the dialog is showing."""
        return self.state is not DetailState.CLOSED

    async def open(self, run_id: str | None) -> None:
        """Show the dialog for a run and fetch its detail."""
        if not run_id:
            return

        self._generation += 1
        generation = self._generation

        if run_id != self._expanded_for:
            self._expanded = {}
            self._expanded_for = run_id

        self.run_id = run_id
        self.run = None
        self.state = DetailState.LOADING

        try:
            run = await self.source.get_run_detail(run_id)
        except DashboardError as e:
            if generation != self._generation:
                logger.debug(f"Ignoring stale detail error for run {run_id}")
                return
            logger.error(f"Error fetching pipeline detail for run {run_id}: {e}")
            self.state = DetailState.EMPTY
            return

        if generation != self._generation:
            logger.debug(f"Ignoring stale detail response for run {run_id}")
            return

        self.run = run
        self.state = DetailState.READY

    def close(self) -> None:
        """Hide the dialog and discard the fetched detail."""
        self._generation += 1
        self.run_id = None
        self.run = None
        self.state = DetailState.CLOSED

    def toggle_job(self, job_id: str) -> bool:
        """Flip a job between expanded and collapsed.

        Jobs are keyed by their id, or by ``#<position>`` when they have
        none (see ``presentation.job_key``).

        Returns:
            New expanded state of the job

        """
        expanded = not self._expanded.get(job_id, False)
        self._expanded[job_id] = expanded
        return expanded

    def is_expanded(self, job_id: str) -> bool:
        """Whether a job currently lists its steps."""
        return self._expanded.get(job_id, False)

    def view(self) -> DetailView | None:
        """Build the detail view, or None while the dialog is closed."""
        if self.state is DetailState.CLOSED:
            return None
        if self.state is DetailState.LOADING:
            return empty_detail_view(self.run_id, loading=True)
        if self.run is None:
            return empty_detail_view(self.run_id)
        return build_detail_view(self.run, self.is_expanded, self.tz)
