"""Controller for the pipeline run summary table."""

import logging
from datetime import tzinfo
from enum import Enum

from cidash.pipeline_dashboard.detail_view import DetailViewController
from cidash.pipeline_dashboard.errors import DashboardError
from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun
from cidash.pipeline_dashboard.presentation import (
    HeadCell,
    TableRow,
    build_head_cells,
    build_table_row,
)
from cidash.pipeline_dashboard.sorting import SortState
from cidash.pipeline_dashboard.sources.base import PipelineSource

logger = logging.getLogger(__name__)

DISPLAY_LIMIT = 25


class ListState(str, Enum):
    """Lifecycle of the summary table."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ListViewController:
    """Owns the run collection, sort state, and row selection."""

    def __init__(
        self,
        source: PipelineSource,
        detail: DetailViewController | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize list controller with a pipeline source."""
        self.source = source
        self.detail = detail or DetailViewController(source, tz=tz)
        self.tz = tz
        self.state = ListState.IDLE
        self.sort_state = SortState()
        self.selected_run_id: str | None = None
        self._runs: list[PipelineRun] = []
        self._generation = 0

    @property
    def runs(self) -> list[PipelineRun]:
        """Fetched runs in server order."""
        return list(self._runs)

    @property
    def loading(self) -> bool:
        """Whether a list fetch is in flight."""
        return self.state is ListState.LOADING

    async def load(self) -> None:
        """Fetch the run collection."""
        self._generation += 1
        generation = self._generation
        self.state = ListState.LOADING

        try:
            runs = await self.source.list_runs()
        except DashboardError as e:
            if generation != self._generation:
                return
            logger.error(f"Error fetching pipeline runs: {e}")
            self._runs = []
            self.state = ListState.FAILED
            return

        if generation != self._generation:
            logger.debug("Ignoring stale pipeline list response")
            return

        logger.info(f"Fetched {len(runs)} pipeline runs")
        self._runs = list(runs)
        self.state = ListState.READY

    def request_sort(self, key: str) -> None:
        """Apply a click on a column header."""
        self.sort_state.request(key)
        logger.debug(
            f"Sorting by {self.sort_state.key} ({self.sort_state.direction})"
        )

    def visible_runs(self) -> list[PipelineRun]:
        """Sorted runs, capped at the display limit."""
        return self.sort_state.apply(self._runs)[:DISPLAY_LIMIT]

    def head_cells(self) -> list[HeadCell]:
        """Column headers reflecting the current sort."""
        return build_head_cells(self.sort_state)

    def rows(self) -> list[TableRow]:
        """Table rows for the visible runs."""
        return [build_table_row(run, self.tz) for run in self.visible_runs()]

    async def activate(self, run_id: str) -> None:
        """Select a row and open its detail."""
        self.selected_run_id = run_id
        await self.detail.open(run_id)

    def close_detail(self) -> None:
        """Close the detail dialog and clear the selection."""
        self.selected_run_id = None
        self.detail.close()
