"""Ordering of pipeline runs for the summary table."""

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from cidash.pipeline_dashboard.formatting import parse_timestamp
from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun

SortDirection = Literal["asc", "desc"]

STATUS_KEY = "status"
STARTED_AT_KEY = "startedAt"
SORTABLE_KEYS = frozenset({STATUS_KEY, STARTED_AT_KEY})

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _started_at(run: PipelineRun) -> datetime:
    return parse_timestamp(run.started_at) or _EARLIEST


def _status(run: PipelineRun) -> str:
    return run.status or ""


_SORT_KEYS: dict[str, Callable[[PipelineRun], object]] = {
    STARTED_AT_KEY: _started_at,
    STATUS_KEY: _status,
}


def sort_runs(
    runs: Sequence[PipelineRun], key: str, direction: SortDirection
) -> list[PipelineRun]:
    """Return runs ordered by key and direction.

    The sort is stable in both directions, so ties keep their input
    order. Keys other than ``status`` and ``startedAt`` leave the input
    order unchanged. The input sequence is never modified.
    """
    key_func = _SORT_KEYS.get(key)
    if key_func is None:
        return list(runs)

    reverse = direction == "desc"
    return sorted(runs, key=key_func, reverse=reverse)  # type: ignore[arg-type]


class SortState(BaseModel):
    """Active sort column and direction of the summary table."""

    key: str = Field(default=STARTED_AT_KEY, description="Active sort key")
    direction: SortDirection = Field(default="desc", description="Sort direction")

    def request(self, key: str) -> None:
        """Apply a click on a column header.

        Clicking the active column flips the direction; clicking another
        column makes it active in ascending order.
        """
        if key == self.key:
            self.direction = "desc" if self.direction == "asc" else "asc"
        else:
            self.key = key
            self.direction = "asc"

    def apply(self, runs: Sequence[PipelineRun]) -> list[PipelineRun]:
        """Sort runs by the current state."""
        return sort_runs(runs, self.key, self.direction)
