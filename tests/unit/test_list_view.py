"""Tests for the list view controller."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from cidash.pipeline_dashboard.detail_view import DetailState
from cidash.pipeline_dashboard.errors import MalformedDataError, NetworkError
from cidash.pipeline_dashboard.list_view import (
    DISPLAY_LIMIT,
    ListState,
    ListViewController,
)
from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun
from cidash.pipeline_dashboard.sources.base import PipelineSource


class FakeSource(PipelineSource):
    """Pipeline source backed by mocks."""

    def __init__(self) -> None:
        """Initialize fake source with mocks."""
        self.list_runs_mock = AsyncMock(return_value=[])
        self.get_run_detail_mock = AsyncMock()

    async def list_runs(self) -> list[PipelineRun]:
        """Mock list."""
        result: list[PipelineRun] = await self.list_runs_mock()
        return result

    async def get_run_detail(self, run_id: str) -> PipelineRun:
        """Mock detail."""
        result: PipelineRun = await self.get_run_detail_mock(run_id)
        return result


@pytest.fixture
def source() -> FakeSource:
    """Create fake source."""
    return FakeSource()


@pytest.fixture
def controller(source: FakeSource) -> ListViewController:
    """Create list controller over the fake source."""
    return ListViewController(source, tz=timezone.utc)


def _runs(count: int) -> list[PipelineRun]:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        PipelineRun(
            run_id=str(i),
            status="success" if i % 2 else "failure",
            started_at=(start + timedelta(hours=i)).isoformat(),
        )
        for i in range(count)
    ]


def test_initial_state(controller: ListViewController) -> None:
    """The table starts idle and empty."""
    assert controller.state is ListState.IDLE
    assert controller.runs == []
    assert controller.rows() == []
    assert controller.selected_run_id is None


async def test_load_default_sort(
    controller: ListViewController, source: FakeSource
) -> None:
    """The default sort shows the newest run first."""
    source.list_runs_mock.return_value = [
        PipelineRun.model_validate(
            {"runId": "1", "status": "success", "startedAt": "2024-01-01T00:00:00Z"}
        ),
        PipelineRun.model_validate(
            {"runId": "2", "status": "failure", "startedAt": "2024-01-02T00:00:00Z"}
        ),
    ]

    await controller.load()

    assert controller.state is ListState.READY
    assert [row.run_id for row in controller.rows()] == ["2", "1"]
    assert controller.rows()[0].status.label == "FAILURE"
    assert controller.rows()[0].started_at == "Jan 2, 2024 00:00:00"


async def test_load_failure(controller: ListViewController, source: FakeSource) -> None:
    """A failed fetch leaves an empty table instead of raising."""
    source.list_runs_mock.side_effect = NetworkError("connection refused")

    await controller.load()

    assert controller.state is ListState.FAILED
    assert controller.runs == []
    assert controller.rows() == []


async def test_load_malformed_data(
    controller: ListViewController, source: FakeSource
) -> None:
    """Malformed responses also end in the failed state."""
    source.list_runs_mock.side_effect = MalformedDataError("not a list")

    await controller.load()

    assert controller.state is ListState.FAILED


async def test_loading_flag(controller: ListViewController, source: FakeSource) -> None:
    """loading is set while the fetch is in flight."""
    release = asyncio.Event()

    async def slow_list() -> list[PipelineRun]:
        await release.wait()
        return []

    source.list_runs_mock.side_effect = slow_list

    task = asyncio.create_task(controller.load())
    await asyncio.sleep(0)
    assert controller.loading is True

    release.set()
    await task
    assert controller.loading is False
    assert controller.state is ListState.READY


async def test_display_cap(controller: ListViewController, source: FakeSource) -> None:
    """Thirty runs show as the first 25 in sort order."""
    source.list_runs_mock.return_value = _runs(30)

    await controller.load()

    rows = controller.rows()
    assert DISPLAY_LIMIT == 25
    assert len(rows) == 25
    assert [row.run_id for row in rows] == [str(i) for i in range(29, 4, -1)]
    assert len(controller.runs) == 30


async def test_display_cap_follows_sort(
    controller: ListViewController, source: FakeSource
) -> None:
    """The cap applies after sorting."""
    source.list_runs_mock.return_value = _runs(30)
    await controller.load()

    controller.request_sort("startedAt")

    assert [row.run_id for row in controller.rows()] == [str(i) for i in range(25)]


async def test_small_collection_shows_everything(
    controller: ListViewController, source: FakeSource
) -> None:
    """Collections under the cap are shown in full."""
    source.list_runs_mock.return_value = _runs(3)

    await controller.load()

    assert len(controller.rows()) == 3


async def test_zero_timestamp_west_of_utc(source: FakeSource) -> None:
    """A zero start time renders as a dash instead of breaking the table."""
    source.list_runs_mock.return_value = [
        PipelineRun(run_id="1", started_at="0001-01-01T00:00:00Z"),
        PipelineRun(run_id="2", started_at="2024-01-01T00:00:00Z"),
    ]
    controller = ListViewController(source, tz=timezone(timedelta(hours=-5)))

    await controller.load()

    rows = controller.rows()
    assert [row.run_id for row in rows] == ["2", "1"]
    assert rows[1].started_at == "-"
    assert rows[0].started_at == "Dec 31, 2023 19:00:00"


async def test_sorting_leaves_collection_untouched(
    controller: ListViewController, source: FakeSource
) -> None:
    """Sort changes only affect the derived rows."""
    runs = _runs(5)
    source.list_runs_mock.return_value = runs
    await controller.load()

    controller.request_sort("status")

    assert [run.run_id for run in controller.runs] == ["0", "1", "2", "3", "4"]
    assert [row.run_id for row in controller.rows()] == ["0", "2", "4", "1", "3"]

    controller.request_sort("status")
    assert controller.sort_state.direction == "desc"
    assert [row.run_id for row in controller.rows()] == ["1", "3", "0", "2", "4"]


async def test_head_cells_follow_sort(controller: ListViewController) -> None:
    """Headers reflect the active sort."""
    controller.request_sort("status")

    active = [cell.key for cell in controller.head_cells() if cell.active]
    assert active == ["status"]


async def test_stale_load_is_ignored(
    controller: ListViewController, source: FakeSource
) -> None:
    """Only the most recent load commits its result."""
    release_first = asyncio.Event()
    calls = 0

    async def list_runs() -> list[PipelineRun]:
        nonlocal calls
        calls += 1
        if calls == 1:
            await release_first.wait()
            return _runs(1)
        return _runs(2)

    source.list_runs_mock.side_effect = list_runs

    first = asyncio.create_task(controller.load())
    await asyncio.sleep(0)
    await controller.load()
    release_first.set()
    await first

    assert len(controller.runs) == 2


async def test_activate_opens_detail(
    controller: ListViewController, source: FakeSource
) -> None:
    """Activating a row selects it and fetches its detail."""
    source.get_run_detail_mock.return_value = PipelineRun(run_id="2")

    await controller.activate("2")

    assert controller.selected_run_id == "2"
    assert controller.detail.state is DetailState.READY
    source.get_run_detail_mock.assert_awaited_once_with("2")


async def test_close_detail_clears_selection(
    controller: ListViewController, source: FakeSource
) -> None:
    """Closing the detail clears the selection."""
    source.get_run_detail_mock.return_value = PipelineRun(run_id="2")
    await controller.activate("2")

    controller.close_detail()

    assert controller.selected_run_id is None
    assert controller.detail.state is DetailState.CLOSED


async def test_reactivating_same_run_refetches(
    controller: ListViewController, source: FakeSource
) -> None:
    """The same row can be opened again without closing first."""
    source.get_run_detail_mock.return_value = PipelineRun(run_id="2")

    await controller.activate("2")
    await controller.activate("2")

    assert source.get_run_detail_mock.await_count == 2
