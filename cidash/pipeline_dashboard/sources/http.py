"""HTTP pipeline source backed by the dashboard read API."""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from cidash.pipeline_dashboard.errors import (
    DashboardError,
    MalformedDataError,
    NetworkError,
    NotFoundError,
)
from cidash.pipeline_dashboard.models.dashboard_config import DashboardConfig
from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun
from cidash.pipeline_dashboard.sources.base import PipelineSource

logger = logging.getLogger(__name__)

LIST_PATH = "/api/pipelines"
DETAIL_PATH = "/api/pipelines/details"


class HttpPipelineSource(PipelineSource):
    """Pipeline source reading from the dashboard HTTP API."""

    def __init__(self, config: DashboardConfig) -> None:
        """Initialize HTTP source with configuration."""
        self.config = config
        self.base_url = config.base_url

    async def list_runs(self) -> list[PipelineRun]:
        """Fetch all pipeline run summaries."""
        data = await self._get_json(LIST_PATH, "list pipeline runs")

        # An empty result set is serialized as null
        if data is None:
            return []

        if not isinstance(data, list):
            raise MalformedDataError(
                f"Expected a list of pipeline runs, got {type(data).__name__}"
            )

        runs: list[PipelineRun] = []
        for index, item in enumerate(data):
            try:
                runs.append(PipelineRun.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed pipeline run at index {index}: {e}")
        return runs

    async def get_run_detail(self, run_id: str) -> PipelineRun:
        """Fetch one pipeline run with its jobs and steps."""
        data = await self._get_json(
            DETAIL_PATH,
            f"get pipeline run {run_id}",
            params={"id": run_id},
            not_found_error=NotFoundError,
        )

        try:
            return PipelineRun.model_validate(data)
        except ValidationError as e:
            raise MalformedDataError(
                f"Invalid pipeline run detail for {run_id}: {e}"
            ) from e

    async def _get_json(
        self,
        path: str,
        action: str,
        params: dict[str, str] | None = None,
        not_found_error: type[DashboardError] = NetworkError,
    ) -> object:
        """Issue a GET request and decode the JSON body."""
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=headers, params=params) as response:
                    if response.status == 404:
                        text = await response.text()
                        raise not_found_error(
                            f"Failed to {action}: {response.status} {text}"
                        )
                    if response.status != 200:
                        text = await response.text()
                        raise NetworkError(
                            f"Failed to {action}: {response.status} {text}"
                        )

                    try:
                        data: object = await response.json(content_type=None)
                    except ValueError as e:
                        raise MalformedDataError(
                            f"Invalid JSON while trying to {action}: {e}"
                        ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Failed to {action}: {e}") from e

        return data
