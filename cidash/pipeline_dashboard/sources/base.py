"""Abstract base class for pipeline data sources."""

from abc import ABC, abstractmethod

from cidash.pipeline_dashboard.models.pipeline_run import PipelineRun


class PipelineSource(ABC):
    """Abstract read-only source of pipeline runs."""

    @abstractmethod
    async def list_runs(self) -> list[PipelineRun]:
        """Fetch every pipeline run summary.

        Returns:
            Runs in the order provided by the server

        Raises:
            NetworkError: If the request fails
            MalformedDataError: If the response is not a list of runs

        """

    @abstractmethod
    async def get_run_detail(self, run_id: str) -> PipelineRun:
        """Fetch one pipeline run including its jobs and steps.

        Args:
            run_id: Run identifier from the list response

        Returns:
            Full pipeline run

        Raises:
            NetworkError: If the request fails
            NotFoundError: If the server has no such run
            MalformedDataError: If the response is not a run

        """
