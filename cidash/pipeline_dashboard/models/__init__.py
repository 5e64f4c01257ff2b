"""Data models for pipeline runs and dashboard configuration."""

from cidash.pipeline_dashboard.models.dashboard_config import DashboardConfig
from cidash.pipeline_dashboard.models.pipeline_run import (
    Author,
    Job,
    JobStep,
    PipelineRun,
    RunStatus,
)

__all__ = [
    "Author",
    "DashboardConfig",
    "Job",
    "JobStep",
    "PipelineRun",
    "RunStatus",
]
