"""Errors raised while fetching pipeline data."""


class DashboardError(RuntimeError):
    """Base class for pipeline data errors."""


class NetworkError(DashboardError):
    """Request failed to complete or returned an unexpected status."""


class NotFoundError(DashboardError):
    """Server reports no such pipeline run."""


class MalformedDataError(DashboardError):
    """Response body could not be read as pipeline data."""
