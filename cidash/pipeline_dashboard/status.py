"""Map pipeline statuses to display colors and labels."""

from typing import Literal

from cidash.pipeline_dashboard.models.pipeline_run import RunStatus

StatusColor = Literal["green", "red", "orange", "gray"]

UNKNOWN_LABEL = "UNKNOWN"

_COLORS: dict[str, StatusColor] = {
    RunStatus.SUCCESS.value: "green",
    RunStatus.FAILURE.value: "red",
    RunStatus.PENDING.value: "orange",
}

COLOR_HEX: dict[StatusColor, str] = {
    "green": "#2E7D32",
    "red": "#D32F2F",
    "orange": "#ED6C02",
    "gray": "#757575",
}

_KNOWN_STATUSES = frozenset(status.value for status in RunStatus)


def color_for(status: object) -> StatusColor:
    """Return the color token for a status.

    Cancelled, unrecognized, and missing statuses are all gray.
    """
    if not isinstance(status, str):
        return "gray"
    return _COLORS.get(status, "gray")


def label_for(status: object) -> str:
    """Return the uppercase label for a status, or UNKNOWN."""
    if not isinstance(status, str) or status not in _KNOWN_STATUSES:
        return UNKNOWN_LABEL
    return status.upper()
