"""Load dashboard configuration from YAML files and the environment."""

import os
from pathlib import Path

import yaml

from cidash.pipeline_dashboard.models.dashboard_config import DashboardConfig

API_URL_ENV = "PIPELINE_DASHBOARD_API_URL"


def load_config_file(config_path: Path) -> DashboardConfig:
    """Load dashboard configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_path}")

    try:
        return DashboardConfig.model_validate(data)
    except Exception as e:
        raise ValueError(f"Invalid dashboard config in {config_path}: {e}") from e


def load_config(
    config_path: Path | None = None, base_url: str | None = None
) -> DashboardConfig:
    """Resolve configuration from file, environment, and explicit options.

    Later sources win: file, then ``PIPELINE_DASHBOARD_API_URL``, then
    ``base_url``.
    """
    config = load_config_file(config_path) if config_path else DashboardConfig()

    if API_URL_ENV in os.environ:
        config = DashboardConfig(base_url=os.environ[API_URL_ENV])

    if base_url:
        config = DashboardConfig(base_url=base_url)

    return config
