"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from hermes_ai.config.models import HermesConfig


def load_config(path: Path | str) -> HermesConfig:
    """Load configuration from YAML file.

    An empty file yields the all-defaults config.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated HermesConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return HermesConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parents[3] / "configs" / "default.yaml"
