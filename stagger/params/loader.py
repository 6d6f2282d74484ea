"""
YAML configuration for stagger.

A configuration file holds up to two groups, both optional:

    grid:
      nx: 32
      nz: 8
      lz: 100.0
      topology_x: bounded
    architecture:
      backend: cpu

``build_from_config`` is the usual entry point: it reads the file, applies
overrides, selects the backend and returns the grid ready for fields.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from stagger.core.architecture import Architecture
from stagger.core.grid import RegularCartesianGrid
from stagger.errors import ValidationError
from stagger.params.schema import ModelConfig

logger = logging.getLogger(__name__)


def _read_mapping(path: Path) -> dict[str, Any]:
    """Parse a YAML file that must hold a mapping (an empty file is {})."""
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(
            f"Configuration must be a mapping of groups, got {type(data).__name__}"
        )
    return data


def load_config(path: str | Path) -> ModelConfig:
    """
    Load a model configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If the file is not a mapping or a parameter is invalid
        yaml.YAMLError: If the YAML is malformed
    """
    path = Path(path)
    config = ModelConfig.from_dict(_read_mapping(path))
    logger.debug("Loaded configuration from %s", path)
    return config


def save_config(config: ModelConfig, path: str | Path) -> None:
    """Write ``config`` as YAML, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config_with_overrides(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ModelConfig:
    """
    Load a configuration (defaults if ``path`` is None) and apply overrides.

    Example:
        config = load_config_with_overrides(
            "config/channel.yaml",
            overrides={"grid": {"nz": 32}, "architecture": {"backend": "cpu"}},
        )
    """
    config = ModelConfig() if path is None else load_config(path)
    return config.with_updates(**overrides) if overrides else config


def merge_configs(base: ModelConfig, override: ModelConfig) -> ModelConfig:
    """
    Merge two configurations.

    Values of ``override`` that differ from the defaults replace those of
    ``base``; everything else comes from ``base``.
    """
    merged = base.to_dict()
    defaults = ModelConfig().to_dict()

    for group, values in override.to_dict().items():
        changed = {k: v for k, v in values.items() if v != defaults[group][k]}
        merged[group].update(changed)

    return ModelConfig.from_dict(merged)


def build_from_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> tuple[Architecture, RegularCartesianGrid]:
    """
    Load a configuration, select its backend and construct its grid.

    Returns:
        The selected Architecture and a RegularCartesianGrid on it
    """
    architecture, grid = load_config_with_overrides(path, overrides).build()
    logger.info(
        "Built %dx%dx%d grid on %s", *grid.shape, architecture.value
    )
    return architecture, grid
