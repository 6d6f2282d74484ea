"""
Parameter management for stagger.

This module provides:
- Validated, immutable parameter containers (schema.py)
- YAML loading utilities (loader.py)
"""

from stagger.params.loader import (
    build_from_config,
    load_config,
    load_config_with_overrides,
    merge_configs,
    save_config,
)
from stagger.params.schema import ArchitectureParams, GridParams, ModelConfig

__all__ = [
    # Schema classes
    "GridParams",
    "ArchitectureParams",
    "ModelConfig",
    # Loader functions
    "load_config",
    "save_config",
    "load_config_with_overrides",
    "merge_configs",
    "build_from_config",
]
