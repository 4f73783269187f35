"""YAML config loading for decode settings."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel

from .contracts import DecodeConfig

logger = logging.getLogger(__name__)


def load_config(config_path: Path, config_class: type[BaseModel] = DecodeConfig) -> BaseModel:
    """Load a YAML config file into its Pydantic model."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    logger.debug(f"Loaded config {config_path}: {raw}")
    return config_class(**raw)
