"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigError(Exception):
    """Error in procgraph configuration."""


class SamplerSettings(BaseModel):
    """Settings for the adaptive sampler.

    Read from the ``[tool.procgraph]`` table of pyproject.toml:

    .. code-block:: toml

        [tool.procgraph]
        error_threshold = 0.01
        max_depth = 4
        workers = 4
        tiles = 2

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_threshold: float = Field(default=0.01, gt=0.0, description="Cells whose error exceeds this are split.")
    max_depth: int = Field(default=4, ge=0, le=12, description="Maximum number of times a cell may be split.")
    workers: int = Field(default=4, ge=1, description="Threads used to evaluate tiles.")
    tiles: int = Field(default=2, ge=1, description="Tiles per side of the sampled region.")


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(pyproject_path: Path) -> SamplerSettings:
    """Load and validate [tool.procgraph] config from pyproject.toml.

    A missing table gives the default settings.

    Raises:
        ConfigError: If the file is not valid TOML or a setting is invalid.

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("procgraph", {})
    if not isinstance(section, dict):
        msg = f"Invalid [tool.procgraph] in {pyproject_path}: expected a table"
        raise ConfigError(msg)

    try:
        return SamplerSettings.model_validate(cast("dict[str, Any]", section))
    except ValidationError as e:
        msg = f"Invalid [tool.procgraph] in {pyproject_path}: {e}"
        raise ConfigError(msg) from e


def get_config(start_dir: Path | None = None) -> SamplerSettings:
    """Get settings from the nearest pyproject.toml, or the defaults if there is none."""
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is None:
        return SamplerSettings()
    return load_config(pyproject_path)
