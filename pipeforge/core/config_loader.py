"""Load a pipeline description from a JSON or TOML project file."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path

from pipeforge.core.errors import ConfigurationError
from pipeforge.models.config import PipelineConfig

logger = logging.getLogger(__name__)


def load_pipeline_config(path: Path | str) -> PipelineConfig:
    """Read ``path`` and parse it into a :class:`PipelineConfig`.

    ``.toml`` files are parsed as TOML; a ``[tool.pipeforge]`` table is used
    when present (so the description can live in ``pyproject.toml``).
    Anything else is parsed as JSON.

    Raises
    ------
    ConfigurationError
        If the file is missing, unparsable, or describes an invalid pipeline.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Pipeline config not found: {path}")

    raw = path.read_bytes()
    try:
        if path.suffix == ".toml":
            data = tomllib.loads(raw.decode("utf-8"))
            tool = data.get("tool")
            if isinstance(tool, dict) and "pipeforge" in tool:
                data = tool["pipeforge"]
        else:
            data = json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a table of settings")

    logger.debug("Loaded pipeline config from %s", path)
    return PipelineConfig.from_mapping(data)
