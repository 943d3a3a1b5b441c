"""Render configuration — output location and document shell settings.

Values come from defaults, an optional config file (YAML, JSON or TOML)
and explicit overrides, in increasing order of precedence.

Config file format::

    # conspire.yaml
    output_path: "charts/render.html"
    plotly_url: "https://cdn.plot.ly/plotly-2.35.2.min.js"
    div_id: "chart"
    title: "Weekly report"
    viewer_timeout: 10
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.errors import ConfigError

DEFAULT_OUTPUT_PATH = Path("render.html")
DEFAULT_PLOTLY_URL = "https://cdn.plot.ly/plotly-latest.min.js"
DEFAULT_DIV_ID = "myDiv"


class RenderConfig(BaseModel):
    """Settings shared by the backends and the artifact collaborators."""

    output_path: Path = DEFAULT_OUTPUT_PATH
    plotly_url: str = DEFAULT_PLOTLY_URL
    div_id: str = Field(default=DEFAULT_DIV_ID, min_length=1)
    title: str = "conspire"
    viewer_timeout: float = Field(default=15.0, gt=0)


def _parse_config_text(path: Path, raw: str) -> Any:
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_load(raw) or {}
    if path.suffix == ".json":
        return json.loads(raw)
    if path.suffix == ".toml":
        return tomllib.loads(raw)

    # Try JSON first, then YAML
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return yaml.safe_load(raw)


def _read_config_file(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        data = _parse_config_text(path, raw)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping. Use .json, .yaml, or .toml format."
        )
    return data


def load_config(
    config_path: str | Path | None = None,
    *,
    output_path: str | Path | None = None,
    plotly_url: str | None = None,
    div_id: str | None = None,
    title: str | None = None,
    viewer_timeout: float | None = None,
) -> RenderConfig:
    """Load a ``RenderConfig`` from *config_path* with keyword overrides.

    Overrides that are not ``None`` take precedence over file values.
    Raises ``FileNotFoundError`` if *config_path* does not exist and
    ``ConfigError`` if it cannot be parsed or holds invalid values.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = _read_config_file(path)

    overrides = {
        "output_path": output_path,
        "plotly_url": plotly_url,
        "div_id": div_id,
        "title": title,
        "viewer_timeout": viewer_timeout,
    }
    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    try:
        return RenderConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid render config: {exc}") from exc
