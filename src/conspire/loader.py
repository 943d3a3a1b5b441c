"""Declarative chart files — build a ``PlotBuilder`` from YAML or JSON.

File format::

    backend: plotly
    display: false
    charts:
      - kind: scatter
        x: [1.0, 1.3, 2.0]
        y: [8.0, 8.1, 7.0]
        color: [1, 2, 3]
        size: 30
      - kind: pie
        x: ["a", "b", "c"]
        name: cats
      - kind: heatmap
        z: [[1, 2], [3, 4]]

Channel values go through the usual normalization, so a bare number is
accepted for ``size`` (it becomes a one-element series).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .core.charts import chart_from_layer
from .core.errors import ChartFileError
from .core.layer import Layer, MatrixLayer
from .core.models import BackendKind, ChartKind
from .plot import PlotBuilder

logger = logging.getLogger(__name__)

_SERIES_BINDINGS = {
    "x": Layer.bind_x,
    "y": Layer.bind_y,
    "color": Layer.bind_color,
    "size": Layer.bind_size,
}
_MATRIX_BINDINGS = {
    "z": MatrixLayer.bind_z,
    "color": MatrixLayer.bind_color,
}


def _read_document(path: Path) -> Any:
    raw = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            return json.loads(raw)
        return yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ChartFileError(f"Cannot parse chart file {path}: {exc}") from exc


def _as_channel_data(value: Any) -> Any:
    # Scalars become one-element series ("size: 30" means a constant size)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return [value]
    return value


def _build_layer(idx: int, kind: ChartKind, spec: Mapping[str, Any]) -> Layer | MatrixLayer:
    if kind == ChartKind.HEATMAP:
        layer: Layer | MatrixLayer = MatrixLayer()
        bindings = _MATRIX_BINDINGS
    else:
        layer = Layer()
        bindings = _SERIES_BINDINGS

    unknown = set(spec) - set(bindings) - {"kind", "name"}
    if unknown:
        raise ChartFileError(
            f"Chart #{idx} ({kind.value}): unknown key(s) {', '.join(sorted(unknown))}"
        )

    for key, bind in bindings.items():
        if key in spec:
            try:
                layer = bind(layer, _as_channel_data(spec[key]))
            except TypeError as exc:
                raise ChartFileError(f"Chart #{idx} ({kind.value}), channel {key}: {exc}") from exc
    if spec.get("name") is not None:
        layer = layer.with_name(str(spec["name"]))
    return layer


def load_plot(source: str | Path | Mapping[str, Any]) -> PlotBuilder:
    """Build a ``PlotBuilder`` from a chart file path or an already-parsed mapping.

    Raises ``ChartFileError`` for malformed documents and
    ``MissingDimension`` when a chart lacks a required channel.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise ChartFileError(f"Chart file not found: {path}")
        doc: Any = _read_document(path)
    else:
        doc = source

    if not isinstance(doc, Mapping):
        raise ChartFileError("A chart file must contain a mapping at the top level")

    try:
        backend = BackendKind(doc.get("backend", BackendKind.PLOTLY.value))
    except ValueError:
        raise ChartFileError(f"Unknown backend '{doc.get('backend')}'") from None

    charts = doc.get("charts") or []
    if not isinstance(charts, list):
        raise ChartFileError("'charts' must be a list")

    display = doc.get("display", False)
    if not isinstance(display, bool):
        raise ChartFileError(f"'display' must be true or false, got {display!r}")

    builder = PlotBuilder(backend).set_display(display)
    for idx, spec in enumerate(charts):
        if not isinstance(spec, Mapping) or "kind" not in spec:
            raise ChartFileError(f"Chart #{idx} must be a mapping with a 'kind' key")
        try:
            kind = ChartKind(spec["kind"])
        except ValueError:
            valid = ", ".join(k.value for k in ChartKind)
            raise ChartFileError(
                f"Chart #{idx}: unknown kind '{spec['kind']}'. Valid kinds: {valid}"
            ) from None
        layer = _build_layer(idx, kind, spec)
        builder = builder.add_variant(chart_from_layer(kind, layer))

    logger.debug("Loaded %d chart(s) for the %s backend", len(builder.variants), backend.value)
    return builder
