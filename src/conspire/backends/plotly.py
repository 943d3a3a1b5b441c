"""Plotly.js backend — serialize chart variants into an HTML page.

Each variant becomes one ``let traceN = { ... };`` declaration, named by
its position. The script then collects the traces in the same order and
mounts them with ``Plotly.newPlot``::

    let trace0 = { x: [1.0, 2.0], y: [3.0, 4.0], mode: 'markers', type: 'scatter', marker: { }, };
    let data = [trace0]; Plotly.newPlot('myDiv', data);

Attribute order inside a trace is fixed: geometry, kind-specific
discriminators, the decoration block (``marker``/``line``), then the
name. A decoration block holds only the channels that are bound.
"""

from __future__ import annotations

import html
import json
import logging
import math
from collections.abc import Sequence
from typing import Optional

from ..core.charts import Bar, Box, Heatmap, HorizontalBar, Line, Pie, Scatter
from ..core.errors import RenderError, UnsupportedVariant
from ..core.models import (
    Artifact,
    BackendKind,
    CategoricalSeries,
    ChartKind,
    QuantitativeMatrix,
    QuantitativeSeries,
)
from .base import BaseBackend

logger = logging.getLogger(__name__)

# Discriminator attributes per variant kind, emitted right after geometry
_DISCRIMINATORS: dict[ChartKind, list[tuple[str, str]]] = {
    ChartKind.SCATTER: [("mode", "'markers'"), ("type", "'scatter'")],
    ChartKind.LINE: [("mode", "'lines'"), ("type", "'scatter'")],
    ChartKind.BAR: [("type", "'bar'")],
    ChartKind.HORIZONTAL_BAR: [("orientation", "'h'"), ("type", "'bar'")],
    ChartKind.PIE: [("type", "'pie'")],
    ChartKind.BOX: [("boxpoints", "'outliers'"), ("type", "'box'")],
    ChartKind.HEATMAP: [("type", "'heatmap'")],
}

_HTML_TEMPLATE = """<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <!-- Plotly.js -->
    <script src="{plotly_url}"></script>
</head>
<body>
    <div id="{div_id}"></div>
    <script>
{script}
    </script>
</body>
"""


# ---------------------------------------------------------------------------
# Literal formatting
# ---------------------------------------------------------------------------

def _number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(float(value))


def _string(value: str) -> str:
    # Inline <script> content must never contain a literal "</script>"
    return (
        json.dumps(value, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def _array(items: Sequence[str]) -> str:
    return "[" + ", ".join(items) + "]"


def format_series(series: QuantitativeSeries | CategoricalSeries) -> str:
    """Render a series as a JS literal.

    A one-element series collapses to a scalar, since a length-1 channel
    almost always means "this value for every point".
    """
    if isinstance(series, QuantitativeSeries):
        items = [_number(v) for v in series.values]
    else:
        items = [_string(v) for v in series.values]
    if len(items) == 1:
        return items[0]
    return _array(items)


def format_matrix(matrix: QuantitativeMatrix) -> str:
    """Render a matrix as a nested JS array; matrices never collapse."""
    return _array([_array([_number(v) for v in row]) for row in matrix.rows])


def attr(key: str, value: str) -> str:
    return f"{key}: {value}, "


def block(key: str, pairs: Sequence[str]) -> str:
    """Wrap zero or more ``key: value,`` pairs into a nested object attribute."""
    return f"{key}: {{ {''.join(pairs)}}}, "


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------

class PlotlyBackend(BaseBackend):
    """Reference backend targeting Plotly.js in a static HTML page."""

    backend = BackendKind.PLOTLY

    def render(self, variants: Sequence, display: bool = False) -> Artifact:
        if not variants:
            raise RenderError("Nothing to render: no chart variants given")

        traces: list[str] = []
        names: list[str] = []
        for idx, variant in enumerate(variants):
            name = self.trace_name(idx)
            body = self.serialize(variant)
            logger.debug("Serialized %s as %s", variant.kind.value, name)
            traces.append(f"let {name} = {{ {body}}};")
            names.append(name)

        script = self.build_script(traces, names)
        document = _HTML_TEMPLATE.format(
            title=html.escape(self.config.title),
            plotly_url=self.config.plotly_url,
            div_id=self.config.div_id,
            script=script,
        )
        logger.info("Rendered %d trace(s) with the plotly backend", len(names))
        return Artifact(
            backend=self.backend,
            content=document,
            trace_names=tuple(names),
            display=display,
        )

    # -- Script assembly ---------------------------------------------------

    @staticmethod
    def trace_name(idx: int) -> str:
        return f"trace{idx}"

    def build_script(self, traces: Sequence[str], names: Sequence[str]) -> str:
        return (
            "\n".join(traces)
            + f"\nlet data = [{', '.join(names)}]; "
            + f"Plotly.newPlot('{self.config.div_id}', data);"
        )

    # -- Per-variant serialization ---------------------------------------

    def serialize(self, variant) -> str:
        """Return the attribute text of one trace (without braces)."""
        if isinstance(variant, Heatmap):
            parts = self._heatmap_parts(variant)
        elif isinstance(variant, Pie):
            parts = self._pie_parts(variant)
        elif isinstance(variant, (Scatter, Line, Bar, HorizontalBar, Box)):
            parts = self._geometry(variant)
            parts += [attr(k, v) for k, v in _DISCRIMINATORS[variant.kind]]
            parts.append(self._decoration(variant))
        else:
            kind = getattr(variant, "kind", None)
            if isinstance(kind, ChartKind):
                raise UnsupportedVariant(kind, self.backend)
            raise RenderError(f"Not a chart variant: {type(variant).__name__}")

        if variant.name:
            parts.append(attr("name", _string(variant.name)))
        return "".join(parts)

    @staticmethod
    def _geometry(variant) -> list[str]:
        parts = [attr("x", format_series(variant.x))]
        y = getattr(variant, "y", None)
        if y is not None:
            parts.append(attr("y", format_series(y)))
        return parts

    @staticmethod
    def _decoration(variant) -> str:
        color: Optional[QuantitativeSeries | CategoricalSeries] = variant.color
        size = getattr(variant, "size", None)

        if isinstance(variant, Line):
            pairs = []
            if color is not None:
                pairs.append(attr("color", format_series(color)))
            if size is not None:
                pairs.append(attr("width", format_series(size)))
            return block("line", pairs)

        pairs = []
        if color is not None:
            pairs.append(attr("color", format_series(color)))
        if size is not None:
            pairs.append(attr("size", format_series(size)))
        return block("marker", pairs)

    @staticmethod
    def _pie_parts(variant: Pie) -> list[str]:
        # Plotly pies take numeric slices as ``values`` and labels as ``labels``
        key = "values" if isinstance(variant.x, QuantitativeSeries) else "labels"
        parts = [attr(key, format_series(variant.x))]
        parts += [attr(k, v) for k, v in _DISCRIMINATORS[ChartKind.PIE]]
        pairs = []
        if variant.color is not None:
            pairs.append(attr("colors", format_series(variant.color)))
        parts.append(block("marker", pairs))
        return parts

    def _heatmap_parts(self, variant: Heatmap) -> list[str]:
        if variant.color is not None:
            raise UnsupportedVariant(
                ChartKind.HEATMAP,
                self.backend,
                "heatmap colors come from z; a separate color matrix is not implemented",
            )
        parts = [attr("z", format_matrix(variant.z))]
        parts += [attr(k, v) for k, v in _DISCRIMINATORS[ChartKind.HEATMAP]]
        return parts
