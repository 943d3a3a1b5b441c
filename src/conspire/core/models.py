"""Pydantic models for the canonical chart data representation.

These models form the intermediate representation (IR) between the
caller's native containers and the rendering backends. Every layer
stores its channels as one of these tagged values, and every backend
consumes chart variants built from them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SeriesKind(str, Enum):
    """Measurement level carried by a normalized series or matrix."""
    QUANTITATIVE = "quantitative"
    CATEGORICAL = "categorical"


class Channel(str, Enum):
    """Visual channels a chart variant can bind."""
    X = "x"
    Y = "y"
    Z = "z"
    COLOR = "color"
    SIZE = "size"


class ChartKind(str, Enum):
    """Supported chart variants."""
    SCATTER = "scatter"
    LINE = "line"
    BAR = "bar"
    HORIZONTAL_BAR = "horizontal_bar"
    PIE = "pie"
    BOX = "box"
    HEATMAP = "heatmap"


class BackendKind(str, Enum):
    """Supported rendering backends."""
    PLOTLY = "plotly"


# ---------------------------------------------------------------------------
# One-dimensional data
# ---------------------------------------------------------------------------

class QuantitativeSeries(BaseModel):
    """Numeric values, widened to float."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[SeriesKind.QUANTITATIVE] = SeriesKind.QUANTITATIVE
    values: tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.values)


class CategoricalSeries(BaseModel):
    """Text labels."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[SeriesKind.CATEGORICAL] = SeriesKind.CATEGORICAL
    values: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.values)


# Union of all series types
NormalizedSeries = Annotated[
    Union[QuantitativeSeries, CategoricalSeries],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Two-dimensional data
# ---------------------------------------------------------------------------

class QuantitativeMatrix(BaseModel):
    """Rows of numeric values, widened to float.

    Only the quantitative form exists today; the ``kind`` tag leaves room
    for categorical matrices later.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal[SeriesKind.QUANTITATIVE] = SeriesKind.QUANTITATIVE
    rows: tuple[tuple[float, ...], ...] = ()

    def __len__(self) -> int:
        return len(self.rows)


# ---------------------------------------------------------------------------
# Render results
# ---------------------------------------------------------------------------

class Artifact(BaseModel):
    """A rendered, self-contained document ready to be persisted."""
    model_config = ConfigDict(frozen=True)

    backend: BackendKind
    content: str
    trace_names: tuple[str, ...] = ()
    display: bool = False


class RenderResult(BaseModel):
    """Result of writing (and optionally displaying) an artifact."""
    backend: BackendKind
    output_path: Path
    displayed: bool = False
    error: Optional[str] = None
