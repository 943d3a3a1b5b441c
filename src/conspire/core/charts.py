"""Chart variants — validated, kind-specific selections of layer channels.

Converting a layer into a variant is the single validation point of the
pipeline: ``from_layer`` raises ``MissingDimension`` when a required
channel is absent (or bound to an empty series). Once a variant exists,
every later stage may rely on its required channels being present.

Variants copy the channels they use; they do not keep the layer alive.

+-----------------+-----------+-------------------------+
| Variant         | Required  | Optional                |
+=================+===========+=========================+
| Scatter, Line   | x, y      | color, size, name       |
| Bar, HBar       | x, y      | color, name             |
| Pie, Box        | x         | color, name             |
| Heatmap         | z         | color (matrix), name    |
+-----------------+-----------+-------------------------+
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .data import is_present
from .errors import MissingDimension
from .layer import Layer, MatrixLayer
from .models import Channel, ChartKind, NormalizedSeries, QuantitativeMatrix


def _channel_value(layer: Any, channel: Channel) -> Any:
    value = getattr(layer, channel.value)
    return value if is_present(value) else None


class _SeriesChart(BaseModel):
    """Shared construction logic for the series-based variants."""
    model_config = ConfigDict(frozen=True)

    required: ClassVar[tuple[Channel, ...]] = (Channel.X, Channel.Y)
    optional: ClassVar[tuple[Channel, ...]] = (Channel.COLOR,)

    name: Optional[str] = None

    @classmethod
    def from_layer(cls, layer: Layer):
        if not isinstance(layer, Layer):
            raise TypeError(
                f"{cls.__name__} is built from a Layer, got {type(layer).__name__}"
            )
        fields: dict[str, Any] = {"name": layer.get_name()}
        for channel in cls.required:
            value = _channel_value(layer, channel)
            if value is None:
                raise MissingDimension(channel)
            fields[channel.value] = value
        for channel in cls.optional:
            fields[channel.value] = _channel_value(layer, channel)
        return cls(**fields)


class Scatter(_SeriesChart):
    kind: Literal[ChartKind.SCATTER] = ChartKind.SCATTER
    optional: ClassVar[tuple[Channel, ...]] = (Channel.COLOR, Channel.SIZE)

    x: NormalizedSeries
    y: NormalizedSeries
    color: Optional[NormalizedSeries] = None
    size: Optional[NormalizedSeries] = None


class Line(_SeriesChart):
    kind: Literal[ChartKind.LINE] = ChartKind.LINE
    optional: ClassVar[tuple[Channel, ...]] = (Channel.COLOR, Channel.SIZE)

    x: NormalizedSeries
    y: NormalizedSeries
    color: Optional[NormalizedSeries] = None
    size: Optional[NormalizedSeries] = None


class Bar(_SeriesChart):
    kind: Literal[ChartKind.BAR] = ChartKind.BAR

    x: NormalizedSeries
    y: NormalizedSeries
    color: Optional[NormalizedSeries] = None


class HorizontalBar(_SeriesChart):
    kind: Literal[ChartKind.HORIZONTAL_BAR] = ChartKind.HORIZONTAL_BAR

    x: NormalizedSeries
    y: NormalizedSeries
    color: Optional[NormalizedSeries] = None


class Pie(_SeriesChart):
    kind: Literal[ChartKind.PIE] = ChartKind.PIE
    required: ClassVar[tuple[Channel, ...]] = (Channel.X,)

    x: NormalizedSeries
    color: Optional[NormalizedSeries] = None


class Box(_SeriesChart):
    kind: Literal[ChartKind.BOX] = ChartKind.BOX
    required: ClassVar[tuple[Channel, ...]] = (Channel.X,)

    x: NormalizedSeries
    color: Optional[NormalizedSeries] = None


class Heatmap(BaseModel):
    """Matrix chart; built from a ``MatrixLayer``."""
    model_config = ConfigDict(frozen=True)

    required: ClassVar[tuple[Channel, ...]] = (Channel.Z,)
    optional: ClassVar[tuple[Channel, ...]] = (Channel.COLOR,)

    kind: Literal[ChartKind.HEATMAP] = ChartKind.HEATMAP
    z: QuantitativeMatrix
    color: Optional[QuantitativeMatrix] = None
    name: Optional[str] = None

    @classmethod
    def from_layer(cls, layer: MatrixLayer) -> Heatmap:
        if not isinstance(layer, MatrixLayer):
            raise TypeError(f"Heatmap is built from a MatrixLayer, got {type(layer).__name__}")
        z = _channel_value(layer, Channel.Z)
        if z is None:
            raise MissingDimension(Channel.Z)
        return cls(z=z, color=_channel_value(layer, Channel.COLOR), name=layer.get_name())


# Union of all chart variants
ChartVariant = Annotated[
    Union[Scatter, Line, Bar, HorizontalBar, Pie, Box, Heatmap],
    Field(discriminator="kind"),
]

CHART_TYPES: dict[ChartKind, type] = {
    ChartKind.SCATTER: Scatter,
    ChartKind.LINE: Line,
    ChartKind.BAR: Bar,
    ChartKind.HORIZONTAL_BAR: HorizontalBar,
    ChartKind.PIE: Pie,
    ChartKind.BOX: Box,
    ChartKind.HEATMAP: Heatmap,
}


# ---------------------------------------------------------------------------
# Shorthand constructors
# ---------------------------------------------------------------------------

def chart_from_layer(kind: ChartKind | str, layer: Layer | MatrixLayer):
    """Build the variant registered for *kind* from *layer*."""
    return CHART_TYPES[ChartKind(kind)].from_layer(layer)


def scatter(layer: Layer) -> Scatter:
    return Scatter.from_layer(layer)


def line(layer: Layer) -> Line:
    return Line.from_layer(layer)


def bar(layer: Layer) -> Bar:
    return Bar.from_layer(layer)


def horizontal_bar(layer: Layer) -> HorizontalBar:
    return HorizontalBar.from_layer(layer)


def pie(layer: Layer) -> Pie:
    return Pie.from_layer(layer)


def box(layer: Layer) -> Box:
    return Box.from_layer(layer)


def heatmap(layer: MatrixLayer) -> Heatmap:
    return Heatmap.from_layer(layer)
