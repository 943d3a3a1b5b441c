"""conspire — declarative charts rendered through pluggable backends.

Build layers of channel-bound data, turn them into chart variants, and
render the assembled plot with a backend::

    from conspire import BackendKind, Layer, PlotBuilder, line, scatter

    layer1 = Layer().bind_x([1.0, 1.3, 2.0]).bind_y([8.0, 8.1, 7.0])
    layer2 = Layer().bind_x([1.0, 2.0, 3.0]).bind_y([9.0, 1.0, 10.0]).bind_color([1, 2, 3])

    plot = (
        PlotBuilder(BackendKind.PLOTLY)
        .set_display(True)
        .add_variant(scatter(layer1))
        .add_variant(line(layer2))
        .finalize()
    )
    plot.write("render.html")
"""

__version__ = "0.1.0"

from .config import RenderConfig, load_config
from .core.charts import (
    Bar,
    Box,
    ChartVariant,
    Heatmap,
    HorizontalBar,
    Line,
    Pie,
    Scatter,
    bar,
    box,
    chart_from_layer,
    heatmap,
    horizontal_bar,
    line,
    pie,
    scatter,
)
from .core.data import normalize, normalize_matrix, normalize_series
from .core.errors import (
    ArtifactWriteError,
    ChartFileError,
    ConfigError,
    ConspireError,
    EmptyAssembly,
    MissingDimension,
    RenderError,
    UnsupportedVariant,
    ViewerLaunchError,
)
from .core.layer import Layer, MatrixLayer
from .core.models import (
    Artifact,
    BackendKind,
    CategoricalSeries,
    Channel,
    ChartKind,
    QuantitativeMatrix,
    QuantitativeSeries,
    RenderResult,
)
from .plot import PlotBuilder, PlotSystem

__all__ = [
    "Artifact",
    "ArtifactWriteError",
    "BackendKind",
    "Bar",
    "Box",
    "CategoricalSeries",
    "Channel",
    "ChartFileError",
    "ChartKind",
    "ChartVariant",
    "ConfigError",
    "ConspireError",
    "EmptyAssembly",
    "Heatmap",
    "HorizontalBar",
    "Layer",
    "Line",
    "MatrixLayer",
    "MissingDimension",
    "Pie",
    "PlotBuilder",
    "PlotSystem",
    "QuantitativeMatrix",
    "QuantitativeSeries",
    "RenderConfig",
    "RenderError",
    "RenderResult",
    "Scatter",
    "UnsupportedVariant",
    "ViewerLaunchError",
    "bar",
    "box",
    "chart_from_layer",
    "heatmap",
    "horizontal_bar",
    "line",
    "load_config",
    "normalize",
    "normalize_matrix",
    "normalize_series",
    "pie",
    "scatter",
]
