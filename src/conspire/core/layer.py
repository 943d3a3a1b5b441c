"""Layers — channel-bound data not yet tied to a chart kind.

A layer is an immutable value. Each binding call normalizes its input
and returns a new layer, so calls chain naturally::

    layer = Layer().bind_x([1, 2, 3]).bind_y([4.0, 5.0, 6.0]).with_name("run 1")

Binding the same channel twice keeps the last value.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .data import normalize_matrix, normalize_series
from .models import NormalizedSeries, QuantitativeMatrix


class Layer(BaseModel):
    """Series-oriented layer with x, y, color and size channels."""
    model_config = ConfigDict(frozen=True)

    x: Optional[NormalizedSeries] = None
    y: Optional[NormalizedSeries] = None
    color: Optional[NormalizedSeries] = None
    size: Optional[NormalizedSeries] = None
    name: Optional[str] = None

    # -- Binding -----------------------------------------------------------

    def bind_x(self, data: Any) -> Layer:
        return self.model_copy(update={"x": normalize_series(data)})

    def bind_y(self, data: Any) -> Layer:
        return self.model_copy(update={"y": normalize_series(data)})

    def bind_color(self, data: Any) -> Layer:
        return self.model_copy(update={"color": normalize_series(data)})

    def bind_size(self, data: Any) -> Layer:
        return self.model_copy(update={"size": normalize_series(data)})

    def with_name(self, name: str) -> Layer:
        """Set the display name; an empty string clears it."""
        return self.model_copy(update={"name": name or None})

    # -- Accessors ---------------------------------------------------------

    def get_x(self) -> Optional[NormalizedSeries]:
        return self.x

    def get_y(self) -> Optional[NormalizedSeries]:
        return self.y

    def get_color(self) -> Optional[NormalizedSeries]:
        return self.color

    def get_size(self) -> Optional[NormalizedSeries]:
        return self.size

    def get_name(self) -> Optional[str]:
        return self.name


class MatrixLayer(BaseModel):
    """Matrix-oriented layer used by heatmaps."""
    model_config = ConfigDict(frozen=True)

    z: Optional[QuantitativeMatrix] = None
    color: Optional[QuantitativeMatrix] = None
    name: Optional[str] = None

    def bind_z(self, data: Any) -> MatrixLayer:
        return self.model_copy(update={"z": normalize_matrix(data)})

    def bind_color(self, data: Any) -> MatrixLayer:
        return self.model_copy(update={"color": normalize_matrix(data)})

    def with_name(self, name: str) -> MatrixLayer:
        return self.model_copy(update={"name": name or None})

    def get_z(self) -> Optional[QuantitativeMatrix]:
        return self.z

    def get_color(self) -> Optional[QuantitativeMatrix]:
        return self.color

    def get_name(self) -> Optional[str]:
        return self.name
