"""Normalize native containers into canonical series and matrices.

Accepted inputs::

    "label"                      -> CategoricalSeries(("label",))
    [1, 2, 3] / (1.5, 2.0)       -> QuantitativeSeries (widened to float)
    ["a", "b"]                   -> CategoricalSeries
    numpy 1-D numeric array      -> QuantitativeSeries (any int/uint/float/bool width)
    numpy 1-D str/bytes array    -> CategoricalSeries
    [[1, 2], [3, 4]]             -> QuantitativeMatrix
    numpy 2-D numeric array      -> QuantitativeMatrix

Anything else raises ``TypeError``: that is the boundary of what can be
plotted, not a runtime failure of the conversion itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Union

import numpy as np

from .models import CategoricalSeries, QuantitativeMatrix, QuantitativeSeries

Series = Union[QuantitativeSeries, CategoricalSeries]

_NUMERIC_DTYPE_KINDS = "biuf"
_TEXT_DTYPE_KINDS = "SU"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating, np.bool_))


def _is_text(value: Any) -> bool:
    return isinstance(value, (str, bytes, np.str_, np.bytes_))


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, np.bytes_)):
        return bytes(value).decode("utf-8")
    return str(value)


def _is_row(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    return isinstance(value, Sequence) and not _is_text(value)


def _describe(data: Any) -> str:
    if isinstance(data, np.ndarray):
        return f"{data.ndim}-D numpy array of dtype {data.dtype}"
    return type(data).__name__


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

def _series_from_array(arr: np.ndarray) -> Series:
    if arr.ndim != 1:
        raise TypeError(f"Cannot build a series from a {_describe(arr)}")
    if arr.dtype.kind in _NUMERIC_DTYPE_KINDS:
        return QuantitativeSeries(values=tuple(arr.astype(np.float64).tolist()))
    if arr.dtype.kind in _TEXT_DTYPE_KINDS:
        return CategoricalSeries(values=tuple(_as_text(v) for v in arr.tolist()))
    raise TypeError(f"Cannot build a series from a {_describe(arr)}")


def normalize_series(data: Any) -> Series:
    """Convert *data* into a ``QuantitativeSeries`` or ``CategoricalSeries``.

    A bare string becomes a one-element categorical series, which is how
    a whole layer gets a single constant label (e.g. ``color("blue")``).
    An empty sequence becomes an empty quantitative series.
    """
    if isinstance(data, (QuantitativeSeries, CategoricalSeries)):
        return data
    if _is_text(data):
        return CategoricalSeries(values=(_as_text(data),))
    if isinstance(data, np.ndarray):
        return _series_from_array(data)
    if not isinstance(data, Sequence):
        raise TypeError(f"Cannot build a series from {_describe(data)}")

    items = list(data)
    if all(_is_number(v) for v in items):
        return QuantitativeSeries(values=tuple(float(v) for v in items))
    if all(_is_text(v) for v in items):
        return CategoricalSeries(values=tuple(_as_text(v) for v in items))
    raise TypeError("A series must be either all numbers or all strings")


# ---------------------------------------------------------------------------
# Matrix
# ---------------------------------------------------------------------------

def normalize_matrix(data: Any) -> QuantitativeMatrix:
    """Convert *data* into a ``QuantitativeMatrix``.

    Rows may have different lengths; each is widened independently.
    """
    if isinstance(data, QuantitativeMatrix):
        return data
    if isinstance(data, np.ndarray):
        if data.ndim != 2 or data.dtype.kind not in _NUMERIC_DTYPE_KINDS:
            raise TypeError(f"Cannot build a matrix from a {_describe(data)}")
        return QuantitativeMatrix(
            rows=tuple(tuple(row) for row in data.astype(np.float64).tolist())
        )
    if not isinstance(data, Sequence) or _is_text(data):
        raise TypeError(f"Cannot build a matrix from {_describe(data)}")

    rows: list[tuple[float, ...]] = []
    for row in data:
        series = normalize_series(row) if _is_row(row) else None
        if not isinstance(series, QuantitativeSeries):
            raise TypeError("Every matrix row must be a sequence of numbers")
        rows.append(series.values)
    return QuantitativeMatrix(rows=tuple(rows))


def _is_two_dimensional(data: Any) -> bool:
    if isinstance(data, QuantitativeMatrix):
        return True
    if isinstance(data, np.ndarray):
        return data.ndim == 2
    if isinstance(data, Sequence) and not _is_text(data) and len(data) > 0:
        return all(_is_row(row) for row in data)
    return False


def normalize(data: Any) -> Union[Series, QuantitativeMatrix]:
    """Normalize *data* into a series or, for 2-D inputs, a matrix."""
    if _is_two_dimensional(data):
        return normalize_matrix(data)
    return normalize_series(data)


def is_present(value: Union[Series, QuantitativeMatrix, None]) -> bool:
    """True if *value* is bound and holds at least one element."""
    if value is None:
        return False
    if isinstance(value, QuantitativeMatrix):
        return any(len(row) > 0 for row in value.rows)
    return len(value) > 0
