"""Backend registry — maps ``BackendKind`` values to backend classes.

Usage::

    from conspire.backends import get_backend

    backend = get_backend(BackendKind.PLOTLY)
    artifact = backend.render(variants)
"""

from __future__ import annotations

from ..config import RenderConfig
from ..core.errors import RenderError
from ..core.models import BackendKind
from .base import BaseBackend
from .plotly import PlotlyBackend

_BACKEND_REGISTRY: dict[BackendKind, type[BaseBackend]] = {
    BackendKind.PLOTLY: PlotlyBackend,
}


def get_backend(kind: BackendKind | str, config: RenderConfig | None = None) -> BaseBackend:
    """Instantiate the backend registered for *kind*.

    Raises ``RenderError`` if no backend is registered under that name.
    """
    try:
        key = BackendKind(kind)
        cls = _BACKEND_REGISTRY[key]
    except (ValueError, KeyError):
        available = ", ".join(sorted(k.value for k in _BACKEND_REGISTRY))
        raise RenderError(f"Unknown backend '{kind}'. Available: {available}") from None
    return cls(config)


def register_backend(kind: BackendKind, cls: type[BaseBackend]) -> None:
    """Register (or replace) the backend class for *kind* at runtime."""
    _BACKEND_REGISTRY[kind] = cls


def list_backends() -> list[BackendKind]:
    """Return all registered backend kinds."""
    return list(_BACKEND_REGISTRY)


__all__ = [
    "BaseBackend",
    "PlotlyBackend",
    "get_backend",
    "list_backends",
    "register_backend",
]
