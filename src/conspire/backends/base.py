"""Abstract base class for rendering backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..config import RenderConfig
from ..core.models import Artifact, BackendKind


class BaseBackend(ABC):
    """Every backend inherits from this class.

    A backend turns an ordered sequence of validated chart variants into
    a self-contained ``Artifact``. It either returns a complete artifact
    or raises ``RenderError``; it never writes files or launches viewers.
    """

    backend: BackendKind  # set by subclasses

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    @abstractmethod
    def render(self, variants: Sequence, display: bool = False) -> Artifact:
        """Serialize *variants* in order and return the artifact."""
        ...
