"""Plot assembly — collect chart variants and hand them to a backend.

Usage::

    plot = (
        PlotBuilder(BackendKind.PLOTLY)
        .set_display(True)
        .add_variant(scatter(layer1))
        .add_variant(line(layer2))
        .finalize()
    )
    result = plot.write("render.html")

``PlotBuilder`` is an immutable value: every call returns a new builder.
``finalize`` refuses to build an empty plot.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .artifacts import open_in_viewer, write_artifact
from .backends import get_backend
from .config import RenderConfig
from .core.charts import ChartVariant
from .core.errors import EmptyAssembly, ViewerLaunchError
from .core.models import Artifact, BackendKind, RenderResult

logger = logging.getLogger(__name__)


class PlotBuilder(BaseModel):
    """A plot under construction."""
    model_config = ConfigDict(frozen=True)

    backend: BackendKind = BackendKind.PLOTLY
    display: bool = False
    variants: tuple[ChartVariant, ...] = ()

    def __init__(self, backend: BackendKind | str = BackendKind.PLOTLY, **data) -> None:
        super().__init__(backend=backend, **data)

    def add_variant(self, variant: ChartVariant) -> PlotBuilder:
        return self.model_copy(update={"variants": (*self.variants, variant)})

    def set_display(self, should_display: bool) -> PlotBuilder:
        return self.model_copy(update={"display": should_display})

    def set_backend(self, backend: BackendKind | str) -> PlotBuilder:
        return self.model_copy(update={"backend": BackendKind(backend)})

    def finalize(self) -> PlotSystem:
        """Freeze the builder into a renderable ``PlotSystem``.

        Raises ``EmptyAssembly`` if no variant was added.
        """
        if not self.variants:
            raise EmptyAssembly()
        return PlotSystem(backend=self.backend, display=self.display, variants=self.variants)


class PlotSystem(BaseModel):
    """A finalized, renderable plot. Holds at least one variant."""
    model_config = ConfigDict(frozen=True)

    backend: BackendKind
    display: bool = False
    variants: tuple[ChartVariant, ...]

    def __len__(self) -> int:
        return len(self.variants)

    def render(self, config: RenderConfig | None = None) -> Artifact:
        """Serialize the plot with its backend; touches no files."""
        return get_backend(self.backend, config).render(self.variants, self.display)

    def write(
        self,
        path: str | Path | None = None,
        config: RenderConfig | None = None,
    ) -> RenderResult:
        """Render, persist to *path* and open the result when display is set.

        *path* defaults to ``config.output_path``. Write failures raise
        ``ArtifactWriteError``; a viewer failure is logged and reported in
        the returned ``RenderResult`` since the file itself is fine.
        """
        config = config or RenderConfig()
        artifact = self.render(config)
        output_path = write_artifact(artifact, path or config.output_path)
        result = RenderResult(backend=self.backend, output_path=output_path)

        if self.display:
            try:
                open_in_viewer(output_path, timeout=config.viewer_timeout)
                result.displayed = True
            except ViewerLaunchError as exc:
                logger.warning("%s", exc)
                result.error = str(exc)
        return result
