"""Exception hierarchy for chart construction and rendering."""

from __future__ import annotations

from pathlib import Path

from .models import BackendKind, Channel, ChartKind


class ConspireError(Exception):
    """Base class for every error raised by conspire."""


class MissingDimension(ConspireError):
    """A chart variant was built from a layer without a required channel."""

    def __init__(self, channel: Channel) -> None:
        self.channel = channel
        super().__init__(f"Missing {channel.value.upper()} dimension")


class EmptyAssembly(ConspireError):
    """A plot was finalized before any chart variant was added."""

    def __init__(self) -> None:
        super().__init__("Cannot make a plot without data")


class RenderError(ConspireError):
    """A backend could not serialize the chart variants."""


class UnsupportedVariant(RenderError):
    """The backend has no serializer for this variant (or variant option)."""

    def __init__(self, kind: ChartKind, backend: BackendKind, detail: str = "") -> None:
        self.kind = kind
        self.backend = backend
        msg = f"{backend.value} backend cannot render {kind.value} charts"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ArtifactWriteError(ConspireError):
    """Writing a rendered artifact to disk failed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Couldn't write {path}: {reason}")


class ViewerLaunchError(ConspireError):
    """The external viewer could not be started for an artifact."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Couldn't open {path}: {reason}")


class ChartFileError(ConspireError):
    """A declarative chart file is malformed."""


class ConfigError(ConspireError):
    """A render config file is unreadable or holds invalid values."""
