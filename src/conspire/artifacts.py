"""Artifact collaborators — persist rendered documents and open them.

These are the only parts of conspire that touch the filesystem or spawn
processes. Platform dispatch for the viewer lives here and nowhere else.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path

from .core.errors import ArtifactWriteError, ViewerLaunchError
from .core.models import Artifact

logger = logging.getLogger(__name__)

_VIEWER_TIMEOUT = 15.0


def _new_file_mode(target: Path) -> int:
    """Mode a plain ``open(target, "w")`` would give: keep an existing file's
    mode, otherwise 0o666 masked by the process umask.
    """
    try:
        return target.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_artifact(artifact: Artifact, path: str | Path) -> Path:
    """Write *artifact* to *path* and return the resolved path.

    The content goes to a temporary sibling file first and is moved into
    place, so a failed write leaves any previous file at *path* intact.
    Raises ``ArtifactWriteError`` on any OS-level failure.
    """
    target = Path(path).expanduser().resolve()
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(artifact.content)
        os.chmod(tmp_name, _new_file_mode(target))
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as exc:
        raise ArtifactWriteError(target, exc.strerror or str(exc)) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info("Successfully wrote %s", target)
    return target


def _viewer_command(path: Path) -> list[str]:
    if sys.platform.startswith("win"):
        return ["cmd", "/C", "start", "", str(path)]
    if sys.platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


def open_in_viewer(path: str | Path, timeout: float = _VIEWER_TIMEOUT) -> None:
    """Open the artifact at *path* with the platform's default viewer.

    Raises ``ViewerLaunchError`` if the command is missing, times out or
    exits with a non-zero status.
    """
    target = Path(path)
    cmd = _viewer_command(target)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (FileNotFoundError, subprocess.TimeoutExpired) as exc:
        raise ViewerLaunchError(target, str(exc)) from exc

    if result.returncode != 0:
        reason = result.stderr.strip() or f"{cmd[0]} exited with status {result.returncode}"
        raise ViewerLaunchError(target, reason)
    logger.info("Opened %s with %s", target, cmd[0])
