"""Persist the output document and hand it to the downstream generator.

The artifact is written to a well-known path first. The downstream copy is a
full replacement: the destination is removed before the artifact is copied
over it, so nothing from an earlier run can survive.
"""

from __future__ import annotations

import logging
import shutil
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .assembler import OutputDocument

logger = logging.getLogger(__name__)


def write_artifact(document: OutputDocument, path: Path) -> Path:
    """Write ``document`` as UTF-8 JSON to ``path`` and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.dumps(), encoding="utf-8")
    return path


def replace_downstream(artifact: Path, destination: Path) -> Path:
    """Replace ``destination`` with a copy of ``artifact``.

    Raises
    ------
    FileNotFoundError
        If ``artifact`` does not exist; the destination is left untouched.
    """
    if not artifact.exists():
        msg = f"Artifact '{artifact}' not found."
        raise FileNotFoundError(msg)
    if destination.exists():
        logger.info("Removing previous downstream copy at %s", destination)
        destination.unlink()
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(artifact, destination)
    return destination


__all__ = ["replace_downstream", "write_artifact"]
