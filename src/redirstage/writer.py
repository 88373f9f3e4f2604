"""Artifact output."""

import logging
from pathlib import Path

from redirstage.core.document import Artifact

logger = logging.getLogger(__name__)


def resolve_output_path(output_dir: Path, destination: str) -> Path:
    """Resolve an artifact destination inside the output directory.

    Raises:
        ValueError: If the destination escapes the output directory
    """
    root = output_dir.resolve()
    path = (root / destination).resolve()
    if not path.is_relative_to(root):
        raise ValueError(f"Artifact destination escapes output directory: {destination}")
    return path


def write_artifacts(artifacts: list[Artifact], output_dir: Path) -> list[Path]:
    """Write artifacts to disk.

    Args:
        artifacts: Artifacts to write
        output_dir: Output root directory, created if missing

    Returns:
        Paths of the written files, in artifact order
    """
    paths = [resolve_output_path(output_dir, artifact.destination) for artifact in artifacts]

    written: list[Path] = []
    for artifact, path in zip(artifacts, paths, strict=True):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.content, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        written.append(path)

    return written
