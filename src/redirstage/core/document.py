"""Documents consumed and artifacts produced by redirect generation."""

from dataclasses import dataclass, field
from pathlib import Path

from redirstage.core.metadata import Metadata


@dataclass(frozen=True)
class Document:
    """Published document.

    Destination is slash-separated, root-relative and extension-free
    (e.g., "guide/setup"). Documents without a destination are not
    published and take no part in automatic redirects.
    """

    destination: str | None
    metadata: Metadata = field(default_factory=Metadata)
    source_path: Path | None = None

    @property
    def name(self) -> str:
        """Human-readable identifier for log and error messages."""
        if self.source_path is not None:
            return str(self.source_path)
        if self.destination is not None:
            return self.destination
        return "<unnamed document>"


@dataclass(frozen=True)
class Artifact:
    """Generated build output.

    Destination is relative to the output root and includes the extension.
    """

    destination: str
    content: str
