"""Redirect mappings and the per-build redirect set."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from redirstage.core.types import URLPath


class RedirectKind(Enum):
    """Origin of a redirect mapping."""

    AUTOMATIC = "automatic"
    PREFIX = "prefix"


class RedirectConflictError(ValueError):
    """Raised when two documents claim the same redirect source."""

    def __init__(self, source: str, first: str, second: str) -> None:
        self.source = source
        self.first = first
        self.second = second
        super().__init__(
            f"Redirect conflict for '{source}': claimed by both {first} and {second}"
        )


def normalize_path(path: str) -> URLPath:
    """Normalize a path to a leading slash and no trailing slash.

    Args:
        path: Path with or without slashes (e.g., "x/y/", "/x/y")

    Returns:
        Normalized URL path (e.g., "/x/y"); the root is "/"
    """
    stripped = path.strip().replace("\\", "/").strip("/")
    return URLPath(f"/{stripped}")


def path_sort_key(path: str) -> list[str]:
    """Sort key comparing paths segment by segment."""
    return path.strip("/").split("/")


@dataclass(frozen=True)
class RedirectMapping:
    """Redirect from a source path to a target path.

    Both paths are root-relative. The origin names the document that
    produced the mapping and does not take part in equality.
    """

    source: URLPath
    target: URLPath
    kind: RedirectKind
    origin: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.source == self.target:
            raise ValueError(f"Redirect source and target are identical: {self.source}")

    def to_rule(self) -> str:
        """Render as a rules file line."""
        return f"{self.source} {self.target}"


@dataclass(frozen=True)
class RedirectSet:
    """Deduplicated, sorted redirect mappings gathered across a build."""

    prefix: list[RedirectMapping] = field(default_factory=list)
    automatic: list[RedirectMapping] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.prefix or self.automatic)

    def __iter__(self) -> Iterator[RedirectMapping]:
        yield from self.prefix
        yield from self.automatic
