"""Escape-prefix redirect detection.

A destination segment starting with the escape prefix (e.g., "^.well-known")
is published with its literal name, and a redirect is generated from the
unmarked name (".well-known") to it. Only the outer-most marked segment of a
path counts; markers nested beneath it are ignored.
"""

from redirstage.core.document import Document
from redirstage.core.redirects import RedirectKind, RedirectMapping, path_sort_key
from redirstage.core.types import URLPath

DEFAULT_PREFIX = "^"


def match_prefix(
    destination: str,
    prefix: str | None,
    origin: str = "",
) -> RedirectMapping | None:
    """Find the outer-most prefix-marked segment of a destination.

    Args:
        destination: Root-relative destination path (e.g., "a/b/^.c/d")
        prefix: Escape prefix; empty or None disables matching
        origin: Name of the document the destination belongs to

    Returns:
        Mapping from the unmarked path to the marked path, truncated at the
        matched segment (e.g., "/a/b/.c" -> "/a/b/^.c"), or None when no
        segment is marked
    """
    if not prefix:
        return None

    segments = [segment for segment in destination.strip("/").split("/") if segment]
    for depth, segment in enumerate(segments):
        if not segment.startswith(prefix):
            continue

        stripped = segment[len(prefix) :]
        if not stripped:
            # A bare marker has no unmarked name to redirect from
            return None

        parents = segments[:depth]
        target = "/" + "/".join([*parents, segment])
        source = "/" + "/".join([*parents, stripped])
        return RedirectMapping(
            source=URLPath(source),
            target=URLPath(target),
            kind=RedirectKind.PREFIX,
            origin=origin,
        )

    return None


def match_document(document: Document, prefix: str | None) -> RedirectMapping | None:
    """Find the prefix redirect for a document, if any."""
    if document.destination is None:
        return None
    return match_prefix(document.destination, prefix, origin=document.name)


def collect_prefix_redirects(
    mappings: list[RedirectMapping | None],
) -> list[RedirectMapping]:
    """Deduplicate prefix mappings by target and sort them.

    Documents under the same marked segment resolve to the same mapping;
    the first occurrence is kept.

    Args:
        mappings: Per-document matches in document order (None for no match)

    Returns:
        Unique mappings sorted by target, segment by segment
    """
    unique: dict[str, RedirectMapping] = {}
    for mapping in mappings:
        if mapping is None:
            continue
        unique.setdefault(mapping.target, mapping)
    return sorted(unique.values(), key=lambda m: path_sort_key(m.target))
