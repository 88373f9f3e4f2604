"""Redirect-from metadata extraction.

Reads the "redirect-from" metadata of a single document and turns each
declared legacy path into an automatic redirect to the document's
destination.
"""

import logging

from redirstage.core.document import Document
from redirstage.core.metadata import MetadataTypeError
from redirstage.core.redirects import RedirectKind, RedirectMapping, normalize_path

logger = logging.getLogger(__name__)

REDIRECT_FROM_KEY = "redirect-from"


def extract_redirects(
    document: Document,
    page_extension: str = "html",
) -> list[RedirectMapping]:
    """Extract automatic redirects declared by a document.

    Args:
        document: Document to inspect
        page_extension: Page extension stripped from declared paths
            (e.g., "old/page.html" is read as "old/page")

    Returns:
        One mapping per redirect-from entry, in declaration order. Empty when
        the document has no destination, declares nothing, or declares a
        malformed value.
    """
    if document.destination is None:
        logger.debug(f"Skipping {document.name}: no destination")
        return []

    try:
        entries = document.metadata.get_str_list(REDIRECT_FROM_KEY)
    except MetadataTypeError as e:
        logger.warning(f"Ignoring redirect-from in {document.name}: {e}")
        return []

    if not entries:
        return []

    target = normalize_path(document.destination)
    suffix = f".{page_extension}" if page_extension else None
    mappings: list[RedirectMapping] = []
    for entry in entries:
        path = entry.strip()
        if suffix and path.endswith(suffix):
            path = path[: -len(suffix)]
        if not path.strip("/"):
            logger.warning(f"Ignoring empty redirect-from entry in {document.name}")
            continue

        source = normalize_path(path)
        if source == target:
            logger.debug(f"Skipping self redirect {source} in {document.name}")
            continue

        mappings.append(
            RedirectMapping(
                source=source,
                target=target,
                kind=RedirectKind.AUTOMATIC,
                origin=document.name,
            )
        )

    return mappings
