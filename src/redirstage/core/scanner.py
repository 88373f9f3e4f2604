"""Redirect scanning over a document set.

Scanning runs in two steps. The map step inspects one document at a time
and has no shared state, so it can run on several workers. The reduce step
waits for every per-document result, then deduplicates, checks for
conflicts and sorts.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial

from redirstage.config import RedirectsConfig
from redirstage.core.document import Document
from redirstage.core.extractor import extract_redirects
from redirstage.core.prefix import collect_prefix_redirects, match_document
from redirstage.core.redirects import (
    RedirectConflictError,
    RedirectMapping,
    RedirectSet,
    path_sort_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentRedirects:
    """Redirects contributed by a single document."""

    automatic: list[RedirectMapping] = field(default_factory=list)
    prefix: RedirectMapping | None = None


def scan_document(document: Document, settings: RedirectsConfig) -> DocumentRedirects:
    """Collect the redirects a single document contributes.

    Args:
        document: Document to inspect
        settings: Redirect settings

    Returns:
        Automatic mappings from redirect-from metadata and the prefix
        mapping for the document's destination, each only when enabled
    """
    automatic: list[RedirectMapping] = []
    if settings.automatic_enabled:
        automatic = extract_redirects(document, settings.page_extension)

    prefix = None
    if settings.prefix_enabled:
        prefix = match_document(document, settings.prefix)

    return DocumentRedirects(automatic=automatic, prefix=prefix)


def collect_automatic_redirects(
    mappings: Iterable[RedirectMapping],
) -> list[RedirectMapping]:
    """Deduplicate automatic mappings by source and sort them.

    Repeated identical mappings collapse into one.

    Args:
        mappings: Automatic mappings in document order

    Returns:
        Unique mappings sorted by source, segment by segment

    Raises:
        RedirectConflictError: If one source maps to different targets
    """
    unique: dict[str, RedirectMapping] = {}
    for mapping in mappings:
        existing = unique.get(mapping.source)
        if existing is None:
            unique[mapping.source] = mapping
        elif existing.target != mapping.target:
            raise RedirectConflictError(mapping.source, existing.origin, mapping.origin)
    return sorted(unique.values(), key=lambda m: path_sort_key(m.source))


def reduce_redirects(results: list[DocumentRedirects]) -> RedirectSet:
    """Combine per-document results into the build's redirect set."""
    automatic = collect_automatic_redirects(
        mapping for result in results for mapping in result.automatic
    )
    prefix = collect_prefix_redirects([result.prefix for result in results])
    return RedirectSet(prefix=prefix, automatic=automatic)


def scan(
    documents: Iterable[Document],
    settings: RedirectsConfig,
    *,
    workers: int | None = None,
) -> RedirectSet:
    """Scan all documents and build the redirect set.

    Args:
        documents: Every document published by the build
        settings: Redirect settings
        workers: Number of worker threads for the map step; None or 1
            scans in the calling thread

    Returns:
        Deduplicated, sorted redirect set

    Raises:
        RedirectConflictError: If two documents claim the same source path
    """
    scan_one = partial(scan_document, settings=settings)

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(scan_one, documents))
    else:
        results = [scan_one(document) for document in documents]

    redirects = reduce_redirects(results)
    logger.debug(
        f"Scanned {len(results)} documents: {len(redirects.prefix)} prefix, "
        f"{len(redirects.automatic)} automatic redirects"
    )
    return redirects
