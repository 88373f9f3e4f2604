"""Client-side redirect pages.

Each automatic redirect becomes a small HTML page at the legacy path whose
meta-refresh sends the browser to the document's destination.
"""

import html

from redirstage.core.document import Artifact
from redirstage.core.redirects import RedirectConflictError, RedirectMapping

META_REFRESH_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>Redirecting&hellip;</title>
    <meta http-equiv="refresh" content="0;url='{url}'" />
    <link rel="canonical" href="{url}" />
    <meta name="robots" content="noindex" />
  </head>
  <body>
    <p>This page has moved to <a href="{url}">{url}</a>.</p>
  </body>
</html>
"""


def render_meta_refresh(target: str) -> str:
    """Render the redirect page for a target path.

    Args:
        target: Root-relative, extension-free target path (e.g., "/a/b/c")

    Returns:
        HTML document with a zero-delay meta-refresh to the target
    """
    return META_REFRESH_TEMPLATE.format(url=html.escape(target, quote=True))


def emit_meta_refresh(
    mappings: list[RedirectMapping],
    page_extension: str = "html",
) -> list[Artifact]:
    """Create one redirect page per mapping.

    Args:
        mappings: Automatic redirect mappings
        page_extension: Extension of the generated pages

    Returns:
        Artifacts at "<source>.<page_extension>" in mapping order

    Raises:
        RedirectConflictError: If two mappings would produce the same page
    """
    artifacts: list[Artifact] = []
    claimed: dict[str, RedirectMapping] = {}

    for mapping in mappings:
        destination = mapping.source.lstrip("/")
        if page_extension:
            destination = f"{destination}.{page_extension}"

        existing = claimed.get(destination)
        if existing is not None:
            raise RedirectConflictError(mapping.source, existing.origin, mapping.origin)
        claimed[destination] = mapping

        artifacts.append(
            Artifact(destination=destination, content=render_meta_refresh(mapping.target))
        )

    return artifacts
