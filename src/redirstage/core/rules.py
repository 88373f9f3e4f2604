"""Netlify-style redirect rules file.

The rules file combines three sections in a fixed order, each separated by
one blank line:

    <existing rules file content>

    # Prefix redirects generated by Statiq
    /.well-known /^.well-known

    # Automatic redirects generated by Statiq
    /old/page /new/page

Sections with nothing in them are left out. User-authored rules are kept
verbatim apart from trailing whitespace.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from redirstage.core.document import Artifact
from redirstage.core.redirects import RedirectMapping, RedirectSet

logger = logging.getLogger(__name__)

DEFAULT_RULES_FILE = "_redirects"
PREFIX_HEADER = "# Prefix redirects generated by Statiq"
AUTOMATIC_HEADER = "# Automatic redirects generated by Statiq"
SECTION_SEPARATOR = "\n\n"


class RulesReadError(OSError):
    """Raised when an existing rules file cannot be read."""


@dataclass(frozen=True)
class ExistingRules:
    """User-authored rules file found in the source directory."""

    path: str
    content: str


def read_existing_rules(
    source_dir: Path,
    filename: str = DEFAULT_RULES_FILE,
) -> ExistingRules | None:
    """Read the user-authored rules file, if present.

    Args:
        source_dir: Site source root
        filename: Rules file name relative to source_dir

    Returns:
        ExistingRules, or None when the file does not exist

    Raises:
        RulesReadError: If the file exists but cannot be read
    """
    rules_path = source_dir / filename
    if not rules_path.exists():
        return None

    try:
        content = rules_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RulesReadError(f"Failed to read rules file {rules_path}: {e}") from e

    logger.debug(f"Loaded existing rules from {rules_path}")
    return ExistingRules(path=Path(filename).as_posix(), content=content)


def format_section(header: str, mappings: list[RedirectMapping]) -> str:
    """Format a generated section: header line followed by one rule per line."""
    return "\n".join([header, *(mapping.to_rule() for mapping in mappings)])


def build_rules(
    redirects: RedirectSet,
    existing: ExistingRules | None = None,
    *,
    destination: str = DEFAULT_RULES_FILE,
) -> Artifact | None:
    """Assemble the rules file.

    Args:
        redirects: Prefix and automatic mappings to include (already
            deduplicated and sorted)
        existing: User-authored rules file to merge with
        destination: Output path when there is no existing file

    Returns:
        Rules file artifact, or None when there is nothing to write
    """
    sections: list[str] = []

    existing_content = existing.content.rstrip() if existing is not None else ""
    if existing_content:
        sections.append(existing_content)
    if redirects.prefix:
        sections.append(format_section(PREFIX_HEADER, redirects.prefix))
    if redirects.automatic:
        sections.append(format_section(AUTOMATIC_HEADER, redirects.automatic))

    if existing is not None:
        destination = existing.path
        if not redirects:
            # Nothing generated, pass the user's file through untouched
            return Artifact(destination=destination, content=existing.content)

    if not sections:
        return None

    logger.info(
        f"Rules file {destination}: {len(redirects.prefix)} prefix, "
        f"{len(redirects.automatic)} automatic redirects"
    )
    return Artifact(destination=destination, content=SECTION_SEPARATOR.join(sections))
