"""Redirect build orchestration.

Composes the scanning, client redirect and rules file steps over a
complete document set, and runs them against a source directory.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from redirstage.config import Config, RedirectsConfig, validate_output_dir
from redirstage.core.document import Artifact, Document
from redirstage.core.meta_refresh import emit_meta_refresh
from redirstage.core.redirects import RedirectSet
from redirstage.core.rules import ExistingRules, build_rules, read_existing_rules
from redirstage.core.scanner import scan
from redirstage.loader import DocumentLoader
from redirstage.writer import write_artifacts

logger = logging.getLogger(__name__)


def generate_artifacts(
    redirects: RedirectSet,
    settings: RedirectsConfig,
    existing: ExistingRules | None = None,
) -> list[Artifact]:
    """Turn a redirect set into build artifacts.

    Args:
        redirects: Scanned redirect set
        settings: Redirect settings
        existing: User-authored rules file, merged when the rules file is enabled

    Returns:
        Meta-refresh pages followed by the rules file, each only when enabled

    Raises:
        RedirectConflictError: If two redirect pages share a destination
    """
    artifacts: list[Artifact] = []

    if settings.meta_refresh:
        artifacts.extend(emit_meta_refresh(redirects.automatic, settings.page_extension))

    if settings.netlify:
        rules = build_rules(redirects, existing, destination=settings.rules_file)
        if rules is not None:
            artifacts.append(rules)

    return artifacts


def generate_redirects(
    documents: list[Document],
    settings: RedirectsConfig,
    existing: ExistingRules | None = None,
    *,
    workers: int | None = None,
) -> list[Artifact]:
    """Generate all redirect artifacts for a document set.

    Args:
        documents: Every document published by the build
        settings: Redirect settings
        existing: User-authored rules file
        workers: Worker threads for per-document scanning

    Returns:
        Generated artifacts; empty when there is nothing to redirect
    """
    redirects = scan(documents, settings, workers=workers)
    return generate_artifacts(redirects, settings, existing)


@dataclass
class BuildResult:
    """Outcome of a redirect build."""

    artifacts: list[Artifact]
    redirects: RedirectSet
    written: list[Path] = field(default_factory=list)


def build_site(
    config: Config,
    *,
    dry_run: bool = False,
    workers: int | None = None,
) -> BuildResult:
    """Generate redirects for the configured source directory.

    Args:
        config: Application configuration
        dry_run: Compute artifacts without writing them
        workers: Worker threads for per-document scanning

    Returns:
        BuildResult with generated artifacts and written paths

    Raises:
        FileNotFoundError: If the source directory doesn't exist
        RulesReadError: If the existing rules file cannot be read
        RedirectConflictError: If two documents claim the same redirect
        ValueError: If the output directory is inside the source directory
    """
    validate_output_dir(config.docs.source_dir, config.docs.output_dir)
    settings = config.redirects
    documents = DocumentLoader(config.docs.source_dir).load()

    existing = None
    if settings.netlify:
        existing = read_existing_rules(config.docs.source_dir, settings.rules_file)

    redirects = scan(documents, settings, workers=workers)
    artifacts = generate_artifacts(redirects, settings, existing)

    result = BuildResult(artifacts=artifacts, redirects=redirects)
    if not artifacts:
        logger.info("No redirects to generate")
        return result

    if not dry_run:
        result.written = write_artifacts(artifacts, config.docs.output_dir)
        logger.info(f"Wrote {len(result.written)} artifacts to {config.docs.output_dir}")

    return result
