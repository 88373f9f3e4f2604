"""Redirstage - redirect generation for static documentation sites."""

from redirstage.build import BuildResult, build_site, generate_artifacts, generate_redirects
from redirstage.config import Config, RedirectsConfig
from redirstage.core.document import Artifact, Document
from redirstage.core.metadata import Metadata, MetadataTypeError
from redirstage.core.redirects import (
    RedirectConflictError,
    RedirectKind,
    RedirectMapping,
    RedirectSet,
)
from redirstage.core.rules import ExistingRules, RulesReadError, build_rules
from redirstage.core.scanner import scan

__all__ = [
    "Artifact",
    "BuildResult",
    "Config",
    "Document",
    "ExistingRules",
    "Metadata",
    "MetadataTypeError",
    "RedirectConflictError",
    "RedirectKind",
    "RedirectMapping",
    "RedirectSet",
    "RedirectsConfig",
    "RulesReadError",
    "build_rules",
    "build_site",
    "generate_artifacts",
    "generate_redirects",
    "scan",
]
