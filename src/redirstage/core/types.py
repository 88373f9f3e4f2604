"""Core type definitions."""

from typing import NewType

# Root-relative URL path (e.g., "/guide", "/domain/page")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
