"""Document discovery from a source directory.

Reads markdown files and their YAML front matter into Documents. The
destination of a document is its path relative to the source directory
without the .md suffix (e.g., "guide/setup.md" -> "guide/setup").
"""

import logging
from pathlib import Path

import frontmatter
import yaml

from redirstage.core.document import Document
from redirstage.core.metadata import Metadata, MetadataTypeError

logger = logging.getLogger(__name__)

DESTINATION_KEY = "destination"
PUBLISH_KEY = "publish"


class DocumentLoader:
    """Loads documents from markdown sources."""

    def __init__(self, source_dir: Path, pattern: str = "**/*.md") -> None:
        """Initialize loader.

        Args:
            source_dir: Root directory containing markdown sources
            pattern: Glob pattern selecting document files
        """
        self._source_dir = source_dir
        self._pattern = pattern

    @property
    def source_dir(self) -> Path:
        """Root directory containing markdown sources."""
        return self._source_dir

    def load(self) -> list[Document]:
        """Load every document under the source directory.

        Returns:
            Documents sorted by source path

        Raises:
            FileNotFoundError: If the source directory doesn't exist
        """
        if not self._source_dir.is_dir():
            raise FileNotFoundError(f"Source directory not found: {self._source_dir}")

        documents = [
            self.load_file(path)
            for path in sorted(self._source_dir.glob(self._pattern))
            if path.is_file()
        ]
        logger.info(f"Loaded {len(documents)} documents from {self._source_dir}")
        return documents

    def load_file(self, path: Path) -> Document:
        """Load a single document.

        Front matter that fails to parse is logged and ignored; the document
        is still published at its default destination.

        Args:
            path: Path to a markdown file inside the source directory

        Returns:
            Document with destination and metadata
        """
        relative = path.relative_to(self._source_dir)
        text = path.read_text(encoding="utf-8")

        try:
            post = frontmatter.loads(text)
            metadata = Metadata.from_dict(post.metadata)
        except yaml.YAMLError as e:
            logger.warning(f"Invalid front matter in {relative}: {e}")
            metadata = Metadata()

        return Document(
            destination=self._resolve_destination(relative, metadata),
            metadata=metadata,
            source_path=relative,
        )

    def _resolve_destination(self, relative: Path, metadata: Metadata) -> str | None:
        """Resolve the published destination of a document.

        Args:
            relative: Source path relative to source_dir
            metadata: Document metadata

        Returns:
            Extension-free destination, or None for unpublished documents
        """
        try:
            if not metadata.get_bool(PUBLISH_KEY, default=True):
                logger.debug(f"Not publishing {relative}")
                return None
            override = metadata.get_str(DESTINATION_KEY)
        except MetadataTypeError as e:
            logger.warning(f"Ignoring metadata in {relative}: {e}")
            override = None

        if override:
            return override.strip().strip("/")
        return relative.with_suffix("").as_posix()
