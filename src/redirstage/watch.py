"""Rebuild redirects when source files change.

Monitors the source directory and reruns the redirect build whenever a
matching file is added, modified or deleted.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from watchfiles import Change, awatch

from redirstage.config import DEFAULT_WATCH_PATTERNS

logger = logging.getLogger(__name__)


class RedirectWatcher:
    """Watches source files and triggers redirect rebuilds."""

    def __init__(
        self,
        source_dir: Path,
        rebuild: Callable[[], object],
        watch_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            source_dir: Directory to watch for changes
            rebuild: Callback running the redirect build
            watch_patterns: Glob patterns to watch (default: markdown files
                and the rules file)
        """
        self._source_dir = source_dir
        self._rebuild = rebuild
        self._watch_patterns = watch_patterns or list(DEFAULT_WATCH_PATTERNS)
        self._watch_task: asyncio.Task[None] | None = None
        self.rebuild_count = 0

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

    async def run(self) -> None:
        """Watch until cancelled."""
        await self._watch_files()

    async def _watch_files(self) -> None:
        """Watch for file changes and rebuild."""
        async for changes in awatch(self._source_dir):
            self.handle_changes(changes)

    def handle_changes(self, changes: Iterable[tuple[Change, str]]) -> bool:
        """Rebuild once if any change matches the watch patterns.

        Build errors are logged and do not stop the watcher.

        Args:
            changes: Batch of (change type, path) pairs

        Returns:
            True if a rebuild was attempted
        """
        relevant = [
            path_str for _, path_str in changes if self._matches_patterns(Path(path_str))
        ]
        if not relevant:
            return False

        logger.info(f"Detected {len(relevant)} changed files, rebuilding redirects")
        self.rebuild_count += 1
        try:
            self._rebuild()
        except (OSError, ValueError) as e:
            logger.error(f"Redirect build failed: {e}")
        return True

    def _matches_patterns(self, path: Path) -> bool:
        """Check if a path matches any watch pattern.

        Args:
            path: Path to check

        Returns:
            True if path matches any pattern
        """
        try:
            relative = path.relative_to(self._source_dir)
        except ValueError:
            return False

        for pattern in self._watch_patterns:
            if relative.match(pattern):
                return True
            # PurePath.match needs at least one parent for a leading "**/"
            if pattern.startswith("**/") and relative.match(pattern[3:]):
                return True
        return False
