"""Tests for watch mode."""

import asyncio
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from redirstage.watch import RedirectWatcher
from watchfiles import Change


class TestHandleChanges:
    """Tests for RedirectWatcher.handle_changes()."""

    def test__markdown_change__triggers_rebuild(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        triggered = watcher.handle_changes({(Change.modified, str(docs_dir / "a/b/c.md"))})

        assert triggered is True
        rebuild.assert_called_once_with()

    def test__top_level_markdown__matches_recursive_pattern(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        assert watcher.handle_changes({(Change.added, str(docs_dir / "index.md"))}) is True

    def test__rules_file_change__triggers_rebuild(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        assert watcher.handle_changes({(Change.modified, str(docs_dir / "_redirects"))}) is True

    def test__deleted_file__triggers_rebuild(self, docs_dir: Path) -> None:
        """Deleting a document can remove redirects."""
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        assert watcher.handle_changes({(Change.deleted, str(docs_dir / "old.md"))}) is True

    def test__unrelated_file__ignored(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        triggered = watcher.handle_changes({(Change.modified, str(docs_dir / "image.png"))})

        assert triggered is False
        rebuild.assert_not_called()

    def test__path_outside_source__ignored(self, docs_dir: Path, tmp_path: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        assert watcher.handle_changes({(Change.modified, str(tmp_path / "other.md"))}) is False

    def test__batch__rebuilds_once(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        watcher.handle_changes(
            {
                (Change.modified, str(docs_dir / "a.md")),
                (Change.modified, str(docs_dir / "b.md")),
            }
        )

        assert rebuild.call_count == 1
        assert watcher.rebuild_count == 1

    def test__custom_patterns__used(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild, watch_patterns=["*.markdown"])

        assert watcher.handle_changes({(Change.modified, str(docs_dir / "a.md"))}) is False
        assert watcher.handle_changes({(Change.modified, str(docs_dir / "a.markdown"))}) is True

    def test__build_error__logged_not_raised(
        self, docs_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Keep watching after a failed build."""
        rebuild = MagicMock(side_effect=ValueError("Redirect conflict for '/x'"))
        watcher = RedirectWatcher(docs_dir, rebuild)

        with caplog.at_level(logging.ERROR):
            triggered = watcher.handle_changes({(Change.modified, str(docs_dir / "a.md"))})

        assert triggered is True
        assert "Redirect conflict" in caplog.text


class TestWatchLoop:
    """Tests for the async watch loop."""

    @pytest.mark.asyncio
    async def test__awatch_batches__handled(self, docs_dir: Path) -> None:
        rebuild = MagicMock()
        watcher = RedirectWatcher(docs_dir, rebuild)

        async def fake_awatch(path: Path):
            assert path == docs_dir
            yield {(Change.modified, str(docs_dir / "a.md"))}
            yield {(Change.modified, str(docs_dir / "image.png"))}

        with patch("redirstage.watch.awatch", fake_awatch):
            await watcher.run()

        assert rebuild.call_count == 1

    @pytest.mark.asyncio
    async def test__start_stop__cancels_task(self, docs_dir: Path) -> None:
        watcher = RedirectWatcher(docs_dir, MagicMock())

        async def endless_awatch(path: Path):
            while True:
                await asyncio.sleep(3600)
                yield set()

        with patch("redirstage.watch.awatch", endless_awatch):
            await watcher.start()
            await asyncio.sleep(0)
            await watcher.stop()

        assert watcher._watch_task is None
