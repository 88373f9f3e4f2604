"""Tests for document loading."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from redirstage.loader import DocumentLoader

WriteDoc = Callable[[str, str], Path]


class TestDocumentLoaderLoad:
    """Tests for DocumentLoader.load()."""

    def test__markdown_files__loaded_sorted(self, docs_dir: Path, write_doc: WriteDoc) -> None:
        """Load every markdown file in path order."""
        write_doc("d/e.md", "Bar")
        write_doc("a/b/c.md", "Foo")
        write_doc("_redirects", "foobar")
        write_doc("image.png", "not markdown")

        documents = DocumentLoader(docs_dir).load()

        assert [d.destination for d in documents] == ["a/b/c", "d/e"]
        assert [d.source_path for d in documents] == [Path("a/b/c.md"), Path("d/e.md")]

    def test__missing_source_dir__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Source directory not found"):
            DocumentLoader(tmp_path / "missing").load()

    def test__empty_source_dir__returns_empty(self, docs_dir: Path) -> None:
        assert DocumentLoader(docs_dir).load() == []

    def test__source_dir__exposed(self, docs_dir: Path) -> None:
        assert DocumentLoader(docs_dir).source_dir == docs_dir


class TestDocumentLoaderLoadFile:
    """Tests for DocumentLoader.load_file()."""

    def test__front_matter__becomes_metadata(self, docs_dir: Path, write_doc: WriteDoc) -> None:
        path = write_doc("a/b/c.md", "---\nRedirectFrom:\n  - x/y\n  - old\n---\nFoo")

        document = DocumentLoader(docs_dir).load_file(path)

        assert document.destination == "a/b/c"
        assert document.metadata.get_str_list("redirect-from") == ["x/y", "old"]

    def test__no_front_matter__empty_metadata(self, docs_dir: Path, write_doc: WriteDoc) -> None:
        path = write_doc("d/e.md", "# Heading\n\nBody")

        document = DocumentLoader(docs_dir).load_file(path)

        assert len(document.metadata) == 0

    def test__index_file__keeps_index_destination(
        self, docs_dir: Path, write_doc: WriteDoc
    ) -> None:
        path = write_doc("guide/index.md", "Guide")

        assert DocumentLoader(docs_dir).load_file(path).destination == "guide/index"

    def test__prefixed_file__keeps_marker(self, docs_dir: Path, write_doc: WriteDoc) -> None:
        path = write_doc("^.a.md", "Foo")

        assert DocumentLoader(docs_dir).load_file(path).destination == "^.a"

    def test__destination_override__used(self, docs_dir: Path, write_doc: WriteDoc) -> None:
        path = write_doc("draft.md", "---\ndestination: /guide/final/\n---\nFoo")

        assert DocumentLoader(docs_dir).load_file(path).destination == "guide/final"

    def test__unpublished__has_no_destination(
        self, docs_dir: Path, write_doc: WriteDoc
    ) -> None:
        path = write_doc("draft.md", "---\npublish: false\nredirect-from: old\n---\nFoo")

        assert DocumentLoader(docs_dir).load_file(path).destination is None

    def test__invalid_publish_flag__warns_and_publishes(
        self, docs_dir: Path, write_doc: WriteDoc, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = write_doc("page.md", "---\npublish: sometimes\n---\nFoo")

        with caplog.at_level(logging.WARNING):
            document = DocumentLoader(docs_dir).load_file(path)

        assert document.destination == "page"
        assert "page.md" in caplog.text

    def test__invalid_front_matter__warns_and_loads(
        self, docs_dir: Path, write_doc: WriteDoc, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = write_doc("broken.md", "---\nredirect-from: [x\n---\nFoo")

        with caplog.at_level(logging.WARNING):
            document = DocumentLoader(docs_dir).load_file(path)

        assert document.destination == "broken"
        assert len(document.metadata) == 0
        assert "Invalid front matter" in caplog.text
