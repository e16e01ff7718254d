"""Tests for PageStore — path resolution and file I/O."""

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from tests.conftest import TOML_PAGE, YAML_PAGE, write_page
from wikipage.domain.errors import DecodeError, UnrepresentableValue, UnterminatedFrontMatter
from wikipage.domain.formats import FormatMark
from wikipage.infrastructure.store import InvalidPagePath, PageNotFound, PageStore


class TestResolve:
    def test_nested_path(self, store: PageStore, content_dir: Path) -> None:
        assert store.resolve("notes/python-tips") == content_dir / "notes" / "python-tips.md"

    def test_custom_suffix(self, content_dir: Path) -> None:
        store = PageStore(content_dir, suffix=".markdown")
        assert store.resolve("home").name == "home.markdown"

    @pytest.mark.parametrize(
        "path", ["", "../etc/passwd", "a/../b", "has space", "a//b", "dot.md", "/"]
    )
    def test_rejects_invalid(self, store: PageStore, path: str) -> None:
        with pytest.raises(InvalidPagePath):
            store.resolve(path)


class TestFindPages:
    def test_sorted_paths(self, store: PageStore, content_dir: Path) -> None:
        write_page(content_dir, "zeta", TOML_PAGE)
        write_page(content_dir, "alpha", YAML_PAGE)
        write_page(content_dir, "notes/beta", YAML_PAGE)
        (content_dir / "readme.txt").write_text("ignored")
        assert store.find_pages() == ["alpha", "notes/beta", "zeta"]

    def test_skips_unaddressable_names(self, store: PageStore, content_dir: Path) -> None:
        (content_dir / "my page.md").write_bytes(YAML_PAGE)
        assert store.find_pages() == []

    def test_missing_content_dir(self, tmp_path: Path) -> None:
        assert PageStore(tmp_path / "missing").find_pages() == []


class TestLoad:
    def test_load(self, store: PageStore, content_dir: Path) -> None:
        write_page(content_dir, "home", YAML_PAGE)
        page = store.load("home")
        assert page.path == "home"
        assert page.mark is FormatMark.DASH
        assert page.title == "Hello"

    def test_not_found(self, store: PageStore) -> None:
        with pytest.raises(PageNotFound) as exc_info:
            store.load("missing")
        assert exc_info.value.path == "missing"

    def test_no_front_matter_recovers(self, store: PageStore, content_dir: Path) -> None:
        write_page(content_dir, "plain", b"Just text\n")
        with capture_logs() as logs:
            page = store.load("plain")
        assert page.mark is FormatMark.PLUS
        assert len(page.metadata) == 0
        assert page.body == "Just text\n"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["path"] == "plain"

    def test_unterminated(self, store: PageStore, content_dir: Path) -> None:
        write_page(content_dir, "bad", b"---\ntitle: x\n")
        with pytest.raises(UnterminatedFrontMatter):
            store.load("bad")

    def test_malformed(self, store: PageStore, content_dir: Path) -> None:
        write_page(content_dir, "bad", b"+++\ntitle = \n+++\n")
        with pytest.raises(DecodeError):
            store.load("bad")

    def test_load_or_new(self, store: PageStore) -> None:
        page = store.load_or_new("fresh")
        assert page.mark is FormatMark.PLUS
        assert not page.document.has_front_matter
        assert page.body == ""


class TestSave:
    def test_unchanged_page_is_byte_identical(self, store: PageStore, content_dir: Path) -> None:
        raw = b"---\n# keep me\ntitle:   Hello\n---\nBody\n"
        file = write_page(content_dir, "home", raw)
        store.save(store.load("home"))
        assert file.read_bytes() == raw

    def test_creates_parents(self, store: PageStore, content_dir: Path) -> None:
        page = store.load_or_new("a/b/c")
        page.set_title("Deep")
        file = store.save(page)
        assert file == content_dir / "a" / "b" / "c.md"
        assert file.read_bytes() == b'+++\ntitle = "Deep"\n+++\n'

    def test_no_caching_between_calls(self, store: PageStore, content_dir: Path) -> None:
        file = write_page(content_dir, "home", YAML_PAGE)
        assert store.load("home").title == "Hello"
        file.write_bytes(YAML_PAGE.replace(b"title: Hello", b"title: Edited"))
        assert store.load("home").title == "Edited"

    def test_unrepresentable_edit_leaves_file_alone(
        self, store: PageStore, content_dir: Path
    ) -> None:
        file = write_page(content_dir, "home", YAML_PAGE)
        page = store.load("home")
        page.metadata["tags"].append({"not", "a", "list"})
        with pytest.raises(UnrepresentableValue):
            store.save(page)
        assert file.read_bytes() == YAML_PAGE
