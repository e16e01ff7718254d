"""Page store — wiki paths to files under a content directory.

INVARIANT: Files are truth.  Every load reads the whole file and every
save rewrites it; nothing is cached between calls.

Decoding lives in :mod:`wikipage.domain.document`.  This module handles
path resolution, file I/O, and recovery from documents without front
matter.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from wikipage.domain.document import Document, load_document
from wikipage.domain.errors import NoFrontMatter
from wikipage.domain.formats import DEFAULT_MARK, FormatMark
from wikipage.domain.page import DATE_FORMAT, Page

logger = structlog.get_logger(__name__)

_VALID_PATH = re.compile(r"^[a-zA-Z0-9/_-]+$")


class PageNotFound(LookupError):
    """No file exists for the requested wiki path."""

    def __init__(self, path: str, file: Path) -> None:
        super().__init__(f"No page at {path!r} ({file})")
        self.path = path
        self.file = file


class InvalidPagePath(ValueError):
    """The wiki path is malformed or escapes the content directory."""


class PageStore:
    """Loads and saves pages as ``{content_dir}/{path}{suffix}`` files."""

    def __init__(
        self,
        content_dir: Path,
        *,
        suffix: str = ".md",
        default_mark: FormatMark = DEFAULT_MARK,
        date_format: str = DATE_FORMAT,
    ) -> None:
        self.content_dir = content_dir
        self.suffix = suffix
        self.default_mark = default_mark
        self.date_format = date_format

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> Path:
        """Return the file backing wiki *path*.

        Raises:
            InvalidPagePath: *path* has characters outside
                ``[a-zA-Z0-9/_-]``, empty segments, or resolves outside the
                content directory.
        """
        if not _VALID_PATH.match(path) or any(not part for part in path.strip("/").split("/")):
            msg = f"Invalid page path: {path!r}"
            raise InvalidPagePath(msg)

        result = self.content_dir / f"{path.strip('/')}{self.suffix}"
        if not result.resolve().is_relative_to(self.content_dir.resolve()):
            msg = f"Path escapes content directory: {path!r}"
            raise InvalidPagePath(msg)
        return result

    def find_pages(self) -> list[str]:
        """Return the wiki paths of all pages, sorted."""
        if not self.content_dir.is_dir():
            return []
        paths: list[str] = []
        for file in self.content_dir.rglob(f"*{self.suffix}"):
            if not file.is_file():
                continue
            rel = file.relative_to(self.content_dir).as_posix()
            page_path = rel[: -len(self.suffix)] if self.suffix else rel
            if _VALID_PATH.match(page_path):
                paths.append(page_path)
        return sorted(paths)

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def _page(self, path: str, document: Document) -> Page:
        return Page(path, document, default_mark=self.default_mark, date_format=self.date_format)

    def load(self, path: str) -> Page:
        """Read and decode the page at *path*.

        A file without front matter loads as a page with empty metadata
        and the whole file as its body.

        Raises:
            PageNotFound: No file exists for *path*.
            InvalidPagePath: *path* is not a valid wiki path.
            UnterminatedFrontMatter: The front matter is never closed.
            DecodeError: The front matter is malformed.
        """
        file = self.resolve(path)
        try:
            raw = file.read_bytes()
        except FileNotFoundError as exc:
            raise PageNotFound(path, file) from exc

        try:
            document = load_document(raw, default_mark=self.default_mark)
        except NoFrontMatter as exc:
            logger.warning("No front matter, treating page as metadata-less", path=path)
            document = exc.document
        return self._page(path, document)

    def load_or_new(self, path: str) -> Page:
        """Like :meth:`load`, but a missing file yields a fresh empty page."""
        try:
            return self.load(path)
        except PageNotFound:
            logger.info("Page does not exist yet, starting empty", path=path)
            return self._page(path, Document.empty(self.default_mark))

    def save(self, page: Page) -> Path:
        """Write *page* to its file, creating parent directories.

        Raises:
            UnrepresentableValue: The page metadata cannot be encoded.
        """
        file = self.resolve(page.path)
        data = page.to_bytes()
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_bytes(data)
        logger.debug("Saved page", path=page.path, bytes=len(data), format=page.mark.format_name)
        return file
