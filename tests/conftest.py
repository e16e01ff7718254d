"""Shared pytest fixtures and test helpers for wikipage tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from wikipage.domain.formats import FormatMark
from wikipage.infrastructure.store import PageStore
from wikipage.services.pages import PageService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Temporary content directory for page files."""
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def store(content_dir: Path) -> PageStore:
    """Page store over the temporary content directory (TOML default)."""
    return PageStore(content_dir, default_mark=FormatMark.PLUS)


@pytest.fixture
def service(store: PageStore) -> PageService:
    return PageService(store)


@pytest.fixture
def _isolated_wiki(tmp_path: Path, content_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp wiki root so the CLI finds ``./content``.

    Use via ``@pytest.mark.usefixtures("_isolated_wiki")`` on command test
    classes.
    """
    monkeypatch.delenv("WIKIPAGE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

YAML_PAGE = b"""---
title: Hello
tags:
- a
- b
date: 2024-03-01
draft: false
---
# Hello

Body text.
"""

TOML_PAGE = b"""+++
title = "Hello"
tags = ["a", "b"]
date = 2024-03-01T10:30:00
draft = false
+++
# Hello

Body text.
"""

JSON_PAGE = b"""{
  "title": "Hello",
  "tags": ["a", "b"],
  "date": "2024-03-01",
  "draft": false
}
# Hello

Body text.
"""


def write_page(content_dir: Path, path: str, raw: bytes) -> Path:
    """Write raw page bytes under *content_dir*, returning the file."""
    file = content_dir / f"{path}.md"
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_bytes(raw)
    return file


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger handlers after tests that configure logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    wiki = logging.getLogger("wikipage")
    wiki_level = wiki.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    wiki.setLevel(wiki_level)
