"""Typed page view over a document's metadata mapping.

Named accessors (``title``, ``description``, ``tags``, ``date``,
``language``, ``draft``) project the generic mapping onto concrete types
with get-or-default semantics.

INVARIANT: A wrongly-shaped value never makes a page unreadable.  The
accessor substitutes its documented default, logs, and records a
:class:`FieldIssue` on ``page.issues``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Literal

import structlog
from pydantic import BaseModel, Field

from wikipage.domain.document import Document
from wikipage.domain.formats import DEFAULT_MARK, FormatMark
from wikipage.domain.metadata import Metadata

logger = structlog.get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"

Severity = Literal["warning", "error"]


@dataclass(frozen=True)
class FieldIssue:
    """A recoverable problem found while reading a typed field."""

    key: str
    severity: Severity
    message: str
    value: Any = None


class PageView(BaseModel):
    """Frozen snapshot of a page's typed fields."""

    model_config = {"frozen": True}

    path: str
    format: str
    title: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    date: datetime
    language: str = ""
    draft: bool = True


class Page:
    """A wiki page: its path plus a :class:`Document` with typed accessors."""

    def __init__(
        self,
        path: str,
        document: Document | None = None,
        *,
        default_mark: FormatMark = DEFAULT_MARK,
        date_format: str = DATE_FORMAT,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = path
        self.document = document if document is not None else Document.empty(default_mark)
        self.date_format = date_format
        self.issues: list[FieldIssue] = []
        self._now = now
        self._log = logger.bind(path=path)

    def __repr__(self) -> str:
        return f"Page(path={self.path!r}, mark={self.mark.name})"

    # --- Document passthrough ---

    @property
    def mark(self) -> FormatMark:
        return self.document.mark

    @property
    def metadata(self) -> Metadata:
        return self.document.metadata

    @property
    def body(self) -> str:
        return self.document.content.decode("utf-8", errors="surrogateescape")

    @body.setter
    def body(self, text: str) -> None:
        self.document.content = text.encode("utf-8", errors="surrogateescape")

    def to_bytes(self) -> bytes:
        return self.document.to_bytes()

    # --- Issue reporting ---

    def _report(self, key: str, severity: Severity, message: str, value: Any = None) -> None:
        issue = FieldIssue(key=key, severity=severity, message=message, value=value)
        if issue in self.issues:
            return
        self.issues.append(issue)
        log = self._log.error if severity == "error" else self._log.warning
        log(message, key=key, value=repr(value))

    def _get_str(self, key: str) -> str:
        value = self.metadata.get(key)
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        self._report(key, "warning", f"Expected a string for {key!r}", value)
        return ""

    # --- Typed getters ---

    @property
    def title(self) -> str:
        return self._get_str("title")

    @property
    def description(self) -> str:
        return self._get_str("description")

    @property
    def language(self) -> str:
        return self._get_str("language")

    @property
    def tags(self) -> list[str]:
        """Tags as a list of strings.

        Scalar items that are not strings are stringified; nested lists or
        mappings are dropped.  Both are reported.
        """
        value = self.metadata.get("tags")
        if value is None:
            return []
        if not isinstance(value, list):
            self._report("tags", "warning", "Expected a list of strings for 'tags'", value)
            return []

        tags: list[str] = []
        for item in value:
            if isinstance(item, str):
                tags.append(item)
            elif isinstance(item, (list, dict)) or item is None:
                self._report("tags", "warning", "Dropped a non-scalar tag", item)
            else:
                self._report("tags", "warning", "Converted a non-string tag", item)
                tags.append(str(item).lower() if isinstance(item, bool) else str(item))
        return tags

    @property
    def date(self) -> datetime:
        """Page date.  Defaults to now when missing or malformed.

        Accepts native timestamps and dates as well as ISO-8601 strings
        (JSON front matter has no timestamp type).
        """
        if "date" not in self.metadata:
            self._report("date", "warning", "No date on page")
            return self._now()

        value = self.metadata["date"]
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                pass
        self._report("date", "error", "Ill formatted date on page", value)
        return self._now()

    @property
    def date_text(self) -> str:
        return self.date.strftime(self.date_format)

    @property
    def draft(self) -> bool:
        """Draft flag.  Defaults to True when missing or not a boolean."""
        if "draft" not in self.metadata:
            self._report("draft", "warning", "Missing draft status, defaulting to true")
            return True
        value = self.metadata["draft"]
        if isinstance(value, bool):
            return value
        self._report("draft", "warning", "Ill formatted draft status, defaulting to true", value)
        return True

    # --- Setters ---

    def set_title(self, title: str) -> None:
        self.metadata["title"] = title

    def set_description(self, description: str) -> None:
        self.metadata["description"] = description

    def set_language(self, language: str) -> None:
        self.metadata["language"] = language

    def set_tags(self, tags: str | Iterable[str]) -> None:
        """Set tags from a whitespace-separated string or an iterable."""
        self.metadata["tags"] = tags.split() if isinstance(tags, str) else list(tags)

    def set_date(self, value: str | date) -> bool:
        """Set the page date; return False if *value* was rejected.

        Strings are parsed with :attr:`date_format`; a string that does not
        match is logged and the stored date is left unchanged.
        """
        if isinstance(value, str):
            try:
                value = datetime.strptime(value, self.date_format).date()
            except ValueError:
                self._log.error("Ill formatted date for page", value=value)
                return False
        self.metadata["date"] = value
        return True

    def set_draft(self, value: str | bool) -> None:
        """Set the draft flag; strings count as True only if equal to "true"."""
        if isinstance(value, str):
            value = value.casefold() == "true"
        self.metadata["draft"] = value

    # --- Snapshot ---

    def view(self) -> PageView:
        return PageView(
            path=self.path,
            format=self.mark.format_name,
            title=self.title,
            description=self.description,
            tags=self.tags,
            date=self.date,
            language=self.language,
            draft=self.draft,
        )
