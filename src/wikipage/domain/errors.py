"""Front-matter codec errors.

The codec never logs or swallows these; they propagate to the caller,
which decides whether to recover (``NoFrontMatter``) or reject the
document (everything else).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wikipage.domain.document import Document
    from wikipage.domain.formats import FormatMark


class FrontMatterError(Exception):
    """Base class for all front-matter codec errors."""


class NoFrontMatter(FrontMatterError):
    """The document does not start with a recognized front-matter block.

    Recoverable: the whole input is content and the metadata is empty.
    ``document`` holds that metadata-less document, ready to use.
    """

    def __init__(self, mark: FormatMark, content: bytes) -> None:
        super().__init__("No front matter at start of document")
        self.mark = mark
        self.content = content

    @property
    def document(self) -> Document:
        from wikipage.domain.document import Document

        return Document.empty(self.mark, content=self.content)


class UnterminatedFrontMatter(FrontMatterError):
    """An opening delimiter was found but its closing counterpart was not."""

    def __init__(self, mark: FormatMark) -> None:
        if mark.delimiter is None:
            msg = "JSON front matter object is not closed before end of document"
        else:
            msg = f"No closing {mark.delimiter.decode()!r} line for front matter"
        super().__init__(msg)
        self.mark = mark


class DecodeError(FrontMatterError):
    """The front-matter payload is not valid in its format.

    ``cause`` is the underlying parser exception.
    """

    def __init__(self, mark: FormatMark, cause: Exception) -> None:
        super().__init__(f"Invalid {mark.format_name} front matter: {cause}")
        self.mark = mark
        self.cause = cause


class UnrepresentableValue(FrontMatterError, TypeError):
    """A metadata value lies outside the supported value types.

    ``path`` locates the value inside the mapping, e.g. ``links.see[2]``.
    """

    def __init__(self, value: Any, path: str) -> None:
        super().__init__(
            f"Cannot represent {type(value).__name__} value at {path or '<root>'!s}: {value!r}"
        )
        self.value = value
        self.path = path
