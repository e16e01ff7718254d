"""Documents — front-matter metadata plus verbatim content bytes.

The two boundary operations consumed by the page layer:

- :func:`load_document` — split and decode raw bytes.
- :func:`save_document` — encode metadata and append the content.

Round-trip law: for any ``raw`` that loads without error,
``load_document(raw).to_bytes() == raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wikipage.domain.codec import decode_metadata, encode_metadata, is_complete_payload
from wikipage.domain.formats import DEFAULT_MARK, FormatMark
from wikipage.domain.metadata import Metadata
from wikipage.domain.splitter import split_document


@dataclass
class Document:
    """A stored unit: format mark, metadata mapping, and opaque content.

    ``front_matter`` holds the raw block as it was read (empty for a
    document created from scratch or loaded without front matter).
    """

    mark: FormatMark
    metadata: Metadata = field(default_factory=Metadata)
    content: bytes = b""
    front_matter: bytes = b""

    @classmethod
    def empty(cls, mark: FormatMark = DEFAULT_MARK, *, content: bytes = b"") -> Document:
        """A document with no front matter yet."""
        return cls(mark=mark, metadata=Metadata(), content=content)

    @property
    def has_front_matter(self) -> bool:
        return bool(self.front_matter)

    def to_bytes(self) -> bytes:
        """Encode the document in its own mark."""
        return save_document(self.mark, self.metadata, self.content)

    def reformat(self, mark: FormatMark) -> Document:
        """Return a copy of this document that will be written in *mark*."""
        return Document(mark=mark, metadata=Metadata(self.metadata), content=self.content)


def load_document(raw: bytes, *, default_mark: FormatMark = DEFAULT_MARK) -> Document:
    """Split *raw* and decode its front matter.

    Raises:
        NoFrontMatter: *raw* has no front matter.  Recoverable: the
            exception's ``document`` is the metadata-less document with
            *default_mark* and the whole input as content.
        UnterminatedFrontMatter: The block is opened but never closed.
        DecodeError: The payload is malformed in its format.
    """
    parts = split_document(raw, default_mark=default_mark, accept=is_complete_payload)
    metadata = decode_metadata(parts.mark, parts.metadata, front_matter=parts.front_matter)
    return Document(
        mark=parts.mark,
        metadata=metadata,
        content=parts.content,
        front_matter=parts.front_matter,
    )


def save_document(mark: FormatMark, metadata: Metadata, content: bytes) -> bytes:
    """Encode *metadata* as a front-matter block in *mark* followed by *content*.

    Raises:
        UnrepresentableValue: *metadata* holds a value outside the
            supported value types.
    """
    return encode_metadata(mark, metadata) + content
