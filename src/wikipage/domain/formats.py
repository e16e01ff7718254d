"""Front-matter format marks.

A document's front matter is written in exactly one of three syntaxes,
identified by the first byte of the document:

- ``-`` — YAML between ``---`` delimiter lines
- ``+`` — TOML between ``+++`` delimiter lines
- ``{`` — a bare JSON object, self-delimiting
"""

from __future__ import annotations

from enum import Enum


class FormatMark(Enum):
    """Discriminator for the front-matter syntax of a document."""

    DASH = "-"
    PLUS = "+"
    BRACE = "{"

    @property
    def delimiter(self) -> bytes | None:
        """Delimiter line (without terminator), or None for JSON."""
        match self:
            case FormatMark.DASH:
                return b"---"
            case FormatMark.PLUS:
                return b"+++"
            case FormatMark.BRACE:
                return None

    @property
    def format_name(self) -> str:
        """Human name of the payload syntax (``yaml``, ``toml``, ``json``)."""
        return _FORMAT_NAMES[self]

    @classmethod
    def from_lead_byte(cls, lead: int) -> FormatMark | None:
        """Return the mark announced by the first byte of a document."""
        try:
            return cls(chr(lead))
        except ValueError:
            return None

    @classmethod
    def parse(cls, value: str | FormatMark) -> FormatMark:
        """Resolve a mark from its character, its name, or a format name.

        Accepts ``"+"``, ``"plus"``, ``"PLUS"``, ``"toml"`` and so on.

        Raises:
            ValueError: If *value* does not name a known mark.
        """
        if isinstance(value, FormatMark):
            return value
        text = value.strip()
        for mark in cls:
            if text == mark.value or text.lower() in (mark.name.lower(), mark.format_name):
                return mark
        msg = f"Unknown front-matter format: {value!r}"
        raise ValueError(msg)


_FORMAT_NAMES: dict[FormatMark, str] = {
    FormatMark.DASH: "yaml",
    FormatMark.PLUS: "toml",
    FormatMark.BRACE: "json",
}

DEFAULT_MARK = FormatMark.PLUS
