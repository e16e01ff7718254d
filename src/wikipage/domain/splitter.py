"""Format detection and splitting of raw documents.

A document is split into three byte ranges: the front-matter block
(delimiters included), the metadata payload inside it, and the content
after it.  Content bytes are never inspected beyond locating where they
start.

Delimiters must start at byte 0.  ``---`` and ``+++`` must each occupy a
whole line (LF or CRLF terminated).  A JSON object is located with a real
JSON parser so braces inside strings never end the block early.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from wikipage.domain.errors import DecodeError, NoFrontMatter, UnterminatedFrontMatter
from wikipage.domain.formats import DEFAULT_MARK, FormatMark

PayloadAcceptor = Callable[[FormatMark, bytes], bool]

_JSON_DECODER = json.JSONDecoder()


@dataclass(frozen=True)
class SplitDocument:
    """Byte ranges of a document with a recognized front-matter block."""

    mark: FormatMark
    front_matter: bytes
    metadata: bytes
    content: bytes


def split_document(
    raw: bytes,
    *,
    default_mark: FormatMark = DEFAULT_MARK,
    accept: PayloadAcceptor | None = None,
) -> SplitDocument:
    """Detect the front-matter format of *raw* and split it.

    Every line that exactly matches the closing delimiter is a candidate
    end of the block.  When *accept* is given, the first candidate whose
    payload it accepts is used, so a delimiter-like line inside a
    multi-line string does not cut the block short.  If no candidate is
    accepted the first one is used and the decoder reports the problem.

    Raises:
        NoFrontMatter: *raw* does not start with a front-matter block.
            The exception carries *default_mark* and the whole input as
            content.
        UnterminatedFrontMatter: The block is opened but never closed.
        DecodeError: A JSON block is malformed before end of input.
    """
    if not raw:
        raise NoFrontMatter(default_mark, raw)
    mark = FormatMark.from_lead_byte(raw[0])
    if mark is None:
        raise NoFrontMatter(default_mark, raw)
    if mark is FormatMark.BRACE:
        return _split_json(raw)
    return _split_delimited(raw, mark, default_mark=default_mark, accept=accept)


# ---------------------------------------------------------------------------
# Delimited blocks (--- / +++)
# ---------------------------------------------------------------------------


def _iter_lines(raw: bytes, start: int = 0) -> Iterator[tuple[int, int, int]]:
    """Yield ``(line_start, text_end, next_line_start)`` for each line.

    ``text_end`` excludes the ``\\n`` or ``\\r\\n`` terminator.
    """
    pos = start
    size = len(raw)
    while pos < size:
        nl = raw.find(b"\n", pos)
        if nl == -1:
            yield pos, size, size
            return
        end = nl - 1 if nl > pos and raw[nl - 1] == 0x0D else nl
        yield pos, end, nl + 1
        pos = nl + 1


def _split_delimited(
    raw: bytes,
    mark: FormatMark,
    *,
    default_mark: FormatMark,
    accept: PayloadAcceptor | None,
) -> SplitDocument:
    delimiter = mark.delimiter
    assert delimiter is not None

    lines = _iter_lines(raw)
    first_start, first_end, payload_start = next(lines)
    if raw[first_start:first_end] != delimiter:
        raise NoFrontMatter(default_mark, raw)

    first_candidate: tuple[int, int] | None = None
    chosen: tuple[int, int] | None = None
    for line_start, text_end, next_start in lines:
        if raw[line_start:text_end] != delimiter:
            continue
        if first_candidate is None:
            first_candidate = (line_start, next_start)
        if accept is None or accept(mark, raw[payload_start:line_start]):
            chosen = (line_start, next_start)
            break

    if first_candidate is None:
        raise UnterminatedFrontMatter(mark)
    close_start, content_start = chosen or first_candidate

    return SplitDocument(
        mark=mark,
        front_matter=raw[:content_start],
        metadata=raw[payload_start:close_start],
        content=raw[content_start:],
    )


# ---------------------------------------------------------------------------
# JSON blocks
# ---------------------------------------------------------------------------


def _split_json(raw: bytes) -> SplitDocument:
    text = raw.decode("utf-8", errors="surrogateescape")
    try:
        _obj, end = _JSON_DECODER.raw_decode(text)
    except json.JSONDecodeError as exc:
        if exc.pos >= len(text.rstrip()) or exc.msg.startswith("Unterminated string"):
            raise UnterminatedFrontMatter(FormatMark.BRACE) from exc
        raise DecodeError(FormatMark.BRACE, exc) from exc

    payload_end = len(text[:end].encode("utf-8", errors="surrogateescape"))
    content_start = payload_end
    if raw.startswith(b"\r\n", payload_end):
        content_start += 2
    elif raw.startswith(b"\n", payload_end):
        content_start += 1

    return SplitDocument(
        mark=FormatMark.BRACE,
        front_matter=raw[:content_start],
        metadata=raw[:payload_end],
        content=raw[content_start:],
    )
