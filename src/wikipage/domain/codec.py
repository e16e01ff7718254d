"""Metadata codec — decode and encode front-matter payloads.

One entry point per direction, dispatching on :class:`FormatMark`:

- ``DASH``  — YAML 1.2 via ruamel.yaml
- ``PLUS``  — TOML via tomlkit (native date/time values)
- ``BRACE`` — JSON via the stdlib (timestamps travel as ISO-8601 strings)

Both directions are pure functions: no I/O, no logging, no state kept
between calls.  Errors propagate to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from io import StringIO
from typing import Any

import tomlkit
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from tomlkit.exceptions import TOMLKitError

from wikipage.domain.errors import DecodeError, UnrepresentableValue
from wikipage.domain.formats import FormatMark
from wikipage.domain.metadata import Metadata, MetaValue, normalize_value

# ---------------------------------------------------------------------------
# YAML parsers
# ---------------------------------------------------------------------------


def _new_yaml(typ: str = "rt") -> YAML:
    """Create a fresh YAML instance.

    A new instance per call keeps ruamel.yaml's stateful emitter from
    leaking a half-written document into the next operation.
    """
    y = YAML(typ=typ, pure=True)
    y.default_flow_style = False
    y.width = 4096
    return y


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _load_payload(mark: FormatMark, text: str) -> Any:
    match mark:
        case FormatMark.DASH:
            return _new_yaml("safe").load(text)
        case FormatMark.PLUS:
            return tomlkit.loads(text).unwrap()
        case FormatMark.BRACE:
            return json.loads(text)


def decode_metadata(
    mark: FormatMark,
    payload: bytes,
    *,
    front_matter: bytes | None = None,
) -> Metadata:
    """Decode a front-matter payload into a :class:`Metadata` mapping.

    Args:
        mark: Format of the payload.
        payload: Raw payload bytes (without ``---``/``+++`` delimiter lines).
        front_matter: The complete raw block the payload came from.  When
            given, encoding the unchanged mapping in *mark* returns these
            bytes verbatim.

    Raises:
        DecodeError: The payload is malformed, is not a mapping at top
            level, or holds a value outside the supported value types.
    """
    try:
        text = payload.decode("utf-8")
        data = _load_payload(mark, text)
    except (UnicodeDecodeError, YAMLError, TOMLKitError, json.JSONDecodeError) as exc:
        raise DecodeError(mark, exc) from exc

    if data is None and mark is FormatMark.DASH:
        data = {}
    if not isinstance(data, Mapping):
        exc = TypeError(f"top level must be a mapping, got {type(data).__name__}")
        raise DecodeError(mark, exc) from exc

    try:
        return Metadata.from_source(data, mark=mark, front_matter=front_matter)
    except UnrepresentableValue as exc:
        raise DecodeError(mark, exc) from exc


def is_complete_payload(mark: FormatMark, payload: bytes) -> bool:
    """Return True if *payload* decodes cleanly in *mark*.

    Used by the splitter to pick the true closing delimiter when a
    delimiter-like line appears inside a multi-line string.
    """
    try:
        decode_metadata(mark, payload)
    except DecodeError:
        return False
    return True


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def _prepare(value: MetaValue, mark: FormatMark) -> Any:
    """Rewrite values the target format has no native type for.

    YAML has no time-of-day type and JSON has no timestamps at all; both
    get ISO-8601 strings.  TOML has no null, so ``None`` entries are
    dropped.
    """
    if isinstance(value, dict):
        return {
            k: _prepare(v, mark)
            for k, v in value.items()
            if not (v is None and mark is FormatMark.PLUS)
        }
    if isinstance(value, list):
        return [_prepare(v, mark) for v in value if not (v is None and mark is FormatMark.PLUS)]
    if isinstance(value, time) and mark is not FormatMark.PLUS:
        return value.isoformat()
    if isinstance(value, (datetime, date)) and mark is FormatMark.BRACE:
        return value.isoformat()
    return value


def _dump_yaml(data: dict[str, Any]) -> str:
    if not data:
        return ""
    buf = StringIO()
    _new_yaml().dump(data, buf)
    return buf.getvalue()


def _is_table(value: Any) -> bool:
    return isinstance(value, dict)


def _is_table_array(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(v, dict) for v in value)


def _fill_toml(container: Any, data: dict[str, Any]) -> None:
    # Bare keys must precede tables, or they would land inside the last table.
    plain = [(k, v) for k, v in data.items() if not (_is_table(v) or _is_table_array(v))]
    tables = [(k, v) for k, v in data.items() if _is_table(v)]
    arrays = [(k, v) for k, v in data.items() if _is_table_array(v)]

    for key, value in plain:
        container.append(key, value)
    for key, value in tables:
        table = tomlkit.table()
        _fill_toml(table, value)
        container.append(key, table)
    for key, value in arrays:
        aot = tomlkit.aot()
        for entry in value:
            table = tomlkit.table()
            _fill_toml(table, entry)
            aot.append(table)
        container.append(key, aot)


def _dump_toml(data: dict[str, Any]) -> str:
    doc = tomlkit.document()
    _fill_toml(doc, data)
    return tomlkit.dumps(doc)


def _dump_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def encode_metadata(mark: FormatMark, metadata: Mapping[str, Any]) -> bytes:
    """Encode *metadata* as a complete front-matter block in *mark*.

    The block includes its delimiter lines (none for JSON) and always ends
    with exactly one newline, so content can be appended directly.  A
    :class:`Metadata` decoded from *mark* and not modified since encodes
    to its original bytes.

    Raises:
        UnrepresentableValue: *metadata* holds a value outside the
            supported value types.
    """
    if isinstance(metadata, Metadata):
        original = metadata.source_bytes(mark)
        if original is not None:
            return original
        # Nested lists and dicts are live and may have been edited in place.
        metadata = metadata.to_dict()
    data = normalize_value(metadata)
    assert isinstance(data, dict)

    prepared = _prepare(data, mark)
    match mark:
        case FormatMark.DASH:
            body = _dump_yaml(prepared)
        case FormatMark.PLUS:
            body = _dump_toml(prepared)
        case FormatMark.BRACE:
            return (_dump_json(prepared) + "\n").encode("utf-8")

    if body and not body.endswith("\n"):
        body += "\n"
    delimiter = mark.delimiter
    assert delimiter is not None
    return delimiter + b"\n" + body.encode("utf-8") + delimiter + b"\n"
