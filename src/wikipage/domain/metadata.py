"""Metadata mapping and its closed value algebra.

Every value stored in a :class:`Metadata` is one of::

    str | bool | int | float | datetime | date | time | None
    | list[<value>] | dict[str, <value>]

Values are normalized on the way in: parser-specific subclasses (ruamel
scalars, tomlkit items) become plain builtins, tuples become lists, and
anything outside the algebra raises :class:`UnrepresentableValue`.

A mapping produced by the decoder also remembers the exact front-matter
bytes it came from.  As long as its contents are unchanged, encoding it
in the same mark reproduces those bytes verbatim.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any, TypeAlias

from wikipage.domain.errors import UnrepresentableValue

if TYPE_CHECKING:
    from wikipage.domain.formats import FormatMark

MetaScalar: TypeAlias = str | bool | int | float | datetime | date | time | None
MetaValue: TypeAlias = MetaScalar | list["MetaValue"] | dict[str, "MetaValue"]


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def normalize_value(value: Any, path: str = "", *, coerce_keys: bool = False) -> MetaValue:
    """Return *value* rebuilt from plain builtins of the value algebra.

    Args:
        value: The value to normalize.
        path: Location of *value*, used in error messages.
        coerce_keys: Stringify scalar mapping keys instead of rejecting
            them (YAML allows ``1: one``; the mapping does not).

    Raises:
        UnrepresentableValue: If *value* (or anything nested in it) is not
            part of the algebra.
    """
    # bool before int: bool is an int subclass.
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, datetime):
        return datetime(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            value.tzinfo,
            fold=value.fold,
        )
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if isinstance(value, time):
        return time(
            value.hour, value.minute, value.second, value.microsecond, value.tzinfo, fold=value.fold
        )
    if isinstance(value, Mapping):
        result: dict[str, MetaValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                if not coerce_keys or isinstance(key, (Mapping, list, tuple)) or key is None:
                    raise UnrepresentableValue(key, _join(path, repr(key)))
                key = str(key).lower() if isinstance(key, bool) else str(key)
            result[str(key)] = normalize_value(item, _join(path, key), coerce_keys=coerce_keys)
        return result
    if isinstance(value, (list, tuple)):
        return [
            normalize_value(item, f"{path}[{i}]", coerce_keys=coerce_keys)
            for i, item in enumerate(value)
        ]
    raise UnrepresentableValue(value, path)


def same_value(a: Any, b: Any) -> bool:
    """Structural equality that also distinguishes ``1``, ``1.0`` and ``True``."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return list(a) == list(b) and all(same_value(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b, strict=True))
    return bool(a == b)


# ---------------------------------------------------------------------------
# Metadata mapping
# ---------------------------------------------------------------------------


class Metadata(MutableMapping[str, Any]):
    """Ordered ``str -> value`` mapping decoded from (or destined for) front matter.

    Keys it does not understand are kept and round-tripped like any other.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, MetaValue] = {}
        self._source: tuple[FormatMark, bytes] | None = None
        self._baseline: dict[str, MetaValue] | None = None
        if data:
            for key, value in data.items():
                self[key] = value

    @classmethod
    def from_source(
        cls,
        data: Mapping[str, Any],
        *,
        mark: FormatMark,
        front_matter: bytes | None,
    ) -> Metadata:
        """Build a mapping from decoded data.

        When *front_matter* is given, the mapping remembers it as the
        verbatim encoding of its current contents in *mark*.
        """
        normalized = normalize_value(data, coerce_keys=True)
        assert isinstance(normalized, dict)
        instance = cls()
        instance._data = normalized
        if front_matter is not None:
            instance._source = (mark, front_matter)
            instance._baseline = copy.deepcopy(normalized)
        return instance

    # --- MutableMapping protocol ---

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise UnrepresentableValue(key, repr(key))
        self._data[key] = normalize_value(value, key)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Metadata({self._data!r})"

    # --- Source tracking ---

    @property
    def source_mark(self) -> FormatMark | None:
        """The mark this mapping was decoded from, if any."""
        return self._source[0] if self._source else None

    def is_pristine(self) -> bool:
        """True if the mapping still equals what was decoded from its source."""
        return self._baseline is not None and same_value(self._data, self._baseline)

    def source_bytes(self, mark: FormatMark) -> bytes | None:
        """Original front-matter bytes, if still valid for *mark*."""
        if self._source is None or self._source[0] is not mark or not self.is_pristine():
            return None
        return self._source[1]

    def to_dict(self) -> dict[str, MetaValue]:
        """Return a deep, detached copy of the contents as a plain dict."""
        return copy.deepcopy(self._data)
