"""Tests for the Metadata mapping and value normalization."""

from collections import OrderedDict
from datetime import date, datetime, time

import pytest

from wikipage.domain.errors import UnrepresentableValue
from wikipage.domain.formats import FormatMark
from wikipage.domain.metadata import Metadata, normalize_value, same_value


class TestNormalizeValue:
    def test_scalars_pass_through(self) -> None:
        for value in ("x", True, 3, 1.5, None, date(2024, 1, 2), time(7, 45)):
            assert normalize_value(value) == value

    def test_subclasses_become_builtins(self) -> None:
        class Tagged(str):
            pass

        result = normalize_value({"a": Tagged("x")})
        assert type(result["a"]) is str

    def test_tuples_become_lists(self) -> None:
        assert normalize_value({"tags": ("a", ("b",))}) == {"tags": ["a", ["b"]]}

    def test_ordered_mapping(self) -> None:
        result = normalize_value(OrderedDict([("b", 1), ("a", 2)]))
        assert type(result) is dict
        assert list(result) == ["b", "a"]

    def test_datetime_kept_distinct_from_date(self) -> None:
        assert type(normalize_value(datetime(2024, 1, 2, 3, 4))) is datetime

    def test_rejects_sets(self) -> None:
        with pytest.raises(UnrepresentableValue) as exc_info:
            normalize_value({"a": [1, {2}]})
        assert exc_info.value.path == "a[1]"

    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(UnrepresentableValue):
            normalize_value({1: "one"})

    def test_coerces_scalar_keys(self) -> None:
        result = normalize_value({2: "two", True: "yes", 1.5: "x"}, coerce_keys=True)
        assert result == {"2": "two", "true": "yes", "1.5": "x"}

    def test_unrepresentable_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            normalize_value(object())


class TestSameValue:
    def test_type_aware(self) -> None:
        assert not same_value(1, 1.0)
        assert not same_value(1, True)
        assert same_value([1, "a"], [1, "a"])

    def test_key_order_matters(self) -> None:
        assert not same_value({"a": 1, "b": 2}, {"b": 2, "a": 1})


class TestMetadata:
    def test_mapping_protocol(self) -> None:
        meta = Metadata({"title": "x"})
        meta["draft"] = False
        assert list(meta) == ["title", "draft"]
        assert len(meta) == 2
        del meta["title"]
        assert meta == {"draft": False}

    def test_rejects_non_string_key(self) -> None:
        meta = Metadata()
        with pytest.raises(UnrepresentableValue):
            meta[1] = "x"  # type: ignore[index]

    def test_setitem_normalizes(self) -> None:
        meta = Metadata()
        meta["tags"] = ("a", "b")
        assert meta["tags"] == ["a", "b"]

    def test_unknown_keys_kept(self) -> None:
        meta = Metadata({"weight": 3, "extra": {"nested": [1]}})
        assert meta.to_dict() == {"weight": 3, "extra": {"nested": [1]}}

    def test_to_dict_is_detached(self) -> None:
        meta = Metadata({"tags": ["a"]})
        copy = meta.to_dict()
        copy["tags"].append("b")
        assert meta["tags"] == ["a"]

    def test_no_source_by_default(self) -> None:
        meta = Metadata({"a": 1})
        assert meta.source_mark is None
        assert not meta.is_pristine()
        assert meta.source_bytes(FormatMark.DASH) is None


class TestSourceTracking:
    def _decoded(self) -> Metadata:
        return Metadata.from_source(
            {"a": 1, "tags": ["x"]}, mark=FormatMark.DASH, front_matter=b"---\na: 1\n---\n"
        )

    def test_pristine_after_decode(self) -> None:
        meta = self._decoded()
        assert meta.source_mark is FormatMark.DASH
        assert meta.is_pristine()
        assert meta.source_bytes(FormatMark.DASH) == b"---\na: 1\n---\n"

    def test_other_mark_has_no_source(self) -> None:
        assert self._decoded().source_bytes(FormatMark.PLUS) is None

    def test_in_place_mutation_detected(self) -> None:
        meta = self._decoded()
        meta["tags"].append("y")
        assert not meta.is_pristine()

    def test_type_change_detected(self) -> None:
        meta = self._decoded()
        meta["a"] = 1.0
        assert meta.source_bytes(FormatMark.DASH) is None

    def test_without_front_matter(self) -> None:
        meta = Metadata.from_source({"a": 1}, mark=FormatMark.DASH, front_matter=None)
        assert meta.source_mark is None
        assert meta == {"a": 1}
