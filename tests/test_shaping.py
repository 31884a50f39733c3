"""Tests for graph/shaping.py."""

import json

from graphcall.graph.shaping import limit_depth, shape_result, to_json_text


class TestLimitDepth:
    """Tests for limit_depth()."""

    def test_shallow_value_unchanged(self) -> None:
        value = [{"id": "1", "tags": ["a", "b"]}]

        assert limit_depth(value, 10) == value

    def test_deep_containers_stringified(self) -> None:
        value = {"a": {"b": {"c": 1}}}

        assert limit_depth(value, 2) == {"a": {"b": "{'c': 1}"}}

    def test_scalars_kept_at_any_depth(self) -> None:
        assert limit_depth({"a": {"b": 1}}, 2) == {"a": {"b": 1}}

    def test_tuples_become_lists(self) -> None:
        assert limit_depth((1, 2), 1) == [1, 2]


class TestShapeResult:
    """Tests for shape_result()."""

    def test_structured_passthrough(self) -> None:
        value = [{"id": "1"}]

        assert shape_result(value) is value

    def test_raw_is_valid_json(self) -> None:
        value = [{"id": "1", "displayName": "Zoë"}]

        text = shape_result(value, raw=True)

        assert json.loads(text) == value
        assert "Zoë" in text

    def test_raw_none(self) -> None:
        assert to_json_text(None) == "null"
