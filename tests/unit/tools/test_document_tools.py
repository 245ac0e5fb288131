"""
Test cases for the tools that work on parsed documents.
"""

import datetime
import json

import pytest

from smartjson.tools import (
    CIRCULAR_MARKER,
    changelog,
    compare,
    diff_html,
    inspect_document,
    json_type_name,
    merge,
    minify,
    patch,
    pretty,
    search,
    stringify_safe,
    validate_schema,
)
from smartjson.tools.search import SearchMatch


class TestFormatting:
    """Test minify, pretty and stringify_safe."""

    def test_minify(self):
        assert minify('{ "a" : [1, 2],\n "b": "é" }') == '{"a":[1,2],"b":"é"}'

    def test_pretty(self):
        assert pretty('{"a":1}') == '{\n  "a": 1\n}'
        assert pretty("[1]", spaces=4) == "[\n    1\n]"

    def test_invalid_input_raises(self):
        with pytest.raises(json.JSONDecodeError):
            minify("{bad")
        with pytest.raises(json.JSONDecodeError):
            pretty("{bad")

    def test_stringify_cycle(self):
        node = {"name": "a"}
        node["self"] = node
        assert stringify_safe(node, 0) == '{"name":"a","self":"[Circular ~]"}'

    def test_stringify_list_cycle(self):
        items = [1]
        items.append(items)
        assert json.loads(stringify_safe(items)) == [1, CIRCULAR_MARKER]

    def test_stringify_shared_reference(self):
        shared = [1]
        assert stringify_safe({"x": shared, "y": shared}, 0) == '{"x":[1],"y":"[Circular ~]"}'

    def test_stringify_indent(self):
        assert stringify_safe({"a": 1}) == '{\n  "a": 1\n}'

    def test_stringify_unknown_types(self):
        value = {"d": datetime.date(2024, 1, 2)}
        assert stringify_safe(value, 0) == '{"d":"2024-01-02"}'

    def test_stringify_does_not_modify_input(self):
        node = {"a": [1]}
        node["self"] = node
        stringify_safe(node)
        assert node["self"] is node


class TestInspection:
    """Test inspect_document and json_type_name."""

    @pytest.mark.parametrize(
        "value, name",
        [
            (None, "null"),
            (True, "boolean"),
            (3, "number"),
            (2.5, "number"),
            ("x", "string"),
            ([1], "array"),
            ({}, "object"),
        ],
    )
    def test_type_names(self, value, name):
        assert json_type_name(value) == name

    def test_nested_document(self):
        stats = inspect_document({"a": 1, "b": {"c": [1, "x", None, True]}})
        assert stats.keys == 3
        assert stats.depth == 3
        assert stats.types == {
            "object": 2,
            "number": 2,
            "array": 1,
            "string": 1,
            "null": 1,
            "boolean": 1,
        }
        assert stats.preview == '{"a":1,"b":{"c":[1,"x",null,true]}}'
        assert stats.size == len(stringify_safe({"a": 1, "b": {"c": [1, "x", None, True]}}))

    @pytest.mark.parametrize("value, depth", [({"a": 1}, 1), ({}, 0), (5, 0), ([[[]]], 2)])
    def test_depth(self, value, depth):
        assert inspect_document(value).depth == depth

    def test_scalar(self):
        stats = inspect_document("x")
        assert stats.keys == 0
        assert stats.types == {"string": 1}
        assert stats.preview == '"x"'

    def test_cycle(self):
        node = {"k": 1}
        node["self"] = node
        stats = inspect_document(node)
        assert stats.keys == 2
        assert stats.depth == 1
        assert stats.types == {"object": 1, "number": 1}
        assert CIRCULAR_MARKER in stats.preview


class TestCompareAndPatch:
    """Test compare, changelog, diff_html and patch."""

    OLD = {"a": 1, "b": 2, "c": 3}
    NEW = {"a": 1, "b": 5, "d": 4}

    def test_compare(self):
        diff = compare(self.OLD, self.NEW)
        assert diff.added == ["d"]
        assert diff.removed == ["c"]
        assert diff.changed == ["b"]
        assert diff.unchanged == ["a"]
        assert diff.has_changes

    def test_compare_none_is_empty(self):
        diff = compare(None, {"a": 1})
        assert diff.added == ["a"]
        assert not compare(None, None).has_changes

    def test_compare_ignores_nested_key_order(self):
        diff = compare({"a": {"x": 1, "y": 2}}, {"a": {"y": 2, "x": 1}})
        assert diff.unchanged == ["a"]

    def test_changelog(self):
        assert changelog(self.OLD, self.NEW) == (
            '+ "d" was added.\n'
            '- "c" was removed.\n'
            '~ "b" changed from 2 to 5.\n'
            "= Unchanged: a."
        )

    def test_changelog_no_changes(self):
        assert changelog({}, {}) == "No changes."
        assert changelog({"a": 1}, {"a": 1}) == "= Unchanged: a."

    def test_diff_html_escapes(self):
        result = diff_html({"a": "<b>"}, {"a": "x"})
        assert result.startswith('<div class="smartjson-diff">')
        assert 'class="json-changed"' in result
        assert "&lt;b&gt;" in result
        assert "<b>a</b>" in result

    def test_diff_html_no_differences(self):
        assert "json-same" in diff_html({}, {})

    def test_patch(self):
        old = {"a": 1, "b": {"x": 1, "y": 2}, "c": 3}
        result = patch(old, {"a": 2, "b": {"x": 1}})
        assert result == {"a": 2, "b": {"x": 1}}
        assert old == {"a": 1, "b": {"x": 1, "y": 2}, "c": 3}

    def test_patch_nested_creates_missing(self):
        assert patch({"a": 1}, {"a": 1, "b": {"c": [1]}}) == {"a": 1, "b": {"c": [1]}}

    def test_patch_non_objects(self):
        assert patch("x", {"a": 1}) == {"a": 1}
        assert patch({"a": 1}, "x") == {"a": 1}


class TestMerge:
    """Test deep merge."""

    def test_nested_and_arrays(self):
        result = merge({"a": {"x": 1}, "t": [1]}, {"a": {"y": 2}, "t": [1, 2]})
        assert result == {"a": {"x": 1, "y": 2}, "t": [1, 2]}

    def test_later_scalar_wins(self):
        assert merge({"a": 1}, {"a": {"b": 2}}, {"a": 3}) == {"a": 3}

    def test_non_objects_skipped(self):
        assert merge({"a": 1}, None, [1], {"b": 2}) == {"a": 1, "b": 2}
        assert merge() == {}

    def test_inputs_not_modified(self):
        first = {"a": {"x": 1}, "t": [1]}
        second = {"a": {"y": 2}, "t": [2]}
        result = merge(first, second)
        result["a"]["z"] = 3
        result["t"].append(9)
        assert first == {"a": {"x": 1}, "t": [1]}
        assert second == {"a": {"y": 2}, "t": [2]}

    def test_array_of_objects_deduplicated(self):
        assert merge({"t": [{"id": 1}]}, {"t": [{"id": 1}, {"id": 2}]}) == {
            "t": [{"id": 1}, {"id": 2}]
        }


class TestSearch:
    """Test key and value search."""

    DOC = {"users": [{"name": "Alice", "age": 30}, {"name": "Bob", "admin": True}]}

    def paths(self, matches):
        return [m.path for m in matches]

    def test_value_match(self):
        assert search(self.DOC, "alice") == [SearchMatch("users[0].name", "Alice")]

    def test_key_match(self):
        assert self.paths(search(self.DOC, "name")) == ["users[0].name", "users[1].name"]

    def test_boolean_and_number_values(self):
        assert self.paths(search(self.DOC, "true")) == ["users[1].admin"]
        assert self.paths(search(self.DOC, 30)) == ["users[0].age"]

    def test_case_sensitive(self):
        assert search(self.DOC, "alice", case_sensitive=True) == []
        assert len(search(self.DOC, "Alice", case_sensitive=True)) == 1

    def test_disable_value_matching(self):
        assert search(self.DOC, "Alice", match_value=False) == []

    def test_disable_key_matching(self):
        assert search(self.DOC, "name", match_key=False) == []

    def test_key_and_value_both_reported(self):
        assert self.paths(search({"ab": "ab"}, "ab")) == ["ab", "ab"]

    def test_scalar_document(self):
        assert search("alice", "alice") == []


class TestValidateSchema:
    """Test shallow schema validation."""

    def test_valid(self):
        result = validate_schema({"a": "string", "n": "number"}, {"a": "x", "n": 1.5})
        assert result.valid
        assert result.errors == []

    def test_errors(self):
        result = validate_schema(
            {"name": "string", "age": "number"}, {"name": "x", "age": "5", "extra": 1}
        )
        assert not result.valid
        assert result.errors == [
            "'age' should be number, got string",
            "'extra' is not defined in schema",
        ]

    def test_missing_key(self):
        assert validate_schema({"a": "string"}, {}).errors == ["'a' is missing"]

    def test_boolean_is_not_number(self):
        result = validate_schema({"n": "number"}, {"n": True})
        assert result.errors == ["'n' should be number, got boolean"]

    def test_non_object_data(self):
        result = validate_schema({}, [1])
        assert result.errors == ["data should be object, got array"]
