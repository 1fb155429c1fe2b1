from __future__ import annotations

import pytest

from pyfacet._path import MISSING, parse_path, path_get, path_set
from pyfacet.exceptions import InvalidArgumentError, MergeConflictError


def test_parse_path_segments() -> None:
    assert parse_path("a.b") == ["a", "b"]
    assert parse_path("foo.bar[1]") == ["foo", "bar", 1]
    assert parse_path("[0].name") == [0, "name"]
    assert parse_path("a..b") == ["a", "b"]
    assert parse_path("") == []


def test_path_get_nested_and_indexed() -> None:
    data = {"a": {"b": 1, "c": [10, {"d": 20}]}}
    assert path_get(data, "a.b") == 1
    assert path_get(data, "a.c[0]") == 10
    assert path_get(data, "a.c[1].d") == 20
    assert path_get(data, "a.c.1.d") == 20


def test_path_get_missing_never_raises() -> None:
    data = {"a": {"b": 1, "c": [10]}}
    assert path_get(data, "x") is MISSING
    assert path_get(data, "a.b.c") is MISSING
    assert path_get(data, "a.c[5]") is MISSING
    assert path_get(data, "a.c.name") is MISSING
    assert path_get(data, "") is MISSING


def test_path_get_falsy_values_are_found() -> None:
    data = {"off": False, "zero": 0, "none": None}
    assert path_get(data, "off") is False
    assert path_get(data, "zero") == 0
    assert path_get(data, "none") is None


def test_path_set_creates_intermediate_containers() -> None:
    data: dict[str, object] = {}
    path_set(data, "a.b", "x")
    path_set(data, "list[2].name", "third")
    assert data == {"a": {"b": "x"}, "list": [None, None, {"name": "third"}]}


def test_path_set_replaces_scalar_mid_path() -> None:
    data: dict[str, object] = {"a": "scalar"}
    path_set(data, "a.b", 1)
    assert data == {"a": {"b": 1}}


def test_path_set_name_segment_on_list_conflicts() -> None:
    data: dict[str, object] = {"a": [1, 2]}
    with pytest.raises(MergeConflictError) as exc_info:
        path_set(data, "a.b", 1)
    assert exc_info.value.path == "a.b"
    assert data == {"a": [1, 2]}


def test_path_set_empty_path_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        path_set({}, "", 1)
