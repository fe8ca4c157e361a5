# File: src/mstair/structwalk/test_structwalk.py
"""
End-to-end tests through the public package surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

import mstair.structwalk as sw


@dataclass
class Bar:
    baz: int = 0
    array: list[int] = field(default_factory=list)


@dataclass
class Outer:
    foo: str = ""
    bar: Bar | None = None


@dataclass
class Third:
    baz: int = 0


class Accessors:
    def foo(self) -> str:
        return "foo"

    def foo_bytes(self) -> bytes:
        return b"foo"

    def bar(self) -> Result:
        return Result()


@dataclass
class Result:
    def baz(self) -> int:
        return 5


@pytest.fixture
def graph() -> dict[str, Any]:
    return {
        "First": Outer(foo="foo", bar=Bar(baz=5)),
        "Second": 5,
        "Third": sw.Ref(Third(baz=5)),
    }


@pytest.mark.unit
def test_public_names() -> None:
    for name in sw.__all__:
        assert hasattr(sw, name), name


@pytest.mark.unit
def test_read_write_round_trip() -> None:
    root = Outer(foo="foo", bar=Bar(baz=1))
    assert sw.set_field_value("Foo", "bar", root)
    assert sw.set_field_value("Bar.Baz", 10, root)
    assert sw.set_field_value("Bar.Array", [3, 4], root)
    assert sw.field_value("foo", root) == ("bar", True)
    assert sw.field_value("bar.baz", root) == (10, True)
    assert sw.field_value("bar.array", root) == ([3, 4], True)


@pytest.mark.unit
def test_mixed_graph(graph: dict[str, Any]) -> None:
    assert sw.field_value("First.Foo", graph) == ("foo", True)
    assert sw.field_value("First.Foo.Bar.Baz", graph) == (None, False)
    assert sw.field_value("First.Bar.Baz", graph) == (5, True)
    assert sw.field_value("Second", graph) == (5, True)
    assert sw.field_value("Third.Baz", graph) == (5, True)
    assert sw.require_field_value("third.baz", graph) == 5
    with pytest.raises(sw.PathNotFoundError):
        sw.require_field_value("fourth", graph)


@pytest.mark.unit
def test_field_lists() -> None:
    assert sw.field_list(Outer()) == ["bar.array", "bar.baz", "foo"]
    assert sw.field_list_no_sort(Outer()) == ["foo", "bar.baz", "bar.array"]
    assert sw.field_list({"Foo": 1, "Null": None, "Bar": {"Baz": 5}}) == ["Bar.Baz", "Foo", "Null"]
    assert sw.field_list({"Kek": None, "Lol": sw.Ref("aaa")}) == ["Kek", "Lol"]


@pytest.mark.unit
def test_getters() -> None:
    root = Accessors()
    assert sw.getter_value("Foo", root) == (b"foo", True)
    assert sw.getter_value("Foo.Bar.Baz", root) == (None, False)
    assert sw.getter_value("Bar.Baz", root) == (5, True)
    assert sw.getter_list(root) == ["bar.baz", "foo", "foo_bytes"]


@pytest.mark.unit
def test_resolution_and_kinds(graph: dict[str, Any]) -> None:
    resolution = sw.resolve("third.baz", graph)
    assert resolution
    assert resolution.slot is not None
    assert resolution.slot.kind == sw.Slot.ATTRIBUTE
    assert sw.node_kind(graph["Third"]) is sw.NodeKind.INDIRECTION
    assert sw.node_kind(sw.unwrap(graph["Third"])) is sw.NodeKind.STRUCT
    assert sw.resolve("nope", graph).value is sw.MISSING


# End of file: src/mstair/structwalk/test_structwalk.py
