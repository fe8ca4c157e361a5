# File: src/mstair/structwalk/walk/test_field_list.py
"""
Tests for leaf path enumeration over records and mappings.
"""

from __future__ import annotations

from collections import namedtuple
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from mstair.structwalk.walk.field_access import field_value
from mstair.structwalk.walk.field_list import field_list, field_list_no_sort
from mstair.structwalk.walk.node_kind import Ref


# ---------- Fixtures ----------


@dataclass
class BarRecord:
    baz: int = 0
    array: list[int] = field(default_factory=list)


@dataclass
class SomeStruct:
    foo: str = ""
    bar: BarRecord | None = None


@dataclass
class WithExtras:
    name: str = ""
    extras: dict[str, int] | None = None
    choice: int | str | None = None


@dataclass
class LinkedNode:
    value: int = 0
    next: LinkedNode | None = None


Point = namedtuple("Point", ["x", "y"])


class FaultyMapping(Mapping[str, Any]):
    """A mapping whose keys can be listed but never read."""

    def __getitem__(self, key: str) -> Any:
        raise RuntimeError("boom")

    def __iter__(self) -> Iterator[str]:
        return iter(["b"])

    def __len__(self) -> int:
        return 1


class Plain:
    def __init__(self) -> None:
        self.a = 1
        self._hidden = 2
        self.child = {"k": 3}


# ---------- Records ----------


@pytest.mark.unit
class TestRecords:
    def test_none_field_expands_declared_type_sorted(self) -> None:
        assert field_list(SomeStruct()) == ["bar.array", "bar.baz", "foo"]

    def test_none_field_expands_declared_type_unsorted(self) -> None:
        assert field_list_no_sort(SomeStruct()) == ["foo", "bar.baz", "bar.array"]

    def test_populated_record(self) -> None:
        root = SomeStruct(foo="foo", bar=BarRecord(baz=5, array=[1]))
        assert field_list(root) == ["bar.array", "bar.baz", "foo"]

    def test_none_mapping_field_lists_nothing(self) -> None:
        assert field_list(WithExtras()) == ["choice", "name"]

    def test_populated_mapping_field(self) -> None:
        assert field_list(WithExtras(extras={"b": 1, "a": 2})) == [
            "choice",
            "extras.a",
            "extras.b",
            "name",
        ]

    def test_self_referential_type(self) -> None:
        assert field_list_no_sort(LinkedNode()) == ["value", "next.value", "next.next"]

    def test_namedtuple(self) -> None:
        assert field_list({"point": Point(1, 2)}) == ["point.x", "point.y"]

    def test_plain_object(self) -> None:
        assert field_list(Plain()) == ["a", "child.k"]

    def test_every_listed_path_of_a_populated_graph_resolves(self) -> None:
        root = {"first": SomeStruct(foo="foo", bar=BarRecord(baz=5)), "second": 5}
        for path in field_list(root):
            assert field_value(path, root)[1] is True, path


# ---------- Mappings ----------


@pytest.mark.unit
class TestMappings:
    @pytest.fixture
    def data(self) -> dict[str, Any]:
        return {"Foo": 1, "Null": None, "Bar": {"Baz": 5}}

    def test_sorted(self, data: dict[str, Any]) -> None:
        assert field_list(data) == ["Bar.Baz", "Foo", "Null"]

    def test_insertion_order(self, data: dict[str, Any]) -> None:
        assert field_list_no_sort(data) == ["Foo", "Null", "Bar.Baz"]

    def test_none_and_indirect_scalar_are_leaves(self) -> None:
        assert field_list({"Kek": None, "Lol": Ref("aaa")}) == ["Kek", "Lol"]

    def test_indirections_are_walked(self) -> None:
        assert field_list({"a": Ref({"b": Ref(SomeStruct(bar=BarRecord()))})}) == [
            "a.b.bar.array",
            "a.b.bar.baz",
            "a.b.foo",
        ]

    def test_non_string_keys(self) -> None:
        assert field_list({1: {2: "x"}}) == ["1.2"]

    def test_empty_mapping(self) -> None:
        assert field_list({}) == []


# ---------- Roots and cycles ----------


@pytest.mark.unit
class TestRootsAndCycles:
    @pytest.mark.parametrize("root", [None, 5, "text", [1, 2], Ref(5)])
    def test_leaf_roots_have_no_paths(self, root: Any) -> None:
        assert field_list(root) == []

    def test_root_behind_ref(self) -> None:
        assert field_list(Ref(SomeStruct())) == ["bar.array", "bar.baz", "foo"]

    def test_mapping_cycle_becomes_leaf(self) -> None:
        data: dict[str, Any] = {"a": 1}
        data["self"] = data
        assert field_list_no_sort(data) == ["a", "self"]

    def test_record_cycle_becomes_leaf(self) -> None:
        first = LinkedNode(value=1)
        second = LinkedNode(value=2, next=first)
        first.next = second
        assert field_list_no_sort(first) == ["value", "next.value", "next.next"]

    def test_unreadable_subtree_is_skipped_siblings_kept(self) -> None:
        data = {"x": 1, "m": FaultyMapping(), "z": {"k": 3}}
        assert field_list_no_sort(data) == ["x", "z.k"]

    def test_unreadable_root_lists_nothing(self) -> None:
        assert field_list(FaultyMapping()) == []

    def test_shared_sibling_is_not_a_cycle(self) -> None:
        shared = {"x": 1}
        assert field_list({"a": shared, "b": shared}) == ["a.x", "b.x"]


# End of file: src/mstair/structwalk/walk/test_field_list.py
