# File: src/mstair/structwalk/walk/node_kind.py
"""
Node classification for object-graph traversal.

Every value visited by the walkers falls into exactly one kind:

- INDIRECTION: a `Ref` box or a `weakref.ref`, dereferenced before inspection
- NONE: ``None``, an empty indirection that cannot be dereferenced further
- MAPPING: any `collections.abc.Mapping`; children are its entries
- STRUCT: a record (dataclass, named tuple, attribute object); children are its fields
- SCALAR: anything else; a leaf of traversal

Records are read through their declared storage only: dataclass fields,
named tuple fields, instance `__dict__` entries and populated `__slots__`.
Properties and methods are the business of the getter walkers.
"""

from __future__ import annotations

import dataclasses
import weakref
from collections.abc import Callable, Iterable, Mapping
from functools import total_ordering
from types import BuiltinFunctionType, FunctionType, MethodType, ModuleType
from typing import Any, Generic, Self, TypeVar

from mstair.structwalk.base.types import (
    BUFFER_LIKE_TYPES,
    MISSING,
    OPAQUE_VALUE_TYPES,
    PRIMITIVE_TYPES,
    SEQUENCE_TYPES,
    Missing,
)


__all__ = [
    "NodeKind",
    "NodeKindT",
    "Ref",
    "fold",
    "is_named_tuple",
    "match_name",
    "node_kind",
    "struct_fields",
    "unwrap",
]

_NEVER_STRUCT_TYPES: tuple[type, ...] = (
    *PRIMITIVE_TYPES,
    *BUFFER_LIKE_TYPES,
    *OPAQUE_VALUE_TYPES,
    type,
    ModuleType,
    FunctionType,
    BuiltinFunctionType,
    MethodType,
)


@total_ordering
class NodeKindT:
    """One member of the closed set of node kinds."""

    _order: int
    """Unique identifier used for sorting and comparison."""

    name: str
    """Name of the kind, used for debugging and display."""

    def __init__(self, name: str, order: int) -> None:
        self.name = name
        self._order = order

    def __lt__(self, other: Self) -> bool:
        return self._order < other._order

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NodeKindT) and self._order == other._order

    def __hash__(self) -> int:
        return hash(self._order)

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


class NodeKind:
    """Static namespace for all defined NodeKindT categories."""

    INDIRECTION = NodeKindT("INDIRECTION", 1)
    NONE = NodeKindT("NONE", 2)
    MAPPING = NodeKindT("MAPPING", 3)
    STRUCT = NodeKindT("STRUCT", 4)
    SCALAR = NodeKindT("SCALAR", 5)

    @classmethod
    def all(cls) -> list[NodeKindT]:
        """Return all NodeKindT constants defined on the class, in declaration order."""
        return [
            v
            for k, v in vars(cls).items()
            if isinstance(v, NodeKindT) and not k.startswith("_") and k.isupper()
        ]


T = TypeVar("T")
K = TypeVar("K")


class Ref(Generic[T]):
    """
    Mutable box that makes the wrapped value addressable.

    A `Ref` is an indirection: the walkers look through it transparently.
    When a path ends on a value reached through a `Ref`, writing the path
    replaces `Ref.value` rather than failing on an unwritable location.

    >>> counter = Ref(5)
    >>> from mstair.structwalk import set_field_value
    >>> set_field_value("anything", 6, counter)
    True
    >>> counter.value
    6
    """

    __slots__ = ("value",)

    value: T

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


def node_kind(value: Any) -> NodeKindT:
    """Classify `value` into one of the NodeKind categories."""
    if value is None:
        return NodeKind.NONE
    if isinstance(value, (Ref, weakref.ReferenceType)):
        return NodeKind.INDIRECTION
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if _is_struct(value):
        return NodeKind.STRUCT
    return NodeKind.SCALAR


def _is_struct(value: Any) -> bool:
    if is_named_tuple(value):
        return True
    if isinstance(value, (*_NEVER_STRUCT_TYPES, *SEQUENCE_TYPES)):
        return False
    if dataclasses.is_dataclass(value):
        return True
    if type(value).__module__ == "builtins":
        return False
    return hasattr(value, "__dict__") or any(
        "__slots__" in vars(klass) for klass in type(value).__mro__[:-1]
    )


def is_named_tuple(value: Any) -> bool:
    """True for instances of `collections.namedtuple` / `typing.NamedTuple` classes."""
    return isinstance(value, tuple) and isinstance(getattr(type(value), "_fields", None), tuple)


def unwrap(value: Any) -> Any:
    """
    Dereference indirections until a non-indirection value is reached.

    A dead `weakref.ref` unwraps to ``None``.
    """
    while True:
        if isinstance(value, Ref):
            value = value.value
        elif isinstance(value, weakref.ReferenceType):
            value = value()
        else:
            return value


def struct_fields(value: Any) -> list[str]:
    """
    Return the field names of a record, in declared order.

    - dataclasses: all fields from `dataclasses.fields()`
    - named tuples: `_fields`
    - other records: public instance attributes in insertion order, then
      populated public `__slots__` (base classes first)
    """
    if dataclasses.is_dataclass(value):
        return [f.name for f in dataclasses.fields(value)]
    if is_named_tuple(value):
        return list(type(value)._fields)

    names: list[str] = [name for name in getattr(value, "__dict__", {}) if not name.startswith("_")]
    for klass in reversed(type(value).__mro__):
        slots = vars(klass).get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name.startswith("_") or name in names or not hasattr(value, name):
                continue
            names.append(name)
    return names


def fold(name: str) -> str:
    """Case-fold a name for case-insensitive comparison."""
    return name.casefold()


def match_name(
    candidates: Iterable[K], segment: str, key: Callable[[K], str] = str
) -> K | Missing:
    """
    Return the candidate whose name case-insensitively equals `segment`.

    An exact-case match wins; otherwise the first case-insensitive match in
    candidate order is returned.

    :param candidates: Names (or keys) in declared/iteration order.
    :param segment: One path segment, not yet folded.
    :param key: Converts a candidate to its comparable string form.
    :return: The matching candidate, or MISSING.
    """
    folded_segment = fold(segment)
    first_match: K | Missing = MISSING
    for candidate in candidates:
        candidate_name = key(candidate)
        if candidate_name == segment:
            return candidate
        if first_match is MISSING and fold(candidate_name) == folded_segment:
            first_match = candidate
    return first_match


# End of file: src/mstair/structwalk/walk/node_kind.py
