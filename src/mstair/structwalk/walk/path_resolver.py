# File: src/mstair/structwalk/walk/path_resolver.py
"""
Dotted-path resolution over mixed record/mapping object graphs.

`resolve()` walks a path such as ``"first.bar.baz"`` from a root value and
returns a `Resolution`: the terminal value plus the `Slot` that holds it, or
a not-found result. Segments match record field names and mapping keys
case-insensitively; indirections (`Ref`, `weakref.ref`) are looked through
before every segment.

Resolution is total: no input shape makes it raise. Faults raised by user
code while reading (a misbehaving `__getattr__`, `__str__` of a key, mapping
iteration) turn into not-found and are logged at TRACE.
"""

from __future__ import annotations

import dataclasses
import weakref
from collections.abc import MutableMapping
from typing import Any, Final

from mstair.structwalk.base.types import MISSING
from mstair.structwalk.walk.node_kind import (
    NodeKind,
    Ref,
    is_named_tuple,
    match_name,
    node_kind,
    struct_fields,
)
from mstair.structwalk.xlogging.logger_factory import create_logger


__all__ = [
    "NOT_FOUND",
    "Resolution",
    "Slot",
    "resolve",
    "split_path",
]

LOG = create_logger(__name__)


class Slot:
    """
    An addressable location holding a resolved value.

    Kinds:
    - ``attribute``: a field of a record (`owner.key`)
    - ``mapping_key``: an entry of a mapping (`owner[key]`)
    - ``ref``: the content of a `Ref` box (`owner.value`)
    - ``root``: the root value passed by the caller, never writable
    - ``dereferenced``: the referent of a `weakref.ref`, never writable
    """

    ATTRIBUTE: Final = "attribute"
    MAPPING_KEY: Final = "mapping_key"
    REF: Final = "ref"
    ROOT: Final = "root"
    DEREFERENCED: Final = "dereferenced"

    __slots__ = ("kind", "owner", "key")

    def __init__(self, kind: str, owner: Any = None, key: Any = None) -> None:
        self.kind = kind
        self.owner = owner
        self.key = key

    def __repr__(self) -> str:
        return f"Slot({self.kind}, owner={type(self.owner).__name__}, key={self.key!r})"

    @classmethod
    def attribute(cls, owner: Any, name: str) -> Slot:
        return cls(cls.ATTRIBUTE, owner, name)

    @classmethod
    def mapping_key(cls, owner: Any, key: Any) -> Slot:
        return cls(cls.MAPPING_KEY, owner, key)

    @classmethod
    def ref(cls, owner: Ref[Any]) -> Slot:
        return cls(cls.REF, owner, "value")

    @classmethod
    def root(cls) -> Slot:
        return cls(cls.ROOT)

    @classmethod
    def dereferenced(cls, owner: weakref.ReferenceType[Any]) -> Slot:
        return cls(cls.DEREFERENCED, owner)

    @property
    def writable(self) -> bool:
        """
        True if `write()` can be attempted.

        Frozen dataclasses, named tuples, read-only mappings, the root and
        weakref referents are known to be unwritable up front.
        """
        if self.kind == Slot.REF:
            return True
        if self.kind == Slot.MAPPING_KEY:
            return isinstance(self.owner, MutableMapping)
        if self.kind == Slot.ATTRIBUTE:
            if is_named_tuple(self.owner):
                return False
            if dataclasses.is_dataclass(self.owner):
                return not type(self.owner).__dataclass_params__.frozen  # type: ignore[attr-defined]
            return True
        return False

    def write(self, value: Any) -> bool:
        """
        Overwrite the location with `value`, without coercion.

        :return: True if the value was stored, False if the location rejected it.
        """
        if not self.writable:
            LOG.debug("Rejected write to unwritable %r", self)
            return False
        try:
            if self.kind == Slot.MAPPING_KEY:
                self.owner[self.key] = value
            else:
                setattr(self.owner, self.key, value)
        except Exception as e:
            LOG.debug("Rejected write to %r: %s: %s", self, type(e).__name__, e)
            return False
        return True


class Resolution:
    """
    Outcome of resolving a path: a found value and its slot, or not-found.

    A not-found resolution is falsy, carries `MISSING` as its value and has
    no slot.
    """

    __slots__ = ("value", "slot")

    def __init__(self, value: Any = MISSING, slot: Slot | None = None) -> None:
        self.value = value
        self.slot = slot

    def __bool__(self) -> bool:
        return self.found

    def __repr__(self) -> str:
        if not self.found:
            return "Resolution(NOT_FOUND)"
        return f"Resolution({self.value!r}, {self.slot!r})"

    @property
    def found(self) -> bool:
        return self.slot is not None

    def write(self, value: Any) -> bool:
        """Store `value` in the resolved slot; False when not found or rejected."""
        if self.slot is None:
            return False
        return self.slot.write(value)


NOT_FOUND: Final[Resolution] = Resolution()


def split_path(path: Any) -> list[str]:
    """
    Split a dotted path into segments.

    Returns an empty list (an invalid path) for non-strings, the empty string,
    and paths with an empty segment such as ``"a..b"`` or ``"a."``.
    """
    if not isinstance(path, str) or not path:
        return []
    segments = path.split(".")
    if not all(segments):
        return []
    return segments


def resolve(path: str, root: Any) -> Resolution:
    """
    Resolve `path` against `root`.

    For each segment: look through indirections, then match a record field
    or a mapping key case-insensitively. A scalar may only appear as the
    terminal value; descending past it is not-found, as is descending into
    ``None``.

    :param path: Dot-separated, case-insensitive path.
    :param root: Any value: record, mapping, indirection or scalar.
    :return: The resolution, never raising.
    """
    segments = split_path(path)
    if not segments:
        LOG.trace("Invalid path %r", path)
        return NOT_FOUND

    current: Any = root
    slot = Slot.root()
    last = len(segments) - 1
    for i, segment in enumerate(segments):
        try:
            while True:
                if isinstance(current, Ref):
                    slot = Slot.ref(current)
                    current = current.value
                elif isinstance(current, weakref.ReferenceType):
                    slot = Slot.dereferenced(current)
                    current = current()
                else:
                    break

            kind = node_kind(current)
            if kind is NodeKind.NONE:
                return _not_found(path, segment, "empty indirection")

            if kind is NodeKind.STRUCT:
                name = match_name(struct_fields(current), segment)
                if name is MISSING:
                    return _not_found(path, segment, f"no field in {type(current).__name__}")
                slot = Slot.attribute(current, name)
                current = getattr(current, name)
            elif kind is NodeKind.MAPPING:
                key = match_name(list(current), segment)
                if key is MISSING:
                    return _not_found(path, segment, "no key")
                slot = Slot.mapping_key(current, key)
                current = current[key]
            elif i != last:
                return _not_found(path, segment, f"cannot descend into {type(current).__name__}")
        except Exception as e:
            return _not_found(path, segment, f"{type(e).__name__}: {e}")

    return Resolution(current, slot)


def _not_found(path: str, segment: str, reason: str) -> Resolution:
    LOG.trace("Path %r not found at segment %r (%s)", path, segment, reason)
    return NOT_FOUND


# End of file: src/mstair/structwalk/walk/path_resolver.py
