# File: src/mstair/structwalk/walk/getters.py
"""
Discovery of zero-argument accessor ("getter") members.

A getter is a public member defined by a user class (never by a builtin
type) that is either a property or a plain method callable without
arguments that declares a return annotation other than ``None``. Methods
without a return annotation are not getters. Members are collected along
the MRO so overrides in subclasses win, in definition order.
"""

from __future__ import annotations

import inspect
from functools import cached_property
from types import FunctionType
from typing import Any

from mstair.structwalk.base.types import PRIMITIVE_TYPES


__all__ = [
    "call_getter",
    "class_members",
    "getter_members",
    "has_methods",
    "is_getter",
]

_REQUIRED_PARAMETER_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)
_METHOD_TYPES = (FunctionType, property, cached_property, classmethod, staticmethod)


def class_members(value: Any) -> dict[str, Any]:
    """
    Return the public class-level members of `value`'s type, by name.

    Builtin classes (including `object`) contribute nothing, so scalars
    such as `str` or `int` expose no members.
    """
    if isinstance(value, PRIMITIVE_TYPES):
        return {}
    members: dict[str, Any] = {}
    for klass in reversed(type(value).__mro__):
        if klass.__module__ == "builtins":
            continue
        for name, member in vars(klass).items():
            if not name.startswith("_"):
                members[name] = member
    return members


def is_getter(member: Any) -> bool:
    """True for properties and zero-argument methods annotated to return a value."""
    if isinstance(member, (property, cached_property)):
        return True
    if not isinstance(member, FunctionType):
        return False
    try:
        signature = inspect.signature(member)
    except (TypeError, ValueError):
        return False
    parameters = list(signature.parameters.values())[1:]  # drop self
    if any(p.kind in _REQUIRED_PARAMETER_KINDS and p.default is p.empty for p in parameters):
        return False
    return signature.return_annotation not in (signature.empty, None, "None", type(None))


def getter_members(value: Any) -> dict[str, Any]:
    """Return the getters of `value`'s type, by name, in definition order."""
    return {name: member for name, member in class_members(value).items() if is_getter(member)}


def has_methods(value: Any) -> bool:
    """True if `value`'s type defines any public method or property, getter or not."""
    return any(
        isinstance(member, _METHOD_TYPES)
        for member in class_members(value).values()
    )


def call_getter(value: Any, name: str) -> Any:
    """Invoke the getter `name` on `value` (property access or zero-argument call)."""
    member = getattr(value, name)
    if callable(member) and not isinstance(
        inspect.getattr_static(type(value), name, None), (property, cached_property)
    ):
        return member()
    return member


# End of file: src/mstair/structwalk/walk/getters.py
