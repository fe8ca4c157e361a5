# File: src/mstair/structwalk/base/types.py
"""
Runtime type tuples and sentinels shared by the walkers and the logging stack.
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from os import PathLike
from typing import Final, Self


__all__ = [
    "BUFFER_LIKE_TYPES",
    "MISSING",
    "Missing",
    "OPAQUE_VALUE_TYPES",
    "PRIMITIVE_NON_STRING_TYPES",
    "PRIMITIVE_TYPES",
    "SEQUENCE_TYPES",
    "Sentinel",
]


# ---------- Runtime tuples (for isinstance/issubclass) ----------

BUFFER_LIKE_TYPES: Final[tuple[type, ...]] = (range, bytes, bytearray, memoryview)
SEQUENCE_TYPES: Final[tuple[type, ...]] = (list, tuple, set, frozenset)
PRIMITIVE_NON_STRING_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    type(None),
)
PRIMITIVE_TYPES: Final[tuple[type, ...]] = (*PRIMITIVE_NON_STRING_TYPES, str)

OPAQUE_VALUE_TYPES: Final[tuple[type, ...]] = (
    Enum,
    BaseException,
    PathLike,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
)
"""Stdlib value types that carry attributes but are never walked into as records."""


class Sentinel:
    """
    Robust singleton base class for sentinel objects such as MISSING.

    Behaves as a falsy, unique, singleton marker, distinct from None.
    """

    __slots__ = ()

    _repr_name: str = "SENTINEL"

    def __repr__(self) -> str:
        return self._repr_name

    def __str__(self) -> str:
        return self._repr_name

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __reduce__(self) -> tuple[type, tuple[()]]:
        return (type(self), ())

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(
        self,
        _memo: dict[int, object],
    ) -> Self:
        return self

    def __new__(cls) -> Self:
        if "_instance" in cls.__dict__:
            return cls._instance
        cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_missing(self) -> bool:
        """True if this sentinel represents a missing value."""
        return False


class Missing(Sentinel):
    """Singleton indicating a missing or unresolved value."""

    _repr_name = "MISSING"

    @property
    def is_missing(self) -> bool:
        return True


MISSING: Final[Missing] = Missing()


# End of file: src/mstair/structwalk/base/types.py
