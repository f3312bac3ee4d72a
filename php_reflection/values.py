"""
php_reflection.values
=====================

Literal value nodes used for property defaults, parameter defaults and
constant initialisers.

``null``, ``true`` and ``false`` carry no state, so a builder hands out one
shared instance of each for the whole session (flyweights).  Numeric and
scalar values carry their raw source text and are allocated fresh on every
request; two of them may compare equal but are never the same object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

#: Token type tag as handed over by the parser (a name or a numeric id).
TypeTag = Union[str, int]


class MemberValue:
    """Base class for all literal value nodes."""

    __slots__ = ()

    #: ``True`` for values that are shared per session.
    is_flyweight = False

    @property
    def is_null(self) -> bool:
        return False


@dataclass(frozen=True, eq=False)
class MemberNullValue(MemberValue):
    is_flyweight = True

    @property
    def is_null(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "MemberNullValue()"


@dataclass(frozen=True, eq=False)
class MemberTrueValue(MemberValue):
    is_flyweight = True

    @property
    def value(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "MemberTrueValue()"


@dataclass(frozen=True, eq=False)
class MemberFalseValue(MemberValue):
    is_flyweight = True

    @property
    def value(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MemberFalseValue()"


@dataclass(frozen=True)
class MemberScalarValue(MemberValue):
    """A string (or other scalar) literal, kept as raw source text."""
    type: TypeTag
    value: Optional[str] = None


@dataclass(frozen=True)
class MemberNumericValue(MemberValue):
    """An integer or float literal, kept as raw source text plus sign."""
    type: TypeTag
    value: str
    negative: bool = False

    @property
    def signed_value(self) -> str:
        return f"-{self.value}" if self.negative else self.value


class ValueFactory:
    """Per-session value cache.

    The three flyweights are created once, when the factory is created;
    every other value is allocated on demand.
    """

    __slots__ = ("_null", "_true", "_false")

    def __init__(self) -> None:
        self._null = MemberNullValue()
        self._true = MemberTrueValue()
        self._false = MemberFalseValue()

    def null(self) -> MemberNullValue:
        return self._null

    def true(self) -> MemberTrueValue:
        return self._true

    def false(self) -> MemberFalseValue:
        return self._false

    def numeric(self, type: TypeTag, value: str, negative: bool) -> MemberNumericValue:
        return MemberNumericValue(type, value, bool(negative))

    def scalar(self, type: TypeTag, value: Optional[str] = None) -> MemberScalarValue:
        return MemberScalarValue(type, value)
