"""Common utility types and functions for the stockpile collection library.

This module provides the foundation used by both collection shapes: the
optional value type returned by lookups, the pair type used for entries and
groups, absence checks, the strict sameness test behind the
identity-preserving edits, and the exception hierarchy.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterator, List, NamedTuple, Optional

from stockpile.config import get_config

__all__ = [
    "Impossible",
    "Iterating",
    "KeyTypeError",
    "Maybe",
    "Missing",
    "Nothing",
    "Pair",
    "Sized",
    "Something",
    "StockpileError",
    "UndefinedValueError",
    "check_defined",
    "check_key",
    "first",
    "is_array",
    "is_blank",
    "is_none",
    "is_scalar",
    "membership_key",
    "same",
    "second",
    "wrap",
]

_LOG = logging.getLogger(__name__)


class StockpileError(Exception):
    """Base class for all errors raised by stockpile."""

    pass


class KeyTypeError(StockpileError, TypeError):
    """Raised when a mapping key is not a string."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Mapping keys must be str, got {type(key).__name__}")
        self.key = key


class UndefinedValueError(StockpileError, ValueError):
    """Raised when an absent value is stored in a collection."""

    def __init__(self, where: Any) -> None:
        super().__init__(f"Undefined value at {where!r}")
        self.where = where


class Impossible(StockpileError):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations, typically from the
    unreachable arm of a match statement.
    """

    pass


@dataclass(frozen=True)
class Missing:
    """Sentinel for "no value was given", distinct from None."""

    @staticmethod
    def instance() -> Missing:
        return _MISSING


_MISSING = Missing()


def is_none(value: Any) -> bool:
    """Check whether a value is one of the two absence markers.

    Args:
        value: Any value.

    Returns:
        True for None and Missing, False for everything else (including
        falsy values such as 0, False and "").
    """
    return value is None or isinstance(value, Missing)


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Iterator[U]:
        return self.iter()


# sealed
class Maybe[T](metaclass=ABCMeta):
    """An optional value: either Something wrapping a value, or Nothing.

    Lookups return a Maybe instead of raising or returning None, so a
    present falsy value is never confused with absence.
    """

    def is_something(self) -> bool:
        match self:
            case Something():
                return True
            case Nothing():
                return False
            case _:
                raise Impossible

    def is_nothing(self) -> bool:
        return not self.is_something()

    def value_or(self, default: T) -> T:
        """Get the wrapped value, or the given default for Nothing."""
        match self:
            case Something(value):
                return value
            case Nothing():
                return default
            case _:
                raise Impossible

    def to_optional(self) -> Optional[T]:
        """Convert to the native None-or-value form."""
        match self:
            case Something(value):
                return value
            case Nothing():
                return None
            case _:
                raise Impossible

    def map[W](self, fn: Callable[[T], W]) -> Maybe[W]:
        """Transform the wrapped value, if any.

        Args:
            fn: Function applied to the wrapped value.

        Returns:
            Something of the result (or Nothing if the result is absent),
            or Nothing when this is Nothing.
        """
        match self:
            case Something(value):
                return wrap(fn(value))
            case Nothing():
                return Nothing()
            case _:
                raise Impossible


@dataclass(frozen=True)
class Something[T](Maybe[T]):
    value: T


@dataclass(frozen=True)
class Nothing[T](Maybe[T]):
    pass


def wrap[T](value: Optional[T]) -> Maybe[T]:
    """Wrap a possibly-absent value.

    Args:
        value: Any value, possibly None or Missing.

    Returns:
        Nothing for an absence marker, Something(value) otherwise.
    """
    if is_none(value):
        return Nothing()
    else:
        return Something(value)  # type: ignore[arg-type]


class Pair[A, B](NamedTuple):
    """An ordered two-element tuple.

    Compares element-wise and unpacks like any other tuple.
    """

    first: A
    second: B


def first[A, B](pair: Pair[A, B]) -> A:
    return pair[0]


def second[A, B](pair: Pair[A, B]) -> B:
    return pair[1]


def is_array(value: Any) -> bool:
    """Check whether a value is a native ordered collection.

    Strings and bytes are sequences to Python but not collections of
    elements here, so they are excluded.
    """
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def is_blank(value: Any) -> bool:
    """Check whether a mapping-like value has no entries."""
    return len(value) == 0


# Compared by value, everything else by reference
_SCALAR_TYPES = frozenset([bool, int, float, complex, str, bytes])

_BY_IDENTITY = object()


def is_scalar(value: Any) -> bool:
    """Check whether a value is compared by value rather than by reference."""
    return type(value) in _SCALAR_TYPES


def membership_key(value: Any) -> Hashable:
    """Compute the key under which a value is tracked in a membership set.

    Scalars (numbers, strings, bytes) are tracked by exact type and value.
    Everything else, including tuples and the collections themselves, is
    tracked by object identity.
    """
    if is_scalar(value):
        return (type(value), value)
    else:
        return (_BY_IDENTITY, id(value))


def same(a: Any, b: Any) -> bool:
    """Strict sameness used to detect no-op edits.

    Two values are the same if they are the same object, or if they are
    scalars of exactly the same type that compare equal. So 1, 1.0 and True
    are all different values here even though Python considers them equal,
    and two equal tuples or collections are different unless identical.
    """
    if a is b:
        return True
    else:
        return is_scalar(a) and type(a) is type(b) and a == b


def check_key(key: Any) -> None:
    """Reject a non-string mapping key when strict mode is on.

    Raises:
        KeyTypeError: If the key is not a str.
    """
    if get_config().strict and not isinstance(key, str):
        _LOG.debug("Rejected key %r of type %s", key, type(key).__name__)
        raise KeyTypeError(key)


def check_defined(value: Any, where: Any) -> None:
    """Reject an absent value when strict mode is on.

    Args:
        value: The value about to be stored.
        where: The key or index it would be stored at, for the error message.

    Raises:
        UndefinedValueError: If the value is None or Missing.
    """
    if get_config().strict and is_none(value):
        _LOG.debug("Rejected undefined value at %r", where)
        raise UndefinedValueError(where)
