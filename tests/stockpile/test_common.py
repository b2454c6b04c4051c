"""Tests for common utility types and functions."""

import pytest

from stockpile.common import (
    KeyTypeError,
    Missing,
    Nothing,
    Pair,
    Something,
    StockpileError,
    UndefinedValueError,
    check_defined,
    check_key,
    first,
    is_array,
    is_blank,
    is_none,
    membership_key,
    same,
    second,
    wrap,
)
from stockpile.config import configured
from stockpile.list import PList


def test_is_none():
    """Only None and Missing count as absent."""
    assert is_none(None)
    assert is_none(Missing.instance())

    # Falsy values are defined
    assert not is_none(0)
    assert not is_none(False)
    assert not is_none("")
    assert not is_none([])


def test_wrap():
    """Test wrapping possibly-absent values"""
    assert wrap(None) == Nothing()
    assert wrap(Missing()) == Nothing()
    assert wrap(0) == Something(0)
    assert wrap("") == Something("")


def test_maybe_equality():
    """Maybes compare by variant and wrapped value."""
    assert Something(1) == Something(1)
    assert Something(1) != Something(2)
    assert Something(1) != Nothing()
    assert Nothing() == Nothing()


def test_maybe_accessors():
    """Test the Maybe helper methods"""
    something = Something(False)
    nothing: Nothing[bool] = Nothing()

    assert something.is_something()
    assert not something.is_nothing()
    assert nothing.is_nothing()
    assert not nothing.is_something()

    # Falsy wrapped values are returned, not the default
    assert something.value_or(True) is False
    assert nothing.value_or(True) is True

    assert something.to_optional() is False
    assert nothing.to_optional() is None


def test_maybe_map():
    """Mapping over a Maybe transforms only Something."""
    assert Something(2).map(lambda x: x * 10) == Something(20)
    assert Nothing().map(lambda x: x * 10) == Nothing()

    # An absent result collapses to Nothing
    assert Something(2).map(lambda _: None) == Nothing()


def test_maybe_match():
    """Maybes can be destructured with match."""
    match Something("x"):
        case Something(value):
            assert value == "x"
        case _:
            pytest.fail("expected Something")


def test_pair():
    """Pairs behave as ordered 2-tuples"""
    pair = Pair("a", 1)
    assert first(pair) == "a"
    assert second(pair) == 1
    assert pair.first == "a"
    assert pair.second == 1

    key, value = pair
    assert (key, value) == ("a", 1)

    # Element-wise equality, including with plain tuples
    assert pair == Pair("a", 1)
    assert pair == ("a", 1)
    assert pair != Pair(1, "a")


def test_same():
    """Strict sameness distinguishes types and compares non-scalars by identity."""
    assert same(1, 1)
    assert same("abc", "ab" + "c")
    assert same(b"ab", b"ab")

    # Equal but differently typed values are not the same
    assert not same(1, 1.0)
    assert not same(1, True)
    assert not same(0, False)

    # Containers are only the same when identical, hashable or not
    xs = [1, 2]
    assert same(xs, xs)
    assert not same(xs, [1, 2])
    pair = (1, 2)
    assert same(pair, pair)
    assert not same(tuple([1]), tuple([1]))
    assert not same((1,), (1.0,))
    plist = PList([1])
    assert same(plist, plist)
    assert not same(plist, PList([1]))


def test_membership_key():
    """Membership keys agree with sameness."""
    assert membership_key(1) == membership_key(1)
    assert membership_key(1) != membership_key(True)
    assert membership_key(1) != membership_key(1.0)

    xs = [1]
    ys = [1]
    assert membership_key(xs) == membership_key(xs)
    assert membership_key(xs) != membership_key(ys)

    # Tuples too, so (1,) and (True,) stay apart
    one = (1,)
    also_one = tuple([1])
    assert membership_key(one) == membership_key(one)
    assert membership_key(one) != membership_key(also_one)


def test_is_array():
    """Native ordered collections are arrays, strings are not."""
    assert is_array([])
    assert is_array((1, 2))
    assert not is_array("abc")
    assert not is_array(b"abc")
    assert not is_array({})
    assert not is_array(1)


def test_is_blank():
    assert is_blank({})
    assert not is_blank({"a": 1})


def test_check_key():
    """Non-string keys are rejected in strict mode only."""
    check_key("")
    check_key("a")

    with pytest.raises(KeyTypeError) as exc_info:
        check_key(1)
    assert exc_info.value.key == 1

    # Usable as a plain TypeError
    with pytest.raises(TypeError):
        check_key(None)

    with configured(strict=False):
        check_key(1)


def test_check_defined():
    """Absent values are rejected in strict mode only."""
    check_defined(0, "a")
    check_defined(False, "a")

    with pytest.raises(UndefinedValueError) as exc_info:
        check_defined(None, "a")
    assert exc_info.value.where == "a"

    with pytest.raises(ValueError):
        check_defined(Missing(), 3)

    with pytest.raises(StockpileError):
        check_defined(None, 0)

    with configured(strict=False):
        check_defined(None, "a")
