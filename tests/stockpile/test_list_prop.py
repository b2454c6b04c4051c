"""Property-based tests for PList using Hypothesis."""

from typing import List

from hypothesis import given
from hypothesis import strategies as st

from stockpile.common import Nothing, Something
from stockpile.list import PList
from tests.stockpile.hypo import configure_hypo

configure_hypo()


@st.composite
def list_strategy(
    draw: st.DrawFn, element_strategy: st.SearchStrategy[int] = st.integers(0, 9)
) -> PList[int]:
    return PList(draw(st.lists(element_strategy, min_size=0, max_size=20)))


@given(st.lists(st.integers(), min_size=0, max_size=50))
def test_construct_equals_list(elements: List[int]) -> None:
    plist = PList(elements)
    assert plist.list() == elements
    assert plist.size() == len(elements)
    assert plist.null() == (len(elements) == 0)


@given(list_strategy())
def test_head_end(plist: PList[int]) -> None:
    if plist.null():
        assert plist.head() == Nothing()
        assert plist.end() == Nothing()
    else:
        assert plist.head() == Something(plist[0])
        assert plist.end() == Something(plist[-1])


@given(list_strategy())
def test_front_tail(plist: PList[int]) -> None:
    """front and tail drop one element, or yield empty for short input."""
    if plist.size() < 2:
        assert plist.front().null()
        assert plist.tail().null()
    else:
        assert plist.front().list() == plist.list()[:-1]
        assert plist.tail().list() == plist.list()[1:]
        assert plist.tail().front() == plist.front().tail()


@given(list_strategy())
def test_unique(plist: PList[int]) -> None:
    """unique keeps first occurrences in order."""
    expected = list(dict.fromkeys(plist))
    deduped = plist.unique()
    assert deduped.list() == expected
    assert (deduped is plist) == (len(expected) == plist.size())
    assert deduped.unique() is deduped


@given(list_strategy())
def test_group_partitions(plist: PList[int]) -> None:
    """Groups cover every element once and keep relative order."""
    groups = plist.group(lambda value, _: value % 3)
    keys = [key for key, _ in groups]
    assert len(keys) == len(set(keys))
    assert keys == list(dict.fromkeys(value % 3 for value in plist))
    for key, members in groups:
        assert members.list() == [value for value in plist if value % 3 == key]
    assert sum(members.size() for _, members in groups) == plist.size()


@given(list_strategy())
def test_group_into_agrees_with_group(plist: PList[int]) -> None:
    groups = plist.group(lambda value, _: value % 3)
    into = plist.group_into(lambda value, _: value % 3)
    assert into.size() == groups.size()
    for key, members in groups:
        assert into.get(str(key)) == Something(members)
