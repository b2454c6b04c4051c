"""Immutable sequence of defined values.

A PList is a thin immutable wrapper over a tuple. Most work on a PList is
best done with comprehensions and native sequence operations, building a new
PList from the result; this module only adds the operations that are
awkward to write inline (safe end access, deduplication and grouping).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
    Type,
    TypeGuard,
    Union,
    overload,
    override,
)

from stockpile.common import (
    Iterating,
    Maybe,
    Nothing,
    Pair,
    Sized,
    Something,
    check_defined,
    is_array,
    membership_key,
)

if TYPE_CHECKING:
    from stockpile.dict import PDict

__all__ = ["PList", "is_list"]


class PList[T](Sized, Iterating[T]):
    """An ordered, immutable list of defined values.

    Compares by value. Edits that would not change the content return this
    same instance, so `new is old` is a cheap "did anything change" check.
    """

    _items: Tuple[T, ...]

    def __init__(self, source: Optional[Iterable[T]] = None) -> None:
        """Create a sequence.

        Args:
            source: Optional iterable of values. The values are copied into a
                new sequence that is independent from the source afterwards.

        Raises:
            UndefinedValueError: In strict mode, if any value is None or Missing.
        """
        object.__setattr__(self, "_items", _plist_items_from(source))

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PList[T]:
        """Create an empty sequence.

        Args:
            _ty: Optional type hint (unused).

        Returns:
            A new empty sequence.
        """
        return PList()

    @staticmethod
    def singleton(value: T) -> PList[T]:
        return PList((value,))

    @override
    def size(self) -> int:
        return len(self._items)

    @override
    def iter(self) -> Iterator[T]:
        return iter(self._items)

    def at(self, ix: int) -> Maybe[T]:
        """Get the element at the specified index.

        Args:
            ix: The index of the element to retrieve.

        Returns:
            Something of the element, or Nothing if the index is negative or
            out of bounds.
        """
        if 0 <= ix < len(self._items):
            return Something(self._items[ix])
        else:
            return Nothing()

    def head(self) -> Maybe[T]:
        """Get the first element, if any."""
        return self.at(0)

    def end(self) -> Maybe[T]:
        """Get the last element, if any."""
        return self.at(len(self._items) - 1)

    def front(self) -> PList[T]:
        """Get all but the last element.

        Returns:
            A new sequence, empty if this one has fewer than two elements.
        """
        return _plist_of(self._items[:-1])

    def tail(self) -> PList[T]:
        """Get all but the first element.

        Returns:
            A new sequence, empty if this one has fewer than two elements.
        """
        return _plist_of(self._items[1:])

    def unique(self) -> PList[T]:
        """Keep only the first occurrence of each distinct value.

        Time Complexity: O(n)

        Values are distinct unless they are the same object or scalars
        (numbers, strings, bytes) of the same type that compare equal.

        Returns:
            This sequence if it has no duplicates, otherwise a new sequence
            of first occurrences in their original order.
        """
        return _plist_unique(self)

    def group[K](self, key_fn: Callable[[T, int], K]) -> PList[Pair[K, PList[T]]]:
        """Partition the elements into groups by a computed key.

        Time Complexity: O(n)

        Args:
            key_fn: Called with each value and its index to get its group key.

        Returns:
            A sequence of (key, members) pairs, ordered by the first
            appearance of each key. Members keep their original order.

        Raises:
            UndefinedValueError: In strict mode, if a computed key is None
                or Missing.
        """
        return _plist_group(self, key_fn)

    def group_into(self, key_fn: Callable[[T, int], Any]) -> PDict[PList[T]]:
        """Partition the elements into a mapping of groups.

        Keys are coerced with str() before partitioning, so keys with the
        same string form share one group.

        Args:
            key_fn: Called with each value and its index to get its group key.

        Returns:
            A mapping from each key's string form to its members.
        """
        from stockpile.dict import PDict

        return PDict(self.group(lambda value, ix: str(key_fn(value, ix))))

    def index(self, value: T, start: int = 0, stop: Optional[int] = None) -> int:
        if stop is None:
            return self._items.index(value, start)
        else:
            return self._items.index(value, start, stop)

    def count(self, value: T) -> int:
        return self._items.count(value)

    @overload
    def __getitem__(self, ix: int) -> T: ...

    @overload
    def __getitem__(self, ix: slice) -> PList[T]: ...

    def __getitem__(self, ix: Union[int, slice]) -> Union[T, PList[T]]:
        if isinstance(ix, slice):
            return _plist_of(self._items[ix])
        else:
            return self._items[ix]

    def __contains__(self, value: Any) -> bool:
        return value in self._items

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    def __add__(self, other: PList[T]) -> PList[T]:
        """Concatenate two sequences."""
        return _plist_of(self._items + other._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PList):
            return self._items == other._items
        else:
            return False

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"PList({list(self._items)!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"PList is immutable, cannot set {name}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"PList is immutable, cannot delete {name}")


Sequence.register(PList)


def is_list(value: object) -> TypeGuard[PList[Any]]:
    """Check whether a collection is a sequence.

    This is the authoritative shape check: anything that is not a sequence
    is treated as a mapping.
    """
    return is_array(value)


def _plist_of[T](items: Tuple[T, ...]) -> PList[T]:
    plist: PList[T] = object.__new__(PList)
    object.__setattr__(plist, "_items", items)
    return plist


def _plist_items_from[T](source: Optional[Iterable[T]]) -> Tuple[T, ...]:
    if source is None:
        return ()
    elif isinstance(source, PList):
        return source._items
    items = tuple(source)
    for ix, value in enumerate(items):
        check_defined(value, ix)
    return items


def _plist_unique[T](plist: PList[T]) -> PList[T]:
    seen: Set[Hashable] = set()
    kept: List[T] = []
    for value in plist._items:
        key = membership_key(value)
        if key not in seen:
            seen.add(key)
            kept.append(value)
    if len(kept) == len(plist._items):
        return plist
    else:
        return _plist_of(tuple(kept))


def _plist_group[K, T](
    plist: PList[T], key_fn: Callable[[T, int], K]
) -> PList[Pair[K, PList[T]]]:
    # Keyed by membership key, insertion order gives first-appearance order
    groups: Dict[Hashable, Tuple[K, List[T]]] = {}
    for ix, value in enumerate(plist._items):
        key = key_fn(value, ix)
        check_defined(key, ix)
        slot = membership_key(key)
        if slot in groups:
            groups[slot][1].append(value)
        else:
            groups[slot] = (key, [value])
    return _plist_of(
        tuple(Pair(key, _plist_of(tuple(members))) for key, members in groups.values())
    )
