"""Immutable string-keyed mapping of defined values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    Type,
    TypeGuard,
    Union,
    override,
)

from stockpile.common import (
    Maybe,
    Nothing,
    Pair,
    Sized,
    Something,
    check_defined,
    check_key,
    same,
)
from stockpile.list import PList, is_list

__all__ = ["PDict", "is_dict", "merge"]


type DictSource[V] = Union[PDict[V], Mapping[str, V], Iterable[Tuple[str, V]]]


class PDict[V](Sized):
    """A dictionary of string keys to defined values.

    More useful than a native dict for application state: it cannot be
    changed under its holders, compares by value, and converts to a plain
    dict for serialization. Edits return a new PDict, or this same PDict
    when the edit would not change anything, so `new is old` is a cheap
    "did anything change" check.
    """

    _entries: Dict[str, V]

    def __init__(self, source: Optional[DictSource[V]] = None) -> None:
        """Create a mapping.

        Args:
            source: Optional existing PDict, native mapping, or iterable of
                key-value pairs. Pairs are inserted in order, so a later pair
                wins over an earlier one with the same key. The result is
                always a new mapping, even when copying another PDict.

        Raises:
            KeyTypeError: In strict mode, if a key is not a str.
            UndefinedValueError: In strict mode, if a value is None or Missing.
        """
        object.__setattr__(self, "_entries", _pdict_entries_from(source))

    @staticmethod
    def empty(_vty: Optional[Type[V]] = None) -> PDict[V]:
        """Create an empty mapping.

        Args:
            _vty: Optional value type hint (unused).

        Returns:
            A new empty mapping.
        """
        return PDict()

    @staticmethod
    def singleton(key: str, value: V) -> PDict[V]:
        """Create a mapping containing a single entry."""
        return PDict(((key, value),))

    @override
    def size(self) -> int:
        return len(self._entries)

    def has(self, key: str) -> bool:
        """Check whether the mapping has an entry for a key.

        Only presence is checked, so entries holding falsy values count.
        """
        return key in self._entries

    def get(self, key: str) -> Maybe[V]:
        """Get the value for a key.

        Args:
            key: The key to look up.

        Returns:
            Something of the value if the key is present, Nothing otherwise.
        """
        if key in self._entries:
            return Something(self._entries[key])
        else:
            return Nothing()

    def keys(self) -> PList[str]:
        return PList(self._entries.keys())

    def values(self) -> PList[V]:
        return PList(self._entries.values())

    def entries(self) -> PList[Pair[str, V]]:
        """Get all entries as key-value pairs.

        The order matches keys() and values() of this same instance.
        """
        return PList(Pair(key, value) for key, value in self._entries.items())

    def for_each(self, fn: Callable[[V, str], None]) -> None:
        """Call a function with each value and its key, in entries() order."""
        for key, value in self._entries.items():
            fn(value, key)

    def filter(self, predicate: Callable[[V, str], bool]) -> PDict[V]:
        """Keep only the entries that pass a predicate.

        Args:
            predicate: Called with each value and its key.

        Returns:
            This mapping if every entry passes, otherwise a new mapping of
            the passing entries.
        """
        return _pdict_filter(self, predicate)

    def map[W](self, fn: Callable[[V, str], W]) -> PDict[W]:
        """Transform every value.

        The function is called for every entry, even when the result turns
        out to equal the original value.

        Args:
            fn: Called with each value and its key to get the new value.

        Returns:
            This mapping if no value changed, otherwise a new mapping with
            the same keys and the transformed values.

        Raises:
            UndefinedValueError: In strict mode, if fn returns None or Missing.
        """
        return _pdict_map(self, fn)

    def reduce[Z](self, fn: Callable[[Z, V, str], Z], initial: Z) -> Z:
        """Fold the entries from left to right with an accumulator.

        Args:
            fn: Takes the accumulator, a value and its key; returns the new
                accumulator.
            initial: The initial accumulator value.

        Returns:
            The final accumulator value after processing all entries.
        """
        result = initial
        for key, value in self._entries.items():
            result = fn(result, value, key)
        return result

    def remove(self, key: str) -> PDict[V]:
        """Remove the entry for a key.

        Returns:
            This mapping if the key is absent, otherwise a new mapping
            without that entry.
        """
        if key not in self._entries:
            return self
        entries = dict(self._entries)
        del entries[key]
        return _pdict_of(entries)

    def set(self, key: str, value: V) -> PDict[V]:
        """Insert or overwrite the entry for a key.

        Returns:
            This mapping if the key already holds the same value, otherwise a
            new mapping with the entry set.

        Raises:
            KeyTypeError: In strict mode, if the key is not a str.
            UndefinedValueError: In strict mode, if the value is None or Missing.
        """
        check_key(key)
        check_defined(value, key)
        if key in self._entries and same(self._entries[key], value):
            return self
        entries = dict(self._entries)
        entries[key] = value
        return _pdict_of(entries)

    def merge(self, *others: DictSource[V]) -> PDict[V]:
        """Alias for merge(self, *others)."""
        return merge(self, *others)

    def every(self, predicate: Callable[[V, str], bool]) -> bool:
        """Check whether all entries pass a predicate; True when empty."""
        return all(predicate(value, key) for key, value in self._entries.items())

    def some(self, predicate: Callable[[V, str], bool]) -> bool:
        """Check whether any entry passes a predicate; False when empty."""
        return any(predicate(value, key) for key, value in self._entries.items())

    def to_dict(self) -> Dict[str, V]:
        """Copy the entries into a new native dict."""
        return dict(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PDict):
            return self._entries == other._entries
        else:
            return False

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"PDict({self._entries!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"PDict is immutable, cannot set {name}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"PDict is immutable, cannot delete {name}")


def is_dict(value: object) -> TypeGuard[PDict[Any]]:
    """Check whether a collection is a mapping.

    Defined as "not a sequence" rather than by checking for a PDict.
    """
    return not is_list(value)


def merge[V](*dicts: DictSource[V]) -> PDict[V]:
    """Combine mappings, the rightmost mapping winning on shared keys.

    Time Complexity: O(n) in the total number of entries

    Args:
        dicts: Zero or more mappings. Native mappings and iterables of
            pairs are accepted and validated as PDict() does.

    Returns:
        A new empty mapping for no arguments. Otherwise the first mapping
        with the entries of each later mapping set onto it in turn, which is
        the first mapping itself if none of them changes anything.
    """
    if len(dicts) < 1:
        return PDict.empty()
    merged = _pdict_coerce(dicts[0])
    # Copied on the first real change only
    entries: Optional[Dict[str, V]] = None
    for other in dicts[1:]:
        for key, value in _pdict_coerce(other)._entries.items():
            current = merged._entries if entries is None else entries
            if key in current and same(current[key], value):
                continue
            if entries is None:
                entries = dict(merged._entries)
            entries[key] = value
    if entries is None:
        return merged
    else:
        return _pdict_of(entries)


def _pdict_of[V](entries: Dict[str, V]) -> PDict[V]:
    pdict: PDict[V] = object.__new__(PDict)
    object.__setattr__(pdict, "_entries", entries)
    return pdict


def _pdict_coerce[V](source: DictSource[V]) -> PDict[V]:
    return source if isinstance(source, PDict) else PDict(source)


def _pdict_entries_from[V](source: Optional[DictSource[V]]) -> Dict[str, V]:
    if source is None:
        return {}
    elif isinstance(source, PDict):
        return dict(source._entries)
    elif isinstance(source, Mapping):
        pairs: Iterable[Tuple[str, V]] = source.items()
    else:
        pairs = source
    entries: Dict[str, V] = {}
    for key, value in pairs:
        check_key(key)
        check_defined(value, key)
        entries[key] = value
    return entries


def _pdict_filter[V](
    pdict: PDict[V], predicate: Callable[[V, str], bool]
) -> PDict[V]:
    entries: Dict[str, V] = {}
    any_filtered_out = False
    for key, value in pdict._entries.items():
        if predicate(value, key):
            entries[key] = value
        else:
            any_filtered_out = True
    return _pdict_of(entries) if any_filtered_out else pdict


def _pdict_map[V, W](pdict: PDict[V], fn: Callable[[V, str], W]) -> PDict[W]:
    entries: Dict[str, W] = {}
    any_changed = False
    for key, value in pdict._entries.items():
        new_value = fn(value, key)
        check_defined(new_value, key)
        entries[key] = new_value
        if not same(new_value, value):
            any_changed = True
    if any_changed:
        return _pdict_of(entries)
    else:
        # No value changed, so V and W coincide here
        return pdict  # type: ignore[return-value]
