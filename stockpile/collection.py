"""The union of both collection shapes, for code that only needs emptiness.

Shape dispatch is structural: a collection is a sequence if it is a native
ordered collection, and a mapping otherwise.
"""

from __future__ import annotations

from typing import Any, Union

from stockpile.common import is_blank
from stockpile.dict import PDict, is_dict
from stockpile.list import PList, is_list

__all__ = ["Collection", "is_dict", "is_empty", "is_list"]


type Collection[V] = Union[PDict[V], PList[V]]


def is_empty(collection: Collection[Any]) -> bool:
    """Check whether a collection contains no items.

    Args:
        collection: A PDict or a PList.

    Returns:
        True for a mapping with no entries or a sequence with no elements.
    """
    if is_dict(collection):
        return is_blank(collection)
    else:
        return len(collection) < 1
