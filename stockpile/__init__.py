from stockpile.collection import Collection, is_empty
from stockpile.common import (
    Impossible,
    KeyTypeError,
    Maybe,
    Missing,
    Nothing,
    Pair,
    Something,
    StockpileError,
    UndefinedValueError,
    first,
    is_none,
    second,
    wrap,
)
from stockpile.config import (
    Config,
    configured,
    get_config,
    set_config,
)
from stockpile.dict import PDict, is_dict, merge
from stockpile.list import PList, is_list

__all__ = [
    "Collection",
    "Config",
    "Impossible",
    "KeyTypeError",
    "Maybe",
    "Missing",
    "Nothing",
    "PDict",
    "PList",
    "Pair",
    "Something",
    "StockpileError",
    "UndefinedValueError",
    "configured",
    "first",
    "get_config",
    "is_dict",
    "is_empty",
    "is_list",
    "is_none",
    "merge",
    "second",
    "set_config",
    "wrap",
]
