from patternscan.search.base import SearchAlgorithm
from patternscan.search.exceptions import IndexOutOfRangeError, InvalidInputError, SearchError
from patternscan.search.rolling_hash import BASE, MODULUS, RollingHasher

__all__ = [
    "BASE",
    "MODULUS",
    "IndexOutOfRangeError",
    "InvalidInputError",
    "RollingHasher",
    "SearchAlgorithm",
    "SearchError",
]
