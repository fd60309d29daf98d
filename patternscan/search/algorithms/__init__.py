from patternscan.search.algorithms.rabinkarp import PatternSearcher, RabinKarp, search_pattern
from patternscan.search.algorithms.suffixarray import SuffixArraySearch, build_suffix_array

ALGORITHMS = {
    "rabinkarp": RabinKarp,
    "suffixarray": SuffixArraySearch,
}

__all__ = [
    "ALGORITHMS",
    "PatternSearcher",
    "RabinKarp",
    "SuffixArraySearch",
    "build_suffix_array",
    "search_pattern",
]
