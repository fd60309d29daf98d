import time
from typing import Iterator, List, Optional, Tuple, Union
from patternscan.search.base import SearchAlgorithm
from patternscan.search.exceptions import InvalidInputError
from patternscan.search.rolling_hash import BASE, MODULUS, RollingHasher, Source


def _is_text(value: Source) -> bool:
    return isinstance(value, str)


class PatternSearcher:
    """
    Rabin-Karp exact matcher over one text.

    The text's RollingHasher is built on the first search that needs it and reused
    for every later pattern. Every hash hit is confirmed by direct comparison, so
    collisions never reach the result.

    Args:
        text (str | bytes): The text to search; may be empty.
        base (int, optional): Polynomial base. Defaults to 31.
        modulus (int, optional): Prime modulus. Defaults to 1_000_000_007.
    """
    def __init__(self, text: Source, base: int = BASE, modulus: int = MODULUS) -> None:
        self.text = text
        self.base = base
        self.modulus = modulus
        self._text_hasher: Optional[RollingHasher] = None

    @property
    def text_hasher(self) -> RollingHasher:
        if self._text_hasher is None:
            self._text_hasher = RollingHasher(self.text, self.base, self.modulus)
        return self._text_hasher

    def _check_pattern(self, pattern: Source) -> None:
        if len(pattern) == 0:
            raise InvalidInputError("Pattern must not be empty")
        if _is_text(pattern) != _is_text(self.text):
            raise InvalidInputError(
                f"Cannot search a {type(pattern).__name__} pattern in a {type(self.text).__name__} text"
            )

    def scan(self, pattern: Source) -> Iterator[Tuple[int, bool]]:
        """
        Yield (offset, verified) for every window whose hash equals the pattern's.

        `verified` is False for a hash collision. Offsets come in ascending order.
        """
        self._check_pattern(pattern)
        n, m = len(self.text), len(pattern)
        if m > n:
            return

        pattern_hash = RollingHasher(pattern, self.base, self.modulus).full_hash()
        hasher = self.text_hasher
        text = self.text
        for offset in range(n - m + 1):
            if hasher.substring_hash(offset, offset + m - 1) == pattern_hash:
                yield offset, text[offset:offset + m] == pattern

    def search(self, pattern: Source) -> List[int]:
        """
        Find every occurrence of `pattern` in the text.

        Args:
            pattern (str | bytes): Non-empty pattern, same kind as the text.

        Returns:
            List[int]: Ascending zero-based start offsets of the exact matches.

        Raises:
            InvalidInputError: If the pattern is empty or of the wrong kind.
        """
        return [offset for offset, verified in self.scan(pattern) if verified]

    def count(self, pattern: Source) -> int:
        return len(self.search(pattern))


def search_pattern(text: Source, pattern: Source) -> List[int]:
    """Return the ascending offsets of every exact occurrence of `pattern` in `text`."""
    return PatternSearcher(text).search(pattern)


class RabinKarp(SearchAlgorithm):
    """
    RabinKarp Algorithm Implementation for String Search

    This class runs the Rabin-Karp matcher over the whole content of a file. It
    extends the SearchAlgorithm base class; the file's rolling hash is built once
    per load and shared by all queries.

    Args:
        file_path (str): Path to the file to search in
        reread_on_query (bool, optional): Whether to reread the file for each query. Defaults to False.
        base (int, optional): Base value for the hash function. Defaults to 31.
        prime (int, optional): Prime number for the hash function modulus. Defaults to 1_000_000_007.

    Attributes:
        _searcher (PatternSearcher): Matcher over the file content
        _stats (Dict): Statistics of the last search: hash hits, hash collisions,
                    matches and time elapsed

    Example:
        >>> rk = RabinKarp('/path/to/file.txt')
        >>> rk.search('pattern')
        [12, 480]
        >>> rk.get_stats()
        {'hash_hits': 2, 'hash_collisions': 0, 'matches': 2, 'time_elapsed': 0.0005}
    """
    def __init__(self, file_path: str, reread_on_query: bool = False, base: int = BASE, prime: int = MODULUS) -> None:
        super().__init__(file_path, reread_on_query)
        self.base = base
        self.prime = prime
        self._searcher: Optional[PatternSearcher] = None
        self._stats = {
            "hash_hits": 0,
            "hash_collisions": 0,
            "matches": 0,
            "time_elapsed": 0
        }
        if not self.reread_on_query:
            self.load()

    def _build_index(self) -> None:
        self._searcher = PatternSearcher(self._text, self.base, self.prime)

    def search(self, query: Union[str, bytes]) -> List[int]:
        start_time = time.time()
        pattern = self._prepare(query)

        self._stats["hash_hits"] = 0
        self._stats["hash_collisions"] = 0

        result = []
        for offset, verified in self._searcher.scan(pattern):
            self._stats["hash_hits"] += 1
            if verified:
                result.append(offset)
            else:
                self._stats["hash_collisions"] += 1

        self._stats["matches"] = len(result)
        self._stats["time_elapsed"] = time.time() - start_time
        return result

    def get_stats(self) -> dict:
        return self._stats
