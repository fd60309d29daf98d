import time
from typing import List, Tuple, Union
import numpy as np
from patternscan.search.base import SearchAlgorithm


def build_suffix_array(data: bytes) -> np.ndarray:
    """
    Suffix array of `data` by prefix doubling.

    Each round sorts suffixes by the pair (rank of the first k bytes, rank of the
    next k bytes) and re-ranks them; it stops once every rank is distinct.

    Returns:
        np.ndarray: int64 array of suffix start offsets in lexicographic order.
    """
    n = len(data)
    if n == 0:
        return np.empty(0, dtype=np.int64)

    rank = np.frombuffer(data, dtype=np.uint8).astype(np.int64)
    k = 1
    while True:
        second = np.full(n, -1, dtype=np.int64)
        if k < n:
            second[:n - k] = rank[k:]
        sa = np.lexsort((second, rank))

        sorted_rank = rank[sa]
        sorted_second = second[sa]
        changed = (sorted_rank[1:] != sorted_rank[:-1]) | (sorted_second[1:] != sorted_second[:-1])
        new_rank = np.empty(n, dtype=np.int64)
        new_rank[sa] = np.concatenate(([0], np.cumsum(changed)))
        rank = new_rank

        if rank[sa[-1]] == n - 1:
            return sa.astype(np.int64)
        k <<= 1


class SuffixArraySearch(SearchAlgorithm):
    """
    Suffix Array Search.

    Builds a suffix array over the whole file once per load, then answers each
    query with two binary searches bounding the block of suffixes that start with
    the query. The array lives in memory only and is never written to disk.

    Attributes:
        file_path (str): Path to the file to be searched.
        reread_on_query (bool): Whether to reread the file for each query.
        _suffix_array (np.ndarray): Sorted suffix offsets of the file content.
        _stats (dict): Comparisons, matches and timings of the last operations.
    """

    def __init__(self, file_path: str, reread_on_query: bool = False) -> None:
        super().__init__(file_path, reread_on_query)
        self._suffix_array = np.empty(0, dtype=np.int64)
        self._stats = {
            "comparisons": 0,
            "matches": 0,
            "time_elapsed": 0.0,
            "construction_time": 0.0,
        }
        if not self.reread_on_query:
            self.load()

    def _build_index(self) -> None:
        start_time = time.time()
        self._suffix_array = build_suffix_array(self._text)
        self._stats["construction_time"] = time.time() - start_time

    def _bound(self, pattern: bytes, strict: bool) -> int:
        """
        First suffix rank whose m-byte prefix is >= pattern (> pattern if strict).
        """
        text = self._text
        sa = self._suffix_array
        m = len(pattern)
        left, right = 0, len(sa)
        while left < right:
            mid = (left + right) // 2
            self._stats["comparisons"] += 1
            start = int(sa[mid])
            prefix = text[start:start + m]
            if prefix < pattern or (strict and prefix == pattern):
                left = mid + 1
            else:
                right = mid
        return left

    def _range(self, query: Union[str, bytes]) -> Tuple[int, int]:
        pattern = self._prepare(query)
        self._stats["comparisons"] = 0
        low = self._bound(pattern, strict=False)
        high = self._bound(pattern, strict=True)
        self._stats["matches"] = high - low
        return low, high

    def count(self, query: Union[str, bytes]) -> int:
        """
        Count the occurrences of `query` without listing them.

        Args:
            query (str | bytes): The pattern to count.

        Returns:
            int: Number of occurrences.
        """
        start_time = time.time()
        low, high = self._range(query)
        self._stats["time_elapsed"] = time.time() - start_time
        return high - low

    def search(self, query: Union[str, bytes]) -> List[int]:
        start_time = time.time()
        low, high = self._range(query)
        result = sorted(int(offset) for offset in self._suffix_array[low:high])
        self._stats["time_elapsed"] = time.time() - start_time
        return result

    def size_in_bytes(self) -> int:
        return len(self._text) + int(self._suffix_array.nbytes)

    def get_stats(self) -> dict:
        return self._stats
