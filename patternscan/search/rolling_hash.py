from typing import Sequence, Tuple, Union
from patternscan.search.exceptions import InvalidInputError, IndexOutOfRangeError

BASE = 31
MODULUS = 1_000_000_007

Source = Union[str, bytes, bytearray, memoryview]


def char_values(source: Source) -> Sequence[int]:
    """Return the raw ordinal of every element of `source`.

    Strings map through `ord`; bytes-like objects already iterate as ints.
    No alphabet remapping or normalisation takes place.
    """
    if isinstance(source, str):
        return [ord(c) for c in source]
    if isinstance(source, memoryview):
        return source.cast("B").tolist()
    return source


class RollingHasher:
    """
    Polynomial Rolling Hash over a Single Sequence

    Precomputes the prefix hashes and base powers of `source` so that the hash
    of any contiguous substring can be derived in constant time. The object is
    immutable once built; build a new one if the source changes.

    Args:
        source (str | bytes): Non-empty sequence to hash.
        base (int, optional): Polynomial base. Defaults to 31.
        modulus (int, optional): Prime modulus. Defaults to 1_000_000_007.

    Attributes:
        source: The sequence the hasher was built over.
        prefix_hash (Tuple[int, ...]): prefix_hash[i] is the hash of source[0..i].
        power (Tuple[int, ...]): power[i] is base**i mod modulus.

    Raises:
        InvalidInputError: If `source` is empty.

    Example:
        >>> hasher = RollingHasher("abcab")
        >>> hasher.substring_hash(0, 1) == hasher.substring_hash(3, 4)
        True
    """
    __slots__ = ("source", "base", "modulus", "prefix_hash", "power")

    def __init__(self, source: Source, base: int = BASE, modulus: int = MODULUS) -> None:
        if len(source) == 0:
            raise InvalidInputError("Cannot build a rolling hash over an empty sequence")
        values = char_values(source)
        n = len(values)
        prefix_hash = [0] * n
        power = [0] * n

        prefix_hash[0] = values[0] % modulus
        power[0] = 1
        for i in range(1, n):
            prefix_hash[i] = (prefix_hash[i - 1] * base + values[i]) % modulus
            power[i] = (power[i - 1] * base) % modulus

        self.source = source
        self.base = base
        self.modulus = modulus
        self.prefix_hash: Tuple[int, ...] = tuple(prefix_hash)
        self.power: Tuple[int, ...] = tuple(power)

    def __len__(self) -> int:
        return len(self.prefix_hash)

    def substring_hash(self, left: int, right: int) -> int:
        """
        Hash of source[left..right], both ends inclusive, in O(1).

        Args:
            left (int): First index of the substring.
            right (int): Last index of the substring.

        Returns:
            int: The substring hash, in [0, modulus).

        Raises:
            IndexOutOfRangeError: Unless 0 <= left <= right < len(source).
        """
        n = len(self.prefix_hash)
        if not (0 <= left <= right < n):
            raise IndexOutOfRangeError(
                f"Invalid substring range [{left}, {right}] for a sequence of length {n}"
            )
        h = self.prefix_hash[right]
        if left > 0:
            h = (h - self.prefix_hash[left - 1] * self.power[right - left + 1]) % self.modulus
        return h

    def full_hash(self) -> int:
        return self.prefix_hash[-1]

    def __repr__(self) -> str:
        return f"RollingHasher(length={len(self)}, base={self.base}, modulus={self.modulus})"
