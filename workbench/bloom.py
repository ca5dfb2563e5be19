"""A standard Bloom filter using double hashing."""

from __future__ import annotations

import hashlib
import math
import os
from typing import Hashable, Iterator

_MASK64 = (1 << 64) - 1


def bitmap_size(items_count: int, fp_rate: float) -> int:
    """Optimal number of bits for ``items_count`` items at ``fp_rate``."""
    ln2_2 = math.log(2) * math.log(2)
    return math.ceil((-1.0 * items_count * math.log(fp_rate)) / ln2_2)


def optimal_k(fp_rate: float) -> int:
    """Optimal number of hash functions for ``fp_rate``."""
    return math.ceil((-1.0 * math.log(fp_rate)) / math.log(2))


def _item_bytes(item: Hashable) -> bytes:
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    return repr(item).encode("utf-8")


class BloomFilter:
    """Probabilistic set: no false negatives, bounded false positives."""

    def __init__(self, items_count: int, fp_rate: float):
        if not 0.0 < fp_rate < 1.0:
            raise ValueError("fp_rate must be between 0 and 1")
        size = bitmap_size(items_count, fp_rate)
        if size <= 0:
            raise ValueError("items_count must be positive")
        self.size = size
        self.hash_count = optimal_k(fp_rate)
        self._bits = bytearray((size + 7) // 8)
        self._keys = (os.urandom(16), os.urandom(16))

    def _hashes(self, item: Hashable) -> tuple[int, int]:
        data = _item_bytes(item)
        first, second = (
            int.from_bytes(hashlib.blake2b(data, digest_size=8, key=key).digest(), "little")
            for key in self._keys
        )
        return first, second

    def _indexes(self, item: Hashable) -> Iterator[int]:
        h1, h2 = self._hashes(item)
        for k in range(self.hash_count):
            yield ((h1 + k * h2) & _MASK64) % self.size

    def add(self, item: Hashable) -> None:
        """Record ``item`` in the filter."""
        for index in self._indexes(item):
            self._bits[index >> 3] |= 1 << (index & 7)

    def __contains__(self, item: Hashable) -> bool:
        return all(self._bits[i >> 3] & (1 << (i & 7)) for i in self._indexes(item))