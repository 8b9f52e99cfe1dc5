import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..config import DEFAULT_BUCKET_COUNT
from ..errors import EmptyInput, InvalidK

logger = logging.getLogger(__name__)

_DJB2_SEED = 5381
_MASK_64 = (1 << 64) - 1


def djb2_hash(text: str, table_size: int = DEFAULT_BUCKET_COUNT) -> int:
    """
    djb2 string hash (hash * 33 + c) reduced to a bucket index.

    Works on the UTF-8 bytes with 64-bit wraparound, so equal strings land in
    the same bucket in every run regardless of PYTHONHASHSEED.
    """
    if table_size <= 0:
        raise ValueError(f"table_size must be positive, got {table_size}")
    h = _DJB2_SEED
    for byte in text.encode("utf-8"):
        h = ((h << 5) + h + byte) & _MASK_64
    return h % table_size


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True


def validate_k(k: int, token_count: int, document: Optional[str] = None) -> None:
    """Raise InvalidK unless 1 <= k <= token_count."""
    if k <= 0:
        raise InvalidK(k, token_count)
    if token_count == 0:
        raise EmptyInput(k, document)
    if k > token_count:
        raise InvalidK(k, token_count)


def generate_shingles(tokens: Sequence[str], k: int) -> List[str]:
    """
    Slide a window of k tokens over the sequence and join each window with
    single spaces. Yields exactly len(tokens) - k + 1 shingles, in order.
    """
    validate_k(k, len(tokens))
    return [" ".join(tokens[i : i + k]) for i in range(len(tokens) - k + 1)]


class ShingleSet:
    """
    Multiset of shingles keyed by their joined string.

    Each key maps to the number of sliding-window positions that produced it.
    `count` is the number of distinct keys; `total_occurrences()` is the sum of
    the per-key counts. Similarity metrics only look at key presence.
    """

    def __init__(self, k: int = 0):
        self.k = k
        self._counts: Dict[str, int] = {}

    @classmethod
    def from_shingles(cls, shingles: Iterable[str], k: int = 0) -> "ShingleSet":
        result = cls(k)
        for shingle in shingles:
            result.insert(shingle)
        return result

    def insert(self, shingle: str) -> int:
        """Add one occurrence of `shingle`; return its updated count."""
        count = self._counts.get(shingle, 0) + 1
        self._counts[shingle] = count
        return count

    def contains(self, shingle: str) -> bool:
        return shingle in self._counts

    __contains__ = contains

    def occurrences(self, shingle: str) -> int:
        """Occurrence count of `shingle`, 0 if it was never inserted."""
        return self._counts.get(shingle, 0)

    @property
    def count(self) -> int:
        return len(self._counts)

    def total_occurrences(self) -> int:
        return sum(self._counts.values())

    def is_empty(self) -> bool:
        return not self._counts

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._counts.items())

    def to_dict(self) -> Dict[str, int]:
        return dict(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShingleSet):
            return NotImplemented
        return self.k == other.k and self._counts == other._counts

    def __repr__(self) -> str:
        return (
            f"ShingleSet(k={self.k}, unique={self.count}, "
            f"total={self.total_occurrences()})"
        )


def build(tokens: Sequence[str], k: int) -> ShingleSet:
    """Build the shingle multiset of `tokens` for window size `k`."""
    return ShingleSet.from_shingles(generate_shingles(tokens, k), k)


@dataclass
class HashTableStats:
    size: int
    unique_kgrams: int
    load_factor: float
    empty_buckets: int
    max_chain_length: int

    def to_dict(self) -> Dict[str, float]:
        return {
            "size": self.size,
            "unique_kgrams": self.unique_kgrams,
            "load_factor": self.load_factor,
            "empty_buckets": self.empty_buckets,
            "max_chain_length": self.max_chain_length,
        }


def bucket_chains(
    shingle_set: ShingleSet, bucket_count: int = DEFAULT_BUCKET_COUNT
) -> Dict[int, List[str]]:
    """
    Map each occupied bucket index to its collision chain.

    Chains list keys newest-first, the order a head-inserting chained table
    would hold them.
    """
    chains: Dict[int, List[str]] = {}
    for shingle in shingle_set:
        chains.setdefault(djb2_hash(shingle, bucket_count), []).insert(0, shingle)
    return chains


def hash_table_stats(
    shingle_set: ShingleSet, bucket_count: int = DEFAULT_BUCKET_COUNT
) -> HashTableStats:
    """Bucket distribution of a shingle set under djb2 with `bucket_count` buckets."""
    if bucket_count <= 0:
        raise ValueError(f"bucket_count must be positive, got {bucket_count}")
    if not _is_prime(bucket_count):
        logger.warning(
            f"bucket_count {bucket_count} is not prime; distribution may suffer"
        )

    chain_lengths = Counter(djb2_hash(s, bucket_count) for s in shingle_set)
    unique = shingle_set.count
    return HashTableStats(
        size=bucket_count,
        unique_kgrams=unique,
        load_factor=unique / bucket_count,
        empty_buckets=bucket_count - len(chain_lengths),
        max_chain_length=max(chain_lengths.values(), default=0),
    )
