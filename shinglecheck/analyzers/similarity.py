import logging
import math
from typing import Optional

from .shingles import ShingleSet

logger = logging.getLogger(__name__)


def _size(shingles: Optional[ShingleSet]) -> int:
    return shingles.count if shingles is not None else 0


def intersection_count(a: Optional[ShingleSet], b: Optional[ShingleSet]) -> int:
    """
    Number of distinct shingles of `a` that are also present in `b`.

    Walks the keys of `a` and probes `b`; occurrence counts are ignored, so the
    result is the same with the arguments swapped. A missing set counts as empty.
    """
    if a is None or b is None:
        return 0
    return sum(1 for shingle in a if b.contains(shingle))


def union_count(a: Optional[ShingleSet], b: Optional[ShingleSet]) -> int:
    """|A| + |B| - |A ∩ B| over distinct keys."""
    return _size(a) + _size(b) - intersection_count(a, b)


def jaccard(a: Optional[ShingleSet], b: Optional[ShingleSet]) -> float:
    """Intersection over union of distinct shingles; 0.0 if either set is empty."""
    if _size(a) == 0 or _size(b) == 0:
        return 0.0

    union = union_count(a, b)
    if union == 0:
        return 0.0
    return intersection_count(a, b) / union


def cosine(a: Optional[ShingleSet], b: Optional[ShingleSet]) -> float:
    """
    Set-cardinality cosine: |A ∩ B| / (sqrt(|A|) * sqrt(|B|)).

    This treats each document as a binary vector over distinct shingles, so
    it is an approximation of term-frequency cosine similarity, not the real
    thing. Occurrence counts do not contribute. 0.0 if either set is empty.

    The denominator is computed as sqrt(|A| * |B|) behind a zero-magnitude
    guard, so identical sets score exactly 1.0.
    """
    if _size(a) == 0 or _size(b) == 0:
        return 0.0

    if _size(a) * _size(b) == 0:
        return 0.0
    return intersection_count(a, b) / math.sqrt(_size(a) * _size(b))
