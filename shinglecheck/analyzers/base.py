import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .shingles import ShingleSet, generate_shingles, validate_k

logger = logging.getLogger(__name__)


class SimilarityBand(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"
    MINIMAL = "Minimal"


_VERDICTS = {
    SimilarityBand.HIGH: "This document shows significant similarity with reference materials.",
    SimilarityBand.MODERATE: "Review recommended for potential plagiarism issues.",
    SimilarityBand.LOW: "Document appears to be mostly original.",
    SimilarityBand.MINIMAL: "Document shows high originality.",
}


@dataclass
class Document:
    """
    A named document: its preprocessed tokens and, once requested, the
    shingles for the most recent k.

    A document holds at most one ShingleSet. Generating shingles for another k
    replaces both `kgrams` and `shingle_set`; replacing the tokens drops them.
    """

    name: str
    raw_text: str = ""
    tokens: List[str] = field(default_factory=list)
    kgrams: List[str] = field(default_factory=list)
    shingle_set: Optional[ShingleSet] = None

    @property
    def k(self) -> Optional[int]:
        return self.shingle_set.k if self.shingle_set is not None else None

    def set_tokens(self, tokens: Sequence[str]) -> None:
        self.tokens = list(tokens)
        self.kgrams = []
        self.shingle_set = None

    def generate_shingles(self, k: int) -> ShingleSet:
        """
        Rebuild the shingles for `k`.

        On InvalidK the previous shingles are left as they were.
        """
        validate_k(k, len(self.tokens), self.name)
        kgrams = generate_shingles(self.tokens, k)
        self.kgrams = kgrams
        self.shingle_set = ShingleSet.from_shingles(kgrams, k)
        logger.debug(
            f"{self.name}: generated {len(kgrams)} k-grams with k={k}, "
            f"{self.shingle_set.count} unique"
        )
        return self.shingle_set

    def ensure_shingles(self, k: int) -> ShingleSet:
        """Return the cached ShingleSet for `k`, building it if needed."""
        if self.shingle_set is None or self.shingle_set.k != k:
            return self.generate_shingles(k)
        return self.shingle_set

    def clear_shingles(self, k: int) -> ShingleSet:
        """Replace the shingles with an empty set tagged with `k`."""
        self.kgrams = []
        self.shingle_set = ShingleSet(k)
        return self.shingle_set


@dataclass
class ComparisonResult:
    reference: str
    jaccard: float
    cosine: float
    combined: float
    band: SimilarityBand

    @property
    def jaccard_percent(self) -> float:
        return self.jaccard * 100

    @property
    def cosine_percent(self) -> float:
        return self.cosine * 100

    @property
    def combined_percent(self) -> float:
        return self.combined * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference,
            "jaccard": self.jaccard,
            "cosine": self.cosine,
            "combined": self.combined,
            "jaccard_percent": self.jaccard_percent,
            "cosine_percent": self.cosine_percent,
            "combined_percent": self.combined_percent,
            "band": self.band.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComparisonResult":
        return cls(
            reference=data["reference"],
            jaccard=float(data["jaccard"]),
            cosine=float(data["cosine"]),
            combined=float(data["combined"]),
            band=SimilarityBand(data["band"]),
        )


@dataclass
class CheckReport:
    """Outcome of comparing one target against every reference document."""

    target: str
    k: int
    comparisons: List[ComparisonResult]
    overall: float
    overall_band: SimilarityBand

    @property
    def overall_percent(self) -> float:
        return self.overall * 100

    @property
    def verdict(self) -> str:
        return _VERDICTS[self.overall_band]

    @property
    def reference_count(self) -> int:
        return len(self.comparisons)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "k": self.k,
            "reference_count": self.reference_count,
            "comparisons": [c.to_dict() for c in self.comparisons],
            "overall": self.overall,
            "overall_percent": self.overall_percent,
            "overall_band": self.overall_band.value,
            "verdict": self.verdict,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckReport":
        return cls(
            target=data["target"],
            k=int(data["k"]),
            comparisons=[ComparisonResult.from_dict(c) for c in data["comparisons"]],
            overall=float(data["overall"]),
            overall_band=SimilarityBand(data["overall_band"]),
        )
