import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .analyzers.base import CheckReport, ComparisonResult, Document, SimilarityBand
from .analyzers.shingles import ShingleSet
from .analyzers.similarity import cosine, jaccard
from .config import DEFAULT_K
from .errors import EmptyInput, InvalidK, NoReferenceDocuments, NoTargetDocument

logger = logging.getLogger(__name__)

JACCARD_WEIGHT = 0.6
COSINE_WEIGHT = 0.4

# (lower bound, band), checked top-down. Pair and overall scales differ.
PAIR_THRESHOLDS: Tuple[Tuple[float, SimilarityBand], ...] = (
    (0.7, SimilarityBand.HIGH),
    (0.4, SimilarityBand.MODERATE),
    (0.1, SimilarityBand.LOW),
)
OVERALL_THRESHOLDS: Tuple[Tuple[float, SimilarityBand], ...] = (
    (0.6, SimilarityBand.HIGH),
    (0.3, SimilarityBand.MODERATE),
    (0.1, SimilarityBand.LOW),
)

# Lower bounds are inclusive; a score within this distance counts as reaching it.
_BOUNDARY_TOLERANCE = 1e-9


def _classify(
    score: float, thresholds: Sequence[Tuple[float, SimilarityBand]]
) -> SimilarityBand:
    for lower, band in thresholds:
        if score + _BOUNDARY_TOLERANCE >= lower:
            return band
    return SimilarityBand.MINIMAL


def classify_pair(score: float) -> SimilarityBand:
    """Band for one target/reference combined score (0.7 / 0.4 / 0.1)."""
    return _classify(score, PAIR_THRESHOLDS)


def classify_overall(score: float) -> SimilarityBand:
    """Band for the mean combined score (0.6 / 0.3 / 0.1)."""
    return _classify(score, OVERALL_THRESHOLDS)


def combined_score(jaccard_score: float, cosine_score: float) -> float:
    return JACCARD_WEIGHT * jaccard_score + COSINE_WEIGHT * cosine_score


def compare_sets(
    reference: str, target_set: ShingleSet, reference_set: ShingleSet
) -> ComparisonResult:
    """Score one reference shingle set against the target's."""
    j = jaccard(target_set, reference_set)
    c = cosine(target_set, reference_set)
    combined = combined_score(j, c)
    return ComparisonResult(
        reference=reference,
        jaccard=j,
        cosine=c,
        combined=combined,
        band=classify_pair(combined),
    )


class PlagiarismChecker:
    """
    Compares a target document against a list of reference documents.

    Documents are held by reference and belong to the caller. The only
    mutation the checker makes is rebuilding a document's own shingles when
    they were built for a different k.

    A document with no tokens always gets an empty shingle set and scores 0.0.
    With strict=True (default) any other InvalidK (k larger than a document)
    propagates. With strict=False that document is also given an empty
    shingle set for k.
    """

    def __init__(
        self,
        target: Optional[Document] = None,
        references: Optional[Iterable[Document]] = None,
        strict: bool = True,
    ):
        self.target = target
        self._references: List[Document] = list(references or [])
        self.strict = strict
        self.last_report: Optional[CheckReport] = None

    @property
    def references(self) -> Tuple[Document, ...]:
        return tuple(self._references)

    def set_target(self, doc: Document) -> None:
        self.target = doc

    def add_reference(self, doc: Document) -> None:
        self._references.append(doc)

    def _ensure_shingles(self, doc: Document, k: int) -> ShingleSet:
        try:
            return doc.ensure_shingles(k)
        except EmptyInput as e:
            logger.warning(f"{doc.name}: {e}; scoring as empty")
            return doc.clear_shingles(k)
        except InvalidK as e:
            if self.strict:
                raise
            logger.warning(f"{doc.name}: {e}; scoring as empty")
            return doc.clear_shingles(k)

    def compare(self, k: int = DEFAULT_K) -> CheckReport:
        """
        Score the target against every reference and aggregate.

        Raises NoTargetDocument, NoReferenceDocuments, or InvalidK (strict
        mode). Nothing is recorded in last_report when a comparison fails.
        """
        if self.target is None:
            raise NoTargetDocument()
        if not self._references:
            raise NoReferenceDocuments()

        target_set = self._ensure_shingles(self.target, k)
        reference_sets = [
            (doc, self._ensure_shingles(doc, k)) for doc in self._references
        ]

        logger.info(
            f"Comparing {self.target.name} against "
            f"{len(reference_sets)} reference(s) with k={k}"
        )

        comparisons = []
        for doc, reference_set in reference_sets:
            result = compare_sets(doc.name, target_set, reference_set)
            logger.debug(
                f"{doc.name}: jaccard={result.jaccard:.4f} cosine={result.cosine:.4f} "
                f"combined={result.combined:.4f} ({result.band.value})"
            )
            comparisons.append(result)

        overall = sum(c.combined for c in comparisons) / len(comparisons)
        report = CheckReport(
            target=self.target.name,
            k=k,
            comparisons=comparisons,
            overall=overall,
            overall_band=classify_overall(overall),
        )
        self.last_report = report
        logger.info(
            f"Overall similarity {report.overall_percent:.2f}% "
            f"({report.overall_band.value})"
        )
        return report
