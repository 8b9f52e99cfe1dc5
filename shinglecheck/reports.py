import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .analyzers.base import CheckReport, Document
from .analyzers.shingles import bucket_chains
from .config import DEFAULT_BUCKET_COUNT

logger = logging.getLogger(__name__)


def export_tokens(doc: Document, path: Union[str, Path]) -> Path:
    """Write the document's preprocessed tokens, one per line."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{t}\n" for t in doc.tokens), encoding="utf-8")
    logger.info(f"Tokens exported to {path}")
    return path


def export_kgrams(
    doc: Document,
    path: Union[str, Path],
    bucket_count: int = DEFAULT_BUCKET_COUNT,
) -> Path:
    """
    Write the document's k-grams: a three-line header (k, total, unique)
    followed by one "<kgram> (count: N)" line per distinct k-gram.

    K-grams are listed bucket by bucket in ascending djb2 index, each chain
    newest-first, matching a walk over a chained table of `bucket_count`.
    """
    if doc.shingle_set is None:
        raise ValueError(f"{doc.name} has no k-grams; generate shingles first")

    shingle_set = doc.shingle_set
    lines = [
        f"K-value: {shingle_set.k}",
        f"Total k-grams: {shingle_set.total_occurrences()}",
        f"Unique k-grams: {shingle_set.count}",
        "",
    ]
    chains = bucket_chains(shingle_set, bucket_count)
    for index in sorted(chains):
        lines.extend(
            f"{kgram} (count: {shingle_set.occurrences(kgram)})"
            for kgram in chains[index]
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"K-grams exported to {path}")
    return path


def format_text_report(report: CheckReport, analysis_date: Optional[str] = None) -> str:
    """Render a CheckReport as the plain-text plagiarism report."""
    analysis_date = analysis_date or datetime.now().strftime("%Y-%m-%d")
    lines = [
        "PLAGIARISM DETECTION REPORT",
        "===========================",
        "",
        f"Analysis Date: {analysis_date}",
        f"Target Document: {report.target}",
        f"K-value used: {report.k}",
        "",
        "REFERENCE DOCUMENTS:",
    ]
    for i, result in enumerate(report.comparisons, start=1):
        lines.append(f"{i}. {result.reference}")

    lines += ["", "DETAILED RESULTS:", "-----------------"]
    for i, result in enumerate(report.comparisons, start=1):
        lines += [
            f"Reference {i}: {result.reference}",
            f"Jaccard Similarity: {result.jaccard_percent:.2f}%",
            f"Cosine Similarity: {result.cosine_percent:.2f}%",
            f"Similarity Score: {result.combined_percent:.2f}%",
            f"Status: {result.band.value} similarity",
            "",
        ]

    lines += [
        f"OVERALL PLAGIARISM PERCENTAGE: {report.overall_percent:.2f}%",
        f"VERDICT: {report.overall_band.value.upper()} SIMILARITY",
        report.verdict,
    ]
    return "\n".join(lines) + "\n"


def export_results(report: CheckReport, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_text_report(report), encoding="utf-8")
    logger.info(f"Detailed report exported to {path}")
    return path


def save_json_report(report: CheckReport, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(report.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    logger.info(f"Saved report to {path}")
    return path


def load_json_report(path: Union[str, Path]) -> CheckReport:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return CheckReport.from_dict(data)
