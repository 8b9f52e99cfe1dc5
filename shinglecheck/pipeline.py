import logging
from pathlib import Path
from typing import List, Optional, Union

from .analyzers.base import CheckReport, Document
from .analyzers.tokenizer import DocumentTokenizer
from .checker import PlagiarismChecker
from .config import CheckerConfig
from .errors import CapacityExceeded, NoTargetDocument
from .loaders import load_stopwords, read_document
from .reports import export_results, save_json_report

logger = logging.getLogger(__name__)


class CheckPipeline:
    """
    File-backed plagiarism check.

    Stages:
      1. Load     - stopwords and document text from disk
      2. Tokenize - raw text to Documents via DocumentTokenizer
      3. Compare  - target against references via PlagiarismChecker
      4. Output   - JSON and plain-text reports in output_dir

    Usage:
        p = CheckPipeline(CheckerConfig(k=3), output_dir="output")
        report = p.run("target.txt", ["ref1.txt", "ref2.txt"])

    Reference files that cannot be read, or that exceed max_tokens, are
    logged and skipped. Such a target raises NoTargetDocument.
    """

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        output_dir: Optional[Union[str, Path]] = None,
        save_reports: bool = True,
    ):
        self.config = config or CheckerConfig()
        self.output_dir = Path(output_dir or self.config.output_dir)
        self.save_reports = save_reports

        stopwords = (
            load_stopwords(self.config.stopwords_path)
            if self.config.stopwords_path
            else None
        )
        self._tokenizer = DocumentTokenizer(
            stopwords=stopwords, max_tokens=self.config.max_tokens
        )

    def load(self, path: Union[str, Path]) -> Optional[Document]:
        """Read and tokenize one file. None if unreadable or over max_tokens."""
        try:
            text = read_document(path)
        except OSError as e:
            logger.error(f"Could not open file {path}: {e}")
            return None
        try:
            return self._tokenizer.tokenize(str(path), text)
        except CapacityExceeded as e:
            logger.error(f"Skipping {path}: {e}")
            return None

    def run(
        self,
        target_path: Union[str, Path],
        reference_paths: List[Union[str, Path]],
        k: Optional[int] = None,
    ) -> CheckReport:
        k = self.config.k if k is None else k

        target = self.load(target_path)
        if target is None:
            raise NoTargetDocument()

        checker = PlagiarismChecker(target=target, strict=self.config.strict)
        for path in reference_paths:
            doc = self.load(path)
            if doc is not None:
                checker.add_reference(doc)

        report = checker.compare(k)

        if self.save_reports:
            self._save(report)
        return report

    def _save(self, report: CheckReport) -> None:
        stem = Path(report.target).stem
        save_json_report(report, self.output_dir / f"{stem}_report.json")
        export_results(report, self.output_dir / f"{stem}_report.txt")
