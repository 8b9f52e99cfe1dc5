from .analyzers import (
    CheckReport,
    ComparisonResult,
    Document,
    DocumentTokenizer,
    ShingleSet,
    SimilarityBand,
)
from .checker import PlagiarismChecker, classify_overall, classify_pair
from .config import CheckerConfig, load_config
from .errors import (
    CapacityExceeded,
    EmptyInput,
    InvalidK,
    NoReferenceDocuments,
    NoTargetDocument,
    ShingleCheckError,
)

__version__ = "0.1.0"

__all__ = [
    "CheckReport",
    "ComparisonResult",
    "Document",
    "DocumentTokenizer",
    "ShingleSet",
    "SimilarityBand",
    "PlagiarismChecker",
    "classify_pair",
    "classify_overall",
    "CheckerConfig",
    "load_config",
    "ShingleCheckError",
    "InvalidK",
    "EmptyInput",
    "NoTargetDocument",
    "NoReferenceDocuments",
    "CapacityExceeded",
]
