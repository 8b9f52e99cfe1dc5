from .base import CheckReport, ComparisonResult, Document, SimilarityBand
from .normalizer import normalize, is_stopword
from .tokenizer import DocumentTokenizer, tokenize, preprocess
from .shingles import ShingleSet, HashTableStats, build, hash_table_stats
from .similarity import intersection_count, union_count, jaccard, cosine

__all__ = [
    "CheckReport",
    "ComparisonResult",
    "Document",
    "SimilarityBand",
    "normalize",
    "is_stopword",
    "DocumentTokenizer",
    "tokenize",
    "preprocess",
    "ShingleSet",
    "HashTableStats",
    "build",
    "hash_table_stats",
    "intersection_count",
    "union_count",
    "jaccard",
    "cosine",
]
