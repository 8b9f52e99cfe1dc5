import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_K = 3
DEFAULT_BUCKET_COUNT = 10007
DEFAULT_MAX_TOKENS = 10000


@dataclass
class CheckerConfig:
    """
    Runtime settings for a plagiarism check.

    k:             shingle length in tokens
    bucket_count:  bucket count used by the hash-table diagnostics (prime)
    max_tokens:    tokenizer capacity guard; None disables the check
    strict:        propagate InvalidK for k longer than a document instead of
                   scoring it 0.0 (empty documents always score 0.0)
    stopwords_path: stopword file; None uses the bundled English list
    output_dir:    where reports are written
    """

    k: int = DEFAULT_K
    bucket_count: int = DEFAULT_BUCKET_COUNT
    max_tokens: Optional[int] = DEFAULT_MAX_TOKENS
    strict: bool = True
    stopwords_path: Optional[str] = None
    output_dir: str = "output"

    def __post_init__(self):
        if not isinstance(self.k, int) or self.k <= 0:
            raise ValueError(f"k must be a positive integer, got {self.k!r}")
        if not isinstance(self.bucket_count, int) or self.bucket_count <= 0:
            raise ValueError(
                f"bucket_count must be a positive integer, got {self.bucket_count!r}"
            )
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckerConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[Union[str, Path]] = None) -> CheckerConfig:
    """
    Load a CheckerConfig from a YAML file.

    A missing path returns the defaults. The file must contain a mapping;
    an empty file is treated as an empty mapping.
    """
    if path is None:
        return CheckerConfig()

    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = CheckerConfig.from_dict(data)
    logger.debug(f"Loaded config from {path}: {config}")
    return config
