import logging
from pathlib import Path
from typing import Set, Union

import chardet

logger = logging.getLogger(__name__)

DEFAULT_STOPWORDS_PATH = Path(__file__).parent / "fdata" / "stopwords.txt"

MIN_ENCODING_CONFIDENCE = 0.5


def load_stopwords(path: Union[str, Path]) -> Set[str]:
    """
    Load a whitespace-delimited stopword list, lowercasing every entry.

    A missing or unreadable file is logged and yields an empty set.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not open stopwords file {path}: {e}")
        return set()

    stopwords = {word.lower() for word in text.split()}
    logger.info(f"Loaded {len(stopwords)} stopwords from {path}")
    return stopwords


def load_default_stopwords() -> Set[str]:
    return load_stopwords(DEFAULT_STOPWORDS_PATH)


def decode_bytes(raw: bytes) -> str:
    """
    Decode document bytes as UTF-8, falling back to chardet detection.

    Undecodable bytes are replaced rather than raising.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    encoding = detected.get("encoding")
    if encoding and (detected.get("confidence") or 0) >= MIN_ENCODING_CONFIDENCE:
        logger.info(f"Detected encoding {encoding} ({detected['confidence']:.2f})")
        return raw.decode(encoding, errors="replace")

    logger.warning("Could not detect encoding, decoding as UTF-8 with replacement")
    return raw.decode("utf-8", errors="replace")


def read_document(path: Union[str, Path]) -> str:
    """Read a document's full contents. OSError propagates to the caller."""
    path = Path(path)
    text = decode_bytes(path.read_bytes())
    logger.debug(f"Read {len(text)} characters from {path}")
    return text
