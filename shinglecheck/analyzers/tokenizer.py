import re
import logging
from typing import AbstractSet, Iterable, List, Optional, Set

from ..config import DEFAULT_MAX_TOKENS
from ..errors import CapacityExceeded
from .base import Document
from .normalizer import normalize, is_stopword

logger = logging.getLogger(__name__)

# Field separators: space, tab, newline, carriage return.
_WHITESPACE_RE = re.compile(r"[ \t\n\r]+")


def tokenize(text: str, max_tokens: Optional[int] = DEFAULT_MAX_TOKENS) -> List[str]:
    """
    Split raw text on runs of whitespace, dropping empty fields.

    Raises CapacityExceeded when more than `max_tokens` tokens are produced;
    pass max_tokens=None for no limit. Input is never truncated.
    """
    tokens = [t for t in _WHITESPACE_RE.split(text) if t]
    if max_tokens is not None and len(tokens) > max_tokens:
        raise CapacityExceeded("tokens", max_tokens, len(tokens))
    return tokens


def preprocess(tokens: Iterable[str], stopwords: AbstractSet[str]) -> List[str]:
    """
    Normalize every token, then drop the ones that end up empty or are
    stopwords. Survivors keep their original order.

    Idempotent: normalized non-stopword tokens are fixed points.
    """
    result = []
    for token in tokens:
        cleaned = normalize(token)
        if not cleaned or is_stopword(cleaned, stopwords):
            continue
        result.append(cleaned)
    return result


class DocumentTokenizer:
    """
    Turns raw document text into a Document of preprocessed tokens.

    Stopwords default to the bundled English list in fdata/stopwords.txt;
    pass `stopwords` to replace it or `extra_stopwords` to extend it.
    """

    def __init__(
        self,
        stopwords: Optional[AbstractSet[str]] = None,
        extra_stopwords: Optional[Iterable[str]] = None,
        max_tokens: Optional[int] = DEFAULT_MAX_TOKENS,
    ):
        if stopwords is None:
            from ..loaders import load_default_stopwords

            stopwords = load_default_stopwords()
        self.stopwords: Set[str] = {w.lower() for w in stopwords}
        if extra_stopwords:
            self.stopwords.update(w.lower() for w in extra_stopwords)
        self.max_tokens = max_tokens

    def tokenize(self, name: str, text: str) -> Document:
        """
        Tokenize and preprocess `text` into a new Document named `name`.

        An empty or blank text yields a Document with no tokens.
        """
        doc = Document(name=name, raw_text=text)
        if not text or not text.strip():
            logger.warning(f"{name}: empty document")
            return doc

        raw_tokens = tokenize(text, self.max_tokens)
        doc.set_tokens(preprocess(raw_tokens, self.stopwords))
        logger.debug(
            f"{name}: read {len(raw_tokens)} words, "
            f"{len(doc.tokens)} tokens remaining after preprocessing"
        )
        return doc

    def retokenize(self, doc: Document, text: str) -> Document:
        """Replace the tokens of an existing document; its shingles are dropped."""
        fresh = self.tokenize(doc.name, text)
        doc.raw_text = fresh.raw_text
        doc.set_tokens(fresh.tokens)
        return doc
