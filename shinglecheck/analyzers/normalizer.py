import re
import string
from typing import AbstractSet

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Anything that is not a lowercase ASCII letter or an apostrophe.
_DISALLOWED_RE = re.compile(r"[^a-z']")


def normalize(token: str) -> str:
    """
    Lowercase ASCII letters and drop every character that is not a letter
    or an apostrophe, keeping the relative order of what remains.

    Returns an empty string when nothing survives; callers discard those.
    Non-ASCII letters are removed rather than case-folded.
    """
    return _DISALLOWED_RE.sub("", token.translate(_ASCII_LOWER))


def is_stopword(token: str, stopwords: AbstractSet[str]) -> bool:
    """Exact match of the lowercased token against a preloaded stopword set."""
    return token.translate(_ASCII_LOWER) in stopwords
