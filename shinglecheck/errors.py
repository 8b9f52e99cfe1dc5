from typing import Optional


class ShingleCheckError(Exception):
    """Base class for all recoverable shinglecheck failures."""


class InvalidK(ShingleCheckError, ValueError):
    """Raised when k is not in the range 1..token_count."""

    def __init__(self, k: int, token_count: int, message: Optional[str] = None):
        self.k = k
        self.token_count = token_count
        super().__init__(
            message or f"Invalid k value {k} for token count {token_count}"
        )


class EmptyInput(InvalidK):
    """Raised when shingles are requested for a document with no tokens."""

    def __init__(self, k: int, document: Optional[str] = None):
        self.document = document
        where = f" in {document}" if document else ""
        super().__init__(k, 0, f"No tokens available{where} to build {k}-grams")


class NoTargetDocument(ShingleCheckError):
    """Raised when a comparison is run before a target document is set."""

    def __init__(self):
        super().__init__("No target document specified")


class NoReferenceDocuments(ShingleCheckError):
    """Raised when a comparison is run with an empty reference list."""

    def __init__(self):
        super().__init__("No reference documents specified")


class CapacityExceeded(ShingleCheckError):
    def __init__(self, what: str, limit: int, actual: int):
        self.what = what
        self.limit = limit
        self.actual = actual
        super().__init__(f"{what} exceeds capacity: {actual} > {limit}")
