"""
Exception hierarchy for the Quote Builder.
"""


class QuoteBuilderError(Exception):
    """Base class for all quote builder errors."""


class ValidationError(QuoteBuilderError):
    """Raised when a quote cannot be assembled from the supplied input."""


class ParseError(QuoteBuilderError):
    """
    Raised when a persisted collection cannot be decoded.

    Storage adapters catch this inside ``load()`` and fall back to an empty
    collection, so it never reaches callers.
    """

    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")
        self.collection = collection
