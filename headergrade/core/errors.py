# core/errors.py


class HeaderGradeError(Exception):
    """Base class for all errors raised by headergrade."""


class InvalidURLError(HeaderGradeError, ValueError):
    """The URL supplied for analysis is empty or malformed."""


class FetchError(HeaderGradeError):
    """The response headers of a target could not be retrieved."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch headers from {url}: {reason}")


class EvaluationError(HeaderGradeError):
    """Evaluation received input it cannot score. Always a programming error."""


class CatalogError(HeaderGradeError):
    """A rule catalog definition is malformed."""
