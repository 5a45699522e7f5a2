"""Errors raised by the session and grid filter engines."""

from pathlib import Path


class VocabReviewError(Exception):
    """Base class for all application errors."""
    pass


class GridParseError(VocabReviewError):
    """A word source file could not be read or parsed."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"Unable to read {self.path}: {message}")


class IndexOutOfRangeError(VocabReviewError, IndexError):
    """An index outside the valid range was passed to an engine."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Index {index} outside range [0, {size})")


class InvalidSessionError(VocabReviewError, ValueError):
    """A session cannot be built from the given words."""
    pass
