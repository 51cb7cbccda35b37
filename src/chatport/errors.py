"""Exceptions raised while converting chat exports."""

from __future__ import annotations


class ConversionError(Exception):
    """An import could not be completed.

    ``cause`` holds the underlying exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
