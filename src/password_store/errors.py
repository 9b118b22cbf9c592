"""
Exceptions raised by ``PasswordStore`` and its transports.

Every failure surfaces as a subclass of ``PasswordStoreError`` so callers
can catch the whole family or discriminate on the concrete kind.
"""

from typing import Optional


class PasswordStoreError(Exception):
    """Base exception for all password store client errors."""
    pass


class InvalidInputError(PasswordStoreError):
    """The entry path is empty or whitespace-only. Raised before any process is spawned."""

    def __init__(self, message: str = "invalid input"):
        super().__init__(message)


class InvalidOutputError(PasswordStoreError):
    """The store answered, but not with the shape the operation expects."""

    def __init__(self, message: str = "invalid output"):
        super().__init__(message)


class PassError(PasswordStoreError):
    """
    The external program reported a failure on its error stream.

    ``message`` is the program's own diagnostic text, passed through
    unaltered (minus one trailing line terminator).
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProcessIOError(PasswordStoreError):
    """The process could not be spawned, or one of its streams failed."""

    def __init__(self, error: OSError):
        super().__init__(str(error))
        self.error = error


class TextDecodeError(PasswordStoreError):
    """Bytes captured from a stream are not valid UTF-8."""

    def __init__(self, error: UnicodeDecodeError, stream: Optional[str] = None):
        super().__init__(str(error))
        self.error = error
        self.stream = stream


class JsonDecodeError(PasswordStoreError):
    """The output payload of a framed session is not valid JSON."""

    def __init__(self, error: ValueError):
        super().__init__(str(error))
        self.error = error
