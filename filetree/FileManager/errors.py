"""
FileManager exceptions.

Lookups report absence with ``None``; these are raised for malformed calls and
for structured-content failures. Underlying I/O failures surface as the
builtin ``OSError`` family and are never wrapped.
"""

from typing import Optional


class FileManagerError(Exception):
    """Base class for FileManager errors."""
    pass


class NotFoundError(FileManagerError, LookupError):
    """Raised when an expected folder does not exist."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidArgumentError(FileManagerError, TypeError):
    """Raised when a call receives an argument of the wrong kind."""
    pass


class ObjectCodecError(FileManagerError, ValueError):
    """Base for structured read/write failures."""

    def __init__(self, message: str, path: Optional[str] = None, codec: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.codec = codec


class ObjectParseError(ObjectCodecError):
    """Raised when file content does not match the codec's grammar."""
    pass


class ObjectSerializationError(ObjectCodecError):
    """Raised when a value cannot be encoded by the selected codec."""
    pass
