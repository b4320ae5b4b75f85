"""Custom exceptions for the application."""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wenshi.models.document import ValidationOutcome


class ErrorKind(str, Enum):
    """Failure categories shared by envelope parsing and serialization."""

    MALFORMED_XML = "malformed_xml"
    MISSING_ATTRIBUTE = "missing_attribute"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_CONTENT = "invalid_content"


class WenshiError(Exception):
    """Base class for all Wenshi errors."""

    pass


class EnvelopeError(WenshiError):
    """Raised when a .wen envelope cannot be read or produced."""

    def __init__(self, message: str, kind: ErrorKind, detail: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.detail = detail


class ParseError(EnvelopeError):
    """Raised when a serialized envelope cannot be decoded into a Document."""

    pass


class SerializeError(EnvelopeError):
    """Raised when content and timestamps cannot be encoded as an envelope."""

    pass


class ContentValidationError(WenshiError):
    """Raised when plain-text content fails validation."""

    def __init__(self, outcome: "ValidationOutcome") -> None:
        super().__init__(outcome.error_message)
        self.outcome = outcome


class FileStoreError(WenshiError):
    """Raised when host file operations fail."""

    def __init__(self, message: str, not_found: bool = False) -> None:
        super().__init__(message)
        self.not_found = not_found
