"""
Custom exceptions for td-client.

Validation errors carry the dotted/indexed path of the offending field so that
callers can tell exactly which part of a response drifted from the expected
shape.
"""

from enum import Enum
from typing import Any


class TDClientError(Exception):
    """Base exception for all td-client errors."""

    pass


def format_path(path: str) -> str:
    """Render a field path for messages; the empty path is the document root."""
    return path or "<root>"


class SchemaError(TDClientError):
    """Base exception for response validation failures."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class SchemaMismatchError(SchemaError):
    """Raised when a decoded value's shape or type disagrees with its descriptor."""

    def __init__(self, path: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Schema mismatch at '{format_path(path)}': expected {expected}, got {actual}",
            path,
        )


class MalformedDocumentError(SchemaError):
    """Raised when a JSON document cannot be parsed."""

    def __init__(self, path: str, cause: Exception):
        self.cause = cause
        super().__init__(f"Malformed JSON document at '{format_path(path)}': {cause}", path)


class MalformedEmbeddedDocumentError(MalformedDocumentError):
    """Raised when a string field that should hold a JSON document fails to parse."""

    pass


class MalformedStreamError(TDClientError):
    """Raised when a binary record stream fails to decode before a clean end."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class RecordCallbackError(TDClientError):
    """Raised when a per-record callback fails; decoding stops at that record."""

    def __init__(self, record_index: int, cause: Exception):
        self.record_index = record_index
        self.cause = cause
        super().__init__(f"Record callback failed on record {record_index}: {cause}")


class APIErrorType(Enum):
    """Classification of API failures, derived from the HTTP status code."""

    GENERIC = "generic"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"

    @classmethod
    def from_status(cls, status_code: int) -> "APIErrorType":
        if status_code in (401, 403):
            return cls.AUTHENTICATION
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 409:
            return cls.ALREADY_EXISTS
        return cls.GENERIC


class APIError(TDClientError):
    """Raised when the API answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: APIErrorType = APIErrorType.GENERIC,
        detail: Any = None,
    ):
        self.status_code = status_code
        self.error_type = error_type
        self.detail = detail
        super().__init__(message)
