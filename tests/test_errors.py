"""Tests for td_client.errors."""

import pytest

from td_client.errors import (
    APIError,
    APIErrorType,
    MalformedDocumentError,
    MalformedEmbeddedDocumentError,
    MalformedStreamError,
    RecordCallbackError,
    SchemaError,
    SchemaMismatchError,
    TDClientError,
    format_path,
)


def test_format_path_root():
    assert format_path("") == "<root>"
    assert format_path("tables[0].id") == "tables[0].id"


def test_schema_mismatch_message():
    error = SchemaMismatchError("tables[0].id", "integer", "missing")
    assert str(error) == "Schema mismatch at 'tables[0].id': expected integer, got missing"
    assert isinstance(error, SchemaError)
    assert isinstance(error, TDClientError)


def test_embedded_error_is_a_malformed_document_error():
    cause = ValueError("bad json")
    error = MalformedEmbeddedDocumentError("schema", cause)
    assert isinstance(error, MalformedDocumentError)
    assert error.cause is cause
    assert error.path == "schema"


def test_stream_and_callback_errors():
    assert MalformedStreamError("truncated").cause is None
    error = RecordCallbackError(4, KeyError("x"))
    assert error.record_index == 4
    assert "record 4" in str(error)


@pytest.mark.parametrize(
    "status,expected",
    [
        (401, APIErrorType.AUTHENTICATION),
        (403, APIErrorType.AUTHENTICATION),
        (404, APIErrorType.NOT_FOUND),
        (409, APIErrorType.ALREADY_EXISTS),
        (400, APIErrorType.GENERIC),
        (500, APIErrorType.GENERIC),
    ],
)
def test_api_error_type_from_status(status, expected):
    assert APIErrorType.from_status(status) is expected


def test_api_error_defaults():
    error = APIError("boom", status_code=500)
    assert error.error_type is APIErrorType.GENERIC
    assert error.detail is None
