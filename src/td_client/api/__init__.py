"""HTTP plumbing shared by the endpoint clients."""

from td_client.api.client import create_client, get_client, set_client_factory
from td_client.api.http import (
    api_path,
    build_api_error,
    call_get,
    call_post,
    call_put,
    checked_json,
    get_error_message,
    stream_records,
)

__all__ = [
    "api_path",
    "build_api_error",
    "call_get",
    "call_post",
    "call_put",
    "checked_json",
    "create_client",
    "get_client",
    "get_error_message",
    "set_client_factory",
    "stream_records",
]
