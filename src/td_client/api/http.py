"""Utility functions for making HTTP requests to the API.

These functions provide a consistent interface for the endpoint clients:
non-success responses become `APIError`, JSON bodies are validated against a
schema descriptor, and binary bodies are decoded as record streams.
"""

import typing
from collections.abc import AsyncIterator
from typing import Optional
from urllib.parse import quote

from httpx import URL, AsyncClient, RequestError, Response
from httpx._types import (
    HeaderTypes,
    QueryParamTypes,
    RequestContent,
    RequestData,
)
from loguru import logger

from td_client.errors import APIError, APIErrorType, MalformedStreamError
from td_client.schema import Descriptor, validate_json
from td_client.stream import AsyncRecordStream


def api_path(template: str, *segments: str) -> str:
    """Build an API path, percent-encoding every segment.

    Example:
        api_path("/v3/table/list/{}", "my db") -> "/v3/table/list/my%20db"
    """
    return template.format(*(quote(str(segment), safe="") for segment in segments))


def get_error_message(
    status_code: int, url: URL | str, method: str, msg: Optional[str] = None
) -> str:
    """Get a friendly error message based on the HTTP status code.

    Args:
        status_code: The HTTP status code
        url: The URL that was requested
        method: The HTTP method used
        msg: Optional operation description prepended to the message

    Returns:
        A user-friendly error message
    """
    path = str(url).split("?")[0] if url else "resource"
    prefix = f"{msg}: " if msg else ""

    if status_code == 400:
        reason = f"Invalid request: the request to '{path}' was malformed or invalid"
    elif status_code in (401, 403):
        reason = f"Authentication failed: access to '{path}' was denied, check the API key"
    elif status_code == 404:
        reason = f"Resource not found: '{path}' doesn't exist"
    elif status_code == 409:
        reason = f"Conflict: the resource for '{path}' already exists"
    elif status_code == 429:
        reason = "Too many requests: please slow down and try again later"
    elif 400 <= status_code < 500:
        reason = f"Client error ({status_code}): the request for '{path}' could not be completed"
    elif 500 <= status_code < 600:
        reason = f"Server error ({status_code}): the server failed handling '{path}'"
    else:
        reason = f"HTTP error {status_code}: {method} request to '{path}' failed"
    return f"{prefix}{reason}"


def _extract_response_data(response: Response) -> typing.Any:
    """Safely decode response payload for error reporting."""
    try:
        return response.json()
    except ValueError:
        return None


def _response_detail_text(response_data: typing.Any) -> str | None:
    """Extract textual error detail from API payloads ({"message": ...} or {"error": ...})."""
    if isinstance(response_data, dict):
        for key in ("message", "error", "text"):
            detail = response_data.get(key)
            if isinstance(detail, str) and detail:
                return detail
    return None


def build_api_error(
    response: Response, method: str, url: URL | str, msg: Optional[str] = None
) -> APIError:
    """Build an APIError for a non-success response and log it at the right level."""
    status_code = response.status_code
    response_data = _extract_response_data(response)
    detail_text = _response_detail_text(response_data)
    error_message = get_error_message(status_code, url, method, msg)
    if detail_text:
        error_message = f"{error_message} ({detail_text})"

    # Client errors log as info except for 429; server errors as error
    if 400 <= status_code < 500:
        if status_code == 429:
            logger.warning(f"Rate limit exceeded: {method} {url}: {error_message}")
        else:
            logger.info(f"Client error: {method} {url}: {error_message}")
    else:
        logger.error(f"Server error: {method} {url}: {error_message}")

    return APIError(
        error_message,
        status_code=status_code,
        error_type=APIErrorType.from_status(status_code),
        detail=response_data,
    )


async def _call(
    client: AsyncClient,
    method: str,
    url: URL | str,
    *,
    content: RequestContent | None = None,
    data: RequestData | None = None,
    params: QueryParamTypes | None = None,
    headers: HeaderTypes | None = None,
    msg: Optional[str] = None,
) -> Response:
    logger.debug(f"Calling {method} '{url}' params: '{params}'")
    response = await client.request(
        method,
        url,
        content=content,
        data=data,
        params=params,
        headers=headers,
    )
    if response.is_success:
        return response
    raise build_api_error(response, method, url, msg)


async def call_get(
    client: AsyncClient,
    url: URL | str,
    *,
    params: QueryParamTypes | None = None,
    headers: HeaderTypes | None = None,
    msg: Optional[str] = None,
) -> Response:
    """Make a GET request and handle errors appropriately.

    Args:
        client: The HTTPX AsyncClient to use
        url: The URL to request
        params: Query parameters
        headers: HTTP headers
        msg: Operation description used in error messages

    Returns:
        The HTTP response

    Raises:
        APIError: If the server answers with a non-success status
    """
    return await _call(client, "GET", url, params=params, headers=headers, msg=msg)


async def call_post(
    client: AsyncClient,
    url: URL | str,
    *,
    data: RequestData | None = None,
    params: QueryParamTypes | None = None,
    headers: HeaderTypes | None = None,
    msg: Optional[str] = None,
) -> Response:
    """Make a form-encoded POST request and handle errors appropriately.

    Raises:
        APIError: If the server answers with a non-success status
    """
    return await _call(client, "POST", url, data=data, params=params, headers=headers, msg=msg)


async def call_put(
    client: AsyncClient,
    url: URL | str,
    *,
    content: RequestContent | None = None,
    headers: HeaderTypes | None = None,
    msg: Optional[str] = None,
) -> Response:
    """Make a PUT request with a raw body and handle errors appropriately.

    Raises:
        APIError: If the server answers with a non-success status
    """
    return await _call(client, "PUT", url, content=content, headers=headers, msg=msg)


def checked_json(response: Response, descriptor: Descriptor) -> typing.Any:
    """Validate a JSON response body against a schema descriptor.

    Raises:
        SchemaError: If the body is malformed or does not match the descriptor
    """
    return validate_json(response.content, descriptor)


async def _response_chunks(response: Response) -> AsyncIterator[bytes]:
    """Yield the decoded response body, converting httpx read failures into stream errors."""
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except RequestError as e:
        raise MalformedStreamError(f"Failed to read record stream: {e}", e) from e


async def stream_records(
    client: AsyncClient,
    method: str,
    url: URL | str,
    *,
    data: RequestData | None = None,
    params: QueryParamTypes | None = None,
    msg: Optional[str] = None,
) -> AsyncIterator[typing.Any]:
    """Issue a request and yield MessagePack records from the response body.

    The response stays open while the generator is iterated and is closed when
    it finishes or is closed early.

    Raises:
        APIError: If the server answers with a non-success status
        MalformedStreamError: If the body is not a clean record stream
    """
    logger.debug(f"Streaming {method} '{url}' params: '{params}'")
    async with client.stream(method, url, data=data, params=params) as response:
        if not response.is_success:
            await response.aread()
            raise build_api_error(response, method, url, msg)

        records = AsyncRecordStream(_response_chunks(response))
        try:
            async for record in records:
                yield record
        finally:
            await records.aclose()
