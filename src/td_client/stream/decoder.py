"""Streaming MessagePack record decoder.

Binary endpoints (table tail, job results) return a stream of concatenated,
self-describing MessagePack values. Records are decoded lazily, one at a time:

- `StreamDecoder` is the push-based core: feed it chunks, drain complete records,
  and call `finish()` once the source is exhausted.
- `RecordStream` / `AsyncRecordStream` wrap it as pull-based iterators over a
  byte source, so callers can use `for` / `async for` and stop with `break`.
- `each_record` / `aeach_record` drive a per-record callback and stop at the
  first callback failure.

A stream that ends exactly on a record boundary terminates cleanly. A stream
that ends inside a record, contains invalid data, or fails while being read
raises `MalformedStreamError`. Streams are single-pass and not restartable.
"""

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from typing import Any, BinaryIO

import msgpack
from loguru import logger

from td_client.errors import MalformedStreamError, RecordCallbackError

DEFAULT_READ_SIZE = 64 * 1024

type ByteSource = BinaryIO | Iterable[bytes]


def _unpacker_defaults(options: dict[str, Any]) -> dict[str, Any]:
    defaults = {
        "raw": False,
        # Records may use non-string map keys
        "strict_map_key": False,
    }
    defaults.update(options)
    return defaults


class StreamDecoder:
    """Push-based MessagePack decoder tracking record boundaries.

    Usage:
        decoder = StreamDecoder()
        for chunk in chunks:
            decoder.feed(chunk)
            for record in decoder.drain():
                handle(record)
        decoder.finish()
    """

    def __init__(self, **unpacker_options: Any):
        """Initialize the decoder.

        Args:
            **unpacker_options: Extra keyword arguments for msgpack.Unpacker
        """
        self._unpacker = msgpack.Unpacker(**_unpacker_defaults(unpacker_options))
        self._bytes_fed = 0
        self._bytes_consumed = 0
        self._records_decoded = 0
        self._finished = False

    @property
    def records_decoded(self) -> int:
        return self._records_decoded

    @property
    def pending_bytes(self) -> int:
        """Bytes received that do not yet form a complete record."""
        return self._bytes_fed - self._bytes_consumed

    def feed(self, chunk: bytes) -> None:
        """Append a chunk of the stream to the internal buffer."""
        if self._finished:
            raise RuntimeError("Cannot feed a finished StreamDecoder")
        if not chunk:
            return
        try:
            self._unpacker.feed(chunk)
        except msgpack.BufferFull as e:
            raise MalformedStreamError("Record exceeds the maximum buffer size", e) from e
        self._bytes_fed += len(chunk)

    def drain(self) -> Iterator[Any]:
        """Yield every complete record currently buffered."""
        while True:
            try:
                record = self._unpacker.unpack()
            except msgpack.OutOfData:
                return
            except (msgpack.UnpackException, ValueError, TypeError) as e:
                raise MalformedStreamError(f"Invalid MessagePack stream: {e}", e) from e
            # tell() is the offset just past the last complete record
            self._bytes_consumed = self._unpacker.tell()
            self._records_decoded += 1
            yield record

    def finish(self) -> None:
        """Mark the end of the source.

        Raises:
            MalformedStreamError: If the stream ended inside a record
        """
        self._finished = True
        if self.pending_bytes > 0:
            logger.warning(
                f"MessagePack stream truncated after {self._records_decoded} records "
                f"({self.pending_bytes} trailing bytes)"
            )
            raise MalformedStreamError(
                f"Stream ended in the middle of a record after {self._records_decoded} "
                f"records ({self.pending_bytes} trailing bytes)"
            )
        logger.debug(f"MessagePack stream finished cleanly: {self._records_decoded} records")


def _iter_chunks(source: ByteSource, read_size: int) -> Iterator[bytes]:
    """Read a byte source chunk by chunk, converting read failures."""
    read = getattr(source, "read", None)
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            yield bytes(source)
        elif read is not None:
            while chunk := read(read_size):
                yield chunk
        else:
            yield from source
    except OSError as e:
        raise MalformedStreamError(f"Failed to read record stream: {e}", e) from e


class RecordStream:
    """Lazy, single-pass iterator of records decoded from a byte source.

    Args:
        source: A binary file-like object (anything with `read(size)`) or an
            iterable of bytes chunks
        read_size: Chunk size used with file-like sources
        **unpacker_options: Extra keyword arguments for msgpack.Unpacker
    """

    def __init__(
        self,
        source: ByteSource,
        read_size: int = DEFAULT_READ_SIZE,
        **unpacker_options: Any,
    ):
        self._decoder = StreamDecoder(**unpacker_options)
        self._records = self._generate(_iter_chunks(source, read_size))

    @property
    def records_decoded(self) -> int:
        return self._decoder.records_decoded

    def _generate(self, chunks: Iterator[bytes]) -> Iterator[Any]:
        for chunk in chunks:
            self._decoder.feed(chunk)
            yield from self._decoder.drain()
        self._decoder.finish()

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        return next(self._records)


async def _aiter_chunks(chunks: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    """Async counterpart of _iter_chunks for an async iterable of bytes chunks."""
    try:
        async for chunk in chunks:
            yield chunk
    except OSError as e:
        raise MalformedStreamError(f"Failed to read record stream: {e}", e) from e


class AsyncRecordStream:
    """Async counterpart of RecordStream over an async iterable of bytes chunks."""

    def __init__(self, chunks: AsyncIterable[bytes], **unpacker_options: Any):
        self._decoder = StreamDecoder(**unpacker_options)
        self._records = self._generate(chunks)

    @property
    def records_decoded(self) -> int:
        return self._decoder.records_decoded

    async def _generate(self, chunks: AsyncIterable[bytes]) -> AsyncIterator[Any]:
        async for chunk in _aiter_chunks(chunks):
            self._decoder.feed(chunk)
            for record in self._decoder.drain():
                yield record
        self._decoder.finish()

    def __aiter__(self) -> AsyncIterator[Any]:
        return self

    async def __anext__(self) -> Any:
        return await self._records.__anext__()

    async def aclose(self) -> None:
        await self._records.aclose()


def each_record(records: Iterable[Any], callback: Callable[[Any], Any]) -> int:
    """Call `callback` for every record, stopping at the first failure.

    Args:
        records: Record iterator, typically a RecordStream
        callback: Called with each record

    Returns:
        Number of records processed

    Raises:
        RecordCallbackError: If the callback raises; wraps the original exception
        MalformedStreamError: If the stream itself fails to decode
    """
    count = 0
    for record in records:
        try:
            callback(record)
        except Exception as e:
            raise RecordCallbackError(count, e) from e
        count += 1
    return count


async def aeach_record(
    records: AsyncIterable[Any],
    callback: Callable[[Any], Any],
) -> int:
    """Async counterpart of each_record; `callback` may be sync or async.

    The record iterator is closed before returning or raising, so an
    underlying HTTP response is released even when the callback fails.
    """
    count = 0
    iterator = aiter(records)
    try:
        async for record in iterator:
            try:
                result = callback(record)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                raise RecordCallbackError(count, e) from e
            count += 1
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()
    return count
