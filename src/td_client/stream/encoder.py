"""MessagePack record encoding for bulk imports.

The import endpoint accepts concatenated MessagePack records, usually gzipped
(format name "msgpack.gz"). Each record is a map and should carry an integer
"time" column.
"""

import gzip
from collections.abc import Iterable
from typing import Any

import msgpack

MSGPACK_FORMAT = "msgpack"
MSGPACK_GZ_FORMAT = "msgpack.gz"


def encode_records(records: Iterable[Any]) -> bytes:
    """Pack records into a concatenated MessagePack stream."""
    packer = msgpack.Packer(use_bin_type=True, datetime=True)
    return b"".join(packer.pack(record) for record in records)


def compress_records(records: Iterable[Any], compresslevel: int = 9) -> bytes:
    """Pack records and gzip the stream, ready for a "msgpack.gz" import."""
    return gzip.compress(encode_records(records), compresslevel=compresslevel)
