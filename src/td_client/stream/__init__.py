"""Binary record streams: lazy MessagePack decoding and import encoding."""

from td_client.stream.decoder import (
    AsyncRecordStream,
    RecordStream,
    StreamDecoder,
    aeach_record,
    each_record,
)
from td_client.stream.encoder import (
    MSGPACK_FORMAT,
    MSGPACK_GZ_FORMAT,
    compress_records,
    encode_records,
)

__all__ = [
    # Decoder
    "AsyncRecordStream",
    "RecordStream",
    "StreamDecoder",
    "aeach_record",
    "each_record",
    # Encoder
    "MSGPACK_FORMAT",
    "MSGPACK_GZ_FORMAT",
    "compress_records",
    "encode_records",
]
