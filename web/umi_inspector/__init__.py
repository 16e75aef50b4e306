"""
umi_inspector: streaming statistics over UMI housekeeping archives.

Public API (stable):
- InspectorConfig          (configuration)
- run_count / run_diff / run_list / run_take  (one pass per operation)
- open_archive             (filesystem archive -> record-aligned byte source)
- Decoder, IdentityFilter variants (AcceptAll, ByCodeSet, ByOrigin, AllOf)
- decode_header / decode_packet / encode_header / encode_packet
- StreamAggregator, GapDetector
- Ports: ByteSourcePort, TimestampCodecPort, EventSinkPort
- DTOs: UMIHeader, Packet, Identity, BucketRecord, GapRecord, PacketRow

This package intentionally exposes a small surface area so callers can wire
sources/sinks without depending on internals.
"""

from __future__ import annotations

# Configuration
from .config import InspectorConfig

# Orchestration
from .orchestration.runner import open_archive, run_count, run_diff, run_list, run_take

# Codec / decoding
from .intake.codec import (
    BUFFER_SIZE,
    UMI_HEADER_LEN,
    decode_header,
    decode_packet,
    encode_header,
    encode_packet,
)
from .intake.decoder import Decoder
from .intake.filters import AcceptAll, AllOf, ByCodeSet, ByOrigin, IdentityFilter, load_catalog

# Aggregation
from .pipeline.aggregator import StreamAggregator
from .pipeline.gaps import GapDetector

# Ports
from .ports import ByteSourcePort, EventSinkPort, TimestampCodecPort
from .timecodec import GPSTimestampCodec, RawTimestampCodec

# Errors
from .errors import (
    EmptyPayloadError,
    EndOfStream,
    FieldRangeError,
    InvalidCodeError,
    MissingBytesError,
    ShortBufferError,
    UMIError,
)

# DTOs
from .dto import (
    UMI_CODE_LEN,
    BucketRecord,
    GapRecord,
    Identity,
    Packet,
    PacketRow,
    UMIHeader,
    UMIPacketState,
    UMIValueType,
)

__all__ = [
    "InspectorConfig",
    "open_archive",
    "run_count",
    "run_diff",
    "run_list",
    "run_take",
    "BUFFER_SIZE",
    "UMI_CODE_LEN",
    "UMI_HEADER_LEN",
    "decode_header",
    "decode_packet",
    "encode_header",
    "encode_packet",
    "Decoder",
    "IdentityFilter",
    "AcceptAll",
    "AllOf",
    "ByCodeSet",
    "ByOrigin",
    "load_catalog",
    "StreamAggregator",
    "GapDetector",
    "ByteSourcePort",
    "EventSinkPort",
    "TimestampCodecPort",
    "GPSTimestampCodec",
    "RawTimestampCodec",
    "UMIError",
    "ShortBufferError",
    "MissingBytesError",
    "EmptyPayloadError",
    "InvalidCodeError",
    "FieldRangeError",
    "EndOfStream",
    "BucketRecord",
    "GapRecord",
    "Identity",
    "Packet",
    "PacketRow",
    "UMIHeader",
    "UMIPacketState",
    "UMIValueType",
]
