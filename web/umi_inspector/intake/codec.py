"""
UMI record codec: fixed 25-byte header + opaque payload.

Wire layout (offset, bytes, field):
   0  4  size         little-endian uint32
   4  1  state        enum byte
   5  4  orbit        big-endian uint32
   9  6  code         raw bytes
  15  1  type         enum byte
  16  2  unit         big-endian uint16
  18  4  coarse time  big-endian uint32
  22  1  fine time    byte
  23  2  length       big-endian uint16
  25  n  payload      raw bytes

The mixed byte order is part of the archive format; keep it exactly.
Nothing here looks inside the payload.
"""

from __future__ import annotations

import struct
from typing import Final

from ..dto import UMI_CODE_LEN, Packet, UMIHeader, UMIPacketState, UMIValueType
from ..errors import (
    EmptyPayloadError,
    FieldRangeError,
    InvalidCodeError,
    MissingBytesError,
    ShortBufferError,
)

UMI_HEADER_LEN: Final[int] = 25
BUFFER_SIZE: Final[int] = 4096

_SIZE = struct.Struct("<I")
_BODY = struct.Struct(f">BI{UMI_CODE_LEN}sBHIBH")


def decode_header(buffer: bytes) -> UMIHeader:
    """Parse the first 25 bytes of buffer; anything after is ignored."""
    if len(buffer) < UMI_HEADER_LEN:
        raise ShortBufferError(
            f"header needs {UMI_HEADER_LEN} bytes, got {len(buffer)}"
        )
    (size,) = _SIZE.unpack_from(buffer, 0)
    state, orbit, code, value_type, unit, coarse, fine, length = _BODY.unpack_from(
        buffer, _SIZE.size
    )
    return UMIHeader(
        size=size,
        code=code,
        orbit=orbit,
        state=_as_enum(UMIPacketState, state),
        type=_as_enum(UMIValueType, value_type),
        unit=unit,
        coarse=coarse,
        fine=fine,
        length=length,
    )


def encode_header(header: UMIHeader) -> bytes:
    """Exact inverse of decode_header."""
    if len(header.code) != UMI_CODE_LEN:
        raise InvalidCodeError(
            f"code must be {UMI_CODE_LEN} bytes, got {len(header.code)}"
        )
    try:
        return _SIZE.pack(header.size) + _BODY.pack(
            int(header.state),
            header.orbit,
            bytes(header.code),
            int(header.type),
            header.unit,
            header.coarse,
            header.fine,
            header.length,
        )
    except struct.error as e:
        raise FieldRangeError(f"header field out of range: {e}") from e


def decode_packet(buffer: bytes, capture_payload: bool = False) -> Packet:
    """
    Decode one record occupying buffer.

    The payload is copied only when capture_payload is set. Two checks guard
    the copy: the buffer must cover header + declared length, and the copied
    slice must really hold that many bytes.
    """
    header = decode_header(buffer)
    if not capture_payload:
        return Packet(header=header)

    end = UMI_HEADER_LEN + header.length
    if end > len(buffer):
        raise ShortBufferError(
            f"record needs {end} bytes, got {len(buffer)}"
        )
    data = bytes(buffer[UMI_HEADER_LEN:end])
    if len(data) < header.length:
        raise MissingBytesError(
            f"payload declared {header.length} bytes, copied {len(data)}"
        )
    return Packet(header=header, data=data)


def encode_packet(packet: Packet) -> bytes:
    """Serialize header + payload; header-only records are refused."""
    if not packet.data:
        raise EmptyPayloadError("cannot encode a packet without payload")
    return encode_header(packet.header) + bytes(packet.data)


# === Helpers ===


def _as_enum(enum_cls, value: int) -> int:
    """Return the enum member when known, else the raw byte."""
    try:
        return enum_cls(value)
    except ValueError:
        return value
