"""
Data Transfer Objects (DTOs) used across the inspection pipeline.

These are intentionally small, immutable (where sensible), and independent
of any I/O or parsing libraries. All timestamps are UTC seconds since the
Unix epoch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal, Optional

UMI_CODE_LEN = 6


# === Enumerations ===
class UMIPacketState(IntEnum):
    """Validity/change state carried by every UMI record."""
    NO_VALUE = 0
    SAME_VALUE = 1
    NEW_VALUE = 2
    LATEST_VALUE = 3
    ERROR_VALUE = 4

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    UMIPacketState.NO_VALUE: "none",
    UMIPacketState.SAME_VALUE: "same",
    UMIPacketState.NEW_VALUE: "new",
    UMIPacketState.LATEST_VALUE: "latest",
    UMIPacketState.ERROR_VALUE: "unavailable",
}


class UMIValueType(IntEnum):
    """Declared value category of the record payload."""
    INT32 = 1
    FLOAT64 = 2
    BINARY8 = 3
    REFERENCE = 4
    STRING8 = 5
    LONG = 6
    DECIMAL = 7
    REAL = 8
    EXPONENT = 9
    TIME = 10
    DATETIME = 11
    STRINGN = 12
    BINARYN = 13
    BIT = 14

    @property
    def kind(self) -> str:
        """Coarse kind: long, double, binary, reference, string, time or bit."""
        return _TYPE_KINDS[self]


_TYPE_KINDS = {
    UMIValueType.INT32: "long",
    UMIValueType.LONG: "long",
    UMIValueType.FLOAT64: "double",
    UMIValueType.REAL: "double",
    UMIValueType.EXPONENT: "double",
    UMIValueType.DECIMAL: "double",
    UMIValueType.BINARY8: "binary",
    UMIValueType.BINARYN: "binary",
    UMIValueType.REFERENCE: "reference",
    UMIValueType.STRING8: "string",
    UMIValueType.STRINGN: "string",
    UMIValueType.TIME: "time",
    UMIValueType.DATETIME: "time",
    UMIValueType.BIT: "bit",
}

_UNKNOWN_LABEL = "***"


def state_label(state: int) -> str:
    """Render a state byte; values outside the enum render as '***'."""
    try:
        return UMIPacketState(state).label
    except ValueError:
        return _UNKNOWN_LABEL


def type_kind(value_type: int) -> str:
    """Render a value-type byte as its coarse kind; unknown values render as '***'."""
    try:
        return UMIValueType(value_type).kind
    except ValueError:
        return _UNKNOWN_LABEL


# === Identity (grouping root) ===
@dataclass(frozen=True)
class Identity:
    """(origin, code) pair; origin is always code[0], never set independently."""
    origin: int
    code: bytes

    @classmethod
    def from_code(cls, code: bytes) -> "Identity":
        code = bytes(code)
        return cls(origin=code[0], code=code)


# === Wire records ===
@dataclass(frozen=True)
class UMIHeader:
    """Fixed 25-byte record header. State and type keep the raw byte if unknown."""
    size: int                # declared record size (little-endian on the wire)
    code: bytes              # 6-byte identity code
    orbit: int
    state: int               # UMIPacketState when known
    type: int                # UMIValueType when known
    unit: int
    coarse: int              # spacecraft clock, seconds
    fine: int                # spacecraft clock, sub-second byte
    length: int              # payload bytes following the header

    @property
    def origin(self) -> int:
        return self.code[0]

    @property
    def identity(self) -> Identity:
        return Identity.from_code(self.code)


@dataclass(frozen=True)
class Packet:
    """A header plus its payload; data is None when payload capture was not requested."""
    header: UMIHeader
    data: Optional[bytes] = None


# === Aggregation ===
@dataclass(frozen=True)
class WindowKey:
    """Bucket key: identity plus window start (None when windowing is disabled)."""
    identity: Identity
    window_start: Optional[float]


@dataclass
class Bucket:
    """In-memory accumulator for one (identity, window) key."""
    count: int = 0
    total_size: int = 0
    start_time: Optional[float] = None
    end_time: Optional[float] = None


# === Final immutable records for emission ===
@dataclass(frozen=True)
class BucketRecord:
    identity: Identity
    window_start: Optional[float]
    count: int
    total_size: int
    start_time: float
    end_time: float
    duration_s: float


@dataclass(frozen=True)
class GapRecord:
    identity: Identity
    previous_time: float
    current_time: float
    delta_s: float


@dataclass(frozen=True)
class PacketRow:
    """One line of a packet listing."""
    timestamp: float
    state: str               # state label
    code: str                # hex
    orbit: int
    kind: str                # value-type kind
    size: int                # payload length, optionally plus header length


# === Intake ===
@dataclass(frozen=True)
class ArchiveHandle:
    """One archive file to read, in stream order."""
    id: str                  # stable identifier (path relative to its root)
    path: str                # filesystem path
    compressor: Literal["none", "gzip", "zstd"]
