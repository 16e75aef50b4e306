"""
Timestamp codecs for the two-part spacecraft clock (coarse seconds, fine byte).

The decode pipeline only depends on TimestampCodecPort; these are the two
implementations shipped with the package.
"""

from __future__ import annotations

from dataclasses import dataclass

# 1980-01-06T00:00:00Z in Unix seconds
GPS_EPOCH_UNIX = 315_964_800
FINE_TICKS_PER_SECOND = 256


@dataclass(frozen=True)
class GPSTimestampCodec:
    """
    Coarse counts seconds since the GPS epoch; fine counts 1/256 s.

    leap_seconds is subtracted to land on UTC (0 keeps GPS time as-is).
    """
    leap_seconds: int = 0

    def to_timestamp(self, coarse: int, fine: int) -> float:
        return GPS_EPOCH_UNIX + coarse - self.leap_seconds + fine / FINE_TICKS_PER_SECOND


@dataclass(frozen=True)
class RawTimestampCodec:
    """Treats the clock as Unix seconds; handy for synthetic archives."""

    def to_timestamp(self, coarse: int, fine: int) -> float:
        return coarse + fine / FINE_TICKS_PER_SECOND


DEFAULT_CODEC = GPSTimestampCodec()
