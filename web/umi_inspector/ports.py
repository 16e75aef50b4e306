"""
Hexagonal interfaces (Ports) for the inspection pipeline.

These define the boundary between core domain logic and I/O adapters.
Keep them small and implementation-agnostic so they're easy to mock in tests.
"""

from __future__ import annotations

from typing import Dict, Protocol

from .dto import BucketRecord, GapRecord, PacketRow


class ByteSourcePort(Protocol):
    """
    Sequential, record-aligned byte source.

    Each read() returns exactly one record (header + declared payload).
    An empty bytes object signals end of stream.
    """

    def read(self, size: int = -1) -> bytes:
        ...


class TimestampCodecPort(Protocol):
    """Converts the spacecraft clock fields into an absolute timestamp."""

    def to_timestamp(self, coarse: int, fine: int) -> float:
        """Return UTC seconds since the Unix epoch."""
        ...


class EventSinkPort(Protocol):
    """
    Receives emitted records and metrics from the runners.
    Implementations might collect them, format them, or write them out;
    no persistence here.
    """

    def on_bucket(self, record: BucketRecord) -> None:
        """Receive one closed aggregate bucket."""
        ...

    def on_gap(self, record: GapRecord) -> None:
        """Receive one inter-packet gap."""
        ...

    def on_packet(self, row: PacketRow) -> None:
        """Receive one listing row."""
        ...

    def on_metrics(self, metrics: Dict[str, int]) -> None:
        """
        Receive a minimal metrics snapshot at the end of the run
        (e.g., packets_read, packets_accepted, records_emitted).
        """
        ...
