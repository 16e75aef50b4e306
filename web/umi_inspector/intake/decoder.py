"""
Sequential, filtered decoder over a record-aligned byte source.

One read() on the source is one record; the transport guarantees alignment.
Rejected records are skipped inside decode(), so callers only ever see
accepted packets or EndOfStream.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from ..dto import Packet
from ..errors import EndOfStream
from ..ports import ByteSourcePort
from .codec import BUFFER_SIZE, decode_packet
from .filters import AcceptAll, IdentityFilter

logger = logging.getLogger(__name__)


class Decoder:
    """
    Parameters
    ----------
    source : ByteSourcePort
        Returns one record per read(); b"" at end of stream.
    filter : IdentityFilter, optional
        Applied to every header; defaults to AcceptAll.
    buffer_size : int
        Maximum bytes requested per read.
    """

    def __init__(
        self,
        source: ByteSourcePort,
        filter: Optional[IdentityFilter] = None,
        *,
        buffer_size: int = BUFFER_SIZE,
    ) -> None:
        self._source = source
        self._filter = filter if filter is not None else AcceptAll()
        self._buffer_size = int(buffer_size)

        self.packets_read = 0
        self.packets_accepted = 0
        self.packets_rejected = 0

    def decode(self, capture_payload: bool = False) -> Packet:
        """
        Return the next accepted packet.

        Raises EndOfStream when the source is exhausted; codec and filter
        errors propagate unchanged.
        """
        while True:
            chunk = self._source.read(self._buffer_size)
            if not chunk:
                raise EndOfStream("end of packet stream")
            self.packets_read += 1

            packet = decode_packet(chunk, capture_payload)
            if self._filter.accept(packet.header):
                self.packets_accepted += 1
                return packet

            self.packets_rejected += 1
            logger.debug("Skipping packet %s", packet.header.code.hex())

    def packets(self, capture_payload: bool = False) -> Iterator[Packet]:
        """Yield accepted packets until end of stream."""
        while True:
            try:
                yield self.decode(capture_payload)
            except EndOfStream:
                return

    def __iter__(self) -> Iterator[Packet]:
        return self.packets()

    def metrics(self) -> dict[str, int]:
        return {
            "packets_read": self.packets_read,
            "packets_accepted": self.packets_accepted,
            "packets_rejected": self.packets_rejected,
        }
