"""
Inter-packet gap detection per identity.

Every packet is compared with the previous packet of the same identity;
the pair is reported when the delta reaches the threshold. State is one
timestamp per identity, so there is nothing to flush at end of stream.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from ..dto import GapRecord, Identity, Packet
from ..ports import TimestampCodecPort


class GapDetector:
    def __init__(self, *, min_gap_seconds: float = 0.0) -> None:
        self._min_gap = float(min_gap_seconds)
        self._last_seen: Dict[Identity, float] = {}

    def observe(self, identity: Identity, ts: float) -> Optional[GapRecord]:
        """Record ts for identity; return the gap to its predecessor if reportable."""
        record = None
        previous = self._last_seen.get(identity)
        if previous is not None:
            delta = ts - previous
            if self._min_gap <= 0 or delta >= self._min_gap:
                record = GapRecord(
                    identity=identity,
                    previous_time=previous,
                    current_time=ts,
                    delta_s=delta,
                )
        self._last_seen[identity] = ts
        return record

    def detect(self, packets: Iterable[Packet], codec: TimestampCodecPort) -> Iterator[GapRecord]:
        for packet in packets:
            h = packet.header
            record = self.observe(h.identity, codec.to_timestamp(h.coarse, h.fine))
            if record is not None:
                yield record
