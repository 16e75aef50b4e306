"""
Streaming per-identity counting over a decode loop.

StreamAggregator pulls packets from a Decoder, folds them into an
AggregatorShard and yields every bucket as soon as it is closed: on window
rollover while packets still arrive, then the remaining ones at end of
stream. start() runs the same loop as a producer thread behind an
EmissionQueue.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

from ..dto import BucketRecord
from ..intake.decoder import Decoder
from ..ports import TimestampCodecPort
from ..timecodec import DEFAULT_CODEC
from .emitter import EmissionQueue, run_producer
from .grouping import AggregatorShard

logger = logging.getLogger(__name__)


class StreamAggregator:
    """
    Parameters
    ----------
    decoder : Decoder
        Source of accepted packets.
    codec : TimestampCodecPort, optional
        Clock conversion; defaults to the GPS codec.
    window_seconds : float
        Bucket width; 0 keeps one bucket per identity for the whole stream.
    """

    def __init__(
        self,
        decoder: Decoder,
        *,
        codec: Optional[TimestampCodecPort] = None,
        window_seconds: float = 0.0,
    ) -> None:
        self._decoder = decoder
        self._codec = codec or DEFAULT_CODEC
        self._shard = AggregatorShard(window_seconds=window_seconds)
        self.emitted = 0

    def __iter__(self) -> Iterator[BucketRecord]:
        for packet in self._decoder.packets(False):
            h = packet.header
            ts = self._codec.to_timestamp(h.coarse, h.fine)
            for record in self._shard.observe(h, ts):
                self.emitted += 1
                yield record

        remaining = self._shard.finalize_all()
        logger.debug("End of stream: flushing %d open buckets", len(remaining))
        for record in remaining:
            self.emitted += 1
            yield record

    def start(self, out: EmissionQueue[BucketRecord]) -> threading.Thread:
        """Run the aggregation on a producer thread; `out` is closed when it ends."""
        return run_producer(self.__iter__, out, name="umi-aggregator")
