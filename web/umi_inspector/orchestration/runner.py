"""
Runners: one pass over an archive stream per operation.

- run_count : per-identity buckets (optionally windowed) -> sink.on_bucket
- run_diff  : per-identity inter-packet gaps            -> sink.on_gap
- run_list  : one row per packet                        -> sink.on_packet
- run_take  : matching packets re-encoded into a binary writer

Every runner treats decode errors as fatal for the stream: they are logged
and re-raised to the caller. End of stream is the only normal exit.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import IO, Dict, Iterator, Optional, Sequence, Union

from ..config import InspectorConfig
from ..dto import Bucket, BucketRecord, PacketRow, state_label, type_kind
from ..errors import EmptyPayloadError
from ..intake.archive_source_fs import FilesystemArchiveSource
from ..intake.codec import UMI_HEADER_LEN, encode_packet
from ..intake.decoder import Decoder
from ..intake.decompress import open_archive_stream
from ..intake.filters import build_filter
from ..intake.record_reader import RecordReader
from ..intake.validator import validate_archive
from ..pipeline.aggregator import StreamAggregator
from ..pipeline.emitter import EmissionQueue
from ..pipeline.features import update_bucket
from ..pipeline.gaps import GapDetector
from ..ports import ByteSourcePort, EventSinkPort, TimestampCodecPort
from ..timecodec import DEFAULT_CODEC

logger = logging.getLogger(__name__)


@contextmanager
def open_archive(
    paths: Sequence[Union[str, os.PathLike]],
    *,
    recursive: bool = True,
) -> Iterator[RecordReader]:
    """
    Yield one record-aligned byte source over every valid archive file under
    `paths`, opened lazily one file at a time. Invalid files are skipped
    with a warning; a path that does not exist raises FileNotFoundError.
    """
    source = FilesystemArchiveSource(paths=paths, recursive=recursive)

    def _streams():
        for handle in source.fetch():
            if not validate_archive(handle):
                logger.warning("Skipping invalid archive file: %s", handle.path)
                continue
            logger.debug("Reading %s (%s)", handle.id, handle.compressor)
            with open_archive_stream(handle) as stream:
                yield stream

    streams = _streams()
    try:
        yield RecordReader(streams)
    finally:
        streams.close()


def _decoder(source: ByteSourcePort, cfg: InspectorConfig) -> Decoder:
    return Decoder(source, build_filter(cfg), buffer_size=cfg.buffer_size)


def _report(sink: EventSinkPort, decoder: Decoder, emitted: int) -> Dict[str, int]:
    metrics = decoder.metrics()
    metrics["records_emitted"] = emitted
    sink.on_metrics(metrics)
    return metrics


def run_count(
    *,
    source: ByteSourcePort,
    sink: EventSinkPort,
    cfg: Optional[InspectorConfig] = None,
    codec: Optional[TimestampCodecPort] = None,
) -> Dict[str, int]:
    """
    Count packets and payload bytes per identity (and window).

    The aggregation runs on a producer thread; this thread drains the
    emission queue into the sink, so the sink sees each bucket as soon as
    it is closed.
    """
    cfg = cfg or InspectorConfig()
    decoder = _decoder(source, cfg)
    aggregator = StreamAggregator(
        decoder, codec=codec, window_seconds=cfg.window_seconds
    )
    out: EmissionQueue[BucketRecord] = EmissionQueue(capacity=cfg.emitter_queue_capacity)

    logger.info("Counting packets (window=%ss)", cfg.window_seconds)
    producer = aggregator.start(out)
    emitted = 0
    try:
        for record in out:
            sink.on_bucket(record)
            emitted += 1
    except Exception:
        logger.exception("Counting aborted")
        raise
    finally:
        out.cancel()
        producer.join(timeout=1.0)
    return _report(sink, decoder, emitted)


def run_diff(
    *,
    source: ByteSourcePort,
    sink: EventSinkPort,
    cfg: Optional[InspectorConfig] = None,
    codec: Optional[TimestampCodecPort] = None,
) -> Dict[str, int]:
    """Report gaps between successive packets of the same identity."""
    cfg = cfg or InspectorConfig()
    decoder = _decoder(source, cfg)
    detector = GapDetector(min_gap_seconds=cfg.min_gap_seconds)

    logger.info("Detecting gaps (min=%ss)", cfg.min_gap_seconds)
    emitted = 0
    try:
        for gap in detector.detect(decoder.packets(False), codec or DEFAULT_CODEC):
            sink.on_gap(gap)
            emitted += 1
    except Exception:
        logger.exception("Gap detection aborted")
        raise
    return _report(sink, decoder, emitted)


def run_list(
    *,
    source: ByteSourcePort,
    sink: EventSinkPort,
    cfg: Optional[InspectorConfig] = None,
    codec: Optional[TimestampCodecPort] = None,
) -> Bucket:
    """
    Emit one PacketRow per accepted packet and return the stream-wide
    totals (count 0 and no times for an empty stream).
    """
    cfg = cfg or InspectorConfig()
    codec = codec or DEFAULT_CODEC
    decoder = _decoder(source, cfg)
    base = UMI_HEADER_LEN if cfg.include_header_size else 0

    summary = Bucket()
    try:
        for packet in decoder.packets(False):
            h = packet.header
            ts = codec.to_timestamp(h.coarse, h.fine)
            sink.on_packet(
                PacketRow(
                    timestamp=ts,
                    state=state_label(h.state),
                    code=h.code.hex(),
                    orbit=h.orbit,
                    kind=type_kind(h.type),
                    size=h.length + base,
                )
            )
            update_bucket(summary, ts, h.length)
    except Exception:
        logger.exception("Listing aborted")
        raise

    _report(sink, decoder, summary.count)
    return summary


def run_take(
    *,
    source: ByteSourcePort,
    writer: IO[bytes],
    cfg: Optional[InspectorConfig] = None,
) -> Dict[str, int]:
    """
    Copy every accepted packet, re-encoded, into `writer`.

    Header-only packets cannot be encoded; they are skipped and counted
    under `packets_skipped`.
    """
    cfg = cfg or InspectorConfig()
    decoder = _decoder(source, cfg)

    written = skipped = 0
    for packet in decoder.packets(True):
        try:
            writer.write(encode_packet(packet))
        except EmptyPayloadError:
            skipped += 1
            logger.debug("Skipping header-only packet %s", packet.header.code.hex())
            continue
        written += 1

    metrics = decoder.metrics()
    metrics["records_emitted"] = written
    metrics["packets_skipped"] = skipped
    logger.info("Extracted %d packets (%d header-only skipped)", written, skipped)
    return metrics
