"""
Bucket accumulation.

Responsibilities (kept minimal):
- Update a Bucket with one packet's timestamp and payload length.
- Finalize a Bucket into the immutable BucketRecord handed downstream.

Notes
-----
- start_time is the first packet's timestamp, end_time the latest one's;
  they are not min/max, so input order is preserved as observed.
"""

from __future__ import annotations

from ..dto import Bucket, BucketRecord, WindowKey


def update_bucket(bucket: Bucket, ts: float, length: int) -> None:
    """
    Update the rolling bucket with a single packet.

    Parameters
    ----------
    bucket : Bucket
        Mutable accumulator for the packet's (identity, window) key.
    ts : float
        Packet timestamp (epoch seconds).
    length : int
        Declared payload length of the packet.
    """
    bucket.count += 1
    bucket.total_size += int(length)
    bucket.end_time = float(ts)
    if bucket.start_time is None:
        bucket.start_time = bucket.end_time


def finalize_bucket(key: WindowKey, bucket: Bucket) -> BucketRecord:
    """Convert a closed Bucket into an immutable record."""
    start = float(bucket.start_time) if bucket.start_time is not None else 0.0
    end = float(bucket.end_time) if bucket.end_time is not None else start
    return BucketRecord(
        identity=key.identity,
        window_start=key.window_start,
        count=int(bucket.count),
        total_size=int(bucket.total_size),
        start_time=start,
        end_time=end,
        duration_s=max(0.0, end - start),
    )
