"""
Grouping primitives and bucket lifecycle.

Responsibilities (kept minimal, one thing each):
- Derive the (identity, window) key of a packet.
- Maintain open Bucket instances and close them on window rollover.

Notes
-----
- An identity is the full 6-byte code; origin is derived from it.
- At most one bucket per identity is open at any time: a new window for an
  identity proves the previous one closed, so it is released immediately.
  Buckets of identities that never roll over stay open until finalize_all().
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..dto import Bucket, BucketRecord, Identity, UMIHeader, WindowKey
from .features import finalize_bucket, update_bucket
from .windowing import window_start


def window_key(header: UMIHeader, ts: float, width: Optional[float]) -> WindowKey:
    """Key a packet by its identity and the start of its window."""
    return WindowKey(identity=header.identity, window_start=window_start(ts, width))


class AggregatorShard:
    """
    Manages Bucket objects keyed by WindowKey and flushes them eagerly.

    Only one knob: window_seconds (0 disables windowing).
    """

    def __init__(self, *, window_seconds: Optional[float] = 0.0) -> None:
        self._width = window_seconds
        self._open: Dict[WindowKey, Bucket] = {}
        self._last_window: Dict[Identity, Optional[float]] = {}

    @property
    def open_buckets(self) -> int:
        return len(self._open)

    # --- lifecycle ---

    def observe(self, header: UMIHeader, ts: float) -> List[BucketRecord]:
        """
        Fold one packet into its bucket.

        Returns the bucket closed by this packet, if any, as a one-item list.
        Order matters: the previous window is released before the pointer
        moves and before the packet is accumulated.
        """
        key = window_key(header, ts, self._width)
        closed: List[BucketRecord] = []

        if key not in self._open:
            previous = self._last_window.get(key.identity)
            if previous is not None:
                old = WindowKey(identity=key.identity, window_start=previous)
                bucket = self._open.pop(old, None)
                if bucket is not None:
                    closed.append(finalize_bucket(old, bucket))
            self._last_window[key.identity] = key.window_start

        bucket = self._open.get(key)
        if bucket is None:
            bucket = Bucket()
            self._open[key] = bucket
        update_bucket(bucket, ts, header.length)
        return closed

    def finalize_all(self) -> List[BucketRecord]:
        """
        Close every open bucket (end of stream) and return them in the order
        they were opened.
        """
        out = [finalize_bucket(key, bucket) for key, bucket in self._open.items()]
        self._open.clear()
        self._last_window.clear()
        return out
