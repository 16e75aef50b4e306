"""
Record-aligned reader over one or more plain binary streams.

Archive files are raw concatenations of UMI records. RecordReader turns them
into the byte source the Decoder expects: every read() returns exactly one
record (header + declared payload), moving on to the next stream when one
is exhausted, and b"" once all streams are done.

A record cut short at the end of a stream is returned as-is; the codec then
reports it as a short buffer.
"""

from __future__ import annotations

from typing import IO, Iterable, Iterator, Optional

from .codec import UMI_HEADER_LEN

# big-endian uint16 at the end of the header
_LEN_OFFSET = UMI_HEADER_LEN - 2


class RecordReader:
    def __init__(self, streams: Iterable[IO[bytes]]) -> None:
        self._streams: Iterator[IO[bytes]] = iter(streams)
        self._current: Optional[IO[bytes]] = None

    def read(self, size: int = -1) -> bytes:
        """Return the next record; `size` caps the bytes returned."""
        while True:
            if self._current is None:
                self._current = next(self._streams, None)
                if self._current is None:
                    return b""

            head = _read_exact(self._current, UMI_HEADER_LEN)
            if not head:
                self._current = None
                continue
            if len(head) < UMI_HEADER_LEN:
                return head

            length = int.from_bytes(head[_LEN_OFFSET:UMI_HEADER_LEN], "big")
            record = head + _read_exact(self._current, length)
            if size is not None and size >= 0:
                return record[:size]
            return record


def _read_exact(stream: IO[bytes], n: int) -> bytes:
    """Read n bytes, fewer only at end of stream."""
    buf = bytearray()
    while len(buf) < n:
        chunk = stream.read(n - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)
