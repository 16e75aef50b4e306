"""
Compressed archive opener.

`open_archive_stream(handle)` yields a binary file-like object over the
file's raw record bytes whether the file is stored plain, gzip-compressed
or zstd-compressed. Decompression only; records are parsed elsewhere.
"""

from __future__ import annotations

import gzip
from contextlib import ExitStack, contextmanager
from typing import IO, Generator

import zstandard  # type: ignore

from ..dto import ArchiveHandle


@contextmanager
def open_archive_stream(handle: ArchiveHandle) -> Generator[IO[bytes], None, None]:
    """Yield a readable stream for `handle`; everything opened is closed on exit."""
    with ExitStack() as stack:
        raw = stack.enter_context(open(handle.path, "rb"))
        if handle.compressor == "gzip":
            yield stack.enter_context(gzip.GzipFile(fileobj=raw, mode="rb"))
        elif handle.compressor == "zstd":
            dctx = zstandard.ZstdDecompressor()
            yield stack.enter_context(dctx.stream_reader(raw, closefd=False))
        else:
            yield raw
