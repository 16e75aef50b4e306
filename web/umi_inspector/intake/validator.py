"""
Basic archive validation.

Goal: fast, side-effect-free checks that a file *looks* like a UMI archive
(optionally compressed with gzip or zstd) before it is spliced into the
record stream.

We DO NOT parse records here; just magic bytes / size sanity. The codec
does the deeper checks later.
"""

from __future__ import annotations

import os
from typing import Final

from ..dto import ArchiveHandle
from .codec import UMI_HEADER_LEN

MAGIC_GZIP: Final[bytes] = bytes.fromhex("1f8b")
MAGIC_ZSTD: Final[bytes] = bytes.fromhex("28b52ffd")


def _read_head(path: str, n: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(n)


def validate_archive(handle: ArchiveHandle) -> bool:
    """
    Quick validation of an ArchiveHandle path.

    Checks:
    - File exists and is not empty.
    - If compressor == none: holds at least one full header.
    - If compressor == gzip/zstd: magic bytes match the compressor.
    """
    try:
        st = os.stat(handle.path)
    except OSError:
        return False

    if handle.compressor == "none":
        return st.st_size >= UMI_HEADER_LEN

    head = _read_head(handle.path, 4)
    if handle.compressor == "gzip":
        return head[:2] == MAGIC_GZIP
    if handle.compressor == "zstd":
        return head[:4] == MAGIC_ZSTD

    # Unknown compressor label (shouldn't happen)
    return False
