"""
Filesystem-backed archive source.

It enumerates archive files from a list of paths, each either a file or a
directory. Directories are walked (recursively on request) and their files
sorted by path, which for time-partitioned layouts like
  <root>/<YYYY>/<DDD>/<HH>/*.dat[.gz|.zst]
is also stream order.

This module does NOT open files; validation (magic bytes, size) happens
in validator.py and decompression in decompress.py. Compression is
inferred from the filename suffix.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Literal, Sequence, Tuple, Union

from ..dto import ArchiveHandle

COMP_SUFFIXES: Tuple[Tuple[str, Literal["gzip", "zstd"]], ...] = (
    (".zst", "zstd"),
    (".zstd", "zstd"),
    (".gz", "gzip"),
)


@dataclass(frozen=True)
class FilesystemArchiveSource:
    """
    Enumerate archive files under the given paths.

    Parameters
    ----------
    paths : Sequence[str | os.PathLike]
        Files are taken as given, in order; directories are expanded.
        A path that is neither raises FileNotFoundError.
    recursive : bool
        Walk sub-directories of directory arguments.
    """

    paths: Sequence[Union[str, os.PathLike]]
    recursive: bool = True

    def __post_init__(self) -> None:
        for raw in self.paths:
            if not os.path.exists(raw):
                raise FileNotFoundError(raw)

    def fetch(self) -> Iterator[ArchiveHandle]:
        for raw in self.paths:
            root = Path(raw)
            if root.is_file():
                yield _handle(root, root.parent)
                continue
            if not root.is_dir():
                raise FileNotFoundError(raw)

            pattern = "**/*" if self.recursive else "*"
            for p in sorted(root.glob(pattern)):
                if not p.is_file() or p.name.startswith("."):
                    continue
                yield _handle(p, root)


# === Helpers ===


def _handle(path: Path, root: Path) -> ArchiveHandle:
    return ArchiveHandle(
        id=str(path.relative_to(root)),
        path=str(path),
        compressor=_infer_compressor(path.name),
    )


def _infer_compressor(name: str) -> Literal["gzip", "zstd", "none"]:
    lower = name.lower()
    for suffix, comp in COMP_SUFFIXES:
        if lower.endswith(suffix):
            return comp
    return "none"
