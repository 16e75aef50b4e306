"""
Identity filters applied by the Decoder to every decoded header.

Each variant validates its inputs at construction so a malformed code is
reported before any record is read. Variants:
- AcceptAll  : keep everything (default)
- ByCodeSet  : keep exact 6-byte code matches
- ByOrigin   : keep one origin byte (0 is a wildcard)
- AllOf      : keep only if every wrapped filter keeps
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, Iterable, List, Union

from ..config import InspectorConfig
from ..dto import UMI_CODE_LEN, UMIHeader
from ..errors import InvalidCodeError
from ..utils import parse_code


class IdentityFilter(ABC):
    """Predicate over a decoded header."""

    @abstractmethod
    def accept(self, header: UMIHeader) -> bool:
        ...


class AcceptAll(IdentityFilter):
    def accept(self, header: UMIHeader) -> bool:
        return True


class ByCodeSet(IdentityFilter):
    """Keep headers whose code is one of `codes` (each exactly 6 bytes)."""

    def __init__(self, codes: Iterable[bytes]) -> None:
        checked = []
        for code in codes:
            code = bytes(code)
            if len(code) != UMI_CODE_LEN:
                raise InvalidCodeError(f"{code.hex()}: invalid code")
            checked.append(code)
        self._codes: FrozenSet[bytes] = frozenset(checked)

    @property
    def codes(self) -> FrozenSet[bytes]:
        return self._codes

    def accept(self, header: UMIHeader) -> bool:
        return bytes(header.code) in self._codes


class ByOrigin(IdentityFilter):
    """Keep headers whose code starts with `origin`; origin 0 keeps everything."""

    def __init__(self, origin: int) -> None:
        if not 0 <= int(origin) <= 0xFF:
            raise InvalidCodeError(f"{origin}: origin must fit in one byte")
        self._origin = int(origin)

    def accept(self, header: UMIHeader) -> bool:
        return self._origin == 0 or self._origin == header.code[0]


class AllOf(IdentityFilter):
    def __init__(self, *filters: IdentityFilter) -> None:
        self._filters = filters

    def accept(self, header: UMIHeader) -> bool:
        return all(f.accept(header) for f in self._filters)


# === Construction helpers ===


def load_catalog(source: Union[str, Path]) -> List[bytes]:
    """
    Read identity codes, one 12-hex-character code per line.

    `source` is a file path; when no such file exists it is parsed as the
    catalog text itself. Blank lines and '#' comments are skipped; errors
    carry the 1-based line number.
    """
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8") if path.is_file() else str(source)
    except OSError:
        text = str(source)

    codes: List[bytes] = []
    for lino, line in enumerate(text.splitlines(), start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            codes.append(parse_code(line))
        except InvalidCodeError as e:
            raise InvalidCodeError(f"{lino}: {e}") from e
    return codes


def build_filter(cfg: InspectorConfig) -> IdentityFilter:
    """Derive the decoder filter from the configured codes and origin."""
    filters: List[IdentityFilter] = []
    if cfg.codes:
        filters.append(ByCodeSet(parse_code(c) for c in cfg.codes))
    if cfg.origin:
        filters.append(ByOrigin(cfg.origin))

    if not filters:
        return AcceptAll()
    if len(filters) == 1:
        return filters[0]
    return AllOf(*filters)
