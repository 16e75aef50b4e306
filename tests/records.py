"""Builders for synthetic UMI records used across the tests."""

from __future__ import annotations

from typing import Dict, List, Optional

from umi_inspector import Packet, UMIHeader, UMIPacketState, UMIValueType, encode_header

CODE_A = bytes.fromhex("aabbccddeeff")
CODE_B = bytes.fromhex("0a0b0c0d0e0f")
CODE_C = bytes.fromhex("aa0000000001")


def header(
    code: bytes = CODE_A,
    coarse: int = 0,
    fine: int = 0,
    length: int = 0,
    **overrides,
) -> UMIHeader:
    fields = dict(
        size=25 + length,
        code=code,
        orbit=0x1234,
        state=UMIPacketState.NEW_VALUE,
        type=UMIValueType.INT32,
        unit=7,
        coarse=coarse,
        fine=fine,
        length=length,
    )
    fields.update(overrides)
    return UMIHeader(**fields)


def record(code: bytes = CODE_A, coarse: int = 0, payload: bytes = b"", fine: int = 0) -> bytes:
    """Wire bytes for one record; header-only records are allowed here."""
    return encode_header(header(code, coarse, fine, len(payload))) + payload


def packet(code: bytes = CODE_A, coarse: int = 0, payload: Optional[bytes] = b"\x01\x02") -> Packet:
    return Packet(header=header(code, coarse, length=len(payload or b"")), data=payload)


class ChunkSource:
    """Byte source returning one prepared chunk per read()."""

    def __init__(self, chunks: List[bytes]) -> None:
        self._chunks = list(chunks)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if not self._chunks:
            return b""
        return self._chunks.pop(0)


class CollectingSink:
    def __init__(self) -> None:
        self.buckets = []
        self.gaps = []
        self.rows = []
        self.metrics: Dict[str, int] = {}

    def on_bucket(self, record) -> None:
        self.buckets.append(record)

    def on_gap(self, record) -> None:
        self.gaps.append(record)

    def on_packet(self, row) -> None:
        self.rows.append(row)

    def on_metrics(self, metrics: Dict[str, int]) -> None:
        self.metrics = dict(metrics)
