"""
Configuration schema for the archive inspection pipeline.

Keep this lean and opinionated: only the knobs needed by the decode loop
(buffer, payload capture, identity filter), the aggregation stages
(window width, gap threshold) and the emission queue.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import parse_code


class InspectorConfig(BaseModel):
    """
    Centralized, validated configuration for one pass over an archive.
    All durations are seconds; timestamps are UTC seconds since epoch.
    """

    model_config = ConfigDict(frozen=True)  # hashable / safe to share with the producer thread

    # === Decoding ===
    buffer_size: int = Field(
        default=4096,
        ge=25,
        description="Read size handed to the byte source; one read yields one record.",
    )
    capture_payload: bool = Field(
        default=False,
        description="Copy record payloads into decoded packets.",
    )

    # === Identity filter ===
    codes: tuple[str, ...] = Field(
        default=(),
        description="Keep only these identity codes (12 hex characters each). Empty keeps all.",
    )
    origin: int = Field(
        default=0,
        ge=0,
        le=255,
        description="Keep only codes whose first byte equals this origin; 0 keeps all.",
    )

    # === Aggregation ===
    window_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Bucket width for counting; 0 collapses the stream into one bucket per identity.",
    )
    min_gap_seconds: float = Field(
        default=0.0,
        description="Only report gaps at least this long; <= 0 reports every gap.",
    )
    include_header_size: bool = Field(
        default=False,
        description="Listing sizes include the 25-byte header.",
    )

    # === Backpressure / emission ===
    emitter_queue_capacity: int = Field(
        default=1024,
        ge=1,
        description="Bounded queue size between the aggregator and its consumer.",
    )

    @field_validator("codes")
    @classmethod
    def _check_codes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for code in value:
            parse_code(code)
        return tuple(code.lower() for code in value)
