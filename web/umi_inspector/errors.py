"""
Exceptions raised by the codec, the filters and the decode loop.

EndOfStream is deliberately not a UMIError: it marks the end of a byte
source, not a broken record.
"""

from __future__ import annotations


class UMIError(Exception):
    """Base class for record-level failures."""


class ShortBufferError(UMIError):
    """Buffer smaller than the header, or than header plus declared payload."""


class MissingBytesError(UMIError):
    """Payload copy produced fewer bytes than the declared length."""


class EmptyPayloadError(UMIError):
    """Encoding requested for a packet without payload."""


class InvalidCodeError(UMIError, ValueError):
    """Identity code with the wrong length or unparsable text."""


class FieldRangeError(UMIError, ValueError):
    """Header field value does not fit its wire width."""


class EndOfStream(EOFError):
    """No more packets in the byte source."""
