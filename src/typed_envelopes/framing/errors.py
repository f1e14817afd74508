"""Exception types for the framing subsystem."""

from __future__ import annotations

from ..exceptions import TypedEnvelopeError


class FramingError(TypedEnvelopeError):
    """Base class for framing related errors."""


class VarintError(FramingError):
    """Raised when a varint is truncated, oversized or non-canonical."""


class TruncatedFrameError(FramingError):
    """Raised when a length prefix claims more bytes than remain."""
