"""Byte framing utilities for envelope headers."""

from .errors import FramingError, TruncatedFrameError, VarintError
from .prefix import ByteCursor, concat, extract_length_prefixed, length_prefix
from .varint import decode_uvarint, encode_uvarint, encoding_length

__all__ = [
    "FramingError",
    "TruncatedFrameError",
    "VarintError",
    "ByteCursor",
    "concat",
    "extract_length_prefixed",
    "length_prefix",
    "decode_uvarint",
    "encode_uvarint",
    "encoding_length",
]
