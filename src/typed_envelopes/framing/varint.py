"""Unsigned base-128 varint codec.

Values are split into 7-bit groups, least significant group first. Every byte
but the last has its high bit set. Values are limited to 64 bits, so an
encoding is at most ten bytes long.
"""

from __future__ import annotations

from typing import Final

from .errors import VarintError

MAX_UVARINT: Final[int] = (1 << 64) - 1
MAX_UVARINT_LENGTH: Final[int] = 10

_CONTINUATION: Final[int] = 0x80
_GROUP_MASK: Final[int] = 0x7F


def encoding_length(value: int) -> int:
    """Return the number of bytes :func:`encode_uvarint` emits for ``value``."""

    if value < 0:
        raise ValueError("value must be non-negative")
    return max(1, (value.bit_length() + 6) // 7)


def encode_uvarint(value: int) -> bytes:
    """Encode ``value`` as a varint."""

    if not 0 <= value <= MAX_UVARINT:
        raise ValueError(f"varint value out of range: {value}")
    length = encoding_length(value)
    groups = [(value >> (7 * i)) & _GROUP_MASK for i in range(length)]
    return bytes(group | _CONTINUATION for group in groups[:-1]) + bytes(groups[-1:])


def decode_uvarint(data: bytes, start: int = 0) -> tuple[int, int]:
    """Decode one varint from ``data`` at ``start``.

    Returns ``(value, next_index)``. Raises :class:`VarintError` when the varint
    runs past the end of ``data``, exceeds 64 bits or is not minimally encoded.
    """

    if start < 0:
        raise ValueError("start must be non-negative")
    value = 0
    for offset, byte in enumerate(data[start : start + MAX_UVARINT_LENGTH]):
        value |= (byte & _GROUP_MASK) << (7 * offset)
        if byte & _CONTINUATION:
            continue
        if value > MAX_UVARINT:
            raise VarintError("varint too large")
        if offset and byte == 0:
            raise VarintError("non-canonical varint")
        return value, start + offset + 1
    if len(data) - start >= MAX_UVARINT_LENGTH:
        raise VarintError("varint too large")
    raise VarintError("truncated varint")
