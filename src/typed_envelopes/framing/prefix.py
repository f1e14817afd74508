"""Length-prefixed byte framing helpers."""

from __future__ import annotations

from typing import Iterable

from .errors import TruncatedFrameError
from .varint import decode_uvarint, encode_uvarint

BytesLike = bytes | bytearray | memoryview


class ByteCursor:
    """Forward-only read cursor over an immutable buffer.

    :func:`extract_length_prefixed` advances the cursor in place so that
    successive calls walk a chain of prefixed fields.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: BytesLike, pos: int = 0) -> None:
        self._data = bytes(data)
        if pos < 0 or pos > len(self._data):
            raise ValueError("cursor position out of range")
        self._pos = pos

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._data)

    def read_uvarint(self) -> int:
        value, self._pos = decode_uvarint(self._data, self._pos)
        return value

    def read(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must be non-negative")
        if size > self.remaining:
            raise TruncatedFrameError(
                f"frame needs {size} bytes but only {self.remaining} remain"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def rest(self) -> bytes:
        """Return every unread byte and move the cursor to the end."""

        chunk = self._data[self._pos :]
        self._pos = len(self._data)
        return chunk


def concat(*buffers: BytesLike | Iterable[BytesLike]) -> bytes:
    """Concatenate ``buffers`` in order into a single ``bytes`` object.

    Accepts the buffers either as positional arguments or as one iterable of
    buffers. Every part must support the buffer protocol; anything else
    raises :class:`TypeError`.
    """

    if len(buffers) == 1 and not _is_buffer(buffers[0]):
        buffers = tuple(buffers[0])  # type: ignore[arg-type]
    return b"".join(_as_bytes(buf) for buf in buffers)


def _is_buffer(obj: object) -> bool:
    try:
        memoryview(obj)  # type: ignore[arg-type]
    except TypeError:
        return False
    return True


def _as_bytes(part: object) -> bytes:
    try:
        view = memoryview(part)  # type: ignore[arg-type]
    except TypeError:
        raise TypeError(f"cannot concatenate {type(part).__name__!r}, expected a bytes-like object") from None
    return view.tobytes()


def length_prefix(data: BytesLike) -> bytes:
    """Return ``data`` preceded by the varint encoding of its byte length."""

    raw = _as_bytes(data)
    return concat(encode_uvarint(len(raw)), raw)


def extract_length_prefixed(cursor: ByteCursor) -> bytes:
    """Consume one length-prefixed chunk from ``cursor`` and return it."""

    size = cursor.read_uvarint()
    return cursor.read(size)


__all__ = [
    "ByteCursor",
    "BytesLike",
    "concat",
    "extract_length_prefixed",
    "length_prefix",
]
