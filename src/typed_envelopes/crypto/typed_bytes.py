"""Opaque wrapper around a complete envelope."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..framing.errors import FramingError
from .metadata import AADMeta, unpack

__all__ = ["TypedBytes"]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypedBytes:
    """Bytes produced by :meth:`SecretBox.encrypt`.

    Nothing is validated on construction. If ``buf`` does not start with an
    envelope header, :meth:`inspect` returns ``None`` and decryption fails.
    """

    buf: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.buf, bytes):
            object.__setattr__(self, "buf", bytes(self.buf))

    def inspect(self) -> Optional[AADMeta]:
        """Return the cleartext header without decrypting anything."""

        try:
            return unpack(self.buf).metadata
        except FramingError as exc:
            _LOGGER.debug("cannot inspect envelope header: %s", exc)
            return None

    def __bytes__(self) -> bytes:
        return self.buf

    def __len__(self) -> int:
        return len(self.buf)
