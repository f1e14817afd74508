"""Symmetric envelope that tags ciphertext with its payload type and version."""

from __future__ import annotations

import logging
from typing import Optional, TypeVar

from ..config import EnvelopeConfig
from ..exceptions import ConfigurationError
from ..framing import FramingError, concat
from .aead import generate_nonce
from .datagram import Datagram, DatagramDecoder
from .errors import AEADError
from .metadata import AADMeta, unpack
from .typed_bytes import TypedBytes

__all__ = ["SecretBox"]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class SecretBox:
    """Authenticated encryption of datagrams under one symmetric key.

    The header produced by :class:`AADMeta` is written in the clear in front
    of the ciphertext and authenticated as associated data, so altering the
    declared type, version or nonce makes decryption fail.

    The key is never mutated after construction and no per-call state is
    kept, so one instance may be shared between threads. Nonce uniqueness is
    the caller's responsibility when a nonce is supplied explicitly.
    """

    def __init__(
        self,
        key: bytes,
        *,
        cipher: Optional[str] = None,
        config: Optional[EnvelopeConfig] = None,
    ) -> None:
        if config is not None and cipher is not None:
            raise ConfigurationError("pass either 'cipher' or 'config', not both")
        if config is None:
            config = EnvelopeConfig() if cipher is None else EnvelopeConfig(cipher=cipher)
        self._config = config
        self._cipher = config.build_cipher(key)

    @property
    def config(self) -> EnvelopeConfig:
        return self._config

    def encrypt(self, obj: Datagram[T], nonce: Optional[bytes] = None) -> TypedBytes:
        """Seal ``obj`` and return the header followed by the ciphertext.

        A fresh random nonce is drawn on every call unless ``nonce`` is given.
        """

        if nonce is None:
            nonce = generate_nonce(self._config.nonce_size)
        elif len(nonce) != self._config.nonce_size:
            raise ConfigurationError(
                f"{self._config.cipher} nonce must be {self._config.nonce_size} bytes long"
            )
        aad = AADMeta(version=obj.version, type=obj.type, nonce=bytes(nonce))
        aad_serialized = aad.serialize()
        sealed = self._cipher.seal(aad.nonce, obj.serialize(), aad_serialized)
        return TypedBytes(concat(aad_serialized, sealed))

    def decrypt(self, decoder: DatagramDecoder[T], typed_bytes: TypedBytes | bytes) -> Optional[T]:
        """Open ``typed_bytes`` and decode it with ``decoder``.

        Returns ``None`` if the header is malformed, authentication fails, the
        decoder rejects the payload or version, or the header's type tag does
        not match ``decoder.type``.
        """

        buf = typed_bytes.buf if isinstance(typed_bytes, TypedBytes) else bytes(typed_bytes)
        try:
            unpacked = unpack(buf)
        except FramingError as exc:
            _LOGGER.debug("rejecting envelope with unreadable header: %s", exc)
            return None

        metadata = unpacked.metadata
        if metadata.type != decoder.type:
            _LOGGER.debug("envelope type %r does not match decoder type %r", metadata.type, decoder.type)
            return None
        if len(metadata.nonce) != self._config.nonce_size:
            _LOGGER.debug("envelope nonce has %d bytes, expected %d", len(metadata.nonce), self._config.nonce_size)
            return None

        try:
            plaintext = self._cipher.open(metadata.nonce, unpacked.content, unpacked.raw_metadata)
        except AEADError as exc:
            _LOGGER.debug("envelope failed authentication: %s", exc)
            return None

        candidate = decoder.deserialize(plaintext, metadata.version)
        if candidate is None:
            _LOGGER.debug("decoder %r rejected %s payload version %s", decoder, metadata.type, metadata.version)
        return candidate

    def __repr__(self) -> str:
        return f"SecretBox(cipher={self._config.cipher!r})"
