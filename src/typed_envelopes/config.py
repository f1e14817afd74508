"""Envelope configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .crypto.aead import (
    AES_256_GCM,
    CHACHA20_POLY1305,
    KEY_SIZE,
    AEADCipher,
    AESGCMCipher,
    ChaCha20Poly1305Cipher,
)
from .exceptions import ConfigurationError

_CIPHERS = {
    CHACHA20_POLY1305: ChaCha20Poly1305Cipher,
    AES_256_GCM: AESGCMCipher,
}

SUPPORTED_CIPHERS = tuple(_CIPHERS)
DEFAULT_CIPHER = CHACHA20_POLY1305


@dataclass(frozen=True)
class EnvelopeConfig:
    """Settings shared by every envelope built from the same key."""

    cipher: str = DEFAULT_CIPHER

    def __post_init__(self) -> None:
        if self.cipher not in _CIPHERS:
            supported = ", ".join(SUPPORTED_CIPHERS)
            raise ConfigurationError(f"Unsupported cipher {self.cipher!r}; expected one of: {supported}")

    @property
    def key_size(self) -> int:
        return KEY_SIZE

    @property
    def nonce_size(self) -> int:
        return _CIPHERS[self.cipher].nonce_size

    def build_cipher(self, key: bytes) -> AEADCipher:
        """Return a keyed cipher, raising :class:`ConfigurationError` on a bad key."""

        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise ConfigurationError("key must be bytes")
        if len(key) != self.key_size:
            raise ConfigurationError(f"{self.cipher} key must be {self.key_size} bytes long")
        return _CIPHERS[self.cipher](bytes(key))

    def to_dict(self) -> Dict[str, Any]:
        return {"cipher": self.cipher}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "EnvelopeConfig":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("envelope configuration must be a mapping")
        unknown = set(data) - {"cipher"}
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        cipher = data.get("cipher", DEFAULT_CIPHER)
        if not isinstance(cipher, str):
            raise ConfigurationError("'cipher' must be a string")
        return cls(cipher=cipher.lower())


__all__ = [
    "DEFAULT_CIPHER",
    "EnvelopeConfig",
    "SUPPORTED_CIPHERS",
]
