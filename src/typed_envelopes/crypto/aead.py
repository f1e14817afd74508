"""AEAD cipher adapters used by the envelope."""

from __future__ import annotations

from abc import ABC, abstractmethod
from os import urandom
from typing import Final, Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .errors import AEADError

__all__ = [
    "CHACHA20_POLY1305",
    "AES_256_GCM",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "AEADCipher",
    "AESGCMCipher",
    "ChaCha20Poly1305Cipher",
    "generate_nonce",
]

CHACHA20_POLY1305: Final[str] = "chacha20-poly1305"
AES_256_GCM: Final[str] = "aes-256-gcm"

KEY_SIZE: Final[int] = 32
NONCE_SIZE: Final[int] = 12
TAG_SIZE: Final[int] = 16


class AEADCipher(Protocol):
    """A keyed AEAD primitive: ``seal`` and ``open`` with associated data."""

    name: str
    nonce_size: int

    def seal(self, nonce: bytes, plaintext: bytes, aad: bytes) -> bytes:
        ...

    def open(self, nonce: bytes, sealed: bytes, aad: bytes) -> bytes:
        ...


def generate_nonce(size: int = NONCE_SIZE) -> bytes:
    """Return ``size`` fresh random bytes from :func:`os.urandom`."""

    return urandom(size)


class _CipherBase(ABC):
    name: str
    nonce_size: int = NONCE_SIZE

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise ValueError(f"{self.name} key must be {KEY_SIZE} bytes long.")
        self._aead = self._build(bytes(key))

    @abstractmethod
    def _build(self, key: bytes) -> ChaCha20Poly1305 | AESGCM:
        """Return the keyed primitive from :mod:`cryptography`."""

    def _check_nonce(self, nonce: bytes) -> None:
        if len(nonce) != self.nonce_size:
            raise ValueError(f"{self.name} nonce must be {self.nonce_size} bytes long.")

    def seal(self, nonce: bytes, plaintext: bytes, aad: bytes) -> bytes:
        """Encrypt ``plaintext`` and return ciphertext followed by the tag."""

        self._check_nonce(nonce)
        return self._aead.encrypt(bytes(nonce), bytes(plaintext), bytes(aad))

    def open(self, nonce: bytes, sealed: bytes, aad: bytes) -> bytes:
        """Authenticate and decrypt ``sealed``.

        Raises :class:`AEADError` when the tag does not verify, which covers a
        wrong key as well as tampered ciphertext or associated data.
        """

        self._check_nonce(nonce)
        if len(sealed) < TAG_SIZE:
            raise AEADError("Ciphertext is shorter than the authentication tag length.")
        try:
            return self._aead.decrypt(bytes(nonce), bytes(sealed), bytes(aad))
        except InvalidTag as exc:
            raise AEADError("authentication failed") from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<key redacted>)"


class ChaCha20Poly1305Cipher(_CipherBase):
    """ChaCha20-Poly1305 (RFC 8439) with a 96-bit nonce."""

    name = CHACHA20_POLY1305

    def _build(self, key: bytes) -> ChaCha20Poly1305:
        return ChaCha20Poly1305(key)


class AESGCMCipher(_CipherBase):
    """AES-256-GCM with a 96-bit nonce."""

    name = AES_256_GCM

    def _build(self, key: bytes) -> AESGCM:
        return AESGCM(key)
