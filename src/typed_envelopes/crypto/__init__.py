"""Convenience exports for the envelope cryptography helpers."""

from __future__ import annotations

from .aead import (
    AES_256_GCM,
    CHACHA20_POLY1305,
    KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    AEADCipher,
    AESGCMCipher,
    ChaCha20Poly1305Cipher,
    generate_nonce,
)
from .datagram import Datagram, DatagramDecoder
from .errors import AEADError, CryptoError, MetadataError, UnsupportedMetadataVersionError
from .metadata import METADATA_VERSION, AADMeta, UnpackedMetadata, unpack
from .secretbox import SecretBox
from .typed_bytes import TypedBytes
from .wrapper import Wrapped, Wrapper, parse_constraint

__all__ = [
    "AES_256_GCM",
    "CHACHA20_POLY1305",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "METADATA_VERSION",
    "AADMeta",
    "AEADCipher",
    "AEADError",
    "AESGCMCipher",
    "ChaCha20Poly1305Cipher",
    "CryptoError",
    "Datagram",
    "DatagramDecoder",
    "MetadataError",
    "SecretBox",
    "TypedBytes",
    "UnpackedMetadata",
    "UnsupportedMetadataVersionError",
    "Wrapped",
    "Wrapper",
    "generate_nonce",
    "parse_constraint",
    "unpack",
]
