"""Exception hierarchy for the :mod:`typed_envelopes.crypto` package."""

from __future__ import annotations

from ..exceptions import TypedEnvelopeError
from ..framing.errors import FramingError

__all__ = [
    "CryptoError",
    "AEADError",
    "MetadataError",
    "UnsupportedMetadataVersionError",
]


class CryptoError(TypedEnvelopeError):
    """Base exception for all cryptographic failures within the project."""


class AEADError(CryptoError):
    """Raised when authenticated decryption fails."""


class MetadataError(CryptoError, FramingError):
    """Raised when an envelope header cannot be parsed."""


class UnsupportedMetadataVersionError(MetadataError):
    """Raised when a header was written with an unknown metadata format."""

    def __init__(self, found: str, expected: str) -> None:
        super().__init__("unrecognized metadata format version")
        self.found = found
        self.expected = expected
