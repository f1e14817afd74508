"""Typed, versioned, authenticated binary envelopes."""

from .crypto import (
    METADATA_VERSION,
    AADMeta,
    Datagram,
    DatagramDecoder,
    SecretBox,
    TypedBytes,
    Wrapped,
    Wrapper,
)
from .config import EnvelopeConfig, SUPPORTED_CIPHERS
from .exceptions import ConfigurationError, TypedEnvelopeError, VersionConstraintError
from .framing import FramingError, concat, extract_length_prefixed, length_prefix

__version__ = "0.1.1"

__all__ = [
    "METADATA_VERSION",
    "SUPPORTED_CIPHERS",
    "AADMeta",
    "ConfigurationError",
    "Datagram",
    "DatagramDecoder",
    "EnvelopeConfig",
    "FramingError",
    "SecretBox",
    "TypedBytes",
    "TypedEnvelopeError",
    "VersionConstraintError",
    "Wrapped",
    "Wrapper",
    "concat",
    "extract_length_prefixed",
    "length_prefix",
]
