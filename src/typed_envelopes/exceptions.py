"""Custom exception hierarchy for the typed envelope toolkit."""
from __future__ import annotations


class TypedEnvelopeError(Exception):
    """Base class for all typed-envelope errors."""


class ConfigurationError(TypedEnvelopeError, ValueError):
    """Raised when caller-supplied keys, nonces or settings are invalid."""


class VersionConstraintError(ConfigurationError):
    """Raised when a wrapped value's version does not satisfy its constraint."""


__all__ = [
    "ConfigurationError",
    "TypedEnvelopeError",
    "VersionConstraintError",
]
