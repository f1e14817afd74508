"""Envelope header record bound to the ciphertext as associated data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..framing import ByteCursor, FramingError, concat, extract_length_prefixed, length_prefix
from .errors import MetadataError, UnsupportedMetadataVersionError

__all__ = [
    "METADATA_VERSION",
    "AADMeta",
    "UnpackedMetadata",
    "unpack",
]

METADATA_VERSION: Final[str] = "0.1.0"


def _decode_text(raw: bytes, *, field: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MetadataError(f"header field '{field}' is not valid UTF-8") from exc


@dataclass(frozen=True)
class AADMeta:
    """Cleartext metadata carried in front of every sealed payload.

    ``version`` and ``type`` describe the payload, ``nonce`` is the nonce the
    payload was sealed with. The metadata format version is not stored on the
    instance; it is always :data:`METADATA_VERSION`.
    """

    version: str
    type: str
    nonce: bytes

    @property
    def metadata_version(self) -> str:
        return METADATA_VERSION

    def serialize(self) -> bytes:
        """Return the wire form of the header.

        The header is four varint-prefixed fields, the whole of which is
        varint-prefixed once more::

            NNxxxxxxxxxxxxxxxxxxxxxxxxx...
              AAxx...BBxx...CCxx...DDxx...

        ``AA`` prefixes the metadata format version, ``BB`` the payload
        version, ``CC`` the payload type tag and ``DD`` the nonce. The nonce is
        prefixed rather than fixed-size so that ciphers with different nonce
        lengths share the format. ``NN`` is the length of the four fields.
        """

        fields = concat(
            length_prefix(self.metadata_version.encode("utf-8")),
            length_prefix(self.version.encode("utf-8")),
            length_prefix(self.type.encode("utf-8")),
            length_prefix(self.nonce),
        )
        return length_prefix(fields)

    @classmethod
    def deserialize(cls, data: bytes) -> "AADMeta":
        """Parse the four header fields from an un-prefixed header body."""

        cursor = ByteCursor(data)
        metadata_version = _decode_text(extract_length_prefixed(cursor), field="metadata_version")
        if metadata_version != METADATA_VERSION:
            raise UnsupportedMetadataVersionError(metadata_version, METADATA_VERSION)
        version = _decode_text(extract_length_prefixed(cursor), field="version")
        type_name = _decode_text(extract_length_prefixed(cursor), field="type")
        nonce = extract_length_prefixed(cursor)
        if not cursor.exhausted:
            raise MetadataError("unexpected additional content in header")
        return cls(version=version, type=type_name, nonce=nonce)

    def to_dict(self) -> dict[str, object]:
        return {
            "metadata_version": self.metadata_version,
            "version": self.version,
            "type": self.type,
            "nonce": self.nonce.hex(),
        }


@dataclass(frozen=True)
class UnpackedMetadata:
    """Result of splitting an envelope into header and sealed content."""

    metadata: AADMeta
    raw_metadata: bytes
    content: bytes


def unpack(data: bytes) -> UnpackedMetadata:
    """Split ``data`` into its parsed header, raw header bytes and content.

    ``raw_metadata`` is the header exactly as it appeared on the wire,
    including its outer length prefix, so it can be used as associated data.
    Raises :class:`MetadataError` when the header is malformed and
    :class:`UnsupportedMetadataVersionError` when it was written in an
    unknown metadata format.
    """

    cursor = ByteCursor(data)
    try:
        header = extract_length_prefixed(cursor)
        metadata = AADMeta.deserialize(header)
    except MetadataError:
        raise
    except FramingError as exc:
        raise MetadataError(f"malformed header: {exc}") from exc
    header_end = cursor.position
    content = cursor.rest()
    return UnpackedMetadata(
        metadata=metadata,
        raw_metadata=bytes(data[:header_end]),
        content=content,
    )
