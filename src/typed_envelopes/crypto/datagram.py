"""Protocols describing values an envelope can carry."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar, runtime_checkable

__all__ = [
    "Datagram",
    "DatagramDecoder",
]

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class DatagramDecoder(Protocol[T_co]):
    """Anything that can turn decrypted bytes back into a value.

    ``type`` is the tag the decoder expects in the envelope header.
    ``deserialize`` must return ``None`` instead of raising when the bytes or
    the version do not belong to it.
    """

    @property
    def type(self) -> str:
        ...

    def deserialize(self, data: bytes, version: str) -> Optional[T_co]:
        ...


@runtime_checkable
class Datagram(DatagramDecoder[T_co], Protocol[T_co]):
    """A typed, versioned value that knows how to serialise itself.

    Concrete datagrams usually declare ``type`` as a class attribute and
    ``deserialize`` as a classmethod so the class itself can be handed to
    :meth:`SecretBox.decrypt <typed_envelopes.crypto.secretbox.SecretBox.decrypt>`.
    """

    @property
    def version(self) -> str:
        ...

    def serialize(self) -> bytes:
        ...
