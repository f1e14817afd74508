"""Give arbitrary values typing and versioning semantics.

:class:`Wrapper` is a factory bound to one type tag and one version
constraint. It produces :class:`Wrapped` datagrams that an envelope can seal,
and acts as the decoder that hands the original value back after decryption::

    Foo = Wrapper("foo", "0.1.*")
    blob = box.encrypt(Foo.wrap({"a": 1}, "0.1.0"))
    box.decrypt(Foo, blob)  # -> {"a": 1}
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, TypeVar

import cbor2
from semantic_version import NpmSpec, Version

from ..exceptions import ConfigurationError, VersionConstraintError

__all__ = [
    "Wrapped",
    "Wrapper",
    "parse_constraint",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def parse_constraint(constraint: str | NpmSpec) -> NpmSpec:
    """Parse an npm-style version range such as ``"0.1.*"`` or ``"^1.2.0"``."""

    if isinstance(constraint, NpmSpec):
        return constraint
    if not isinstance(constraint, str):
        raise ConfigurationError("version constraint must be a string or NpmSpec")
    try:
        return NpmSpec(constraint)
    except ValueError as exc:
        raise ConfigurationError(f"invalid version constraint {constraint!r}") from exc


def _parse_version(version: str) -> Optional[Version]:
    if not isinstance(version, str):
        return None
    try:
        return Version(version)
    except ValueError:
        return None


class Wrapper(Generic[T]):
    """Factory for :class:`Wrapped` datagrams sharing a type tag."""

    def __init__(self, type_name: str, version_constraint: str | NpmSpec) -> None:
        if not isinstance(type_name, str) or not type_name:
            raise ConfigurationError("type name must be a non-empty string")
        self._type = type_name
        self._constraint = parse_constraint(version_constraint)

    @property
    def type(self) -> str:
        return self._type

    @property
    def constraint(self) -> NpmSpec:
        return self._constraint

    def accepts(self, version: str) -> bool:
        """Return ``True`` when ``version`` satisfies the factory constraint."""

        parsed = _parse_version(version)
        return parsed is not None and self._constraint.match(parsed)

    def wrap(self, data: T, version: str) -> "Wrapped[T]":
        """Attach the factory type and ``version`` to ``data``.

        Raises :class:`VersionConstraintError` immediately when ``version`` is
        outside the factory constraint.
        """

        if not self.accepts(version):
            raise VersionConstraintError(
                f"invalid version string. {version} not in {self._constraint}"
            )
        return Wrapped(wrapper=self, version=version, data=data)

    def deserialize(self, data: bytes, version: str) -> Optional[T]:
        """Decode a serialised :class:`Wrapped` payload back to its value.

        Returns ``None`` when the bytes are not a wrapped payload, carry a
        different type tag, or ``version`` falls outside the constraint.
        """

        fp = io.BytesIO(data)
        try:
            decoded = cbor2.CBORDecoder(fp).decode()
        except (cbor2.CBORDecodeError, ValueError, TypeError) as exc:
            _LOGGER.debug("wrapped payload for %r is not valid CBOR: %s", self._type, exc)
            return None
        if fp.tell() != len(data):
            _LOGGER.debug("wrapped payload for %r has trailing bytes", self._type)
            return None
        if not isinstance(decoded, Mapping) or "data" not in decoded:
            return None
        if decoded.get("type") != self._type or not self.accepts(version):
            return None
        return decoded["data"]

    def __repr__(self) -> str:
        return f"Wrapper({self.type!r}, {str(self.constraint)!r})"


@dataclass(frozen=True)
class Wrapped(Generic[T]):
    """A value tagged with its factory's type and a concrete version."""

    wrapper: Wrapper[T] = field(repr=False, compare=False)
    version: str
    data: T

    @property
    def type(self) -> str:
        return self.wrapper.type

    def serialize(self) -> bytes:
        return cbor2.dumps(self.to_dict())

    def deserialize(self, data: bytes, version: str) -> Optional[T]:
        return self.wrapper.deserialize(data, version)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "version": self.version, "data": self.data}
