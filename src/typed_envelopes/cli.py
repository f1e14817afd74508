"""Command line interface for typed envelopes."""

from __future__ import annotations

import argparse
import binascii
import json
import string
import sys
from pathlib import Path
from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table

from .config import DEFAULT_CIPHER, SUPPORTED_CIPHERS, EnvelopeConfig
from .crypto import AADMeta, SecretBox, TypedBytes, Wrapper, unpack
from .exceptions import ConfigurationError, TypedEnvelopeError

console = Console()
err_console = Console(stderr=True)

# npm range semantics: "*" matches every release version but no prerelease.
_RELEASE_VERSIONS = "*"


def _read_bytes(path: str | None) -> bytes:
    if not path or path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _write_bytes(path: str | None, data: bytes) -> None:
    if not path or path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    Path(path).write_bytes(data)


def _error(message: object) -> int:
    err_console.print(f"[red]Error:[/red] {message}")
    return 1


def load_key(path: str) -> bytes:
    """Read a key file holding 32 raw bytes or 64 hexadecimal characters."""

    raw = Path(path).read_bytes()
    config = EnvelopeConfig()
    if len(raw) == config.key_size:
        return raw
    text = raw.strip()
    if text and all(chr(byte) in string.hexdigits for byte in text):
        try:
            key = binascii.unhexlify(text)
        except binascii.Error as exc:
            raise ConfigurationError(f"key file {path} is not valid hex") from exc
        if len(key) == config.key_size:
            return key
    raise ConfigurationError(
        f"key file {path} must hold {config.key_size} raw bytes or {config.key_size * 2} hex characters"
    )


def _box_from_args(args: argparse.Namespace) -> SecretBox:
    return SecretBox(load_key(args.key_path), cipher=args.cipher)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-k", "--key", dest="key_path", required=True, help="Key file (32 raw bytes or 64 hex chars)")
    parser.add_argument("-t", "--type", dest="type_name", required=True, help="Payload type tag")
    parser.add_argument("-i", "--input", dest="input_path", default="-", help="Input path (default: stdin)")
    parser.add_argument("-o", "--output", dest="output_path", default="-", help="Output path (default: stdout)")
    parser.add_argument(
        "--cipher",
        choices=SUPPORTED_CIPHERS,
        default=DEFAULT_CIPHER,
        help=f"AEAD cipher (default: {DEFAULT_CIPHER})",
    )


def _handle_encrypt(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(prog="typed-envelopes encrypt", description="Seal a file as a typed envelope.")
    _add_common(parser)
    parser.add_argument(
        "-V",
        "--payload-version",
        dest="payload_version",
        required=True,
        help="Payload version, a release semantic version such as 1.2.0 (prereleases like 1.0.0-rc.1 are rejected)",
    )
    args = parser.parse_args(list(argv))

    try:
        box = _box_from_args(args)
        datagram = Wrapper(args.type_name, _RELEASE_VERSIONS).wrap(_read_bytes(args.input_path), args.payload_version)
        sealed = box.encrypt(datagram)
    except (TypedEnvelopeError, OSError) as exc:
        return _error(exc)

    _write_bytes(args.output_path, bytes(sealed))
    return 0


def _handle_decrypt(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(prog="typed-envelopes decrypt", description="Open a typed envelope.")
    _add_common(parser)
    args = parser.parse_args(list(argv))

    try:
        box = _box_from_args(args)
        blob = TypedBytes(_read_bytes(args.input_path))
    except (TypedEnvelopeError, OSError) as exc:
        return _error(exc)

    plaintext = box.decrypt(Wrapper(args.type_name, _RELEASE_VERSIONS), blob)
    if plaintext is None:
        return _error(f"input is not a valid '{args.type_name}' envelope for this key")
    if not isinstance(plaintext, (bytes, bytearray)):
        return _error("envelope payload is not a byte string")

    _write_bytes(args.output_path, bytes(plaintext))
    return 0


def _describe(metadata: AADMeta, content_length: int) -> dict[str, object]:
    info = metadata.to_dict()
    info["content_length"] = content_length
    return info


def _handle_inspect(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(prog="typed-envelopes inspect", description="Show an envelope header without decrypting.")
    parser.add_argument("-i", "--input", dest="input_path", default="-", help="Envelope path (default: stdin)")
    parser.add_argument("--json", action="store_true", help="Print the header as JSON")
    args = parser.parse_args(list(argv))

    try:
        blob = TypedBytes(_read_bytes(args.input_path))
    except OSError as exc:
        return _error(exc)

    metadata = blob.inspect()
    if metadata is None:
        return _error("input does not start with a recognised envelope header")
    info = _describe(metadata, len(unpack(blob.buf).content))

    if args.json:
        console.print_json(json.dumps(info))
        return 0

    table = Table(title="Envelope header", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key, str(value))
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="typed-envelopes", description="Typed, versioned AEAD envelopes")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("encrypt", help="Seal a file as a typed envelope")
    subparsers.add_parser("decrypt", help="Open a typed envelope")
    subparsers.add_parser("inspect", help="Show an envelope header without a key")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    args = list(argv) if argv is not None else sys.argv[1:]
    if not args:
        build_parser().print_help()
        return 0

    command, rest = args[0], args[1:]

    if command in {"-h", "--help"}:
        build_parser().print_help()
        return 0
    if command == "encrypt":
        return _handle_encrypt(rest)
    if command == "decrypt":
        return _handle_decrypt(rest)
    if command == "inspect":
        return _handle_inspect(rest)

    err_console.print(f"[red]Error:[/red] unknown command '{command}'")
    build_parser().print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
