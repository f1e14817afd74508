"""End-to-end tests for the command line interface."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from typed_envelopes.cli import load_key, main
from typed_envelopes.exceptions import ConfigurationError


def _run_cli(*args: str, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    root = Path(__file__).resolve().parents[2]
    env = os.environ.copy()
    pythonpath = str(root / "src")
    if env.get("PYTHONPATH"):
        env["PYTHONPATH"] = f"{pythonpath}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = pythonpath
    return subprocess.run(
        [sys.executable, "-m", "typed_envelopes", *args],
        check=check,
        env=env,
        capture_output=True,
    )


@pytest.fixture
def key_file(tmp_path: Path) -> Path:
    path = tmp_path / "key.hex"
    path.write_text("00" * 32 + "\n", encoding="ascii")
    return path


def test_cli_encrypt_inspect_decrypt_roundtrip(tmp_path: Path, key_file: Path) -> None:
    input_file = tmp_path / "message.txt"
    envelope_file = tmp_path / "message.env"
    output_file = tmp_path / "message.out"
    input_file.write_bytes(bytes([1, 2, 3, 4, 5]))

    _run_cli("encrypt", "-k", str(key_file), "-t", "x", "-V", "0.1.0", "-i", str(input_file), "-o", str(envelope_file))

    inspected = _run_cli("inspect", "-i", str(envelope_file), "--json")
    header = json.loads(inspected.stdout)
    assert header["type"] == "x"
    assert header["version"] == "0.1.0"
    assert header["metadata_version"] == "0.1.0"

    _run_cli("decrypt", "-k", str(key_file), "-t", "x", "-i", str(envelope_file), "-o", str(output_file))

    assert output_file.read_bytes() == bytes([1, 2, 3, 4, 5])


def test_cli_decrypt_with_wrong_type_fails(tmp_path: Path, key_file: Path) -> None:
    input_file = tmp_path / "in.bin"
    envelope_file = tmp_path / "in.env"
    input_file.write_bytes(b"payload")

    assert main(["encrypt", "-k", str(key_file), "-t", "foo", "-V", "1.0.0", "-i", str(input_file), "-o", str(envelope_file)]) == 0
    assert main(["decrypt", "-k", str(key_file), "-t", "bar", "-i", str(envelope_file), "-o", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_cli_cipher_must_match(tmp_path: Path, key_file: Path) -> None:
    input_file = tmp_path / "in.bin"
    envelope_file = tmp_path / "in.env"
    output_file = tmp_path / "out.bin"
    input_file.write_bytes(b"payload")

    args = ["-k", str(key_file), "-t", "foo", "--cipher", "aes-256-gcm"]
    assert main(["encrypt", *args, "-V", "2.0.0", "-i", str(input_file), "-o", str(envelope_file)]) == 0
    assert main(["decrypt", "-k", str(key_file), "-t", "foo", "-i", str(envelope_file), "-o", str(output_file)]) == 1
    assert main(["decrypt", *args, "-i", str(envelope_file), "-o", str(output_file)]) == 0
    assert output_file.read_bytes() == b"payload"


def test_cli_inspect_rejects_non_envelope(tmp_path: Path) -> None:
    garbage = tmp_path / "garbage.bin"
    garbage.write_bytes(b"definitely not an envelope")

    assert main(["inspect", "-i", str(garbage)]) == 1


def test_cli_inspect_table_output(tmp_path: Path, key_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_file = tmp_path / "in.bin"
    envelope_file = tmp_path / "in.env"
    input_file.write_bytes(b"payload")
    main(["encrypt", "-k", str(key_file), "-t", "notes", "-V", "1.2.3", "-i", str(input_file), "-o", str(envelope_file)])
    capsys.readouterr()

    assert main(["inspect", "-i", str(envelope_file)]) == 0

    out = capsys.readouterr().out
    assert "notes" in out
    assert "1.2.3" in out


def test_cli_rejects_invalid_version(tmp_path: Path, key_file: Path) -> None:
    input_file = tmp_path / "in.bin"
    input_file.write_bytes(b"payload")

    assert main(["encrypt", "-k", str(key_file), "-t", "foo", "-V", "one", "-i", str(input_file), "-o", str(tmp_path / "o")]) == 1


def test_cli_unknown_command() -> None:
    assert main(["explode"]) == 1
    assert main([]) == 0


def test_load_key_accepts_raw_and_hex(tmp_path: Path) -> None:
    raw = tmp_path / "raw.key"
    raw.write_bytes(b"\x11" * 32)
    hexed = tmp_path / "hex.key"
    hexed.write_text("ab" * 32, encoding="ascii")
    bad = tmp_path / "bad.key"
    bad.write_text("zz" * 32, encoding="ascii")

    assert load_key(str(raw)) == b"\x11" * 32
    assert load_key(str(hexed)) == b"\xab" * 32
    with pytest.raises(ConfigurationError):
        load_key(str(bad))


def test_cli_rejects_prerelease_versions(tmp_path: Path, key_file: Path) -> None:
    input_file = tmp_path / "in.bin"
    input_file.write_bytes(b"payload")
    args = ["encrypt", "-k", str(key_file), "-t", "foo", "-i", str(input_file), "-o", str(tmp_path / "o")]

    assert main([*args, "-V", "1.0.0-rc.1"]) == 1
    assert not (tmp_path / "o").exists()
    assert main([*args, "-V", "1.0.0"]) == 0
