# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides an in-memory cipher gateway, settings without .env, request
builders and a sample directory tree. No gpg needed except for tests
marked ``gpg``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

import pytest

from sympass.cipher.base_cipher_gateway import BaseCipherGateway
from sympass.cipher.filename_codec import decode_filename, encode_filename
from sympass.config.settings import Settings
from sympass.core.errors import DecryptFailed, EncryptFailed
from sympass.core.models import ProcessingRequest
from sympass.logging.context import clear_context

TEST_KEY = hashlib.sha512(b"correct horse").hexdigest()


class FakeCipherGateway(BaseCipherGateway):
    """Reversible stand-in for gpg.

    Ciphertext layout: magic line, JSON header line (key fingerprint and
    embedded name token), then the plaintext reversed.
    """

    MAGIC = b"FAKE-OPENPGP\n"

    def __init__(self, fail_on: set[str] | None = None, embed_names: bool = True) -> None:
        self.fail_on = fail_on or set()
        self.embed_names = embed_names
        self.calls: list[tuple[str, Path]] = []

    @staticmethod
    def _fingerprint(key: str) -> str:
        return hashlib.sha256(key.encode()).hexdigest()

    def _read(self, source: Path) -> tuple[dict, bytes] | None:
        raw = source.read_bytes()
        if not raw.startswith(self.MAGIC):
            return None
        header, _, body = raw[len(self.MAGIC):].partition(b"\n")
        return json.loads(header), body[::-1]

    def encrypt_file(self, source: Path, key: str, dest: Path) -> None:
        self.calls.append(("encrypt", source))
        if source.name in self.fail_on:
            raise EncryptFailed(source, "simulated failure")
        header = {
            "key": self._fingerprint(key),
            "name": encode_filename(source) if self.embed_names else "",
        }
        data = source.read_bytes()
        dest.write_bytes(self.MAGIC + json.dumps(header).encode() + b"\n" + data[::-1])

    def extract_embedded_name(self, source: Path, key: str) -> str | None:
        self.calls.append(("list", source))
        parsed = self._read(source)
        if parsed is None or parsed[0]["key"] != self._fingerprint(key):
            return None
        return decode_filename(parsed[0]["name"]) or None

    def _decrypt(self, source: Path, key: str) -> bytes:
        if source.name in self.fail_on:
            raise DecryptFailed(source, "simulated failure")
        parsed = self._read(source)
        if parsed is None:
            raise DecryptFailed(source, "no valid OpenPGP data found")
        if parsed[0]["key"] != self._fingerprint(key):
            raise DecryptFailed(source, "decryption failed: Bad session key")
        return parsed[1]

    def decrypt_file(self, source: Path, key: str, dest: Path) -> None:
        self.calls.append(("decrypt", source))
        dest.write_bytes(self._decrypt(source, key))

    def decrypt_to_stream(self, source: Path, key: str) -> bytes:
        self.calls.append(("stream", source))
        return self._decrypt(source, key)


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
    logging.getLogger("sympass").handlers.clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def key() -> str:
    return TEST_KEY


@pytest.fixture
def fake_gateway() -> FakeCipherGateway:
    return FakeCipherGateway()


@pytest.fixture
def failing_gateway():
    """Factory for a gateway failing on the given source basenames."""

    def _make(*names: str, embed_names: bool = True) -> FakeCipherGateway:
        return FakeCipherGateway(fail_on=set(names), embed_names=embed_names)

    return _make


@pytest.fixture
def make_request():
    """Factory for ProcessingRequest with test defaults."""

    def _make(command: str = "encrypt", input_path: Path | str = ".", **kwargs) -> ProcessingRequest:
        kwargs.setdefault("key", TEST_KEY)
        return ProcessingRequest(command=command, input_path=Path(input_path), **kwargs)

    return _make


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Input tree with top-level files and two levels of subdirectories.

    data/
      a.txt, b.txt
      sub/c.txt
      sub/deeper/d.txt
    """
    root = tmp_path / "data"
    for rel, content in [
        ("a.txt", b"alpha"),
        ("b.txt", b"bravo"),
        ("sub/c.txt", b"charlie"),
        ("sub/deeper/d.txt", b"delta"),
    ]:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root
