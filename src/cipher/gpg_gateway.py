# src/cipher/gpg_gateway.py — v1
"""GnuPG backend: symmetric encryption through the ``gpg`` executable.

The derived key is handed to gpg on stdin (``--passphrase-fd 0``) so it
never appears in the process list.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from sympass.cipher.base_cipher_gateway import BaseCipherGateway
from sympass.cipher.filename_codec import encode_filename, parse_listed_name
from sympass.core.errors import DecryptFailed, EncryptFailed

logger = logging.getLogger(__name__)


class GpgCipherGateway(BaseCipherGateway):
    """Run gpg in batch mode for every operation."""

    def __init__(
        self,
        binary: str = "gpg",
        cipher_algo: str = "AES256",
        no_symkey_cache: bool = True,
    ) -> None:
        self._binary = binary
        self._cipher_algo = cipher_algo
        self._no_symkey_cache = no_symkey_cache

    def _base_args(self) -> list[str]:
        args = [
            self._binary,
            "--quiet",
            "--batch",
            "--yes",
            "--pinentry-mode", "loopback",
            "--passphrase-fd", "0",
        ]
        if self._no_symkey_cache:
            args.append("--no-symkey-cache")
        return args

    def _run(self, args: list[str], key: str) -> subprocess.CompletedProcess[bytes]:
        logger.debug("Running %s", " ".join(args[1:]))
        return subprocess.run(
            args,
            input=(key + "\n").encode("utf-8"),
            capture_output=True,
            check=False,
        )

    @staticmethod
    def _stderr(proc: subprocess.CompletedProcess[bytes]) -> str:
        return proc.stderr.decode("utf-8", errors="replace").strip()

    def encrypt_file(self, source: Path, key: str, dest: Path) -> None:
        args = self._base_args() + [
            "--cipher-algo", self._cipher_algo,
            "--symmetric",
            "--set-filename", encode_filename(source),
            "--output", str(dest),
            str(source),
        ]
        try:
            proc = self._run(args, key)
        except OSError as exc:
            raise EncryptFailed(source, str(exc)) from exc
        if proc.returncode != 0:
            raise EncryptFailed(source, self._stderr(proc))

    def extract_embedded_name(self, source: Path, key: str) -> str | None:
        args = self._base_args() + ["--list-packets", str(source)]
        try:
            proc = self._run(args, key)
        except OSError as exc:
            logger.debug("Cannot list packets of %s: %s", source, exc)
            return None
        if proc.returncode != 0:
            logger.debug("Cannot list packets of %s: %s", source, self._stderr(proc))
            return None
        return parse_listed_name(proc.stdout.decode("utf-8", errors="replace"))

    def decrypt_file(self, source: Path, key: str, dest: Path) -> None:
        args = self._base_args() + ["--decrypt", "--output", str(dest), str(source)]
        try:
            proc = self._run(args, key)
        except OSError as exc:
            raise DecryptFailed(source, str(exc)) from exc
        if proc.returncode != 0:
            raise DecryptFailed(source, self._stderr(proc))

    def decrypt_to_stream(self, source: Path, key: str) -> bytes:
        args = self._base_args() + ["--decrypt", str(source)]
        try:
            proc = self._run(args, key)
        except OSError as exc:
            raise DecryptFailed(source, str(exc)) from exc
        if proc.returncode != 0:
            raise DecryptFailed(source, self._stderr(proc))
        return proc.stdout
