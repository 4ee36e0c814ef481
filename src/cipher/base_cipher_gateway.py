# src/cipher/base_cipher_gateway.py — v1
"""Abstract symmetric cipher interface used by the per-file operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseCipherGateway(ABC):
    """Unified interface for symmetric cipher backends.

    Every method is blocking. Output files are overwritten when present.
    """

    @abstractmethod
    def encrypt_file(self, source: Path, key: str, dest: Path) -> None:
        """Encrypt ``source`` to ``dest``, embedding ``source`` as filename metadata.

        Raises:
            EncryptFailed: If the cipher reports an error.
        """

    @abstractmethod
    def extract_embedded_name(self, source: Path, key: str) -> str | None:
        """Return the filename stored in the ciphertext, without writing output.

        None when absent or unreadable.
        """

    @abstractmethod
    def decrypt_file(self, source: Path, key: str, dest: Path) -> None:
        """Decrypt ``source`` to ``dest``.

        Raises:
            DecryptFailed: If the cipher reports an error.
        """

    @abstractmethod
    def decrypt_to_stream(self, source: Path, key: str) -> bytes:
        """Decrypt ``source`` and return the plaintext.

        Raises:
            DecryptFailed: If the cipher reports an error.
        """
