# src/cipher/gateway_factory.py — v1
"""Factory: instantiate the cipher gateway from configuration."""

from __future__ import annotations

import logging
import shutil

from sympass.cipher.base_cipher_gateway import BaseCipherGateway
from sympass.config.settings import Settings

logger = logging.getLogger(__name__)


class UnsupportedCipherBackendError(ValueError):
    """Raised when a cipher backend is not supported."""


def create_gateway(settings: Settings) -> BaseCipherGateway:
    """Instantiate the configured cipher gateway.

    Args:
        settings: Application settings (CIPHER_BACKEND, GPG_*).

    Returns:
        Configured BaseCipherGateway instance.

    Raises:
        UnsupportedCipherBackendError: If the backend is not supported.
    """
    backend = settings.cipher_backend

    if backend == "gpg":
        from sympass.cipher.gpg_gateway import GpgCipherGateway

        if shutil.which(settings.gpg_binary) is None:
            # Reported per file as EncryptFailed / DecryptFailed.
            logger.warning("gpg executable not found: %s", settings.gpg_binary)
        return GpgCipherGateway(
            binary=settings.gpg_binary,
            cipher_algo=settings.cipher_algo,
            no_symkey_cache=settings.gpg_no_symkey_cache,
        )

    raise UnsupportedCipherBackendError(
        f"Unsupported cipher backend: {backend!r}. Available: gpg"
    )
