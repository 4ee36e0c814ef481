# src/naming/negotiator.py — v1
"""Output filename policy for encrypt and decrypt.

Encrypt priority: random name (``-z``) > explicit name > ``<source>.gpg``.
Decrypt priority: explicit name > name embedded in the ciphertext >
source name with ``.gpg`` / ``.enc`` stripped. Only the last one is
checked for collisions, gaining a ``-decrypted`` marker when the name is
already taken in the output directory.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from pathlib import Path

from sympass.config.settings import Settings

logger = logging.getLogger(__name__)

EmbeddedNameLookup = Callable[[Path], str | None]

FALLBACK_DECRYPTED_NAME = "decrypted"


# --- Encrypt ---


def random_filename(output_dir: Path, settings: Settings | None = None) -> str:
    """Draw random names until one is free in ``output_dir``.

    Uniqueness holds at selection time only.
    """
    settings = settings or Settings()
    alphabet = settings.random_name_alphabet
    length = settings.random_name_length
    while True:
        name = "".join(secrets.choice(alphabet) for _ in range(length))
        if not (output_dir / name).exists():
            return name
        logger.debug("Random name %s already taken in %s, re-rolling", name, output_dir)


def name_for_encrypt(
    source_path: Path,
    explicit_name: str | None = None,
    randomize: bool = False,
    output_dir: Path = Path("."),
    settings: Settings | None = None,
) -> str:
    """Choose the ciphertext filename for ``source_path``."""
    settings = settings or Settings()
    if randomize:
        return random_filename(output_dir, settings)
    if explicit_name:
        return explicit_name
    return source_path.name + settings.encrypted_suffix


# --- Decrypt ---


def flatten_embedded_name(name: str) -> str:
    """Reduce an embedded name to its final segment.

    Both ``/`` and ``\\`` count as separators regardless of host.
    """
    segments = [s for s in name.replace("\\", "/").split("/") if s not in ("", ".", "..")]
    return segments[-1] if segments else ""


def strip_encrypted_suffixes(name: str, suffixes: list[str]) -> str:
    """Remove encrypted-file suffixes until none remains.

    >>> strip_encrypted_suffixes("secret.txt.gpg.gpg", [".enc", ".gpg"])
    'secret.txt'
    """
    stripped = True
    while stripped:
        stripped = False
        for suffix in suffixes:
            if name.endswith(suffix):
                name = name[: -len(suffix)]
                stripped = True
    return name


def decrypted_collision_name(name: str, marker: str = "-decrypted") -> str:
    """Insert ``marker`` before the final extension.

    ``archive.tar`` -> ``archive-decrypted.tar``; ``README`` -> ``README-decrypted``.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot:
        return name + marker
    return f"{stem}{marker}.{ext}"


def name_for_decrypt(
    source_path: Path,
    explicit_name: str | None = None,
    embedded_name_lookup: EmbeddedNameLookup | None = None,
    output_dir: Path = Path("."),
    settings: Settings | None = None,
) -> str:
    """Choose the plaintext filename for ``source_path``."""
    settings = settings or Settings()

    if explicit_name:
        return explicit_name

    if embedded_name_lookup is not None:
        embedded = embedded_name_lookup(source_path)
        if embedded:
            flat = flatten_embedded_name(embedded)
            if flat:
                logger.debug("Using embedded name %r for %s", flat, source_path)
                return flat

    name = strip_encrypted_suffixes(source_path.name, settings.strip_suffixes_list)
    if not name:
        name = FALLBACK_DECRYPTED_NAME
    if (output_dir / name).exists():
        collided = decrypted_collision_name(name, settings.decrypted_marker)
        logger.info("%s exists in %s, writing %s instead", name, output_dir, collided)
        return collided
    return name
