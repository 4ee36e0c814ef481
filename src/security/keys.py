# src/security/keys.py — v1
"""Key derivation from the confirmed password."""

from __future__ import annotations

import hashlib


def derive_key(password: str) -> str:
    """SHA-512 hex digest of the password, used as the gpg passphrase.

    Matches ``printf "%s" "$password" | sha512sum``, so files stay
    interchangeable with the shell helper.
    """
    return hashlib.sha512(password.encode("utf-8")).hexdigest()
