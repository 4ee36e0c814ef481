# src/cipher/filename_codec.py — v1
"""Opaque-token codec for the filename stored in the OpenPGP literal packet.

The source path is embedded as a single token: path separators become
backslashes on the way in and forward slashes on the way out. Parsing of
``gpg --list-packets`` output lives here too, so nothing outside the
cipher package sees either escaping scheme.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

_NAME_RE = re.compile(r'name="((?:[^"\\]|\\.)*)"')
_SANITIZED_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|.)")


def encode_filename(path: str | Path) -> str:
    """Turn a source path into the token passed to ``--set-filename``."""
    token = str(path).replace("/", "\\")
    if os.sep != "/":
        token = token.replace(os.sep, "\\")
    return token


def decode_filename(token: str) -> str:
    """Inverse of encode_filename: restore forward-slash separators."""
    return token.replace("\\", "/")


def _unsanitize(text: str) -> str:
    """Undo gpg's C-style escaping of listed strings."""

    def _replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq.startswith("x") and len(seq) == 3:
            return chr(int(seq[1:], 16))
        if seq in ("\\", '"'):
            return seq
        # Anything else is an unescaped separator followed by a name character.
        return "\\" + seq

    return _SANITIZED_RE.sub(_replace, text)


def parse_listed_name(listing: str) -> str | None:
    """Extract the embedded filename from ``gpg --list-packets`` output.

    Returns None when the literal packet carries no name.
    """
    match = _NAME_RE.search(listing)
    if match is None:
        return None
    token = _unsanitize(match.group(1))
    if not token:
        return None
    return decode_filename(token)
