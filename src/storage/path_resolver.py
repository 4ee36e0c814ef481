# src/storage/path_resolver.py — v1
"""Reserve a writable output location before the cipher writes to it.

``ensure_writable`` creates the missing directory prefix of a path and an
empty placeholder file, so a later write failure cannot be caused by the
location itself. When either step fails, the directories created by the
same call are removed again.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sympass.core.errors import DirectoryCreateError, FileWriteError

logger = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\") if os.sep == "\\" else ("/",)


def split_path(path: str | Path) -> tuple[str, str]:
    """Split into (directory prefix, filename).

    A path ending in a separator has no filename part. A bare filename has
    an empty directory prefix.
    """
    text = str(path)
    if text.endswith(_SEPARATORS):
        return text, ""
    cut = max(text.rfind(sep) for sep in _SEPARATORS)
    if cut < 0:
        return "", text
    return text[: cut + 1], text[cut + 1 :]


def _is_writable(path: Path) -> bool:
    return (path.is_dir() or path.is_file()) and os.access(path, os.W_OK)


def _missing_ancestors(directory: Path) -> list[Path]:
    """Directories mkdir -p would create, innermost first."""
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent
    return missing


def _remove_created(created: list[Path]) -> None:
    """Remove directories from ``created`` (innermost first) that now exist."""
    for directory in created:
        if not directory.is_dir():
            continue
        try:
            directory.rmdir()
        except OSError:
            logger.debug("Left directory in place: %s", directory)
            return


def ensure_writable(path: str | Path) -> Path:
    """Make ``path`` a writable location and return it.

    Args:
        path: Target file, or directory when it ends with a separator.

    Returns:
        The path, unchanged.

    Raises:
        DirectoryCreateError: If the directory prefix cannot be created.
        FileWriteError: If the placeholder file cannot be created.
    """
    target = Path(path)
    if _is_writable(target):
        return target

    dir_part, file_part = split_path(path)
    directory = Path(dir_part) if dir_part else None

    created: list[Path] = []
    if directory is not None and not directory.is_dir():
        created = _missing_ancestors(directory)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("mkdir %s failed: %s", directory, exc)
            _remove_created(created)
            raise DirectoryCreateError(dir_part) from exc
        logger.debug("Created output directory %s", directory)

    if file_part:
        try:
            with open(target, "wb"):
                pass
        except OSError as exc:
            logger.debug("Placeholder %s failed: %s", target, exc)
            _remove_created(created)
            raise FileWriteError(path) from exc

    return target


def ensure_directory(directory: str | Path) -> Path:
    """Ensure an output directory exists and is writable.

    Raises:
        DirectoryCreateError: If it cannot be created or is not writable.
    """
    text = str(directory)
    if not text.endswith(_SEPARATORS):
        text += os.sep
    result = ensure_writable(text)
    if not os.access(result, os.W_OK):
        raise DirectoryCreateError(directory)
    return Path(text)
