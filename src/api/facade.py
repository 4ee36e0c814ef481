# src/api/facade.py — v2
"""Public API facade — encrypt and decrypt entry points.

Usage:
    from sympass.api.facade import run_command
    result = run_command(request)

Each command checks that the output directory exists or can be created,
then hands the request to the BatchWalker with the matching per-file
operation bound in.
"""

from __future__ import annotations

import functools
import logging
import sys
import uuid
from pathlib import Path
from typing import BinaryIO

from pydantic import ValidationError

from sympass.batch.models import BatchResult
from sympass.batch.walker import BatchWalker
from sympass.cipher.base_cipher_gateway import BaseCipherGateway
from sympass.cipher.gateway_factory import create_gateway
from sympass.config.settings import Settings
from sympass.core.errors import FileWriteError, SympassError
from sympass.core.models import FileTask, OutcomeRecord, ProcessingRequest, ResolvedOutputPath
from sympass.logging.context import set_command_context
from sympass.naming.negotiator import name_for_decrypt, name_for_encrypt
from sympass.storage.path_resolver import ensure_directory, ensure_writable

logger = logging.getLogger(__name__)


# --- Per-file operations ---


def _explicit_name(task: FileTask) -> str | None:
    """The -o filename applies to single-file input only."""
    if task.request.input_path.is_dir():
        return None
    return task.request.output_filename


def _resolve(directory: Path, name: str) -> ResolvedOutputPath:
    """Build the output location; an unusable name fails like an unwritable file."""
    try:
        return ResolvedOutputPath(directory=directory, filename=name)
    except ValidationError as exc:
        raise FileWriteError(directory / name) from exc


def _reserve(task: FileTask, resolved: ResolvedOutputPath) -> bool:
    """Reserve the output location; return True if the file existed before."""
    target = resolved.path
    existed = target.exists()
    if existed and target.samefile(task.source_path):
        raise FileWriteError(target)
    ensure_writable(str(resolved))
    return existed


def _discard_placeholder(target: Path, existed: bool) -> None:
    if existed:
        return
    try:
        target.unlink(missing_ok=True)
    except OSError:
        logger.debug("Could not remove placeholder %s", target)


def encrypt_one(
    task: FileTask, settings: Settings, gateway: BaseCipherGateway,
) -> OutcomeRecord:
    """Encrypt a single file into its output directory."""
    request = task.request
    output_dir = task.output_dir
    name = name_for_encrypt(
        task.source_path,
        explicit_name=_explicit_name(task),
        randomize=request.randomize,
        output_dir=output_dir,
        settings=settings,
    )
    resolved = _resolve(output_dir, name)
    existed = _reserve(task, resolved)

    try:
        gateway.encrypt_file(task.source_path, request.key, resolved.path)
    except SympassError:
        _discard_placeholder(resolved.path, existed)
        raise

    logger.info("Encrypted %s -> %s", task.source_path, resolved)
    return OutcomeRecord.success(task.source_path, resolved)


def decrypt_one(
    task: FileTask,
    settings: Settings,
    gateway: BaseCipherGateway,
    sink: BinaryIO | None = None,
) -> OutcomeRecord:
    """Decrypt a single file, to its output directory or to ``sink``."""
    request = task.request

    if not request.keep_decrypted:
        data = gateway.decrypt_to_stream(task.source_path, request.key)
        out = sink if sink is not None else sys.stdout.buffer
        out.write(data)
        out.flush()
        logger.info("Decrypted %s to stream (%d bytes)", task.source_path, len(data))
        return OutcomeRecord.success(task.source_path)

    output_dir = task.output_dir
    name = name_for_decrypt(
        task.source_path,
        explicit_name=_explicit_name(task),
        embedded_name_lookup=lambda path: gateway.extract_embedded_name(path, request.key),
        output_dir=output_dir,
        settings=settings,
    )
    resolved = _resolve(output_dir, name)
    existed = _reserve(task, resolved)

    try:
        gateway.decrypt_file(task.source_path, request.key, resolved.path)
    except SympassError:
        _discard_placeholder(resolved.path, existed)
        raise

    logger.info("Decrypted %s -> %s", task.source_path, resolved)
    return OutcomeRecord.success(task.source_path, resolved)


# --- Commands ---


def _prepare(
    request: ProcessingRequest,
    settings: Settings | None,
    gateway: BaseCipherGateway | None,
) -> tuple[Settings, BaseCipherGateway]:
    settings = settings or Settings()
    gateway = gateway or create_gateway(settings)
    set_command_context(request.command, uuid.uuid4().hex[:12])
    ensure_directory(request.output_dir)
    return settings, gateway


def encrypt_command(
    request: ProcessingRequest,
    settings: Settings | None = None,
    gateway: BaseCipherGateway | None = None,
    walker: BatchWalker | None = None,
) -> BatchResult:
    """Encrypt a file or directory.

    Raises:
        DirectoryCreateError: If the output directory cannot be created.
    """
    settings, gateway = _prepare(request, settings, gateway)
    walker = walker or BatchWalker()
    operation = functools.partial(encrypt_one, settings=settings, gateway=gateway)
    result = walker.run(request, operation)
    logger.info(
        "Encrypt finished: %d/%d files in %.2fs",
        result.processed, result.total_files_found, result.duration_seconds,
    )
    return result


def decrypt_command(
    request: ProcessingRequest,
    settings: Settings | None = None,
    gateway: BaseCipherGateway | None = None,
    walker: BatchWalker | None = None,
    sink: BinaryIO | None = None,
) -> BatchResult:
    """Decrypt a file or directory.

    With ``keep_decrypted`` off, plaintext goes to ``sink`` (stdout by
    default) and nothing is written to disk.

    Raises:
        DirectoryCreateError: If the output directory cannot be created.
    """
    settings, gateway = _prepare(request, settings, gateway)
    walker = walker or BatchWalker()
    operation = functools.partial(decrypt_one, settings=settings, gateway=gateway, sink=sink)
    result = walker.run(request, operation)
    logger.info(
        "Decrypt finished: %d/%d files in %.2fs",
        result.processed, result.total_files_found, result.duration_seconds,
    )
    return result


def run_command(
    request: ProcessingRequest,
    settings: Settings | None = None,
    gateway: BaseCipherGateway | None = None,
    sink: BinaryIO | None = None,
) -> BatchResult:
    """Dispatch on ``request.command``."""
    if request.command == "encrypt":
        return encrypt_command(request, settings=settings, gateway=gateway)
    return decrypt_command(request, settings=settings, gateway=gateway, sink=sink)
