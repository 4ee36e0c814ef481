# src/api/request_builder.py — v1
"""Turn raw command-line values into a validated ProcessingRequest.

Output rules (``-o``):
  - an existing directory, or a value ending in a separator, is the output
    directory;
  - anything else is an output filename; its directory part (if any)
    becomes the output directory.
The default output directory is the current working directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sympass.core.errors import InputInvalid, InputMissing, InvalidCommand, OutputConflict
from sympass.core.models import ProcessingRequest
from sympass.storage.path_resolver import split_path

logger = logging.getLogger(__name__)

COMMANDS = ("encrypt", "decrypt")
DEFAULT_OUTPUT_DIR = Path(".")

_TRUE = {"true", "yes", "y", "1", "on"}
_FALSE = {"false", "no", "n", "0", "off"}


def parse_bool(value: str | bool) -> bool:
    """Parse a -k style boolean ('true', 'false', 'yes', 'no', '1', '0')."""
    if isinstance(value, bool):
        return value
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def resolve_output(output: str | None) -> tuple[Path, str | None]:
    """Split the ``-o`` value into (output directory, explicit filename)."""
    if not output:
        return DEFAULT_OUTPUT_DIR, None
    if Path(output).is_dir() or output.endswith(("/", os.sep)):
        return Path(output), None
    dir_part, file_part = split_path(output)
    return (Path(dir_part) if dir_part else DEFAULT_OUTPUT_DIR), file_part


def build_request(
    command: str,
    input_path: str | None,
    output: str | None = None,
    keep_decrypted: bool = True,
    randomize: bool = False,
    recursive: bool = False,
    key: str = "",
) -> ProcessingRequest:
    """Validate the invocation and build its immutable request.

    Raises:
        InvalidCommand: Command is not encrypt/decrypt.
        InputMissing: No input given.
        InputInvalid: Input is neither a file nor a directory.
        OutputConflict: Directory input with an explicit output filename.
    """
    if command not in COMMANDS:
        raise InvalidCommand(command)
    if not input_path:
        raise InputMissing()

    source = Path(input_path)
    if not source.is_dir() and not source.is_file():
        raise InputInvalid(input_path)

    output_dir, output_filename = resolve_output(output)
    if source.is_dir() and output_filename:
        raise OutputConflict(source, output_filename)

    request = ProcessingRequest(
        command=command,  # type: ignore[arg-type]
        input_path=source,
        output_dir=output_dir,
        output_filename=output_filename,
        randomize=randomize,
        keep_decrypted=keep_decrypted,
        recursive=recursive,
        key=key,
    )
    logger.debug(
        "Resolved %s request: input=%s output_dir=%s output_filename=%s",
        command, source, output_dir, output_filename,
    )
    return request
