# src/core/errors.py — v1
"""Error taxonomy and process exit codes.

Configuration errors (missing/invalid input, output conflict, password
mismatch) abort before any file is touched. Per-file errors (directory
creation, placeholder write, cipher failures) are converted by the batch
walker into a failure OutcomeRecord and halt the batch. An input directory
that cannot be listed aborts the batch before any file is processed.
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path


class ExitCode(IntEnum):
    """Process exit codes of the CLI."""

    OK = 0
    GENERAL = 1
    INPUT_MISSING = 2
    INPUT_INVALID = 3
    OUTPUT_CONFLICT = 4
    PASSWORD_MISMATCH = 5
    INTERRUPTED = 130


class SympassError(Exception):
    """Base class for all expected failures."""

    exit_code: ExitCode = ExitCode.GENERAL


# === Configuration errors (fatal, raised before processing) ===


class InvalidCommand(SympassError):
    """Command is neither encrypt nor decrypt."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Invalid command [{command}]")


class InputMissing(SympassError):
    """No input path was given."""

    exit_code = ExitCode.INPUT_MISSING

    def __init__(self) -> None:
        super().__init__("No input specified")


class InputInvalid(SympassError):
    """Input is neither a regular file nor a directory."""

    exit_code = ExitCode.INPUT_INVALID

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Input not valid [{path}]")


class OutputConflict(SympassError):
    """A directory input cannot be written to a single output file."""

    exit_code = ExitCode.OUTPUT_CONFLICT

    def __init__(self, input_path: str | Path, output_filename: str) -> None:
        self.input_path = Path(input_path)
        self.output_filename = output_filename
        super().__init__("Input directory cannot be written to a file")


class PasswordMismatch(SympassError):
    """The two password entries differ."""

    exit_code = ExitCode.PASSWORD_MISMATCH

    def __init__(self) -> None:
        super().__init__("Password mismatch")


class DirectoryReadError(SympassError):
    """A directory of the input tree could not be listed."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        super().__init__(f"Unable to read input directory [{directory}]")


# === Per-file errors (halt the batch) ===


class DirectoryCreateError(SympassError):
    """An output directory could not be created."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        super().__init__(f"Unable to create output directory [{directory}]")


class FileWriteError(SympassError):
    """An output file could not be created or truncated."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Unable to write to file [{path}]")


class EncryptFailed(SympassError):
    def __init__(self, source: str | Path, detail: str = "") -> None:
        self.source = Path(source)
        self.detail = detail
        message = f"Failed to encrypt [{source}]"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DecryptFailed(SympassError):
    def __init__(self, source: str | Path, detail: str = "") -> None:
        self.source = Path(source)
        self.detail = detail
        message = f"Failed to decrypt [{source}]"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
