# src/core/models.py — v2
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Command = Literal["encrypt", "decrypt"]

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


# === REQUEST ===


class ProcessingRequest(BaseModel):
    """Resolved configuration of one invocation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    command: Command
    input_path: Path
    output_dir: Path = Path("./")
    output_filename: str | None = None
    randomize: bool = False
    keep_decrypted: bool = True
    recursive: bool = False
    key: str = Field(repr=False)

    @property
    def input_is_dir(self) -> bool:
        return self.input_path.is_dir()


# === PER-FILE ===


class FileTask(BaseModel):
    """One file scheduled by the batch walker."""

    model_config = ConfigDict(frozen=True)

    source_path: Path
    relative_dir: Path = Path()
    recursive: bool = False
    request: ProcessingRequest

    @property
    def output_dir(self) -> Path:
        """Output directory for this file (input tree mirrored below the request's)."""
        return self.request.output_dir / self.relative_dir


class ResolvedOutputPath(BaseModel):
    """Directory + single-segment filename of one output file."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    filename: str

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:  # noqa: N805
        if not v or v in (".", ".."):
            raise ValueError(f"filename must be a single path segment, got {v!r}")
        if any(sep in v for sep in _SEPARATORS):
            raise ValueError(f"filename must not contain separators, got {v!r}")
        return v

    @property
    def directory_str(self) -> str:
        """Directory rendered with a trailing separator (``./`` prefix when relative)."""
        text = str(self.directory)
        if not self.directory.is_absolute() and not text.startswith("."):
            text = "." + os.sep + text
        return text if text.endswith(os.sep) else text + os.sep

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def __str__(self) -> str:
        return self.directory_str + self.filename


# === OUTCOMES ===


class OutcomeRecord(BaseModel):
    """Result of processing one FileTask."""

    source_path: Path
    status: Literal["success", "failure"]
    output: ResolvedOutputPath | None = None
    error: str | None = None
    error_type: str | None = None

    @classmethod
    def success(
        cls, source_path: Path, output: ResolvedOutputPath | None = None,
    ) -> OutcomeRecord:
        return cls(source_path=source_path, status="success", output=output)

    @classmethod
    def failure(cls, source_path: Path, error: Exception) -> OutcomeRecord:
        return cls(
            source_path=source_path,
            status="failure",
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def ok(self) -> bool:
        return self.status == "success"
