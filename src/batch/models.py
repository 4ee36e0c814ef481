# src/batch/models.py — v2
"""Batch processing models: BatchResult."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from sympass.core.models import OutcomeRecord


class BatchResult(BaseModel):
    """Ordered outcomes of one batch, up to and including the first failure."""

    input_path: Path
    total_files_found: int
    outcomes: list[OutcomeRecord] = Field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def failure(self) -> OutcomeRecord | None:
        """The failure that halted the batch, if any."""
        if self.outcomes and not self.outcomes[-1].ok:
            return self.outcomes[-1]
        return None

    @property
    def succeeded(self) -> bool:
        """True only when every discovered file was processed successfully."""
        return self.failure is None and len(self.outcomes) == self.total_files_found

    @property
    def processed(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def skipped(self) -> int:
        """Files never attempted because of the halt."""
        return self.total_files_found - len(self.outcomes)
