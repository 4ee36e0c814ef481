# src/batch/walker.py — v1
"""Batch walker — file discovery and halt-on-first-failure processing.

Workflow:
    1. Enumerate the files of the input (single file, direct children, or full tree)
    2. For each file, in enumeration order, run the bound per-file operation
    3. Record one OutcomeRecord per file; stop after the first failure
    4. Return BatchResult
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path

from sympass.batch.models import BatchResult
from sympass.core.errors import DirectoryReadError, InputInvalid, SympassError
from sympass.core.models import FileTask, OutcomeRecord, ProcessingRequest
from sympass.logging.context import set_file_context

logger = logging.getLogger(__name__)

FileOperation = Callable[[FileTask], OutcomeRecord]


def _raise_unreadable(exc: OSError) -> None:
    raise DirectoryReadError(exc.filename or "") from exc


class BatchWalker:
    """Enumerate the files of a request and process them one by one.

    Enumeration order is the filesystem's own (not sorted). Only regular
    files are collected; symbolic links are neither listed nor followed.
    """

    def enumerate(self, request: ProcessingRequest) -> list[FileTask]:
        """Discover all files to process for ``request``.

        Raises:
            InputInvalid: If the input is neither a file nor a directory.
            DirectoryReadError: If any directory of the input cannot be listed.
        """
        root = request.input_path
        if root.is_file():
            return [FileTask(source_path=root, request=request)]
        if not root.is_dir():
            raise InputInvalid(root)

        if request.recursive:
            tasks = list(self._walk_tree(root, request))
        else:
            tasks = list(self._list_children(root, request))

        logger.info(
            "Found %d files under %s (recursive=%s)",
            len(tasks), root, request.recursive,
        )
        return tasks

    @staticmethod
    def _list_children(root: Path, request: ProcessingRequest) -> Iterator[FileTask]:
        try:
            with os.scandir(root) as entries:
                names = [e.name for e in entries if e.is_file(follow_symlinks=False)]
        except OSError as exc:
            raise DirectoryReadError(root) from exc
        for name in names:
            yield FileTask(source_path=root / name, request=request)

    @staticmethod
    def _walk_tree(root: Path, request: ProcessingRequest) -> Iterator[FileTask]:
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_unreadable, followlinks=False):
            relative_dir = Path(os.path.relpath(dirpath, root))
            for name in filenames:
                path = Path(dirpath) / name
                if path.is_symlink() or not path.is_file():
                    continue
                yield FileTask(
                    source_path=path,
                    relative_dir=relative_dir,
                    recursive=True,
                    request=request,
                )

    def run(self, request: ProcessingRequest, operation: FileOperation) -> BatchResult:
        """Process every file of ``request`` with ``operation``.

        A SympassError raised by ``operation`` becomes the failure record of
        that file and halts the batch. Any other exception propagates, and so
        do enumeration errors, before any file is processed.
        """
        t0 = time.perf_counter()
        tasks = self.enumerate(request)
        outcomes: list[OutcomeRecord] = []

        for index, task in enumerate(tasks, start=1):
            set_file_context(str(task.source_path))
            try:
                outcome = operation(task)
            except SympassError as exc:
                outcome = OutcomeRecord.failure(task.source_path, exc)
            finally:
                set_file_context(None)

            outcomes.append(outcome)
            if not outcome.ok:
                logger.error(
                    "Halting after failure on file %d/%d (%s): %s",
                    index, len(tasks), task.source_path, outcome.error,
                )
                break
            logger.debug("Processed %s", task.source_path)

        return BatchResult(
            input_path=request.input_path,
            total_files_found=len(tasks),
            outcomes=outcomes,
            duration_seconds=round(time.perf_counter() - t0, 3),
        )
