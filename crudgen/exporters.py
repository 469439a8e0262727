# File: crudgen/exporters.py
"""
crudgen - File Emitter
======================
Writes rendered files into the module directory.

For every file: make sure the directory exists, ask before replacing a
file that is already there, write through a temp file, and report the
outcome. A failed file is reported and the remaining files are still
written; nothing written earlier is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from crudgen.console import Console
from crudgen.models import EmittedFile
from crudgen.utils import count_lines, ensure_directory, sha256_hex, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.exporters")


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single written file."""

    key: str
    absolute_path: str
    size_bytes: int
    line_count: int
    sha256: str


@dataclass(frozen=False, slots=True)
class EmitResult:
    """Per-file outcome of ``FileEmitter.emit()``."""

    written: List[FileRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------


class FileEmitter:
    """
    Writes ``EmittedFile`` objects to disk, confirming overwrites.

    Usage::

        emitter = FileEmitter(console)
        result = emitter.emit(files)
    """

    def __init__(self, console: Console, *, encoding: str = "utf-8") -> None:
        self._console: Console = console
        self._encoding: str = encoding

    def emit(self, files: Sequence[EmittedFile]) -> EmitResult:
        result: EmitResult = EmitResult()

        for emitted in files:
            target = emitted.target
            try:
                ensure_directory(emitted.path)
            except OSError as exc:
                self._record_failure(result, emitted, exc)
                continue

            if target.exists():
                if not self._console.confirm(
                    f"The File '{emitted.file_name}' already exists, "
                    "do you want to override the existing file?"
                ):
                    logger.info("Kept existing file %s.", target)
                    result.skipped.append(emitted.key)
                    continue

            try:
                size_bytes: int = write_file(target, emitted.content, self._encoding)
            except (OSError, UnicodeError, LookupError) as exc:
                self._record_failure(result, emitted, exc)
                continue

            result.written.append(
                FileRecord(
                    key=emitted.key,
                    absolute_path=str(target.resolve()),
                    size_bytes=size_bytes,
                    line_count=count_lines(emitted.content),
                    sha256=sha256_hex(emitted.content),
                )
            )
            self._console.output_success(f"Wrote file '{emitted.file_name}'.")

        logger.info(
            "Emitted %d file(s): %d skipped, %d failed.",
            len(result.written),
            len(result.skipped),
            len(result.failed),
        )
        return result

    def _record_failure(
        self, result: EmitResult, emitted: EmittedFile, exc: Exception
    ) -> None:
        error_msg: str = f"Failed to write {emitted.target}: {type(exc).__name__}: {exc}"
        logger.error(error_msg)
        result.failed.append(emitted.key)
        result.errors.append(error_msg)
        self._console.output_error(f"Error while writing file '{emitted.file_name}'.")


__all__: List[str] = [
    "EmitResult",
    "FileEmitter",
    "FileRecord",
]
