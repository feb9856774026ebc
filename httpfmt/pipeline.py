from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from httpfmt.config import FormatterSettings
from httpfmt.diff import char_diff
from httpfmt.errors import FileReadError, FileWriteError
from httpfmt.filewalker import coexistence_warnings, discover, is_http_file
from httpfmt.parser import parse_document
from httpfmt.schemas import DEFAULT_HTTP_VERSION, Diagnostic, Document, FileStatus, Mode, Severity
from httpfmt.serializer import serialize_document
from httpfmt.validator import validate_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    document: Document
    diagnostics: list[Diagnostic]
    original: str
    formatted: str | None

    @property
    def valid(self) -> bool:
        return self.document.valid

    @property
    def changed(self) -> bool:
        return self.formatted is not None and self.formatted != self.original


@dataclass(frozen=True)
class FileReport:
    path: Path
    status: FileStatus
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class RunSummary:
    reports: list[FileReport] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def count(self, status: FileStatus) -> int:
        return sum(1 for r in self.reports if r.status == status)

    @property
    def has_unformatted(self) -> bool:
        return self.count(FileStatus.UNFORMATTED) > 0

    @property
    def has_invalid(self) -> bool:
        return self.count(FileStatus.INVALID) > 0


def format_text(
    text: str, *, path: str = "<text>", default_version: str = DEFAULT_HTTP_VERSION
) -> FormatResult:
    document = parse_document(text, default_version=default_version)
    diagnostics = validate_document(document, path=path)
    formatted = serialize_document(document) if document.valid else None
    return FormatResult(document=document, diagnostics=diagnostics, original=text, formatted=formatted)


def read_text(path: Path) -> str:
    # newline="" keeps CRLF intact so the comparison is against the bytes on disk.
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(path, e) from e


def write_text(path: Path, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise FileWriteError(path, e) from e


def _log_diagnostic(diag: Diagnostic) -> None:
    level = logging.ERROR if diag.severity == Severity.ERROR else logging.WARNING
    logger.log(level, diag.message, extra={"ctx": diag.context()})


def format_file(path: Path, *, settings: FormatterSettings) -> FileReport:
    file = str(path)
    if not is_http_file(path):
        logger.warning("File is not a .http or .rest file, skipping.", extra={"ctx": {"file": file}})
        return FileReport(path=path, status=FileStatus.SKIPPED)

    result = format_text(read_text(path), path=file, default_version=settings.default_http_version)
    for diag in result.diagnostics:
        _log_diagnostic(diag)

    if not result.valid or result.formatted is None:
        logger.error("File is not valid, can't fix, skipping.", extra={"ctx": {"file": file}})
        return FileReport(path=path, status=FileStatus.INVALID, diagnostics=result.diagnostics)

    if not result.changed:
        logger.debug("File is already formatted", extra={"ctx": {"file": file}})
        return FileReport(path=path, status=FileStatus.FORMATTED)

    if settings.mode == Mode.CHECK:
        logger.warning("File is not formatted correctly", extra={"ctx": {"file": file}})
        if settings.verbose:
            logger.info("Expected output", extra={"ctx": {"file": file, "expected": result.formatted}})
            color = settings.color if settings.color is not None else sys.stderr.isatty()
            diff = char_diff(result.original, result.formatted, color=color)
            logger.info("Diff", extra={"ctx": {"file": file, "diff": diff}})
        return FileReport(path=path, status=FileStatus.UNFORMATTED)

    logger.warning("File is not formatted correctly, fixing now.", extra={"ctx": {"file": file}})
    if settings.verbose:
        logger.info("Writing", extra={"ctx": {"file": file, "content": result.formatted}})
    write_text(path, result.formatted)
    return FileReport(path=path, status=FileStatus.FIXED)


def run(paths: Sequence[Path] | None = None, *, settings: FormatterSettings) -> RunSummary:
    """Format explicit `paths`, or every request file found under `settings.root`."""
    summary = RunSummary()
    if paths:
        for path in paths:
            summary.reports.append(format_file(Path(path), settings=settings))
        return summary

    for group in discover(settings.root):
        for warning in coexistence_warnings(group):
            logger.warning(warning, extra={"ctx": {"directory": str(group.directory)}})
            summary.warnings.append(f"{group.directory}: {warning}")
        for path in group.http_files:
            summary.reports.append(format_file(path, settings=settings))
    return summary
