from __future__ import annotations

from pathlib import Path


class HttpfmtError(Exception):
    pass


class FileAccessError(HttpfmtError):
    verb = "accessing"

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"error {self.verb} file {self.path}: {cause}")


class FileReadError(FileAccessError):
    verb = "reading"


class FileWriteError(FileAccessError):
    verb = "writing"


class ConfigError(HttpfmtError):
    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = str(path) if path is not None else None
        prefix = f"{self.path}: " if self.path else ""
        super().__init__(prefix + str(message))
