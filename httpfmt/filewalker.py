from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

HTTP_SUFFIXES = (".http", ".rest")
DOTENV_NAME = ".env"
HTTP_CLIENT_ENV_NAME = "http-client.env.json"

_IGNORED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    "dist",
    "build",
}


def is_ignored_dir(name: str) -> bool:
    return name in _IGNORED_DIRS or name.endswith(".egg-info")


def is_http_file(path: Path | str) -> bool:
    return str(path).endswith(HTTP_SUFFIXES)


def is_dotenv(path: Path) -> bool:
    return path.name == DOTENV_NAME


def is_http_client_env(path: Path) -> bool:
    return path.name == HTTP_CLIENT_ENV_NAME


def is_candidate(name: str) -> bool:
    return name.endswith(HTTP_SUFFIXES) or name in (DOTENV_NAME, HTTP_CLIENT_ENV_NAME)


@dataclass
class FileGroup:
    directory: Path
    files: list[Path] = field(default_factory=list)

    @property
    def http_files(self) -> list[Path]:
        return [p for p in self.files if is_http_file(p)]

    def has_dotenv_and_http_client_env(self) -> bool:
        return any(is_dotenv(p) for p in self.files) and any(
            is_http_client_env(p) for p in self.files
        )

    def has_http_and_rest(self) -> bool:
        suffixes = {p.suffix for p in self.files}
        return ".http" in suffixes and ".rest" in suffixes


def discover(root: Path) -> list[FileGroup]:
    """Walk `root` and group request files (plus env files) by directory."""
    groups: list[FileGroup] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not is_ignored_dir(d))
        files = [Path(dirpath) / name for name in sorted(filenames) if is_candidate(name)]
        if files:
            groups.append(FileGroup(directory=Path(dirpath), files=files))
    return groups


def coexistence_warnings(group: FileGroup) -> list[str]:
    warnings: list[str] = []
    if group.has_dotenv_and_http_client_env():
        warnings.append(
            "You have both .env and http-client.env.json files in the same directory. "
            "This is not recommended."
        )
    if group.has_http_and_rest():
        warnings.append(
            "You have both .rest and .http files in the same directory. This is not recommended."
        )
    return warnings
