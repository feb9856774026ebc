from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from httpfmt.errors import ConfigError
from httpfmt.schemas import DEFAULT_HTTP_VERSION, Mode

CONFIG_FILENAME = "httpfmt.yaml"
CONFIG_HEADER = "# httpfmt configuration\n---\n"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class DefaultsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    http_version: str = Field(default=DEFAULT_HTTP_VERSION, pattern=r"^HTTP/\d(\.\d)?$")


class FileConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)


@dataclass(frozen=True)
class FormatterSettings:
    mode: Mode = Mode.FIX
    verbose: bool = False
    root: Path = Path(".")
    default_http_version: str = DEFAULT_HTTP_VERSION
    log_level: str = "INFO"
    color: bool | None = None
    config_path: Path | None = None

    @property
    def check(self) -> bool:
        return self.mode == Mode.CHECK

    def with_overrides(self, **changes: object) -> "FormatterSettings":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_env() -> None:
    # Only a `.env` next to where the tool is run; never walk up into a parent project.
    env_path = find_dotenv(usecwd=True)
    if env_path and Path(env_path).parent == Path.cwd():
        load_dotenv(env_path)


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_file_config(path: Path) -> FileConfig:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path=path) from e
    if data is None:
        return FileConfig()
    if not isinstance(data, dict):
        raise ConfigError("config must be a YAML mapping", path=path)
    try:
        return FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e), path=path) from e


def find_config(root: Path) -> Path | None:
    for candidate in (root / CONFIG_FILENAME, Path.cwd() / CONFIG_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def load_settings(*, config_path: Path | None = None, root: Path | None = None) -> FormatterSettings:
    load_env()
    root = root or Path(".")

    if config_path is None:
        raw = (os.getenv("HTTPFMT_CONFIG") or "").strip()
        config_path = Path(raw) if raw else find_config(root)
        if raw and not config_path.is_file():
            raise ConfigError("config file not found", path=config_path)

    file_config = load_file_config(config_path) if config_path is not None else FileConfig()

    no_color = _env_flag("HTTPFMT_NO_COLOR") or bool(os.getenv("NO_COLOR"))
    return FormatterSettings(
        verbose=bool(_env_flag("HTTPFMT_VERBOSE")),
        root=root,
        default_http_version=file_config.defaults.http_version,
        log_level=(os.getenv("HTTPFMT_LOG_LEVEL") or "INFO").strip().upper(),
        color=False if no_color else None,
        config_path=config_path,
    )


def default_config_text() -> str:
    return CONFIG_HEADER + yaml.safe_dump(FileConfig().model_dump(), sort_keys=False)


def write_default_config(directory: Path, *, force: bool = False) -> Path:
    path = directory / CONFIG_FILENAME
    if path.exists() and not force:
        raise ConfigError("config file already exists (use --force to overwrite)", path=path)
    try:
        path.write_text(default_config_text(), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot write config: {e}", path=path) from e
    return path
