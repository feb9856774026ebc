from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_HTTP_VERSION = "HTTP/1.1"

# Header names stay lower-case under these versions.
LOWERCASE_HEADER_VERSIONS = frozenset({"HTTP/2", "HTTP/3"})

NAME_METADATA = "name"


class ParsePhase(str, Enum):
    PRE_REQUEST = "pre_request"
    HEADER = "header"
    BODY = "body"


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class Mode(str, Enum):
    FIX = "fix"
    CHECK = "check"


class FileStatus(str, Enum):
    FORMATTED = "formatted"
    FIXED = "fixed"
    UNFORMATTED = "unformatted"
    INVALID = "invalid"
    SKIPPED = "skipped"


class Header(BaseModel):
    name: str
    value: str = ""


class Metadata(BaseModel):
    name: str
    value: str = ""


class RawBlock(BaseModel):
    """One delimiter-separated segment of a file, before parsing."""

    content: str
    delimiter: str = ""


class RequestBlock(BaseModel):
    comments: list[str] = Field(default_factory=list)
    method: str = ""
    url: str = ""
    version: str = ""
    headers: list[Header] = Field(default_factory=list)
    metadata: list[Metadata] = Field(default_factory=list)
    body: str = ""
    delimiter: str = ""

    @property
    def lowercase_headers(self) -> bool:
        return self.version in LOWERCASE_HEADER_VERSIONS

    def ordered_metadata(self) -> list[Metadata]:
        # The display name always comes last, after every other annotation.
        rest = [m for m in self.metadata if m.name != NAME_METADATA]
        named = [m for m in self.metadata if m.name == NAME_METADATA]
        return rest + named


class Document(BaseModel):
    variables: list[str] = Field(default_factory=list)
    blocks: list[RequestBlock] = Field(default_factory=list)
    valid: bool = True


class Diagnostic(BaseModel):
    severity: Severity = Severity.ERROR
    message: str
    path: str
    block_index: int | None = Field(default=None, ge=0)

    def context(self) -> dict[str, object]:
        ctx: dict[str, object] = {"file": self.path}
        if self.block_index is not None:
            ctx["block"] = self.block_index + 1
        return ctx
