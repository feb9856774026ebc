from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from httpfmt.schemas import (
    DEFAULT_HTTP_VERSION,
    Document,
    Header,
    Metadata,
    ParsePhase,
    RequestBlock,
)
from httpfmt.tokenizer import iter_request_blocks

METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

REQUEST_LINE_RE = re.compile(
    r"^(?P<method>" + "|".join(METHODS) + r")\s+(?P<url>.*?)(?:\s+(?P<version>HTTP/\d(?:\.\d)?))?\s*$"
)
# `.`, `'`, `^` and backtick do not break a word, so `x.foo` -> `X.foo`.
_WORD_START_RE = re.compile(r"(?<![0-9A-Za-z_.'^`])[a-z]")

METADATA_PREFIX = "# @"
VARIABLE_PREFIX = "@"
SLASH_COMMENT_PREFIX = "//"


class LineKind(str, Enum):
    BLANK = "blank"
    VARIABLE = "variable"
    METADATA = "metadata"
    COMMENT = "comment"
    REQUEST = "request"
    TEXT = "text"


class Action(str, Enum):
    SKIP = "skip"
    VARIABLE = "variable"
    METADATA = "metadata"
    COMMENT = "comment"
    REQUEST = "request"
    HEADER = "header"
    BODY = "body"
    DROP = "drop"


# (phase, kind) -> (action, next phase)
TRANSITIONS: dict[tuple[ParsePhase, LineKind], tuple[Action, ParsePhase]] = {
    (ParsePhase.PRE_REQUEST, LineKind.BLANK): (Action.SKIP, ParsePhase.PRE_REQUEST),
    (ParsePhase.PRE_REQUEST, LineKind.VARIABLE): (Action.VARIABLE, ParsePhase.PRE_REQUEST),
    (ParsePhase.PRE_REQUEST, LineKind.METADATA): (Action.METADATA, ParsePhase.PRE_REQUEST),
    (ParsePhase.PRE_REQUEST, LineKind.COMMENT): (Action.COMMENT, ParsePhase.PRE_REQUEST),
    (ParsePhase.PRE_REQUEST, LineKind.REQUEST): (Action.REQUEST, ParsePhase.HEADER),
    (ParsePhase.PRE_REQUEST, LineKind.TEXT): (Action.DROP, ParsePhase.PRE_REQUEST),
    (ParsePhase.HEADER, LineKind.BLANK): (Action.SKIP, ParsePhase.BODY),
    (ParsePhase.HEADER, LineKind.VARIABLE): (Action.VARIABLE, ParsePhase.HEADER),
    (ParsePhase.HEADER, LineKind.METADATA): (Action.METADATA, ParsePhase.HEADER),
    (ParsePhase.HEADER, LineKind.COMMENT): (Action.DROP, ParsePhase.HEADER),
    (ParsePhase.HEADER, LineKind.REQUEST): (Action.REQUEST, ParsePhase.HEADER),
    (ParsePhase.HEADER, LineKind.TEXT): (Action.HEADER, ParsePhase.HEADER),
    (ParsePhase.BODY, LineKind.BLANK): (Action.BODY, ParsePhase.BODY),
    (ParsePhase.BODY, LineKind.VARIABLE): (Action.VARIABLE, ParsePhase.BODY),
    (ParsePhase.BODY, LineKind.METADATA): (Action.METADATA, ParsePhase.BODY),
    (ParsePhase.BODY, LineKind.COMMENT): (Action.BODY, ParsePhase.BODY),
    (ParsePhase.BODY, LineKind.REQUEST): (Action.BODY, ParsePhase.BODY),
    (ParsePhase.BODY, LineKind.TEXT): (Action.BODY, ParsePhase.BODY),
}


@dataclass(frozen=True)
class RequestLine:
    method: str
    url: str
    version: str


@dataclass(frozen=True)
class ParsedBlock:
    block: RequestBlock
    variables: list[str] = field(default_factory=list)


def classify_line(line: str) -> LineKind:
    if not line.strip():
        return LineKind.BLANK
    if line.startswith(VARIABLE_PREFIX):
        return LineKind.VARIABLE
    if line.startswith(METADATA_PREFIX):
        return LineKind.METADATA
    if line.startswith("#") or line.startswith(SLASH_COMMENT_PREFIX):
        return LineKind.COMMENT
    if REQUEST_LINE_RE.match(line):
        return LineKind.REQUEST
    return LineKind.TEXT


def parse_request_line(line: str, *, default_version: str = DEFAULT_HTTP_VERSION) -> RequestLine | None:
    m = REQUEST_LINE_RE.match(line)
    if m is None:
        return None
    return RequestLine(
        method=m.group("method"),
        url=m.group("url").strip(),
        version=m.group("version") or default_version,
    )


def title_case_header(name: str) -> str:
    """`content-type` -> `Content-Type`; letters after digits stay as they are."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), name.lower())


def parse_header_line(line: str, *, lowercase: bool = False) -> Header | None:
    if ":" not in line:
        return None
    name, _, value = line.partition(":")
    name = name.strip().lower()
    if not lowercase:
        name = title_case_header(name)
    return Header(name=name, value=value.strip())


def parse_metadata_line(line: str) -> Metadata:
    tokens = line[len(METADATA_PREFIX) :].split()
    if not tokens:
        return Metadata(name="", value="")
    return Metadata(name=tokens[0], value=" ".join(tokens[1:]))


def normalize_comment(line: str) -> str:
    if line.startswith(SLASH_COMMENT_PREFIX):
        return "# " + line[len(SLASH_COMMENT_PREFIX) :].strip(" ")
    return line


def parse_block(
    content: str,
    *,
    delimiter: str = "",
    default_version: str = DEFAULT_HTTP_VERSION,
) -> ParsedBlock:
    block = RequestBlock(delimiter=delimiter)
    variables: list[str] = []
    body: list[str] = []
    phase = ParsePhase.PRE_REQUEST

    for line in content.split("\n"):
        action, phase = TRANSITIONS[(phase, classify_line(line))]

        if action == Action.VARIABLE:
            variables.append(line)
        elif action == Action.METADATA:
            block.metadata.append(parse_metadata_line(line))
        elif action == Action.COMMENT:
            comment = normalize_comment(line)
            # `// @x` becomes `# @x`, which is metadata on every later run.
            if comment.startswith(METADATA_PREFIX):
                block.metadata.append(parse_metadata_line(comment))
            else:
                block.comments.append(comment)
        elif action == Action.REQUEST:
            request = parse_request_line(line, default_version=default_version)
            if request is not None:
                block.method = request.method
                block.url = request.url
                block.version = request.version
        elif action == Action.HEADER:
            header = parse_header_line(line, lowercase=True)
            if header is not None:
                block.headers.append(header)
        elif action == Action.BODY:
            body.append(line)

    # A later request line may change the version, so casing is applied last.
    if not block.lowercase_headers:
        for header in block.headers:
            header.name = title_case_header(header.name)
    block.body = "\n".join(body)
    return ParsedBlock(block=block, variables=variables)


def parse_document(text: str, *, default_version: str = DEFAULT_HTTP_VERSION) -> Document:
    document = Document()
    for raw in iter_request_blocks(text):
        parsed = parse_block(raw.content, delimiter=raw.delimiter, default_version=default_version)
        document.variables.extend(parsed.variables)
        document.blocks.append(parsed.block)
    return document
