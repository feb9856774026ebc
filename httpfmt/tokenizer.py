from __future__ import annotations

import re
from collections.abc import Iterator

from httpfmt.schemas import RawBlock

# `###` on its own, or `### <label>`. `####` and `###label` are plain comments.
DELIMITER_RE = re.compile(r"^###(?: .*)?$", re.MULTILINE)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


def split_blocks(text: str) -> list[RawBlock]:
    """Split file text into delimiter-separated segments.

    Every segment is stripped of surrounding whitespace and paired with the
    delimiter line that ends it; the final segment runs to end of file and
    carries an empty delimiter. A file without delimiters is one segment.
    """
    text = normalize_newlines(text)
    blocks: list[RawBlock] = []
    start = 0
    for match in DELIMITER_RE.finditer(text):
        blocks.append(RawBlock(content=text[start : match.start()].strip(), delimiter=match.group(0)))
        start = match.end()
    blocks.append(RawBlock(content=text[start:].strip(), delimiter=""))
    return blocks


def iter_request_blocks(text: str) -> Iterator[RawBlock]:
    for block in split_blocks(text):
        if not block.content:
            continue
        yield block
