from __future__ import annotations

from httpfmt.parser import ParsedBlock, parse_block, parse_document
from httpfmt.pipeline import FileReport, FormatResult, RunSummary, format_file, format_text, run
from httpfmt.schemas import (
    Diagnostic,
    Document,
    FileStatus,
    Header,
    Metadata,
    Mode,
    RawBlock,
    RequestBlock,
)
from httpfmt.serializer import serialize_document
from httpfmt.tokenizer import split_blocks
from httpfmt.validator import validate_document

__all__ = [
    "__version__",
    # Schemas
    "Document",
    "RequestBlock",
    "RawBlock",
    "Header",
    "Metadata",
    "Diagnostic",
    "FileStatus",
    "Mode",
    # Core
    "split_blocks",
    "parse_block",
    "parse_document",
    "ParsedBlock",
    "validate_document",
    "serialize_document",
    # Pipeline
    "format_text",
    "format_file",
    "run",
    "FormatResult",
    "FileReport",
    "RunSummary",
]

__version__ = "0.1.0"
