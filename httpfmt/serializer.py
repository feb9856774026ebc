from __future__ import annotations

from httpfmt.schemas import Document, Metadata, RequestBlock


def format_metadata(metadata: Metadata) -> str:
    return f"# @{metadata.name} {metadata.value}"


def format_request_line(block: RequestBlock) -> str:
    line = f"{block.method} {block.url}"
    if block.version:
        line += f" {block.version}"
    return line


def serialize_block(block: RequestBlock) -> str:
    out: list[str] = []
    for comment in block.comments:
        out.append(comment + "\n")
    for metadata in block.ordered_metadata():
        out.append(format_metadata(metadata) + "\n")
    out.append(format_request_line(block) + "\n")
    for header in block.headers:
        out.append(f"{header.name}: {header.value}\n")
    if block.body:
        out.append("\n" + block.body + "\n")
    return "".join(out)


def serialize_document(document: Document) -> str:
    out: list[str] = []
    for variable in document.variables:
        out.append(variable + "\n")
    if document.variables:
        out.append("\n")

    last = len(document.blocks) - 1
    for idx, block in enumerate(document.blocks):
        out.append(serialize_block(block))
        if idx != last:
            out.append("\n" + block.delimiter + "\n\n")
    return "".join(out)
