from __future__ import annotations

from httpfmt.schemas import Diagnostic, Document, RequestBlock, Severity

MISSING_METHOD = "Section is missing method"
MISSING_URL = "Section is missing URL"


def validate_block(block: RequestBlock, *, path: str, index: int) -> list[Diagnostic]:
    # Both checks always run so a block missing both fields reports twice.
    diagnostics: list[Diagnostic] = []
    if not block.method:
        diagnostics.append(
            Diagnostic(severity=Severity.ERROR, message=MISSING_METHOD, path=path, block_index=index)
        )
    if not block.url:
        diagnostics.append(
            Diagnostic(severity=Severity.ERROR, message=MISSING_URL, path=path, block_index=index)
        )
    return diagnostics


def validate_document(document: Document, *, path: str) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for index, block in enumerate(document.blocks):
        diagnostics.extend(validate_block(block, path=path, index=index))
    if diagnostics:
        document.valid = False
    return diagnostics
