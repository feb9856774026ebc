from __future__ import annotations

import difflib

from colorama import Back, Style


def _added(text: str, *, color: bool) -> str:
    return f"{Back.GREEN}{text}{Style.RESET_ALL}" if color else "{+" + text + "+}"


def _removed(text: str, *, color: bool) -> str:
    return f"{Back.RED}{text}{Style.RESET_ALL}" if color else "[-" + text + "-]"


def char_diff(actual: str, expected: str, *, color: bool = True) -> str:
    """Character diff from the file on disk to its formatted form.

    Additions are green and deletions red; without color they are marked
    `{+...+}` and `[-...-]`.
    """
    matcher = difflib.SequenceMatcher(None, actual, expected, autojunk=False)
    out: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            out.append(actual[i1:i2])
            continue
        if tag in ("delete", "replace"):
            out.append(_removed(actual[i1:i2], color=color))
        if tag in ("insert", "replace"):
            out.append(_added(expected[j1:j2], color=color))
    return "".join(out)
