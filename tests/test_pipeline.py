from __future__ import annotations

import logging
from pathlib import Path

import pytest

from httpfmt.config import FormatterSettings
from httpfmt.diff import char_diff
from httpfmt.errors import FileReadError
from httpfmt.pipeline import format_file, format_text, run
from httpfmt.schemas import FileStatus, Mode
from httpfmt.validator import MISSING_METHOD, MISSING_URL
from tests.helpers import CANONICAL, INVALID, MESSY, MESSY_FORMATTED


def _messages(caplog: pytest.LogCaptureFixture, level: int) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.levelno == level]


def test_format_text_reports_change() -> None:
    result = format_text(MESSY)
    assert result.valid
    assert result.changed
    assert result.formatted == MESSY_FORMATTED


def test_format_text_invalid_has_no_output() -> None:
    result = format_text(INVALID, path="x.http")
    assert not result.valid
    assert result.formatted is None
    assert not result.changed
    assert [d.message for d in result.diagnostics] == [MISSING_METHOD, MISSING_URL]


def test_fix_mode_rewrites_file(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("api.http", MESSY)
    with caplog.at_level(logging.INFO):
        report = format_file(p, settings=FormatterSettings())
    assert report.status == FileStatus.FIXED
    assert p.read_bytes().decode("utf-8") == MESSY_FORMATTED
    assert "File is not formatted correctly, fixing now." in _messages(caplog, logging.WARNING)


def test_second_run_is_a_no_op(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("api.rest", MESSY)
    format_file(p, settings=FormatterSettings())
    caplog.clear()
    with caplog.at_level(logging.INFO):
        report = format_file(p, settings=FormatterSettings())
    assert report.status == FileStatus.FORMATTED
    assert p.read_bytes().decode("utf-8") == MESSY_FORMATTED
    assert _messages(caplog, logging.WARNING) == []


def test_check_mode_never_writes(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("api.http", MESSY)
    settings = FormatterSettings(mode=Mode.CHECK, verbose=True)
    with caplog.at_level(logging.INFO):
        report = format_file(p, settings=settings)
    assert report.status == FileStatus.UNFORMATTED
    assert p.read_bytes().decode("utf-8") == MESSY
    assert "File is not formatted correctly" in _messages(caplog, logging.WARNING)
    expected = [r for r in caplog.records if r.getMessage() == "Expected output"]
    assert expected and expected[0].ctx["expected"] == MESSY_FORMATTED


def test_verbose_check_logs_a_diff(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("api.http", MESSY)
    settings = FormatterSettings(mode=Mode.CHECK, verbose=True, color=False)
    with caplog.at_level(logging.INFO):
        format_file(p, settings=settings)
    diffs = [r for r in caplog.records if r.getMessage() == "Diff"]
    assert diffs and diffs[0].ctx["diff"] == char_diff(MESSY, MESSY_FORMATTED, color=False)


def test_slash_metadata_comment_reaches_a_fixed_point() -> None:
    first = format_text("// @a 1\n# c\nGET http://x\n").formatted
    assert first == "# c\n# @a 1\nGET http://x HTTP/1.1\n"
    assert format_text(first).formatted == first


def test_already_formatted_file_is_untouched(write_http) -> None:
    p = write_http("api.http", CANONICAL)
    before = p.stat().st_mtime_ns
    report = format_file(p, settings=FormatterSettings())
    assert report.status == FileStatus.FORMATTED
    assert p.stat().st_mtime_ns == before


def test_invalid_file_is_left_alone(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("broken.http", INVALID)
    with caplog.at_level(logging.INFO):
        report = format_file(p, settings=FormatterSettings(mode=Mode.FIX))
    assert report.status == FileStatus.INVALID
    assert p.read_bytes().decode("utf-8") == INVALID
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert [r.getMessage() for r in errors] == [
        MISSING_METHOD,
        MISSING_URL,
        "File is not valid, can't fix, skipping.",
    ]
    assert all(r.ctx["file"] == str(p) for r in errors)


def test_wrong_extension_is_skipped(write_http, caplog: pytest.LogCaptureFixture) -> None:
    p = write_http("notes.txt", MESSY)
    with caplog.at_level(logging.INFO):
        report = format_file(p, settings=FormatterSettings())
    assert report.status == FileStatus.SKIPPED
    assert p.read_bytes().decode("utf-8") == MESSY
    assert "File is not a .http or .rest file, skipping." in _messages(caplog, logging.WARNING)


def test_crlf_file_is_rewritten_with_lf(write_http) -> None:
    p = write_http("api.http", "GET http://example.com HTTP/1.1\r\nAccept: */*\r\n")
    report = format_file(p, settings=FormatterSettings())
    assert report.status == FileStatus.FIXED
    assert p.read_bytes() == b"GET http://example.com HTTP/1.1\nAccept: */*\n"


def test_unreadable_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(FileReadError, match="missing.http"):
        format_file(tmp_path / "missing.http", settings=FormatterSettings())


def test_default_version_from_settings(write_http) -> None:
    p = write_http("api.http", "GET http://example.com\ncontent-type: text/plain\n")
    format_file(p, settings=FormatterSettings(default_http_version="HTTP/2"))
    assert p.read_text(encoding="utf-8") == (
        "GET http://example.com HTTP/2\ncontent-type: text/plain\n"
    )


def test_run_explicit_paths_in_order(write_http) -> None:
    a = write_http("a.http", MESSY)
    b = write_http("b.http", INVALID)
    summary = run([a, b], settings=FormatterSettings(mode=Mode.CHECK))
    assert [(r.path, r.status) for r in summary.reports] == [
        (a, FileStatus.UNFORMATTED),
        (b, FileStatus.INVALID),
    ]
    assert summary.has_unformatted and summary.has_invalid


def test_run_discovers_files_and_warns(
    tmp_path: Path, write_http, caplog: pytest.LogCaptureFixture
) -> None:
    write_http("api/users.http", MESSY)
    write_http("api/legacy.rest", CANONICAL)
    write_http("api/.env", "TOKEN=1\n")
    write_http("api/http-client.env.json", "{}\n")
    write_http("node_modules/pkg/x.http", MESSY)

    with caplog.at_level(logging.INFO):
        summary = run(settings=FormatterSettings(root=tmp_path))

    assert sorted((r.path.name, r.status) for r in summary.reports) == [
        ("legacy.rest", FileStatus.FORMATTED),
        ("users.http", FileStatus.FIXED),
    ]
    assert len(summary.warnings) == 2
    dirs = {r.ctx["directory"] for r in caplog.records if "directory" in getattr(r, "ctx", {})}
    assert dirs == {str(tmp_path / "api")}
    assert (tmp_path / "node_modules/pkg/x.http").read_text(encoding="utf-8") == MESSY
