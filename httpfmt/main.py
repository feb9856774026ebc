from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from httpfmt import __version__
from httpfmt.config import load_settings, write_default_config
from httpfmt.errors import HttpfmtError
from httpfmt.log import setup_logging
from httpfmt.pipeline import run
from httpfmt.schemas import FileStatus, Mode

logger = logging.getLogger(__name__)

PROG = "httpfmt"
DESCRIPTION = "An opinionated .http and .rest files linter and formatter."
ABOUT = "httpfmt formats and lints .http and .rest request files."

_COMMANDS = {"format", "check", "version", "about", "init"}

EXIT_OK = 0
EXIT_UNFORMATTED = 1
EXIT_ERROR = 2


def _directory(value: str) -> Path:
    p = Path(value)
    if not p.is_dir():
        raise argparse.ArgumentTypeError(f"directory not found: {value}")
    return p


def _add_run_args(p: argparse.ArgumentParser, *, with_check_flag: bool) -> None:
    p.add_argument("files", nargs="*", type=Path, help="files to format (default: discover under --root)")
    if with_check_flag:
        p.add_argument("--check", action="store_true", help="only report unformatted files")
    p.add_argument("--verbose", "-v", action="store_true", default=None, help="show expected output")
    p.add_argument("--root", type=_directory, default=None, help="directory to search (default: .)")
    p.add_argument("--config", type=Path, default=None, help=f"path to a {PROG}.yaml config file")
    p.add_argument("--no-color", action="store_true", help="disable colored output")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    format_p = sub.add_parser("format", help="format files in place (default)")
    _add_run_args(format_p, with_check_flag=True)

    check_p = sub.add_parser("check", help="check if files are well formatted")
    _add_run_args(check_p, with_check_flag=False)

    sub.add_parser("version", help=f"print the version number of {PROG}")
    sub.add_parser("about", help=f"show information about {PROG}")

    init_p = sub.add_parser("init", help=f"write a default {PROG}.yaml in the current directory")
    init_p.add_argument("--force", action="store_true", help="overwrite an existing config file")
    return parser


def _normalize_argv(argv: list[str]) -> list[str]:
    # `httpfmt [files...]` and `httpfmt --check` are shorthands for `httpfmt format ...`.
    if not argv:
        return ["format"]
    if argv[0] in _COMMANDS or argv[0] in {"-h", "--help", "--version"}:
        return argv
    return ["format", *argv]


def _exit_code(*, mode: Mode, statuses: list[FileStatus]) -> int:
    if FileStatus.INVALID in statuses:
        return EXIT_UNFORMATTED
    if mode == Mode.CHECK and FileStatus.UNFORMATTED in statuses:
        return EXIT_UNFORMATTED
    return EXIT_OK


def _run_format(args: argparse.Namespace) -> int:
    settings = load_settings(config_path=args.config, root=args.root)
    check = args.cmd == "check" or getattr(args, "check", False)
    settings = settings.with_overrides(
        mode=Mode.CHECK if check else Mode.FIX,
        verbose=args.verbose,
        log_level=args.log_level,
        color=False if args.no_color else None,
    )
    setup_logging(settings.log_level, color=settings.color)

    summary = run(args.files or None, settings=settings)
    statuses = [r.status for r in summary.reports]
    logger.debug(
        "Done",
        extra={"ctx": {status.value: summary.count(status) for status in FileStatus}},
    )
    return _exit_code(mode=settings.mode, statuses=statuses)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_normalize_argv(list(sys.argv[1:] if argv is None else argv)))

    if args.cmd == "version":
        print(f"{PROG} {__version__}")
        return EXIT_OK

    if args.cmd == "about":
        print(ABOUT)
        return EXIT_OK

    setup_logging(color=False if getattr(args, "no_color", False) else None)
    try:
        if args.cmd == "init":
            path = write_default_config(Path.cwd(), force=args.force)
            logger.info("Config file written", extra={"ctx": {"file": str(path)}})
            return EXIT_OK

        if args.cmd in {"format", "check"}:
            return _run_format(args)
    except HttpfmtError as e:
        logger.error(str(e))
        return EXIT_ERROR

    raise AssertionError(f"unhandled cmd: {args.cmd}")
