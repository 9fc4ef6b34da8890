"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, TextIO

import httpx
from pydantic import ValidationError
from pydantic_settings import SettingsError

from .bootstrap import ServiceContainer
from .logging_config import configure_logging
from .modules.reconcile.domain import DisplayFormat, ReconcileError, to_display
from .modules.reconcile.service import RunSummary
from .settings import Settings

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repodiff",
        description="List artifacts in a local repository that are missing from a remote repository.",
    )
    parser.add_argument("-l", "--local", dest="local_path", help="Local repository root directory")
    parser.add_argument("-r", "--remote", dest="remote_url", help="Remote repository base URL")
    parser.add_argument(
        "-i",
        "--ignore",
        dest="ignored_groups",
        action="append",
        metavar="GROUP",
        help="Group to ignore (repeatable, exact match)",
    )
    parser.add_argument("-a", "--archive", dest="archive_path", help="Write missing files to this tar archive")
    parser.add_argument(
        "-d",
        "--display",
        dest="display_format",
        metavar="{path,short,long}",
        help="How to print missing artifacts (default: long)",
    )
    parser.add_argument("-w", "--workers", type=int, help="Concurrent remote checks")
    parser.add_argument("-t", "--timeout", dest="request_timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--deadline", dest="deadline_seconds", type=float, help="Stop issuing checks after N seconds")
    parser.add_argument("-v", "--verbose", dest="verbosity", action="count", help="More log output (repeatable)")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def render_summary(summary: RunSummary, settings: Settings, out: TextIO) -> None:
    display_format = DisplayFormat.from_label(settings.display_format)
    report = summary.report
    for entry in report.missing:
        print(f"Missing: {to_display(entry.coordinate, display_format)}", file=out)
    print(
        f"[Missing {report.missing_count} of {report.total} dependencies ({summary.elapsed:.0f}s)]",
        file=out,
    )
    if report.cancelled:
        print(f"[Stopped early: {report.skipped} dependencies not checked]", file=out)
    if summary.archive is not None and summary.archive.omitted:
        print(f"[{len(summary.archive.omitted)} files omitted from archive]", file=out)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    client: Optional[httpx.Client] = None,
    out: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        settings = load_settings(args)
    except (ValidationError, SettingsError) as exc:
        parser.error(f"invalid configuration: {exc}")
    missing_options: List[str] = [
        flag for flag, value in (("--local", settings.local_path), ("--remote", settings.remote_url)) if not value
    ]
    if missing_options:
        parser.error(f"the following arguments are required: {', '.join(missing_options)}")

    configure_logging(settings.verbosity)

    print(
        f"Dependencies in local ({settings.local_path}) missing from remote ({settings.remote_url})...",
        file=out,
    )
    if settings.archive_path:
        print(f"Archiving missing files to: {settings.archive_path}", file=out)

    try:
        with ServiceContainer(settings, client=client) as container:
            summary = container.reconcile_service.run()
    except ReconcileError as exc:
        log.error("%s", exc)
        print(f"repodiff: error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("repodiff: interrupted", file=sys.stderr)
        return 130

    render_summary(summary, settings, out)
    return 0


def run() -> None:
    sys.exit(main())
