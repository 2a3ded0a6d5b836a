from __future__ import annotations

import argparse
import datetime
import logging
import re
import sys
from typing import Optional

from .config import Config, config_path, load_config
from .core import connect_to_jira, submit_worklog
from .entry import RawInput, assemble
from .errors import TimeLogError
from .login_helper import clear_stored_credentials, ensure_credentials

USAGE = "tlog [options] <time> <task> [date|day] [comment]"

logger = logging.getLogger(__name__)

# a dash followed by a digit or dot is a negative duration, not an option
_NEGATIVE_TOKEN = re.compile(r"-[0-9.]")
_VALUE_OPTIONS = ("--config",)


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tlog",
        usage=USAGE,
        description="Log time spent on a Jira issue.",
        epilog=(
            "examples: tlog 1h30m 42 | tlog 45m standup yesterday | "
            "tlog 2h PROJ-7 03.14 'code review'"
        ),
    )
    p.add_argument("time", nargs="?", help="Duration, e.g. 1h30m, 45m, 2h.")
    p.add_argument("task", nargs="?", help="Issue key (PROJ-7), issue number in the default project, or alias.")
    p.add_argument("day", nargs="?", default="", help="today (default), yesterday, weekday name, day of month, mm.dd or yyyy.mm.dd.")
    p.add_argument("comment", nargs="?", default="", help="Optional worklog comment.")
    p.add_argument("--config", default=None, help="Path to the settings file (default: ~/.tlog.env or $TLOG_CONFIG).")
    p.add_argument("--login", action="store_true", help="Re-run the interactive setup and store new credentials.")
    p.add_argument("--logout", action="store_true", help="Remove the stored secret from the OS keyring and exit.")
    p.add_argument("--dry-run", action="store_true", help="Show the worklog that would be created, without contacting Jira.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="store_true", help="Print version and exit.")
    return p


def _split_args(argv: list[str]) -> list[str]:
    """Put options first, then "--" and the positionals, so "-30m" stays a duration."""
    options: list[str] = []
    positionals: list[str] = []
    rest = iter(argv)
    for arg in rest:
        if arg == "--":
            positionals.extend(rest)
        elif arg in _VALUE_OPTIONS:
            options.append(arg)
            value = next(rest, None)
            if value is not None:
                options.append(value)
        elif arg.startswith("-") and arg != "-" and not _NEGATIVE_TOKEN.match(arg):
            options.append(arg)
        else:
            positionals.append(arg)
    return options + ["--"] + positionals


def _describe_entry(entry) -> str:
    minutes = entry.seconds // 60
    text = f"{entry.issue_id}: {minutes} minutes on {entry.day.date().isoformat()}"
    if entry.comment:
        text += f" ({entry.comment})"
    return text


def main(argv: list[str] | None = None, now: Optional[datetime.datetime] = None) -> int:
    from . import __version__
    argv = argv if argv is not None else sys.argv[1:]
    p = _parser()
    args = p.parse_args(_split_args(argv))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(__version__)
        return 0

    path = config_path(args.config)

    try:
        if args.logout:
            cfg = load_config(path)
            if not cfg.jira_username:
                print("No username configured; nothing to clear.")
                return 1
            return 0 if clear_stored_credentials(cfg.jira_username) else 1

        if args.login and args.time is None:
            ensure_credentials(path, force_login=True)
            return 0

        if args.time is None or args.task is None:
            print(f"Usage: {USAGE}")
            return 2

        raw = RawInput(duration=args.time, task=args.task, day=args.day, comment=args.comment)

        if args.dry_run:
            cfg = load_config(path) if path.exists() else Config()
            entry = assemble(raw, cfg.aliases, cfg.default_project, now)
            print(f"Would log {_describe_entry(entry)}")
            return 0

        cfg, secret = ensure_credentials(path, force_login=args.login)
        entry = assemble(raw, cfg.aliases, cfg.default_project, now)
        if entry.seconds <= 0:
            print(f"Warning: logging a non-positive duration ({args.time}).")

        print("Logging time... (Jira might be slow)")
        jira = connect_to_jira(cfg, secret)
        receipt = submit_worklog(jira, entry)
    except TimeLogError as e:
        logger.debug("Aborted", exc_info=True)
        print(f"Error: {e}")
        return 1

    print(
        f"Created worklog as {receipt.author} on issue {receipt.issue_id} "
        f"for {receipt.minutes} minutes: {receipt.url}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
