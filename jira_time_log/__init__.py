"""jira_time_log package

Log time on Jira issues from shorthand command-line arguments:

    tlog <time> <task> [date|day] [comment]

Public API:
- parse_duration, resolve_task, resolve_day: token parsing
- assemble: build a TimeLogEntry from the raw tokens
- connect_to_jira, submit_worklog: send the entry to Jira
- ensure_credentials: settings and secret helper

CLI entrypoint exposed via setup.py as `tlog`.
"""
from .parsing import parse_duration, resolve_day, resolve_task
from .entry import RawInput, TimeLogEntry, assemble
from .core import WorklogReceipt, connect_to_jira, submit_worklog
from .login_helper import ensure_credentials  # re-export
from .cli import main

__version__ = "0.4.0"

__all__ = [
    "parse_duration",
    "resolve_day",
    "resolve_task",
    "RawInput",
    "TimeLogEntry",
    "assemble",
    "WorklogReceipt",
    "connect_to_jira",
    "submit_worklog",
    "ensure_credentials",
    "main",
    "__version__",
]
