from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .parsing import parse_duration, resolve_day, resolve_task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawInput:
    """The four positional tokens as typed on the command line."""

    duration: str
    task: str
    day: str = ""
    comment: str = ""


@dataclass(frozen=True)
class TimeLogEntry:
    elapsed: datetime.timedelta
    issue_id: str
    day: datetime.datetime
    comment: str = ""

    @property
    def seconds(self) -> int:
        """Whole seconds as sent to Jira; any fraction is dropped, not rounded."""
        return int(self.elapsed.total_seconds())


def assemble(
    raw: RawInput,
    aliases: Mapping[str, str],
    default_project: Optional[str],
    now: Optional[datetime.datetime] = None,
) -> TimeLogEntry:
    """Resolve duration, task and day (in that order) into a TimeLogEntry.

    The first failing token raises; later tokens are not looked at.
    """
    elapsed = parse_duration(raw.duration)
    issue_id = resolve_task(raw.task, default_project, aliases)
    day = resolve_day(raw.day or "", now)

    entry = TimeLogEntry(elapsed=elapsed, issue_id=issue_id, day=day, comment=raw.comment or "")
    logger.debug("Assembled %s", entry)
    return entry
