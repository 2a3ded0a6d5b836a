"""parsing

Turns the loose command-line tokens of `tlog` into domain values:

- parse_duration: "1h30m" -> datetime.timedelta
- resolve_task: "42" / alias / "PROJ-7" -> Jira issue key
- resolve_day: "yesterday" / "friday" / "14" / "03.14" / "2023.03.14" -> UTC midnight

All functions are pure; `resolve_day` takes the current instant as a
parameter so callers (and tests) control what "today" means.
"""

from __future__ import annotations

import datetime
import re
from fractions import Fraction
from typing import Mapping, Optional

from dateutil import tz

from .errors import InvalidDay, InvalidDuration, InvalidTask

# nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_NUMBER = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"([-+]?)((?:{_NUMBER}{_UNIT})+)")
_COMPONENT_RE = re.compile(rf"({_NUMBER})({_UNIT})")

_INTEGER_RE = re.compile(r"[-+]?[0-9]+")
_MONTH_DAY_RE = re.compile(r"([0-9]{2})\.([0-9]{2})")
_YEAR_MONTH_DAY_RE = re.compile(r"([0-9]{4})\.([0-9]{2})\.([0-9]{2})")

WEEKDAYS = {
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
    "sunday": 7,  # week ends with sunday
}

DAY_FORMS = "[yy.]mm.dd, day of the week, or day of the month expected"


def parse_duration(token: str) -> datetime.timedelta:
    """Parse a compact duration such as "1h30m", "45m", "1.5h" or "90s".

    Components may come in any order and repeat ("30m1h" == "1h30m").
    A leading sign applies to the whole value. Precision below one
    microsecond is truncated.
    """
    if token in ("0", "+0", "-0"):
        return datetime.timedelta(0)

    match = _DURATION_RE.fullmatch(token)
    if not match:
        raise InvalidDuration(f"invalid duration {token!r}: expected e.g. 1h30m, 45m or 2h")

    sign, body = match.groups()
    nanoseconds = sum(
        Fraction(number) * _UNITS[unit] for number, unit in _COMPONENT_RE.findall(body)
    )
    if sign == "-":
        nanoseconds = -nanoseconds

    try:
        return datetime.timedelta(microseconds=int(nanoseconds / 1000))
    except OverflowError:
        raise InvalidDuration(f"invalid duration {token!r}: value out of range") from None


def is_integer(token: str) -> bool:
    return _INTEGER_RE.fullmatch(token) is not None


def resolve_task(token: str, default_project: Optional[str], aliases: Mapping[str, str]) -> str:
    """Resolve a task token into a Jira issue key.

    Order: exact alias match, bare issue number prefixed with the default
    project, otherwise the token itself (assumed to be a full key).
    Nothing is checked against Jira.
    """
    if token in aliases:
        return aliases[token]

    if not token:
        raise InvalidTask("task is empty: give an issue key, issue number or alias")

    # if token is a number, assume it is the issue number in the default project
    if is_integer(token):
        if not default_project:
            raise InvalidTask(
                "to use bare issue numbers, configure a default project (TLOG_DEFAULT_PROJECT)"
            )
        return f"{default_project}-{token}"

    return token


def weekday_number(name: str) -> Optional[int]:
    """Return 1 (monday) .. 7 (sunday), or None if `name` is not a weekday."""
    return WEEKDAYS.get(name.lower())


def utc_today(now: Optional[datetime.datetime] = None) -> datetime.datetime:
    """UTC midnight of the UTC date of `now` (default: the current time).

    A naive `now` is taken to already be in UTC.
    """
    if now is None:
        now = datetime.datetime.now(tz=tz.UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz.UTC)
    day = now.astimezone(tz.UTC).date()
    return datetime.datetime(day.year, day.month, day.day, tzinfo=tz.UTC)


def _calendar_day(year: int, month: int, day: int) -> datetime.datetime:
    # Day numbers outside the month roll over: day 31 of April is May 1st,
    # day 0 is the last day of the previous month.
    first = datetime.datetime(year, month, 1, tzinfo=tz.UTC)
    return first + datetime.timedelta(days=day - 1)


def resolve_day(token: str, now: Optional[datetime.datetime] = None) -> datetime.datetime:
    """Resolve a day token into a timezone-aware datetime at 00:00 UTC.

    Accepted (case-insensitive):
      ""/"today", "yesterday", a weekday name, a day of the current month,
      "mm.dd" in the current year, "yyyy.mm.dd".

    A weekday name is a plain offset within the Monday..Sunday week of
    `now`, so it can land in the past or in the future.
    """
    today = utc_today(now)
    token = token.lower()

    if token in ("", "today"):
        return today

    if token == "yesterday":
        return today - datetime.timedelta(days=1)

    wanted = weekday_number(token)
    if wanted is not None:
        return today + datetime.timedelta(days=wanted - today.isoweekday())

    try:
        if is_integer(token):
            return _calendar_day(today.year, today.month, int(token))

        match = _MONTH_DAY_RE.fullmatch(token)
        if match:
            month, day = (int(x) for x in match.groups())
            # validated against a leap year so that 02.29 is always accepted
            _check_date(2000, month, day, token)
            return _calendar_day(today.year, month, day)

        match = _YEAR_MONTH_DAY_RE.fullmatch(token)
        if match:
            year, month, day = (int(x) for x in match.groups())
            _check_date(year, month, day, token)
            return datetime.datetime(year, month, day, tzinfo=tz.UTC)
    except OverflowError:
        raise InvalidDay(f"invalid day {token!r}: out of range") from None

    raise InvalidDay(f"invalid day {token!r}: {DAY_FORMS}")


def _check_date(year: int, month: int, day: int, token: str) -> None:
    try:
        datetime.date(year, month, day)
    except ValueError as e:
        raise InvalidDay(f"invalid day {token!r}: {e}") from None
