import datetime

import pytest
from dateutil import tz

from jira_time_log.entry import RawInput, TimeLogEntry, assemble
from jira_time_log import entry as entry_module
from jira_time_log.errors import InvalidDay, InvalidDuration, InvalidTask


def test_assemble_end_to_end(now):
    result = assemble(RawInput("1h", "42", "", ""), aliases={}, default_project="OPS", now=now)
    assert result == TimeLogEntry(
        elapsed=datetime.timedelta(hours=1),
        issue_id="OPS-42",
        day=datetime.datetime(2024, 3, 14, tzinfo=tz.UTC),
        comment="",
    )


def test_assemble_defaults_day_and_comment(now):
    result = assemble(RawInput("30m", "PROJ-1"), {}, None, now)
    assert result.day == datetime.datetime(2024, 3, 14, tzinfo=tz.UTC)
    assert result.comment == ""


def test_assemble_keeps_comment_verbatim(now):
    result = assemble(RawInput("30m", "standup", "yesterday", "  daily sync  "), {"standup": "OPS-1"}, "", now)
    assert result.issue_id == "OPS-1"
    assert result.comment == "  daily sync  "
    assert result.day == datetime.datetime(2024, 3, 13, tzinfo=tz.UTC)


@pytest.mark.parametrize(
    "raw, error",
    [
        (RawInput("soon", "42", "nope"), InvalidDuration),
        (RawInput("1h", "42", "nope"), InvalidTask),
        (RawInput("1h", "PROJ-1", "nope"), InvalidDay),
    ],
)
def test_assemble_reports_first_failure(raw, error, now):
    with pytest.raises(error):
        assemble(raw, {}, "", now)


def test_assemble_stops_at_first_failure(monkeypatch, now):
    calls = []
    monkeypatch.setattr(entry_module, "resolve_task", lambda *a: calls.append("task"))
    monkeypatch.setattr(entry_module, "resolve_day", lambda *a: calls.append("day"))
    with pytest.raises(InvalidDuration):
        assemble(RawInput("bad", "42"), {}, "OPS", now)
    assert calls == []


@pytest.mark.parametrize(
    "elapsed, seconds",
    [
        (datetime.timedelta(hours=1, minutes=30), 5400),
        (datetime.timedelta(seconds=59, microseconds=999999), 59),
        (datetime.timedelta(0), 0),
    ],
)
def test_seconds_truncates_fraction(elapsed, seconds, now):
    entry = TimeLogEntry(elapsed=elapsed, issue_id="OPS-1", day=now)
    assert entry.seconds == seconds


def test_assemble_rejects_empty_task(now):
    with pytest.raises(InvalidTask):
        assemble(RawInput("1h", ""), {}, "OPS", now)
