"""
Pytest configuration and fixtures.
"""

import datetime
import sys
from pathlib import Path

import pytest
from dateutil import tz

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from jira_time_log.config import KEYS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own Jira settings out of the tests."""
    for key in KEYS + ("TLOG_CONFIG",):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def now():
    """Thursday 2024-03-14, 10:00 UTC."""
    return datetime.datetime(2024, 3, 14, 10, 0, tzinfo=tz.UTC)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "tlog.env"
    path.write_text(
        "JIRA_URL=https://jira.example.com\n"
        "JIRA_USERNAME=jdoe\n"
        "TLOG_DEFAULT_PROJECT=OPS\n"
        "TLOG_ALIASES=standup=OPS-1, review=OPS-17\n",
        encoding="utf-8",
    )
    return path
