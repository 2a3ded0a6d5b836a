"""config

Settings live in a dotenv file (default `~/.tlog.env`, or `$TLOG_CONFIG`):

    JIRA_URL=https://jira.example.com
    JIRA_USERNAME=jdoe
    JIRA_AUTH=basic            # or "token" for a personal access token
    TLOG_DEFAULT_PROJECT=OPS
    TLOG_ALIASES=standup=OPS-1,review=OPS-17

Variables already present in the process environment win over the file.
Secrets are not written here; see login_helper.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values, set_key

from .errors import ConfigError

DEFAULT_CONFIG_NAME = ".tlog.env"
AUTH_MODES = ("basic", "token")

KEYS = (
    "JIRA_URL",
    "JIRA_USERNAME",
    "JIRA_AUTH",
    "JIRA_PASSWORD",
    "JIRA_PAT",
    "TLOG_DEFAULT_PROJECT",
    "TLOG_ALIASES",
)


@dataclass
class Config:
    jira_url: str = ""
    jira_username: str = ""
    auth: str = "basic"
    default_project: str = ""
    aliases: Dict[str, str] = field(default_factory=dict)
    # only set when supplied through the file or environment instead of keyring
    secret: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.jira_url and self.jira_username)


def config_path(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env = os.environ.get("TLOG_CONFIG")
    if env:
        return Path(env).expanduser()
    return Path.home() / DEFAULT_CONFIG_NAME


def parse_aliases(raw: Optional[str]) -> Dict[str, str]:
    """Parse "alias=ISSUE-1,other=ISSUE-2" into a dict.

    Whitespace around names is ignored; alias names stay case-sensitive.
    """
    aliases: Dict[str, str] = {}
    if not raw:
        return aliases
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, issue = pair.partition("=")
        name, issue = name.strip(), issue.strip()
        if not sep or not name or not issue:
            raise ConfigError(f"malformed alias {pair!r} in TLOG_ALIASES, expected name=ISSUE-KEY")
        aliases[name] = issue
    return aliases


def format_aliases(aliases: Dict[str, str]) -> str:
    return ",".join(f"{name}={issue}" for name, issue in aliases.items())


def load_config(path: Path) -> Config:
    values = {k: v for k, v in dotenv_values(path).items() if v is not None} if path.exists() else {}
    for key in KEYS:
        if os.environ.get(key):
            values[key] = os.environ[key]

    auth = (values.get("JIRA_AUTH") or "basic").strip().lower()
    if auth not in AUTH_MODES:
        raise ConfigError(f"JIRA_AUTH must be one of {', '.join(AUTH_MODES)}, got {auth!r}")

    secret_key = "JIRA_PAT" if auth == "token" else "JIRA_PASSWORD"
    return Config(
        jira_url=(values.get("JIRA_URL") or "").strip(),
        jira_username=(values.get("JIRA_USERNAME") or "").strip(),
        auth=auth,
        default_project=(values.get("TLOG_DEFAULT_PROJECT") or "").strip(),
        aliases=parse_aliases(values.get("TLOG_ALIASES")),
        secret=values.get(secret_key) or None,
    )


def save_config(cfg: Config, path: Path) -> Path:
    """Write the non-secret settings to `path`, creating it if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(mode=0o600, exist_ok=True)
    set_key(str(path), "JIRA_URL", cfg.jira_url, quote_mode="never")
    set_key(str(path), "JIRA_USERNAME", cfg.jira_username, quote_mode="never")
    set_key(str(path), "JIRA_AUTH", cfg.auth, quote_mode="never")
    set_key(str(path), "TLOG_DEFAULT_PROJECT", cfg.default_project, quote_mode="never")
    set_key(str(path), "TLOG_ALIASES", format_aliases(cfg.aliases), quote_mode="never")
    return path
