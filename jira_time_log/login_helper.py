"""login_helper

First-run setup and secret handling:
- `setup_config()` asks for username, password (or PAT) and Jira URL, shows a
  summary and repeats until the user confirms.
- `ensure_credentials(path, force_login=False)` runs the setup when the settings
  file does not exist yet (or on `--login`), writes the settings file and
  stores the secret in the OS keyring (`jira-time-log`).
- `get_secret` / `clear_stored_credentials` read and remove the keyring entry.

This keeps secret handling centralized.
"""

from __future__ import annotations

import getpass
import logging
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse

import keyring
from keyring.errors import KeyringError

from .config import Config, load_config, save_config
from .errors import ConfigError

SERVICE = "jira-time-log"

logger = logging.getLogger(__name__)


class SetupCancelled(ConfigError):
    pass


def prompt_visible(prompt: str) -> str:
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        raise SetupCancelled("setup cancelled, nothing was saved") from None


def prompt_hidden(prompt: str) -> str:
    try:
        return getpass.getpass(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        raise SetupCancelled("setup cancelled, nothing was saved") from None


def required(value: str) -> Optional[str]:
    return None if value else "value is required"


def valid_url(value: str) -> Optional[str]:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        return "url must start with http:// or https://"
    if not parsed.netloc:
        return "host is missing"
    return None


def ask(prompt: str, validate: Callable[[str], Optional[str]], hidden: bool = False) -> str:
    """Prompt until `validate` returns no error message."""
    read = prompt_hidden if hidden else prompt_visible
    while True:
        value = read(prompt)
        error = validate(value)
        if error is None:
            return value
        print(f"  {error}")


def setup_config(auth: str = "basic") -> tuple[Config, str]:
    """Interactively collect the Jira settings. Returns (config, secret)."""
    print("Hello there! Let's perform some basic setup.")
    secret_label = "personal access token" if auth == "token" else "password"

    while True:
        username = ask("Enter your Jira username: ", required)
        secret = ask(f"Now enter your {secret_label}: ", required, hidden=True)
        url = ask("Almost done! Now enter the Jira url: ", valid_url)

        print("Got it.")
        print(f"Your login is: {username}")
        print(f"{secret_label.capitalize()} is: {'*' * len(secret)}")
        print(f"Jira url is: {url}")
        answer = prompt_visible("Correct? [y/N]: ").lower()
        if answer in ("y", "yes"):
            return Config(jira_url=url, jira_username=username, auth=auth), secret


def store_secret(username: str, secret: str) -> bool:
    try:
        keyring.set_password(SERVICE, username, secret)
        return True
    except KeyringError as e:
        logger.warning("Could not save secret to keyring: %s", e)
        return False


def get_secret(username: str) -> Optional[str]:
    try:
        return keyring.get_password(SERVICE, username)
    except KeyringError as e:
        logger.warning("Could not access keyring: %s", e)
        return None


def clear_stored_credentials(username: str) -> bool:
    """Clear the stored secret from keyring. Useful for switching accounts."""
    try:
        keyring.delete_password(SERVICE, username)
    except KeyringError as e:
        print(f"Could not clear credentials: {e}")
        return False
    print("Stored credentials cleared from keyring.")
    return True


def ensure_credentials(path: Path, force_login: bool = False) -> tuple[Config, str]:
    """Load settings and secret, running the interactive setup if needed.

    Returns (config, secret). The secret comes from the settings file or
    environment (JIRA_PASSWORD / JIRA_PAT) if present, else from keyring.
    """
    if force_login or not path.exists():
        existing = load_config(path) if path.exists() else Config()
        cfg, secret = setup_config(existing.auth)
        # keep what the wizard does not ask for
        cfg.default_project = existing.default_project
        cfg.aliases = existing.aliases
        save_config(cfg, path)
        print(f"Config saved at: {path}")
        if not store_secret(cfg.jira_username, secret):
            print("Keyring unavailable; set JIRA_PASSWORD or JIRA_PAT in the environment.")
        return cfg, secret

    cfg = load_config(path)
    if not cfg.is_complete:
        raise ConfigError(f"{path} must set JIRA_URL and JIRA_USERNAME (run `tlog --login`)")

    secret = cfg.secret or get_secret(cfg.jira_username)
    if not secret:
        raise ConfigError(
            f"no stored secret for {cfg.jira_username}; run `tlog --login` "
            "or set JIRA_PASSWORD / JIRA_PAT"
        )
    return cfg, secret
