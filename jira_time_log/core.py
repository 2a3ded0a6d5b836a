import logging
from dataclasses import dataclass

from jira import JIRA
from jira.exceptions import JIRAError
from requests.exceptions import RequestException

from .errors import SubmissionFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorklogReceipt:
    author: str
    issue_id: str
    seconds: int
    url: str

    @property
    def minutes(self):
        return self.seconds // 60


def connect_to_jira(cfg, secret):
    """Build a JIRA client for `cfg`; "token" auth uses the secret as a PAT."""
    logger.debug("Connecting to %s as %s (%s auth)", cfg.jira_url, cfg.jira_username, cfg.auth)
    try:
        if cfg.auth == "token":
            return JIRA(server=cfg.jira_url, token_auth=secret, get_server_info=False)
        return JIRA(server=cfg.jira_url, basic_auth=(cfg.jira_username, secret), get_server_info=False)
    except (JIRAError, RequestException) as e:
        raise SubmissionFailure(f"cannot connect to Jira at {cfg.jira_url}: {_describe(e)}") from e


def _describe(error):
    if isinstance(error, JIRAError):
        return error.text or f"HTTP {error.status_code}"
    return str(error)


def _author_name(worklog):
    """
    Jira Server reports `name`; Cloud only has accountId/displayName.
    """
    author = getattr(worklog, "author", None)
    if author is None:
        return "unknown"
    for attr in ("name", "displayName", "accountId"):
        value = getattr(author, attr, None)
        if value:
            return value
    return "unknown"


def submit_worklog(jira, entry):
    """Create one worklog on `entry.issue_id`. Nothing is retried."""
    logger.debug("Adding worklog %ss on %s started %s", entry.seconds, entry.issue_id, entry.day.isoformat())
    try:
        worklog = jira.add_worklog(
            entry.issue_id,
            timeSpentSeconds=entry.seconds,
            started=entry.day,
            comment=entry.comment or None,
        )
    except (JIRAError, RequestException) as e:
        raise SubmissionFailure(f"could not log time on {entry.issue_id}: {_describe(e)}") from e

    return WorklogReceipt(
        author=_author_name(worklog),
        issue_id=entry.issue_id,
        seconds=int(getattr(worklog, "timeSpentSeconds", entry.seconds)),
        url=getattr(worklog, "self", ""),
    )
