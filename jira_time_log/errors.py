"""Exceptions raised by jira_time_log.

Every error is terminal for the current invocation: the CLI prints the
message and the user re-runs with corrected input.
"""


class TimeLogError(Exception):
    """Base class for all errors reported to the user."""


class ResolutionError(TimeLogError, ValueError):
    """A command-line token could not be turned into a domain value."""


class InvalidDuration(ResolutionError):
    pass


class InvalidTask(ResolutionError):
    pass


class InvalidDay(ResolutionError):
    pass


class ConfigError(TimeLogError):
    """The settings file is missing values or cannot be parsed."""


class SubmissionFailure(TimeLogError):
    """Jira rejected the worklog or could not be reached."""
