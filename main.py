"""Backward compatible wrapper.

The project has been packaged. Use the console script `tlog` now.
Running this module directly delegates to `jira_time_log.cli.main`.
"""
import sys

from jira_time_log.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
