"""CLI sub-commands."""

import logging
import sys

logger = logging.getLogger(__name__)


def abort(log_file):
    """Print the generic failure message and exit with code 1."""
    where = log_file or "the output above"
    logger.error(f"[ERROR] Something went wrong. Check {where} for details.")
    sys.exit(1)
