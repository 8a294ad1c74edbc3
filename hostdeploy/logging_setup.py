"""CLI logging setup: plain console output plus a dated deploy log file."""

import logging
import os
import sys
from datetime import datetime

from hostdeploy.redact import SecretRedactingFilter


def log_file_path(log_dir=".", today=None):
    """Return the path of the dated log file, e.g. ``deploy_20250101.log``."""
    today = today or datetime.now()
    return os.path.abspath(os.path.join(log_dir, f"deploy_{today:%Y%m%d}.log"))


def setup_cli_logging(log_dir=None):
    """Configure root logger for CLI commands.

    Console output uses a plain message format, identical to print(). When
    *log_dir* is given, records are also appended to the dated log file
    with timestamps and levels.

    Returns:
        Path to the log file, or None when no file handler was attached.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    redactor = SecretRedactingFilter()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(redactor)
    root.addHandler(handler)

    if log_dir is None:
        return None

    os.makedirs(log_dir, exist_ok=True)
    log_file = log_file_path(log_dir)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    file_handler.addFilter(redactor)
    root.addHandler(file_handler)
    return log_file
