"""
Centralized logging configuration.

The terminal belongs to the frame renderer, so log records are never written
to stdout or stderr: they go to a log file when one is configured and are
discarded otherwise.
"""

import logging
import warnings
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "capitalist_world"

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure the package logger.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Append records to this file; without it records are dropped
    """
    logging.captureWarnings(True)
    if not verbose:
        warnings.filterwarnings("ignore")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.propagate = False

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    package_logger.addHandler(handler)

    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.propagate = False
    warnings_logger.handlers = [handler]

    root_logger = logging.getLogger()
    if not verbose:
        root_logger.setLevel(logging.WARNING)
