import os
import sys
import logging
from dataclasses import dataclass, field

# Exhaustive scan covers label ids [0, MAX_LABEL_ID)
MAX_LABEL_ID = 1000

PERCENT_DIGITS = 2
MEAN_DIGITS = 1

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_NOFILE = 2
EXIT_BADFILE = 3

VERBOSE_ENV = "LABEL_OVERLAP_VERBOSE"

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


@dataclass
class OverlapConfig:
    """
    Options for a single run, built by flag parsing.

    Attributes:
        volume_1 (str): Path to the first labelmap.
        volume_2 (str): Path to the second labelmap.
        label_ids (list): Label ids to compare (explicit mode).
        quiet (bool): Suppress per-label console output (explicit mode only).
        all_labels (bool): Scan every label id below MAX_LABEL_ID.
        log_path (str, optional): File that results are appended to.
        verbose (bool): Report diagnostics such as elapsed time.
    """
    volume_1: str
    volume_2: str
    label_ids: list = field(default_factory=list)
    quiet: bool = False
    all_labels: bool = False
    log_path: str = None
    verbose: bool = False


def verbose_from_env(environ=None):
    """True when the verbose environment variable is set to anything but 0."""
    environ = os.environ if environ is None else environ
    value = environ.get(VERBOSE_ENV, "").strip()
    return value not in ("", "0")


def configure_logging(log_level: str = 'INFO') -> None:
    """
    Sends diagnostics to stderr; stdout carries only the result lines.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # replaces handlers left by an earlier run in the same process
    logging.basicConfig(level=level, handlers=[stderr_handler], force=True)
