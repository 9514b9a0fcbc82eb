# marketpush/config/logging_config.py

"""Per-run logging for marketpush.

Every launch writes ``logs/run_<timestamp>.log`` with DEBUG detail for
all ``marketpush.*`` loggers, while the console only shows warnings so
the TUI and the JSON output of the CLI stay readable.

Credentials never reach a log record: exporters log the configuration
*key* they resolved, never its value.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from marketpush.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Transport loggers of the model SDK log every request at INFO
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "google_genai")


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach file and console handlers to the ``marketpush`` logger.

    Args:
        logs_dir: Directory for the run log, ``Settings.LOGS_DIR`` when
            omitted.

    Returns:
        Path of the log file for this run.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("marketpush")
    root_logger.setLevel(logging.DEBUG)

    # Already configured (repeated calls from tests or the TUI)
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info("Logging initialised, run log: %s", log_file)
    return log_file
