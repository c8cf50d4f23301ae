import sys
import logging
from typing import Optional

from cmdkit.config import effective_settings as config
from cmdkit.output import Verbosity

# Command output routed through LoggerOutput is already user-facing text.
OUTPUT_LOGGER_PREFIX = "cmdkit.output"


class MainFormatter(logging.Formatter):
    """A formatter printing command output raw and everything else with the full log prefix."""

    def __init__(self) -> None:
        super().__init__('%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s')

    def format(self, record):
        if record.name.startswith(OUTPUT_LOGGER_PREFIX):
            return record.getMessage()
        return super().format(record)


def setup_logging(verbosity: Verbosity = Verbosity.NORMAL, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for a command run.
    Clears previously configured handlers so repeated runs in one process
    do not duplicate output.

    :param verbosity: Tier selected for the invocation; sets the console handler level.
    :param log_file: Optional file that receives every record down to DEBUG.
    """
    verbosity = Verbosity.parse(verbosity)

    root_logger = logging.getLogger()
    # Set root level to lowest to capture all messages for handler filtering
    root_logger.setLevel(logging.DEBUG)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(verbosity.logging_level)
    console_handler.setFormatter(MainFormatter())
    root_logger.addHandler(console_handler)

    # --- File Handler (optional) ---
    log_file = log_file if log_file is not None else config.LOG_FILE
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(MainFormatter())
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.error(f"Failed to open log file '{log_file}': {e}. Logging to file will be disabled.")
