"""
This module contains the configuration defaults for cmdkit commands.
It defines pid file locations, verbosity defaults, logging and argument
encoding settings. Values can be overridden through environment variables
(or a .env file) and, for whitelisted keys, through an overrides JSON file.
"""

import os
import pathlib
import tempfile
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=False)

#* --- Core Paths ---
BASE_DIR = pathlib.Path(os.getenv("CMDKIT_BASE_DIR", os.getcwd())).resolve()
OVERRIDES_JSON_PATH = pathlib.Path(
    os.getenv("CMDKIT_OVERRIDES_PATH", str(BASE_DIR / "cmdkit_overrides.json"))
)

#* --- Pid File Settings ---
# Directory and prefix are concatenated as given, so the directory keeps its trailing separator.
PIDFILES_DIR = os.getenv(
    "CMDKIT_PIDFILES_DIR",
    os.path.join(tempfile.gettempdir(), "cmdkit", ""),
)
PIDFILE_PREFIX = os.getenv("CMDKIT_PIDFILE_PREFIX", "")
PIDFILE_SUFFIX = ".pid"
PID_CHECK_INTERVAL = 1.0  # seconds between real existence checks
DIR_MODE = 0o777          # masked by the process umask

#* --- Output Settings ---
# One of: quiet, normal, verbose, very_verbose, debug
DEFAULT_VERBOSITY = os.getenv("CMDKIT_VERBOSITY", "normal").lower()
PROCESS_TITLE_PREFIX = os.getenv("CMDKIT_PROCESS_TITLE_PREFIX", "cmdkit")

#* --- Logging ---
LOG_FILE = os.getenv("CMDKIT_LOG_FILE", "")

#* --- Argument Encoding ---
ENCODING_CANDIDATES = (
    "utf-8",
    "ascii",
    "iso-8859-2",
    "windows-1251",
    "windows-1252",
    "windows-1254",
)
TARGET_ENCODING = "utf-8"

#* --- Built-in 'wait' Command ---
WAIT_POLL_INTERVAL = 0.25  # seconds

#* --- MODIFIABLE SETTINGS (Changeable through the overrides JSON file) ---
MODIFIABLE_SETTINGS = {
    "PIDFILES_DIR", "PIDFILE_PREFIX",
    "PID_CHECK_INTERVAL",
    "DEFAULT_VERBOSITY", "LOG_FILE",
    "WAIT_POLL_INTERVAL",
}
