import re
import psutil
import logging
from typing import Optional

log = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"^(pid|rnd)_([1-9][0-9]*)$")


def current_pid() -> Optional[int]:
    """Returns the pid of this process, or None where the platform refuses to tell."""
    try:
        return psutil.Process().pid
    except psutil.Error as e:
        log.debug(f"Process identifier unavailable: {e}")
        return None


def parse_token(token: str) -> Optional[int]:
    """
    Extracts the pid from a `pid_<N>` token.

    :return: The pid, or None for `rnd_` tokens and malformed content.
    """
    match = TOKEN_PATTERN.match(token.strip())
    if not match or match.group(1) != "pid":
        return None
    return int(match.group(2))


def get_proc_status_string(pid: Optional[int]) -> str:
    """Gets a short status label for the process behind a pid file."""
    if pid is None:
        return "unknown"
    try:
        proc = psutil.Process(pid)
        if proc.status() == psutil.STATUS_ZOMBIE:
            return "zombie"
        return "running"
    except psutil.NoSuchProcess:
        return "stopped"
    except psutil.AccessDenied:
        return "running"
    except psutil.Error:
        return "unknown"
