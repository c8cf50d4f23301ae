import os
import logging
from dataclasses import dataclass
from typing import List, Optional

from cmdkit.config import effective_settings as config
from cmdkit.pidfile import process_utils

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PidFileInfo:
    path: str
    token: str
    pid: Optional[int]
    status: str


def read_pid_files(directory: str, prefix: str = "") -> List[PidFileInfo]:
    """
    Reads the pid files with the given prefix found in a directory.

    Files that cannot be read are skipped. Content is never modified and
    stale files are left in place; removing them is up to the caller.

    :param directory: Directory holding pid files.
    :param prefix: Only files starting with this prefix are reported.
    :return: One entry per pid file, sorted by path.
    """
    if not os.path.isdir(directory):
        return []

    found = []
    for name in sorted(os.listdir(directory)):
        if not name.startswith(prefix) or not name.endswith(config.PIDFILE_SUFFIX):
            continue
        path = os.path.join(directory, name)
        try:
            with open(path, "r", encoding="ascii", errors="replace") as f:
                token = f.read().strip()
        except OSError as e:
            log.debug(f"Skipping unreadable pid file '{path}': {e}")
            continue

        pid = process_utils.parse_token(token)
        status = process_utils.get_proc_status_string(pid)
        found.append(PidFileInfo(path=path, token=token, pid=pid, status=status))
    return found
