"""
The pid file package.

Creates the marker files that announce a running command, checks whether
they still exist, and lists the ones found in a directory.
"""
from .manager import PidFileManager, PidFileCreated, PidFileFailure, PidFileResult
from .inventory import PidFileInfo, read_pid_files

__all__ = [
    "PidFileManager", "PidFileCreated", "PidFileFailure", "PidFileResult",
    "PidFileInfo", "read_pid_files",
]
