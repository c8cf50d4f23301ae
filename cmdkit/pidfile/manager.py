import os
import sys
import time
import random
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from cmdkit.config import effective_settings as config
from cmdkit.output import LeveledOutput
from cmdkit.pidfile import process_utils

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PidFileCreated:
    """The pid file was written; `path` is the file actually used."""
    path: str

    ok = True


@dataclass(frozen=True)
class PidFileFailure:
    """The pid file could not be created; `lines` is the diagnostic to show before stopping."""
    path: str
    lines: List[str]

    ok = False


PidFileResult = Union[PidFileCreated, PidFileFailure]


def failure_lines(path: str) -> List[str]:
    return [
        f"Unable to create pid file {path}",
        "Please be sure pid file can be created in this location.",
        "Command stopped!",
    ]


class PidFileManager:
    """
    Creates pid files and checks whether they still exist.

    The manager never terminates the process: creation returns a
    `PidFileCreated` or a `PidFileFailure` and the caller decides what to do.
    Existence checks are throttled so a polling loop touches the filesystem
    at most once per `check_interval` seconds.
    """

    def __init__(
        self,
        output: Optional[LeveledOutput] = None,
        clock: Callable[[], float] = time.time,
        pid_provider: Callable[[], Optional[int]] = process_utils.current_pid,
        randint: Callable[[int, int], int] = random.SystemRandom().randint,
        check_interval: Optional[float] = None,
        dir_mode: Optional[int] = None,
    ) -> None:
        self.output = output or LeveledOutput()
        self.clock = clock
        self.pid_provider = pid_provider
        self.randint = randint
        self.check_interval = config.PID_CHECK_INTERVAL if check_interval is None else check_interval
        self.dir_mode = config.DIR_MODE if dir_mode is None else dir_mode
        self.last_check: Optional[float] = None
        self.last_result = True

    def make_token(self) -> str:
        """Returns `pid_<N>`, or `rnd_<N>` when the process identifier is unavailable."""
        pid = self.pid_provider()
        if pid is None:
            self.output.writeln_vv("PID is not available, so random number will be used instead")
            return f"rnd_{self.randint(1, sys.maxsize)}"
        return f"pid_{pid}"

    def create_pid_file(self, directory: str, prefix: str = "") -> PidFileResult:
        """
        Writes the pid file `{directory}{prefix}{token}.pid` containing the token.

        A missing directory is created with its parents. An existing file with
        the same name is opened without truncation.

        :param directory: Directory for pid files, including the trailing separator.
        :param prefix: Prefix for the pid file name.
        :return: PidFileCreated on success, PidFileFailure otherwise; both carry the absolute path.
        """
        token = self.make_token()
        path = os.path.abspath(f"{directory}{prefix}{token}{config.PIDFILE_SUFFIX}")
        self.output.writeln_vvv(f"Pid file for command is {path}")

        if not os.path.isdir(directory):
            try:
                os.makedirs(directory, mode=self.dir_mode, exist_ok=True)
            except OSError as e:
                log.debug(f"Failed to create pid directory '{directory}': {e}")

        if not os.path.isdir(directory):
            self.output.writeln_vvv(
                f"Directory for pid files does not exist and cannot be created ({directory})"
            )
            return PidFileFailure(path, failure_lines(path))

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o666)
            with os.fdopen(fd, "w") as f:
                f.write(token)
        except OSError as e:
            log.debug(f"Failed to write pid file '{path}': {e}")
            self.output.writeln_vvv("Pid file open error, file not created")
            return PidFileFailure(path, failure_lines(path))

        self.output.writeln_vv(f"Pid file {path} created")
        return PidFileCreated(path)

    def is_pid_file_exists(self, path: str, force_check: bool = False) -> bool:
        """
        Reports whether the pid file is still present.

        Unless `force_check` is set, a check less than `check_interval` seconds
        after the previous real check repeats that check's answer without
        touching the filesystem. Filesystem errors count as "absent".
        """
        now = self.clock()
        throttled = self.last_check is not None and now - self.last_check < self.check_interval
        if not force_check and throttled:
            return self.last_result

        self.output.writeln_vvv("Checking if pid file exists")
        self.last_check = now
        self.last_result = self._exists(path)
        return self.last_result

    @staticmethod
    def _exists(path: str) -> bool:
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            log.debug(f"Pid file check for '{path}' failed, treating as absent: {e}")
            return False
        return True
