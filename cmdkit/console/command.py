import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from cmdkit.config import effective_settings as config
from cmdkit.output import LeveledOutput, Messages
from cmdkit.pidfile import PidFileManager, PidFileFailure

log = logging.getLogger(__name__)


class CommandAborted(Exception):
    """Raised inside a command to stop it; the driver prints `lines` and exits with `exit_code`."""

    def __init__(self, lines: List[str], exit_code: int = 1) -> None:
        super().__init__(lines[0] if lines else "Command stopped")
        self.lines = lines
        self.exit_code = exit_code


class Command(ABC):
    """
    Base class for commands running as tracked background processes.

    Subclasses implement `handle_input`. The helpers below give them a pid
    file, a throttled check for its removal, and writes at each verbosity tier.
    """

    name: str = ""
    description: str = ""

    def __init__(self, pid_manager: Optional[PidFileManager] = None) -> None:
        self.arguments: Dict[str, Any] = {}
        self.output: Optional[LeveledOutput] = None
        self._pid_manager = pid_manager

    @property
    def pid_manager(self) -> PidFileManager:
        if self._pid_manager is None:
            self._pid_manager = PidFileManager(self.output)
        return self._pid_manager

    def execute(self, arguments: Dict[str, Any], output: LeveledOutput) -> Optional[int]:
        self.arguments = arguments
        self.output = output
        if self._pid_manager is not None and self._pid_manager.output.sink is None:
            self._pid_manager.output = output
        return self.handle_input(arguments, output)

    @abstractmethod
    def handle_input(self, arguments: Dict[str, Any], output: LeveledOutput) -> Optional[int]:
        """Runs the command body. May return an exit code; None means 0."""

    #* --- Pid file helpers ---
    def create_pid_file(self, directory: Optional[str] = None, prefix: Optional[str] = None) -> str:
        """
        Creates the pid file for this run.

        :param directory: Directory for pid files; defaults to `PIDFILES_DIR`.
        :param prefix: Pid file name prefix; defaults to `PIDFILE_PREFIX`.
        :return: Path to the created pid file.
        :raises CommandAborted: If the file cannot be created (exit code 1).
        """
        directory = config.PIDFILES_DIR if directory is None else directory
        prefix = config.PIDFILE_PREFIX if prefix is None else prefix

        result = self.pid_manager.create_pid_file(directory, prefix)
        if isinstance(result, PidFileFailure):
            log.debug(f"Command '{self.name}' stopped, no pid file at {result.path}")
            raise CommandAborted(result.lines, exit_code=1)
        return result.path

    def is_pid_file_exists(self, pid_file: str, force_check: bool = False) -> bool:
        return self.pid_manager.is_pid_file_exists(pid_file, force_check)

    #* --- Output helpers ---
    def _leveled(self) -> LeveledOutput:
        return self.output if self.output is not None else LeveledOutput()

    def writeln(self, messages: Messages) -> "Command":
        self._leveled().writeln(messages)
        return self

    def writeln_v(self, messages: Messages) -> "Command":
        self._leveled().writeln_v(messages)
        return self

    def writeln_vv(self, messages: Messages) -> "Command":
        self._leveled().writeln_vv(messages)
        return self

    def writeln_vvv(self, messages: Messages) -> "Command":
        self._leveled().writeln_vvv(messages)
        return self

    def is_quiet(self, sink=None) -> bool:
        return self._leveled().is_quiet(sink)
