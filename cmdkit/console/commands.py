import time
from typing import Any, Callable, Dict, Optional

from cmdkit.config import effective_settings as config
from cmdkit.output import LeveledOutput
from cmdkit.pidfile import PidFileManager, read_pid_files
from cmdkit.console.command import Command, CommandAborted


def _string_option(arguments: Dict[str, Any], name: str) -> Optional[str]:
    value = arguments.get(name)
    return value if isinstance(value, str) else None


def _interval_option(arguments: Dict[str, Any]) -> float:
    """
    Reads the poll interval in seconds.

    :raises CommandAborted: With exit code 2 for a valueless, non-numeric or negative interval.
    """
    value = arguments.get("interval")
    if value is None:
        return config.WAIT_POLL_INTERVAL
    try:
        interval = float(value) if isinstance(value, str) else None
    except ValueError:
        interval = None
    if interval is None or not interval >= 0:
        raise CommandAborted(
            [f"Invalid --interval value: {value!r}. Expected seconds, e.g. --interval=0.5"],
            exit_code=2,
        )
    return interval


class WaitCommand(Command):
    """
    Registers a pid file and idles until that file is deleted.

    Deleting the pid file is the cooperative way to stop the command:

        cmdkit wait --prefix=myjob_ -v
        rm /tmp/cmdkit/myjob_pid_4242.pid
    """

    name = "wait"
    description = "Create a pid file and run until it is removed."

    def __init__(self, pid_manager: Optional[PidFileManager] = None,
                 sleep: Callable[[float], None] = time.sleep) -> None:
        super().__init__(pid_manager)
        self.sleep = sleep

    def handle_input(self, arguments: Dict[str, Any], output: LeveledOutput) -> int:
        directory = _string_option(arguments, "dir") or None
        prefix = _string_option(arguments, "prefix")
        interval = _interval_option(arguments)

        pid_file = self.create_pid_file(directory, prefix)
        self.writeln(f"Running, delete {pid_file} to stop.")

        polls = 0
        while self.is_pid_file_exists(pid_file):
            polls += 1
            self.sleep(interval)

        self.writeln_v(f"Pid file removed after {polls} polls.")
        self.writeln("Command stopped.")
        return 0


class StatusCommand(Command):
    """Lists pid files in the pid directory along with the state of their processes."""

    name = "status"
    description = "Show pid files and whether their processes are running."

    def handle_input(self, arguments: Dict[str, Any], output: LeveledOutput) -> int:
        directory = _string_option(arguments, "dir") or config.PIDFILES_DIR
        prefix = _string_option(arguments, "prefix")
        prefix = config.PIDFILE_PREFIX if prefix is None else prefix

        entries = read_pid_files(directory, prefix)
        if not entries:
            self.writeln(f"No pid files found in {directory}")
            return 0

        self.writeln_v(f"Pid files in {directory}:")
        for entry in entries:
            pid = entry.pid if entry.pid is not None else "-"
            self.writeln(f"  - {entry.path:<48} : PID {pid!s:<8} | Status: {entry.status.upper()}")
        return 0
