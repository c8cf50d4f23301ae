import sys
import logging
from typing import Dict, List, Optional, Type

from cmdkit.console import Command, run_command
from cmdkit.console.commands import StatusCommand, WaitCommand

log = logging.getLogger("console")

COMMANDS: Dict[str, Type[Command]] = {
    WaitCommand.name: WaitCommand,
    StatusCommand.name: StatusCommand,
}


def print_help() -> None:
    """Prints the available commands and verbosity flags."""
    print("\nUsage: cmdkit <command> [options] [arguments]")
    print("\nAvailable commands:")
    for name, command_class in sorted(COMMANDS.items()):
        print(f"  {name:<22} - {command_class.description}")
    print(f"  {'help':<22} - Show this help message.")
    print("\nOptions:")
    print("  -q, --quiet            - Do not output any message.")
    print("  -v, -vv, -vvv          - Increase verbosity: verbose, very verbose, debug.")
    print("  --dir=PATH             - Directory for pid files (with trailing separator).")
    print("  --prefix=PREFIX        - Pid file name prefix.")
    print()


def execute_command(command: str, args: List[str]) -> int:
    """
    Runs a single command by name.

    :param command: The command name (e.g., 'wait', 'status').
    :param args: Arguments following the command name.
    :return int: The exit code for the process.
    """
    if command in ("help", "--help", "-h"):
        print_help()
        return 0

    if command not in COMMANDS:
        print(f"Unknown command: '{command}'. Type 'help' for a list of commands.")
        return 2

    try:
        return run_command(COMMANDS[command](), args)
    except KeyboardInterrupt:
        log.warning("Command interrupted.")
        return 130
    except Exception as e:
        log.error(f"Command '{command}' failed: {e}", exc_info=True)
        return 1


def main(argv: Optional[List[str]] = None) -> None:
    """The console entry point."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print_help()
        sys.exit(0)

    sys.exit(execute_command(argv[0].lower(), argv[1:]))


if __name__ == "__main__":
    main()
