import logging
import setproctitle
from typing import IO, Any, Dict, List, Optional, Tuple

from cmdkit.config import effective_settings as config
from cmdkit.log import setup_logging
from cmdkit.output import ConsoleOutput, LeveledOutput, Verbosity
from cmdkit.console.arguments import normalize_arguments
from cmdkit.console.command import Command, CommandAborted

log = logging.getLogger(__name__)

VERBOSITY_FLAGS = {
    "-q": Verbosity.QUIET,
    "--quiet": Verbosity.QUIET,
    "-v": Verbosity.VERBOSE,
    "-vv": Verbosity.VERY_VERBOSE,
    "-vvv": Verbosity.DEBUG,
    "--verbose": Verbosity.VERBOSE,
}

# --verbose=N: 2 and 3 raise the tier further, any other value means verbose
VERBOSE_LEVELS = {
    "2": Verbosity.VERY_VERBOSE,
    "3": Verbosity.DEBUG,
}


def parse_invocation(argv: List[str]) -> Tuple[Verbosity, Dict[str, Any]]:
    """
    Splits raw command arguments into the verbosity and the command's arguments.

    Positional values are collected under "args"; `--name=value` and `--flag`
    options become entries of their own. Everything after `--` is positional.

    :param argv: Arguments following the command name.
    :return: The selected verbosity and the argument mapping.
    :raises ValueError: If the configured default verbosity is invalid.
    """
    verbosity = Verbosity.parse(config.DEFAULT_VERBOSITY)
    arguments: Dict[str, Any] = {"args": []}

    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            arguments["args"].extend(tokens)
            break
        if token in VERBOSITY_FLAGS:
            verbosity = VERBOSITY_FLAGS[token]
        elif token.startswith("--verbose="):
            level = token.split("=", 1)[1].strip()
            verbosity = VERBOSE_LEVELS.get(level, Verbosity.VERBOSE)
        elif token.startswith("--") and len(token) > 2:
            name, sep, value = token[2:].partition("=")
            arguments[name.replace("-", "_")] = value if sep else True
        else:
            arguments["args"].append(token)

    return verbosity, arguments


def run_command(command: Command, argv: List[str], stream: Optional[IO[str]] = None) -> int:
    """
    Runs a command and returns its exit code.

    This is the only place a failed pid file registration turns into exit
    code 1: the diagnostic lines are written at NORMAL level and the command
    is not continued.

    :param command: The command to run.
    :param argv: Arguments following the command name.
    :param stream: Output stream; defaults to stdout.
    """
    try:
        verbosity, arguments = parse_invocation(argv)
    except ValueError as e:
        log.error(f"Invalid invocation of '{command.name}': {e}")
        return 2

    setup_logging(verbosity)
    output = LeveledOutput(ConsoleOutput(verbosity, stream))
    setproctitle.setproctitle(f"{config.PROCESS_TITLE_PREFIX} - {command.name}")

    arguments = normalize_arguments(arguments, output)
    log.debug(f"Executing command: {command.name}, arguments: {arguments}")

    try:
        result = command.execute(arguments, output)
    except CommandAborted as e:
        output.writeln(e.lines)
        return e.exit_code

    # Bodies may end on a chained write, which returns the command itself
    if isinstance(result, bool) or not isinstance(result, int):
        return 0
    return result
