import sys
import logging
from typing import IO, List, Optional, Union

from .verbosity import Verbosity

Messages = Union[str, List[str]]


def _as_lines(messages: Messages) -> List[str]:
    if isinstance(messages, str):
        return [messages]
    return list(messages)


class ConsoleOutput:
    """
    A sink writing raw lines to a text stream.

    The sink owns the active verbosity: a message is written only when
    `verbosity >= level`.
    """

    def __init__(self, verbosity: Verbosity = Verbosity.NORMAL, stream: Optional[IO[str]] = None):
        self.verbosity = Verbosity.parse(verbosity)
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        # Resolved late so pytest's capsys and redirected stdout are honoured.
        return self._stream if self._stream is not None else sys.stdout

    def writeln(self, messages: Messages, level: Verbosity = Verbosity.NORMAL) -> None:
        if not self.verbosity.allows(level):
            return
        for line in _as_lines(messages):
            self.stream.write(f"{line}\n")
        self.stream.flush()


class LoggerOutput:
    """A sink forwarding lines to a logger at the logging level mapped from each tier."""

    def __init__(self, logger: Optional[logging.Logger] = None, verbosity: Verbosity = Verbosity.NORMAL):
        self.logger = logger or logging.getLogger("cmdkit.output")
        self.verbosity = Verbosity.parse(verbosity)

    def writeln(self, messages: Messages, level: Verbosity = Verbosity.NORMAL) -> None:
        if not self.verbosity.allows(level):
            return
        for line in _as_lines(messages):
            self.logger.log(level.logging_level, line)


class LeveledOutput:
    """
    Convenience facade over a sink, with one write per verbosity tier.

    Every write returns the facade so calls can be chained:

        out.writeln("Done").writeln_vvv("Took 3 polls")
    """

    def __init__(self, sink=None):
        self.sink = sink

    def write(self, messages: Messages, level: Verbosity = Verbosity.NORMAL) -> "LeveledOutput":
        if self.sink is not None:
            self.sink.writeln(messages, level)
        return self

    def writeln(self, messages: Messages) -> "LeveledOutput":
        return self.write(messages, Verbosity.NORMAL)

    def writeln_v(self, messages: Messages) -> "LeveledOutput":
        return self.write(messages, Verbosity.VERBOSE)

    def writeln_vv(self, messages: Messages) -> "LeveledOutput":
        return self.write(messages, Verbosity.VERY_VERBOSE)

    def writeln_vvv(self, messages: Messages) -> "LeveledOutput":
        return self.write(messages, Verbosity.DEBUG)

    def is_quiet(self, sink_override=None) -> bool:
        """
        True if the sink's verbosity is exactly QUIET.

        :param sink_override: Checked instead of the held sink when given.
        :return: False when no sink is available at all.
        """
        sink = sink_override if sink_override is not None else self.sink
        if sink is None:
            return False
        return sink.verbosity == Verbosity.QUIET
