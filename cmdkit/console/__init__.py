"""
This package provides the command base class, argument normalization and the
driver that runs a command and turns an aborted run into its exit code.
"""

from .command import Command, CommandAborted
from .arguments import detect_encoding, convert, normalize_arguments
from .process import parse_invocation, run_command

__all__ = [
    "Command", "CommandAborted",
    "detect_encoding", "convert", "normalize_arguments",
    "parse_invocation", "run_command",
]
