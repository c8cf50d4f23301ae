"""
Verbosity-filtered output.

Exposes the ordered `Verbosity` tiers, the `ConsoleOutput` and `LoggerOutput`
sinks, and the `LeveledOutput` facade used by commands.
"""

from .verbosity import Verbosity
from .leveled import ConsoleOutput, LoggerOutput, LeveledOutput, Messages

__all__ = ["Verbosity", "ConsoleOutput", "LoggerOutput", "LeveledOutput", "Messages"]
