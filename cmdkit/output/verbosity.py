import logging
from enum import IntEnum

#* --- Custom logging levels for the intermediate tiers ---
VERBOSE = 15
VERY_VERBOSE = 13
SILENT = logging.CRITICAL + 10

logging.addLevelName(VERBOSE, "VERBOSE")
logging.addLevelName(VERY_VERBOSE, "VERY_VERBOSE")


class Verbosity(IntEnum):
    """Output verbosity tiers, ordered from most restrictive to most permissive."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3
    DEBUG = 4

    @classmethod
    def parse(cls, value) -> "Verbosity":
        """
        Converts a name ('very_verbose', 'vv', 'debug') or a rank (0-4) into a tier.

        :raises ValueError: If the value names no tier.
        """
        if isinstance(value, Verbosity):
            return value
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip().lower().replace("-", "_")
        if text.isdigit():
            return cls(int(text))
        if text in _ALIASES:
            return _ALIASES[text]
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown verbosity '{value}'") from None

    def allows(self, level: "Verbosity") -> bool:
        """True if a message tagged with `level` is shown at this verbosity."""
        return self >= level

    @property
    def logging_level(self) -> int:
        """The stdlib logging level a handler needs to show this tier and below."""
        return _LOGGING_LEVELS[self]


_ALIASES = {
    "q": Verbosity.QUIET,
    "v": Verbosity.VERBOSE,
    "vv": Verbosity.VERY_VERBOSE,
    "vvv": Verbosity.DEBUG,
}

_LOGGING_LEVELS = {
    Verbosity.QUIET: SILENT,
    Verbosity.NORMAL: logging.INFO,
    Verbosity.VERBOSE: VERBOSE,
    Verbosity.VERY_VERBOSE: VERY_VERBOSE,
    Verbosity.DEBUG: logging.DEBUG,
}
