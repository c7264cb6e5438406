"""Diagnostic verbosity levels."""

from enum import IntEnum


class Verbosity(IntEnum):
    """How much a run reports about probe failures."""

    QUIET = 0
    INFO = 1
    DEBUG = 2

    @classmethod
    def from_count(cls, count: int) -> "Verbosity":
        """Map a repeated -V flag count to a level."""
        return cls(max(0, min(count, cls.DEBUG)))

    @classmethod
    def from_log_level(cls, level: str) -> "Verbosity":
        """Map a logging level name to a level."""
        return {
            "DEBUG": cls.DEBUG,
            "INFO": cls.INFO,
        }.get(level.upper(), cls.QUIET)

    def to_log_level(self) -> str:
        return {
            Verbosity.QUIET: "WARNING",
            Verbosity.INFO: "INFO",
            Verbosity.DEBUG: "DEBUG",
        }[self]
