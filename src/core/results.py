from enum import Enum


class MenuState(Enum):
    ENABLED = 1     # classic context menu forced
    DISABLED = 2    # modern Windows 11 menu (marker key absent)


class Outcome(Enum):
    ALREADY_ENABLED = 1
    ENABLED = 2
    WRITE_FAILED = 3
    RESTART_FAILED = 4

    @property
    def succeeded(self) -> bool:
        return self in (Outcome.ALREADY_ENABLED, Outcome.ENABLED)


class ContextMenuError(Exception):
    """Base class for failures while switching the context menu."""


class RegistryWriteError(ContextMenuError):
    """Creating the marker key or writing its value failed."""


class ShellRestartError(ContextMenuError):
    """Closing, killing or relaunching Explorer failed."""
