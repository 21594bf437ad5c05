# notify_options.py
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

# Native balloon flags (NIIF_*)
NIIF_ICON_MASK = 0x0F
NIIF_NOSOUND = 0x10
NIIF_LARGE_ICON = 0x20

# "T<seconds>" embedded in a legacy options string
_TIMEOUT_DIRECTIVE = re.compile(r"T(\d+)")

# Below this many milliseconds an explicit timeout is assumed to be a
# seconds/milliseconds mix-up, so the longer of the two values wins.
SMALL_TIMEOUT_MS = 1000


class NotifyIcon(IntEnum):
    NONE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


# Textual selectors accepted in legacy strings: token -> (icon, extra bits)
_TEXT_FLAGS = {
    "iconi": (NotifyIcon.INFO, 0),
    "icon!": (NotifyIcon.WARNING, 0),
    "iconx": (NotifyIcon.ERROR, 0),
    "mute": (None, NIIF_NOSOUND),
}


@dataclass(frozen=True)
class NotifyOptions:
    icon: NotifyIcon = NotifyIcon.NONE
    silent: bool = False
    large_icon: bool = False
    timeout_ms: Optional[int] = None

    @property
    def flags(self) -> int:
        flags = int(self.icon)
        if self.silent:
            flags |= NIIF_NOSOUND
        if self.large_icon:
            flags |= NIIF_LARGE_ICON
        return flags

    @classmethod
    def from_flags(cls, flags: int, timeout_ms: Optional[int] = None) -> NotifyOptions:
        icon_bits = flags & NIIF_ICON_MASK
        icon = NotifyIcon(icon_bits) if icon_bits <= NotifyIcon.ERROR else NotifyIcon.NONE
        return cls(
            icon=icon,
            silent=bool(flags & NIIF_NOSOUND),
            large_icon=bool(flags & NIIF_LARGE_ICON),
            timeout_ms=timeout_ms,
        )


LegacyOptions = Union[None, int, str, NotifyIcon, NotifyOptions]


def split_timeout_directive(options: str) -> Tuple[str, Optional[int]]:
    """
    Pull a `T<seconds>` directive out of a legacy options string.

    Returns the string with the directive removed and the timeout in
    milliseconds, or (options, None) when there is no directive.
    """
    match = _TIMEOUT_DIRECTIVE.search(options)
    if match is None:
        return options, None
    cleaned = (options[:match.start()] + options[match.end():]).strip()
    return cleaned, int(match.group(1)) * 1000


def resolve_timeout(options: LegacyOptions, timeout: Optional[int] = None) -> Tuple[LegacyOptions, Optional[int]]:
    """
    Work out the auto-hide timeout from an explicit value and/or a `T<n>`
    directive embedded in `options`.

    Args:
        options: display flags, possibly a string carrying `T<n>` (seconds).
        timeout: explicit timeout in milliseconds; the sign is ignored.

    Returns:
        (options without the directive, timeout in ms or None for no auto-hide)
    """
    embedded = None
    if isinstance(options, str):
        options, embedded = split_timeout_directive(options)

    if timeout is None:
        return options, embedded

    explicit = abs(timeout)
    if embedded is None:
        return options, explicit
    if explicit < SMALL_TIMEOUT_MS:
        return options, max(embedded, explicit)
    return options, min(embedded, explicit)


def parse_flag_string(options: str) -> int:
    """
    Parse the flag part of a legacy options string.

    Tokens are separated by whitespace: integers are OR-ed together as native
    NIIF_* bits, `Iconi`, `Icon!` and `Iconx` pick the info, warning and
    error icon, `Mute` silences the balloon. Anything else is a ValueError.
    """
    flags = 0
    for token in options.split():
        if token.isdigit():
            flags |= int(token)
        elif token.lower() in _TEXT_FLAGS:
            icon, extra = _TEXT_FLAGS[token.lower()]
            if icon is not None:
                flags = (flags & ~NIIF_ICON_MASK) | int(icon)
            flags |= extra
        else:
            raise ValueError(f"Unsupported notification options: '{options}'")
    return flags


def parse_notify_options(options: LegacyOptions = None, timeout: Optional[int] = None) -> NotifyOptions:
    """Turn the loosely-typed `options`/`timeout` pair into a NotifyOptions."""
    if isinstance(options, NotifyOptions):
        if timeout is None:
            return options
        return NotifyOptions(options.icon, options.silent, options.large_icon, abs(timeout))

    options, timeout_ms = resolve_timeout(options, timeout)

    if options is None or options == "":
        flags = 0
    elif isinstance(options, str):
        flags = parse_flag_string(options)
    else:
        flags = int(options)

    return NotifyOptions.from_flags(flags, timeout_ms)
