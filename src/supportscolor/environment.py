"""Access to the process environment that color detection depends on."""

import ctypes
import logging
import os
import platform
import sys
from collections.abc import Mapping, Sequence
from typing import Protocol

from supportscolor.flags import flag_value, flag_values, has_flag

log = logging.getLogger(__name__)

WINDOWS = "windows"
STD_OUTPUT_HANDLE = -11
STD_ERROR_HANDLE = -12
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004


class Environment(Protocol):
    """Read-only view of variables, flags, terminals and the OS."""

    def lookup_env(self, name: str) -> str | None: ...

    def getenv(self, name: str) -> str: ...

    def has_flag(self, name: str) -> bool: ...

    def flag_value(self, name: str) -> str | None: ...

    def flag_values(self, name: str) -> list[str]: ...

    def is_terminal(self, stream: object) -> bool: ...

    def windows_version(self) -> tuple[int, int, int]: ...

    def enable_color(self) -> bool: ...

    def platform_family(self) -> str: ...


def _parse_version(text: str) -> tuple[int, int, int]:
    """Parse ``"10.0.19045"`` into ``(10, 0, 19045)``."""
    parts = text.strip().split(".")
    try:
        numbers = [int(part) for part in parts[:3]]
    except ValueError:
        log.debug("unparseable OS version %r", text)
        return 0, 0, 0
    numbers.extend([0] * (3 - len(numbers)))
    return numbers[0], numbers[1], numbers[2]


def _enable_console_vt(handle_id: int) -> bool:
    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    handle = kernel32.GetStdHandle(handle_id)
    if not handle or handle == -1:
        return False
    mode = ctypes.c_uint32()
    if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
        return False
    if mode.value & ENABLE_VIRTUAL_TERMINAL_PROCESSING:
        return True
    return bool(kernel32.SetConsoleMode(handle, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING))


class OsEnvironment:
    """Environment backed by the running process.

    Variables are read from the live mapping on every call, so changes made
    between detections are always seen.
    """

    def __init__(
        self,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._argv = argv
        self._environ = environ if environ is not None else os.environ

    def lookup_env(self, name: str) -> str | None:
        return self._environ.get(name)

    def getenv(self, name: str) -> str:
        return self._environ.get(name, "")

    def has_flag(self, name: str) -> bool:
        return has_flag(name, self._args())

    def flag_value(self, name: str) -> str | None:
        return flag_value(name, self._args())

    def flag_values(self, name: str) -> list[str]:
        return flag_values(name, self._args())

    def _args(self) -> Sequence[str]:
        return self._argv if self._argv is not None else sys.argv[1:]

    def is_terminal(self, stream: object) -> bool:
        if stream is None:
            return False
        try:
            if isinstance(stream, int):
                return os.isatty(stream)
            isatty = getattr(stream, "isatty", None)
            return bool(isatty()) if callable(isatty) else False
        except (OSError, ValueError) as e:
            log.debug("isatty failed for %r: %s", stream, e)
            return False

    def windows_version(self) -> tuple[int, int, int]:
        return _parse_version(platform.version())

    def enable_color(self) -> bool:
        """Turn on ANSI escape handling for the Windows console.

        A no-op elsewhere. Returns False when the console refused or the
        calls are unavailable.
        """
        if self.platform_family() != WINDOWS:
            return True
        try:
            enabled = [_enable_console_vt(h) for h in (STD_OUTPUT_HANDLE, STD_ERROR_HANDLE)]
        except (AttributeError, OSError, ValueError) as e:
            log.debug("enabling virtual terminal processing failed: %s", e)
            return False
        log.debug("virtual terminal processing stdout=%s stderr=%s", *enabled)
        return any(enabled)

    def platform_family(self) -> str:
        return platform.system().lower()
