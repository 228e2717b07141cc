"""Command-line flag sniffing.

Flags are matched the way most CLI parsers spell them: ``--name``,
``--name=value`` and, for single-character names, ``-n``. A bare ``--``
ends flag parsing, so anything after it is an operand and never matches.
"""

import sys
from collections.abc import Iterator, Sequence

TERMINATOR = "--"


def _bare_name(flag: str) -> str:
    return flag.lstrip("-")


def _scan(flag: str, argv: Sequence[str] | None) -> Iterator[str]:
    """Yield every token before the terminator that spells ``flag``."""
    if argv is None:
        argv = sys.argv[1:]
    name = _bare_name(flag)
    if not name:
        return
    long_form = f"--{name}"
    long_prefix = f"{long_form}="
    short_form = f"-{name}" if len(name) == 1 else None
    for token in argv:
        if token == TERMINATOR:
            return
        if token == long_form or token == short_form or token.startswith(long_prefix):
            yield token


def has_flag(flag: str, argv: Sequence[str] | None = None) -> bool:
    """Return whether ``flag`` was passed; the leading dashes on ``flag`` are optional."""
    return next(_scan(flag, argv), None) is not None


def flag_value(flag: str, argv: Sequence[str] | None = None) -> str | None:
    """Return the value of the first ``--flag=value`` token.

    A bare ``--flag`` gives ``""``; an absent flag gives ``None``.
    """
    token = next(_scan(flag, argv), None)
    if token is None:
        return None
    _, sep, value = token.partition("=")
    return value if sep else ""


def flag_values(flag: str, argv: Sequence[str] | None = None) -> list[str]:
    """Return the value of every ``flag`` token before the terminator, in order.

    Bare ``--flag`` tokens contribute ``""``.
    """
    return [token.partition("=")[2] for token in _scan(flag, argv)]
