"""Color level model for supportscolor."""

from enum import IntEnum


class ColorLevel(IntEnum):
    """How many colors a stream can display, ordered from none to truecolor."""

    NONE = 0
    BASIC = 1
    ANSI256 = 2
    ANSI16M = 3
