"""Translate between color levels, capability flags and human-readable tokens."""

from supportscolor.models import CapabilityResult, ColorLevel

_NAMED_TOKENS: dict[str, ColorLevel] = {
    "": ColorLevel.BASIC,
    "true": ColorLevel.BASIC,
    "always": ColorLevel.BASIC,
    "false": ColorLevel.NONE,
    "256": ColorLevel.ANSI256,
    "16m": ColorLevel.ANSI16M,
    "full": ColorLevel.ANSI16M,
    "truecolor": ColorLevel.ANSI16M,
}


def level_from_token(token: str) -> ColorLevel | None:
    """Parse a color-mode token such as ``"256"``, ``"truecolor"`` or ``"2"``.

    Numeric tokens above the highest level saturate to ``ANSI16M``. Returns
    ``None`` for tokens that name no level, leaving the fallback to the caller.
    """
    normalized = token.strip().lower()
    if normalized in _NAMED_TOKENS:
        return _NAMED_TOKENS[normalized]
    if normalized.isascii() and normalized.isdigit():
        return ColorLevel(min(int(normalized), ColorLevel.ANSI16M))
    return None


def derive_flags(level: ColorLevel) -> tuple[bool, bool]:
    """Return ``(has_256, has_16m)`` for ``level``."""
    return level >= ColorLevel.ANSI256, level >= ColorLevel.ANSI16M


def level_from_flags(supports_color: bool, has_256: bool, has_16m: bool) -> ColorLevel:
    """Return the highest level the given capability flags vouch for."""
    if supports_color and has_256 and has_16m:
        return ColorLevel.ANSI16M
    if supports_color and has_256:
        return ColorLevel.ANSI256
    if supports_color:
        return ColorLevel.BASIC
    return ColorLevel.NONE


def to_result(level: ColorLevel) -> CapabilityResult:
    """Wrap ``level`` in an immutable result with its derived flags."""
    return CapabilityResult.from_level(level)
