"""Decide how many colors an output stream supports.

Signals are checked in a fixed order, and each stage either settles the
level or falls through to the next:

1. forcing signals: ``FORCE_COLOR``, then ``--color``/``--no-color`` flags,
   then ``NO_COLOR``; a forced "off" ends detection
2. ``--color=256`` / ``--color=16m`` pins an exact level
3. a stream that is not a terminal gets no color unless something forced it
4. ``TERM=dumb`` gets no color beyond what was forced
5. Windows decides by build number
6. CI services, TeamCity, ``COLORTERM``, ``TERM_PROGRAM`` and ``TERM``

The result is never cached: every call re-reads the environment.
"""

import logging
import re
import sys

from supportscolor.environment import WINDOWS, Environment, OsEnvironment
from supportscolor.levels import level_from_token, to_result
from supportscolor.models import CapabilityResult, ColorLevel, DetectionOptions, EvaluationContext

log = logging.getLogger(__name__)

VT_MIN_BUILD = 10586
TRUECOLOR_MIN_BUILD = 14931
TEAMCITY_MIN_VERSION = (9, 1)
CI_VENDOR_VARIABLES = (
    "TRAVIS",
    "CIRCLECI",
    "APPVEYOR",
    "GITLAB_CI",
    "GITHUB_ACTIONS",
    "GITEA_ACTIONS",
    "BUILDKITE",
    "DRONE",
)
TERM_PROGRAM_LEVELS = {
    "Apple_Terminal": ColorLevel.ANSI256,
}
TERM_256_PATTERN = re.compile(r"-256(color)?$", re.IGNORECASE)
TERM_BASIC_PATTERN = re.compile(
    r"^screen|^xterm|^vt100|^vt220|^rxvt|color|ansi|cygwin|linux|256", re.IGNORECASE
)
TEAMCITY_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)")


def _env_force_level(env: Environment) -> ColorLevel | None:
    value = env.lookup_env("FORCE_COLOR")
    if value is None:
        return None
    level = level_from_token(value)
    return ColorLevel.BASIC if level is None else level


def _flag_force_level(env: Environment) -> ColorLevel | None:
    if env.has_flag("no-color") or env.has_flag("no-colors"):
        return ColorLevel.NONE
    for name in ("color", "colors"):
        value = env.flag_value(name)
        if value is None:
            continue
        if level_from_token(value) == ColorLevel.NONE:
            return ColorLevel.NONE
        return ColorLevel.BASIC
    return None


def _force_level(ctx: EvaluationContext) -> ColorLevel | None:
    """Return the level forced by the caller's environment, if any."""
    env = ctx.environment
    level = _env_force_level(env)
    if level is not None:
        log.debug("FORCE_COLOR=%r forces %s", env.getenv("FORCE_COLOR"), level.name)
        return level
    if ctx.sniff_flags:
        level = _flag_force_level(env)
        if level is not None:
            log.debug("command-line flag forces %s", level.name)
            return level
    if env.lookup_env("NO_COLOR") is not None:
        log.debug("NO_COLOR is set")
        return ColorLevel.NONE
    return None


def _pinned_level(env: Environment) -> ColorLevel | None:
    """Return the highest 256 or 16m level named by any ``--color=`` token."""
    levels = [
        level_from_token(value)
        for name in ("color", "colors")
        for value in env.flag_values(name)
    ]
    pinned = max((level for level in levels if level is not None), default=ColorLevel.NONE)
    return pinned if pinned >= ColorLevel.ANSI256 else None


def _windows_level(env: Environment) -> ColorLevel:
    _, _, build = env.windows_version()
    enabled = env.enable_color()
    if build >= TRUECOLOR_MIN_BUILD:
        level = ColorLevel.ANSI16M
    elif build >= VT_MIN_BUILD:
        level = ColorLevel.ANSI256
    else:
        level = ColorLevel.NONE
    log.debug("windows build %d gives %s (console enabled=%s)", build, level.name, enabled)
    return level


def _teamcity_level(version: str) -> ColorLevel:
    match = TEAMCITY_VERSION_PATTERN.match(version.strip())
    if match is None:
        return ColorLevel.NONE
    major_minor = (int(match.group(1)), int(match.group(2)))
    return ColorLevel.BASIC if major_minor >= TEAMCITY_MIN_VERSION else ColorLevel.NONE


def _major_version(version: str) -> int:
    head = version.strip().split(".")[0]
    return int(head) if head.isascii() and head.isdigit() else 0


def _term_program_level(program: str, version: str) -> ColorLevel | None:
    if program == "iTerm.app":
        return ColorLevel.ANSI16M if _major_version(version) >= 3 else ColorLevel.ANSI256
    return TERM_PROGRAM_LEVELS.get(program)


def _environment_level(env: Environment) -> ColorLevel:
    """Detect the level from CI, terminal program and ``TERM`` variables."""
    if env.lookup_env("CI") is not None:
        if any(env.lookup_env(name) is not None for name in CI_VENDOR_VARIABLES):
            return ColorLevel.BASIC
        if env.getenv("CI_NAME") == "codeship":
            return ColorLevel.BASIC
        log.debug("unrecognized CI service")
        return ColorLevel.NONE

    teamcity = env.lookup_env("TEAMCITY_VERSION")
    if teamcity is not None:
        return _teamcity_level(teamcity)

    colorterm = env.lookup_env("COLORTERM")
    if colorterm in ("truecolor", "24bit"):
        return ColorLevel.ANSI16M

    program = env.lookup_env("TERM_PROGRAM")
    if program is not None:
        level = _term_program_level(program, env.getenv("TERM_PROGRAM_VERSION"))
        if level is not None:
            return level

    term = env.getenv("TERM")
    if TERM_256_PATTERN.search(term):
        return ColorLevel.ANSI256
    if TERM_BASIC_PATTERN.search(term):
        return ColorLevel.BASIC
    if colorterm is not None:
        return ColorLevel.BASIC
    return ColorLevel.NONE


def detect_level(stream: object, ctx: EvaluationContext) -> ColorLevel:
    """Run the detection cascade for ``stream`` and return the level."""
    env = ctx.environment
    forced = _force_level(ctx)
    if forced == ColorLevel.NONE:
        return ColorLevel.NONE

    is_windows = env.platform_family() == WINDOWS
    if ctx.sniff_flags:
        pinned = _pinned_level(env)
        if pinned is not None:
            log.debug("--color flag pins %s", pinned.name)
            if is_windows and env.windows_version()[2] >= VT_MIN_BUILD:
                env.enable_color()
            return pinned

    if forced is None:
        is_tty = ctx.is_tty if ctx.is_tty is not None else env.is_terminal(stream)
        if not is_tty:
            log.debug("stream is not a terminal")
            return ColorLevel.NONE

    minimum = forced if forced is not None else ColorLevel.NONE
    if env.getenv("TERM") == "dumb":
        log.debug("dumb terminal")
        return minimum

    if is_windows:
        return max(minimum, _windows_level(env))

    return max(minimum, _environment_level(env))


def supports_color(
    stream: object,
    *,
    is_tty: bool | None = None,
    sniff_flags: bool = True,
    environment: Environment | None = None,
) -> CapabilityResult:
    """Return the color support of ``stream``.

    ``stream`` is a file-like object, a file descriptor, or None. ``is_tty``
    overrides terminal detection, ``sniff_flags=False`` ignores command-line
    flags, and ``environment`` replaces the process environment.
    """
    ctx = EvaluationContext(
        environment=environment if environment is not None else OsEnvironment(),
        options=DetectionOptions(is_tty=is_tty, sniff_flags=sniff_flags),
    )
    return to_result(detect_level(stream, ctx))


def stdout(**options) -> CapabilityResult:
    """Return the color support of standard output."""
    return supports_color(sys.stdout, **options)


def stderr(**options) -> CapabilityResult:
    """Return the color support of standard error."""
    return supports_color(sys.stderr, **options)
