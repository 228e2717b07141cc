"""supportscolor - detect whether a terminal stream supports ANSI colors."""

__version__ = "0.1.0"

from supportscolor.detection import stderr, stdout, supports_color
from supportscolor.environment import Environment, OsEnvironment
from supportscolor.models import CapabilityResult, ColorLevel

__all__ = [
    "CapabilityResult",
    "ColorLevel",
    "Environment",
    "OsEnvironment",
    "__version__",
    "stderr",
    "stdout",
    "supports_color",
]
