"""Model package for supportscolor."""

from supportscolor.models.capability_result import CapabilityResult
from supportscolor.models.color_level import ColorLevel
from supportscolor.models.detection_options import DetectionOptions
from supportscolor.models.evaluation_context import EvaluationContext

__all__ = [
    "CapabilityResult",
    "ColorLevel",
    "DetectionOptions",
    "EvaluationContext",
]
