"""Evaluation context model for a single detection call."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from supportscolor.models.detection_options import DetectionOptions

if TYPE_CHECKING:
    from supportscolor.environment import Environment


@dataclass
class EvaluationContext:
    """Everything one detection reads; built per call and then discarded."""

    environment: "Environment"
    options: DetectionOptions

    @property
    def sniff_flags(self) -> bool:
        return self.options.sniff_flags

    @property
    def is_tty(self) -> bool | None:
        return self.options.is_tty
