"""Capability result model for supportscolor."""

from pydantic import BaseModel, ConfigDict, model_validator

from supportscolor.models.color_level import ColorLevel


class CapabilityResult(BaseModel):
    """Color support detected for a single stream."""

    model_config = ConfigDict(frozen=True)

    level: ColorLevel = ColorLevel.NONE
    supports_color: bool = False
    has_256: bool = False
    has_16m: bool = False

    @model_validator(mode="after")
    def _check_flags_match_level(self) -> "CapabilityResult":
        # supportscolor.levels imports this package, so import it lazily.
        from supportscolor.levels import derive_flags

        expected = (self.level > ColorLevel.NONE, *derive_flags(self.level))
        if (self.supports_color, self.has_256, self.has_16m) != expected:
            raise ValueError(
                f"flags supports_color={self.supports_color} has_256={self.has_256} "
                f"has_16m={self.has_16m} do not match level {self.level.name}"
            )
        return self

    @classmethod
    def from_level(cls, level: ColorLevel) -> "CapabilityResult":
        from supportscolor.levels import derive_flags

        level = ColorLevel(level)
        has_256, has_16m = derive_flags(level)
        return cls(
            level=level,
            supports_color=level > ColorLevel.NONE,
            has_256=has_256,
            has_16m=has_16m,
        )
