"""Per-call configuration model for supportscolor."""

from pydantic import BaseModel, ConfigDict


class DetectionOptions(BaseModel):
    """Caller overrides applied to a single detection."""

    model_config = ConfigDict(frozen=True, strict=True)

    # None means "ask the environment whether the stream is a terminal".
    is_tty: bool | None = None
    sniff_flags: bool = True
