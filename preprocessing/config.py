"""
Configuration and result types for the preprocessing pipeline.

All preprocessing steps are parameterized through PreprocessConfig to ensure
reproducibility and easy experimentation with different settings.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from config import (
    CONTRAST_LOW_PERCENTILE,
    CONTRAST_HIGH_PERCENTILE,
    SHARPEN_STRENGTH,
    MIN_OCR_WIDTH,
    MIN_UPSCALE_WIDTH,
    MAX_UPSCALE_WIDTH,
)


@dataclass(frozen=True)
class PreprocessConfig:
    """Configuration for all preprocessing steps.

    Attributes:
        contrast_low_percentile: Intensity percentile mapped to black.
        contrast_high_percentile: Intensity percentile mapped to white.
        sharpen_strength: Weight of the sharpening kernel. 0 disables the
                          step, 1 is the classic 3x3 sharpen kernel.
        min_width: Images narrower than this are upscaled before sharpening.
                   Set to None to never resize.
    """

    contrast_low_percentile: float = CONTRAST_LOW_PERCENTILE
    contrast_high_percentile: float = CONTRAST_HIGH_PERCENTILE
    sharpen_strength: float = SHARPEN_STRENGTH
    min_width: Optional[int] = MIN_OCR_WIDTH

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        low, high = self.contrast_low_percentile, self.contrast_high_percentile
        if not (0.0 <= low < high <= 100.0):
            raise ValueError(
                "contrast percentiles must be in ascending order within [0, 100], "
                f"got ({low}, {high})"
            )

        if self.sharpen_strength < 0:
            raise ValueError(
                f"sharpen_strength must be non-negative, got {self.sharpen_strength}"
            )

        if self.min_width is not None:
            if self.min_width < MIN_UPSCALE_WIDTH:
                raise ValueError(
                    f"min_width={self.min_width} is too small to help OCR. "
                    f"Minimum is {MIN_UPSCALE_WIDTH}."
                )
            if self.min_width > MAX_UPSCALE_WIDTH:
                raise ValueError(
                    f"min_width={self.min_width} is very large and may cause "
                    f"performance issues. Maximum is {MAX_UPSCALE_WIDTH}."
                )


@dataclass
class PreprocessOutcome:
    """Result of preprocessing raw image bytes.

    Preprocessing never fails from the caller's point of view. When a step
    fails, `image_bytes` holds the original input and `used_fallback` is set.

    Attributes:
        image_bytes: PNG-encoded processed image, or the original bytes.
        used_fallback: True if preprocessing failed and the input was returned.
        error: Description of the failure on the fallback path.
        steps: Names of the steps that ran, in order.
        metadata: Per-step status and metrics keyed by step name.
    """

    image_bytes: bytes
    used_fallback: bool = False
    error: str | None = None
    steps: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
