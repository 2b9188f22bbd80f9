"""
Preprocessing pipeline that turns raw schedule photos into OCR-ready bytes.

Pipeline order is fixed:
    Grayscale -> Contrast stretch -> (Upscale if configured) -> Sharpen

preprocess_image() never raises for bad image data. If decoding or any step
fails, the failure is logged as a DegradedInputWarning and the original bytes
are returned with used_fallback set: OCR on the raw color photo is better
than no OCR at all.
"""

import logging
from pathlib import Path

import cv2
import numpy as np
from PIL import Image

from errors import DegradedInputWarning

from .config import PreprocessConfig, PreprocessOutcome
from .normalization import decode_image, encode_png
from .steps import (
    Pipeline,
    PipelineStepResults,
    PreprocessStep,
    GrayscaleStep,
    ContrastStretchStep,
    SharpenStep,
    UpscaleStep,
)

logger = logging.getLogger(__name__)

# Failures that mean "this input cannot be preprocessed", as opposed to bugs
_DEGRADE_ERRORS = (
    OSError,
    ValueError,
    TypeError,
    cv2.error,
    Image.DecompressionBombError,
)


def build_pipeline(config: PreprocessConfig) -> Pipeline:
    """Build a Pipeline from a PreprocessConfig."""
    steps: list[PreprocessStep] = [
        GrayscaleStep(),
        ContrastStretchStep(
            low_percentile=config.contrast_low_percentile,
            high_percentile=config.contrast_high_percentile,
        ),
    ]

    if config.min_width is not None:
        steps.append(UpscaleStep(min_width=config.min_width))

    if config.sharpen_strength > 0:
        steps.append(SharpenStep(strength=config.sharpen_strength))

    return Pipeline(steps=steps)


def run_pipeline(
    img: np.ndarray,
    config: PreprocessConfig | None = None,
    artifact_dir: str | Path | None = None,
) -> PipelineStepResults:
    """Apply the preprocessing steps to a decoded image array.

    Raises:
        ValueError: If the configuration or image array is invalid.
        TypeError: If img is not a numpy array.
    """
    if config is None:
        config = PreprocessConfig()
    config.validate()

    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    return build_pipeline(config).run(img, artifact_dir=artifact_dir)


def preprocess_image(
    image_data: bytes,
    config: PreprocessConfig | None = None,
    artifact_dir: str | Path | None = None,
) -> PreprocessOutcome:
    """Preprocess raw image bytes for OCR, falling back to the input on failure.

    Args:
        image_data: Raw bytes as downloaded (JPEG, PNG, WebP, ...).
        config: Preprocessing configuration. Validated before the image is
                touched; an invalid config raises ValueError.
        artifact_dir: Optional directory to save intermediate images.

    Returns:
        PreprocessOutcome with PNG bytes, or the original bytes and
        used_fallback=True if the image could not be processed.
    """
    if config is None:
        config = PreprocessConfig()
    config.validate()

    logger.info("Preprocessing image for OCR (%s bytes)", len(image_data))
    try:
        image_array = decode_image(image_data)
        result = run_pipeline(image_array, config, artifact_dir=artifact_dir)
        processed = encode_png(result.final)
    except _DEGRADE_ERRORS as exc:
        message = f"Image preprocessing failed, using original image: {exc}"
        logger.warning("%s: %s", DegradedInputWarning.__name__, message)
        return PreprocessOutcome(
            image_bytes=image_data,
            used_fallback=True,
            error=str(exc),
        )

    logger.info("Image preprocessed: %s", " -> ".join(result.step_names))
    return PreprocessOutcome(
        image_bytes=processed,
        steps=result.step_names,
        metadata=result.step_metadata,
    )


def preprocess(image_data: bytes, config: PreprocessConfig | None = None) -> bytes:
    """Return OCR-ready image bytes; the original bytes if preprocessing fails."""
    return preprocess_image(image_data, config).image_bytes
