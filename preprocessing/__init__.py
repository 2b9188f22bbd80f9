"""
Image preprocessing module for workout schedule OCR.

Turns a downloaded schedule photo into a cleaner image for OCR: grayscale,
contrast stretch, optional upscale, sharpen. Preprocessing degrades instead
of failing: undecodable input comes back unchanged with a fallback flag.

Key components:
- config: PreprocessConfig and PreprocessOutcome
- pipeline: preprocess_image()/preprocess() for bytes, run_pipeline() for arrays
- steps: Class-based preprocessing steps with common PreprocessStep interface
- normalization: Pure array functions (grayscale, contrast, sharpen, codec)
"""

from .config import PreprocessConfig, PreprocessOutcome
from .pipeline import preprocess, preprocess_image, run_pipeline, build_pipeline
from .normalization import (
    decode_image,
    encode_png,
    to_grayscale,
    stretch_contrast,
    sharpen,
    sharpen_kernel,
    upscale_to_width,
)
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    ContrastStretchStep,
    SharpenStep,
    UpscaleStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Config and results
    "PreprocessConfig",
    "PreprocessOutcome",
    # Function API
    "preprocess",
    "preprocess_image",
    "run_pipeline",
    "build_pipeline",
    "decode_image",
    "encode_png",
    "to_grayscale",
    "stretch_contrast",
    "sharpen",
    "sharpen_kernel",
    "upscale_to_width",
    # Class-based API
    "PreprocessStep",
    "GrayscaleStep",
    "ContrastStretchStep",
    "SharpenStep",
    "UpscaleStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
