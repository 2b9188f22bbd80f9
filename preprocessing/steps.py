"""
Preprocessing step classes with a common interface.

Each step is a dataclass that implements the PreprocessStep interface.
Steps are pure: they take an input and return a new output without mutating
the original array.

Usage:
    from preprocessing.steps import GrayscaleStep, ContrastStretchStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        ContrastStretchStep(),
        SharpenStep(strength=1.0),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from .normalization import to_grayscale, stretch_contrast, sharpen, upscale_to_width


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    Steps can optionally produce metadata (observed intensities, scale
    factors) that is kept alongside the output for debugging.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this preprocessing step to an image.

        Must be pure: never mutates the input image.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by the last apply(). Empty by default."""
        return {}


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert image to single-channel grayscale."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return to_grayscale(img)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass
class ContrastStretchStep(PreprocessStep):
    """Stretch the intensity histogram to the full 0-255 range.

    Requires grayscale input. Declines (returns a copy) on flat images.

    Attributes:
        low_percentile: Percentile mapped to black.
        high_percentile: Percentile mapped to white.
    """

    low_percentile: float = 1.0
    high_percentile: float = 99.0
    _observed: tuple[float, float] | None = field(default=None, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        result, observed = stretch_contrast(img, self.low_percentile, self.high_percentile)
        self._observed = observed
        return result

    @property
    def name(self) -> str:
        return "contrast"

    def get_metadata(self) -> dict[str, Any]:
        if self._observed is None:
            return {}
        low, high = self._observed
        return {
            "step_status": "applied" if high > low else "declined",
            "step_metrics": {
                "low": low,
                "high": high,
                "percentiles": (self.low_percentile, self.high_percentile),
            },
        }


@dataclass(frozen=True)
class SharpenStep(PreprocessStep):
    """Convolve with a 3x3 sharpening kernel.

    Attributes:
        strength: Kernel weight; 1.0 is the classic sharpen kernel.
    """

    strength: float = 1.0

    def apply(self, img: np.ndarray) -> np.ndarray:
        return sharpen(img, self.strength)

    @property
    def name(self) -> str:
        return f"sharpen({self.strength})"


@dataclass
class UpscaleStep(PreprocessStep):
    """Upscale narrow images to a minimum width, preserving aspect ratio.

    Attributes:
        min_width: Images narrower than this are enlarged.
    """

    min_width: int
    _scale_factor: float = field(default=1.0, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        resized, scale = upscale_to_width(img, self.min_width)
        self._scale_factor = scale
        return resized

    @property
    def name(self) -> str:
        return f"upscale({self.min_width})"

    def get_metadata(self) -> dict[str, Any]:
        status = "applied" if self._scale_factor != 1.0 else "declined"
        return {"step_status": status, "scale_factor": self._scale_factor}


@dataclass
class StepResult:
    """Result of applying a single preprocessing step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step.
        artifact_path: Path where the image was saved (if artifact saving enabled).
    """

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """Results from running a preprocessing pipeline.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
        original_artifact_path: Path where original image was saved (if artifact saving enabled).
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)
    original_artifact_path: str | None = None

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def get_intermediate(self, step_name: str) -> np.ndarray | None:
        """Get intermediate image by step name, or None if the step did not run."""
        for step in self.steps:
            if step.name == step_name:
                return step.image
        return None

    @property
    def step_metadata(self) -> dict[str, dict[str, Any]]:
        """Status and metrics per step, keyed by normalized step name."""
        return {
            step.name.split("(")[0]: {
                "status": step.metadata.get("step_status", "applied"),
                "metrics": step.metadata.get("step_metrics", {}),
            }
            for step in self.steps
        }

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Saved artifact paths keyed by "original" and normalized step name."""
        paths = {}
        if self.original_artifact_path:
            paths["original"] = self.original_artifact_path
        for step in self.steps:
            if step.artifact_path:
                paths[step.name.split("(")[0]] = step.artifact_path
        return paths


def _save_image(img: np.ndarray, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), img)


@dataclass
class Pipeline:
    """A sequence of preprocessing steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved.
    """

    steps: list[PreprocessStep]

    def run(
        self,
        img: np.ndarray,
        artifact_dir: str | Path | None = None,
    ) -> PipelineStepResults:
        """Run the pipeline on an RGB (or grayscale) image.

        Args:
            img: Input image as numpy array.
            artifact_dir: Optional directory to save original.png and each
                          step's output for inspection.
        """
        result = PipelineStepResults(original=img.copy())
        current = img.copy()

        if artifact_dir:
            artifact_dir = Path(artifact_dir)
            original_path = artifact_dir / "original.png"
            if img.ndim == 3 and img.shape[2] == 3:
                _save_image(cv2.cvtColor(img, cv2.COLOR_RGB2BGR), original_path)
            else:
                _save_image(img, original_path)
            result.original_artifact_path = str(original_path)

        for step in self.steps:
            output = step.apply(current)
            metadata = step.get_metadata()

            artifact_path = None
            if artifact_dir:
                step_path = artifact_dir / f"{step.name.split('(')[0]}.png"
                _save_image(output, step_path)
                artifact_path = str(step_path)

            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=metadata,
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)
