"""
Image normalization functions for preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array. This ensures predictable behavior and makes
testing straightforward.
"""

import io

import cv2
import numpy as np
from PIL import Image


def decode_image(image_data: bytes) -> np.ndarray:
    """Decode image bytes into an RGB uint8 array.

    Only the first frame of animated formats is used.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a known image format.
        OSError: If the image data is truncated or corrupt.
    """
    with Image.open(io.BytesIO(image_data)) as image:
        if image.mode != "RGB":
            image = image.convert("RGB")
        return np.array(image)


def encode_png(img: np.ndarray) -> bytes:
    """Encode a grayscale or BGR array as PNG bytes.

    Raises:
        ValueError: If OpenCV cannot encode the array.
    """
    ok, buffer = cv2.imencode(".png", img)
    if not ok:
        raise ValueError(f"Failed to encode image with shape {img.shape} as PNG")
    return buffer.tobytes()


def _validate_array(img: np.ndarray) -> None:
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert an RGB, RGBA or grayscale image to a 2D uint8 array.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> to_grayscale(rgb).shape
        (100, 200)
    """
    _validate_array(img)

    if img.ndim == 2:
        result = img.copy()
    else:
        channels = img.shape[2]
        if channels == 1:
            result = img[:, :, 0].copy()
        elif channels == 3:
            result = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
        elif channels == 4:
            result = cv2.cvtColor(img[:, :, :3], cv2.COLOR_RGB2GRAY)
        else:
            raise ValueError(
                f"Unsupported number of channels: {channels}. "
                "Expected 1, 3 (RGB), or 4 (RGBA)."
            )

    if result.dtype != np.uint8:
        result = np.clip(result, 0, 255).astype(np.uint8)
    return result


def stretch_contrast(
    img: np.ndarray,
    low_percentile: float = 1.0,
    high_percentile: float = 99.0,
) -> tuple[np.ndarray, tuple[float, float]]:
    """Stretch the intensity histogram of a grayscale image to 0-255.

    Pixels at or below the low percentile become black, pixels at or above
    the high percentile become white, everything in between is scaled
    linearly. A flat image (no spread between the percentiles) is returned
    unchanged.

    Returns:
        Tuple of (stretched image, (low, high) intensities observed).
    """
    _validate_array(img)
    if img.ndim != 2:
        raise ValueError(
            f"stretch_contrast requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )

    low, high = (float(v) for v in np.percentile(img, (low_percentile, high_percentile)))
    if high <= low:
        return img.copy(), (low, high)

    scaled = (img.astype(np.float32) - low) * (255.0 / (high - low))
    return np.clip(scaled, 0, 255).astype(np.uint8), (low, high)


def sharpen_kernel(strength: float = 1.0) -> np.ndarray:
    """Build a 3x3 sharpening kernel: identity plus `strength` x Laplacian."""
    laplacian = np.array(
        [[0, -1, 0],
         [-1, 4, -1],
         [0, -1, 0]],
        dtype=np.float32,
    )
    identity = np.zeros((3, 3), dtype=np.float32)
    identity[1, 1] = 1.0
    return identity + strength * laplacian


def sharpen(img: np.ndarray, strength: float = 1.0) -> np.ndarray:
    """Apply the sharpening kernel. Output saturates to the input dtype range."""
    _validate_array(img)
    if strength == 0:
        return img.copy()
    return cv2.filter2D(img, -1, sharpen_kernel(strength))


def upscale_to_width(img: np.ndarray, min_width: int) -> tuple[np.ndarray, float]:
    """Upscale an image narrower than `min_width`, preserving aspect ratio.

    Images already at least `min_width` wide are returned as a copy.

    Returns:
        Tuple of (image, scale factor applied).
    """
    _validate_array(img)
    if not isinstance(min_width, int):
        raise TypeError(f"min_width must be int, got {type(min_width).__name__}")
    if min_width <= 0:
        raise ValueError(f"min_width must be positive, got {min_width}")

    height, width = img.shape[:2]
    if width >= min_width:
        return img.copy(), 1.0

    scale = min_width / width
    new_height = max(1, int(round(height * scale)))
    resized = cv2.resize(img, (min_width, new_height), interpolation=cv2.INTER_CUBIC)
    return resized, scale
