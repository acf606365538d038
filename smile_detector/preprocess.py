"""Turns a decoded photo into the tensor the smile model was trained on."""
from __future__ import annotations

import cv2
import numpy as np

from .errors import PreprocessError

INPUT_SIZE = 128
INPUT_SHAPE = (INPUT_SIZE, INPUT_SIZE, 3)


def _as_rgb(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.ndim == 3 and image.shape[2] == 3:
        return image
    if image.ndim == 3 and image.shape[2] == 4:
        return np.ascontiguousarray(image[:, :, :3])
    raise PreprocessError(f"Expected an RGB image, got array of shape {image.shape}")


def preprocess(image) -> np.ndarray:
    """Resize ``image`` to 128x128 (bilinear) and scale its values into [0, 1].

    Both steps always run, whatever the source resolution or dtype, so the
    result is a float32 array of exactly ``INPUT_SHAPE``.
    """
    if image is None:
        raise PreprocessError("No image to preprocess")

    try:
        image = np.asarray(image)
    except (TypeError, ValueError) as exc:
        raise PreprocessError(f"Image is not a pixel array: {exc}") from exc
    if image.dtype == np.bool_ or not np.issubdtype(image.dtype, np.number):
        raise PreprocessError(f"Unsupported pixel type {image.dtype}")
    if image.ndim < 2 or image.shape[0] == 0 or image.shape[1] == 0:
        raise PreprocessError(f"Image has no pixels: shape {image.shape}")

    # cv2 only resizes a handful of dtypes; float32 covers every input we accept
    image = image.astype(np.float32)

    try:
        image = _as_rgb(image)
        resized_image = cv2.resize(image, (INPUT_SIZE, INPUT_SIZE), interpolation=cv2.INTER_LINEAR)
    except cv2.error as exc:
        raise PreprocessError(f"Unable to resize image: {exc}") from exc

    # Pixels are byte valued (0-255)
    normalized_image = np.clip(resized_image / 255.0, 0.0, 1.0).astype(np.float32)

    if normalized_image.shape != INPUT_SHAPE:
        raise PreprocessError(f"Preprocessed tensor has shape {normalized_image.shape}")
    if not np.isfinite(normalized_image).all():
        raise PreprocessError("Image contains non-finite pixel values")
    return normalized_image
