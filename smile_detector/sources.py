"""Where photos come from: an image file on disk or a single camera frame.

Both return RGB ``uint8`` arrays, so the pipeline treats them identically.
"""
from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from .errors import ImageSourceError

logger = logging.getLogger(__name__)


def read_image(path) -> np.ndarray:
    path = Path(path)
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageSourceError(f"Unable to read image: {path}")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def capture_frame(device: int = 0) -> np.ndarray:
    cap = cv2.VideoCapture(device)
    try:
        if not cap.isOpened():
            raise ImageSourceError(f"Unable to open camera {device}")

        ret, frame = cap.read()
        if not ret or frame is None:
            raise ImageSourceError(f"Unable to capture frame from camera {device}")
    finally:
        cap.release()

    logger.debug("Captured %dx%d frame from camera %d", frame.shape[1], frame.shape[0], device)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
