"""Exceptions raised by the smile detection pipeline."""


class SmileDetectorError(Exception):
    """Base class for every recoverable smile detector failure."""

    message = "smile detector error"


class ModelLoadError(SmileDetectorError):
    message = "model load failed"


class ModelNotLoadedError(SmileDetectorError):
    message = "model not loaded"


class PreprocessError(SmileDetectorError):
    message = "preprocessing failed"


class InferenceError(SmileDetectorError):
    message = "inference failed"


class ImageSourceError(SmileDetectorError):
    message = "image source failed"
