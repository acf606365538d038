"""Smile inference pipeline.

``load`` turns model bytes into a :class:`ModelHandle`; ``classify`` resizes,
normalizes and scores one image against it; ``unload`` releases it. Handles
are owned by the caller, so several pipelines can live side by side.
"""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from .errors import InferenceError, ModelLoadError, ModelNotLoadedError, SmileDetectorError
from .preprocess import INPUT_SHAPE, preprocess
from .scorer import Scorer, TFLiteScorer

logger = logging.getLogger(__name__)

SMILE_THRESHOLD = 0.5
SMILE = "smile"
NO_SMILE = "no-smile"

ScorerFactory = Callable[[bytes], Scorer]


@dataclass(frozen=True)
class Classification:
    label: str
    probability: float

    @property
    def is_smile(self) -> bool:
        return self.label == SMILE

    def message(self) -> str:
        if self.is_smile:
            return f"Smile detected: {self.probability:.2f}"
        return f"No smile detected: {self.probability:.2f}"


def label_for(probability: float) -> str:
    return SMILE if probability > SMILE_THRESHOLD else NO_SMILE


def _accepts_input_shape(shape) -> bool:
    return tuple(shape) in (INPUT_SHAPE, (1,) + INPUT_SHAPE)


class ModelHandle:
    """A loaded model. Calls on one handle are serialized by its lock."""

    def __init__(self, scorer: Scorer) -> None:
        self._scorer: Optional[Scorer] = scorer
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._scorer is not None

    def classify(self, image) -> Classification:
        with self._lock:
            if self._scorer is None:
                raise ModelNotLoadedError("Model handle has been unloaded")

            tensor = preprocess(image)
            try:
                probability = float(self._scorer.score(tensor))
            except SmileDetectorError:
                raise
            except Exception as exc:
                raise InferenceError(f"Scoring failed: {exc}") from exc

        if math.isnan(probability) or not 0.0 <= probability <= 1.0:
            raise InferenceError(f"Model returned {probability}, expected a probability")

        result = Classification(label=label_for(probability), probability=probability)
        logger.debug("Classified %s image as %s (%.4f)", np.shape(image), result.label, probability)
        return result

    def close(self) -> None:
        with self._lock:
            if self._scorer is None:
                return
            self._scorer.close()
            self._scorer = None
        logger.info("Smile model unloaded")

    def __enter__(self) -> "ModelHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def load(model_bytes: Optional[bytes], scorer_factory: ScorerFactory = TFLiteScorer) -> ModelHandle:
    if not model_bytes:
        raise ModelLoadError("Model bytes are empty")

    try:
        scorer = scorer_factory(model_bytes)
    except ModelLoadError:
        raise
    except Exception as exc:
        raise ModelLoadError(f"Unable to load model: {exc}") from exc

    if not _accepts_input_shape(scorer.input_shape):
        scorer.close()
        raise ModelLoadError(f"Model expects input {scorer.input_shape}, not {INPUT_SHAPE}")

    logger.info("Smile model loaded (%d bytes)", len(model_bytes))
    return ModelHandle(scorer)


def load_model_file(path, scorer_factory: ScorerFactory = TFLiteScorer) -> ModelHandle:
    path = Path(path)
    try:
        model_bytes = path.read_bytes()
    except OSError as exc:
        raise ModelLoadError(f"Model file not found: {path}") from exc
    return load(model_bytes, scorer_factory)


def classify(handle: Optional[ModelHandle], image) -> Classification:
    if handle is None:
        raise ModelNotLoadedError("No model has been loaded")
    return handle.classify(image)


def unload(handle: Optional[ModelHandle]) -> None:
    if handle is not None:
        handle.close()
