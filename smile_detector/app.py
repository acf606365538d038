"""Application boundary: turns every pipeline outcome into a text message."""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from . import pipeline, sources
from .config import Settings
from .errors import SmileDetectorError
from .pipeline import Classification, ModelHandle
from .scorer import TFLiteScorer

logger = logging.getLogger(__name__)

MODEL_LOADED = "model loaded"
NO_IMAGE_SELECTED = "no image selected"


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class LoggingNotifier:
    """Sends user-facing messages to the log."""

    def __init__(self, name: str = "smile_detector.notifier") -> None:
        self._logger = logging.getLogger(name)

    def notify(self, message: str) -> None:
        self._logger.info(message)


class SmileDetectorApp:
    """Owns one model handle and reports results through a notifier.

    No method raises a :class:`SmileDetectorError`; failures become messages
    and the app stays usable, so a new image or a reload can be tried.
    """

    def __init__(
        self,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
        scorer_factory: pipeline.ScorerFactory = TFLiteScorer,
    ) -> None:
        self._notifier = notifier or LoggingNotifier()
        self._settings = settings or Settings.from_env()
        self._scorer_factory = scorer_factory
        self._handle: Optional[ModelHandle] = None

    @property
    def ready(self) -> bool:
        return self._handle is not None and self._handle.loaded

    def start(self) -> bool:
        if self._handle is not None:
            return self._handle.loaded
        return self._load()

    def reload(self) -> bool:
        self.stop()
        return self._load()

    def stop(self) -> None:
        pipeline.unload(self._handle)
        self._handle = None

    def _load(self) -> bool:
        try:
            self._handle = pipeline.load_model_file(self._settings.model_path, self._scorer_factory)
        except SmileDetectorError as exc:
            self._report(exc)
            return False
        self._notifier.notify(MODEL_LOADED)
        return True

    def detect(self, image) -> Optional[Classification]:
        if image is None:
            self._notifier.notify(NO_IMAGE_SELECTED)
            return None
        try:
            result = pipeline.classify(self._handle, image)
        except SmileDetectorError as exc:
            self._report(exc)
            return None
        self._notifier.notify(result.message())
        return result

    def detect_file(self, path) -> Optional[Classification]:
        try:
            image = sources.read_image(path)
        except SmileDetectorError as exc:
            self._report(exc)
            return None
        return self.detect(image)

    def detect_camera(self) -> Optional[Classification]:
        try:
            image = sources.capture_frame(self._settings.camera_index)
        except SmileDetectorError as exc:
            self._report(exc)
            return None
        return self.detect(image)

    def _report(self, exc: SmileDetectorError) -> None:
        logger.warning("%s: %s", exc.message, exc)
        self._notifier.notify(exc.message)

    def __enter__(self) -> "SmileDetectorApp":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
