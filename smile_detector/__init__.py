"""Smile detection with a TensorFlow Lite binary classifier."""
from .app import LoggingNotifier, Notifier, SmileDetectorApp  # noqa: F401
from .errors import (  # noqa: F401
    ImageSourceError,
    InferenceError,
    ModelLoadError,
    ModelNotLoadedError,
    PreprocessError,
    SmileDetectorError,
)
from .pipeline import Classification, ModelHandle, classify, load, load_model_file, unload  # noqa: F401
from .scorer import Scorer, TFLiteScorer  # noqa: F401
