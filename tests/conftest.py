import numpy as np
import pytest

from smile_detector.errors import ModelLoadError


class BrightnessScorer:
    """Scores by mean brightness and records every tensor it sees."""

    input_shape = (1, 128, 128, 3)

    def __init__(self, model_bytes=b"stub", fixed=None, error=None):
        if model_bytes == b"corrupt":
            raise ModelLoadError("corrupt stub model")
        self.fixed = fixed
        self.error = error
        self.tensors = []
        self.closed = False

    def score(self, tensor):
        self.tensors.append(tensor.copy())
        if self.error is not None:
            raise self.error
        if self.fixed is not None:
            return self.fixed
        return float(tensor.mean())

    def close(self):
        self.closed = True


@pytest.fixture
def scorer_factory():
    created = []

    def factory(model_bytes, **kwargs):
        scorer = BrightnessScorer(model_bytes, **kwargs)
        created.append(scorer)
        return scorer

    factory.created = created
    return factory


@pytest.fixture
def smiling_image():
    # stands in for a smiling face: the brightness scorer reads it as > 0.5
    return np.full((480, 640, 3), 220, dtype=np.uint8)


@pytest.fixture
def neutral_image():
    return np.full((300, 200, 3), 40, dtype=np.uint8)
