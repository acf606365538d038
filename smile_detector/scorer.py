"""Scoring backends: anything that maps a 128x128x3 tensor to a probability."""
from __future__ import annotations

import logging
from typing import Protocol, Tuple

import numpy as np
import tensorflow as tf

from .errors import InferenceError, ModelLoadError

logger = logging.getLogger(__name__)


class Scorer(Protocol):
    input_shape: Tuple[int, ...]

    def score(self, tensor: np.ndarray) -> float: ...

    def close(self) -> None: ...


class TFLiteScorer:
    """Runs a serialized TensorFlow Lite model held in memory."""

    def __init__(self, model_bytes: bytes) -> None:
        try:
            self._interpreter = tf.lite.Interpreter(model_content=bytes(model_bytes))
            self._interpreter.allocate_tensors()
        except (ValueError, RuntimeError) as exc:
            raise ModelLoadError(f"Invalid TensorFlow Lite model: {exc}") from exc

        input_details = self._interpreter.get_input_details()
        output_details = self._interpreter.get_output_details()
        if len(input_details) != 1 or len(output_details) != 1:
            raise ModelLoadError(
                f"Expected a single input and output, got {len(input_details)} and {len(output_details)}"
            )
        self._input = input_details[0]
        self._output = output_details[0]
        if self._input["dtype"] != np.float32:
            raise ModelLoadError(f"Model input must be float32, not {np.dtype(self._input['dtype']).name}")
        if int(np.prod(self._output["shape"])) != 1:
            raise ModelLoadError(f"Model must output one probability, not shape {tuple(self._output['shape'])}")
        self.input_shape = tuple(int(dim) for dim in self._input["shape"])

    def score(self, tensor: np.ndarray) -> float:
        if self._interpreter is None:
            raise InferenceError("Interpreter has been released")

        input_data = np.expand_dims(tensor, axis=0).astype(np.float32)
        try:
            self._interpreter.set_tensor(self._input["index"], input_data)
            self._interpreter.invoke()
            output_data = self._interpreter.get_tensor(self._output["index"])
        except (ValueError, RuntimeError) as exc:
            raise InferenceError(f"Interpreter failed: {exc}") from exc

        if output_data.size != 1:
            raise InferenceError(f"Model produced {output_data.size} outputs, expected one")
        return float(output_data.reshape(-1)[0])

    def close(self) -> None:
        self._interpreter = None
