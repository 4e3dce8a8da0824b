"""
Inference Engines
==================

The model-execution contract the predictors talk to, and the TorchScript
implementation of it.

A predictor only needs four capabilities from an engine:

    - load_model(path) -> bool
    - predict(buffer, tensor_sizes, tensor_type) -> bool, output on ``engine.data``
    - predict_text(text) -> OutputBuffer or None
    - OutputBuffer.float_array(size) -> list of float

Anything implementing ``InferenceEngine`` can be dropped into a predictor,
which is how the tests run without a real model.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import torch

from ..utils.device import get_device
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TensorType(Enum):
    FLOAT = "float"
    UINT8 = "uint8"

    @property
    def numpy_dtype(self) -> np.dtype:
        return {
            TensorType.FLOAT: np.dtype(np.float32),
            TensorType.UINT8: np.dtype(np.uint8),
        }[self]


class OutputBuffer:
    """Flat, read-only view of an engine's output tensor."""

    def __init__(self, values: Union[np.ndarray, Sequence[float]]):
        self._values = np.asarray(values, dtype=np.float32).reshape(-1)
        self._values.setflags(write=False)

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def float_array(self, size: int) -> List[float]:
        """
        Read the first ``size`` scores.

        Raises:
            ValueError: If the buffer holds fewer than ``size`` values
        """
        if size > len(self):
            raise ValueError(f"Requested {size} values from a buffer of {len(self)}")
        return self._values[:size].tolist()


class InferenceEngine(ABC):
    """Opaque model runtime used by the predictors."""

    #: Output of the last successful ``predict`` call
    data: Optional[OutputBuffer] = None

    @abstractmethod
    def load_model(self, path: Union[str, Path]) -> bool:
        """Load a model file. Returns False if it cannot be loaded."""

    @abstractmethod
    def predict(
        self,
        buffer: Union[np.ndarray, Sequence[float]],
        tensor_sizes: Sequence[int],
        tensor_type: TensorType = TensorType.FLOAT,
    ) -> bool:
        """Run the model on a flat buffer. Returns False if the input was rejected."""

    @abstractmethod
    def predict_text(self, text: str) -> Optional[OutputBuffer]:
        """Run the model on raw text. Returns None if the input was rejected."""


class TorchScriptEngine(InferenceEngine):
    """
    Runs TorchScript modules saved with ``torch.jit.save``.

    Image models receive a tensor of the requested sizes and type. Text
    models receive the UTF-8 bytes of the input as a ``uint8`` tensor of
    shape (1, len).
    """

    def __init__(self, device: Optional[Union[str, torch.device]] = None):
        if isinstance(device, torch.device):
            self.device = device
        else:
            self.device = get_device(device)
        self.module: Optional[torch.jit.ScriptModule] = None
        self.data = None

    def load_model(self, path: Union[str, Path]) -> bool:
        try:
            module = torch.jit.load(str(path), map_location=self.device)
        except (RuntimeError, ValueError, OSError) as e:
            logger.error(f"Failed to load TorchScript model {path}: {e}")
            return False

        module.eval()
        self.module = module
        logger.info(f"Loaded model {Path(path).name} on {self.device}")
        return True

    @torch.no_grad()
    def predict(
        self,
        buffer: Union[np.ndarray, Sequence[float]],
        tensor_sizes: Sequence[int],
        tensor_type: TensorType = TensorType.FLOAT,
    ) -> bool:
        self.data = None
        if self.module is None:
            logger.warning("predict() called before a model was loaded")
            return False

        try:
            array = np.asarray(buffer, dtype=tensor_type.numpy_dtype)
        except (TypeError, ValueError) as e:
            logger.warning(f"Input is not a {tensor_type.value} buffer: {e}")
            return False

        expected = int(np.prod(tensor_sizes))
        if array.size != expected:
            logger.warning(
                f"Input has {array.size} elements, model expects {list(tensor_sizes)}"
            )
            return False

        tensor = torch.from_numpy(array.reshape(tuple(tensor_sizes)).copy()).to(self.device)
        try:
            output = self.module(tensor)
        except (RuntimeError, torch.jit.Error) as e:
            logger.warning(f"Model rejected input tensor: {e}")
            return False

        self.data = self._to_output_buffer(output)
        return True

    @torch.no_grad()
    def predict_text(self, text: str) -> Optional[OutputBuffer]:
        if self.module is None:
            logger.warning("predict_text() called before a model was loaded")
            return None

        try:
            encoded = np.frombuffer(text.encode("utf-8"), dtype=np.uint8)
        except UnicodeEncodeError as e:
            logger.warning(f"Text is not encodable as UTF-8: {e}")
            return None

        tensor = torch.from_numpy(encoded.copy()).unsqueeze(0).to(self.device)
        try:
            output = self.module(tensor)
        except (RuntimeError, torch.jit.Error) as e:
            logger.warning(f"Model rejected text input: {e}")
            return None

        return self._to_output_buffer(output)

    @staticmethod
    def _to_output_buffer(output) -> Optional[OutputBuffer]:
        # Models exported with auxiliary outputs return a tuple; scores come first
        if isinstance(output, (tuple, list)):
            output = output[0] if output else None
        if not isinstance(output, torch.Tensor):
            return None
        return OutputBuffer(output.detach().float().cpu().numpy())
