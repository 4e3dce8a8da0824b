"""
Image Predictor
================

Top-N image classification with a bundled ResNet18 TorchScript model.

Usage:
    predictor = ImagePredictor("resources")
    outcome = predictor.classify(load_image("cat.jpg"))
    for result in outcome.results:
        print(result.label, result.score)
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import numpy as np
import torch

from ..data.preprocessing import image_to_tensor_buffer
from ..utils.config import Config, load_predictor_config
from .engine import InferenceEngine, TensorType
from .errors import InvalidInputTensor
from .predictor import Predictor
from .resources import ResourceBundle
from .results import InferenceOutcome, InferenceResult


class ImageModelContext:
    model = ("ResNet18", "pt")
    label = ("Labels", "txt")
    input_tensor_size = (1, 3, 224, 224)
    output_tensor_size = (1, 1000)


ImageCompletionHandler = Callable[[List[InferenceResult], Optional[Exception]], None]


class ImagePredictor(Predictor):
    """
    Classifies float pixel buffers of shape (1, 3, 224, 224).

    Args:
        resources: Resource bundle, or the directory holding the resources
        model: (name, type) of the model resource
        labels: (name, type) of the label resource
        engine: Model runtime; a ``TorchScriptEngine`` if None
        device: Device for the default engine

    Raises:
        ResourceMissing: If the model or the labels cannot be found or loaded
    """

    context = ImageModelContext

    def __init__(
        self,
        resources: Union[ResourceBundle, str, Path],
        model=ImageModelContext.model,
        labels=ImageModelContext.label,
        engine: Optional[InferenceEngine] = None,
        device: Optional[Union[str, torch.device]] = None,
    ):
        super().__init__(resources, model, labels, engine=engine, device=device)

    def forward(
        self,
        buffer: Optional[Union[np.ndarray, Sequence[float]]],
        completion_handler: Optional[ImageCompletionHandler] = None,
        result_count: int = 3,
    ) -> Optional[InferenceOutcome]:
        """
        Classify a preprocessed pixel buffer.

        The handler is called with ``(results, error)``. It is not called
        at all when ``buffer`` is None or another call is still in flight.

        Args:
            buffer: Flat float buffer laid out as (1, 3, 224, 224)
            completion_handler: Receives the ranked results or the error
            result_count: Number of labels to return

        Returns:
            The outcome, or None if the request was dropped
        """
        if buffer is None:
            return None
        return self._forward(buffer, result_count, completion_handler)

    def classify(
        self,
        image: np.ndarray,
        completion_handler: Optional[ImageCompletionHandler] = None,
        result_count: int = 3,
    ) -> Optional[InferenceOutcome]:
        """Preprocess an RGB uint8 image (H, W, 3) and classify it."""
        side = self.context.input_tensor_size[-1]
        return self.forward(image_to_tensor_buffer(image, target_size=side), completion_handler, result_count)

    def _run(self, buffer, count: int) -> InferenceOutcome:
        if not self._engine.predict(buffer, self.context.input_tensor_size, TensorType.FLOAT):
            return InferenceOutcome(error=InvalidInputTensor("Engine rejected the input tensor"))
        return self._rank_output(self._engine.data, count)

    def _notify(self, handler: ImageCompletionHandler, outcome: InferenceOutcome) -> None:
        handler(outcome.results, outcome.error)

    @classmethod
    def from_config(
        cls,
        config: Config,
        engine: Optional[InferenceEngine] = None,
    ) -> "ImagePredictor":
        section = config.image
        return cls(
            config.resources.directory,
            model=(section.model.name, section.model.type),
            labels=(section.labels.name, section.labels.type),
            engine=engine,
            device=config.device,
        )


def load_image_predictor(
    config_path: Optional[Union[str, Path]] = None,
    engine: Optional[InferenceEngine] = None,
) -> ImagePredictor:
    """Convenience function to build an image predictor from configuration."""
    return ImagePredictor.from_config(load_predictor_config(config_path), engine=engine)
