"""
Inference Predictor Module
===========================

Base class shared by the image and text predictors.

A predictor owns one engine, one label set and one single-flight guard.
``forward`` runs at most one inference at a time per instance: a call that
arrives while another is in flight is dropped without calling its
completion handler.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import torch

from ..utils.logging import get_logger
from .engine import InferenceEngine, OutputBuffer, TorchScriptEngine
from .errors import InvalidOutputTensor, ResourceMissing
from .guard import PredictorState, SingleFlightGuard
from .ranking import get_top_n
from .resources import ResourceBundle, ResourceId
from .results import InferenceOutcome, InferenceResult

logger = get_logger(__name__)

CompletionHandler = Callable[..., None]


class Predictor(ABC):
    """
    Loads a model and its labels once, then ranks the model's scores per call.

    Args:
        resources: Resource bundle, or the directory holding the resources
        model: (name, type) of the model resource
        labels: (name, type) of the label resource
        engine: Model runtime; a ``TorchScriptEngine`` if None
        device: Device for the default engine ('auto', 'cpu', 'cuda', 'mps')

    Raises:
        ResourceMissing: If the model or the labels cannot be found or loaded
    """

    def __init__(
        self,
        resources: Union[ResourceBundle, str, Path],
        model: Tuple[str, str],
        labels: Tuple[str, str],
        engine: Optional[InferenceEngine] = None,
        device: Optional[Union[str, torch.device]] = None,
    ):
        if not isinstance(resources, ResourceBundle):
            resources = ResourceBundle(resources)
        self.resources = resources
        self.model_resource = ResourceId(*model)
        self.label_resource = ResourceId(*labels)

        self._engine = engine if engine is not None else TorchScriptEngine(device)
        self._guard = SingleFlightGuard()

        self._load_model()
        self._labels = self.resources.read_labels(*self.label_resource)

    @property
    def engine(self) -> InferenceEngine:
        return self._engine

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    @property
    def state(self) -> PredictorState:
        return self._guard.state

    def get_top_n(self, scores: Sequence[float], count: int) -> List[InferenceResult]:
        return get_top_n(scores, self._labels, count)

    def _load_model(self) -> None:
        path = self.resources.require(*self.model_resource)
        if not self._engine.load_model(path):
            raise ResourceMissing(*self.model_resource, reason="could not be loaded")

    def _rank_output(
        self,
        output: Optional[OutputBuffer],
        count: int,
        inference_time_ms: float = 0.0,
    ) -> InferenceOutcome:
        """Rank an engine output, or report why it can't be ranked."""
        if output is None:
            return InferenceOutcome(error=InvalidOutputTensor("Engine produced no output"))

        if len(output) != len(self._labels):
            return InferenceOutcome(
                error=InvalidOutputTensor(
                    f"Model returned {len(output)} scores for {len(self._labels)} labels"
                )
            )

        scores = output.float_array(len(self._labels))
        return InferenceOutcome(
            results=self.get_top_n(scores, count),
            inference_time_ms=inference_time_ms,
        )

    @abstractmethod
    def _run(self, payload: Any, count: int) -> InferenceOutcome:
        """Run the engine on one input and rank its output."""

    @abstractmethod
    def _notify(self, handler: CompletionHandler, outcome: InferenceOutcome) -> None:
        """Call the completion handler with this modality's arguments."""

    def _forward(
        self,
        payload: Any,
        count: int,
        completion_handler: Optional[CompletionHandler],
    ) -> Optional[InferenceOutcome]:
        if count < 0:
            raise ValueError(f"result_count must be non-negative, got {count}")

        with self._guard.flight() as acquired:
            if not acquired:
                logger.debug(f"{type(self).__name__} busy, dropping request")
                return None

            outcome = self._run(payload, count)
            if outcome.error is not None:
                logger.warning(f"{type(self).__name__} inference failed: {outcome.error}")

            if completion_handler is not None:
                self._notify(completion_handler, outcome)
            return outcome

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(model={self.model_resource.filename!r}, "
            f"labels={len(self._labels)}, state={self.state.value})"
        )
