"""
NLP Predictor
==============

Topic classification of free text with a bundled TorchScript model.
The engine call is timed and the duration is reported with the results.
"""

import time
from pathlib import Path
from typing import Callable, List, Optional, Union

import torch

from ..utils.config import Config, load_predictor_config
from .engine import InferenceEngine
from .errors import InvalidInputTensor
from .predictor import Predictor
from .resources import ResourceBundle
from .results import InferenceOutcome, InferenceResult


class TextModelContext:
    model = ("model-reddit16", "pt")
    label = ("reddit_topics", "txt")


NLPCompletionHandler = Callable[[List[InferenceResult], float, Optional[Exception]], None]


class NLPPredictor(Predictor):
    """Ranks topic labels for a piece of text."""

    context = TextModelContext

    def __init__(
        self,
        resources: Union[ResourceBundle, str, Path],
        model=TextModelContext.model,
        labels=TextModelContext.label,
        engine: Optional[InferenceEngine] = None,
        device: Optional[Union[str, torch.device]] = None,
    ):
        super().__init__(resources, model, labels, engine=engine, device=device)

    def forward(
        self,
        text: str,
        result_count: int,
        completion_handler: Optional[NLPCompletionHandler] = None,
    ) -> Optional[InferenceOutcome]:
        """
        Classify ``text``.

        The handler is called with ``(results, inference_time_ms, error)``;
        on error the time is 0.0 and the results are empty. It is not called
        when another call is still in flight.

        Returns:
            The outcome, or None if the request was dropped
        """
        return self._forward(text, result_count, completion_handler)

    def _run(self, text: str, count: int) -> InferenceOutcome:
        start = time.perf_counter()
        output = self._engine.predict_text(text)
        if output is None:
            return InferenceOutcome(error=InvalidInputTensor("Engine rejected the text input"))

        inference_time_ms = (time.perf_counter() - start) * 1000
        return self._rank_output(output, count, inference_time_ms=inference_time_ms)

    def _notify(self, handler: NLPCompletionHandler, outcome: InferenceOutcome) -> None:
        handler(outcome.results, outcome.inference_time_ms, outcome.error)

    @classmethod
    def from_config(
        cls,
        config: Config,
        engine: Optional[InferenceEngine] = None,
    ) -> "NLPPredictor":
        section = config.text
        return cls(
            config.resources.directory,
            model=(section.model.name, section.model.type),
            labels=(section.labels.name, section.labels.type),
            engine=engine,
            device=config.device,
        )


def load_nlp_predictor(
    config_path: Optional[Union[str, Path]] = None,
    engine: Optional[InferenceEngine] = None,
) -> NLPPredictor:
    """Convenience function to build a text predictor from configuration."""
    return NLPPredictor.from_config(load_predictor_config(config_path), engine=engine)
