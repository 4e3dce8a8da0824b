"""
Inference Results
==================

Value types returned by the predictors.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class InferenceResult:
    """A single ranked prediction."""

    score: float
    label: str


@dataclass(frozen=True)
class InferenceOutcome:
    """
    Everything a completed ``forward`` call reported.
    
    Either ``results`` holds the full top-N list and ``error`` is None, or
    ``results`` is empty and ``error`` says why.
    """

    results: List[InferenceResult] = field(default_factory=list)
    error: Optional[Exception] = None
    inference_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None
