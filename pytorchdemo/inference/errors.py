"""
Predictor Errors
=================

Exception types reported by the predictors.

Startup failures (``ResourceMissing``) are raised from constructors.
Per-call failures (``InvalidInputTensor``, ``InvalidOutputTensor``) are never
raised by ``forward``; they are handed to the completion handler instead.
"""


class PredictorError(Exception):
    """Base class for all predictor errors."""


class InvalidInputTensor(PredictorError):
    """The engine rejected the input tensor (shape, dtype or execution)."""


class InvalidOutputTensor(PredictorError):
    """The engine ran but produced no usable output tensor."""


class ResourceMissing(PredictorError):
    """A bundled model or label resource could not be found or loaded."""

    def __init__(self, name: str, type_: str, reason: str = "not found"):
        self.name = name
        self.type = type_
        self.reason = reason
        super().__init__(f"Resource {name}.{type_} {reason}")
