"""
Inference Module
=================

Top-N classification predictors and the pieces they are built from.
"""

from .engine import InferenceEngine, OutputBuffer, TensorType, TorchScriptEngine
from .errors import InvalidInputTensor, InvalidOutputTensor, PredictorError, ResourceMissing
from .guard import PredictorState, SingleFlightGuard
from .image_predictor import ImageModelContext, ImagePredictor, load_image_predictor
from .nlp_predictor import NLPPredictor, TextModelContext, load_nlp_predictor
from .predictor import Predictor
from .ranking import get_top_n
from .resources import ResourceBundle, ResourceId
from .results import InferenceOutcome, InferenceResult

__all__ = [
    # Predictors
    "Predictor",
    "ImagePredictor",
    "NLPPredictor",
    "ImageModelContext",
    "TextModelContext",
    "load_image_predictor",
    "load_nlp_predictor",
    # Engine
    "InferenceEngine",
    "TorchScriptEngine",
    "OutputBuffer",
    "TensorType",
    # Results
    "InferenceResult",
    "InferenceOutcome",
    "get_top_n",
    # Guard
    "SingleFlightGuard",
    "PredictorState",
    # Resources
    "ResourceBundle",
    "ResourceId",
    # Errors
    "PredictorError",
    "InvalidInputTensor",
    "InvalidOutputTensor",
    "ResourceMissing",
]
