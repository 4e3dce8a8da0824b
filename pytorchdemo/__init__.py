"""
PyTorchDemo - Top-N Classification Predictors
==============================================

Loads bundled TorchScript models and their label files and returns the
highest-scoring labels for an image or a piece of text.

Modules:
    - inference: Predictors, engine contract, ranking and single-flight guard
    - data: Image preprocessing
    - utils: Configuration, logging, device and I/O helpers
"""

__version__ = "0.1.0"

from . import data
from . import inference
from . import utils

__all__ = [
    "data",
    "inference",
    "utils",
    "__version__",
]
