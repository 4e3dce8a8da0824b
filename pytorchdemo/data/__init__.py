"""
Data Module
============

Image preprocessing for the image classifier.
"""

from .preprocessing import (
    IMAGENET_MEAN,
    IMAGENET_STD,
    image_to_tensor_buffer,
    normalize_image,
    preprocess_image,
)

__all__ = [
    "IMAGENET_MEAN",
    "IMAGENET_STD",
    "image_to_tensor_buffer",
    "normalize_image",
    "preprocess_image",
]
