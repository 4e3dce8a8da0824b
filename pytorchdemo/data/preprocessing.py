"""
Preprocessing Module
=====================

Turns RGB images into the flat float buffers the image classifier reads.
"""

from typing import Tuple

import cv2
import numpy as np

IMAGENET_MEAN = (0.485, 0.456, 0.406)
IMAGENET_STD = (0.229, 0.224, 0.225)


def normalize_image(
    image: np.ndarray,
    mean: Tuple[float, ...] = IMAGENET_MEAN,
    std: Tuple[float, ...] = IMAGENET_STD,
) -> np.ndarray:
    """
    Apply ImageNet normalization to image.

    Args:
        image: Input image (H, W, C) with values in [0, 1]
        mean: Normalization mean per channel
        std: Normalization std per channel

    Returns:
        Normalized image
    """
    mean = np.array(mean, dtype=np.float32)
    std = np.array(std, dtype=np.float32)

    return (image - mean) / std


def preprocess_image(
    image: np.ndarray,
    target_size: int = 224,
    normalize: bool = True,
    mean: Tuple[float, ...] = IMAGENET_MEAN,
    std: Tuple[float, ...] = IMAGENET_STD,
) -> np.ndarray:
    """
    Resize and normalize a single image.

    Args:
        image: Input image (H, W, 3) in RGB format, uint8
        target_size: Side of the square output
        normalize: Whether to apply ImageNet normalization
        mean: Normalization mean
        std: Normalization std

    Returns:
        float32 image (target_size, target_size, 3)

    Raises:
        ValueError: If the image is not a 3-channel array
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) RGB image, got shape {image.shape}")

    image = cv2.resize(image, (target_size, target_size), interpolation=cv2.INTER_LINEAR)
    image = image.astype(np.float32) / 255.0

    if normalize:
        image = normalize_image(image, mean, std)

    return image.astype(np.float32)


def image_to_tensor_buffer(image: np.ndarray, target_size: int = 224) -> np.ndarray:
    """
    Convert an RGB image to the classifier's flat input buffer.

    The buffer is laid out as (1, 3, target_size, target_size), channel-major.

    Args:
        image: Input image (H, W, 3) in RGB format, uint8

    Returns:
        Contiguous 1-D float32 array of 3 * target_size ** 2 values
    """
    processed = preprocess_image(image, target_size=target_size)

    # HWC -> CHW
    chw = np.transpose(processed, (2, 0, 1))
    return np.ascontiguousarray(chw, dtype=np.float32).reshape(-1)
