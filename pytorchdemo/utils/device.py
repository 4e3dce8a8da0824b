"""
Device Utilities
=================

Functions for picking the torch device models run on.
"""

from typing import Optional

import torch

from .logging import get_logger

logger = get_logger(__name__)


def _mps_available() -> bool:
    return hasattr(torch.backends, "mps") and torch.backends.mps.is_available()


def get_device(device: Optional[str] = None) -> torch.device:
    """
    Get the device to run inference on.

    Priority: specified device > CUDA > MPS (Apple Silicon) > CPU

    Args:
        device: Specific device to use ('cuda', 'mps', 'cpu', 'auto' or None for auto)

    Returns:
        torch.device object
    """
    if device is not None and device != "auto":
        if device.startswith("cuda") and not torch.cuda.is_available():
            logger.warning("CUDA requested but not available. Falling back to CPU.")
            return torch.device("cpu")
        if device == "mps" and not _mps_available():
            logger.warning("MPS requested but not available. Falling back to CPU.")
            return torch.device("cpu")
        return torch.device(device)

    # Auto-detect best device
    if torch.cuda.is_available():
        return torch.device("cuda")
    elif _mps_available():
        return torch.device("mps")
    else:
        return torch.device("cpu")


def get_device_info() -> dict:
    """
    Get information about available devices.

    Returns:
        Dictionary with device information
    """
    info = {
        "cpu": True,
        "cuda_available": torch.cuda.is_available(),
        "mps_available": _mps_available(),
        "cuda_device_count": torch.cuda.device_count() if torch.cuda.is_available() else 0,
    }

    if torch.cuda.is_available():
        info["cuda_device_name"] = torch.cuda.get_device_name(0)
        info["cuda_memory_total"] = torch.cuda.get_device_properties(0).total_memory

    return info
