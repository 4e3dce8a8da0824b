"""
Utilities Module
=================

This module contains helper functions:
    - Configuration management
    - Logging setup
    - Device selection
    - File I/O utilities
"""

from .config import Config, load_config, save_config, merge_configs, load_predictor_config
from .logging import setup_logging, get_logger
from .device import get_device, get_device_info
from .io import load_image, read_lines, list_images

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    "merge_configs",
    "load_predictor_config",
    # Logging
    "setup_logging",
    "get_logger",
    # Device
    "get_device",
    "get_device_info",
    # I/O
    "load_image",
    "read_lines",
    "list_images",
]
