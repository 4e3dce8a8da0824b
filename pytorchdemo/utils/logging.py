"""
Logging Utilities
==================

Functions for setting up and managing logging.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

# Try to import rich for better console output
try:
    from rich.console import Console
    from rich.logging import RichHandler
    RICH_AVAILABLE = True
except ImportError:
    RICH_AVAILABLE = False


ROOT_LOGGER_NAME = "pytorchdemo"


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    use_rich: bool = True,
    name: Optional[str] = ROOT_LOGGER_NAME
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        use_rich: Whether to use rich formatting (if available)
        name: Logger name (None for root logger)

    Returns:
        Configured logger
    """
    # Convert string level to int
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    # Console handler
    if use_rich and RICH_AVAILABLE:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter('%(message)s'))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(simple_formatter)

    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_system_info(logger: Optional[logging.Logger] = None) -> None:
    """
    Log system and environment information.

    Args:
        logger: Logger to use (creates new one if None)
    """
    import platform
    import torch

    from .device import get_device_info

    logger = logger or get_logger()
    info = get_device_info()

    logger.debug(f"Platform: {platform.platform()}")
    logger.debug(f"Python: {platform.python_version()}")
    logger.debug(f"PyTorch: {torch.__version__}")
    logger.debug(f"CUDA Available: {info['cuda_available']}")
    logger.debug(f"MPS Available: {info['mps_available']}")

    if info["cuda_available"]:
        logger.debug(f"CUDA Device: {info['cuda_device_name']}")
