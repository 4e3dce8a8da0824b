"""
I/O Utilities
==============

Functions for loading images and text resources.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image


def load_image(
    path: Union[str, Path],
    mode: str = "RGB",
    size: Optional[Tuple[int, int]] = None
) -> np.ndarray:
    """
    Load an image from file.

    Args:
        path: Path to image file
        mode: Color mode ('RGB', 'BGR', 'GRAY')
        size: Optional resize dimensions (width, height)

    Returns:
        Image as numpy array (H, W, C) for color or (H, W) for grayscale

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If image cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)

    if image is None:
        raise ValueError(f"Failed to load image: {path}")

    # Convert color mode
    if mode == "RGB":
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    elif mode == "GRAY":
        image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    # 'BGR' is default OpenCV format, no conversion needed

    if size is not None:
        image = cv2.resize(image, size, interpolation=cv2.INTER_LINEAR)

    return image


def read_lines(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """
    Read a text file as a list of lines.

    Any newline convention is accepted. A trailing newline does not produce
    an empty final entry; otherwise lines are returned verbatim.

    Args:
        path: Path to text file
        encoding: File encoding

    Returns:
        Lines without their terminators

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")

    with open(path, 'r', encoding=encoding, newline='') as f:
        return f.read().splitlines()


def list_images(
    directory: Union[str, Path],
    extensions: Optional[List[str]] = None,
    recursive: bool = False
) -> List[Path]:
    """
    List all image files in a directory.

    Args:
        directory: Directory to search
        extensions: List of valid extensions (default: common image formats)
        recursive: Whether to search recursively

    Returns:
        List of image paths
    """
    directory = Path(directory)

    if extensions is None:
        extensions = ['.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif']

    extensions = {ext.lower() for ext in extensions}
    candidates = directory.rglob("*") if recursive else directory.glob("*")

    return sorted(p for p in candidates if p.is_file() and p.suffix.lower() in extensions)


def get_image_info(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Get information about an image file.

    Args:
        path: Path to image

    Returns:
        Dictionary with image info
    """
    path = Path(path)

    stat = path.stat()

    # Load image header only
    with Image.open(path) as img:
        width, height = img.size
        mode = img.mode
        format_name = img.format

    return {
        "path": str(path),
        "filename": path.name,
        "width": width,
        "height": height,
        "channels": len(mode),
        "mode": mode,
        "format": format_name,
        "size_bytes": stat.st_size,
    }
