"""
Resource Bundle
================

Locates the model and label files the predictors ship with.

Resources are addressed by (name, type), e.g. ``("ResNet18", "pt")``, and
resolve to ``<directory>/ResNet18.pt``.
"""

from pathlib import Path
from typing import NamedTuple, Optional, Tuple, Union

from ..utils.io import read_lines
from ..utils.logging import get_logger
from .errors import ResourceMissing

logger = get_logger(__name__)


class ResourceId(NamedTuple):
    name: str
    type: str

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.type}" if self.type else self.name


class ResourceBundle:
    """A directory of bundled resources."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path(self, name: str, type_: str) -> Optional[Path]:
        """Return the path of a resource, or None if it isn't bundled."""
        candidate = self.directory / ResourceId(name, type_).filename
        if candidate.is_file():
            return candidate
        return None

    def require(self, name: str, type_: str) -> Path:
        """
        Return the path of a resource.

        Raises:
            ResourceMissing: If the resource isn't bundled
        """
        path = self.path(name, type_)
        if path is None:
            raise ResourceMissing(name, type_, f"not found in {self.directory}")
        return path

    def read_labels(self, name: str, type_: str) -> Tuple[str, ...]:
        """
        Load a label file, one label per line.

        Raises:
            ResourceMissing: If the file isn't bundled or cannot be decoded
        """
        path = self.require(name, type_)
        try:
            labels = tuple(read_lines(path))
        except UnicodeDecodeError as e:
            raise ResourceMissing(name, type_, f"is not valid UTF-8 ({e})") from e

        logger.info(f"Loaded {len(labels)} labels from {path.name}")
        return labels

    def __repr__(self) -> str:
        return f"ResourceBundle({str(self.directory)!r})"
