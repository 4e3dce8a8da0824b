"""
Model Export
=============

Builds the resource bundle the image predictor loads: a TorchScript
``ResNet18.pt`` traced from torchvision and the matching ``Labels.txt``.
"""

from pathlib import Path
from typing import Dict, Sequence, Tuple, Union

import numpy as np
import torch
import torch.nn as nn

from .inference.engine import TorchScriptEngine
from .inference.image_predictor import ImageModelContext
from .inference.resources import ResourceId
from .utils.logging import get_logger

logger = get_logger(__name__)


def load_resnet18() -> Tuple[nn.Module, Sequence[str]]:
    """
    Load torchvision's ImageNet ResNet18 and its class names.

    Downloads the weights on first use.
    """
    from torchvision.models import ResNet18_Weights, resnet18

    weights = ResNet18_Weights.DEFAULT
    model = resnet18(weights=weights)
    model.eval()
    return model, list(weights.meta["categories"])


def export_torchscript(
    model: nn.Module,
    output_path: Union[str, Path],
    input_size: Sequence[int] = ImageModelContext.input_tensor_size,
    optimize: bool = False,
) -> Path:
    """
    Trace a model and save it as TorchScript.

    Args:
        model: Model to export
        output_path: Destination ``.pt`` file
        input_size: Shape of the example input used for tracing
        optimize: Whether to run ``torch.jit.optimize_for_inference``

    Returns:
        Path of the saved module
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    model.eval()
    dummy_input = torch.randn(*input_size)
    with torch.no_grad():
        traced = torch.jit.trace(model, dummy_input)
    if optimize:
        traced = torch.jit.optimize_for_inference(traced)

    traced.save(str(output_path))
    logger.info(f"Saved TorchScript model: {output_path}")
    return output_path


def write_labels(labels: Sequence[str], output_path: Union[str, Path]) -> Path:
    """Write one label per line, newline-terminated."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
        for label in labels:
            f.write(f"{label}\n")

    logger.info(f"Saved {len(labels)} labels: {output_path}")
    return output_path


def verify_export(
    model_path: Union[str, Path],
    input_size: Sequence[int],
    num_labels: int,
) -> bool:
    """Reload an exported model and check its output has one score per label."""
    engine = TorchScriptEngine("cpu")
    if not engine.load_model(model_path):
        return False

    dummy = np.zeros(int(np.prod(input_size)), dtype=np.float32)
    if not engine.predict(dummy, input_size):
        return False

    ok = engine.data is not None and len(engine.data) == num_labels
    if not ok:
        logger.error(f"Exported model does not produce {num_labels} scores")
    return ok


def export_image_bundle(
    output_dir: Union[str, Path],
    model: nn.Module,
    labels: Sequence[str],
    optimize: bool = False,
) -> Dict[str, Path]:
    """
    Write the image model and its labels into ``output_dir``.

    Returns:
        Paths keyed by 'model' and 'labels'

    Raises:
        RuntimeError: If the exported model fails verification
    """
    output_dir = Path(output_dir)
    model_path = output_dir / ResourceId(*ImageModelContext.model).filename
    labels_path = output_dir / ResourceId(*ImageModelContext.label).filename

    export_torchscript(model, model_path, optimize=optimize)
    write_labels(labels, labels_path)

    if not verify_export(model_path, ImageModelContext.input_tensor_size, len(labels)):
        raise RuntimeError(f"Verification failed for {model_path}")

    return {"model": model_path, "labels": labels_path}
