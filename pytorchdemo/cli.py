"""
Command Line Interface
=======================

Classify images or text with the bundled models.

Usage:
    pytorchdemo image photo.jpg [more.jpg | a_directory ...] [--top 5]
    pytorchdemo text "what a great goal in the last minute" [--top 3]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .inference import (
    ImagePredictor,
    InferenceResult,
    NLPPredictor,
    PredictorError,
)
from .utils.config import load_predictor_config, merge_configs, Config
from .utils.io import get_image_info, list_images, load_image
from .utils.logging import get_logger, log_system_info, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pytorchdemo",
        description="Top-N image and text classification with bundled TorchScript models",
    )
    parser.add_argument('--config', type=str, default=None,
                        help='YAML file merged over the packaged defaults')
    parser.add_argument('--resources', type=str, default=None,
                        help='Directory holding the model and label files')
    parser.add_argument('--device', type=str, default=None,
                        choices=['auto', 'cpu', 'cuda', 'mps'])
    parser.add_argument('--top', type=int, default=None,
                        help='Number of labels to show')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])

    subparsers = parser.add_subparsers(dest='command', required=True)

    image_parser = subparsers.add_parser('image', help='Classify images')
    image_parser.add_argument('paths', nargs='+', help='Image files or directories')

    text_parser = subparsers.add_parser('text', help='Classify a piece of text')
    text_parser.add_argument('text', help='Text to classify')

    return parser


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    overrides = {}
    if args.resources is not None:
        overrides['resources'] = {'directory': args.resources}
    if args.device is not None:
        overrides['device'] = args.device
    if args.top is not None:
        overrides['image'] = {'result_count': args.top}
        overrides['text'] = {'result_count': args.top}
    if args.log_level is not None:
        overrides['logging'] = {'level': args.log_level}
    return Config.from_dict(merge_configs(config.to_dict(), overrides))


def _print_results(results: List[InferenceResult]) -> None:
    for rank, result in enumerate(results, start=1):
        print(f"   {rank}. {result.label:<30} {result.score:.4f}")


def _collect_images(paths: Sequence[str]) -> List[Path]:
    images = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            images.extend(list_images(path))
        else:
            images.append(path)
    return images


def run_image(config: Config, paths: Sequence[str]) -> int:
    predictor = ImagePredictor.from_config(config)
    count = config.get('image.result_count', 3)

    images = _collect_images(paths)
    if not images:
        logger.error("No images found")
        return 1

    status = 0
    for path in images:
        try:
            image = load_image(path)
        except (FileNotFoundError, ValueError) as e:
            logger.error(str(e))
            status = 1
            continue

        logger.debug(f"Image info: {get_image_info(path)}")
        outcome = predictor.classify(image, result_count=count)
        print(f"\n📷 {path.name}")
        if outcome.error is not None:
            print(f"   ❌ {type(outcome.error).__name__}: {outcome.error}")
            status = 1
            continue
        _print_results(outcome.results)

    return status


def run_text(config: Config, text: str) -> int:
    predictor = NLPPredictor.from_config(config)
    count = config.get('text.result_count', 3)

    def show(results: List[InferenceResult], inference_time_ms: float, error: Optional[Exception]) -> None:
        if error is not None:
            print(f"   ❌ {type(error).__name__}: {error}")
            return
        print(f"   Inference time: {inference_time_ms:.1f} ms")
        _print_results(results)

    print(f"\n📝 {text}")
    outcome = predictor.forward(text, count, show)
    return 0 if outcome is not None and outcome.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _apply_overrides(load_predictor_config(args.config), args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(
        level=config.get('logging.level', 'INFO'),
        log_file=config.get('logging.file'),
        use_rich=config.get('logging.use_rich', True),
    )
    log_system_info()

    try:
        if args.command == 'image':
            return run_image(config, args.paths)
        return run_text(config, args.text)
    except PredictorError as e:
        # Startup failures are unrecoverable for the CLI
        logger.error(f"Cannot start predictor: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
