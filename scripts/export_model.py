#!/usr/bin/env python3
"""
Image Model Export
==================

Export torchvision's ResNet18 as the TorchScript bundle the image
predictor loads (ResNet18.pt + Labels.txt).
"""

import argparse
from pathlib import Path

from pytorchdemo.export import export_image_bundle, load_resnet18
from pytorchdemo.utils.logging import setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Export the ResNet18 image classifier bundle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export into ./resources
  python scripts/export_model.py

  # Export an inference-optimized module elsewhere
  python scripts/export_model.py --output-dir bundle --optimize
        """
    )

    parser.add_argument('--output-dir', default='resources', help='Output directory')
    parser.add_argument('--optimize', action='store_true',
                        help='Run torch.jit.optimize_for_inference on the traced module')

    args = parser.parse_args()
    setup_logging()

    print("=" * 60)
    print("ResNet18 Export")
    print("=" * 60)

    print("\n📦 Loading model...")
    model, labels = load_resnet18()
    total_params = sum(p.numel() for p in model.parameters())
    print(f"   Parameters: {total_params / 1e6:.1f}M")
    print(f"   Classes: {len(labels)}")

    paths = export_image_bundle(args.output_dir, model, labels, optimize=args.optimize)

    print("\n" + "=" * 60)
    print("EXPORT COMPLETE")
    print("=" * 60)
    for kind, path in paths.items():
        size_mb = Path(path).stat().st_size / (1024 * 1024)
        print(f"   {kind}: {Path(path).name} ({size_mb:.1f} MB)")
    print("=" * 60)


if __name__ == "__main__":
    main()
