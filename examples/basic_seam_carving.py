#!/usr/bin/env python3
"""
Basic seam carving example.

Loads an image (or synthesises an 800x600 demo grid), converts it to
grayscale integer intensities and carves it down to a target width.

Usage:
    python basic_seam_carving.py                       # synthetic demo, half width
    python basic_seam_carving.py photo.jpg --width 300
    python basic_seam_carving.py photo.jpg --threshold --plot
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import torch
from PIL import Image
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from seamcarve import (Config, ExecutionContext, PixelGrid, SeamCarvingError,
                       accumulate, carve, estimate_energy, resolve_target_width,
                       setup_logging, trace_seam)


def load_grid(path: str) -> PixelGrid:
    """Load an image file as a grayscale PixelGrid."""
    img = Image.open(path).convert('L')
    return PixelGrid(np.array(img, dtype=np.int64))


def make_demo_grid(width: int, height: int) -> PixelGrid:
    """Soft horizontal gradient with a bright disc in the middle."""
    y = torch.arange(height).unsqueeze(1)
    x = torch.arange(width).unsqueeze(0)
    pixels = (x * 64 // max(1, width - 1)).expand(height, width).clone()
    r = min(width, height) // 4
    disc = (x - width // 2) ** 2 + (y - height // 2) ** 2 <= r ** 2
    pixels[disc] = 220
    return PixelGrid(pixels)


def save_grid(grid: PixelGrid, path: str):
    """Save a PixelGrid as an 8-bit grayscale image."""
    arr = grid.pixels.cpu().numpy().clip(0, 255).astype(np.uint8)
    Image.fromarray(arr).save(path)
    print(f"Saved: {path}")


def plot_first_seam(grid: PixelGrid, path: str):
    """Plot the input, its energy map and the first seam that would be removed."""
    energy = estimate_energy(grid)
    seam = trace_seam(accumulate(energy))
    rows = np.arange(grid.height)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    ax1.imshow(grid.pixels.cpu().numpy(), cmap='gray', vmin=0, vmax=255)
    ax1.plot(seam.cpu().numpy(), rows, color='red', linewidth=1)
    ax1.set_title('Input with first seam')
    ax1.axis('off')

    im = ax2.imshow(energy.cpu().numpy(), cmap='hot')
    ax2.set_title('Energy')
    ax2.axis('off')
    plt.colorbar(im, ax=ax2, fraction=0.046, pad=0.04)

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"Saved: {path}")


def main():
    parser = argparse.ArgumentParser(
        description="Shrink an image's width with content-aware seam carving"
    )
    parser.add_argument(
        'input', nargs='?',
        help='Input image (default: synthetic demo grid)'
    )
    parser.add_argument(
        '--width', type=int,
        help=f'Target width (default: {Config.DEFAULT_SHRINK_RATIO:g} x input width)'
    )
    parser.add_argument(
        '--threshold', type=int, nargs='?', const=Config.ENERGY_THRESHOLD,
        help=f'Stop once the cheapest seam costs more than this '
             f'(flag alone uses {Config.ENERGY_THRESHOLD})'
    )
    parser.add_argument(
        '--output', type=str, default='carved.png',
        help='Output image path (default: carved.png)'
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Also save a plot of the energy map and first seam'
    )
    parser.add_argument(
        '--device', type=str, default=Config.DEVICE,
        help=f'Torch device (default: {Config.DEVICE})'
    )
    parser.add_argument(
        '--log-level', type=str, default=Config.LOG_LEVEL,
        help=f'Log level (default: {Config.LOG_LEVEL})'
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.input:
        grid = load_grid(args.input)
    else:
        grid = make_demo_grid(Config.DEMO_WIDTH, Config.DEMO_HEIGHT)
    print(f"Input size: {grid.width} x {grid.height}")

    target = resolve_target_width(grid.width, args.width)
    context = ExecutionContext(device=args.device)

    if args.plot:
        plot_first_seam(grid, str(Path(args.output).with_suffix('')) + '_seam.png')

    try:
        result = carve(grid, target, energy_threshold=args.threshold, context=context)
    except SeamCarvingError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if result.halted_early:
        print(f"Halted early ({result.halt_reason.value}), "
              f"cheapest seam energy {result.seam_energy}")
    print(f"Output width: {result.final_width}")
    print(f"Output height: {result.grid.height}")
    save_grid(result.grid, args.output)


if __name__ == '__main__':
    main()
