"""
Build a shareable img_ seed from an image.

Rasterizes the image the same way the game does, prints the seed and a
preview of the resulting grid, and checks that the seed decodes back to
the same grid.

Usage:
    python tools/seed_from_image.py picture.png
    python tools/seed_from_image.py picture.png --threshold 100 --max-rows 20 --max-cols 20
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nonogram.rasterizer import RasterOptions, RasterizeError, image_to_grid
from nonogram.seeds import decode_image_seed, encode_image_seed
from nonogram.solver import GridSize, generate_hints


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the img_ seed for an image")
    parser.add_argument("image", help="Image file")
    parser.add_argument("--threshold", "-t", type=int, default=128, help="Brightness threshold 0-255")
    parser.add_argument("--max-rows", type=int, default=15, help="Maximum grid rows")
    parser.add_argument("--max-cols", type=int, default=15, help="Maximum grid columns")
    args = parser.parse_args()

    options = RasterOptions(threshold=args.threshold,
                            max_size=GridSize(args.max_rows, args.max_cols))
    try:
        grid = image_to_grid(args.image, options)
    except RasterizeError as e:
        print(f"ERROR: {e}")
        return 1

    seed = encode_image_seed(grid, args.threshold)
    hints = generate_hints(grid)

    print(f"Grid: {len(grid)}x{len(grid[0])}")
    for row, row_hints in zip(grid, hints.rows):
        print("  " + "".join("#" if cell else "." for cell in row) + "  " + " ".join(map(str, row_hints)))

    if decode_image_seed(seed).grid != grid:
        print("ERROR: seed does not round-trip")
        return 1

    print(f"\n{seed}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
