"""
Image Rasterizer

Turns an arbitrary picture into a boolean puzzle grid: the image is
scaled to fit the maximum grid size, converted to grayscale and every
pixel darker than the threshold becomes a filled cell.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from nonogram.solver import GridSize, SolutionGrid, to_solution_grid

logger = logging.getLogger(__name__)


DEFAULT_THRESHOLD = 128
DEFAULT_MAX_SIZE = GridSize(15, 15)

# ITU-R 601 luma weights (R, G, B)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


class RasterizeError(Exception):
    """Raised when an image cannot be loaded or converted."""


@dataclass(frozen=True)
class RasterOptions:
    """
    Rasterization parameters.

    Attributes:
        threshold: Gray level 0-255; darker pixels become filled cells
        max_size: Largest grid the image may be scaled to
    """
    threshold: int = DEFAULT_THRESHOLD
    max_size: GridSize = DEFAULT_MAX_SIZE

    def __post_init__(self):
        if not 0 <= self.threshold <= 255:
            raise ValueError(f"Threshold must be within 0-255, got {self.threshold}")


def load_image(source: Union[str, Path, Image.Image]) -> Image.Image:
    """
    Load an image from disk (or pass a PIL image through).

    Raises:
        RasterizeError: If the file is missing or not an image
    """
    if isinstance(source, Image.Image):
        return source
    try:
        with Image.open(source) as img:
            img.load()
            return img.copy()
    except (OSError, UnidentifiedImageError) as e:
        raise RasterizeError(f"Failed to load image {source}: {e}") from e


def fit_size(width: int, height: int, max_size: GridSize) -> GridSize:
    """
    Scale (width, height) to fit inside max_size, keeping aspect ratio.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        max_size: Maximum grid size

    Returns:
        Grid size (rows = scaled height, columns = scaled width)
    """
    if width <= 0 or height <= 0:
        raise RasterizeError(f"Image has no pixels ({width}x{height})")
    scale = min(max_size.columns / width, max_size.rows / height)
    columns = max(1, int(round(width * scale)))
    rows = max(1, int(round(height * scale)))
    return GridSize(rows=rows, columns=columns)


def image_to_grid(source: Union[str, Path, Image.Image],
                  options: RasterOptions = RasterOptions()) -> SolutionGrid:
    """
    Rasterize an image into a solution grid.

    Args:
        source: Image path or PIL Image
        options: Threshold and maximum grid size

    Returns:
        Solution grid; True where the scaled pixel is darker than
        the threshold

    Raises:
        RasterizeError: If the image cannot be loaded
    """
    start_time = time.perf_counter()
    image = load_image(source)

    # Flatten transparency onto white so clear pixels stay unfilled
    if image.mode in ("RGBA", "LA", "P"):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)
    rgb = np.array(image.convert("RGB"))

    size = fit_size(rgb.shape[1], rgb.shape[0], options.max_size)
    interpolation = cv2.INTER_CUBIC if size.columns > rgb.shape[1] else cv2.INTER_AREA
    scaled = cv2.resize(rgb, (size.columns, size.rows), interpolation=interpolation)

    r, g, b = (scaled[..., i].astype(np.float32) for i in range(3))
    gray = LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b
    filled = gray < options.threshold

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(
        f"Rasterized {rgb.shape[1]}x{rgb.shape[0]} image to {size.rows}x{size.columns} "
        f"grid ({int(filled.sum())} filled) in {elapsed_ms:.1f}ms"
    )
    return to_solution_grid(filled.tolist())
