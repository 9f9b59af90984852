"""
Seed Codec Module

Seeds are opaque strings. A plain seed selects the random stream for a
generated puzzle; a seed starting with "img_" carries a pre-rasterized
puzzle:

    img_ + base64(JSON {"g": [row bits...], "t": threshold, "s": [rows, cols], "v": 2})

Each entry of "g" packs one row, one bit per column (bit i = column i).
Older payloads without "v" packed bit (column % 8), which aliases
columns on rows wider than 8; they still decode with that rule. Their
"s" is the maximum grid size, so their rows are padded with empty rows
(or cut) to the declared count.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from nonogram.solver import SolutionGrid, to_solution_grid

logger = logging.getLogger(__name__)


IMAGE_SEED_PREFIX = "img_"
PACKING_VERSION = 2
LEGACY_BITS_PER_ROW = 8


class SeedDecodeError(ValueError):
    """Raised when an img_ seed payload cannot be decoded."""


@dataclass(frozen=True)
class ImageSeed:
    """
    Decoded image seed.

    Attributes:
        grid: Solution grid, exactly rows x columns
        threshold: Brightness threshold the image was rasterized with
        rows: Declared row count
        columns: Declared column count
    """
    grid: SolutionGrid
    threshold: int
    rows: int
    columns: int


def is_image_seed(seed: str) -> bool:
    """True if the seed carries an image-derived puzzle."""
    return seed.startswith(IMAGE_SEED_PREFIX)


def pack_row(row: List[bool]) -> int:
    """Pack a row into an int, bit i set when column i is filled."""
    value = 0
    for col, cell in enumerate(row):
        if cell:
            value |= 1 << col
    return value


def unpack_row(value: int, columns: int, legacy: bool = False) -> List[bool]:
    """
    Rebuild a row of the given width from its packed value.

    Args:
        value: Packed row
        columns: Row width
        legacy: Test bit (column % 8) instead of bit column

    Returns:
        Filled flags for the row
    """
    if legacy:
        return [bool(value & (1 << (col % LEGACY_BITS_PER_ROW))) for col in range(columns)]
    return [bool(value & (1 << col)) for col in range(columns)]


def encode_image_seed(grid: SolutionGrid, threshold: int) -> str:
    """
    Encode a rasterized grid as an img_ seed.

    Args:
        grid: Solution grid produced by the rasterizer
        threshold: Brightness threshold used to produce it

    Returns:
        Seed string
    """
    rows = len(grid)
    columns = len(grid[0]) if rows else 0
    payload = {
        "g": [pack_row(list(row)) for row in grid],
        "t": threshold,
        "s": [rows, columns],
        "v": PACKING_VERSION,
    }
    data = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return IMAGE_SEED_PREFIX + base64.b64encode(data).decode("ascii")


def decode_image_seed(seed: str) -> ImageSeed:
    """
    Decode an img_ seed back into its grid.

    Args:
        seed: Seed string starting with "img_"

    Returns:
        ImageSeed with a grid of the declared size

    Raises:
        SeedDecodeError: On a missing prefix, bad base64 or JSON,
            missing or mistyped fields, or (for current payloads) a
            grid that does not match the declared dimensions
    """
    if not is_image_seed(seed):
        raise SeedDecodeError("Not an image seed")

    try:
        raw = base64.b64decode(seed[len(IMAGE_SEED_PREFIX):], validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SeedDecodeError(f"Malformed image seed payload: {e}") from e

    packed, threshold, rows, columns, legacy = _read_fields(payload)

    if legacy:
        # Old seeds declare the maximum size, not the rasterized one
        packed = (packed + [0] * rows)[:rows]
    elif len(packed) != rows:
        raise SeedDecodeError(f"Seed declares {rows} rows but carries {len(packed)}")
    elif any(value >> columns for value in packed):
        raise SeedDecodeError(f"Seed has filled cells beyond column {columns - 1}")

    grid = to_solution_grid(unpack_row(value, columns, legacy) for value in packed)
    logger.debug(f"Decoded image seed: {rows}x{columns}, threshold={threshold}, legacy={legacy}")
    return ImageSeed(grid=grid, threshold=threshold, rows=rows, columns=columns)


def _read_fields(payload: Any):
    """Validate the JSON payload and pull out its fields."""
    if not isinstance(payload, dict):
        raise SeedDecodeError("Image seed payload must be a JSON object")

    missing = [key for key in ("g", "t", "s") if key not in payload]
    if missing:
        raise SeedDecodeError(f"Image seed payload missing fields: {', '.join(missing)}")

    packed = payload["g"]
    threshold = payload["t"]
    size = payload["s"]

    if not isinstance(packed, list) or not all(_is_int(v) and v >= 0 for v in packed):
        raise SeedDecodeError("Field 'g' must be a list of non-negative integers")
    if not isinstance(threshold, (int, float)) or isinstance(threshold, bool):
        raise SeedDecodeError("Field 't' must be a number")
    if (not isinstance(size, list) or len(size) != 2
            or not all(_is_int(v) and v > 0 for v in size)):
        raise SeedDecodeError("Field 's' must be [rows, columns] with positive integers")

    legacy = _packing_version(payload) < PACKING_VERSION
    return packed, int(threshold), size[0], size[1], legacy


def _packing_version(payload: Dict[str, Any]) -> int:
    version = payload.get("v", 1)
    if not _is_int(version):
        raise SeedDecodeError("Field 'v' must be an integer")
    return version


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
