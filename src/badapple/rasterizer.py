from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from badapple.terminal import CARRIAGE_RETURN, CURSOR_DOWN

# Blocks at or above this luminance are drawn blank
THRESHOLD = 125


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


@dataclass(frozen=True)
class BlockGrid:
    """Mapping from output character cells to rectangles of source pixels.

    Cell (col, row) covers pixels ``[col*step_x, col*step_x + step_x)`` by
    ``[row*step_y, row*step_y + step_y)``. Step sizes come from ceiling
    division, so a requested resolution snaps to the nearest whole block and
    is not always honored exactly.
    """

    step_x: int
    step_y: int
    columns: int
    rows: int
    corrected: bool = False

    @classmethod
    def for_image(cls, size: tuple[int, int], resolution: tuple[int, int], corrected: bool = False) -> BlockGrid:
        width, height = size
        columns, rows = resolution
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Resolution must be positive, got {columns}x{rows}")
        step_x = _ceil_div(width, columns)
        step_y = _ceil_div(height, rows)
        if corrected:
            return cls(step_x, step_y, _ceil_div(width, step_x), _ceil_div(height, step_y), corrected=True)
        # Anchors stop at width - step_x / height - step_y: a trailing partial block is never sampled
        return cls(step_x, step_y, width // step_x, height // step_y)

    def _block_sums(self, arr: np.ndarray) -> np.ndarray:
        cells = arr.reshape(self.rows, self.step_y, self.columns, self.step_x)
        return cells.sum(axis=(1, 3))


def luminance_grid(image: Image.Image, grid: BlockGrid) -> np.ndarray:
    """Per-cell luminance of the red channel. Returns int array of shape (rows, columns).

    The default mode divides each block sum by ``step_y ** 2`` regardless of
    block width. Corrected mode divides by the number of pixels actually in
    the block, including clipped blocks at the right and bottom edges.
    """
    arr = np.asarray(image.convert("RGB"), dtype=np.float64)[:, :, 0]
    height, width = arr.shape
    grid_h = grid.rows * grid.step_y
    grid_w = grid.columns * grid.step_x

    if grid.corrected:
        pad = ((0, grid_h - height), (0, grid_w - width))
        sums = grid._block_sums(np.pad(arr, pad))
        divisor = grid._block_sums(np.pad(np.ones_like(arr), pad))
    else:
        sums = grid._block_sums(arr[:grid_h, :grid_w])
        divisor = float(grid.step_y * grid.step_y)

    # Round half away from zero; values are never negative
    return np.floor(sums / divisor + 0.5).astype(np.int64)


def rasterize(
    image: Image.Image | str | Path,
    resolution: tuple[int, int],
    glyph: str = "@",
    corrected: bool = False,
) -> str:
    """Convert one image into a glyph frame.

    Each row is prefixed with a carriage return and terminated with a
    cursor-down sequence instead of a newline, so the frame can be painted
    from the top-left corner in one write.
    """
    if not glyph:
        raise ValueError("Fill glyph must not be empty")
    if not isinstance(image, Image.Image):
        image = Image.open(image)

    grid = BlockGrid.for_image(image.size, resolution, corrected=corrected)
    luminance = luminance_grid(image, grid)

    rows = []
    for row in luminance:
        cells = "".join(" " if value >= THRESHOLD else glyph for value in row)
        rows.append(f"{CARRIAGE_RETURN}{cells}{CURSOR_DOWN}")
    return "".join(rows)
