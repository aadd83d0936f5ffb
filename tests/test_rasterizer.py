import numpy as np
import pytest
from PIL import Image

from badapple.rasterizer import BlockGrid, luminance_grid, rasterize
from badapple.terminal import CURSOR_DOWN
from tests.conftest import solid


def rows_of(frame):
    """Strip control sequences, returning the glyph rows."""
    assert frame.endswith(CURSOR_DOWN)
    rows = frame.split(CURSOR_DOWN)[:-1]
    assert all(row.startswith("\r") for row in rows)
    return [row[1:] for row in rows]


def test_solid_white_is_blank():
    frame = rasterize(solid(255, (40, 30)), (4, 3), "@")
    assert rows_of(frame) == ["    "] * 3


def test_solid_black_is_glyph():
    frame = rasterize(solid(0, (40, 30)), (4, 3), "@")
    assert rows_of(frame) == ["@@@@"] * 3


def test_threshold_is_blank():
    assert rows_of(rasterize(solid(125), (2, 2), "#")) == ["  ", "  "]


def test_just_below_threshold_is_glyph():
    assert rows_of(rasterize(solid(124), (2, 2), "#")) == ["##", "##"]


def test_frame_format():
    frame = rasterize(solid(0), (2, 2), "#")
    assert frame == "\r##\x1b[1B\r##\x1b[1B"
    assert "\n" not in frame


def test_deterministic():
    rng = np.random.default_rng(7)
    img = Image.fromarray(rng.integers(0, 256, (36, 48), dtype=np.uint8))
    assert rasterize(img, (12, 9), "@") == rasterize(img, (12, 9), "@")


def test_left_dark_right_bright():
    img = Image.new("L", (4, 2))
    pixels = img.load()
    for y in range(2):
        for x in range(4):
            pixels[x, y] = 0 if x < 2 else 255
    assert rasterize(img, (2, 1), "@") == "\r@ \x1b[1B"


def test_uses_red_channel():
    assert rows_of(rasterize(solid((255, 0, 0), mode="RGB"), (1, 1), "@")) == [" "]
    assert rows_of(rasterize(solid((0, 255, 255), mode="RGB"), (1, 1), "@")) == ["@"]


def test_multi_character_glyph():
    assert rows_of(rasterize(solid(0), (2, 1), "<>")) == ["<><>"]


def test_divisor_uses_vertical_step_squared():
    # 8x2 block: sum is 16 * 40, divided by 2 * 2 gives 160
    img = solid(40, (8, 2))
    grid = BlockGrid.for_image(img.size, (1, 1))
    assert luminance_grid(img, grid).tolist() == [[160]]
    assert rows_of(rasterize(img, (1, 1), "@")) == [" "]


def test_corrected_mode_averages_true_block():
    img = solid(40, (8, 2))
    grid = BlockGrid.for_image(img.size, (1, 1), corrected=True)
    assert luminance_grid(img, grid).tolist() == [[40]]
    assert rows_of(rasterize(img, (1, 1), "@", corrected=True)) == ["@"]


def test_trailing_partial_block_is_not_sampled():
    grid = BlockGrid.for_image((5, 3), (2, 1))
    assert (grid.step_x, grid.step_y) == (3, 3)
    assert (grid.columns, grid.rows) == (1, 1)
    assert len(rows_of(rasterize(solid(0, (5, 3)), (2, 1), "@"))[0]) == 1


def test_corrected_mode_covers_edge_blocks():
    img = solid(100, (5, 2))
    grid = BlockGrid.for_image(img.size, (2, 1), corrected=True)
    assert (grid.columns, grid.rows) == (2, 1)
    assert luminance_grid(img, grid).tolist() == [[100, 100]]


def test_resolution_snaps_to_whole_blocks():
    # 480 / 100 rounds up to 5 pixel blocks, giving 96 columns
    grid = BlockGrid.for_image((480, 360), (100, 90))
    assert (grid.columns, grid.rows) == (96, 90)


def test_default_resolution_is_one_pixel_per_cell():
    grid = BlockGrid.for_image((480, 360), (480, 360))
    assert (grid.step_x, grid.step_y, grid.columns, grid.rows) == (1, 1, 480, 360)


def test_rounds_half_up():
    # Block sum 250 over divisor 2 * 2 is 62.5, which rounds up to 63
    img = Image.new("L", (1, 2))
    img.putdata([125, 125])
    grid = BlockGrid.for_image(img.size, (1, 1))
    assert luminance_grid(img, grid).tolist() == [[63]]


@pytest.mark.parametrize("resolution", [(0, 2), (2, 0), (-1, 3)])
def test_rejects_non_positive_resolution(resolution):
    with pytest.raises(ValueError, match="Resolution must be positive"):
        rasterize(solid(0), resolution, "@")


def test_rejects_empty_glyph():
    with pytest.raises(ValueError, match="glyph"):
        rasterize(solid(0), (2, 2), "")


def test_accepts_file_path(tmp_path):
    path = tmp_path / "frame.png"
    solid(0).save(path)
    assert rows_of(rasterize(path, (2, 2), "@")) == ["@@", "@@"]
