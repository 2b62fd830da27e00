from __future__ import annotations

from typing import Dict, Tuple

from stackclash.components.block import BlockColor, GarbageBlock, NormalBlock
from stackclash.components.cursor import Cursor
from stackclash.components.grid import Grid

RGB = Tuple[int, int, int]

BLOCK_COLORS: Dict[BlockColor, RGB] = {
    BlockColor.RED: (217, 51, 51),
    BlockColor.GREEN: (51, 204, 77),
    BlockColor.BLUE: (51, 102, 230),
    BlockColor.YELLOW: (230, 204, 51),
    BlockColor.PURPLE: (153, 77, 230),
}
GARBAGE_COLOR: RGB = (110, 110, 120)
CRACKED_GARBAGE_COLOR: RGB = (170, 160, 140)
FRAME_COLOR: RGB = (90, 90, 90)
CURSOR_COLOR: RGB = (255, 255, 255)


def fill_for(block) -> RGB | None:
    if isinstance(block, NormalBlock):
        return BLOCK_COLORS[block.color]
    if isinstance(block, GarbageBlock):
        return CRACKED_GARBAGE_COLOR if block.cracked else GARBAGE_COLOR
    return None


class BoardRenderer:
    """Draws one player's board and cursor; reads state, never mutates it.

    The ``arcade`` module is passed in so headless tests can hand in a fake.
    """

    def __init__(self, cell_size: int, padding: int = 1):
        self.cell_size = cell_size
        self.padding = padding

    def board_size(self, grid: Grid) -> Tuple[int, int]:
        return grid.width * self.cell_size, grid.height * self.cell_size

    def render(self, arcade, grid: Grid, cursor: Cursor, origin_x: float, origin_y: float) -> None:
        size = self.cell_size
        pad = self.padding
        board_w, board_h = self.board_size(grid)
        arcade.draw_lrbt_rectangle_outline(origin_x, origin_x + board_w, origin_y, origin_y + board_h, FRAME_COLOR, 2)
        for y in range(grid.height):
            for x in range(grid.width):
                color = fill_for(grid.get(x, y))
                if color is None:
                    continue
                left = origin_x + x * size
                bottom = origin_y + y * size
                arcade.draw_lrbt_rectangle_filled(left + pad, left + size - pad, bottom + pad, bottom + size - pad, color)
        left = origin_x + cursor.x * size
        bottom = origin_y + cursor.y * size
        arcade.draw_lrbt_rectangle_outline(left, left + 2 * size, bottom, bottom + size, CURSOR_COLOR, 3)
