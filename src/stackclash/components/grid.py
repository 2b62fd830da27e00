from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from stackclash.components.block import Cell


@dataclass(slots=True)
class Grid:
    """Fixed-size board of cells stored row-major, ``y=0`` being the bottom row.

    The board algorithms live in ``stackclash.systems.board_ops``; this
    component only guards coordinate access.
    """

    width: int
    height: int
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid size must be positive, got {self.width}x{self.height}")
        size = self.width * self.height
        if not self.cells:
            self.cells = [None] * size
        elif len(self.cells) != size:
            raise ValueError(f"Expected {size} cells, got {len(self.cells)}")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def idx(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def get(self, x: int, y: int) -> Cell:
        return self.cells[self.idx(x, y)]

    def set(self, x: int, y: int, block: Cell) -> None:
        self.cells[self.idx(x, y)] = block

    def clear(self) -> None:
        self.cells = [None] * (self.width * self.height)

    def snapshot(self) -> Tuple[Cell, ...]:
        return tuple(self.cells)

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, list(self.cells))

    def occupied_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)
