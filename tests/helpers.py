from __future__ import annotations

from typing import Sequence

from esper import World

from stackclash.components.block import BlockColor, GarbageBlock, NormalBlock
from stackclash.components.grid import Grid
from stackclash.events.bus import EVENT_TICK, EventBus

CELL_CODES = {
    'R': NormalBlock(BlockColor.RED),
    'G': NormalBlock(BlockColor.GREEN),
    'B': NormalBlock(BlockColor.BLUE),
    'Y': NormalBlock(BlockColor.YELLOW),
    'P': NormalBlock(BlockColor.PURPLE),
    '#': GarbageBlock(cracked=False),
    '%': GarbageBlock(cracked=True),
    '.': None,
}


def grid_from_rows(rows: Sequence[str], height: int | None = None) -> Grid:
    """Build a grid from strings listed top row first.

    Spaces are ignored; ``height`` pads empty rows above the given ones.
    """
    lines = [row.replace(' ', '') for row in rows]
    width = len(lines[0])
    height = height or len(lines)
    grid = Grid(width, height)
    for offset, line in enumerate(reversed(lines)):
        assert len(line) == width, f"ragged row {line!r}"
        for x, code in enumerate(line):
            grid.set(x, offset, CELL_CODES[code])
    return grid


def rows_of(grid: Grid) -> list[str]:
    """Inverse of ``grid_from_rows`` (top row first, no spaces)."""
    codes = {block: code for code, block in CELL_CODES.items()}
    return [
        ''.join(codes[grid.get(x, y)] for x in range(grid.width))
        for y in reversed(range(grid.height))
    ]


def install_grid(world: World, entity: int, rows: Sequence[str]) -> Grid:
    """Replace a player's board, padding the given bottom rows to the board height."""
    current = world.component_for_entity(entity, Grid)
    grid = grid_from_rows(rows, height=current.height)
    current.cells = grid.cells
    return current


class CyclingRandom:
    """Deterministic stand-in for ``random.Random``: choices cycle, ranges pick the low end."""

    def __init__(self, colors: Sequence[BlockColor] | None = None):
        self.colors = list(colors or BlockColor)
        self.calls = 0

    def choice(self, seq):
        if not self.colors:
            return seq[0]
        value = self.colors[self.calls % len(self.colors)]
        self.calls += 1
        return value

    def randint(self, a: int, b: int) -> int:
        return a


class Recorder:
    """Collects the payloads of one bus event."""

    def __init__(self, bus: EventBus, name: str):
        self.events: list[dict] = []
        bus.subscribe(name, self)

    def __call__(self, sender, **kwargs):
        self.events.append(kwargs)

    def __len__(self):
        return len(self.events)

    @property
    def last(self) -> dict:
        return self.events[-1]


def drive(bus: EventBus, ticks: int = 60, dt: float = 0.05):
    for _ in range(ticks):
        bus.emit(EVENT_TICK, dt=dt)
