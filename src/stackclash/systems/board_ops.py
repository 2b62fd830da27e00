from __future__ import annotations

import random
from typing import Callable, Iterator, List, Sequence, Tuple

from stackclash.components.block import (
    PALETTE,
    BlockColor,
    Cell,
    GarbageBlock,
    NormalBlock,
    color_of,
    is_garbage,
)
from stackclash.components.clear_stats import ClearStats
from stackclash.components.cursor import SwapCmd
from stackclash.components.grid import Grid
from stackclash.constants import ANTI_MATCH_ATTEMPTS

Position = Tuple[int, int]
Move = Tuple[int, int]  # (source index, target index)

NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(width: int, height: int, x: int, y: int) -> Iterator[Position]:
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            yield nx, ny


def flood_components(width: int, height: int, member: Callable[[int], bool]) -> List[List[Position]]:
    """4-connected components of the cells whose index satisfies ``member``.

    ``member`` must read from a snapshot, never from cells being rewritten.
    """
    visited = [False] * (width * height)
    components: List[List[Position]] = []
    for y in range(height):
        for x in range(width):
            idx = y * width + x
            if visited[idx] or not member(idx):
                continue
            visited[idx] = True
            stack = [(x, y)]
            component: List[Position] = []
            while stack:
                cx, cy = stack.pop()
                component.append((cx, cy))
                for nx, ny in neighbors(width, height, cx, cy):
                    nidx = ny * width + nx
                    if not visited[nidx] and member(nidx):
                        visited[nidx] = True
                        stack.append((nx, ny))
            components.append(component)
    return components


def garbage_components(cells: Sequence[Cell], width: int, height: int) -> List[List[Position]]:
    return flood_components(width, height, lambda idx: is_garbage(cells[idx]))


def component_can_fall(component: Sequence[Position], cells: Sequence[Cell], width: int) -> bool:
    members = {y * width + x for x, y in component}
    for x, y in component:
        if y == 0:
            return False
        below = (y - 1) * width + x
        if cells[below] is not None and below not in members:
            return False
    return True


# ---------------------------------------------------------------------------
# Swapping
# ---------------------------------------------------------------------------

def swap_in_bounds(grid: Grid, cmd: SwapCmd) -> bool:
    """Swap two cells; refuse out-of-range coordinates and garbage blocks."""
    if not (grid.in_bounds(cmd.ax, cmd.ay) and grid.in_bounds(cmd.bx, cmd.by)):
        return False
    a = grid.get(cmd.ax, cmd.ay)
    b = grid.get(cmd.bx, cmd.by)
    if is_garbage(a) or is_garbage(b):
        return False
    grid.set(cmd.ax, cmd.ay, b)
    grid.set(cmd.bx, cmd.by, a)
    return True


# ---------------------------------------------------------------------------
# Color placement
# ---------------------------------------------------------------------------

def random_color(rng: random.Random) -> BlockColor:
    return rng.choice(PALETTE)


def _color_at(grid: Grid, x: int, y: int) -> BlockColor | None:
    if not grid.in_bounds(x, y):
        return None
    return color_of(grid.get(x, y))


def would_create_match(grid: Grid, x: int, y: int, color: BlockColor) -> bool:
    """Would placing ``color`` at (x, y) complete a horizontal or vertical run of three?"""

    def same(cx: int, cy: int) -> bool:
        return _color_at(grid, cx, cy) == color

    if same(x - 1, y) and (same(x - 2, y) or same(x + 1, y)):
        return True
    if same(x + 1, y) and same(x + 2, y):
        return True
    if same(x, y - 1) and (same(x, y - 2) or same(x, y + 1)):
        return True
    if same(x, y + 1) and same(x, y + 2):
        return True
    return False


def pick_safe_color(grid: Grid, x: int, y: int, rng: random.Random) -> BlockColor:
    """Draw colors until one avoids a run; after the last attempt accept it anyway."""
    color = random_color(rng)
    for _ in range(ANTI_MATCH_ATTEMPTS):
        if not would_create_match(grid, x, y, color):
            break
        color = random_color(rng)
    return color


def fill_test_pattern(grid: Grid, rng: random.Random) -> None:
    """Fill the bottom half with colors chosen to avoid starting matches."""
    for y in range(grid.height // 2):
        for x in range(grid.width):
            grid.set(x, y, NormalBlock(pick_safe_color(grid, x, y, rng)))


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def _same_color(grid: Grid, ax: int, ay: int, bx: int, by: int) -> bool:
    a = color_of(grid.get(ax, ay))
    return a is not None and a == color_of(grid.get(bx, by))


def find_matches(grid: Grid) -> List[bool]:
    """Mark every cell inside a maximal horizontal or vertical run of >= 3 colors."""
    width, height = grid.width, grid.height
    marks = [False] * (width * height)

    def mark_run(cells: List[Position]) -> None:
        if len(cells) >= 3:
            for rx, ry in cells:
                marks[ry * width + rx] = True

    for y in range(height):
        run = [(0, y)]
        for x in range(1, width):
            if _same_color(grid, x, y, x - 1, y):
                run.append((x, y))
            else:
                mark_run(run)
                run = [(x, y)]
        mark_run(run)

    for x in range(width):
        run = [(x, 0)]
        for y in range(1, height):
            if _same_color(grid, x, y, x, y - 1):
                run.append((x, y))
            else:
                mark_run(run)
                run = [(x, y)]
        mark_run(run)
    return marks


def has_matches(grid: Grid) -> bool:
    return any(find_matches(grid))


def count_match_groups(grid: Grid, marks: Sequence[bool]) -> int:
    return len(flood_components(grid.width, grid.height, lambda idx: marks[idx]))


def clear_matches_once_with_stats(grid: Grid) -> ClearStats:
    marks = find_matches(grid)
    if not any(marks):
        return ClearStats(cleared=0, groups=0, marks=marks)
    groups = count_match_groups(grid, marks)
    cleared = 0
    for idx, marked in enumerate(marks):
        if marked:
            grid.cells[idx] = None
            cleared += 1
    return ClearStats(cleared=cleared, groups=groups, marks=marks)


def clear_matches_once(grid: Grid) -> int:
    return clear_matches_once_with_stats(grid).cleared


def find_scoring_swaps(grid: Grid) -> List[SwapCmd]:
    """Cursor footprints whose swap would mark more cells than the board marks now."""
    baseline = sum(find_matches(grid))
    swaps: List[SwapCmd] = []
    for y in range(grid.height):
        for x in range(grid.width - 1):
            cmd = SwapCmd.right_of(x, y)
            if grid.get(cmd.ax, cmd.ay) == grid.get(cmd.bx, cmd.by):
                continue
            trial = grid.copy()
            if swap_in_bounds(trial, cmd) and sum(find_matches(trial)) > baseline:
                swaps.append(cmd)
    return swaps


# ---------------------------------------------------------------------------
# Gravity
# ---------------------------------------------------------------------------

def compute_gravity_moves(grid: Grid) -> List[Move]:
    """Moves for one gravity step, all decided against the same snapshot."""
    width, height = grid.width, grid.height
    if height < 2:
        return []
    snapshot = grid.snapshot()
    moves: List[Move] = []
    for x in range(width):
        for y in range(1, height):
            idx = y * width + x
            if isinstance(snapshot[idx], NormalBlock) and snapshot[idx - width] is None:
                moves.append((idx, idx - width))
    for component in garbage_components(snapshot, width, height):
        if component_can_fall(component, snapshot, width):
            moves.extend((y * width + x, (y - 1) * width + x) for x, y in component)
    return moves


def apply_gravity_step(grid: Grid) -> bool:
    """Advance loose normal blocks and unsupported garbage components by one row."""
    moves = compute_gravity_moves(grid)
    if not moves:
        return False
    moving = [(target, grid.cells[source]) for source, target in moves]
    for source, _ in moves:
        grid.cells[source] = None
    for target, block in moving:
        grid.cells[target] = block
    return True


def apply_gravity(grid: Grid) -> int:
    steps = 0
    while apply_gravity_step(grid):
        steps += 1
    return steps


def has_falling_garbage(grid: Grid) -> bool:
    cells = grid.snapshot()
    return any(
        component_can_fall(component, cells, grid.width)
        for component in garbage_components(cells, grid.width, grid.height)
    )


# ---------------------------------------------------------------------------
# Garbage
# ---------------------------------------------------------------------------

def crack_adjacent_garbage(grid: Grid, marks: Sequence[bool]) -> int:
    """Crack every garbage component touching a marked cell; return cells cracked."""
    width, height = grid.width, grid.height
    cells = grid.snapshot()
    cracked = 0
    for component in garbage_components(cells, width, height):
        touching = any(
            marks[ny * width + nx]
            for x, y in component
            for nx, ny in neighbors(width, height, x, y)
        )
        if not touching:
            continue
        for x, y in component:
            if cells[y * width + x] == GarbageBlock(cracked=False):
                grid.set(x, y, GarbageBlock(cracked=True))
                cracked += 1
    return cracked


def convert_cracked_garbage(grid: Grid, rng: random.Random) -> int:
    converted = 0
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.get(x, y) == GarbageBlock(cracked=True):
                grid.set(x, y, NormalBlock(pick_safe_color(grid, x, y, rng)))
                converted += 1
    return converted


def insert_garbage_rows_from_top(grid: Grid, rows: Sequence[Sequence[bool]]) -> bool:
    """Place intact garbage along the top edge; ``rows[-1]`` lands on the top row.

    All-or-nothing: refuses (returns False, board untouched) when there are more
    rows than the board is tall, a mask has the wrong width, or any marked
    target cell is occupied.
    """
    if not rows:
        return True
    if len(rows) > grid.height:
        return False
    if any(len(row) != grid.width for row in rows):
        return False
    start_y = grid.height - len(rows)
    targets: List[Position] = []
    for offset, row in enumerate(rows):
        y = start_y + offset
        for x, marked in enumerate(row):
            if not marked:
                continue
            if grid.get(x, y) is not None:
                return False
            targets.append((x, y))
    for x, y in targets:
        grid.set(x, y, GarbageBlock(cracked=False))
    return True


# ---------------------------------------------------------------------------
# Stack rise
# ---------------------------------------------------------------------------

def top_row_occupied(grid: Grid) -> bool:
    top = grid.height - 1
    return any(grid.get(x, top) is not None for x in range(grid.width))


def push_bottom_row(grid: Grid, rng: random.Random) -> bool:
    """Shift the stack up one row and feed fresh colors in at the bottom.

    Does nothing and returns False when the top row is occupied; the caller
    treats that as a top-out.
    """
    if top_row_occupied(grid):
        return False
    width = grid.width
    grid.cells = [None] * width + grid.cells[: width * (grid.height - 1)]
    for x in range(width):
        grid.set(x, 0, NormalBlock(pick_safe_color(grid, x, 0, rng)))
    return True
