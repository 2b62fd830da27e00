from stackclash.components.block import GarbageBlock, NormalBlock
from stackclash.components.cursor import SwapCmd
from stackclash.components.grid import Grid
from stackclash.systems.board_ops import (
    convert_cracked_garbage,
    crack_adjacent_garbage,
    find_matches,
    insert_garbage_rows_from_top,
    swap_in_bounds,
)
from tests.helpers import CyclingRandom, grid_from_rows, rows_of


def test_full_row_lands_on_top_row_only():
    grid = Grid(6, 12)
    assert insert_garbage_rows_from_top(grid, [[True] * 6])
    assert all(grid.get(x, 11) == GarbageBlock(cracked=False) for x in range(6))
    assert grid.occupied_count() == 6


def test_rows_stack_downward_from_the_top():
    grid = Grid(4, 4)
    rows = [[True] * 4, [False, True, True, False]]
    assert insert_garbage_rows_from_top(grid, rows)
    assert rows_of(grid) == [".##.", "####", "....", "...."]


def test_insert_is_all_or_nothing():
    grid = grid_from_rows([
        ". . R .",
        ". . . .",
    ])
    before = grid.snapshot()
    assert not insert_garbage_rows_from_top(grid, [[True] * 4, [True] * 4])
    assert grid.snapshot() == before


def test_insert_refuses_malformed_or_too_tall():
    grid = Grid(3, 2)
    assert not insert_garbage_rows_from_top(grid, [[True, True]])
    assert not insert_garbage_rows_from_top(grid, [[True] * 3] * 3)
    assert grid.occupied_count() == 0


def test_insert_nothing_succeeds():
    grid = Grid(3, 2)
    assert insert_garbage_rows_from_top(grid, [])


def test_swap_refuses_garbage_and_leaves_board_untouched():
    grid = grid_from_rows(["R # % G"])
    before = grid.snapshot()
    assert not swap_in_bounds(grid, SwapCmd(0, 0, 1, 0))
    assert not swap_in_bounds(grid, SwapCmd(2, 0, 3, 0))
    assert grid.snapshot() == before


def test_swap_refuses_out_of_range():
    grid = grid_from_rows(["R G"])
    assert not swap_in_bounds(grid, SwapCmd(1, 0, 2, 0))


def test_swap_with_empty_cell_is_allowed():
    grid = grid_from_rows(["R ."])
    assert swap_in_bounds(grid, SwapCmd(0, 0, 1, 0))
    assert rows_of(grid) == [".R"]


def test_clear_cracks_whole_adjacent_component():
    grid = grid_from_rows([
        "# # # #",
        "R R R .",
        ". # . .",
    ])
    marks = find_matches(grid)
    cracked = crack_adjacent_garbage(grid, marks)
    # Top component (4 cells) and the lone block below both touch the run.
    assert cracked == 5
    assert rows_of(grid) == ["%%%%", "RRR.", ".%.."]


def test_garbage_away_from_clear_stays_intact():
    grid = grid_from_rows([
        "# . . .",
        ". . . .",
        "R R R .",
    ])
    assert crack_adjacent_garbage(grid, find_matches(grid)) == 0
    assert grid.get(0, 2) == GarbageBlock(cracked=False)


def test_convert_cracked_garbage_to_normal_blocks():
    grid = grid_from_rows([
        "% % #",
        "R G B",
    ])
    converted = convert_cracked_garbage(grid, CyclingRandom())
    assert converted == 2
    assert isinstance(grid.get(0, 1), NormalBlock)
    assert isinstance(grid.get(1, 1), NormalBlock)
    assert grid.get(2, 1) == GarbageBlock(cracked=False)
