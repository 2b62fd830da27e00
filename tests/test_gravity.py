from stackclash.components.block import GarbageBlock, NormalBlock
from stackclash.systems.board_ops import (
    apply_gravity,
    apply_gravity_step,
    compute_gravity_moves,
    garbage_components,
    has_falling_garbage,
)
from tests.helpers import grid_from_rows, rows_of


def _resting(grid):
    for y in range(1, grid.height):
        for x in range(grid.width):
            if isinstance(grid.get(x, y), NormalBlock) and grid.get(x, y - 1) is None:
                return False
    return True


def test_single_step_moves_one_row():
    grid = grid_from_rows([
        "R .",
        ". .",
        ". .",
    ])
    assert apply_gravity_step(grid)
    assert rows_of(grid) == ["..", "R.", ".."]


def test_stacked_column_falls_together_in_one_step():
    grid = grid_from_rows([
        "R",
        "G",
        ".",
    ])
    assert len(compute_gravity_moves(grid)) == 1
    apply_gravity_step(grid)
    # Moves are decided on the snapshot, so only the lower block advances.
    assert rows_of(grid) == ["R", ".", "G"]


def test_gravity_reaches_a_fixed_point():
    grid = grid_from_rows([
        "R . B .",
        ". G . .",
        "Y . . P",
        ". . R .",
    ])
    steps = apply_gravity(grid)
    assert steps > 0
    assert _resting(grid)
    before = grid.snapshot()
    assert not apply_gravity_step(grid)
    assert grid.snapshot() == before


def test_garbage_component_falls_as_a_unit():
    grid = grid_from_rows([
        "# # # .",
        ". . # .",
        ". . . .",
    ])
    before = garbage_components(grid.snapshot(), grid.width, grid.height)
    assert has_falling_garbage(grid)
    assert apply_gravity_step(grid)
    assert rows_of(grid) == ["....", "###.", "..#."]
    after = garbage_components(grid.snapshot(), grid.width, grid.height)
    assert len(before) == len(after) == 1
    assert sorted((x, y - 1) for x, y in before[0]) == sorted(after[0])


def test_garbage_held_by_any_supported_cell():
    grid = grid_from_rows([
        "# # #",
        ". . R",
    ])
    assert not has_falling_garbage(grid)
    assert not apply_gravity_step(grid)


def test_normal_blocks_under_garbage_still_fall():
    grid = grid_from_rows([
        "# # .",
        "R . .",
        ". . .",
    ])
    apply_gravity(grid)
    assert rows_of(grid) == ["...", "##.", "R.."]


def test_cracked_garbage_falls_like_garbage():
    grid = grid_from_rows([
        "% .",
        ". .",
    ])
    apply_gravity_step(grid)
    assert grid.get(0, 0) == GarbageBlock(cracked=True)
