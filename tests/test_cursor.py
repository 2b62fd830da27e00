from stackclash.components.cursor import Cursor, SwapCmd


def test_cursor_moves_within_board():
    cursor = Cursor(2, 5)
    assert cursor.move_by(1, -1, 6, 12)
    assert (cursor.x, cursor.y) == (3, 4)


def test_cursor_clamps_to_leave_room_for_right_cell():
    cursor = Cursor(4, 11)
    assert not cursor.move_by(1, 1, 6, 12)
    assert (cursor.x, cursor.y) == (4, 11)
    cursor.move_by(-10, -20, 6, 12)
    assert (cursor.x, cursor.y) == (0, 0)


def test_cursor_on_degenerate_board_does_not_move():
    cursor = Cursor(0, 0)
    assert not cursor.move_by(1, 0, 1, 12)
    assert not cursor.move_by(0, 1, 6, 0)
    assert (cursor.x, cursor.y) == (0, 0)


def test_swap_command_targets_cell_to_the_right():
    assert SwapCmd.right_of(3, 7) == SwapCmd(ax=3, ay=7, bx=4, by=7)
