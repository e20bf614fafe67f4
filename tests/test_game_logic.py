"""
Tests for the board engine: placement, counts, flood fill, flags and win.
"""
import random

import numpy as np
import pytest

import game_logic
from game_logic import BoardEngine, BoardStats, CellState, CellView, GameStatus, InvalidConfig


class SequenceRng:
    """Replays fixed values from randrange."""

    def __init__(self, values):
        self.values = iter(values)
        self.calls = 0

    def randrange(self, stop):
        self.calls += 1
        value = next(self.values)
        assert 0 <= value < stop
        return value


def revealed_cells(board):
    return {
        (r, c)
        for r in range(board.rows)
        for c in range(board.cols)
        if board.cell_view(r, c).state is CellState.REVEALED
    }


def mine_cells(board):
    return {
        (r, c)
        for r in range(board.rows)
        for c in range(board.cols)
        if board.cell_view(r, c, reveal_all=True).is_mine
    }


@pytest.mark.parametrize("rows,cols,mines", [
    (9, 9, 10),
    (16, 16, 40),
    (16, 30, 99),
    (3, 3, 8),
    (1, 2, 1),
])
def test_exact_mine_count(rows, cols, mines):
    board = BoardEngine.create(rows, cols, mines, rng=random.Random(7))
    assert len(mine_cells(board)) == mines
    assert board.status is GameStatus.IN_PROGRESS


@pytest.mark.parametrize("seed", range(5))
def test_counts_match_brute_force(seed):
    board = BoardEngine.create(6, 7, 12, rng=random.Random(seed))
    mines = mine_cells(board)
    for r in range(board.rows):
        for c in range(board.cols):
            if (r, c) in mines:
                continue
            expected = sum(
                1
                for dr in (-1, 0, 1)
                for dc in (-1, 0, 1)
                if (dr, dc) != (0, 0) and (r + dr, c + dc) in mines
            )
            assert board.cell_view(r, c, reveal_all=True).number == expected


def test_corner_mine_counts():
    board = BoardEngine.create(3, 3, 1, mine_positions=[(0, 0)])
    numbers = [[board.cell_view(r, c, reveal_all=True).number for c in range(3)] for r in range(3)]
    assert numbers == [[0, 1, 0], [1, 1, 0], [0, 0, 0]]
    assert board.cell_view(0, 0, reveal_all=True).is_mine


def test_rejection_sampling_skips_taken_cells():
    rng = SequenceRng([0, 0, 0, 0, 1, 1])
    board = BoardEngine.create(2, 2, 2, rng=rng)
    assert mine_cells(board) == {(0, 0), (1, 1)}
    assert rng.calls == 6


def test_same_seed_same_layout():
    first = BoardEngine.create(9, 9, 10, rng=random.Random(1234))
    second = BoardEngine.create(9, 9, 10, rng=random.Random(1234))
    assert mine_cells(first) == mine_cells(second)


@pytest.mark.parametrize("rows,cols,mines", [
    (0, 5, 1),
    (5, 0, 1),
    (-2, 5, 1),
    (5, 5, 0),
    (5, 5, -1),
    (5, 5, 25),
    (5, 5, 30),
    (1, 1, 1),
    (2.5, 5, 1),
    ("9", 9, 10),
])
def test_invalid_config(rows, cols, mines):
    with pytest.raises(InvalidConfig):
        BoardEngine.create(rows, cols, mines)


@pytest.mark.parametrize("positions", [
    [(0, 0)],
    [(0, 0), (0, 0)],
    [(0, 0), (5, 5)],
    [(0, 0), (1, 1), (0, 1)],
    [(1.0, 1), (0, 0)],
    [(0,), (1, 1)],
    [(0, 0, 0), (1, 1)],
    [5, (1, 1)],
    [(True, 0), (1, 1)],
    ["ab", (1, 1)],
    [(-1, 0), (1, 1)],
])
def test_invalid_mine_positions(positions):
    with pytest.raises(InvalidConfig):
        BoardEngine.create(3, 3, 2, mine_positions=positions)


def test_invalid_config_is_value_error():
    with pytest.raises(ValueError):
        game_logic.create(2, 2, 4)


def test_flood_fill_stops_at_numbered_border(bottom_row_board):
    bottom_row_board.reveal(0, 0)
    assert revealed_cells(bottom_row_board) == {(r, c) for r in range(4) for c in range(5)}
    assert bottom_row_board.cell_view(3, 0).number == 2
    assert bottom_row_board.cell_view(3, 2).number == 3
    assert bottom_row_board.status is GameStatus.IN_PROGRESS


def test_numbered_cell_does_not_cascade(corner_board):
    corner_board.reveal(1, 1)
    assert revealed_cells(corner_board) == {(1, 1)}
    assert corner_board.cell_view(1, 1) == CellView(CellState.REVEALED, number=1)


def test_flood_fill_skips_flagged_cells(bottom_row_board):
    bottom_row_board.toggle_flag(0, 4)
    bottom_row_board.reveal(0, 0)
    assert (0, 4) not in revealed_cells(bottom_row_board)
    assert bottom_row_board.cell_view(0, 4).state is CellState.FLAGGED
    assert len(revealed_cells(bottom_row_board)) == 19
    assert not bottom_row_board.evaluate_win()


def test_large_open_board_reveals_without_recursion():
    board = BoardEngine.create(200, 200, 1, mine_positions=[(199, 199)])
    board.reveal(0, 0)
    assert board.stats().cells_revealed == 200 * 200 - 1
    assert board.evaluate_win()


def test_reveal_mine_loses_without_cascade(corner_board):
    corner_board.reveal(0, 0)
    assert corner_board.status is GameStatus.LOST
    assert corner_board.is_game_over()
    assert not corner_board.is_won()
    assert revealed_cells(corner_board) == {(0, 0)}
    assert corner_board.cell_view(0, 0).is_mine
    assert corner_board.stats() == BoardStats(
        mines_total=1, flags_placed=0, cells_revealed=1, cells_to_reveal_total=3
    )


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (2, 0), (0, 2), (100, 100)])
def test_out_of_bounds_moves_are_ignored(corner_board, x, y):
    corner_board.reveal(x, y)
    corner_board.toggle_flag(x, y)
    assert corner_board.stats() == BoardStats(1, 0, 0, 3)


def test_reveal_flagged_cell_is_noop(corner_board):
    corner_board.toggle_flag(0, 0)
    corner_board.reveal(0, 0)
    assert corner_board.status is GameStatus.IN_PROGRESS
    assert corner_board.cell_view(0, 0).state is CellState.FLAGGED


def test_toggle_flag_twice_restores(corner_board):
    corner_board.toggle_flag(1, 0)
    assert corner_board.cell_view(1, 0).state is CellState.FLAGGED
    assert corner_board.stats().flags_placed == 1
    corner_board.toggle_flag(1, 0)
    assert corner_board.cell_view(1, 0).state is CellState.HIDDEN
    assert corner_board.stats().flags_placed == 0


def test_toggle_flag_on_revealed_cell_is_noop(corner_board):
    corner_board.reveal(1, 1)
    corner_board.toggle_flag(1, 1)
    assert corner_board.cell_view(1, 1).state is CellState.REVEALED
    assert corner_board.stats().flags_placed == 0


def test_win_requires_every_safe_cell(corner_board):
    corner_board.reveal(1, 1)
    assert not corner_board.evaluate_win()
    corner_board.reveal(0, 1)
    assert not corner_board.evaluate_win()
    assert corner_board.status is GameStatus.IN_PROGRESS
    corner_board.reveal(1, 0)
    assert corner_board.evaluate_win()
    assert corner_board.status is GameStatus.WON
    assert corner_board.is_won()
    assert corner_board.evaluate_win()


def test_flagging_all_mines_does_not_win(corner_board):
    corner_board.toggle_flag(0, 0)
    assert not corner_board.evaluate_win()
    assert corner_board.status is GameStatus.IN_PROGRESS


def test_lost_game_never_becomes_won(corner_board):
    for cell in [(1, 1), (0, 1), (1, 0)]:
        corner_board.reveal(*cell)
    corner_board.reveal(0, 0)
    assert corner_board.status is GameStatus.LOST
    assert not corner_board.evaluate_win()
    assert corner_board.status is GameStatus.LOST


def test_moves_after_loss_are_ignored(corner_board):
    corner_board.reveal(0, 0)
    corner_board.reveal(1, 1)
    corner_board.toggle_flag(1, 0)
    assert revealed_cells(corner_board) == {(0, 0)}
    assert corner_board.cell_view(1, 0).state is CellState.HIDDEN


def test_moves_after_win_are_ignored(corner_board):
    for cell in [(1, 1), (0, 1), (1, 0)]:
        corner_board.reveal(*cell)
    assert corner_board.evaluate_win()
    corner_board.toggle_flag(0, 0)
    corner_board.reveal(0, 0)
    assert corner_board.status is GameStatus.WON
    assert corner_board.cell_view(0, 0).state is CellState.HIDDEN


def test_hidden_cells_do_not_expose_mines(corner_board):
    assert corner_board.cell_view(0, 0) == CellView(CellState.HIDDEN)
    assert corner_board.cell_view(0, 0, reveal_all=True) == CellView(CellState.REVEALED, is_mine=True)
    assert corner_board.cell_view(1, 1, reveal_all=True) == CellView(CellState.REVEALED, number=1)


def test_cell_view_out_of_bounds_raises(corner_board):
    with pytest.raises(IndexError):
        corner_board.cell_view(2, 0)


def test_stats_track_flags_and_reveals(bottom_row_board):
    assert bottom_row_board.stats() == BoardStats(5, 0, 0, 20)
    bottom_row_board.toggle_flag(4, 0)
    bottom_row_board.toggle_flag(4, 1)
    bottom_row_board.reveal(3, 0)
    assert bottom_row_board.stats() == BoardStats(
        mines_total=5, flags_placed=2, cells_revealed=1, cells_to_reveal_total=20
    )


def test_module_level_interface():
    board = game_logic.create(2, 2, 1, mine_positions=[(0, 0)])
    game_logic.toggle_flag(board, 0, 0)
    for cell in [(1, 1), (0, 1), (1, 0)]:
        game_logic.reveal(board, *cell)
    assert game_logic.evaluate_win(board)
    assert game_logic.status(board) is GameStatus.WON
    assert game_logic.cell_view(board, 0, 0).state is CellState.FLAGGED
    assert game_logic.stats(board) == BoardStats(1, 1, 3, 3)


def test_numpy_integers_are_accepted():
    board = BoardEngine.create(np.int64(4), np.int32(5), np.int64(3), rng=random.Random(2))
    assert (board.rows, board.cols, board.mine_count) == (4, 5, 3)
    assert type(board.rows) is int
    assert len(mine_cells(board)) == 3


def test_numpy_mine_positions_are_accepted():
    mask = np.zeros((3, 3), dtype=bool)
    mask[0, 0] = mask[2, 1] = True
    board = BoardEngine.create(3, 3, 2, mine_positions=np.argwhere(mask))
    assert mine_cells(board) == {(0, 0), (2, 1)}
    assert board.cell_view(1, 0, reveal_all=True).number == 2


def test_revealed_mine_counts_in_stats(bottom_row_board):
    bottom_row_board.reveal(0, 0)
    bottom_row_board.reveal(4, 2)
    assert bottom_row_board.status is GameStatus.LOST
    assert bottom_row_board.stats().cells_revealed == 21


@pytest.mark.parametrize("r,c,expected", [
    (0, 0, [(0, 1), (1, 0), (1, 1)]),
    (1, 1, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]),
    (2, 2, [(1, 1), (1, 2), (2, 1)]),
])
def test_neighbor_cells_clip_to_board(r, c, expected):
    assert game_logic.neighbor_cells(3, 3, r, c) == expected
