"""Tests for win detection, legality and routing."""

import pytest

from ultimatexo.board import Mark
from ultimatexo.errors import (
    BoardCompletedError,
    CellOccupiedError,
    GameOverError,
    WrongBoardError,
)
from ultimatexo.rules import (
    check_draw,
    check_line,
    check_meta_winner,
    check_sub_board_winner,
    get_valid_moves,
    is_legal,
    resolve_active_board,
    validate_move,
)
from ultimatexo.state import GameState

X, O, E = Mark.X, Mark.O, Mark.EMPTY

# X O X / X O O / O X X: full, no three-in-a-row
DRAWN = [X, O, X, X, O, O, O, X, X]


def test_check_line():
    assert check_line(X, X, X) is X
    assert check_line(O, O, O) is O
    assert check_line(X, O, X) is None
    assert check_line(E, E, E) is None
    assert check_line(None, None, None) is None


@pytest.mark.parametrize(
    "cells",
    [
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        (0, 4, 8), (2, 4, 6),
    ],
)
def test_sub_board_winner_on_every_line(cells):
    state = GameState()
    for c in cells:
        state.board.set_cell(7, c, O)
    assert check_sub_board_winner(state.board, 7) is O
    assert check_sub_board_winner(state.board, 6) is None


def test_full_sub_board_without_line_has_no_winner():
    state = GameState()
    state.board.cells[4] = list(DRAWN)
    assert state.board.is_sub_board_full(4)
    assert check_sub_board_winner(state.board, 4) is None


def test_meta_winner_ignores_open_boards():
    assert check_meta_winner([X, X, X, None, None, None, None, None, None]) is X
    assert check_meta_winner([O, None, None, None, O, None, None, None, O]) is O
    assert check_meta_winner([X, O, X, None, None, None, None, None, None]) is None
    assert check_meta_winner([None] * 9) is None


def test_check_draw_requires_full_board():
    state = GameState()
    assert not check_draw(state)
    state.board.cells = [list(DRAWN) for _ in range(9)]
    assert check_draw(state)


def test_draw_and_meta_win_are_exclusive():
    state = GameState()
    state.board.cells = [list(DRAWN) for _ in range(9)]
    state.outcomes[0] = state.outcomes[4] = state.outcomes[8] = X
    assert check_meta_winner(state.outcomes) is X
    assert not check_draw(state)


def test_validate_move_error_order():
    state = GameState()
    state.board.set_cell(1, 1, X)
    state.outcomes[2] = O
    state.active_board = 1

    with pytest.raises(BoardCompletedError):
        validate_move(state, 2, 0)
    with pytest.raises(WrongBoardError):
        validate_move(state, 3, 0)
    with pytest.raises(CellOccupiedError):
        validate_move(state, 1, 1)
    validate_move(state, 1, 2)

    state.game_over = True
    with pytest.raises(GameOverError):
        validate_move(state, 1, 2)
    assert not is_legal(state, 1, 2)


def test_resolve_active_board():
    outcomes = [None] * 9
    assert resolve_active_board(outcomes, 4) == 4
    outcomes[4] = X
    assert resolve_active_board(outcomes, 4) is None


def test_valid_moves_order_when_free():
    state = GameState()
    moves = get_valid_moves(state)
    assert len(moves) == 81
    assert moves[:3] == [(0, 0), (0, 1), (0, 2)]
    assert moves == sorted(moves)


def test_valid_moves_skip_won_boards():
    state = GameState()
    state.outcomes[0] = X
    state.board.set_cell(1, 0, O)
    moves = get_valid_moves(state)
    assert all(b != 0 for b, _ in moves)
    assert (1, 0) not in moves
    assert moves[0] == (1, 1)


def test_valid_moves_follow_constraint():
    state = GameState()
    state.active_board = 6
    state.board.set_cell(6, 0, X)
    assert get_valid_moves(state) == [(6, c) for c in range(1, 9)]


def test_routed_to_full_undecided_board_has_no_moves():
    state = GameState()
    state.board.cells[4] = list(DRAWN)
    state.active_board = 4
    assert get_valid_moves(state) == []
    assert not is_legal(state, 0, 0)


def test_no_moves_after_game_over():
    state = GameState()
    state.game_over = True
    assert get_valid_moves(state) == []
