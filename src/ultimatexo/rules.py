"""Win detection, move legality and board routing for UltimateXO."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .board import SIZE, WINNING_LINES, BoardState, Mark
from .errors import (
    BoardCompletedError,
    CellOccupiedError,
    GameOverError,
    MoveError,
    WrongBoardError,
)
from .state import GameState

Move = Tuple[int, int]


# ---------- Win detection ----------


def check_line(
    a: Optional[Mark], b: Optional[Mark], c: Optional[Mark]
) -> Optional[Mark]:
    """Return the mark owning all three positions, or None."""
    if a is None or a is Mark.EMPTY:
        return None
    if a == b == c:
        return a
    return None


def _check_lines(values: Sequence[Optional[Mark]]) -> Optional[Mark]:
    for a, b, c in WINNING_LINES:
        owner = check_line(values[a], values[b], values[c])
        if owner is not None:
            return owner
    return None


def check_sub_board_winner(board: BoardState, sub_board: int) -> Optional[Mark]:
    return _check_lines(board.sub_board(sub_board))


def check_meta_winner(outcomes: Sequence[Optional[Mark]]) -> Optional[Mark]:
    return _check_lines(outcomes)


def check_draw(state: GameState) -> bool:
    """A draw is a full board without a meta-board line."""
    return state.board.is_board_full() and check_meta_winner(state.outcomes) is None


# ---------- Legality ----------


def validate_move(state: GameState, sub_board: int, cell: int) -> None:
    """Raise the matching :class:`MoveError` if the move is illegal."""
    if state.game_over:
        raise GameOverError()
    if state.outcomes[sub_board] is not None:
        raise BoardCompletedError(sub_board)
    if state.active_board is not None and state.active_board != sub_board:
        raise WrongBoardError(sub_board, state.active_board)
    if state.board.get_cell(sub_board, cell) is not Mark.EMPTY:
        raise CellOccupiedError(sub_board, cell)


def is_legal(state: GameState, sub_board: int, cell: int) -> bool:
    try:
        validate_move(state, sub_board, cell)
    except MoveError:
        return False
    return True


# ---------- Routing ----------


def resolve_active_board(
    outcomes: Sequence[Optional[Mark]], cell: int
) -> Optional[int]:
    """Sub-board the opponent is sent to after a move in ``cell``.

    A won sub-board frees the opponent to play anywhere. A full sub-board
    without a winner is still a target, which can leave no legal moves.
    """
    if outcomes[cell] is not None:
        return None
    return cell


def get_valid_moves(state: GameState) -> List[Move]:
    """All legal (sub_board, cell) pairs, sub-board then cell ascending."""
    moves: List[Move] = []
    if state.game_over:
        return moves
    for i in range(SIZE):
        if state.outcomes[i] is not None:
            continue
        if state.active_board is not None and state.active_board != i:
            continue
        for j, c in enumerate(state.board.cells[i]):
            if c is Mark.EMPTY:
                moves.append((i, j))
    return moves
