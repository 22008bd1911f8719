"""Turn handling, terminal detection and undo for UltimateXO."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from .board import Mark
from .errors import AIModeDisallowedError, NoHistoryError
from .rules import (
    check_draw,
    check_meta_winner,
    check_sub_board_winner,
    get_valid_moves,
    resolve_active_board,
    validate_move,
)
from .state import GameSnapshot, GameState, MoveRecord

if TYPE_CHECKING:
    from .ai import AIStrategy

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    PLAYER = "player"
    AI = "ai"


class OutcomeKind(str, Enum):
    CONTINUE = "continue"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class MoveOutcome:
    kind: OutcomeKind
    winner: Optional[Mark] = None

    @property
    def finished(self) -> bool:
        return self.kind is not OutcomeKind.CONTINUE


CONTINUE = MoveOutcome(OutcomeKind.CONTINUE)
DRAW = MoveOutcome(OutcomeKind.DRAW)


def is_terminal(state: GameState) -> bool:
    return check_meta_winner(state.outcomes) is not None or check_draw(state)


def get_winner(state: GameState) -> Optional[Mark]:
    return check_meta_winner(state.outcomes)


class GameController:
    """Facade the host drives: applies moves, flips turns and undoes them.

    The controller owns exactly one :class:`GameState`. Failed moves raise a
    :class:`~ultimatexo.errors.MoveError` and leave that state untouched.
    """

    def __init__(
        self, mode: GameMode = GameMode.PLAYER, state: Optional[GameState] = None
    ):
        self.mode = mode
        self.state = state if state is not None else GameState()

    # ---- API used by hosts ----

    def apply_move(self, sub_board: int, cell: int) -> MoveOutcome:
        state = self.state
        validate_move(state, sub_board, cell)

        mover = state.current_player
        state.board.set_cell(sub_board, cell, mover)
        state.history.append(MoveRecord(sub_board, cell, mover, state.active_board))
        state.move_count += 1

        if state.outcomes[sub_board] is None:
            state.outcomes[sub_board] = check_sub_board_winner(state.board, sub_board)

        outcome = CONTINUE
        winner = check_meta_winner(state.outcomes)
        if winner is not None:
            state.game_over = True
            state.winner = winner
            outcome = MoveOutcome(OutcomeKind.WIN, winner)
        elif check_draw(state):
            state.game_over = True
            outcome = DRAW

        if not state.game_over:
            state.active_board = resolve_active_board(state.outcomes, cell)

        state.current_player = mover.opponent()
        logger.debug(
            "%s played (%d, %d); move %d, outcome %s",
            mover.value,
            sub_board,
            cell,
            state.move_count,
            outcome.kind.value,
        )
        return outcome

    def undo(self) -> None:
        state = self.state
        if not state.history:
            raise NoHistoryError()
        if self.mode is GameMode.AI:
            raise AIModeDisallowedError()

        last = state.history.pop()
        state.board.clear_cell(last.sub_board, last.cell)
        state.move_count -= 1
        state.outcomes[last.sub_board] = check_sub_board_winner(
            state.board, last.sub_board
        )
        state.game_over = False
        state.winner = None
        state.current_player = last.mover
        state.active_board = last.previous_active
        logger.debug(
            "Undid %s at (%d, %d)", last.mover.value, last.sub_board, last.cell
        )

    def new_game(self, mode: Optional[GameMode] = None) -> None:
        if mode is not None:
            self.mode = mode
        self.state = GameState()

    def play_ai_turn(
        self, strategy: "AIStrategy"
    ) -> Tuple[Tuple[int, int], MoveOutcome]:
        """Ask ``strategy`` for a move on the current position and play it."""
        if self.state.game_over:
            raise RuntimeError("Game already finished")
        move = strategy.choose(self.state)
        if move is None:
            raise RuntimeError("AI found no legal move on an unfinished game")
        return move, self.apply_move(*move)

    # ---- readers ----

    def get_state(self) -> GameSnapshot:
        return self.state.snapshot()

    def valid_moves(self) -> List[Tuple[int, int]]:
        return get_valid_moves(self.state)

    def can_undo(self) -> bool:
        return bool(self.state.history) and self.mode is GameMode.PLAYER
