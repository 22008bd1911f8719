"""Minimax AI with alpha-beta pruning and difficulty policies for UltimateXO."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

from .board import Mark
from .rules import (
    Move,
    check_meta_winner,
    check_sub_board_winner,
    get_valid_moves,
    resolve_active_board,
)
from .state import GameState

logger = logging.getLogger(__name__)

WIN_SCORE = 10

# Saved by _push and consumed by _pop: (active board, outcome of the played sub-board)
_Undo = Tuple[Optional[int], Optional[Mark]]


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class SearchResult:
    move: Optional[Move]
    score: Optional[int]
    nodes: int = 0


@dataclass
class AIStrategy:
    """AI player choosing moves under a difficulty policy.

    EASY plays uniformly at random, MEDIUM flips a coin between EASY and HARD,
    and HARD runs minimax with alpha-beta pruning. The side to move at the
    root is the maximizing player: a win for it scores ``10 - depth``, a loss
    ``depth - 10`` and a draw ``0``, where depth counts the plies played after
    the root move.

    ``max_depth`` caps the plies searched (root move included); None searches
    the whole remaining tree. ``should_stop`` is polled between root moves only.
    """

    difficulty: Difficulty = Difficulty.HARD
    rng: random.Random = field(default_factory=random.Random, repr=False)
    max_depth: Optional[int] = None
    prune: bool = True
    should_stop: Optional[Callable[[], bool]] = field(default=None, repr=False)
    _nodes: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

    # ---- public API ----

    def choose(self, state: GameState) -> Optional[Move]:
        moves = get_valid_moves(state)
        if not moves:
            return None

        if self.difficulty is Difficulty.EASY:
            return self.rng.choice(moves)
        if self.difficulty is Difficulty.MEDIUM and self.rng.random() < 0.5:
            return self.rng.choice(moves)
        return self.search(state).move

    def search(self, state: GameState) -> SearchResult:
        """Run the HARD search on a private copy of ``state``."""
        work = state.clone()
        root = work.current_player
        self._nodes = 0

        best_move: Optional[Move] = None
        best_score: Optional[int] = None
        alpha: Optional[int] = None

        for move in get_valid_moves(work):
            if best_move is not None and self.should_stop and self.should_stop():
                logger.debug("Search stopped early, keeping %s", best_move)
                break
            undo = self._push(work, move)
            score = self._minimax(work, root, 0, alpha, None)
            self._pop(work, move, undo)

            # Strict comparison keeps the first move among equals
            if best_score is None or score > best_score:
                best_move, best_score = move, score
            if self.prune:
                alpha = best_score

        logger.debug(
            "Search for %s picked %s (score %s, %d nodes)",
            root.value,
            best_move,
            best_score,
            self._nodes,
        )
        return SearchResult(move=best_move, score=best_score, nodes=self._nodes)

    # ---- core search ----

    def _minimax(
        self,
        state: GameState,
        root: Mark,
        depth: int,
        alpha: Optional[int],
        beta: Optional[int],
    ) -> int:
        self._nodes += 1

        winner = check_meta_winner(state.outcomes)
        if winner is not None:
            return WIN_SCORE - depth if winner is root else depth - WIN_SCORE
        if state.board.is_board_full():
            return 0
        if self.max_depth is not None and depth + 1 >= self.max_depth:
            return 0

        moves = get_valid_moves(state)
        if not moves:
            # Routed into a full sub-board with no winner: nobody can move
            return 0

        maximizing = state.current_player is root
        best: Optional[int] = None
        for move in moves:
            undo = self._push(state, move)
            score = self._minimax(state, root, depth + 1, alpha, beta)
            self._pop(state, move, undo)

            if maximizing:
                if best is None or score > best:
                    best = score
                if alpha is None or best > alpha:
                    alpha = best
            else:
                if best is None or score < best:
                    best = score
                if beta is None or best < beta:
                    beta = best

            if self.prune and alpha is not None and beta is not None and beta <= alpha:
                break

        assert best is not None
        return best

    @staticmethod
    def _push(state: GameState, move: Move) -> _Undo:
        i, j = move
        mover = state.current_player
        saved = (state.active_board, state.outcomes[i])

        state.board.cells[i][j] = mover
        if state.outcomes[i] is None:
            state.outcomes[i] = check_sub_board_winner(state.board, i)
        state.active_board = resolve_active_board(state.outcomes, j)
        state.current_player = mover.opponent()
        return saved

    @staticmethod
    def _pop(state: GameState, move: Move, saved: _Undo) -> None:
        i, j = move
        state.board.cells[i][j] = Mark.EMPTY
        state.active_board, state.outcomes[i] = saved
        state.current_player = state.current_player.opponent()


def compute_ai_move(
    state: GameState,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    max_depth: Optional[int] = None,
) -> Optional[Move]:
    """Pick a move for the side to move, or None when nothing is legal."""
    strategy = AIStrategy(
        difficulty=difficulty,
        rng=rng if rng is not None else random.Random(),
        max_depth=max_depth,
    )
    return strategy.choose(state)
