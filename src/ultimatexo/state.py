"""Game state aggregate and its read-only snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import SIZE, BoardState, Mark


@dataclass(frozen=True)
class MoveRecord:
    sub_board: int
    cell: int
    mover: Mark
    # Constraint in force before the move, restored on undo
    previous_active: Optional[int] = None


@dataclass
class GameState:
    board: BoardState = field(default_factory=BoardState)
    # Winner of each sub-board once a line appears; None while open
    outcomes: List[Optional[Mark]] = field(default_factory=lambda: [None] * SIZE)
    # None means "free move" (any sub-board without an outcome)
    active_board: Optional[int] = None
    current_player: Mark = Mark.X
    move_count: int = 0
    game_over: bool = False
    winner: Optional[Mark] = None
    history: List[MoveRecord] = field(default_factory=list)

    def clone(self) -> "GameState":
        return GameState(
            board=self.board.copy(),
            outcomes=list(self.outcomes),
            active_board=self.active_board,
            current_player=self.current_player,
            move_count=self.move_count,
            game_over=self.game_over,
            winner=self.winner,
            history=list(self.history),
        )

    def snapshot(self) -> "GameSnapshot":
        return GameSnapshot(
            cells=tuple(tuple(board) for board in self.board.cells),
            outcomes=tuple(self.outcomes),
            active_board=self.active_board,
            current_player=self.current_player,
            move_count=self.move_count,
            game_over=self.game_over,
            winner=self.winner,
            history_length=len(self.history),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of a :class:`GameState` handed to hosts."""

    cells: Tuple[Tuple[Mark, ...], ...]
    outcomes: Tuple[Optional[Mark], ...]
    active_board: Optional[int]
    current_player: Mark
    move_count: int
    game_over: bool
    winner: Optional[Mark]
    history_length: int
