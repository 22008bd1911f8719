"""Exceptions raised by the UltimateXO engine.

Every error is recoverable: the engine leaves its state untouched when one is
raised and the host decides how to surface it.
"""

from __future__ import annotations


class MoveError(ValueError):
    """A move was rejected by the legality gate."""

    kind = "MoveError"


class GameOverError(MoveError):
    kind = "GameOver"

    def __init__(self) -> None:
        super().__init__("Game already finished")


class BoardCompletedError(MoveError):
    kind = "BoardCompleted"

    def __init__(self, sub_board: int) -> None:
        super().__init__(f"Sub-board {sub_board} has already been won")
        self.sub_board = sub_board


class WrongBoardError(MoveError):
    kind = "WrongBoard"

    def __init__(self, sub_board: int, active: int) -> None:
        super().__init__(f"Move must be played on sub-board {active}, not {sub_board}")
        self.sub_board = sub_board
        self.active = active


class CellOccupiedError(MoveError):
    kind = "CellOccupied"

    def __init__(self, sub_board: int, cell: int) -> None:
        super().__init__(f"Cell {cell} of sub-board {sub_board} is already occupied")
        self.sub_board = sub_board
        self.cell = cell


class UndoError(RuntimeError):
    """Undo was requested when it is not allowed."""

    kind = "UndoError"


class NoHistoryError(UndoError):
    kind = "NoHistory"

    def __init__(self) -> None:
        super().__init__("There is no move to undo")


class AIModeDisallowedError(UndoError):
    kind = "AIModeDisallowed"

    def __init__(self) -> None:
        super().__init__("Undo is only available in player-vs-player games")
