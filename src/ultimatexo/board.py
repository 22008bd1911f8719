"""Cell grid for UltimateXO (Ultimate Tic-Tac-Toe)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from .errors import CellOccupiedError

SIZE = 9

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Mark(str, Enum):
    EMPTY = " "
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("EMPTY has no opponent")


def _check_index(value: int, what: str) -> None:
    if not 0 <= value < SIZE:
        raise IndexError(f"{what} index {value} out of range 0..8")


@dataclass
class BoardState:
    # cells[sub_board][cell], row-major inside each sub-board
    cells: List[List[Mark]] = field(
        default_factory=lambda: [[Mark.EMPTY] * SIZE for _ in range(SIZE)]
    )

    def get_cell(self, sub_board: int, cell: int) -> Mark:
        _check_index(sub_board, "sub-board")
        _check_index(cell, "cell")
        return self.cells[sub_board][cell]

    def set_cell(self, sub_board: int, cell: int, mark: Mark) -> None:
        if mark is Mark.EMPTY:
            raise ValueError("Use clear_cell to empty a cell")
        if self.get_cell(sub_board, cell) is not Mark.EMPTY:
            raise CellOccupiedError(sub_board, cell)
        self.cells[sub_board][cell] = mark

    def clear_cell(self, sub_board: int, cell: int) -> None:
        _check_index(sub_board, "sub-board")
        _check_index(cell, "cell")
        self.cells[sub_board][cell] = Mark.EMPTY

    def sub_board(self, sub_board: int) -> List[Mark]:
        _check_index(sub_board, "sub-board")
        return list(self.cells[sub_board])

    def is_sub_board_full(self, sub_board: int) -> bool:
        _check_index(sub_board, "sub-board")
        return all(c is not Mark.EMPTY for c in self.cells[sub_board])

    def is_board_full(self) -> bool:
        return all(
            c is not Mark.EMPTY for board in self.cells for c in board
        )

    def filled_count(self) -> int:
        return sum(1 for board in self.cells for c in board if c is not Mark.EMPTY)

    def copy(self) -> "BoardState":
        return BoardState(cells=[list(board) for board in self.cells])
