"""In-memory scoreboard of finished games."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .board import Mark
from .game import GameMode, MoveOutcome, OutcomeKind

RECENT_LIMIT = 5


@dataclass
class Scoreboard:
    total_games: int = 0
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    best_x_moves: Optional[int] = None
    best_o_moves: Optional[int] = None
    win_streak: int = 0
    total_moves: int = 0
    recent: List[str] = field(default_factory=list)

    def record(self, outcome: MoveOutcome, move_count: int, mode: GameMode) -> None:
        """Fold a finished game into the totals."""
        if not outcome.finished:
            raise ValueError("Cannot record an unfinished game")

        self.total_games += 1
        self.total_moves += move_count

        if outcome.kind is OutcomeKind.DRAW:
            self.draws += 1
            self.win_streak = 0
            self._push_recent(f"Draw after {move_count} moves")
        elif outcome.winner is Mark.X:
            self.x_wins += 1
            self.best_x_moves = _fewest(self.best_x_moves, move_count)
            self.win_streak += 1
            self._push_recent(f"Player X won in {move_count} moves")
        else:
            self.o_wins += 1
            self.best_o_moves = _fewest(self.best_o_moves, move_count)
            if mode is GameMode.AI:
                # The CPU plays O; its wins break the human streak
                self.win_streak = 0
                self._push_recent(f"CPU won in {move_count} moves")
            else:
                self.win_streak += 1
                self._push_recent(f"Player O won in {move_count} moves")

    def reset(self) -> None:
        self.__dict__.update(Scoreboard().__dict__)

    @property
    def win_rate(self) -> int:
        if not self.total_games:
            return 0
        return round((self.x_wins + self.o_wins) / self.total_games * 100)

    @property
    def average_moves(self) -> int:
        if not self.total_games:
            return 0
        return round(self.total_moves / self.total_games)

    def _push_recent(self, text: str) -> None:
        self.recent.insert(0, text)
        del self.recent[RECENT_LIMIT:]

    def as_dict(self) -> Dict[str, object]:
        return {
            "totalGames": self.total_games,
            "xWins": self.x_wins,
            "oWins": self.o_wins,
            "draws": self.draws,
            "bestXMoves": self.best_x_moves,
            "bestOMoves": self.best_o_moves,
            "winStreak": self.win_streak,
            "winRate": self.win_rate,
            "averageMoves": self.average_moves,
            "recent": list(self.recent),
        }


def _fewest(current: Optional[int], candidate: int) -> int:
    return candidate if current is None else min(current, candidate)
