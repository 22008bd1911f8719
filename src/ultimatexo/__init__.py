"""UltimateXO package exposing the game engine, AI helpers, and the JSON API."""

from .ai import AIStrategy, Difficulty, compute_ai_move
from .board import BoardState, Mark
from .game import GameController, GameMode, MoveOutcome, OutcomeKind
from .state import GameSnapshot, GameState

__all__ = [
    "AIStrategy",
    "BoardState",
    "Difficulty",
    "GameController",
    "GameMode",
    "GameSnapshot",
    "GameState",
    "Mark",
    "MoveOutcome",
    "OutcomeKind",
    "compute_ai_move",
]
