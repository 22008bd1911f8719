"""FastAPI host exposing the UltimateXO engine as a JSON API."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .ai import AIStrategy, Difficulty
from .board import Mark
from .config import Settings
from .errors import MoveError, UndoError
from .game import GameController, GameMode, MoveOutcome
from .stats import Scoreboard

logger = logging.getLogger(__name__)

SETTINGS = Settings.from_env()
AI_THINK_DELAY: float = SETTINGS.ai_delay
AI_MAX_DEPTH: Optional[int] = SETTINGS.ai_max_depth
AI_PLAYER = Mark.O


@dataclass
class GameSession:
    """Container for an active game, its mode and optional AI opponent."""

    controller: GameController
    difficulty: Difficulty
    ai: Optional[AIStrategy] = None
    move_log: List[Dict[str, object]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
SCOREBOARD = Scoreboard()
app = FastAPI(
    title="UltimateXO", description="Ultimate tic-tac-toe engine with a minimax AI"
)


class NewGameRequest(BaseModel):
    """Request payload for starting a game."""

    mode: GameMode = Field(default=GameMode.PLAYER, description="Opponent type")
    difficulty: Difficulty = Field(
        default=Difficulty.MEDIUM, description="AI policy used in AI mode"
    )


class RestartRequest(BaseModel):
    """Request payload for restarting a session, optionally switching mode."""

    mode: Optional[GameMode] = None
    difficulty: Optional[Difficulty] = None


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    sub_board: int = Field(alias="subBoard", ge=0, le=8)
    cell: int = Field(ge=0, le=8)


def _make_ai(mode: GameMode, difficulty: Difficulty) -> Optional[AIStrategy]:
    if mode is not GameMode.AI:
        return None
    return AIStrategy(difficulty=difficulty, max_depth=AI_MAX_DEPTH)


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _record_move(
    session: GameSession,
    player: Mark,
    sub_board: int,
    cell: int,
    outcome: MoveOutcome,
) -> None:
    session.move_log.append(
        {"player": player.value, "subBoard": sub_board, "cell": cell}
    )
    if outcome.finished:
        controller = session.controller
        SCOREBOARD.record(outcome, controller.state.move_count, controller.mode)
        logger.info(
            "Game finished: %s%s after %d moves",
            outcome.kind.value,
            f" for {outcome.winner.value}" if outcome.winner else "",
            controller.state.move_count,
        )


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    with session.lock:
        try:
            controller = session.controller
            if not session.ai or controller.state.game_over:
                return
            if controller.state.current_player is not AI_PLAYER:
                return
            if not controller.valid_moves():
                logger.warning("AI has no legal move in game %s", game_id)
                return
            (sub_board, cell), outcome = controller.play_ai_turn(session.ai)
            _record_move(session, AI_PLAYER, sub_board, cell, outcome)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        controller = session.controller
        snap = controller.get_state()
        state: Dict[str, object] = {
            "id": game_id,
            "mode": controller.mode.value,
            "difficulty": session.difficulty.value,
            "cells": [[c.value.strip() for c in board] for board in snap.cells],
            "outcomes": [o.value if o else None for o in snap.outcomes],
            "activeBoard": snap.active_board,
            "currentPlayer": snap.current_player.value,
            "moveCount": snap.move_count,
            "gameOver": snap.game_over,
            "winner": snap.winner.value if snap.winner else None,
            "validMoves": [
                {"subBoard": b, "cell": c} for b, c in controller.valid_moves()
            ],
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
            "canUndo": controller.can_undo(),
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    sub_board: int,
    cell: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        controller = session.controller
        player = controller.state.current_player
        try:
            outcome = controller.apply_move(sub_board, cell)
        except MoveError as exc:
            logger.warning(
                "Rejected move (%d, %d) in game %s: %s", sub_board, cell, game_id, exc
            )
            raise HTTPException(
                status_code=400, detail={"kind": exc.kind, "message": str(exc)}
            ) from exc
        _record_move(session, player, sub_board, cell, outcome)

        should_schedule_ai = (
            session.ai is not None
            and not controller.state.game_over
            and controller.state.current_player is AI_PLAYER
        )
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    session = GameSession(
        controller=GameController(mode=request.mode),
        difficulty=request.difficulty,
        ai=_make_ai(request.mode, request.difficulty),
    )
    game_id = uuid.uuid4().hex
    SESSIONS[game_id] = session
    logger.info(
        "Created %s game %s (%s)",
        request.mode.value,
        game_id,
        request.difficulty.value,
    )
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(
        game_id, session, request.sub_board, request.cell, background_tasks
    )
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/undo")
def undo_move(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        try:
            session.controller.undo()
        except UndoError as exc:
            raise HTTPException(
                status_code=400, detail={"kind": exc.kind, "message": str(exc)}
            ) from exc
        session.move_log.pop()
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/new")
def restart_game(
    game_id: str, request: Optional[RestartRequest] = None
) -> Dict[str, object]:
    session = _get_session(game_id)
    request = request or RestartRequest()
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.controller.new_game(request.mode)
        if request.difficulty is not None:
            session.difficulty = request.difficulty
        session.ai = _make_ai(session.controller.mode, session.difficulty)
        session.move_log.clear()
    logger.info("Restarted game %s as %s", game_id, session.controller.mode.value)
    return _serialize_session(game_id, session)


@app.get("/api/stats")
def get_stats() -> Dict[str, object]:
    return SCOREBOARD.as_dict()


@app.delete("/api/stats")
def reset_stats() -> Dict[str, object]:
    SCOREBOARD.reset()
    logger.info("Scoreboard reset")
    return SCOREBOARD.as_dict()
