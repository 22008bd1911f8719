"""Environment-driven settings for the UltimateXO server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Plies the HARD search looks ahead when serving games; None is exhaustive
    ai_max_depth: Optional[int] = 6
    # Pause before the AI answers a human move
    ai_delay: float = 0.5

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_depth = env.get("ULTIMATEXO_AI_MAX_DEPTH", "6").strip()
        depth = int(raw_depth) if raw_depth else 0
        return cls(
            host=env.get("ULTIMATEXO_HOST", "0.0.0.0"),
            port=int(env.get("ULTIMATEXO_PORT", "8000")),
            log_level=env.get("ULTIMATEXO_LOG_LEVEL", "INFO").upper(),
            ai_max_depth=depth if depth > 0 else None,
            ai_delay=max(0.0, float(env.get("ULTIMATEXO_AI_DELAY", "0.5"))),
        )
