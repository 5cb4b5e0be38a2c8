"""
Minesweeper board engine.

Provides mine placement with a safe first click, flood-fill reveal,
flagging, chording and win/loss tracking.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, ConfigError, DEFAULT_CONFIG
from .clock import Timer, MonotonicTimer
from .session import (
    GameSession,
    GameStatus,
    LossReport,
    RevealResult,
    MAX_ELAPSED_SECONDS,
    new_session,
)

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "ConfigError",
    "DEFAULT_CONFIG",
    "Timer",
    "MonotonicTimer",
    "GameSession",
    "GameStatus",
    "LossReport",
    "RevealResult",
    "MAX_ELAPSED_SECONDS",
    "new_session",
]
