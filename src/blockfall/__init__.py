"""Falling-block puzzle simulation core."""

from .board import Board, HEIGHT, WIDTH
from .tetromino import ActivePiece, Cell, PieceKind, color_of, kick_offset, rotate_cases, shape_of
from .piece_queue import PieceQueue
from .events import EventSink, GameOver, LevelUp, LinesCleared, MuteToggled
from .config import SessionConfig
from .game_state import Command, GameSession, Phase, PieceSnapshot, SessionSnapshot
from .utils import check_collision, fall_interval, ghost_y, render_grid, try_rotate

__all__ = [
    "Board",
    "WIDTH",
    "HEIGHT",
    "ActivePiece",
    "Cell",
    "PieceKind",
    "PieceQueue",
    "EventSink",
    "LinesCleared",
    "LevelUp",
    "GameOver",
    "MuteToggled",
    "SessionConfig",
    "Command",
    "GameSession",
    "Phase",
    "PieceSnapshot",
    "SessionSnapshot",
    "check_collision",
    "color_of",
    "fall_interval",
    "ghost_y",
    "kick_offset",
    "render_grid",
    "rotate_cases",
    "shape_of",
    "try_rotate",
]
