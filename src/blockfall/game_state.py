"""Game session: the tick-driven state machine owning board, piece and queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

from .board import Board, Grid
from .config import SessionConfig
from .events import Event, EventSink, GameOver, LevelUp, LinesCleared, MuteToggled
from .piece_queue import PieceQueue
from .tetromino import ActivePiece, PieceKind, Shape
from .utils import check_collision, fall_interval as compute_fall_interval
from .utils import ghost_y as compute_ghost_y
from .utils import try_rotate


LOGGER = logging.getLogger(__name__)

# Points per clear, multiplied by the level at which it happened.
SCORE_TABLE = {1: 40, 2: 100, 3: 300, 4: 1200}
# The level increases once more than ``level * LINES_PER_LEVEL`` lines are cleared.
LINES_PER_LEVEL = 5


class Phase(str, Enum):
    NO_ACTIVE_PIECE = "no_active_piece"
    PIECE_FALLING = "piece_falling"
    GAME_OVER = "game_over"


class Command(str, Enum):
    """Player inputs understood by :meth:`GameSession.handle`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"
    RESTART = "restart"
    TOGGLE_MUTE = "toggle_mute"


@dataclass(frozen=True)
class PieceSnapshot:
    kind: PieceKind
    cases: Shape
    x: int
    y: int
    rotation: int


@dataclass(frozen=True, eq=False)
class SessionSnapshot:
    """Read-only view of a session handed to renderers once per frame."""

    grid: Grid
    active: Optional[PieceSnapshot]
    ghost_y: Optional[int]
    upcoming: Tuple[PieceKind, ...]
    score: int
    level: int
    lines: int
    phase: Phase
    muted: bool


@dataclass
class GameSession:
    """Mutable state for one game, advanced by :meth:`tick` and commands.

    Every public mutator returns the events it produced; the same events are
    published on :attr:`events` after the state change is complete.
    """

    config: SessionConfig = field(default_factory=SessionConfig)
    events: EventSink = field(default_factory=EventSink)
    board: Board = field(init=False)
    queue: PieceQueue = field(init=False)
    active: Optional[ActivePiece] = field(init=False, default=None)
    phase: Phase = field(init=False, default=Phase.NO_ACTIVE_PIECE)
    score: int = field(init=False, default=0)
    level: int = field(init=False, default=1)
    lines: int = field(init=False, default=0)
    fall_interval: float = field(init=False, default=1.0)
    generation_timer: float = field(init=False, default=0.0)
    ghost_y: Optional[int] = field(init=False, default=None)
    muted: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.board = Board()
        self.queue = PieceQueue(
            self.config.queue_size,
            rng=random.Random(self.config.seed),
            board_width=self.board.width,
        )
        self._reset_counters()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _reset_counters(self) -> None:
        self.active = None
        self.phase = Phase.NO_ACTIVE_PIECE
        self.score = 0
        self.level = 1
        self.lines = 0
        self.fall_interval = compute_fall_interval(self.level)
        self.generation_timer = 0.0
        self.ghost_y = None

    def _publish(self, events: List[Event]) -> List[Event]:
        for event in events:
            self.events.emit(event)
        return events

    def _refresh_ghost(self) -> None:
        if self.active is None:
            self.ghost_y = None
        else:
            self.ghost_y = compute_ghost_y(self.board, self.active)

    def _controllable(self) -> bool:
        return self.phase is Phase.PIECE_FALLING and self.active is not None

    def _spawn(self, events: List[Event]) -> None:
        piece = self.queue.pop()
        self.active = piece
        self.generation_timer = 0.0
        if check_collision(self.board, piece, 0, 0):
            self.ghost_y = None
            self.phase = Phase.GAME_OVER
            LOGGER.info("Game over: %s cannot spawn. Score: %d", piece.kind.value, self.score)
            events.append(GameOver())
            return
        self.phase = Phase.PIECE_FALLING
        self._refresh_ghost()
        LOGGER.debug("Spawned %s at (%d, %d)", piece.kind.value, piece.x, piece.y)

    def _lock_active(self, events: List[Event]) -> None:
        """Lock the active piece, clear lines and update score and level."""

        if self.active is None:
            raise RuntimeError("No active piece to lock")
        piece = self.active
        self.board.lock_piece(piece)
        self.active = None
        self.ghost_y = None
        self.phase = Phase.NO_ACTIVE_PIECE
        LOGGER.debug("Locked %s at (%d, %d)", piece.kind.value, piece.x, piece.y)

        cleared = self.board.clear_full_lines()
        if not cleared:
            return
        self.lines += cleared
        self.score += SCORE_TABLE[cleared] * self.level
        LOGGER.info("Cleared %d line(s). Score: %d", cleared, self.score)
        events.append(LinesCleared(cleared))

        if self.lines > self.level * LINES_PER_LEVEL:
            self.level += 1
            self.fall_interval = compute_fall_interval(self.level)
            LOGGER.info("Level up: %d (fall interval %.3fs)", self.level, self.fall_interval)
            events.append(LevelUp(self.level))

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------
    def tick(self, delta: float) -> List[Event]:
        """Advance the session by ``delta`` seconds.

        Without an active piece the generation timer runs until the next piece
        spawns.  With one, gravity moves it down a row each time its fall
        timer exceeds the fall interval, locking it once it cannot move.
        Nothing happens after a game over until :meth:`restart`.
        """

        if delta < 0:
            raise ValueError(f"Elapsed time must not be negative, got {delta}")

        events: List[Event] = []
        if self.phase is Phase.NO_ACTIVE_PIECE:
            self.generation_timer += delta
            if self.generation_timer > self.fall_interval:
                self._spawn(events)
        elif self.phase is Phase.PIECE_FALLING and self.active is not None:
            piece = self.active
            piece.fall_timer += delta
            if piece.fall_timer > self.fall_interval:
                if check_collision(self.board, piece, 0, 1):
                    self._lock_active(events)
                else:
                    piece.move(0, 1)
                    piece.fall_timer = 0.0
        return self._publish(events)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _shift(self, dx: int) -> List[Event]:
        if self._controllable() and not check_collision(self.board, self.active, dx, 0):
            self.active.move(dx, 0)
            self._refresh_ghost()
        return []

    def move_left(self) -> List[Event]:
        return self._shift(-1)

    def move_right(self) -> List[Event]:
        return self._shift(1)

    def soft_drop(self) -> List[Event]:
        """Move the piece one row down if possible and restart its fall timer."""

        if self._controllable() and not check_collision(self.board, self.active, 0, 1):
            self.active.move(0, 1)
            self.active.fall_timer = 0.0
        return []

    def hard_drop(self) -> List[Event]:
        """Drop the piece to its resting row.

        Unless ``config.hard_drop_locks`` is set the piece stays active and
        locks on the next gravity step.
        """

        if not self._controllable():
            return []
        while not check_collision(self.board, self.active, 0, 1):
            self.active.move(0, 1)
        events: List[Event] = []
        if self.config.hard_drop_locks:
            self._lock_active(events)
        return self._publish(events)

    def rotate(self) -> List[Event]:
        if self._controllable() and try_rotate(self.board, self.active):
            self._refresh_ghost()
        return []

    def restart(self) -> List[Event]:
        """Start a new game with an empty board and a fresh queue."""

        self.board.clear()
        self.queue.reset()
        self._reset_counters()
        LOGGER.info("Session restarted")
        return []

    def toggle_mute(self) -> List[Event]:
        self.muted = not self.muted
        return self._publish([MuteToggled(self.muted)])

    def handle(self, command: Command) -> List[Event]:
        """Dispatch ``command`` to the matching method."""

        return getattr(self, Command(command).value)()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def upcoming(self) -> Tuple[PieceKind, ...]:
        return self.queue.kinds()

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def snapshot(self) -> SessionSnapshot:
        active = None
        if self.active is not None:
            active = PieceSnapshot(
                kind=self.active.kind,
                cases=self.active.cases,
                x=self.active.x,
                y=self.active.y,
                rotation=self.active.rotation,
            )
        return SessionSnapshot(
            grid=self.board.copy_grid(),
            active=active,
            ghost_y=self.ghost_y,
            upcoming=self.upcoming,
            score=self.score,
            level=self.level,
            lines=self.lines,
            phase=self.phase,
            muted=self.muted,
        )
