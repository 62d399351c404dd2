"""Simple pygame front-end for the game engine.

This module provides a playable version of the game built on
:class:`~blockfall.game_state.GameSession`.  The session owns every rule; this
module only turns key presses into commands, draws the session snapshot and
plays sound effects in response to session events.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from .board import HEIGHT, WIDTH
from .config import SessionConfig
from .events import Event, GameOver, LevelUp, LinesCleared, MuteToggled
from .game_state import Command, GameSession, Phase, SessionSnapshot
from .tetromino import Cell, shape_of


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the queue preview and counters, in cells
PANEL_CELLS = 6
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (25, 51, 76)
GRID_LINE = (255, 255, 255)
GHOST_OUTLINE = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)

CELL_COLORS: Dict[Cell, tuple[int, int, int]] = {
    Cell.RED: (255, 0, 0),
    Cell.GREEN: (0, 255, 0),
    Cell.BLUE: (0, 0, 255),
    Cell.YELLOW: (255, 255, 0),
    Cell.DARK_YELLOW: (255, 217, 0),
    Cell.PURPLE: (128, 0, 128),
    Cell.CYAN: (0, 255, 255),
}

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_r: Command.RESTART,
    pygame.K_m: Command.TOGGLE_MUTE,
}

SOUND_FILES = {
    LinesCleared: "line_clear.wav",
    LevelUp: "level_up.wav",
    GameOver: "game_over.wav",
}


class SoundPlayer:
    """Play optional sound effects for session events.

    Sounds are loaded from ``sound_dir`` when it is given; missing files or an
    unavailable mixer simply leave the corresponding event silent.
    """

    def __init__(self, sound_dir: Optional[Path] = None) -> None:
        self.muted = False
        self._sounds: Dict[type, pygame.mixer.Sound] = {}
        if sound_dir is None:
            return
        for event_type, name in SOUND_FILES.items():
            path = Path(sound_dir) / name
            if not path.is_file():
                LOGGER.debug("No sound for %s at %s", event_type.__name__, path)
                continue
            try:
                self._sounds[event_type] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                LOGGER.warning("Could not load %s: %s", path, exc)

    def __call__(self, event: Event) -> None:
        if isinstance(event, MuteToggled):
            self.muted = event.muted
            return
        sound = self._sounds.get(type(event))
        if sound is not None and not self.muted:
            sound.play()


def _cell_rect(x: int, y: int) -> pygame.Rect:
    return pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)


def draw_board(screen: pygame.Surface, snapshot: SessionSnapshot) -> None:
    """Render the locked cells and grid lines."""

    for y in range(HEIGHT):
        for x in range(WIDTH):
            value = Cell(int(snapshot.grid[y, x]))
            rect = _cell_rect(x, y)
            if value != Cell.EMPTY:
                pygame.draw.rect(screen, CELL_COLORS[value], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_active(screen: pygame.Surface, snapshot: SessionSnapshot) -> None:
    """Render the ghost outline and the falling piece."""

    piece = snapshot.active
    if piece is None:
        return
    for cy, row in enumerate(piece.cases):
        for cx, cell in enumerate(row):
            if cell == Cell.EMPTY:
                continue
            if snapshot.ghost_y is not None and snapshot.ghost_y != piece.y:
                ghost = _cell_rect(piece.x + cx, snapshot.ghost_y + cy)
                pygame.draw.rect(screen, GHOST_OUTLINE, ghost, 2)
            pygame.draw.rect(screen, CELL_COLORS[cell], _cell_rect(piece.x + cx, piece.y + cy))


def draw_panel(screen: pygame.Surface, snapshot: SessionSnapshot, font: pygame.font.Font) -> None:
    """Render the upcoming queue and the score counters beside the board."""

    left = WIDTH * CELL_SIZE + CELL_SIZE // 2
    top = CELL_SIZE // 2
    preview = CELL_SIZE // 2
    for kind in snapshot.upcoming:
        shape = shape_of(kind)
        for cy, row in enumerate(shape):
            for cx, cell in enumerate(row):
                if cell != Cell.EMPTY:
                    rect = pygame.Rect(left + cx * preview, top + cy * preview, preview, preview)
                    pygame.draw.rect(screen, CELL_COLORS[cell], rect)
        top += (len(shape) + 1) * preview

    lines = [
        f"Score: {snapshot.score}",
        f"Level: {snapshot.level}",
        f"Lines: {snapshot.lines}",
    ]
    if snapshot.muted:
        lines.append("Muted")
    if snapshot.phase is Phase.GAME_OVER:
        lines.extend(["Game over", "R to restart"])
    top += CELL_SIZE // 2
    for text in lines:
        screen.blit(font.render(text, True, TEXT_COLOR), (left, top))
        top += font.get_linesize()


class GameRunner:
    """Run the game loop; P pauses and Escape quits."""

    def __init__(self, config: Optional[SessionConfig] = None, sound_dir: Optional[Path] = None) -> None:
        self._config = config or SessionConfig()
        self._sound_dir = sound_dir
        self._running = False
        self._paused = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._session: GameSession | None = None
        self._clock: pygame.time.Clock | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def session(self) -> GameSession | None:
        return self._session

    def _handle_key(self, key: int) -> None:
        if self._session is None:
            return
        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_p:
            self._paused = not self._paused
            LOGGER.info("Paused" if self._paused else "Resumed")
        elif key in KEY_COMMANDS and not self._paused:
            self._session.handle(KEY_COMMANDS[key])

    def _draw(self, font: pygame.font.Font) -> None:
        if self._screen is None or self._session is None:
            return
        snapshot = self._session.snapshot()
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, snapshot)
        draw_active(self._screen, snapshot)
        draw_panel(self._screen, snapshot, font)
        pygame.display.set_caption(
            f"blockfall - {'Paused - ' if self._paused else ''}Score: {snapshot.score}"
        )
        pygame.display.flip()

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(((WIDTH + PANEL_CELLS) * CELL_SIZE, HEIGHT * CELL_SIZE))
        pygame.display.set_caption("blockfall")
        self._clock = pygame.time.Clock()
        font = pygame.font.Font(None, 24)

        self._session = GameSession(self._config)
        self._session.events.subscribe(SoundPlayer(self._sound_dir))
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) / 1000.0 if self._clock else 0.0
            # Even when paused, process events so the window remains responsive
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_key(event.key)

            if not self._paused and self._session:
                self._session.tick(dt)

            self._draw(font)

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        self._paused = False
        try:
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._run_loop())
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece queue.")
    parser.add_argument(
        "--hard-drop-locks",
        action="store_true",
        help="Lock the piece immediately on hard drop instead of on the next gravity step.",
    )
    parser.add_argument(
        "--sound-dir",
        type=Path,
        default=None,
        help="Directory holding line_clear.wav, level_up.wav and game_over.wav.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO, WARNING).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    config = SessionConfig(seed=args.seed, hard_drop_locks=args.hard_drop_locks)
    GameRunner(config, sound_dir=args.sound_dir).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
