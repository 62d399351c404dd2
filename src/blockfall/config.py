"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .piece_queue import DEFAULT_QUEUE_SIZE


@dataclass(frozen=True)
class SessionConfig:
    """Tunables for a :class:`~blockfall.game_state.GameSession`.

    ``hard_drop_locks`` selects what a hard drop does.  By default the piece
    is only moved to its resting row and locks on the next gravity step,
    leaving it briefly movable; set it to lock immediately instead.
    """

    queue_size: int = DEFAULT_QUEUE_SIZE
    seed: Optional[int] = None
    hard_drop_locks: bool = False

    def __post_init__(self) -> None:
        if self.queue_size < 1:
            raise ValueError(f"queue_size must be positive, got {self.queue_size}")
