"""Notifications published by the game session.

Audio and score displays subscribe to an :class:`EventSink`; the session only
emits once its own state change is complete, so subscribers always observe a
consistent game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Union


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinesCleared:
    count: int


@dataclass(frozen=True)
class LevelUp:
    level: int


@dataclass(frozen=True)
class GameOver:
    pass


@dataclass(frozen=True)
class MuteToggled:
    muted: bool


Event = Union[LinesCleared, LevelUp, GameOver, MuteToggled]
Listener = Callable[[Event], None]


class EventSink:
    """Fan events out to subscribed callables."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to every listener in subscription order.

        A failing listener is logged and skipped so the remaining listeners
        still receive the event and the game loop keeps running.
        """

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Event listener %r failed on %r", listener, event)
