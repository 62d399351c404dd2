import logging
import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from examples.simulate_games import GameSummary, log_summary, play_game
from blockfall import GameSession, SessionConfig


def test_play_game_stops_at_frame_budget_or_game_over():
    session = GameSession(SessionConfig(seed=11))
    summary = play_game(session, random.Random(11), max_frames=600, command_chance=0.5)

    assert 0 < summary.frames <= 600
    assert summary.score == session.score
    assert summary.lines == session.lines
    assert len(session.queue) == 3
    assert summary.game_over == session.game_over


def test_play_game_restarts_session_and_detaches_listener():
    session = GameSession(SessionConfig(seed=2))
    session.score = 999
    play_game(session, random.Random(2), max_frames=10)

    assert session.score == 0
    assert session.events._listeners == []


def test_log_summary_writes_one_line(caplog):
    summary = GameSummary(score=140, level=2, lines=7, frames=1200, clears=4, game_over=True)

    with caplog.at_level(logging.INFO, logger="examples.simulate_games"):
        log_summary(summary, index=7)

    message = "".join(caplog.messages)
    assert "Game 7" in message
    assert "score=140" in message
    assert "game over" in message
