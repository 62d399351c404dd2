import pytest

from blockfall.events import LevelUp, LinesCleared
from blockfall.tetromino import PieceKind
from blockfall.utils import fall_interval

from conftest import fill_rows


def _drop_bar_and_lock(session):
    session.tick(1.5)
    session.hard_drop()
    return session.tick(session.fall_interval + 0.5)


@pytest.mark.parametrize("cleared, points", [(1, 40), (2, 100), (3, 300), (4, 1200)])
@pytest.mark.parametrize("level", [1, 3])
def test_score_table(make_session, cleared, points, level):
    session = make_session([PieceKind.I])
    session.level = level
    fill_rows(session.board, range(20 - cleared, 20), gap=[4])

    events = _drop_bar_and_lock(session)

    assert events == [LinesCleared(cleared)]
    assert session.score == points * level
    assert session.lines == cleared
    assert session.level == level


def test_level_advances_when_lines_exceed_five_per_level(make_session):
    session = make_session([PieceKind.I])
    session.lines = 4
    fill_rows(session.board, [18, 19], gap=[4])

    events = _drop_bar_and_lock(session)

    assert events == [LinesCleared(2), LevelUp(2)]
    assert session.level == 2
    assert session.lines == 6
    assert session.fall_interval == pytest.approx(fall_interval(2))


def test_reaching_threshold_exactly_does_not_level_up(make_session):
    session = make_session([PieceKind.I])
    session.lines = 3
    fill_rows(session.board, [18, 19], gap=[4])

    events = _drop_bar_and_lock(session)

    assert events == [LinesCleared(2)]
    assert session.level == 1
    assert session.fall_interval == 1.0


def test_threshold_scales_with_level(make_session):
    session = make_session([PieceKind.I])
    session.level = 2
    session.lines = 9
    fill_rows(session.board, [18, 19], gap=[4])

    events = _drop_bar_and_lock(session)

    assert LevelUp(3) in events
    assert session.score == 100 * 2


def test_restart_resets_counters(make_session):
    session = make_session([PieceKind.I])
    fill_rows(session.board, [19], gap=[4])
    _drop_bar_and_lock(session)
    assert session.score == 40

    session.restart()

    assert session.score == 0
    assert session.level == 1
    assert session.lines == 0
    assert session.fall_interval == 1.0
