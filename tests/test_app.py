from collections import defaultdict

import pygame
import pytest

from pong_xtreme.app import (
    SCOREBAR_H, draw_board, draw_frame, open_session, parse_args, record_result, sample_input,
)
from pong_xtreme.config import GAME_HEIGHT, GAME_WIDTH, GameMode
from pong_xtreme.entities import InputSample
from pong_xtreme.events import Event, EventKind
from pong_xtreme.leaderboard import LocalLeaderboard
from pong_xtreme.session import Countdown, start_match, tick, toggle_pause


@pytest.fixture(scope="module")
def fonts():
    pygame.font.init()
    yield pygame.font.Font(None, 20), pygame.font.Font(None, 40)
    pygame.font.quit()


@pytest.fixture
def screen():
    return pygame.Surface((GAME_WIDTH, GAME_HEIGHT + SCOREBAR_H))


def test_sample_input_maps_keys():
    keys = defaultdict(bool, {pygame.K_w: True, pygame.K_DOWN: True})
    assert sample_input(keys) == InputSample(p1_up=True, p2_down=True)


def test_parse_args_defaults(monkeypatch):
    monkeypatch.setenv("PONG_XTREME_LEADERBOARD", "/tmp/board.json")
    args = parse_args([])
    assert args.mode == "classic"
    assert args.leaderboard == "/tmp/board.json"
    assert parse_args(["--mode", "hardcore", "--seed", "4"]).seed == 4


def test_countdown_follows_frame_rate():
    session = open_session(parse_args(["--fps", "30", "--seed", "1", "--mode", "hardcore"]))
    assert session.countdown_frames == 30
    assert session.mode is GameMode.HARDCORE
    assert isinstance(session.phase, Countdown)


def test_board_draws_paddles_and_ball(fonts, rng):
    session = start_match(GameMode.CLASSIC, "Ada", "Bob", rng=rng)
    board = draw_board(session, fonts[1])
    assert board.get_size() == (GAME_WIDTH, GAME_HEIGHT)
    assert board.get_at((int(session.left.x) + 2, int(session.left.center_y)))[:3] == (0, 255, 255)


def test_frame_renders_every_phase(fonts, screen, rng, rally, tmp_path):
    session = start_match(GameMode.HARDCORE, "Ada", "Bob", rng=rng, countdown_frames=1)
    draw_frame(screen, session, fonts)
    draw_frame(screen, toggle_pause(session), fonts)

    over, events = tick(rally(session, (GAME_WIDTH - 3, 300), (7, 0), score=(4, 0)), InputSample())
    over.board_rotation = 12.0
    table = record_result(events, over, LocalLeaderboard(str(tmp_path / "board.json")))
    assert [e.name for e in table] == ["ADA"]
    draw_frame(screen, over, fonts, table)


def test_record_result_ignores_ordinary_ticks(tmp_path, rng):
    session = start_match(GameMode.CLASSIC, "Ada", "Bob", rng=rng)
    board = LocalLeaderboard(str(tmp_path / "board.json"))
    assert record_result([Event(EventKind.WALL_BOUNCE)], session, board) is None
    assert board.load() == []
