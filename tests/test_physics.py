import math
import random

import pytest

from pong_xtreme.config import (
    BLOCK_WIDTH, FORCED_DEFLECTION, GAME_HEIGHT, GAME_WIDTH, GameMode, MAX_BOUNCE_ANGLE,
)
from pong_xtreme.entities import Ball, Block, Paddle, PlayerId
from pong_xtreme.events import EventKind
from pong_xtreme.geometry import vec
from pong_xtreme.physics import bounce_block, bounce_paddle, bounce_walls, step, touches_paddle
from pong_xtreme.progression import RallyProgress

BLOCK_X = GAME_WIDTH / 2 - BLOCK_WIDTH / 2


@pytest.fixture
def progress():
    return RallyProgress.fresh(GameMode.CLASSIC, 0)


@pytest.fixture
def paddles():
    return Paddle(PlayerId.PLAYER1), Paddle(PlayerId.PLAYER2)


def kinds(events):
    return [e.kind for e in events]


def test_top_wall_clamps_and_points_down(progress):
    ball = Ball(vec(400, 10), vec(3, -8))
    events = step(ball, (), [], progress, 0, random.Random(0))
    assert kinds(events) == [EventKind.WALL_BOUNCE]
    assert ball.position.y == ball.radius
    assert ball.velocity == vec(3, 8)


def test_bottom_wall_forces_upward_even_if_already_receding(progress):
    ball = Ball(vec(400, GAME_HEIGHT - 2), vec(0, -1))
    assert bounce_walls(ball, progress)
    assert ball.position.y == GAME_HEIGHT - ball.radius
    assert ball.velocity.y == -1


def test_wall_hits_only_count_after_a_paddle_touch(progress):
    ball = Ball(vec(400, 5), vec(0, -5))
    bounce_walls(ball, progress)
    assert progress.wall_hits_since_paddle == 0

    progress.last_hitter = PlayerId.PLAYER2
    ball = Ball(vec(400, 5), vec(0, -5))
    bounce_walls(ball, progress)
    assert progress.wall_hits_since_paddle == 1


def test_centre_hit_returns_ball_flat(progress, paddles):
    progress.wall_hits_since_paddle = 2
    progress.hit_block_this_rally = True
    ball = Ball(vec(45, 300), vec(-7, 0))
    events = step(ball, paddles, [], progress, 0, random.Random(0))

    assert kinds(events) == [EventKind.PADDLE_HIT]
    assert events[0].player is PlayerId.PLAYER1
    assert ball.velocity.x == pytest.approx(7)
    assert ball.velocity.y == pytest.approx(0)
    assert ball.position.x == paddles[0].face_x + ball.radius
    assert progress.paddle_hits == 1
    assert progress.last_hitter is PlayerId.PLAYER1
    assert progress.wall_hits_since_paddle == 0
    assert not progress.hit_block_this_rally


def test_hit_above_centre_goes_up(progress, paddles):
    ball = Ball(vec(GAME_WIDTH - 45, 275), vec(7, 0))
    events = step(ball, paddles, [], progress, 0, random.Random(0))

    angle = events[0].value
    assert angle == pytest.approx(0.5 * MAX_BOUNCE_ANGLE)
    assert ball.velocity.x == pytest.approx(-7 * math.cos(angle))
    assert ball.velocity.y == pytest.approx(-7 * math.sin(angle))
    assert ball.velocity.y < 0
    assert ball.velocity.length() == pytest.approx(progress.ball_speed)


def test_edge_hit_is_capped_at_max_angle(progress, paddles):
    left = paddles[0]
    ball = Ball(vec(42, left.y + 100), vec(-7, 0))
    bounce_paddle(ball, left, progress, 0, random.Random(0))
    assert ball.velocity.y == pytest.approx(7 * math.sin(MAX_BOUNCE_ANGLE))


def test_receding_ball_does_not_trigger_paddle(paddles):
    ball = Ball(vec(40, 300), vec(7, 0))
    assert not touches_paddle(ball, paddles[0])


def test_ball_beside_paddle_vertically_misses(paddles):
    ball = Ball(vec(30, 100), vec(-7, 0))
    assert not touches_paddle(ball, paddles[0])


def test_ball_behind_paddle_is_not_returned(paddles):
    ball = Ball(vec(5, 300), vec(-7, 0))
    assert not touches_paddle(ball, paddles[0])


def test_four_straight_hits_force_a_deflection(progress, paddles):
    left = paddles[0]
    angles = []
    for _ in range(4):
        ball = Ball(vec(40, left.center_y), vec(-7, 0))
        events = bounce_paddle(ball, left, progress, 0, random.Random(3))
        angles.append(events[0].value)

    assert angles[:3] == [0, 0, 0]
    assert abs(angles[3]) == pytest.approx(FORCED_DEFLECTION)
    assert progress.consecutive_straight_hits == 0


def test_angled_hit_resets_straight_counter(progress, paddles):
    left = paddles[0]
    progress.consecutive_straight_hits = 3
    ball = Ball(vec(40, left.y + 10), vec(-7, 0))
    bounce_paddle(ball, left, progress, 0, random.Random(0))
    assert progress.consecutive_straight_hits == 0


def test_block_side_hit_reflects_horizontally(progress):
    blocks = [Block(vec(BLOCK_X, 280))]
    ball = Ball(vec(380, 300), vec(7, 0))
    events = step(ball, (), blocks, progress, 0, random.Random(0))

    assert kinds(events) == [EventKind.BLOCK_HIT]
    assert ball.velocity == vec(-7, 0)
    assert ball.position.x == pytest.approx(384.5)
    assert progress.hit_block_this_rally
    assert len(blocks) == 1


def test_block_top_hit_reflects_vertically(progress):
    blocks = [Block(vec(BLOCK_X, 280))]
    ball = Ball(vec(400, 268), vec(1, 6))
    bounce = step(ball, (), blocks, progress, 0, random.Random(0))

    assert kinds(bounce) == [EventKind.BLOCK_HIT]
    assert ball.velocity == vec(1, -6)
    assert ball.position.y == pytest.approx(272)


def test_only_one_block_resolved_per_tick(progress):
    blocks = [Block(vec(BLOCK_X, 280)), Block(vec(BLOCK_X + 2, 290))]
    ball = Ball(vec(388, 300), vec(1, 0))
    events = step(ball, (), blocks, progress, 0, None)
    assert kinds(events) == [EventKind.BLOCK_HIT]
    # pushed out of the first block only
    assert ball.position.x == pytest.approx(384.5)


def test_block_against_top_wall_bounces_ball_off_its_side(progress):
    blocks = [Block(vec(BLOCK_X, 10))]
    ball = Ball(vec(383, 7.5), vec(7, -0.5))
    events = step(ball, (), blocks, progress, 0, None)

    assert kinds(events) == [EventKind.WALL_BOUNCE, EventKind.BLOCK_HIT]
    assert ball.velocity.x < 0
    assert ball.position.x == pytest.approx(384.5)
    assert ball.position.y >= ball.radius

    for _ in range(5):
        step(ball, (), blocks, progress, 0, None)
        assert ball.position.x + ball.radius <= BLOCK_X
        assert ball.radius <= ball.position.y <= GAME_HEIGHT - ball.radius


def test_ball_clear_of_blocks(progress):
    blocks = [Block(vec(BLOCK_X, 280))]
    ball = Ball(vec(100, 100), vec(5, 5))
    assert bounce_block(ball, blocks, progress) is None
    assert not progress.hit_block_this_rally
