"""One rally tick of ball physics.

Collisions are resolved in a fixed order: top/bottom walls, then paddles, then
at most one block. Everything here works on the caller's working copies.
"""
import math
from typing import List, Optional, Sequence

from pong_xtreme.config import (
    FORCED_DEFLECTION, GAME_HEIGHT, MAX_BOUNCE_ANGLE, PADDLE_HEIGHT,
    PADDLE_WIDTH, PUSH_OUT_EPSILON, STRAIGHT_ANGLE, STRAIGHT_HITS_LIMIT,
)
from pong_xtreme.entities import Ball, Block, Paddle, PlayerId
from pong_xtreme.events import Event, EventKind
from pong_xtreme.geometry import clamp, penetration, vec
from pong_xtreme.progression import RallyProgress, on_paddle_hit


def step(ball: Ball, paddles: Sequence[Paddle], blocks: Sequence[Block],
         progress: RallyProgress, total_score: int, rng) -> List[Event]:
    events = []
    ball.advance()

    if bounce_walls(ball, progress):
        events.append(Event(EventKind.WALL_BOUNCE))

    for paddle in paddles:
        if touches_paddle(ball, paddle):
            events.extend(bounce_paddle(ball, paddle, progress, total_score, rng))
            break

    block_event = bounce_block(ball, blocks, progress)
    if block_event is not None:
        events.append(block_event)
    return events


def bounce_walls(ball: Ball, progress: RallyProgress) -> bool:
    r = ball.radius
    x, y = ball.position
    vx, vy = ball.velocity
    if y - r < 0:
        ball.position = vec(x, r)
        ball.velocity = vec(vx, abs(vy))
    elif y + r > GAME_HEIGHT:
        ball.position = vec(x, GAME_HEIGHT - r)
        ball.velocity = vec(vx, -abs(vy))
    else:
        return False
    # bounces before anyone has touched the ball don't count
    if progress.last_hitter is not None:
        progress.wall_hits_since_paddle += 1
    return True


def touches_paddle(ball: Ball, paddle: Paddle) -> bool:
    r = ball.radius
    x, y = ball.position
    if not paddle.y <= y <= paddle.y + PADDLE_HEIGHT:
        return False
    if paddle.side is PlayerId.PLAYER1:
        return ball.velocity.x < 0 and x - r <= paddle.face_x and x + r >= paddle.x
    return ball.velocity.x > 0 and x + r >= paddle.face_x and x - r <= paddle.x + PADDLE_WIDTH


def bounce_angle(ball: Ball, paddle: Paddle) -> float:
    # hitting above the centre sends the ball upwards
    offset = (paddle.center_y - ball.position.y) / (PADDLE_HEIGHT / 2)
    return clamp(offset, -1.0, 1.0) * MAX_BOUNCE_ANGLE


def bounce_paddle(ball: Ball, paddle: Paddle, progress: RallyProgress,
                  total_score: int, rng) -> List[Event]:
    away = -paddle.side.direction
    ball.position = vec(paddle.face_x + away * ball.radius, ball.position.y)

    progress.last_hitter = paddle.side
    progress.wall_hits_since_paddle = 0
    progress.hit_block_this_rally = False
    events = on_paddle_hit(progress, total_score)

    angle = bounce_angle(ball, paddle)
    if abs(angle) < STRAIGHT_ANGLE:
        progress.consecutive_straight_hits += 1
    else:
        progress.consecutive_straight_hits = 0
    if progress.consecutive_straight_hits >= STRAIGHT_HITS_LIMIT:
        angle = rng.choice((-1, 1)) * FORCED_DEFLECTION
        progress.consecutive_straight_hits = 0

    speed = progress.ball_speed
    ball.velocity = vec(speed * math.cos(angle) * away, -speed * math.sin(angle))
    return [Event(EventKind.PADDLE_HIT, player=paddle.side, value=angle)] + events


def _outward(offset: float, velocity: float) -> int:
    if offset > 0:
        return 1
    if offset < 0:
        return -1
    return -1 if velocity > 0 else 1


def bounce_block(ball: Ball, blocks: Sequence[Block], progress: RallyProgress) -> Optional[Event]:
    """Resolve the first block the ball overlaps. Blocks are never destroyed."""
    for block in blocks:
        pen = penetration(ball.box, block.box)
        if pen is None:
            continue
        x, y = ball.position
        vx, vy = ball.velocity
        sign_y = _outward(pen.dy, vy)
        pushed_y = y + sign_y * (pen.overlap_y + PUSH_OUT_EPSILON)
        # with no room between block and wall the ball bounces off the side
        if pen.horizontal or not ball.radius <= pushed_y <= GAME_HEIGHT - ball.radius:
            sign = _outward(pen.dx, vx)
            ball.position = vec(x + sign * (pen.overlap_x + PUSH_OUT_EPSILON), y)
            ball.velocity = vec(sign * abs(vx), vy)
        else:
            ball.position = vec(x, pushed_y)
            ball.velocity = vec(vx, sign_y * abs(vy))
        progress.hit_block_this_rally = True
        return Event(EventKind.BLOCK_HIT)
    return None
