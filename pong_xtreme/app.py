"""Pygame front end: keyboard in, frames and sounds out."""
import argparse
import logging
import os
import random
import sys
from typing import List, Optional

import pygame

from pong_xtreme.audio import Soundboard
from pong_xtreme.config import (
    BALL_SIZE, BLACK, BLOCK_HEIGHT, BLOCK_WIDTH, FPS, GAME_HEIGHT, GAME_WIDTH,
    GameMode, NEON_CYAN, NEON_GREEN, NEON_MAGENTA, NEON_ORANGE, NEON_YELLOW,
    NET_GREY, PADDLE_HEIGHT, PADDLE_WIDTH, WHITE,
)
from pong_xtreme.entities import InputSample
from pong_xtreme.events import Event, EventKind
from pong_xtreme.leaderboard import DEFAULT_PATH, LeaderboardEntry, LocalLeaderboard
from pong_xtreme.outcome import MatchFlavor, PointFlavor
from pong_xtreme.session import Countdown, GameSession, rematch, start_match, tick, toggle_pause

logger = logging.getLogger(__name__)

SCOREBAR_H = 80
HEADLINES = {
    MatchFlavor.STREAK: "STREAK!",
    MatchFlavor.SHUTOUT: "MASACRE!",
    MatchFlavor.SONIC_BOOM: "SONIC BOOM!",
    MatchFlavor.EXPLOSION: "EXPLOSION!",
    MatchFlavor.COMEBACK: "COMEBACK!",
    MatchFlavor.NEAR_MISS: "NEAR MISS!",
    MatchFlavor.OVERTIME: "OVERTIME!",
    MatchFlavor.PLAIN_WIN: "GAME OVER",
}
POINT_BANNERS = {
    PointFlavor.NO_SCOPE: "NO SCOPE!",
    PointFlavor.PONG_POINT: "PONG POINT!",
}


def sample_input(keys) -> InputSample:
    return InputSample(
        p1_up=bool(keys[pygame.K_w]),
        p1_down=bool(keys[pygame.K_s]),
        p2_up=bool(keys[pygame.K_UP]),
        p2_down=bool(keys[pygame.K_DOWN]),
    )


def draw_center_line(surf):
    # dashed center line for retro flair
    dash_h = 12
    for y in range(0, GAME_HEIGHT, dash_h * 2):
        pygame.draw.rect(surf, NET_GREY, (GAME_WIDTH // 2 - 2, y, 4, dash_h))


def draw_board(session: GameSession, font) -> pygame.Surface:
    """The arena without the score bar, before rotation."""
    board = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
    board.fill(BLACK)
    draw_center_line(board)

    for paddle, color in ((session.left, NEON_CYAN), (session.right, NEON_MAGENTA)):
        pygame.draw.rect(board, color, pygame.Rect(int(paddle.x), int(paddle.y), PADDLE_WIDTH, PADDLE_HEIGHT))
    for block in session.blocks:
        pygame.draw.rect(board, NEON_GREEN, pygame.Rect(int(block.position.x), int(block.position.y),
                                                        BLOCK_WIDTH, BLOCK_HEIGHT))
    ball = session.ball
    pygame.draw.rect(board, WHITE, pygame.Rect(int(ball.position.x - ball.radius),
                                               int(ball.position.y - ball.radius), BALL_SIZE, BALL_SIZE))

    phase = session.phase
    if session.is_paused:
        _blit_center(board, font.render("PAUSED", True, NEON_YELLOW))
    elif isinstance(phase, Countdown):
        _blit_center(board, font.render(str(phase.remaining), True, NEON_YELLOW))
        if session.last_scorer is not None:
            banner = POINT_BANNERS.get(session.last_point, f"{session.name_of(session.last_scorer)} scores")
            text = font.render(banner, True, NEON_ORANGE)
            board.blit(text, (GAME_WIDTH // 2 - text.get_width() // 2, GAME_HEIGHT // 3))
    return board


def draw_frame(screen: pygame.Surface, session: GameSession, fonts, table: Optional[List[LeaderboardEntry]] = None):
    font, big = fonts
    screen.fill(BLACK)

    score_text = big.render(f"{session.score.player1}   {session.score.player2}", True, NEON_YELLOW)
    screen.blit(score_text, (GAME_WIDTH // 2 - score_text.get_width() // 2, 16))
    names = font.render(f"{session.p1_name}  vs  {session.p2_name}  [{session.mode.value}]", True, WHITE)
    screen.blit(names, (16, SCOREBAR_H - names.get_height() - 4))

    board = draw_board(session, big)
    if session.board_rotation:
        board = pygame.transform.rotate(board, -session.board_rotation)
    rect = board.get_rect(center=(GAME_WIDTH // 2, SCOREBAR_H + GAME_HEIGHT // 2))
    screen.blit(board, rect)

    outcome = session.outcome
    if outcome is not None:
        title = big.render(HEADLINES[outcome.headline], True, NEON_MAGENTA)
        winner = big.render(f"{outcome.winner_name} wins!", True, NEON_ORANGE)
        hint = font.render("1: Classic   2: Hardcore   Esc: quit", True, NEON_CYAN)
        y = SCOREBAR_H + GAME_HEIGHT // 4
        for surf in (title, winner, hint):
            screen.blit(surf, (GAME_WIDTH // 2 - surf.get_width() // 2, y))
            y += surf.get_height() + 12
        for rank, entry in enumerate(table or [], start=1):
            row = font.render(f"{rank:>2}. {entry.name:<10} {entry.score:>6}  {entry.mode}", True, WHITE)
            screen.blit(row, (GAME_WIDTH // 2 - row.get_width() // 2, y))
            y += row.get_height() + 2


def _blit_center(surf, text):
    surf.blit(text, (GAME_WIDTH // 2 - text.get_width() // 2, GAME_HEIGHT // 2 - text.get_height() // 2))


def record_result(events: List[Event], session: GameSession, leaderboard: LocalLeaderboard):
    """Submit the winner of a finished match, return the table to show."""
    for event in events:
        if event.kind is EventKind.MATCH_OVER:
            entry = LeaderboardEntry.for_match(event.name, event.flavor, session.mode)
            return leaderboard.submit(entry)
    return None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Two player pong with obstacle blocks.")
    parser.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.CLASSIC.value)
    parser.add_argument("--p1", default="Player 1", help="left player's name")
    parser.add_argument("--p2", default="Player 2", help="right player's name")
    parser.add_argument("--seed", type=int, help="seed for a reproducible session")
    parser.add_argument("--leaderboard", default=os.environ.get("PONG_XTREME_LEADERBOARD", DEFAULT_PATH),
                        help="leaderboard JSON file")
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def open_session(args) -> GameSession:
    """First match of a run; one countdown step lasts a second at the chosen frame rate."""
    return start_match(args.mode, args.p1, args.p2, rng=random.Random(args.seed), countdown_frames=args.fps)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((GAME_WIDTH, GAME_HEIGHT + SCOREBAR_H))
    pygame.display.set_caption("Pong Xtreme")
    clock = pygame.time.Clock()
    fonts = (pygame.font.SysFont("PressStart2P,monospace", 20), pygame.font.SysFont("PressStart2P,monospace", 40))
    sfx = Soundboard()
    leaderboard = LocalLeaderboard(args.leaderboard)

    session = open_session(args)
    table = None

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                return 0
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                pygame.quit()
                return 0
            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                session = toggle_pause(session)
            elif session.is_over and event.key in (pygame.K_1, pygame.K_2):
                mode = GameMode.CLASSIC if event.key == pygame.K_1 else GameMode.HARDCORE
                session = rematch(session, mode)
                table = None

        session, events = tick(session, sample_input(pygame.key.get_pressed()))
        sfx.play_events(events)
        table = record_result(events, session, leaderboard) or table

        draw_frame(screen, session, fonts, table)
        pygame.display.flip()
        clock.tick(args.fps)


if __name__ == "__main__":
    sys.exit(main())
