import math
from enum import Enum

# --- Arena ---
GAME_WIDTH, GAME_HEIGHT = 800, 600

# --- Paddles ---
PADDLE_WIDTH, PADDLE_HEIGHT = 15, 100
PADDLE_MARGIN = 20  # gap between each paddle and its goal line
PADDLE_SPEED = 8

# --- Ball ---
BALL_SIZE = 15
INITIAL_BALL_SPEED = 7
HARDCORE_BALL_SPEED = 10
BALL_SPEED_INCREMENT = 0.5
MAX_BALL_SPEED = 16
HIGH_SPEED_THRESHOLD = 12
MAX_BOUNCE_ANGLE = math.pi / 4  # 45 degrees

# anti-stuck: a run of near-flat returns gets a forced deflection
STRAIGHT_ANGLE = 0.1
STRAIGHT_HITS_LIMIT = 4
FORCED_DEFLECTION = 0.35
PUSH_OUT_EPSILON = 0.5

# --- Rally progression ---
RALLY_HITS_THRESHOLD = 5  # start speeding up after 5 hits
RALLY_HITS_INTERVAL = 2   # then speed up every 2 hits
RALLY_ELEGANTO_THRESHOLD = 10
RALLY_YAMEROO_THRESHOLD = 20
MAX_PROGRESSION_SCORE = 7  # difficulty stops growing after 7 total points

# --- Blocks ---
BLOCK_WIDTH, BLOCK_HEIGHT = 15, 40
POINTS_TO_START_BLOCKS = 2
MAX_BLOCKS_ON_SCREEN = 6
BLOCK_SPACING = 5
BLOCK_PLACEMENT_ATTEMPTS = 10
CASCADE_ODDS = (0.8, 0.4, 0.1)  # 2nd, 3rd and 4th block

# --- Match ---
BASE_WINNING_SCORE = 5
WIN_BY_MARGIN = 2
NO_SCOPE_WALL_HITS = 3
COUNTDOWN_START = 3
COUNTDOWN_FRAMES = 60  # ticks per countdown step at 60 FPS
STREAK_LENGTH = 3

# --- Cosmetics ---
MAX_ROTATION_DELTA = 15.0  # degrees

# --- Leaderboard ---
LEADERBOARD_SIZE = 10
LEADERBOARD_NAME_LENGTH = 10
POINTS_PER_MARGIN = 100
HARDCORE_MULTIPLIER = 2
SHUTOUT_BONUS = 1000

# --- Rendering ---
FPS = 60
BLACK = (0, 0, 0)
WHITE = (245, 245, 245)
NEON_CYAN = (0, 255, 255)
NEON_MAGENTA = (255, 0, 170)
NEON_YELLOW = (255, 255, 0)
NEON_ORANGE = (255, 128, 0)
NEON_GREEN = (0, 255, 128)
NET_GREY = (40, 40, 40)


class GameMode(Enum):
    CLASSIC = "classic"
    HARDCORE = "hardcore"

    @property
    def base_speed(self) -> float:
        if self is GameMode.HARDCORE:
            return HARDCORE_BALL_SPEED
        return INITIAL_BALL_SPEED


def paddle_center_y() -> float:
    return GAME_HEIGHT / 2 - PADDLE_HEIGHT / 2
