"""Obstacle block spawning on the centre line."""
import logging
from typing import List, Tuple

from pong_xtreme.config import (
    BLOCK_HEIGHT, BLOCK_PLACEMENT_ATTEMPTS, BLOCK_SPACING, BLOCK_WIDTH,
    CASCADE_ODDS, GAME_HEIGHT, GAME_WIDTH, MAX_BLOCKS_ON_SCREEN,
)
from pong_xtreme.entities import Block
from pong_xtreme.geometry import vec

logger = logging.getLogger(__name__)


def cascade_count(existing: int, rng) -> int:
    """How many blocks appear at once.

    Until two blocks are on the board exactly one is added. After that each
    extra block needs the previous coin flip to have landed.
    """
    if existing < 2:
        return 1
    count = 1
    for odds in CASCADE_ODDS:
        if rng.random() >= odds:
            break
        count += 1
    return count


def is_clear(y: float, blocks: List[Block]) -> bool:
    return all(abs(y - block.position.y) >= BLOCK_HEIGHT + BLOCK_SPACING for block in blocks)


def place_block(blocks: List[Block], rng):
    x = GAME_WIDTH / 2 - BLOCK_WIDTH / 2
    for _ in range(BLOCK_PLACEMENT_ATTEMPTS):
        y = rng.uniform(0, GAME_HEIGHT - BLOCK_HEIGHT)
        if is_clear(y, blocks):
            return Block(vec(x, y))
    return None


def spawn_blocks(blocks: List[Block], rng) -> Tuple[List[Block], int]:
    """Append freshly placed blocks, evict the oldest, return (blocks, placed)."""
    blocks = list(blocks)
    wanted = cascade_count(len(blocks), rng)
    placed = 0
    for _ in range(wanted):
        block = place_block(blocks, rng)
        if block is None:
            logger.debug("no room for another block, skipping it")
            continue
        blocks.append(block)
        placed += 1

    while len(blocks) > MAX_BLOCKS_ON_SCREEN:
        blocks.pop(0)
    logger.debug("spawned %d/%d blocks, %d on board", placed, wanted, len(blocks))
    return blocks, placed
