"""
Terrain generation for Endless River.

Builds the playfield as a list of rows of Cell values: a winding river
channel of CHANNEL cells cut through LAND. generate_initial() lays out a
whole screen along a sine curve; generate_row() grows one new row from the
shape of an existing one so the river keeps flowing as the screen scrolls.

Every random draw comes from the rng argument (a random.Random), so a fixed
seed always produces the same river.
"""

import enum
import logging
import math

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_RIVER_WIDTH = 10        # initial river width range, inclusive
MAX_RIVER_WIDTH = 20
MEANDER_PERIOD = 5          # rows per radian of the sine curve
MEANDER_AMPLITUDE = 10      # columns

BRANCH_CHANCE = 20          # 1 in N rows sprouts a branch
INITIAL_BRANCH_LENGTH = (5, 14)
ROW_BRANCH_LENGTH = (2, 6)
BRANCH_DIRECTIONS = (1, -1)

DRIFT = (-1, 0, 1)
WIDTH_CHANGE_CHANCE = 10    # 1 in N new rows nudges the width
WIDTH_CHANGES = (-1, 1)
MIN_ROW_WIDTH = 8
FALLBACK_WIDTH = 15

START_ROWS_FROM_BOTTOM = 5


class Cell(enum.Enum):
    LAND = 0
    CHANNEL = 1


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

def new_row(width):
    """Return a row of all-land cells."""
    return [Cell.LAND] * max(0, width)


def channel_bounds(row):
    """Return (leftmost, rightmost) channel columns of row, or None."""
    left = right = None
    for x, cell in enumerate(row or ()):
        if cell is Cell.CHANNEL:
            if left is None:
                left = x
            right = x
    if left is None:
        return None
    return left, right


def clamp_center(center, river_width, width):
    """Slide a river center so its whole span fits inside the row.

    When the span is wider than the row the center of the row is used and
    the span is cut at both edges.
    """
    half = river_width // 2
    low, high = half, width - 1 - half
    if low > high:
        return width // 2
    return max(low, min(high, center))


def fill_span(row, center, river_width):
    """Mark [center - w/2, center + w/2] as channel, dropping off-row columns."""
    half = river_width // 2
    for x in range(center - half, center + half + 1):
        if 0 <= x < len(row):
            row[x] = Cell.CHANNEL


def carve(grid, x, y):
    """Mark one cell as channel if it lies on the grid."""
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        grid[y][x] = Cell.CHANNEL


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def generate_initial(width, height, rng):
    """Generate a full height x width terrain grid with a winding river."""
    if width <= 0 or height <= 0:
        logger.debug("Empty playfield %dx%d, no terrain generated", width, height)
        return []

    grid = [new_row(width) for _ in range(height)]
    river_width = rng.randint(MIN_RIVER_WIDTH, MAX_RIVER_WIDTH)

    for y in range(height):
        offset = round(math.sin(y / MEANDER_PERIOD) * MEANDER_AMPLITUDE)
        center = clamp_center(width // 2 + offset, river_width, width)
        fill_span(grid[y], center, river_width)

        # Occasional side branch running diagonally down the screen
        if rng.randrange(BRANCH_CHANCE) == 0:
            length = rng.randint(*INITIAL_BRANCH_LENGTH)
            direction = rng.choice(BRANCH_DIRECTIONS)
            for i in range(length):
                carve(grid, center + (i + 1) * direction, y + i)

    return grid


def generate_row(width, previous_top_row, rng):
    """Generate one new row that continues the river in previous_top_row."""
    if width <= 0:
        return []

    row = new_row(width)
    bounds = channel_bounds(previous_top_row)
    if bounds is None:
        logger.debug("No river in reference row, using centred fallback")
        fill_span(row, width // 2, FALLBACK_WIDTH)
        return row

    left, right = bounds
    center = left + (right - left) // 2 + rng.choice(DRIFT)
    river_width = right - left + 1
    if rng.randrange(WIDTH_CHANGE_CHANCE) == 0:
        river_width = max(MIN_ROW_WIDTH, river_width + rng.choice(WIDTH_CHANGES))
    river_width = min(river_width, width)

    # Unlike the initial grid the center is not slid; off-row cells are clipped
    fill_span(row, center, river_width)

    if rng.randrange(BRANCH_CHANCE) == 0:
        length = rng.randint(*ROW_BRANCH_LENGTH)
        direction = rng.choice(BRANCH_DIRECTIONS)
        for i in range(length):
            x = center + i * direction
            if 0 <= x < width:
                row[x] = Cell.CHANNEL

    return row


def find_start_position(grid):
    """Pick the player's starting (x, y): mid-river, a few rows from the bottom.

    Falls back to the lowest, leftmost channel cell anywhere on the grid,
    and to (0, 0) when there is no river at all.
    """
    height = len(grid)
    if height == 0 or not grid[0]:
        return 0, 0

    y = max(0, height - START_ROWS_FROM_BOTTOM)
    bounds = channel_bounds(grid[y])
    if bounds is not None:
        left, right = bounds
        x = left + (right - left) // 2
        if grid[y][x] is Cell.CHANNEL:
            return x, y

    for y in range(height - 1, -1, -1):
        for x, cell in enumerate(grid[y]):
            if cell is Cell.CHANNEL:
                return x, y
    return 0, 0
