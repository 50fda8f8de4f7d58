"""
Collision and goal checks for Endless River.

evaluate() classifies where the player stands: off the field, beached on
land, at the goal line, or safely afloat. Bounds are always checked before
the grid is indexed.
"""

import enum

from endless_river.config import GoalPolicy
from endless_river.terrain import Cell


class Outcome(enum.Enum):
    SAFE = "safe"
    OUT_OF_BOUNDS = "out_of_bounds"
    ON_LAND = "on_land"
    GOAL_REACHED = "goal_reached"


def in_bounds(x, y, grid):
    """True when (x, y) lies on the grid."""
    height = len(grid)
    if not 0 <= y < height:
        return False
    return 0 <= x < len(grid[y])


def evaluate(player, grid, goal_policy=GoalPolicy.NONE):
    """Classify the player's position against the terrain and goal policy."""
    x, y = player.x, player.y
    if not in_bounds(x, y, grid):
        return Outcome.OUT_OF_BOUNDS
    if grid[y][x] is Cell.LAND:
        return Outcome.ON_LAND
    if goal_policy is GoalPolicy.REACH_TOP and y == 0:
        return Outcome.GOAL_REACHED
    return Outcome.SAFE
