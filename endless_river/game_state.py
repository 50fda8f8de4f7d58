"""
Game state machine for Endless River.

The GameStateMachine is the single owner of the World (player, scrolling
terrain, score and scroll ticker). Commands, timer ticks and resize events
are fed to handle() one at a time; each one is applied completely before
the next, and none of them raise. The front end reads snapshot() to draw.

States: TITLE -> PLAYING -> GAME_OVER / WIN -> PLAYING ... and QUIT from
anywhere.
"""

import enum
import logging
import random
from collections import namedtuple

from endless_river.collision import Outcome, evaluate
from endless_river.config import GameConfig
from endless_river.scroll_buffer import ScrollBuffer
from endless_river.terrain import find_start_position

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    WIN = "win"
    QUIT = "quit"


class Command(enum.Enum):
    QUIT = "quit"
    START = "start"
    RESTART = "restart"
    MOVE_UP = "up"
    MOVE_DOWN = "down"
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"
    TICK = "tick"


Resize = namedtuple("Resize", ["width", "height"])

# Read-only view handed to the renderer
Snapshot = namedtuple("Snapshot", ["state", "terrain", "player", "score"])

# Command -> (dx, dy)
MOVES = {
    Command.MOVE_UP: (0, -1),
    Command.MOVE_DOWN: (0, 1),
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
}

# Outcome -> state to switch to (None = keep playing)
OUTCOME_STATES = {
    Outcome.SAFE: None,
    Outcome.OUT_OF_BOUNDS: GameState.GAME_OVER,
    Outcome.ON_LAND: GameState.GAME_OVER,
    Outcome.GOAL_REACHED: GameState.WIN,
}

STARTABLE_STATES = (GameState.TITLE, GameState.GAME_OVER, GameState.WIN)


class Player:
    """The player's boat: a single grid cell."""

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    @property
    def position(self):
        return self.x, self.y

    def __repr__(self):
        return f"Player(x={self.x}, y={self.y})"


class World:
    """Everything that lives for one ride: player, terrain, score, ticker."""

    def __init__(self, width, height, terrain, player=None):
        self.width = width
        self.height = height
        self.terrain = terrain
        self.player = player or Player(*find_start_position(terrain))
        self.scroll_ticker = 0
        self.ascent_score = 0

    @classmethod
    def create(cls, width, height, rng):
        # A zero-size world has no terrain; its player sits at (0, 0) off the
        # grid and every move and scroll is a no-op.
        width, height = max(0, width), max(0, height)
        return cls(width, height, ScrollBuffer.generate(width, height, rng))

    @property
    def score(self):
        return self.terrain.score + self.ascent_score


class GameStateMachine:
    """Routes commands and timer ticks to the world and applies outcomes."""

    def __init__(self, width=0, height=0, config=None, rng=None):
        self.config = (config or GameConfig()).validated()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.width = width
        self.height = height
        self.state = GameState.TITLE
        self.world = None

    # -- event routing -----------------------------------------------------

    def handle(self, event):
        """Apply one event and return the resulting state."""
        if isinstance(event, Resize):
            self.resize(event.width, event.height)
        elif event is Command.QUIT:
            self.quit()
        elif event is Command.TICK:
            self.tick()
        elif event in (Command.START, Command.RESTART):
            self.start()
        elif isinstance(event, Command) and event in MOVES:
            self.move(event)
        else:
            logger.debug("Ignoring unknown event %r", event)
        return self.state

    # -- transitions -------------------------------------------------------

    def start(self):
        """Begin a fresh ride from the title, game over or win screen."""
        if self.state not in STARTABLE_STATES:
            return False
        self.world = World.create(self.width, self.height, self.rng)
        self.state = GameState.PLAYING
        logger.info("Ride started on a %dx%d playfield, player at %s",
                    self.world.width, self.world.height,
                    self.world.player.position)
        self.check_placement()
        return True

    def quit(self):
        if self.state is not GameState.QUIT:
            logger.info("Quit from %s", self.state.value)
        self.state = GameState.QUIT

    def move(self, command):
        """Move one cell if the destination is on the playfield, then check it."""
        if self.state is not GameState.PLAYING:
            return None
        dx, dy = MOVES[command]
        player = self.world.player
        nx, ny = player.x + dx, player.y + dy
        if not (0 <= nx < self.world.width and 0 <= ny < self.world.height):
            return None

        player.x, player.y = nx, ny
        outcome = self.check_player()
        if (dy < 0 and self.config.score_on_ascent
                and OUTCOME_STATES[outcome] is not GameState.GAME_OVER):
            self.world.ascent_score += 1
        return outcome

    def tick(self):
        """Advance the scroll ticker; scroll the river every scroll_interval ticks."""
        if self.state is not GameState.PLAYING:
            return None
        world = self.world
        world.scroll_ticker += 1
        if world.scroll_ticker < self.config.scroll_interval:
            return None

        world.scroll_ticker = 0
        if not world.terrain.scroll(self.rng):
            return None
        logger.debug("Scrolled, score %d", world.score)
        return self.check_player()

    def resize(self, width, height):
        """Record the new playfield size; mid-ride the river is rebuilt.

        The score carries over, the scroll ticker restarts and the player is
        placed back in the river.
        """
        self.width, self.height = width, height
        if self.state is not GameState.PLAYING:
            return
        old = self.world
        self.world = World.create(width, height, self.rng)
        self.world.terrain.score = old.terrain.score
        self.world.ascent_score = old.ascent_score
        logger.info("Playfield resized to %dx%d, terrain regenerated",
                    self.world.width, self.world.height)
        self.check_placement()

    def check_placement(self):
        """Check a freshly placed player; a short playfield may start on the goal row."""
        if len(self.world.terrain) == 0:
            # Empty playfield: the ride stays frozen until a resize gives it rows
            logger.debug("Empty %dx%d playfield, player not placed",
                         self.world.width, self.world.height)
            return None
        return self.check_player()

    def check_player(self):
        """Evaluate the player's cell and switch state on a crash or a win."""
        outcome = evaluate(self.world.player, self.world.terrain,
                           self.config.goal_policy)
        next_state = OUTCOME_STATES[outcome]
        if next_state is not None:
            logger.info("%s at %s, score %d -> %s", outcome.value,
                        self.world.player.position, self.world.score,
                        next_state.value)
            self.state = next_state
        return outcome

    # -- rendering support -------------------------------------------------

    @property
    def score(self):
        return self.world.score if self.world else 0

    def snapshot(self):
        """Return a read-only Snapshot of state, terrain, player and score."""
        if self.world is None:
            return Snapshot(self.state, (), None, 0)
        return Snapshot(self.state, self.world.terrain.rows(),
                        self.world.player.position, self.world.score)
