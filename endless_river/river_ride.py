#!/usr/bin/env python3
"""
Endless River Ride -- Terminal river-rafting game using Python curses.
Keep your boat in the winding river while the banks scroll past.
Arrow keys or h/j/k/l to steer, S to start, R to restart, Q to quit.
"""

import argparse
import curses
import logging
import time

from endless_river.config import (
    MIN_HEIGHT,
    MIN_WIDTH,
    SETTINGS_FILE,
    STATUS_ROWS,
    GoalPolicy,
    build_config,
    load_settings,
    parse_goal_policy,
)
from endless_river.game_state import Command, GameState, GameStateMachine, Resize
from endless_river.terrain import Cell

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GLYPH_LAND = "."
GLYPH_RIVER = " "
GLYPH_PLAYER = "P"

# Color pair IDs
COLOR_LAND = 1
COLOR_PLAYER = 2
COLOR_HUD = 3
COLOR_TITLE = 4
COLOR_GAMEOVER = 5
COLOR_WIN = 6

CTRL_C = 3

KEY_COMMANDS = {
    ord('q'): Command.QUIT, ord('Q'): Command.QUIT, CTRL_C: Command.QUIT,
    ord('s'): Command.START, ord('S'): Command.START,
    ord('r'): Command.RESTART, ord('R'): Command.RESTART,
    curses.KEY_UP: Command.MOVE_UP, ord('k'): Command.MOVE_UP,
    curses.KEY_DOWN: Command.MOVE_DOWN, ord('j'): Command.MOVE_DOWN,
    curses.KEY_LEFT: Command.MOVE_LEFT, ord('h'): Command.MOVE_LEFT,
    curses.KEY_RIGHT: Command.MOVE_RIGHT, ord('l'): Command.MOVE_RIGHT,
}

TITLE_ART = [
    "~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~",
    "   E N D L E S S    R I V E R    R I D E",
    "~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~",
]


# ---------------------------------------------------------------------------
# Input / layout helpers
# ---------------------------------------------------------------------------

def translate_key(key):
    """Map a curses key code to a Command (None for unbound keys)."""
    return KEY_COMMANDS.get(key)


def playfield_size(max_y, max_x):
    """Return the (width, height) of the terrain area above the status rows.

    The last column is left free since curses cannot draw in it reliably.
    """
    return max(0, max_x - 1), max(0, max_y - STATUS_ROWS)


def terminal_too_small(max_y, max_x):
    return max_y < MIN_HEIGHT or max_x < MIN_WIDTH


# ---------------------------------------------------------------------------
# Safe draw helper
# ---------------------------------------------------------------------------

def safe_addstr(stdscr, y, x, text, attr=0):
    """Write text to screen, silently ignoring out-of-bounds errors."""
    try:
        max_y, max_x = stdscr.getmaxyx()
        if 0 <= y < max_y and 0 <= x < max_x:
            # Truncate text if it would go off-screen
            available = max_x - x - 1
            if available > 0:
                stdscr.addstr(y, x, text[:available], attr)
    except curses.error:
        pass


def draw_centered(stdscr, y, max_x, text, attr=0):
    safe_addstr(stdscr, y, max(0, max_x // 2 - len(text) // 2), text, attr)


# ---------------------------------------------------------------------------
# Draw functions
# ---------------------------------------------------------------------------

def init_colors():
    """Initialize curses color pairs for terrain, player and screens."""
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(COLOR_LAND, curses.COLOR_GREEN, -1)
    curses.init_pair(COLOR_PLAYER, curses.COLOR_YELLOW, -1)
    curses.init_pair(COLOR_HUD, curses.COLOR_WHITE, -1)
    curses.init_pair(COLOR_TITLE, curses.COLOR_MAGENTA, -1)
    curses.init_pair(COLOR_GAMEOVER, curses.COLOR_RED, -1)
    curses.init_pair(COLOR_WIN, curses.COLOR_CYAN, -1)


def row_text(row):
    """Render one terrain row as a string of glyphs."""
    return "".join(GLYPH_LAND if cell is Cell.LAND else GLYPH_RIVER
                   for cell in row)


def draw_title_screen(stdscr, max_y, max_x, goal_policy):
    """Draw the title art, the goal and the controls."""
    color_title = curses.color_pair(COLOR_TITLE) | curses.A_BOLD
    color_text = curses.color_pair(COLOR_HUD)

    start_y = max_y // 2 - 6
    for i, line in enumerate(TITLE_ART):
        draw_centered(stdscr, start_y + i, max_x, line, color_title)

    if goal_policy is GoalPolicy.REACH_TOP:
        goal = "Paddle up to the top of the river to win!"
    else:
        goal = "Stay in the river as long as you can!"
    draw_centered(stdscr, start_y + len(TITLE_ART) + 1, max_x, goal, color_text)

    if terminal_too_small(max_y, max_x):
        draw_centered(stdscr, start_y + len(TITLE_ART) + 3, max_x,
                      f"Terminal too small! Need {MIN_WIDTH}x{MIN_HEIGHT}, "
                      f"got {max_x}x{max_y}",
                      curses.color_pair(COLOR_GAMEOVER) | curses.A_BOLD)
    else:
        draw_centered(stdscr, start_y + len(TITLE_ART) + 3, max_x,
                      "Press 's' to start the game", color_text | curses.A_BOLD)

    safe_addstr(stdscr, max_y - 1, 0, "Press q to quit", color_text)


def draw_playfield(stdscr, snapshot):
    """Draw the terrain rows and the player's boat."""
    color_land = curses.color_pair(COLOR_LAND)
    for y, row in enumerate(snapshot.terrain):
        safe_addstr(stdscr, y, 0, row_text(row), color_land)

    if snapshot.player is not None:
        px, py = snapshot.player
        safe_addstr(stdscr, py, px, GLYPH_PLAYER,
                    curses.color_pair(COLOR_PLAYER) | curses.A_BOLD)


def draw_status(stdscr, snapshot, max_y):
    """Draw the score line below the playfield."""
    status = (f"Score: {snapshot.score} | Navigate through the river! "
              f"Use arrow keys to move. Avoid land ({GLYPH_LAND}) | "
              f"Press q to quit")
    safe_addstr(stdscr, max_y - 1, 0, status,
                curses.color_pair(COLOR_HUD) | curses.A_BOLD)


def draw_end_screen(stdscr, snapshot, max_y, max_x):
    """Draw the game over or win box with the final score."""
    if snapshot.state is GameState.WIN:
        title = "YOU MADE IT!"
        color = curses.color_pair(COLOR_WIN) | curses.A_BOLD
    else:
        title = "GAME OVER"
        color = curses.color_pair(COLOR_GAMEOVER) | curses.A_BOLD

    lines = [
        "╔" + "═" * 30 + "╗",
        "║" + f"{title:^30}" + "║",
        "║" + f"  Final Score: {snapshot.score:<15}" + "║",
        "║" + " " * 30 + "║",
        "║" + "  Press 'r' to restart        " + "║",
        "║" + "  Press 'q' to quit           " + "║",
        "╚" + "═" * 30 + "╝",
    ]
    start_y = max_y // 2 - len(lines) // 2
    for i, line in enumerate(lines):
        draw_centered(stdscr, start_y + i, max_x, line, color)


def draw(stdscr, machine):
    """Redraw the whole screen for the machine's current state."""
    max_y, max_x = stdscr.getmaxyx()
    snapshot = machine.snapshot()
    stdscr.erase()
    if snapshot.state is GameState.TITLE:
        draw_title_screen(stdscr, max_y, max_x, machine.config.goal_policy)
    elif snapshot.state is GameState.PLAYING:
        draw_playfield(stdscr, snapshot)
        draw_status(stdscr, snapshot, max_y)
    elif snapshot.state in (GameState.GAME_OVER, GameState.WIN):
        draw_end_screen(stdscr, snapshot, max_y, max_x)
    stdscr.refresh()


# ---------------------------------------------------------------------------
# Main game
# ---------------------------------------------------------------------------

def main(stdscr, config):
    """Main game loop -- called by curses.wrapper()."""
    curses.curs_set(0)
    stdscr.keypad(True)
    init_colors()

    max_y, max_x = stdscr.getmaxyx()
    machine = GameStateMachine(*playfield_size(max_y, max_x), config=config)

    tick_delay = machine.config.tick_ms / 1000.0
    next_tick = time.monotonic() + tick_delay
    draw(stdscr, machine)

    while machine.state is not GameState.QUIT:
        # Block for input until the next timer tick is due
        wait_ms = max(0, int((next_tick - time.monotonic()) * 1000))
        stdscr.timeout(wait_ms)
        key = stdscr.getch()

        if key == curses.KEY_RESIZE:
            max_y, max_x = stdscr.getmaxyx()
            machine.handle(Resize(*playfield_size(max_y, max_x)))
        elif key != -1:
            command = translate_key(key)
            if command in (Command.START, Command.RESTART) and \
                    terminal_too_small(*stdscr.getmaxyx()):
                command = None
            if command is not None:
                machine.handle(command)

        now = time.monotonic()
        if now >= next_tick:
            machine.handle(Command.TICK)
            next_tick = now + tick_delay

        draw(stdscr, machine)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Endless River Ride -- keep your boat in the river")
    parser.add_argument("--goal", choices=[p.value for p in GoalPolicy],
                        default=None,
                        help="'reach-top' wins at the top row, 'none' rides until you crash")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the terrain generator")
    parser.add_argument("--scroll-interval", type=int, default=None,
                        dest="scroll_interval",
                        help="Timer ticks between terrain scrolls")
    parser.add_argument("--tick-ms", type=int, default=None, dest="tick_ms",
                        help="Timer tick period in milliseconds")
    parser.add_argument("--score-on-ascent", action="store_true", default=None,
                        dest="score_on_ascent",
                        help="Score a point for every move up the river")
    parser.add_argument("--settings", default=SETTINGS_FILE,
                        help="JSON settings file to read")
    parser.add_argument("--log-file", default=None, dest="log_file",
                        help="Write a debug log to this file")
    return parser.parse_args(argv)


def config_from_args(args):
    """Build a GameConfig from the settings file overlaid with CLI flags."""
    goal = parse_goal_policy(args.goal) if args.goal is not None else None
    return build_config(
        load_settings(args.settings),
        goal_policy=goal,
        seed=args.seed,
        scroll_interval=args.scroll_interval,
        tick_ms=args.tick_ms,
        score_on_ascent=args.score_on_ascent,
    )


def run(argv=None):
    args = parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file, level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = config_from_args(args)
    logger.info("Starting with %s", config)
    try:
        curses.wrapper(main, config)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
