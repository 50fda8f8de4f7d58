"""
Endless River configuration -- tunable constants and game settings.

Keep the knobs here so tuning the ride doesn't mean hunting through the
game logic. Settings may also come from an optional JSON file under
~/.shelly-ops/ and from the command line; the file is only ever read.
"""

import enum
import json
import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SCROLL_INTERVAL = 5       # timer ticks per terrain scroll
TICK_MS = 200             # timer period in milliseconds
MIN_TICK_MS = 10

STATUS_ROWS = 2           # terminal rows reserved below the playfield
MIN_WIDTH = 40
MIN_HEIGHT = 12

SETTINGS_DIR = os.path.expanduser("~/.shelly-ops")
SETTINGS_FILE = os.path.join(SETTINGS_DIR, "river-ride.json")


class GoalPolicy(enum.Enum):
    """Whether reaching the top row ends the ride in a win."""

    NONE = "none"
    REACH_TOP = "reach-top"


@dataclass(frozen=True)
class GameConfig:
    scroll_interval: int = SCROLL_INTERVAL
    goal_policy: GoalPolicy = GoalPolicy.NONE
    tick_ms: int = TICK_MS
    seed: Optional[int] = None
    score_on_ascent: bool = False

    def validated(self):
        """Return a copy with out-of-range values pulled back into range."""
        return replace(
            self,
            scroll_interval=max(1, int(self.scroll_interval)),
            tick_ms=max(MIN_TICK_MS, int(self.tick_ms)),
        )


def parse_goal_policy(value, default=GoalPolicy.NONE):
    """Map a settings/CLI string onto a GoalPolicy, falling back to default."""
    if isinstance(value, GoalPolicy):
        return value
    for policy in GoalPolicy:
        if policy.value == str(value).strip().lower():
            return policy
    logger.debug("Unknown goal policy %r, using %s", value, default.value)
    return default


def load_settings(path=SETTINGS_FILE):
    """Load settings overrides from a JSON file.

    Returns a dict of GameConfig field values. A missing or corrupt file
    yields an empty dict; unknown keys and badly typed values are dropped.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}

    settings = {}
    for key in ("scroll_interval", "tick_ms", "seed"):
        if key in data:
            try:
                settings[key] = int(data[key])
            except (TypeError, ValueError):
                logger.debug("Ignoring bad %s in %s: %r", key, path, data[key])
    if "goal_policy" in data:
        settings["goal_policy"] = parse_goal_policy(data["goal_policy"])
    if "score_on_ascent" in data:
        if isinstance(data["score_on_ascent"], bool):
            settings["score_on_ascent"] = data["score_on_ascent"]
        else:
            logger.debug("Ignoring bad score_on_ascent in %s: %r",
                         path, data["score_on_ascent"])
    return settings


def build_config(settings=None, **overrides):
    """Combine defaults, file settings and CLI overrides (None = not given)."""
    values = dict(settings or {})
    values.update({k: v for k, v in overrides.items() if v is not None})
    return GameConfig(**values).validated()
