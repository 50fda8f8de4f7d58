"""
Scrolling terrain buffer for Endless River.

The ScrollBuffer owns the live terrain rows. Each scroll drops the top row,
lets everything below move up one line, and appends a freshly generated row
at the bottom, so the river appears to flow forever. Rows live in a deque,
which makes the shift a constant-time popleft/append.
"""

import logging
from collections import deque

from endless_river.terrain import generate_initial, generate_row

logger = logging.getLogger(__name__)


class ScrollBuffer:
    """The visible terrain grid plus the score earned by scrolling it."""

    def __init__(self, rows=(), width=None):
        self._rows = deque(list(row) for row in rows)
        if width is None:
            width = len(self._rows[0]) if self._rows else 0
        self.width = width
        self.score = 0

    @classmethod
    def generate(cls, width, height, rng):
        """Create a buffer holding a brand new river for a width x height field."""
        return cls(generate_initial(width, height, rng), width=max(0, width))

    def __len__(self):
        return len(self._rows)

    def __getitem__(self, y):
        return self._rows[y]

    def __iter__(self):
        return iter(self._rows)

    def rows(self):
        """Return a read-only snapshot of the grid as a tuple of tuples."""
        return tuple(tuple(row) for row in self._rows)

    def scroll(self, rng):
        """Shift every row up by one and generate a new bottom row.

        The new row is grown from the top row left after the shift. Adds one
        point to the score. Returns False (and changes nothing) when the
        buffer holds one row or fewer.
        """
        if len(self._rows) <= 1:
            logger.debug("Scroll skipped, buffer has %d row(s)", len(self._rows))
            return False

        self._rows.popleft()
        self._rows.append(generate_row(self.width, self._rows[0], rng))
        self.score += 1
        return True
