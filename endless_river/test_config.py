#!/usr/bin/env python3
"""
Test suite for config.py -- settings for Endless River.
"""

import json
import os
import shutil
import tempfile
import unittest

from endless_river import config
from endless_river.config import GameConfig, GoalPolicy


class TestGameConfig(unittest.TestCase):
    """Tests defaults and validation."""

    def test_defaults(self):
        cfg = GameConfig()
        self.assertEqual(cfg.scroll_interval, 5)
        self.assertEqual(cfg.tick_ms, 200)
        self.assertIs(cfg.goal_policy, GoalPolicy.NONE)
        self.assertIsNone(cfg.seed)
        self.assertFalse(cfg.score_on_ascent)

    def test_validated_clamps(self):
        cfg = GameConfig(scroll_interval=0, tick_ms=1).validated()
        self.assertEqual(cfg.scroll_interval, 1)
        self.assertEqual(cfg.tick_ms, config.MIN_TICK_MS)

    def test_validated_keeps_good_values(self):
        cfg = GameConfig(scroll_interval=3, tick_ms=150).validated()
        self.assertEqual((cfg.scroll_interval, cfg.tick_ms), (3, 150))

    def test_parse_goal_policy(self):
        self.assertIs(config.parse_goal_policy("reach-top"), GoalPolicy.REACH_TOP)
        self.assertIs(config.parse_goal_policy(" NONE "), GoalPolicy.NONE)
        self.assertIs(config.parse_goal_policy(GoalPolicy.REACH_TOP),
                      GoalPolicy.REACH_TOP)
        self.assertIs(config.parse_goal_policy("sideways"), GoalPolicy.NONE)


class TestLoadSettings(unittest.TestCase):
    """Tests reading the JSON settings file."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "river-ride.json")

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file(self):
        self.assertEqual(config.load_settings(self.path), {})

    def test_corrupt_file(self):
        self.write("{not json")
        self.assertEqual(config.load_settings(self.path), {})

    def test_non_object(self):
        self.write("[1, 2, 3]")
        self.assertEqual(config.load_settings(self.path), {})

    def test_valid_settings(self):
        self.write(json.dumps({
            "scroll_interval": 3,
            "tick_ms": "120",
            "goal_policy": "reach-top",
            "score_on_ascent": True,
            "seed": 7,
            "colour": "blue",
        }))
        self.assertEqual(config.load_settings(self.path), {
            "scroll_interval": 3,
            "tick_ms": 120,
            "goal_policy": GoalPolicy.REACH_TOP,
            "score_on_ascent": True,
            "seed": 7,
        })

    def test_bad_values_dropped(self):
        self.write(json.dumps({"scroll_interval": "fast", "tick_ms": None}))
        self.assertEqual(config.load_settings(self.path), {})

    def test_score_on_ascent_needs_json_bool(self):
        """Strings like "false" are not read as true."""
        for value in ("false", "true", 1, None):
            self.write(json.dumps({"score_on_ascent": value}))
            self.assertEqual(config.load_settings(self.path), {}, repr(value))
        self.write(json.dumps({"score_on_ascent": False}))
        self.assertEqual(config.load_settings(self.path),
                         {"score_on_ascent": False})


class TestBuildConfig(unittest.TestCase):
    """Tests merging file settings with command-line overrides."""

    def test_overrides_win(self):
        cfg = config.build_config({"scroll_interval": 3, "seed": 1},
                                  scroll_interval=8, seed=None)
        self.assertEqual(cfg.scroll_interval, 8)
        self.assertEqual(cfg.seed, 1)

    def test_result_is_validated(self):
        cfg = config.build_config({}, scroll_interval=-4)
        self.assertEqual(cfg.scroll_interval, 1)

    def test_no_settings(self):
        self.assertEqual(config.build_config(), GameConfig())


if __name__ == "__main__":
    unittest.main()
