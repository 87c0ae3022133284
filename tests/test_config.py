"""Tests for the YAML config overlay, palette loading and the debug log."""

import os
import tempfile
import unittest

from hexmetro.config import ConfigError, GameConfig, apply_overrides, load_config
from hexmetro.debuglog import DebugLog, from_config, null_log
from hexmetro.palette import DEFAULT_PALETTE, load_palette


class TempDirTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text):
        path = os.path.join(self.tmp, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path


# ===================================================================
# 1. CONFIG
# ===================================================================
class TestConfig(TempDirTestCase):

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg, GameConfig())
        self.assertEqual(cfg.bounds_kind, "radius")
        self.assertFalse(cfg.allow_free_start)

    def test_yaml_overlay(self):
        path = self.write("cfg.yaml", "grid_radius: 5\nhex_size: 20\nbounds_kind: rect\nseed: 7\n")
        cfg = load_config(path)
        self.assertEqual(cfg.grid_radius, 5)
        self.assertEqual(cfg.hex_size, 20.0)
        self.assertIsInstance(cfg.hex_size, float)
        self.assertEqual(cfg.bounds_kind, "rect")
        self.assertEqual(cfg.seed, 7)
        # Untouched keys keep their defaults.
        self.assertEqual(cfg.line_width, GameConfig().line_width)

    def test_empty_file_gives_defaults(self):
        self.assertEqual(load_config(self.write("empty.yaml", "")), GameConfig())

    def test_unknown_key(self):
        with self.assertRaises(ConfigError) as ctx:
            load_config(self.write("cfg.yaml", "grid_radius: 5\ngrid_raduis: 6\n"))
        self.assertIn("grid_raduis", str(ctx.exception))

    def test_bad_bounds_kind(self):
        with self.assertRaises(ConfigError):
            apply_overrides(GameConfig(), {"bounds_kind": "triangle"})

    def test_wrong_types(self):
        with self.assertRaises(ConfigError):
            apply_overrides(GameConfig(), {"grid_radius": "big"})
        with self.assertRaises(ConfigError):
            apply_overrides(GameConfig(), {"debug": "yes"})

    def test_seed_may_be_null(self):
        cfg = apply_overrides(GameConfig(), {"seed": None})
        self.assertIsNone(cfg.seed)

    def test_non_mapping(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("cfg.yaml", "- 1\n- 2\n"))

    def test_invalid_yaml_and_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("cfg.yaml", "grid_radius: [1, 2\n"))
        with self.assertRaises(ConfigError):
            load_config(os.path.join(self.tmp, "nope.yaml"))


# ===================================================================
# 2. PALETTE
# ===================================================================
class TestPalette(TempDirTestCase):

    def test_bundled_palette(self):
        palette = load_palette()
        self.assertGreaterEqual(len(palette), 7)
        self.assertLessEqual(len(palette), 9)
        for c in palette:
            self.assertEqual(len(c.rgb), 3)
            self.assertTrue(all(0 <= v <= 255 for v in c.rgb))

    def test_missing_file_falls_back(self):
        self.assertEqual(load_palette(os.path.join(self.tmp, "none.yaml")), DEFAULT_PALETTE)

    def test_bad_entries_are_skipped_and_clamped(self):
        path = self.write(
            "pal.yaml",
            "- name: hot\n  rgb: [300, -5, 10]\n"
            "- name: broken\n  rgb: [1, 2]\n"
            "- just a string\n"
            "- rgb: [1, 2, 3]\n",
        )
        palette = load_palette(path)
        self.assertEqual([c.rgb for c in palette], [(255, 0, 10), (1, 2, 3)])
        self.assertEqual(palette[0].name, "hot")
        self.assertEqual(palette[1].name, "color4")

    def test_empty_palette_falls_back(self):
        self.assertEqual(load_palette(self.write("pal.yaml", "")), DEFAULT_PALETTE)


# ===================================================================
# 3. DEBUG LOG
# ===================================================================
class TestDebugLog(TempDirTestCase):

    def test_appends_timestamped_lines(self):
        path = os.path.join(self.tmp, "debug.log")
        log = DebugLog(path)
        log.reset()
        log("first")
        log("second")
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("["))
        self.assertTrue(lines[0].endswith("] first"))
        log.reset()
        with open(path, encoding="utf-8") as f:
            self.assertEqual(f.read(), "")

    def test_disabled_writes_nothing(self):
        path = os.path.join(self.tmp, "debug.log")
        log = DebugLog(path, enabled=False)
        log.reset()
        log("hello")
        self.assertFalse(os.path.exists(path))

    def test_null_log_is_disabled(self):
        log = null_log()
        self.assertFalse(log.enabled)
        log("ignored")

    def test_from_config(self):
        path = os.path.join(self.tmp, "cfg.log")
        log = from_config(GameConfig(debug=False, debug_log_path=path))
        self.assertFalse(log.enabled)
        self.assertEqual(str(log.path), path)


if __name__ == "__main__":
    unittest.main()
