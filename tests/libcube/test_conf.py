import os
import tempfile
import unittest

from libcube import conf


class ConfigTests(unittest.TestCase):
    def test_defaults(self):
        c = conf.Config()
        self.assertEqual(c.solver_max_length, 30)
        self.assertEqual(c.solver_phase1_depth, 12)
        self.assertEqual(c.solver_phase2_depth, 18)
        self.assertIsNone(c.solver_timeout)
        self.assertEqual(c.solver_workers, 1)
        self.assertIsNone(c.tables_cache)
        self.assertEqual(c.scramble_length, 25)
        self.assertIsNone(c.scramble_seed)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            conf.Config("/nonexistent/cube.ini")

    def test_read(self):
        with tempfile.TemporaryDirectory() as tmp:
            name = os.path.join(tmp, "cube.ini")
            with open(name, "wt", encoding='utf-8') as fd:
                fd.write("[solver]\nmax_length=25\ntimeout=2.5\n[scramble]\nseed=7\n[tables]\ncache=none\n")
            c = conf.Config(name)
            self.assertEqual(c.solver_max_length, 25)
            self.assertEqual(c.solver_timeout, 2.5)
            self.assertEqual(c.scramble_seed, 7)
            self.assertIsNone(c.tables_cache)
            self.assertEqual(c.scramble_length, 25)

    def test_default_ini(self):
        name = os.path.join(os.path.dirname(__file__), "..", "..", "ini", "default.ini")
        c = conf.Config(name)
        self.assertEqual(c.tables_cache, "tables.npz")
        self.assertIsNone(c.solver_timeout)
