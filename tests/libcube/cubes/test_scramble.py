import random
import inspect
import unittest

from libcube import cubes
from libcube.cubes import scramble, facelets, moves, validate


class Scramble(unittest.TestCase):
    def test_zero(self):
        self.assertEqual(scramble.scramble(0), (facelets.SOLVED, []))

    def test_negative(self):
        with self.assertRaises(ValueError):
            scramble.scramble(-1)

    def test_no_face_repeats(self):
        state, seq = scramble.scramble(200, random.Random(3))
        self.assertEqual(len(seq), 200)
        for prev, cur in zip(seq, seq[1:]):
            self.assertNotEqual(prev.face, cur.face)
        self.assertEqual(moves.apply_sequence(facelets.SOLVED, seq), state)
        self.assertTrue(validate.is_valid(state))

    def test_reproducible(self):
        a = scramble.scramble(25, random.Random(42))
        b = scramble.scramble(25, random.Random(42))
        self.assertEqual(a, b)

    def test_start(self):
        start = moves.apply(facelets.SOLVED, "R")
        state, seq = scramble.scramble(5, random.Random(1), start=start)
        self.assertEqual(moves.apply_sequence(start, seq), state)

    def test_states(self):
        res = scramble.scramble_states(10, random.Random(5))
        self.assertEqual([d for d, _ in res], list(range(1, 11)))
        self.assertEqual(res[0][1], moves.apply(facelets.SOLVED, scramble.scramble(1, random.Random(5))[1][0]))

    def test_random_state(self):
        s = scramble.random_state(rng=random.Random(7))
        self.assertTrue(validate.is_valid(s))
        self.assertNotEqual(s, facelets.SOLVED)


class Package(unittest.TestCase):
    def test_submodules_reachable(self):
        # package level helpers must not hide modules of the same name
        self.assertTrue(inspect.ismodule(cubes.scramble))
        self.assertTrue(inspect.ismodule(cubes.validate))
        state, seq = cubes.scramble.scramble(5, random.Random(3))
        self.assertEqual(len(seq), 5)
        self.assertEqual(cubes.validate.validate(state), [])
        self.assertTrue(cubes.is_valid(state))
