import time
import random
import threading
import unittest

from libcube import conf
from libcube.cubes import facelets, moves, scramble, cubies
from libcube.errors import Unsolvable, CancelledSearch, Check
from libcube.kociemba import search, solution


class Solving(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.solver = search.Solver()

    @classmethod
    def tearDownClass(cls):
        cls.solver.shutdown()

    def assertSolves(self, state, sol):
        self.assertEqual(moves.apply_sequence(state, sol.moves), facelets.SOLVED)
        self.assertLessEqual(len(sol), 30)
        self.assertEqual(sol.phase1_moves + sol.phase2_moves, sol.total_moves)

    def test_solved(self):
        sol = self.solver.solve(facelets.SOLVED)
        self.assertEqual(len(sol), 0)
        self.assertEqual(sol.moves, [])
        self.assertEqual(sol.difficulty, solution.EASY)

    def test_single_move(self):
        for token in ("R", "U2", "F'"):
            state = moves.apply(facelets.SOLVED, token)
            sol = self.solver.solve(state)
            self.assertSolves(state, sol)
            self.assertEqual(len(sol), 1)

    def test_sexy_move(self):
        state = moves.apply_sequence(facelets.SOLVED, "R U R' U'")
        sol = self.solver.solve(state)
        self.assertSolves(state, sol)

    def test_random_scrambles(self):
        rng = random.Random(20)
        for _ in range(3):
            state, _ = scramble.scramble(20, rng)
            sol = self.solver.solve(state)
            self.assertSolves(state, sol)
            self.assertGreaterEqual(sol.solution_time, 0.0)

    def test_deterministic(self):
        state, _ = scramble.scramble(12, random.Random(9))
        self.assertEqual(self.solver.solve(state).notation(), self.solver.solve(state).notation())

    def test_phases(self):
        state = moves.apply_sequence(facelets.SOLVED, "F R U2 D L'")
        sol = self.solver.solve(state)
        self.assertSolves(state, sol)
        phase2 = [s.move for s in sol if s.phase == solution.PHASE2]
        for m in phase2:
            self.assertTrue(m.face in (facelets.Face.U, facelets.Face.D) or m.turn == moves.Turn.DOUBLE)

    def test_invalid_state(self):
        f = list(facelets.SOLVED.facelets)
        a, b = cubies.side_maps[1]
        f[a], f[b] = f[b], f[a]
        with self.assertRaises(Unsolvable) as ctx:
            self.solver.solve(facelets.CubeState(f))
        self.assertEqual([v.check for v in ctx.exception.violations], [Check.PARITY])

    def test_cancel_before_start(self):
        event = threading.Event()
        event.set()
        state = moves.apply_sequence(facelets.SOLVED, "R U")
        with self.assertRaises(CancelledSearch):
            self.solver.solve(state, cancel_event=event)

    def test_submit(self):
        state, _ = scramble.scramble(15, random.Random(11))
        task = self.solver.submit(state)
        sol = task.result(timeout=600)
        self.assertTrue(task.done())
        self.assertFalse(task.cancelled())
        self.assertSolves(state, sol)

    def test_submit_cancel(self):
        state, _ = scramble.scramble(20, random.Random(12))
        solver = search.Solver()
        try:
            # first task occupies the only worker, so the second one never starts
            first = solver.submit(state)
            second = solver.submit(state)
            second.cancel()
            self.assertTrue(second.cancelled())
            with self.assertRaises(CancelledSearch):
                second.result(timeout=600)
            first.result(timeout=600)
        finally:
            solver.shutdown()

    def test_cancel_running(self):
        state, _ = scramble.scramble(20, random.Random(13))
        # too short bound keeps the search busy until it is cancelled
        solver = search.Solver(max_length=14)
        self.assertIsNotNone(solver.tables)
        try:
            task = solver.submit(state)
            time.sleep(0.2)
            self.assertFalse(task.done())
            task.cancel()
            with self.assertRaises(CancelledSearch):
                task.result(timeout=60)
        finally:
            solver.shutdown()

    def test_cancel_event_from_thread(self):
        state, _ = scramble.scramble(20, random.Random(14))
        solver = search.Solver(max_length=14)
        event = threading.Event()
        timer = threading.Timer(0.2, event.set)
        timer.start()
        try:
            with self.assertRaises(CancelledSearch):
                solver.solve(state, cancel_event=event)
        finally:
            timer.cancel()

    def test_timeout(self):
        state, _ = scramble.scramble(20, random.Random(15))
        solver = search.Solver(max_length=14, timeout=1e-6)
        with self.assertRaises(Unsolvable) as ctx:
            solver.solve(state)
        self.assertEqual(ctx.exception.violations, [])

    def test_module_solve(self):
        state = moves.apply(facelets.SOLVED, "B'")
        self.assertEqual(search.solve(state).notation(), "B")

    def test_from_config(self):
        s = search.Solver.from_config(conf.Config())
        self.assertEqual(s.max_length, 30)
        self.assertEqual(s.phase1_depth, 12)
        self.assertIsNone(s.timeout)


class SolutionModel(unittest.TestCase):
    def test_difficulty(self):
        self.assertEqual(solution.difficulty_level(0), solution.EASY)
        self.assertEqual(solution.difficulty_level(20), solution.EASY)
        self.assertEqual(solution.difficulty_level(21), solution.MEDIUM)
        self.assertEqual(solution.difficulty_level(30), solution.MEDIUM)
        self.assertEqual(solution.difficulty_level(31), solution.HARD)

    def test_steps(self):
        sol = solution.Solution.from_phases(moves.parse_sequence("R F"), moves.parse_sequence("U2"),
                                            solution_time=0.5)
        self.assertEqual(sol.notation(), "R F U2")
        self.assertEqual(sol.phase1_moves, 2)
        self.assertEqual(sol.phase2_moves, 1)
        self.assertEqual(sol.estimated_time, 34.5)
        self.assertEqual(sol.steps[0].description, "Right face 90 degrees clockwise")
        self.assertEqual(sol.steps[2].description, "Up face 180 degrees")
        d = sol.to_dict()
        self.assertEqual([s['move'] for s in d['steps']], ["R", "F", "U2"])
        self.assertEqual(d['difficulty'], solution.EASY)
        self.assertEqual(d['solution_time'], 0.5)

    def test_merge_boundary(self):
        p1, p2 = search.merge_boundary(moves.parse_sequence("F R"), moves.parse_sequence("R2 U"))
        self.assertEqual(moves.format_sequence(p1), "F R'")
        self.assertEqual(moves.format_sequence(p2), "U")
        p1, p2 = search.merge_boundary(moves.parse_sequence("U2"), moves.parse_sequence("U2 D"))
        self.assertEqual(p1, [])
        self.assertEqual(moves.format_sequence(p2), "D")
