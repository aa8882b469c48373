"""
Two-phase search: IDA* into subgroup <U, D, L2, R2, F2, B2>, then IDA* inside the subgroup to solved state
"""
import time
import logging
import concurrent.futures

from ..errors import InvalidState, Unsolvable, CancelledSearch
from ..cubes import moves, validate
from ..cubes.facelets import CubeState, SOLVED
from ..cubes.cubies import CubieCube, MOVE_CUBES
from . import coords
from . import tables
from .solution import Solution
from .task import SolveTask

log = logging.getLogger("cube.solver")

# nodes visited between checks of cancellation and time limit
POLL_INTERVAL = 1024

_PHASE2_SET = frozenset(coords.PHASE2_MOVES)


def _skip_face(face, last_face):
    # same face twice, or opposite faces in non-canonical order
    return last_face >= 0 and (face == last_face or face == last_face - 3)


def merge_boundary(phase1, phase2):
    """
    Join turns of the same face met at the border of phases, like R followed by R2
    :param phase1: list of Move
    :param phase2: list of Move
    :return: tuple of new lists
    """
    phase1, phase2 = list(phase1), list(phase2)
    while phase1 and phase2 and phase1[-1].face == phase2[0].face:
        face = phase1[-1].face
        turns = (phase1.pop().turn.value + phase2.pop(0).turn.value) % 4
        if turns:
            phase1.append(moves.Move(face, moves.Turn(turns)))
    return phase1, phase2


class TwoPhaseSearch:
    """
    State of single search run
    """
    def __init__(self, tbl, cube, max_length=30, phase1_depth=12, phase2_depth=18,
                 cancel_event=None, deadline=None):
        assert isinstance(tbl, tables.Tables)
        assert isinstance(cube, CubieCube)

        self.tbl = tbl
        self.cube = cube
        self.max_length = max_length
        self.phase1_depth = phase1_depth
        self.phase2_depth = phase2_depth
        self.cancel_event = cancel_event
        self.deadline = deadline

        self.path1 = []
        self.path2 = []
        self.nodes = 0
        self.phase2_runs = 0

    def __repr__(self):
        return "TwoPhaseSearch(nodes=%d, phase2_runs=%d)" % (self.nodes, self.phase2_runs)

    def _poll(self):
        self.nodes += 1
        if self.nodes % POLL_INTERVAL:
            return
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CancelledSearch("Search cancelled after %d nodes" % self.nodes)
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise Unsolvable("Search time limit exceeded after %d nodes" % self.nodes)

    def search(self):
        """
        Find solution
        :return: tuple of two lists of move indices (phase1, phase2) or None if bounds are exhausted
        """
        twist, flip, slc = coords.phase1_coords(self.cube)
        h = self.tbl.phase1_h(twist, flip, slc)
        for depth in range(h, min(self.phase1_depth, self.max_length) + 1):
            log.debug("Phase 1 depth %d, %d nodes so far", depth, self.nodes)
            if self._phase1(twist, flip, slc, depth, -1):
                return list(self.path1), list(self.path2)
        return None

    def _phase1(self, twist, flip, slc, togo, last_face):
        self._poll()
        if togo == 0:
            if twist == 0 and flip == 0 and slc == coords.SOLVED_SLICE:
                # ending with subgroup move means the same endpoint was reached by shorter path
                if not self.path1 or self.path1[-1] not in _PHASE2_SET:
                    return self._start_phase2()
            return False
        t = self.tbl
        for m in range(coords.N_MOVES):
            face = m // 3
            if _skip_face(face, last_face):
                continue
            n_twist = t.twist_move[twist][m]
            n_flip = t.flip_move[flip][m]
            n_slc = t.slice_move[slc][m]
            if t.phase1_h(n_twist, n_flip, n_slc) >= togo:
                continue
            self.path1.append(m)
            if self._phase1(n_twist, n_flip, n_slc, togo - 1, face):
                return True
            self.path1.pop()
        return False

    def _start_phase2(self):
        self.phase2_runs += 1
        cube = self.cube
        for m in self.path1:
            cube = cube.multiply(MOVE_CUBES[m])
        corner, edge, slc_perm = coords.phase2_coords(cube)
        limit = min(self.phase2_depth, self.max_length - len(self.path1))
        h = self.tbl.phase2_h(corner, edge, slc_perm)
        for depth in range(h, limit + 1):
            if self._phase2(corner, edge, slc_perm, depth, -1):
                return True
        return False

    def _phase2(self, corner, edge, slc_perm, togo, last_face):
        self._poll()
        if togo == 0:
            return corner == 0 and edge == 0 and slc_perm == 0
        t = self.tbl
        for k, m in enumerate(coords.PHASE2_MOVES):
            face = m // 3
            if _skip_face(face, last_face):
                continue
            n_corner = t.corner_move[corner][k]
            n_edge = t.ud_edge_move[edge][k]
            n_slc_perm = t.slice_perm_move[slc_perm][k]
            if t.phase2_h(n_corner, n_edge, n_slc_perm) >= togo:
                continue
            self.path2.append(m)
            if self._phase2(n_corner, n_edge, n_slc_perm, togo - 1, face):
                return True
            self.path2.pop()
        return False


class Solver:
    def __init__(self, max_length=30, phase1_depth=12, phase2_depth=18, timeout=None,
                 tables_cache=None, workers=1):
        self.max_length = max_length
        self.phase1_depth = phase1_depth
        self.phase2_depth = phase2_depth
        self.timeout = timeout
        self.tables_cache = tables_cache
        self.workers = workers
        self._executor = None

    def __repr__(self):
        return "Solver(max_length=%d, phase1_depth=%d, phase2_depth=%d, timeout=%s)" % (
            self.max_length, self.phase1_depth, self.phase2_depth, self.timeout)

    @classmethod
    def from_config(cls, config):
        return cls(max_length=config.solver_max_length, phase1_depth=config.solver_phase1_depth,
                   phase2_depth=config.solver_phase2_depth, timeout=config.solver_timeout,
                   tables_cache=config.tables_cache, workers=config.solver_workers)

    @property
    def tables(self):
        return tables.load(self.tables_cache)

    def solve(self, state, cancel_event=None):
        """
        Find sequence of moves bringing the state to solved
        :param state: CubeState
        :param cancel_event: optional threading.Event, search stops with CancelledSearch once it is set
        :return: Solution
        """
        assert isinstance(state, CubeState)
        violations = validate.validate(state)
        if violations:
            err = InvalidState(violations)
            log.warning("Refusing to solve invalid state: %s", err)
            raise Unsolvable("Cube state can't be solved: %s" % err, violations) from err
        if state == SOLVED:
            return Solution([])
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledSearch("Search cancelled before start")

        tbl = self.tables
        ts = time.time()
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        search = TwoPhaseSearch(tbl, CubieCube.from_state(state), max_length=self.max_length,
                                phase1_depth=self.phase1_depth, phase2_depth=self.phase2_depth,
                                cancel_event=cancel_event, deadline=deadline)
        try:
            res = search.search()
        except Unsolvable as e:
            log.error("Search of %s failed: %s", state.to_string(), e)
            raise
        if res is None:
            log.error("No solution within %d moves for %s, %s", self.max_length, state.to_string(), search)
            raise Unsolvable("No solution found within %d moves" % self.max_length)

        phase1, phase2 = merge_boundary([moves.MOVES[m] for m in res[0]], [moves.MOVES[m] for m in res[1]])
        solution = Solution.from_phases(phase1, phase2, solution_time=time.time() - ts)
        log.info("Solved in %d + %d = %d moves, %.3f sec, %s", len(phase1), len(phase2), len(solution),
                 solution.solution_time, search)
        return solution

    def submit(self, state):
        """
        Start solving in background
        :return: SolveTask
        """
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.workers,
                                                                   thread_name_prefix="cube-solver")
        return SolveTask(self, state, self._executor)

    def shutdown(self, wait=True):
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None


_default_solver = None


def default_solver():
    global _default_solver
    if _default_solver is None:
        _default_solver = Solver()
    return _default_solver


def solve(state, cancel_event=None):
    return default_solver().solve(state, cancel_event=cancel_event)
