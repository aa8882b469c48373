"""
Live cube with history of moves, the state holder of interactive front end
"""
import random
import logging
import threading

from .conf import Config
from .cubes import moves, validate, scramble as scr
from .cubes.facelets import CubeState, SOLVED
from . import pieces
from .kociemba import Solver

log = logging.getLogger("cube.session")


class CubeSession:
    def __init__(self, solver=None, config=None):
        self.config = config if config is not None else Config()
        self._solver = solver
        self._lock = threading.RLock()
        self._rng = random.Random(self.config.scramble_seed)
        self._state = SOLVED
        self._history = []
        self._scramble = []
        self._pending = None

    def __repr__(self):
        return "CubeSession(moves=%d, solved=%s)" % (len(self._history), self.is_solved())

    @property
    def solver(self):
        with self._lock:
            if self._solver is None:
                self._solver = Solver.from_config(self.config)
            return self._solver

    @property
    def state(self):
        return self._state

    @property
    def history(self):
        with self._lock:
            return list(self._history)

    @property
    def scramble_sequence(self):
        with self._lock:
            return list(self._scramble)

    @property
    def move_count(self):
        return len(self._history)

    def _supersede(self):
        # state changes make running solve request stale
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def apply_move(self, move):
        move = moves.to_move(move)
        with self._lock:
            self._state = moves.apply(self._state, move)
            self._history.append(move)
            self._supersede()
            return self._state

    def apply_sequence(self, seq):
        seq = moves.parse_sequence(seq)
        with self._lock:
            for move in seq:
                self.apply_move(move)
            return self._state

    def scramble(self, count=None, seed=None):
        """
        Replace the cube with scrambled one
        :param count: amount of moves, default from config
        :param seed: seed for reproducible scramble
        :return: list of scramble moves
        """
        if count is None:
            count = self.config.scramble_length
        rng = self._rng if seed is None else random.Random(seed)
        with self._lock:
            self._state, seq = scr.scramble(count, rng)
            self._history = list(seq)
            self._scramble = list(seq)
            self._supersede()
        log.info("Scrambled with %d moves: %s", count, moves.format_sequence(seq))
        return seq

    def reset(self):
        with self._lock:
            self._state = SOLVED
            self._history = []
            self._scramble = []
            self._supersede()

    def undo(self):
        """
        Revert last move without logging the inverse
        :return: undone Move or None if history is empty
        """
        with self._lock:
            if not self._history:
                return None
            move = self._history.pop()
            self._state = moves.apply(self._state, move.inverse())
            self._supersede()
            return move

    def load(self, state):
        """
        Make externally supplied state live, state is validated first
        """
        assert isinstance(state, CubeState)
        validate.check(state)
        with self._lock:
            self._state = state
            self._history = []
            self._scramble = []
            self._supersede()

    def is_solved(self):
        return self._state == SOLVED

    def current_pieces(self):
        return pieces.cube_pieces(self._state)

    def request_solution(self):
        """
        Submit snapshot of current state to the solver
        :return: SolveTask
        """
        with self._lock:
            self._supersede()
            task = self.solver.submit(self._state)
            self._pending = task
            return task
