"""
Solve request running in background on immutable snapshot of cube state
"""
import logging
import threading
import concurrent.futures

from ..errors import CancelledSearch
from ..cubes.facelets import CubeState

log = logging.getLogger("cube.task")


class SolveTask:
    def __init__(self, solver, state, executor):
        assert isinstance(state, CubeState)
        self.state = state
        self._cancel = threading.Event()
        self._future = executor.submit(solver.solve, state, cancel_event=self._cancel)

    def __repr__(self):
        return "SolveTask(state=%r, done=%s, cancelled=%s)" % (self.state, self.done(), self.cancelled())

    def cancel(self):
        """
        Ask the search to stop. Result of cancelled task raises CancelledSearch
        """
        if not self._cancel.is_set():
            log.debug("Cancelling solve of %s", self.state.to_string())
        self._cancel.set()
        self._future.cancel()

    def cancelled(self):
        return self._cancel.is_set()

    def done(self):
        return self._future.done()

    def result(self, timeout=None):
        """
        Wait for the solution
        :param timeout: seconds to wait, concurrent.futures.TimeoutError is raised when exceeded
        :return: Solution
        """
        try:
            return self._future.result(timeout=timeout)
        except concurrent.futures.CancelledError:
            raise CancelledSearch("Solve request was cancelled") from None

    def add_done_callback(self, fn):
        self._future.add_done_callback(lambda _: fn(self))
