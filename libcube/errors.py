"""
Exceptions raised by cube engine and solver
"""
import enum
import collections


class CubeError(Exception):
    pass


class InvalidMove(CubeError):
    """
    Move token or object which is not one of 18 face turns
    """
    def __init__(self, token):
        super(InvalidMove, self).__init__("Invalid move %r" % (token,))
        self.token = token


class InvalidState(CubeError):
    """
    Cube state which failed validation. Carries all violated checks
    """
    def __init__(self, violations):
        self.violations = list(violations)
        msg = "; ".join(v.message for v in self.violations) or "invalid state"
        super(InvalidState, self).__init__(msg)


class Unsolvable(CubeError):
    def __init__(self, message, violations=()):
        super(Unsolvable, self).__init__(message)
        self.violations = list(violations)


class CancelledSearch(CubeError):
    pass


class Check(enum.Enum):
    FORMAT = 'format'
    COLORS = 'colors'
    CENTERS = 'centers'
    PIECES = 'pieces'
    PARITY = 'parity'


# single violated check of cube state
Violation = collections.namedtuple("Violation", field_names=['check', 'message'])
