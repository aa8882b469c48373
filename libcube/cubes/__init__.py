from .facelets import Face, Color, CubeState, SOLVED, COLORS, FACE_COLORS, render, draw
from .moves import Turn, Move, MOVES, parse, parse_sequence, format_sequence, inverse, inverse_sequence, \
    apply, apply_sequence
from .cubies import CubieCube
from .validate import is_valid, check
from .scramble import scramble_states, random_state
from . import validate, scramble

__all__ = ('Face', 'Color', 'CubeState', 'SOLVED', 'COLORS', 'FACE_COLORS', 'render', 'draw',
           'Turn', 'Move', 'MOVES', 'parse', 'parse_sequence', 'format_sequence', 'inverse', 'inverse_sequence',
           'apply', 'apply_sequence', 'CubieCube', 'validate', 'is_valid', 'check',
           'scramble', 'scramble_states', 'random_state')
