"""
Face turns in Singmaster notation and their action on facelet state
"""
import enum
import logging
import collections
import numpy as np

from ..errors import InvalidMove
from .facelets import Face, CubeState, FACE_AXES, FACELET_GEOMETRY, FACELET_INDEX, FACELETS_COUNT

log = logging.getLogger("cube.moves")


class Turn(enum.Enum):
    CLOCKWISE = 1
    DOUBLE = 2
    COUNTER = 3


_SUFFIXES = {
    Turn.CLOCKWISE: "",
    Turn.DOUBLE: "2",
    Turn.COUNTER: "'",
}


class Move(collections.namedtuple("Move", field_names=['face', 'turn'])):
    __slots__ = ()

    def __str__(self):
        return self.face.name + _SUFFIXES[self.turn]

    def __repr__(self):
        return "Move(%s)" % self

    @property
    def index(self):
        return self.face.value * 3 + self.turn.value - 1

    def inverse(self):
        return Move(self.face, Turn(4 - self.turn.value))


MOVES = tuple(Move(face, turn) for face in Face for turn in Turn)
_TOKENS = {str(m): m for m in MOVES}


def parse(token):
    """
    Convert notation token like R, U2 or F' into Move
    """
    if isinstance(token, str):
        move = _TOKENS.get(token.strip())
        if move is not None:
            return move
    raise InvalidMove(token)


def to_move(obj):
    if isinstance(obj, Move):
        if not isinstance(obj.face, Face) or not isinstance(obj.turn, Turn):
            raise InvalidMove(obj)
        return obj
    return parse(obj)


def parse_sequence(moves):
    """
    Convert whitespace-separated notation or iterable of tokens/moves into list of Move
    """
    if isinstance(moves, str):
        moves = moves.split()
    return [to_move(m) for m in moves]


def format_sequence(moves):
    return " ".join(str(to_move(m)) for m in moves)


def inverse(move):
    return to_move(move).inverse()


def inverse_sequence(moves):
    return [m.inverse() for m in reversed(parse_sequence(moves))]


def _rotate(vec, axis):
    # clockwise quarter turn seen from the tip of axis: v' = n (n . v) - n x v
    nx, ny, nz = axis
    x, y, z = vec
    dot = nx * x + ny * y + nz * z
    cross = (ny * z - nz * y, nz * x - nx * z, nx * y - ny * x)
    return tuple(n * dot - c for n, c in zip(axis, cross))


def _face_permutation(face):
    """
    Permutation of clockwise quarter turn of face
    :return: array perm, new state is old_state[perm]
    """
    normal = FACE_AXES[face][0]
    perm = np.arange(FACELETS_COUNT)
    for idx, (pos, norm) in enumerate(FACELET_GEOMETRY):
        if sum(p * n for p, n in zip(pos, normal)) != 1:
            continue
        target = FACELET_INDEX[(_rotate(pos, normal), _rotate(norm, normal))]
        perm[target] = idx
    return perm


def _make_permutations():
    res = []
    for face in Face:
        quarter = _face_permutation(face)
        perm = quarter
        for _ in Turn:
            res.append(perm)
            perm = perm[quarter]
    return np.array(res)


# row is indexed by Move.index
MOVE_PERMUTATIONS = _make_permutations()


def apply(state, move):
    """
    Apply single move to the state
    :param state: CubeState
    :param move: Move or notation token
    :return: new CubeState
    """
    assert isinstance(state, CubeState)
    move = to_move(move)
    return CubeState(state.facelets[MOVE_PERMUTATIONS[move.index]])


def apply_sequence(state, moves):
    assert isinstance(state, CubeState)
    moves = parse_sequence(moves)
    facelets = state.facelets
    for m in moves:
        facelets = facelets[MOVE_PERMUTATIONS[m.index]]
    log.debug("Applied %d moves", len(moves))
    return CubeState(facelets)
