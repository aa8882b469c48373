"""
Integer coordinates of cubie state used to index move and pruning tables
"""
import itertools
import collections
import numpy as np

from ..cubes import moves
from ..cubes.facelets import Face, CubeState, FACE_SIZE, FACELETS_COUNT
from ..cubes.cubies import CubieCube, read_pieces

N_TWIST = 3 ** 7
N_FLIP = 2 ** 11
N_SLICE = 495
N_CORNERS = 40320
N_UD_EDGES = 40320
N_SLICE_PERM = 24
N_MOVES = len(moves.MOVES)

# moves keeping the cube inside <U, D, L2, R2, F2, B2>, as indices in MOVES
PHASE2_MOVES = tuple(m.index for m in moves.MOVES
                     if m.face in (Face.U, Face.D) or m.turn == moves.Turn.DOUBLE)
N_PHASE2_MOVES = len(PHASE2_MOVES)

_TWIST_WEIGHTS = 3 ** np.arange(6, -1, -1)
_FLIP_WEIGHTS = 2 ** np.arange(10, -1, -1)
_OCCUPANCY_WEIGHTS = 1 << np.arange(12)

# positions occupied by slice edges FR, FL, BL, BR
SLICE_COMBINATIONS = tuple(itertools.combinations(range(12), 4))


def _slice_keys():
    res = np.full(1 << 12, -1, dtype=np.int16)
    for idx, combo in enumerate(SLICE_COMBINATIONS):
        res[sum(1 << p for p in combo)] = idx
    return res


SLICE_INDEX = _slice_keys()
SOLVED_SLICE = SLICE_COMBINATIONS.index((8, 9, 10, 11))


def perm_rank(perms):
    """
    Lexicographic rank of permutation(s), equal to position in itertools.permutations order
    :param perms: 1d sequence or 2d array with permutation per row
    :return: int for single permutation or array of ranks
    """
    perms = np.asarray(perms)
    single = perms.ndim == 1
    perms = np.atleast_2d(perms)
    n = perms.shape[1]
    rank = np.zeros(len(perms), dtype=np.int64)
    for i in range(n):
        smaller = (perms[:, i + 1:] < perms[:, i:i + 1]).sum(axis=1)
        rank = rank * (n - i) + smaller
    if single:
        return int(rank[0])
    return rank


def all_permutations(n):
    return np.array(list(itertools.permutations(range(n))), dtype=np.int8)


def twist(cube):
    return int(np.dot(cube.co[:7], _TWIST_WEIGHTS))


def flip(cube):
    return int(np.dot(cube.eo[:11], _FLIP_WEIGHTS))


def slice_coord(cube):
    key = sum(1 << pos for pos, e in enumerate(cube.ep) if e >= 8)
    return int(SLICE_INDEX[key])


def corner_perm(cube):
    return perm_rank(cube.cp)


def ud_edge_perm(cube):
    # valid only for cubes inside phase 2 subgroup
    return perm_rank(cube.ep[:8])


def slice_perm(cube):
    return perm_rank([e - 8 for e in cube.ep[8:]])


def phase1_coords(cube):
    assert isinstance(cube, CubieCube)
    return twist(cube), flip(cube), slice_coord(cube)


def phase2_coords(cube):
    assert isinstance(cube, CubieCube)
    return corner_perm(cube), ud_edge_perm(cube), slice_perm(cube)


def all_twists():
    """
    Corner orientations of every twist coordinate
    :return: array (N_TWIST, 8)
    """
    digits = (np.arange(N_TWIST)[:, None] // _TWIST_WEIGHTS[None, :]) % 3
    last = (-digits.sum(axis=1)) % 3
    return np.hstack([digits, last[:, None]])


def all_flips():
    digits = (np.arange(N_FLIP)[:, None] // _FLIP_WEIGHTS[None, :]) % 2
    last = digits.sum(axis=1) % 2
    return np.hstack([digits, last[:, None]])


def all_slice_occupancies():
    res = np.zeros((N_SLICE, 12), dtype=np.int64)
    for idx, combo in enumerate(SLICE_COMBINATIONS):
        res[idx, list(combo)] = 1
    return res


def twist_of(co):
    return co[:, :7] @ _TWIST_WEIGHTS


def flip_of(eo):
    return eo[:, :11] @ _FLIP_WEIGHTS


def slice_of(occupancy):
    return SLICE_INDEX[occupancy @ _OCCUPANCY_WEIGHTS]


Analysis = collections.namedtuple('Analysis', field_names=[
    'edges_oriented', 'corners_oriented', 'slice_edges_in_slice', 'in_subgroup',
    'corners_positioned', 'edges_permuted', 'solved_faces', 'scramble_level'])


def analyze(state):
    """
    Summary of how far the cube is from solved. Piece fields are None when pieces
    of the state can't be recognized. Scramble level is the share of all 54 facelets
    differing from the centre of their face, so it never reaches 1
    """
    assert isinstance(state, CubeState)
    f = state.facelets.reshape(len(Face), FACE_SIZE)
    centers = f[:, 4:5]
    solved_faces = int((f == centers).all(axis=1).sum())
    scramble_level = float((f != centers).sum()) / FACELETS_COUNT

    cube, problems = read_pieces(state)
    if problems:
        return Analysis(None, None, None, False, None, None, solved_faces, scramble_level)
    edges = flip(cube) == 0 and sum(cube.eo) == 0
    corners = twist(cube) == 0 and sum(cube.co) == 0
    in_slice = slice_coord(cube) == SOLVED_SLICE
    positioned = cube.cp == list(range(8))
    permuted = cube.ep == list(range(12))
    return Analysis(edges, corners, in_slice, edges and corners and in_slice, positioned, permuted,
                    solved_faces, scramble_level)
