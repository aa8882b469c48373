"""
Cubie level representation: permutation and orientation of 8 corners and 12 edges
"""
import enum

from ..errors import InvalidState, Violation, Check
from .facelets import Face, CubeState, SOLVED, FACE_SIZE
from . import moves


class Corner(enum.Enum):
    URF = 0
    UFL = 1
    ULB = 2
    UBR = 3
    DFR = 4
    DLF = 5
    DBL = 6
    DRB = 7


class Edge(enum.Enum):
    UR = 0
    UF = 1
    UL = 2
    UB = 3
    DR = 4
    DF = 5
    DL = 6
    DB = 7
    FR = 8
    FL = 9
    BL = 10
    BR = 11


def _f(name):
    # facelet name like 'R3' into facelet index
    return Face[name[0]].value * FACE_SIZE + int(name[1]) - 1


# facelets of every corner position, U/D sticker first, then clockwise
corner_maps = tuple(tuple(_f(n) for n in names) for names in (
    ('U9', 'R1', 'F3'), ('U7', 'F1', 'L3'), ('U1', 'L1', 'B3'), ('U3', 'B1', 'R3'),
    ('D3', 'F9', 'R7'), ('D1', 'L9', 'F7'), ('D7', 'B9', 'L7'), ('D9', 'R9', 'B7'),
))

# facelets of every edge position
side_maps = tuple(tuple(_f(n) for n in names) for names in (
    ('U6', 'R2'), ('U8', 'F2'), ('U4', 'L2'), ('U2', 'B2'),
    ('D6', 'R8'), ('D2', 'F8'), ('D4', 'L8'), ('D8', 'B8'),
    ('F6', 'R4'), ('F4', 'L6'), ('B6', 'L4'), ('B4', 'R6'),
))

corner_colors = tuple(tuple(Face[c].value for c in name) for name in (
    'URF', 'UFL', 'ULB', 'UBR', 'DFR', 'DLF', 'DBL', 'DRB'))

side_colors = tuple(tuple(Face[c].value for c in e.name) for e in Edge)

_UD_COLORS = (Face.U.value, Face.D.value)


def _permute(items, perm):
    return [items[p] for p in perm]


def _rotate(orients, perm, delta, mod):
    return [(orients[p] + d) % mod for p, d in zip(perm, delta)]


def permutation_parity(perm):
    res = 0
    for i in range(len(perm)):
        for j in range(i + 1, len(perm)):
            if perm[i] > perm[j]:
                res ^= 1
    return res


class CubieCube:
    """
    Cubie state: cp[i] is the corner sitting at position i, co[i] its twist,
    ep/eo the same for edges
    """
    def __init__(self, cp=None, co=None, ep=None, eo=None):
        self.cp = list(range(8)) if cp is None else list(cp)
        self.co = [0] * 8 if co is None else list(co)
        self.ep = list(range(12)) if ep is None else list(ep)
        self.eo = [0] * 12 if eo is None else list(eo)

    def __repr__(self):
        return "CubieCube(cp=%s, co=%s, ep=%s, eo=%s)" % (self.cp, self.co, self.ep, self.eo)

    def __eq__(self, other):
        if not isinstance(other, CubieCube):
            return NotImplemented
        return (self.cp, self.co, self.ep, self.eo) == (other.cp, other.co, other.ep, other.eo)

    def copy(self):
        return CubieCube(self.cp, self.co, self.ep, self.eo)

    def multiply(self, other):
        """
        Result of applying other after self
        """
        assert isinstance(other, CubieCube)
        return CubieCube(cp=_permute(self.cp, other.cp),
                         co=_rotate(self.co, other.cp, other.co, 3),
                         ep=_permute(self.ep, other.ep),
                         eo=_rotate(self.eo, other.ep, other.eo, 2))

    __mul__ = multiply

    def apply(self, move):
        move = moves.to_move(move)
        return self.multiply(MOVE_CUBES[move.index])

    def is_solved(self):
        return self == SOLVED_CUBE

    def corner_parity(self):
        return permutation_parity(self.cp)

    def edge_parity(self):
        return permutation_parity(self.ep)

    def twist_sum(self):
        return sum(self.co) % 3

    def flip_sum(self):
        return sum(self.eo) % 2

    def to_state(self):
        facelets = [face.value for face in Face for _ in range(FACE_SIZE)]
        for pos, (corner, ori) in enumerate(zip(self.cp, self.co)):
            for k, color in enumerate(corner_colors[corner]):
                facelets[corner_maps[pos][(k + ori) % 3]] = color
        for pos, (edge, ori) in enumerate(zip(self.ep, self.eo)):
            for k, color in enumerate(side_colors[edge]):
                facelets[side_maps[pos][(k + ori) % 2]] = color
        return CubeState(facelets)

    @classmethod
    def from_state(cls, state):
        """
        Recognize pieces of facelet state
        :raise InvalidState: when some piece is unknown, missing or duplicated
        """
        cube, problems = read_pieces(state)
        if problems:
            raise InvalidState([Violation(Check.PIECES, p) for p in problems])
        return cube


def _read_corner(colors):
    for ori, c in enumerate(colors):
        if c in _UD_COLORS:
            break
    else:
        return None
    key = (colors[ori], colors[(ori + 1) % 3], colors[(ori + 2) % 3])
    if key not in corner_colors:
        return None
    return corner_colors.index(key), ori


def _read_edge(colors):
    colors = tuple(colors)
    if colors in side_colors:
        return side_colors.index(colors), 0
    rev = colors[::-1]
    if rev in side_colors:
        return side_colors.index(rev), 1
    return None


def _color_names(colors):
    return "".join(Face(c).name for c in colors)


def read_pieces(state):
    """
    Identify corner and edge pieces of facelet state
    :param state: CubeState
    :return: tuple (CubieCube, list of problem descriptions). Cubie is meaningful only without problems
    """
    assert isinstance(state, CubeState)
    f = [int(c) for c in state.facelets]
    cube = CubieCube()
    problems = []

    for pos, facelets in enumerate(corner_maps):
        colors = [f[i] for i in facelets]
        res = _read_corner(colors)
        if res is None:
            problems.append("Unknown corner piece %s at %s" % (_color_names(colors), Corner(pos).name))
            cube.cp[pos] = -1
            continue
        cube.cp[pos], cube.co[pos] = res

    for pos, facelets in enumerate(side_maps):
        colors = [f[i] for i in facelets]
        res = _read_edge(colors)
        if res is None:
            problems.append("Unknown edge piece %s at %s" % (_color_names(colors), Edge(pos).name))
            cube.ep[pos] = -1
            continue
        cube.ep[pos], cube.eo[pos] = res

    for kind, perm in ((Corner, cube.cp), (Edge, cube.ep)):
        for piece in kind:
            count = perm.count(piece.value)
            if count > 1:
                problems.append("%s piece %s appears %d times" % (kind.__name__, piece.name, count))
            elif count == 0 and -1 not in perm:
                problems.append("%s piece %s is missing" % (kind.__name__, piece.name))
    return cube, problems


SOLVED_CUBE = CubieCube()

# cubie effect of every move, indexed by Move.index
MOVE_CUBES = tuple(CubieCube.from_state(moves.apply(SOLVED, m)) for m in moves.MOVES)
