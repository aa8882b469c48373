"""
Facelet state of 3x3 cube: 54 stickers stored face by face in order U, R, F, D, L, B,
each face row by row as seen from outside of the cube
"""
import enum
import collections.abc
import numpy as np

from ..errors import Check, Violation, InvalidState


class Face(enum.Enum):
    U = 0
    R = 1
    F = 2
    D = 3
    L = 4
    B = 5


class Color(enum.Enum):
    WHITE = 'white'
    RED = 'red'
    GREEN = 'green'
    YELLOW = 'yellow'
    ORANGE = 'orange'
    BLUE = 'blue'

    @property
    def letter(self):
        return self.value[0].upper()


# colour index of sticker is the index of face this colour belongs to in solved cube
COLORS = (Color.WHITE, Color.RED, Color.GREEN, Color.YELLOW, Color.ORANGE, Color.BLUE)
FACE_COLORS = {face: COLORS[face.value] for face in Face}

FACELETS_COUNT = 54
FACE_SIZE = 9

# axes are x to the right, y up and z to the front
# every face is given as (normal, grid right, grid down) vectors
FACE_AXES = {
    Face.U: ((0, 1, 0), (1, 0, 0), (0, 0, 1)),
    Face.R: ((1, 0, 0), (0, 0, -1), (0, -1, 0)),
    Face.F: ((0, 0, 1), (1, 0, 0), (0, -1, 0)),
    Face.D: ((0, -1, 0), (1, 0, 0), (0, 0, -1)),
    Face.L: ((-1, 0, 0), (0, 0, 1), (0, -1, 0)),
    Face.B: ((0, 0, -1), (-1, 0, 0), (0, -1, 0)),
}


def facelet_index(face, row, col):
    assert isinstance(face, Face)
    assert 0 <= row < 3 and 0 <= col < 3
    return face.value * FACE_SIZE + row * 3 + col


def _facelet_geometry():
    res = []
    for face in Face:
        normal, right, down = FACE_AXES[face]
        for row in range(3):
            for col in range(3):
                pos = tuple(n + (col - 1) * r + (row - 1) * d for n, r, d in zip(normal, right, down))
                res.append((pos, normal))
    return tuple(res)


# (cubie position, sticker normal) of every facelet index
FACELET_GEOMETRY = _facelet_geometry()
FACELET_INDEX = {geom: idx for idx, geom in enumerate(FACELET_GEOMETRY)}

_LETTERS = {
    'U': 0, 'W': 0,
    'R': 1,
    'F': 2, 'G': 2,
    'D': 3, 'Y': 3,
    'L': 4, 'O': 4,
    'B': 5,
}


def _format_error(message):
    return InvalidState([Violation(Check.FORMAT, message)])


def _parse_color(value):
    if isinstance(value, Color):
        return COLORS.index(value)
    if isinstance(value, str):
        try:
            return COLORS.index(Color(value.strip().lower()))
        except ValueError:
            pass
    raise _format_error("Unknown colour %r" % (value,))


class CubeState:
    """
    Immutable facelet state. Facelets are kept in read-only numpy array of colour indices
    """
    __slots__ = ('_facelets', )

    def __init__(self, facelets):
        arr = np.array(facelets, dtype=np.int8)
        if arr.shape != (FACELETS_COUNT, ):
            raise _format_error("Expected %d facelets, got shape %s" % (FACELETS_COUNT, arr.shape))
        if arr.min() < 0 or arr.max() >= len(COLORS):
            raise _format_error("Facelet colour index out of range")
        arr.setflags(write=False)
        self._facelets = arr

    @property
    def facelets(self):
        return self._facelets

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return np.array_equal(self._facelets, other._facelets)

    def __hash__(self):
        return hash(self._facelets.tobytes())

    def __repr__(self):
        return "CubeState(%r)" % self.to_string()

    def color_at(self, face, row, col):
        return COLORS[self._facelets[facelet_index(face, row, col)]]

    def center(self, face):
        return self.color_at(face, 1, 1)

    def face_colors(self, face):
        """
        Colours of single face
        :param face: Face
        :return: 3x3 list of Color, rows top to bottom
        """
        assert isinstance(face, Face)
        ofs = face.value * FACE_SIZE
        return [[COLORS[c] for c in self._facelets[ofs + row * 3:ofs + row * 3 + 3]] for row in range(3)]

    def faces(self):
        return {face: self.face_colors(face) for face in Face}

    def color_counts(self):
        counts = np.bincount(self._facelets, minlength=len(COLORS))
        return {color: int(count) for color, count in zip(COLORS, counts)}

    def to_dict(self):
        return {face.name: [[c.value for c in row] for row in self.face_colors(face)] for face in Face}

    @classmethod
    def from_dict(cls, data):
        """
        Build state from mapping of face to 3x3 grid of colours. Faces are given as Face or its letter,
        colours as Color or its name
        """
        if not isinstance(data, collections.abc.Mapping):
            raise _format_error("Cube state must be a mapping of faces, got %s" % type(data).__name__)
        faces = {}
        for key, grid in data.items():
            face = key if isinstance(key, Face) else Face.__members__.get(str(key).strip().upper())
            if face is None:
                raise _format_error("Unknown face %r" % (key,))
            faces[face] = grid
        missing = [f.name for f in Face if f not in faces]
        if missing:
            raise _format_error("Missing faces: %s" % ", ".join(missing))
        res = []
        for face in Face:
            grid = faces[face]
            if not isinstance(grid, collections.abc.Sequence) or len(grid) != 3 or \
                    any(not isinstance(row, collections.abc.Sequence) or isinstance(row, str) or len(row) != 3
                        for row in grid):
                raise _format_error("Face %s must be 3x3 grid" % face.name)
            for row in grid:
                res.extend(_parse_color(c) for c in row)
        return cls(res)

    def to_string(self):
        """
        Facelet string in URFDLB letters, colour of every sticker is named by the face of its colour
        """
        return "".join(Face(int(c)).name for c in self._facelets)

    @classmethod
    def from_string(cls, text):
        """
        Parse 54 letters of face names (URFDLB) or colour letters (WRGYOB), whitespace is ignored
        """
        if not isinstance(text, str):
            raise _format_error("Facelet string expected, got %s" % type(text).__name__)
        letters = "".join(text.split()).upper()
        if len(letters) != FACELETS_COUNT:
            raise _format_error("Expected %d facelets, got %d" % (FACELETS_COUNT, len(letters)))
        bad = sorted(set(letters) - set(_LETTERS))
        if bad:
            raise _format_error("Unknown facelet letters: %s" % ", ".join(bad))
        return cls([_LETTERS[l] for l in letters])


SOLVED = CubeState(np.repeat(np.arange(len(COLORS)), FACE_SIZE))

RenderedState = collections.namedtuple('RenderedState', field_names=['up', 'right', 'front', 'down', 'left', 'back'])


def render(state):
    """
    Colour letters of every face
    :param state: CubeState
    :return: RenderedState with list of 9 letters per face
    """
    assert isinstance(state, CubeState)
    letters = [COLORS[c].letter for c in state.facelets]
    return RenderedState(*[letters[face.value * FACE_SIZE:(face.value + 1) * FACE_SIZE] for face in Face])


def draw(state):
    """
    Unfolded cube as multi-line text: U above, L F R B in the middle row, D below
    """
    r = render(state)

    def rows(face):
        return ["".join(face[i * 3:i * 3 + 3]) for i in range(3)]

    lines = ["    " + row for row in rows(r.up)]
    lines.extend(" ".join(parts) for parts in zip(rows(r.left), rows(r.front), rows(r.right), rows(r.back)))
    lines.extend("    " + row for row in rows(r.down))
    return "\n".join(lines)
