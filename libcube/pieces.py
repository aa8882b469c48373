"""
Physical pieces of the cube for rendering: 26 visible cubies with colours of their stickers
"""
import itertools
import collections

from .cubes.facelets import Face, Color, CubeState, COLORS, FACE_AXES, FACELET_INDEX

HIDDEN_COLOR = "#333333"

COLOR_HEX = {
    Color.WHITE: "#ffffff",
    Color.YELLOW: "#ffff00",
    Color.RED: "#ff0000",
    Color.ORANGE: "#ff8c00",
    Color.BLUE: "#0000ff",
    Color.GREEN: "#00ff00",
}

# side order expected by renderer
RENDER_ORDER = (Face.R, Face.L, Face.U, Face.D, Face.F, Face.B)

KINDS = {1: 'center', 2: 'edge', 3: 'corner'}

POSITIONS = tuple(p for p in itertools.product((-1, 0, 1), repeat=3) if p != (0, 0, 0))


class Piece(collections.namedtuple('Piece', field_names=['id', 'position', 'kind', 'colors'])):
    __slots__ = ()

    def hex_colors(self):
        return [COLOR_HEX[self.colors[face]] if face in self.colors else HIDDEN_COLOR for face in RENDER_ORDER]


def piece_at(state, position):
    """
    Build piece at given position
    :param state: CubeState
    :param position: tuple (x, y, z) with coordinates in -1..1
    :return: Piece
    """
    assert isinstance(state, CubeState)
    colors = {}
    for face in Face:
        normal = FACE_AXES[face][0]
        idx = FACELET_INDEX.get((tuple(position), normal))
        if idx is not None:
            colors[face] = COLORS[state.facelets[idx]]
    pid = "-".join(str(c) for c in position)
    kind = KINDS[sum(1 for c in position if c != 0)]
    return Piece(pid, tuple(position), kind, colors)


def cube_pieces(state):
    return [piece_at(state, pos) for pos in POSITIONS]
