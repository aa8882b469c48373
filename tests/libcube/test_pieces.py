import unittest

from libcube import pieces
from libcube.cubes import facelets, moves


class Pieces(unittest.TestCase):
    def test_solved(self):
        res = pieces.cube_pieces(facelets.SOLVED)
        self.assertEqual(len(res), 26)
        kinds = [p.kind for p in res]
        self.assertEqual(kinds.count('corner'), 8)
        self.assertEqual(kinds.count('edge'), 12)
        self.assertEqual(kinds.count('center'), 6)
        self.assertEqual(len({p.id for p in res}), 26)

    def test_corner(self):
        p = pieces.piece_at(facelets.SOLVED, (1, 1, 1))
        self.assertEqual(p.id, "1-1-1")
        self.assertEqual(p.kind, 'corner')
        self.assertEqual(p.colors, {
            facelets.Face.R: facelets.Color.RED,
            facelets.Face.U: facelets.Color.WHITE,
            facelets.Face.F: facelets.Color.GREEN,
        })
        self.assertEqual(p.hex_colors(), ["#ff0000", "#333333", "#ffffff", "#333333", "#00ff00", "#333333"])

    def test_center(self):
        p = pieces.piece_at(facelets.SOLVED, (0, -1, 0))
        self.assertEqual(p.id, "0--1-0")
        self.assertEqual(p.kind, 'center')
        self.assertEqual(p.hex_colors().count(pieces.HIDDEN_COLOR), 5)
        self.assertEqual(p.hex_colors()[3], "#ffff00")

    def test_after_move(self):
        s = moves.apply(facelets.SOLVED, "U")
        # U turn brings right face colour to the front and back face colour to the right
        p = pieces.piece_at(s, (1, 1, 1))
        self.assertEqual(p.colors[facelets.Face.F], facelets.Color.RED)
        self.assertEqual(p.colors[facelets.Face.R], facelets.Color.BLUE)
        self.assertEqual(p.colors[facelets.Face.U], facelets.Color.WHITE)
