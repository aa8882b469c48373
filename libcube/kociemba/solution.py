"""
Solution found by the solver with metadata for presentation
"""
import collections

from ..cubes.facelets import Face
from ..cubes.moves import Turn, format_sequence

PHASE1 = "Phase 1: orient pieces and bring slice edges to the middle layer"
PHASE2 = "Phase 2: solve with U, D and half turns"

EASY = "Easy"
MEDIUM = "Medium"
HARD = "Hard"

FACE_NAMES = {
    Face.U: "Up",
    Face.R: "Right",
    Face.F: "Front",
    Face.D: "Down",
    Face.L: "Left",
    Face.B: "Back",
}

TURN_NAMES = {
    Turn.CLOCKWISE: "90 degrees clockwise",
    Turn.DOUBLE: "180 degrees",
    Turn.COUNTER: "90 degrees counterclockwise",
}

SolutionStep = collections.namedtuple('SolutionStep', field_names=['move', 'phase', 'description'])


def describe_move(move):
    return "%s face %s" % (FACE_NAMES[move.face], TURN_NAMES[move.turn])


def difficulty_level(moves_count):
    if moves_count <= 20:
        return EASY
    if moves_count <= 30:
        return MEDIUM
    return HARD


def estimate_execution_time(moves_count):
    """
    Expected time for a human to perform the moves, in seconds
    """
    return 30 + 1.5 * moves_count


class Solution:
    def __init__(self, steps, solution_time=0.0):
        self.steps = tuple(steps)
        self.solution_time = solution_time

    @classmethod
    def from_phases(cls, phase1, phase2, solution_time=0.0):
        steps = [SolutionStep(m, PHASE1, describe_move(m)) for m in phase1]
        steps.extend(SolutionStep(m, PHASE2, describe_move(m)) for m in phase2)
        return cls(steps, solution_time=solution_time)

    def __repr__(self):
        return "Solution(%r, moves=%d, time=%.3f)" % (self.notation(), len(self), self.solution_time)

    def __len__(self):
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    @property
    def moves(self):
        return [s.move for s in self.steps]

    @property
    def total_moves(self):
        return len(self.steps)

    @property
    def phase1_moves(self):
        return sum(1 for s in self.steps if s.phase == PHASE1)

    @property
    def phase2_moves(self):
        return sum(1 for s in self.steps if s.phase == PHASE2)

    @property
    def difficulty(self):
        return difficulty_level(self.total_moves)

    @property
    def estimated_time(self):
        return estimate_execution_time(self.total_moves)

    def notation(self):
        return format_sequence(self.moves)

    def to_dict(self):
        return {
            'steps': [{'move': str(s.move), 'phase': s.phase, 'description': s.description} for s in self.steps],
            'total_moves': self.total_moves,
            'phase1_moves': self.phase1_moves,
            'phase2_moves': self.phase2_moves,
            'difficulty': self.difficulty,
            'solution_time': self.solution_time,
            'estimated_time': self.estimated_time,
        }
