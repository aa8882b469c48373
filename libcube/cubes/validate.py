"""
Checks of facelet state: only states reachable from solved cube by face turns are accepted
"""
import logging

from ..errors import Check, Violation, InvalidState
from .facelets import Face, CubeState, FACE_COLORS, FACE_SIZE
from . import cubies

log = logging.getLogger("cube.validate")


def validate(state):
    """
    Run all checks over the state
    :param state: CubeState
    :return: list of Violation, empty for valid state
    """
    assert isinstance(state, CubeState)
    res = []
    for color, count in state.color_counts().items():
        if count != FACE_SIZE:
            res.append(Violation(Check.COLORS, "Colour %s appears %d times instead of %d" % (
                color.value, count, FACE_SIZE)))

    for face in Face:
        center = state.center(face)
        if center != FACE_COLORS[face]:
            res.append(Violation(Check.CENTERS, "Center of %s is %s instead of %s" % (
                face.name, center.value, FACE_COLORS[face].value)))

    cube, problems = cubies.read_pieces(state)
    res.extend(Violation(Check.PIECES, p) for p in problems)
    # parity is meaningless when pieces are not recognized
    if not problems:
        if cube.twist_sum() != 0:
            res.append(Violation(Check.PARITY, "Corner twist is not solvable: one corner is twisted"))
        if cube.flip_sum() != 0:
            res.append(Violation(Check.PARITY, "Edge flip is not solvable: one edge is flipped"))
        if cube.corner_parity() != cube.edge_parity():
            res.append(Violation(Check.PARITY, "Permutation parity of corners and edges differs"))
    if res:
        log.debug("State %s has %d violations", state.to_string(), len(res))
    return res


def is_valid(state):
    return not validate(state)


def check(state):
    """
    Raise InvalidState with all violations when state is not valid
    """
    violations = validate(state)
    if violations:
        raise InvalidState(violations)
    return state
