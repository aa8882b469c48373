"""
Random scrambles of the cube
"""
import random

from .facelets import SOLVED, CubeState
from . import moves


def sample_move(prev_move=None, rng=None):
    """
    Random move which doesn't turn the same face as previous one
    """
    if rng is None:
        rng = random
    candidates = [m for m in moves.MOVES if prev_move is None or m.face != prev_move.face]
    return rng.choice(candidates)


def scramble(count, rng=None, start=SOLVED):
    """
    Scramble the cube with random moves
    :param count: amount of moves to apply
    :param rng: random.Random instance or random module
    :param start: state to scramble
    :return: tuple (final state, list of moves applied)
    """
    assert isinstance(count, int)
    assert isinstance(start, CubeState)
    if count < 0:
        raise ValueError("Scramble length can't be negative: %d" % count)

    state = start
    applied = []
    prev_move = None
    for _ in range(count):
        prev_move = sample_move(prev_move, rng)
        state = moves.apply(state, prev_move)
        applied.append(prev_move)
    return state, applied


def scramble_states(count, rng=None):
    """
    Generate sequence of states of single random scramble
    :param count: count of scramble moves to perform
    :return: list of tuples (depth, state)
    """
    assert isinstance(count, int)
    assert count > 0

    state = SOLVED
    prev_move = None
    result = []
    for depth in range(count):
        prev_move = sample_move(prev_move, rng)
        state = moves.apply(state, prev_move)
        result.append((depth + 1, state))
    return result


def random_state(length=25, rng=None):
    return scramble(length, rng)[0]
