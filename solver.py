#!/usr/bin/env python3
"""
Solver of cube states using two-phase search
"""
import time
import argparse
import random
import logging

import seaborn as sns
import matplotlib.pyplot as plt

from libcube import conf
from libcube import cubes
from libcube import kociemba
from libcube.errors import CubeError, Unsolvable

log = logging.getLogger("solver")


PLOT_MAX_DEPTHS = 20
PLOT_TASKS = 10


def solve_task(solver, state, cube_idx=None):
    """
    Solve single cube and check the solution by replaying it
    :return: Solution or None if cube wasn't solved
    """
    log_prefix = "" if cube_idx is None else "cube %d: " % cube_idx
    log.info("%sGot cube %s, solving...", log_prefix, state.to_string())
    try:
        solution = solver.solve(state)
    except Unsolvable as e:
        log.warning("%sCube wasn't solved: %s", log_prefix, e)
        return None
    if cubes.apply_sequence(state, solution.moves) != cubes.SOLVED:
        log.error("%sSolution %s doesn't solve the cube", log_prefix, solution.notation())
        return None
    log.info("%sSolution (%d moves, %s, %.2f sec): %s", log_prefix, len(solution), solution.difficulty,
             solution.solution_time, solution.notation())
    return solution


def solve_moves(solver, text, cube_idx=None):
    seq = cubes.parse_sequence(text)
    return solve_task(solver, cubes.apply_sequence(cubes.SOLVED, seq), cube_idx=cube_idx)


def produce_plots(solver, prefix, rng):
    sns.set_theme()
    data_length = []
    data_time = []

    for depth in range(1, PLOT_MAX_DEPTHS+1):
        log.info("Process depth %d", depth)
        for task_idx in range(PLOT_TASKS):
            state, _ = cubes.scramble.scramble(depth, rng)
            solution = solve_task(solver, state, cube_idx=task_idx)
            if solution is not None:
                data_length.append((depth, len(solution)))
                data_time.append((depth, solution.solution_time))

    d, v = zip(*data_length)
    plot = sns.lineplot(x=d, y=v)
    plot.set_title("Solution length per scramble depth (limit %d)" % solver.max_length)
    plot.get_figure().savefig(prefix + "-length_vs_depth.png")

    plt.clf()
    d, v = zip(*data_time)
    plot = sns.lineplot(x=d, y=v)
    plot.set_title("Seconds to solve per scramble depth")
    plot.get_figure().savefig(prefix + "-time_vs_depth.png")


if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)-15s %(levelname)s %(message)s", level=logging.INFO)
    parser = argparse.ArgumentParser()
    parser.add_argument("--ini", help="Ini file with solver configuration")
    parser.add_argument("--max-length", type=int, help="Limit of solution length, overrides ini value")
    parser.add_argument("--seed", type=int, default=42, help="Seed to use, if zero, no seed used. default=42")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--input", help="Text file with scrambles to solve, one move sequence per line")
    group.add_argument("-p", "--perm", help="Scramble in form of moves separated by spaces, like \"R U R' U'\"")
    group.add_argument("-s", "--state", metavar="FACELETS", help="Cube state as 54 facelet letters in URFDLB order")
    group.add_argument("-r", "--random", metavar="DEPTH", type=int, help="Generate random scramble of given depth")
    group.add_argument("--plot", metavar="PREFIX", help="Produce plots of solution length and time")
    args = parser.parse_args()

    rng = random.Random(args.seed) if args.seed else random.Random()
    config = conf.Config(args.ini)
    solver = kociemba.Solver.from_config(config)
    if args.max_length is not None:
        solver.max_length = args.max_length
    log.info("Using %s", solver)

    ts = time.time()
    tbl = solver.tables
    log.info("Tables ready in %.2f sec: %s", time.time() - ts, tbl)

    try:
        if args.random is not None:
            state, seq = cubes.scramble.scramble(args.random, rng)
            log.info("Scramble: %s", cubes.format_sequence(seq))
            solve_task(solver, state)
        elif args.perm is not None:
            solve_moves(solver, args.perm)
        elif args.state is not None:
            state = cubes.CubeState.from_string(args.state)
            print(cubes.draw(state))
            solve_task(solver, state)
        elif args.input is not None:
            log.info("Processing scrambles from %s", args.input)
            count = 0
            solved = 0
            with open(args.input, 'rt', encoding='utf-8') as fd:
                for idx, l in enumerate(fd):
                    if not l.strip():
                        continue
                    if solve_moves(solver, l, cube_idx=idx) is not None:
                        solved += 1
                    count += 1
            log.info("Solved %d out of %d cubes, which is %.2f%% success ratio", solved, count,
                     100*solved / max(count, 1))
        elif args.plot is not None:
            log.info("Produce plots with prefix %s", args.plot)
            produce_plots(solver, args.plot, rng)
    except CubeError as e:
        log.error("%s", e)
        raise SystemExit(1)
