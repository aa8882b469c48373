from .coords import analyze, Analysis
from .solution import Solution, SolutionStep, difficulty_level, estimate_execution_time
from .search import Solver, TwoPhaseSearch, solve, default_solver
from .task import SolveTask

__all__ = ('analyze', 'Analysis', 'Solution', 'SolutionStep', 'difficulty_level', 'estimate_execution_time',
           'Solver', 'TwoPhaseSearch', 'solve', 'default_solver', 'SolveTask')
