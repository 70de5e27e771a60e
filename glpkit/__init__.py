"""
glpkit Python Package

LP/MIP problem modeling and solving on top of the GNU Linear Programming Kit.
"""

from .model import Problem
from .solver import Solver, solve_file
from .parameters import SimplexParameters, IntoptParameters, MPSParameters, CPXParameters
from .results import BasicSolution, MipSolution
from .bounds import BoundsSpec
from .sparse import SparseVector
from .engine import Engine, FileFormat, SolveMethod, get_default_engine, set_default_engine
from .constants import (
    DBL_MAX, ObjDir, BoundsType, VarKind, SolStatus, VarStatus, MsgLevel,
    Method, Pricing, RatioTest, Branching, Backtracking, Preprocessing, MPSFormat,
)
from .errors import (
    GlpkitError, OptError, SolverError, PathError, ReadError, WriteError,
    ProblemDeletedError, InvalidArgumentError,
)

__version__ = "0.1.0"

__all__ = [
    'Problem',
    'Solver',
    'solve_file',
    'SimplexParameters',
    'IntoptParameters',
    'MPSParameters',
    'CPXParameters',
    'BasicSolution',
    'MipSolution',
    'BoundsSpec',
    'SparseVector',
    '__version__',
    # Engine interface
    'Engine',
    'FileFormat',
    'SolveMethod',
    'get_default_engine',
    'set_default_engine',
    # Constants
    'DBL_MAX',
    'ObjDir',
    'BoundsType',
    'VarKind',
    'SolStatus',
    'VarStatus',
    'MsgLevel',
    'Method',
    'Pricing',
    'RatioTest',
    'Branching',
    'Backtracking',
    'Preprocessing',
    'MPSFormat',
    # Errors
    'GlpkitError',
    'OptError',
    'SolverError',
    'PathError',
    'ReadError',
    'WriteError',
    'ProblemDeletedError',
    'InvalidArgumentError',
]
