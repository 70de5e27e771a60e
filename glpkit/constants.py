"""
Enumerations shared by the model, the parameter blocks and the engine.

The numeric values are the ones used by GLPK so that they can be handed to
the native library unchanged.
"""
import sys
from enum import IntEnum


# Largest finite double, used as "infinity" for missing bounds.
DBL_MAX = sys.float_info.max

# INT_MAX of the native library, the default iteration and time limits.
INT_MAX = 2147483647

# Longest symbolic name accepted by the engine.
MAX_NAME_LENGTH = 255

ON = 1
OFF = 0


class ObjDir(IntEnum):
    """Objective function direction"""
    MIN = 1
    MAX = 2


class BoundsType(IntEnum):
    """Bounds type of a row or column"""
    FR = 1  # free (unbounded) variable
    LO = 2  # lower-bounded variable
    UP = 3  # upper-bounded variable
    DB = 4  # double-bounded variable
    FX = 5  # fixed variable

    # descriptive aliases
    FREE = 1
    LOWER = 2
    UPPER = 3
    DOUBLE = 4
    FIXED = 5


class VarKind(IntEnum):
    """Kind of a structural variable"""
    CV = 1  # continuous
    IV = 2  # integer
    BV = 3  # binary, integer in [0, 1]

    CONTINUOUS = 1
    INTEGER = 2
    BINARY = 3


class SolStatus(IntEnum):
    """Status of a basic or MIP solution"""
    UNDEF = 1   # solution is undefined
    FEAS = 2    # solution is feasible
    INFEAS = 3  # solution is infeasible
    NOFEAS = 4  # no feasible solution exists
    OPT = 5     # solution is optimal
    UNBND = 6   # solution is unbounded


class VarStatus(IntEnum):
    """Basis status of a row or column"""
    BS = 1  # basic
    NL = 2  # non-basic on its lower bound
    NU = 3  # non-basic on its upper bound
    NF = 4  # non-basic free
    NS = 5  # non-basic fixed


class MsgLevel(IntEnum):
    """Terminal output level of the solvers"""
    OFF = 0  # no output
    ERR = 1  # warnings and errors only
    ON = 2   # normal output
    ALL = 3  # full output
    DBG = 4  # debug output


class Method(IntEnum):
    """Simplex method option"""
    PRIMAL = 1  # primal simplex
    DUALP = 2   # dual simplex, primal if dual fails
    DUAL = 3    # dual simplex


class Pricing(IntEnum):
    """Pricing technique"""
    STD = 0x11  # standard (Dantzig rule)
    PSE = 0x22  # projected steepest edge


class RatioTest(IntEnum):
    """Ratio test technique"""
    STD = 0x11  # standard (textbook)
    HAR = 0x22  # Harris' two-pass ratio test


class Branching(IntEnum):
    """Branching technique of the branch-and-cut solver"""
    FFV = 1  # first fractional variable
    LFV = 2  # last fractional variable
    MFV = 3  # most fractional variable
    DTH = 4  # heuristic by Driebeck and Tomlin
    PCH = 5  # hybrid pseudo-cost heuristic


class Backtracking(IntEnum):
    """Backtracking technique of the branch-and-cut solver"""
    DFS = 1  # depth first search
    BFS = 2  # breadth first search
    BLB = 3  # best local bound
    BPH = 4  # best projection heuristic


class Preprocessing(IntEnum):
    """MIP preprocessing technique"""
    NONE = 0  # disabled
    ROOT = 1  # root level only
    ALL = 2   # all levels


class MPSFormat(IntEnum):
    """MPS file flavour"""
    DECK = 1  # fixed (ancient) MPS format
    FILE = 2  # free (modern) MPS format
