"""
Control parameter blocks for the solvers and the file readers/writers
"""
from .constants import (
    DBL_MAX, INT_MAX, OFF, Backtracking, Branching, Method, MsgLevel,
    Preprocessing, Pricing, RatioTest,
)


class _ParameterBlock:
    """Plain attribute container with dict conversion"""

    _fields = ()

    @classmethod
    def from_dict(cls, d):
        """Create parameters from dictionary, unknown keys are ignored"""
        param = cls()
        for key, value in d.items():
            if key in cls._fields:
                setattr(param, key, value)
        return param

    def to_dict(self):
        """Convert to dictionary"""
        return {key: getattr(self, key) for key in self._fields}

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        items = ", ".join(f"{key}={getattr(self, key)!r}" for key in self._shown)
        return f"{type(self).__name__}({items})"

    _shown = ()


class SimplexParameters(_ParameterBlock):
    """
    Control parameters of the simplex and exact simplex solvers.

    Attributes
    ----------
    msg_lev : MsgLevel
        Terminal output level (default: MsgLevel.ALL)
    meth : Method
        Simplex method option (default: Method.PRIMAL)
    pricing : Pricing
        Pricing technique (default: Pricing.PSE)
    r_test : RatioTest
        Ratio test technique (default: RatioTest.HAR)
    tol_bnd : float
        Tolerance used to check primal feasibility (default: 1e-7)
    tol_dj : float
        Tolerance used to check dual feasibility (default: 1e-7)
    tol_piv : float
        Tolerance used to choose eligible pivots (default: 1e-9)
    obj_ll : float
        Lower limit of the objective, dual simplex only (default: -DBL_MAX)
    obj_ul : float
        Upper limit of the objective, dual simplex only (default: +DBL_MAX)
    it_lim : int
        Simplex iteration limit (default: INT_MAX)
    tm_lim : int
        Searching time limit in milliseconds (default: INT_MAX)
    out_frq : int
        Output frequency in iterations (default: 500)
    out_dly : int
        Output delay in milliseconds (default: 0)
    presolve : bool
        Use the LP presolver (default: False)

    Only ``msg_lev``, ``it_lim`` and ``tm_lim`` are honored by the exact
    simplex solver.

    Examples
    --------
    >>> smcp = SimplexParameters()
    >>> smcp.msg_lev = MsgLevel.ERR
    >>> smcp.meth = Method.DUALP
    """

    _fields = ('msg_lev', 'meth', 'pricing', 'r_test', 'tol_bnd', 'tol_dj',
               'tol_piv', 'obj_ll', 'obj_ul', 'it_lim', 'tm_lim', 'out_frq',
               'out_dly', 'presolve')
    _shown = ('msg_lev', 'meth', 'pricing', 'r_test', 'it_lim', 'tm_lim', 'presolve')

    def __init__(self):
        self.msg_lev = MsgLevel.ALL
        self.meth = Method.PRIMAL
        self.pricing = Pricing.PSE
        self.r_test = RatioTest.HAR
        self.tol_bnd = 1e-7
        self.tol_dj = 1e-7
        self.tol_piv = 1e-9
        self.obj_ll = -DBL_MAX
        self.obj_ul = DBL_MAX
        self.it_lim = INT_MAX
        self.tm_lim = INT_MAX
        self.out_frq = 500
        self.out_dly = 0
        self.presolve = False


class IntoptParameters(_ParameterBlock):
    """
    Control parameters of the branch-and-cut solver.

    Attributes
    ----------
    msg_lev : MsgLevel
        Terminal output level (default: MsgLevel.ALL)
    br_tech : Branching
        Branching technique (default: Branching.DTH)
    bt_tech : Backtracking
        Backtracking technique (default: Backtracking.BLB)
    pp_tech : Preprocessing
        Preprocessing technique (default: Preprocessing.ALL)
    tol_int : float
        Integer feasibility tolerance (default: 1e-5)
    tol_obj : float
        Relative objective tolerance (default: 1e-7)
    mip_gap : float
        Relative MIP gap tolerance (default: 0.0)
    tm_lim : int
        Searching time limit in milliseconds (default: INT_MAX)
    out_frq : int
        Output frequency in milliseconds (default: 5000)
    out_dly : int
        Output delay in milliseconds (default: 10000)
    mir_cuts, gmi_cuts, cov_cuts, clq_cuts : bool
        Generate mixed integer rounding, Gomory, cover and clique cuts
        (default: False)
    presolve : bool
        Use the MIP presolver (default: False). Without it the LP
        relaxation must have been solved to optimality beforehand.
    binarize : bool
        Replace general integer variables by binary ones, presolver
        only (default: False)
    fp_heur : bool
        Apply the feasibility pump heuristic (default: False)
    """

    _fields = ('msg_lev', 'br_tech', 'bt_tech', 'pp_tech', 'tol_int', 'tol_obj',
               'mip_gap', 'tm_lim', 'out_frq', 'out_dly', 'mir_cuts', 'gmi_cuts',
               'cov_cuts', 'clq_cuts', 'presolve', 'binarize', 'fp_heur')
    _shown = ('msg_lev', 'presolve', 'mip_gap', 'tm_lim')

    def __init__(self):
        self.msg_lev = MsgLevel.ALL
        self.br_tech = Branching.DTH
        self.bt_tech = Backtracking.BLB
        self.pp_tech = Preprocessing.ALL
        self.tol_int = 1e-5
        self.tol_obj = 1e-7
        self.mip_gap = 0.0
        self.tm_lim = INT_MAX
        self.out_frq = 5000
        self.out_dly = 10000
        self.mir_cuts = False
        self.gmi_cuts = False
        self.cov_cuts = False
        self.clq_cuts = False
        self.presolve = False
        self.binarize = False
        self.fp_heur = False


class MPSParameters(_ParameterBlock):
    """
    MPS format control parameters.

    Attributes
    ----------
    blank : int
        Character code that replaces blanks in symbolic names when
        writing free MPS, 0 means names with blanks are rejected
        (default: 0)
    tol_mps : float
        Tolerance used when writing numbers, 0 means full precision
        (default: 1e-12)
    """

    _fields = ('blank', 'tol_mps')
    _shown = _fields

    def __init__(self):
        self.blank = OFF
        self.tol_mps = 1e-12


class CPXParameters(_ParameterBlock):
    """CPLEX LP format control parameters, reserved by the engine"""

    _fields = ()
    _shown = ()
