"""
Solution snapshots returned by the engine and by Problem
"""
import numpy as np
from typing import Dict, Any

from .constants import SolStatus, VarStatus


def _as_array(values) -> np.ndarray:
    return np.asarray(values if values is not None else [], dtype=np.float64)


class BasicSolution:
    """
    Basic solution produced by the simplex or exact simplex solver.

    Attributes
    ----------
    status : SolStatus
        Status of the basic solution
    prim_stat : SolStatus
        Status of the primal basic solution
    dual_stat : SolStatus
        Status of the dual basic solution
    obj_val : float
        Objective value
    row_prim, row_dual : np.ndarray
        Primal and dual values of the rows, ``row_prim[i - 1]`` is row i
    col_prim, col_dual : np.ndarray
        Primal and dual values of the columns
    row_stat, col_stat : list of VarStatus
        Basis status of every row and column

    Methods
    -------
    is_optimal()
        Check if solution is optimal
    to_dict()
        Convert solution to dictionary
    """

    def __init__(self):
        self.status: SolStatus = SolStatus.UNDEF
        self.prim_stat: SolStatus = SolStatus.UNDEF
        self.dual_stat: SolStatus = SolStatus.UNDEF
        self.obj_val: float = 0.0
        self.row_prim: np.ndarray = _as_array(None)
        self.row_dual: np.ndarray = _as_array(None)
        self.col_prim: np.ndarray = _as_array(None)
        self.col_dual: np.ndarray = _as_array(None)
        self.row_stat = []
        self.col_stat = []

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.status == SolStatus.OPT

    def is_feasible(self) -> bool:
        """Check if solution is feasible"""
        return self.status in (SolStatus.OPT, SolStatus.FEAS)

    def __repr__(self):
        return (f"BasicSolution(status={self.status.name}, "
                f"obj_val={self.obj_val:g}, "
                f"n_rows={len(self.row_prim)}, "
                f"n_cols={len(self.col_prim)})")

    def __str__(self):
        lines = [
            "Basic Solution",
            "=" * 50,
            f"Status:          {self.status.name}",
            f"Primal status:   {self.prim_stat.name}",
            f"Dual status:     {self.dual_stat.name}",
            f"Objective:       {self.obj_val:.6e}",
            f"Rows:            {len(self.row_prim)}",
            f"Columns:         {len(self.col_prim)}",
        ]
        if len(self.col_prim):
            lines.append(f"||x||:           {np.linalg.norm(self.col_prim):.6e}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert solution to dictionary"""
        return {
            'status': int(self.status),
            'prim_stat': int(self.prim_stat),
            'dual_stat': int(self.dual_stat),
            'obj_val': self.obj_val,
            'row_prim': self.row_prim.tolist(),
            'row_dual': self.row_dual.tolist(),
            'col_prim': self.col_prim.tolist(),
            'col_dual': self.col_dual.tolist(),
            'row_stat': [int(s) for s in self.row_stat],
            'col_stat': [int(s) for s in self.col_stat],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        """Create BasicSolution from dictionary"""
        solution = cls()
        for key, value in d.items():
            if key in ('status', 'prim_stat', 'dual_stat'):
                setattr(solution, key, SolStatus(value))
            elif key in ('row_prim', 'row_dual', 'col_prim', 'col_dual'):
                setattr(solution, key, _as_array(value))
            elif key in ('row_stat', 'col_stat'):
                setattr(solution, key, [VarStatus(s) for s in value])
            elif hasattr(solution, key):
                setattr(solution, key, value)
        return solution


class MipSolution:
    """
    Integer solution produced by the branch-and-cut solver.

    Attributes
    ----------
    status : SolStatus
        MIP status: UNDEF, OPT, FEAS or NOFEAS
    obj_val : float
        Objective value of the integer solution
    row_val, col_val : np.ndarray
        Row and column values of the integer solution
    """

    def __init__(self):
        self.status: SolStatus = SolStatus.UNDEF
        self.obj_val: float = 0.0
        self.row_val: np.ndarray = _as_array(None)
        self.col_val: np.ndarray = _as_array(None)

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.status == SolStatus.OPT

    def is_feasible(self) -> bool:
        """Check if an integer feasible solution was found"""
        return self.status in (SolStatus.OPT, SolStatus.FEAS)

    def __repr__(self):
        return (f"MipSolution(status={self.status.name}, "
                f"obj_val={self.obj_val:g}, "
                f"n_cols={len(self.col_val)})")

    def __str__(self):
        return "\n".join([
            "MIP Solution",
            "=" * 50,
            f"Status:          {self.status.name}",
            f"Objective:       {self.obj_val:.6e}",
            f"Rows:            {len(self.row_val)}",
            f"Columns:         {len(self.col_val)}",
        ])

    def to_dict(self) -> Dict[str, Any]:
        """Convert solution to dictionary"""
        return {
            'status': int(self.status),
            'obj_val': self.obj_val,
            'row_val': self.row_val.tolist(),
            'col_val': self.col_val.tolist(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        """Create MipSolution from dictionary"""
        solution = cls()
        for key, value in d.items():
            if key == 'status':
                solution.status = SolStatus(value)
            elif key in ('row_val', 'col_val'):
                setattr(solution, key, _as_array(value))
            elif hasattr(solution, key):
                setattr(solution, key, value)
        return solution


def basic_solution_of(data) -> BasicSolution:
    """Snapshot the basic solution currently stored in a ProblemData"""
    solution = BasicSolution()
    solution.status = data.status
    solution.prim_stat = data.prim_stat
    solution.dual_stat = data.dual_stat
    solution.obj_val = data.obj_val
    solution.row_prim = _as_array([r.prim for r in data.rows])
    solution.row_dual = _as_array([r.dual for r in data.rows])
    solution.col_prim = _as_array([c.prim for c in data.cols])
    solution.col_dual = _as_array([c.dual for c in data.cols])
    solution.row_stat = [r.stat for r in data.rows]
    solution.col_stat = [c.stat for c in data.cols]
    return solution


def mip_solution_of(data) -> MipSolution:
    """Snapshot the MIP solution currently stored in a ProblemData"""
    solution = MipSolution()
    solution.status = data.mip_status
    solution.obj_val = data.mip_obj_val
    solution.row_val = _as_array([r.mip for r in data.rows])
    solution.col_val = _as_array([c.mip for c in data.cols])
    return solution
