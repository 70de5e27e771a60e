"""
Solver orchestration for glpkit
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .constants import ObjDir, SolStatus
from .engine import FileFormat, SolveMethod
from .errors import OptError, SolverError
from .parameters import IntoptParameters, SimplexParameters
from .results import BasicSolution, MipSolution

logger = logging.getLogger(__name__)


def _apply_basic(data, solution: BasicSolution):
    data.status = solution.status
    data.prim_stat = solution.prim_stat
    data.dual_stat = solution.dual_stat
    data.obj_val = solution.obj_val
    for row, prim, dual in zip(data.rows, solution.row_prim, solution.row_dual):
        row.prim, row.dual = float(prim), float(dual)
    for col, prim, dual in zip(data.cols, solution.col_prim, solution.col_dual):
        col.prim, col.dual = float(prim), float(dual)
    for entity, stat in zip(data.rows, solution.row_stat):
        entity.stat = stat
    for entity, stat in zip(data.cols, solution.col_stat):
        entity.stat = stat


def _apply_mip(data, solution: MipSolution):
    data.mip_status = solution.status
    data.mip_obj_val = solution.obj_val
    for row, value in zip(data.rows, solution.row_val):
        row.mip = float(value)
    for col, value in zip(data.cols, solution.col_val):
        col.mip = float(value)


def run_solver(problem, method: SolveMethod, params=None):
    """
    Run one solve method on a problem and store the outcome in it.

    The basic solution is updated by SIMPLEX and EXACT, the MIP solution
    by INTOPT; the other track is left alone.

    Parameters
    ----------
    problem : Problem
        Live problem
    method : SolveMethod
        Solver to run
    params : SimplexParameters or IntoptParameters, optional
        Control parameters, None for engine defaults

    Returns
    -------
    BasicSolution or MipSolution
        Snapshot of the updated track

    Raises
    ------
    SolverError
        The engine returned a nonzero code, or branch-and-cut finished
        without any integer feasible solution.
    """
    handle = problem._live_handle()
    engine = problem._engine
    data = problem._data
    problem._sync()

    if method == SolveMethod.INTOPT and not any(col.integer for col in data.cols):
        logger.debug("intopt called on %r which has no integer columns", problem)

    logger.debug("running %s on %r", method.value, problem)
    rc = engine.solve(handle, method, params)

    if method == SolveMethod.INTOPT:
        solution = engine.mip_solution(handle)
        _apply_mip(data, solution)
    else:
        solution = engine.basic_solution(handle)
        _apply_basic(data, solution)

    if rc != 0:
        error = SolverError(rc, method.value)
        logger.warning("%s failed on %r: %s", method.value, problem, error)
        raise error
    if method == SolveMethod.INTOPT and solution.status == SolStatus.NOFEAS:
        logger.warning("intopt found no integer feasible solution for %r", problem)
        raise SolverError(OptError.ENOPFS, method.value)

    logger.debug("%s finished on %r with status %s, objective %g",
                 method.value, problem, solution.status.name, solution.obj_val)
    return solution


class Solver:
    """
    High-level interface solving problems with fixed parameters.

    Parameters
    ----------
    simplex_params : SimplexParameters, optional
        Parameters for simplex runs. If None, default parameters are used.
    intopt_params : IntoptParameters, optional
        Parameters for branch-and-cut runs. If None, default parameters
        are used.
    exact : bool
        Use the exact arithmetic simplex for LP solves (default: False)

    Examples
    --------
    >>> from glpkit import Solver, SimplexParameters, MsgLevel, FileFormat
    >>> params = SimplexParameters()
    >>> params.msg_lev = MsgLevel.ERR
    >>> solver = Solver(params)
    >>> solution = solver.solve_file("model.mps", FileFormat.MPS_FILE)
    >>> print(solution.obj_val)
    """

    def __init__(self, simplex_params: Optional[SimplexParameters] = None,
                 intopt_params: Optional[IntoptParameters] = None,
                 exact: bool = False):
        self.simplex_params = simplex_params if simplex_params is not None else SimplexParameters()
        self.intopt_params = intopt_params if intopt_params is not None else IntoptParameters()
        self.exact = exact

    def solve(self, problem) -> BasicSolution:
        """Solve the LP (relaxation) of a problem"""
        if self.exact:
            return problem.exact(self.simplex_params)
        return problem.simplex(self.simplex_params)

    def solve_mip(self, problem) -> MipSolution:
        """
        Solve a MIP with branch-and-cut.

        Without presolve the engine needs an optimal LP relaxation, so the
        relaxation is solved first unless it is already optimal.
        """
        if not self.intopt_params.presolve and problem.status != SolStatus.OPT:
            self.solve(problem)
        return problem.intopt(self.intopt_params)

    def solve_file(
        self,
        filename: Union[str, Path],
        fmt: FileFormat = FileFormat.MPS_FILE,
        obj_dir: Optional[ObjDir] = None,
    ) -> Union[BasicSolution, MipSolution]:
        """
        Read a problem file, solve it and release it.

        Parameters
        ----------
        filename : str or Path
            Path to the problem file
        fmt : FileFormat
            Format of the file (default: free MPS)
        obj_dir : ObjDir, optional
            Direction to apply after reading; MPS files carry none and
            are read as minimization.

        Returns
        -------
        BasicSolution or MipSolution
            MIP solution when the problem has integer columns, basic
            solution otherwise
        """
        from .model import Problem

        with Problem() as problem:
            problem.read(fmt, filename)
            if obj_dir is not None:
                problem.obj_dir = obj_dir
            if problem.num_int > 0:
                return self.solve_mip(problem)
            return self.solve(problem)


def solve_file(
    filename: Union[str, Path],
    fmt: FileFormat = FileFormat.MPS_FILE,
    simplex_params: Optional[SimplexParameters] = None,
    intopt_params: Optional[IntoptParameters] = None,
    obj_dir: Optional[ObjDir] = None,
) -> Union[BasicSolution, MipSolution]:
    """
    Convenience function to solve a problem file without creating a solver object.

    Examples
    --------
    >>> from glpkit import solve_file, FileFormat, ObjDir
    >>> solution = solve_file("sample.mps", FileFormat.MPS_DECK, obj_dir=ObjDir.MAX)
    >>> print(solution)
    """
    solver = Solver(simplex_params, intopt_params)
    return solver.solve_file(filename, fmt, obj_dir)
