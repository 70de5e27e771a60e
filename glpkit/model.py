"""
Problem class for glpkit
"""
import logging
import os
from typing import Optional, Sequence, Union

import numpy as np
from scipy import sparse

from .bounds import BoundsSpec, bounds_type_for, status_after_bounds
from .constants import (
    MAX_NAME_LENGTH, BoundsType, MPSFormat, ObjDir, SolStatus, VarKind, VarStatus,
)
from .data import ProblemData
from .engine import Engine, FileFormat, SolveMethod, get_default_engine
from .errors import InvalidArgumentError, ProblemDeletedError
from .fileio import read_problem, write_problem
from .parameters import CPXParameters, IntoptParameters, MPSParameters, SimplexParameters
from .results import BasicSolution, MipSolution, basic_solution_of, mip_solution_of
from .solver import run_solver
from .sparse import SparseVector, _ensure_contiguous_float64, triplets_from

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _check_name(name: str) -> str:
    name = "" if name is None else str(name)
    # the engine limit is on the UTF-8 encoded length
    size = len(name.encode("utf-8"))
    if size > MAX_NAME_LENGTH:
        raise InvalidArgumentError(f"name too long ({size} > {MAX_NAME_LENGTH} bytes)")
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in name):
        raise InvalidArgumentError(f"name {name!r} contains invalid character(s)")
    return name


class Problem:
    """
    LP/MIP optimization problem.

    A problem owns a native handle of its engine. Rows (constraints) and
    columns (variables) are numbered from 1 and can only be appended.
    The problem is built through the methods below, solved with
    ``simplex``, ``exact`` or ``intopt`` and then queried for the
    solution.

    The model represents an LP/MIP of the form:
        minimize or maximize    c'*x + c0
        subject to              rows:    lb_r <= A*x <= ub_r
                                columns: lb_c <= x   <= ub_c

    Parameters
    ----------
    engine : Engine, optional
        Engine providing the handle, solvers and file codecs. If None,
        the default engine (GLPK) is used.

    Examples
    --------
    >>> from glpkit import Problem, BoundsType, MPSFormat, ObjDir
    >>>
    >>> lp = Problem()
    >>> lp.obj_dir = ObjDir.MAX
    >>> lp.add_rows(1)
    1
    >>> lp.set_row_bnds(1, BoundsType.UP, 0, 4.0)
    >>> lp.add_cols(2)
    1
    >>> for j in (1, 2):
    ...     lp.set_col_bnds(j, BoundsType.LO, 0, 0)
    ...     lp.set_obj_coef(j, j)
    >>> lp.set_mat_row(1, [1, 2], [1.0, 1.0])
    >>> solution = lp.simplex()
    >>> lp.obj_val
    8.0
    >>>
    >>> # Don't forget to delete
    >>> lp.delete()

    A problem is also a context manager deleting itself on exit:

    >>> with Problem() as lp:
    ...     lp.read_mps(MPSFormat.FILE, None, "model.mps")
    ...     lp.simplex()
    """

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine if engine is not None else get_default_engine()
        self._handle = self._engine.create()
        self._data = ProblemData()
        self._synced = False

    # Lifecycle

    def _live_handle(self):
        if self._handle is None:
            raise ProblemDeletedError()
        return self._handle

    def _live_data(self) -> ProblemData:
        if self._handle is None:
            raise ProblemDeletedError()
        return self._data

    def _changed(self) -> ProblemData:
        """
        Mark the model as modified.

        The next push reloads the handle, which drops the engine's basic
        solution, so the stored basic status becomes undefined too. Basis
        statuses and the MIP track are kept.
        """
        data = self._live_data()
        self._synced = False
        data.clear_basic()
        return data

    def _sync(self):
        """Push the model into the handle if it changed since the last push"""
        if not self._synced:
            self._engine.load(self._live_handle(), self._data)
            self._synced = True

    def is_valid(self) -> bool:
        """Check if problem is valid (not deleted)"""
        return self._handle is not None

    def delete(self):
        """
        Delete the problem and release its native handle.

        Calling delete on a deleted problem has no effect. Calling any
        other method on a deleted problem raises ProblemDeletedError.
        The handle is also released on garbage collection, but only
        delete() guarantees it happens now.
        """
        if self._handle is not None:
            handle, self._handle = self._handle, None
            self._engine.release(handle)

    def erase(self):
        """Erase the problem; it is then empty as if just created"""
        self._live_data()
        self._data = ProblemData()
        self._synced = False

    def copy(self, names: bool = False) -> 'Problem':
        """
        Independent copy of the problem on the same engine.

        Parameters
        ----------
        names : bool
            Copy the problem, objective, row and column names too
            (default: False)

        Returns
        -------
        Problem
            New problem; its solutions are undefined
        """
        data = self._live_data().copy(names)
        other = Problem(self._engine)
        other._data = data
        return other

    def __del__(self):
        """Destructor - automatically delete problem when object is garbage collected"""
        if getattr(self, '_handle', None) is not None:
            self.delete()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - automatically delete problem"""
        self.delete()
        return False

    def __repr__(self):
        if self._handle is None:
            return "<glpkit.Problem (deleted)>"
        return (f"<glpkit.Problem {self._data.name!r} rows={self._data.num_rows} "
                f"cols={self._data.num_cols}>")

    @classmethod
    def from_arrays(
        cls,
        A: Union[np.ndarray, sparse.spmatrix],
        row_lb: Sequence[float],
        row_ub: Sequence[float],
        col_lb: Sequence[float],
        col_ub: Sequence[float],
        c: Sequence[float],
        obj_dir: ObjDir = ObjDir.MIN,
        integrality: Optional[Sequence[bool]] = None,
        engine: Optional[Engine] = None,
    ) -> 'Problem':
        """
        Create a problem from the constraint matrix and bound arrays.

        Infinite entries (IEEE or +-DBL_MAX) in the bound arrays mean the
        side is unbounded; bounds types are inferred from them.

        Parameters
        ----------
        A : np.ndarray or scipy.sparse matrix
            Constraint matrix (m x n)
        row_lb, row_ub : array-like
            Row bounds (length m)
        col_lb, col_ub : array-like
            Column bounds (length n)
        c : array-like
            Objective coefficients (length n)
        obj_dir : ObjDir
            Optimization direction (default: ObjDir.MIN)
        integrality : array-like of bool, optional
            True for integer columns (length n)
        engine : Engine, optional
            Engine of the new problem

        Returns
        -------
        Problem
        """
        if not (sparse.issparse(A) or isinstance(A, np.ndarray)):
            raise TypeError("A must be a numpy array or scipy sparse matrix")
        m, n = A.shape
        row_lb = _ensure_contiguous_float64(row_lb)
        row_ub = _ensure_contiguous_float64(row_ub)
        col_lb = _ensure_contiguous_float64(col_lb)
        col_ub = _ensure_contiguous_float64(col_ub)
        c = _ensure_contiguous_float64(c)
        if len(row_lb) != m or len(row_ub) != m:
            raise InvalidArgumentError(f"row_lb and row_ub must have length {m} (number of rows)")
        if len(col_lb) != n or len(col_ub) != n or len(c) != n:
            raise InvalidArgumentError(f"col_lb, col_ub and c must have length {n} (number of columns)")
        if integrality is not None and len(integrality) != n:
            raise InvalidArgumentError(f"integrality must have length {n} (number of columns)")

        problem = cls(engine)
        problem.obj_dir = obj_dir
        if m:
            problem.add_rows(m)
        if n:
            problem.add_cols(n)
        for i in range(m):
            problem.set_row_bnds(i + 1, bounds_type_for(row_lb[i], row_ub[i]), row_lb[i], row_ub[i])
        for j in range(n):
            problem.set_col_bnds(j + 1, bounds_type_for(col_lb[j], col_ub[j]), col_lb[j], col_ub[j])
            problem.set_obj_coef(j + 1, c[j])
            if integrality is not None and integrality[j]:
                problem.set_col_kind(j + 1, VarKind.IV)
        problem.load_sparse(A)
        logger.debug("built %r from arrays with %d nonzeros", problem, problem.num_nz)
        return problem

    # Problem-level attributes

    @property
    def name(self) -> str:
        """Problem name, empty if unset"""
        return self._live_data().name

    @name.setter
    def name(self, value: str):
        self._changed().name = _check_name(value)

    @property
    def obj_name(self) -> str:
        """Objective function name, empty if unset"""
        return self._live_data().obj_name

    @obj_name.setter
    def obj_name(self, value: str):
        self._changed().obj_name = _check_name(value)

    @property
    def obj_dir(self) -> ObjDir:
        """Optimization direction, ObjDir.MIN or ObjDir.MAX"""
        return self._live_data().obj_dir

    @obj_dir.setter
    def obj_dir(self, value: ObjDir):
        self._changed().obj_dir = ObjDir(value)

    @property
    def obj_const(self) -> float:
        """Constant term of the objective function"""
        return self._live_data().obj_const

    @obj_const.setter
    def obj_const(self, value: float):
        self._changed().obj_const = float(value)

    @property
    def num_rows(self) -> int:
        """Number of rows"""
        return self._live_data().num_rows

    @property
    def num_cols(self) -> int:
        """Number of columns"""
        return self._live_data().num_cols

    @property
    def num_nz(self) -> int:
        """Number of nonzero constraint coefficients"""
        return self._live_data().matrix.nnz

    @property
    def num_int(self) -> int:
        """Number of integer (including binary) columns"""
        return sum(1 for col in self._live_data().cols if col.integer)

    # Rows and columns

    def _row(self, i: int):
        data = self._live_data()
        if not 1 <= i <= data.num_rows:
            raise IndexError(f"row number {i} out of range 1..{data.num_rows}")
        return data.rows[i - 1]

    def _col(self, j: int):
        data = self._live_data()
        if not 1 <= j <= data.num_cols:
            raise IndexError(f"column number {j} out of range 1..{data.num_cols}")
        return data.cols[j - 1]

    def add_rows(self, n: int) -> int:
        """Add n rows; returns the (1-based) number of the first new row"""
        if n < 1:
            raise InvalidArgumentError(f"invalid number of rows: {n}")
        return self._changed().add_rows(n)

    def add_cols(self, n: int) -> int:
        """Add n columns; returns the (1-based) number of the first new column"""
        if n < 1:
            raise InvalidArgumentError(f"invalid number of columns: {n}")
        return self._changed().add_cols(n)

    def set_row_name(self, i: int, name: str):
        self._row(i).name = _check_name(name)
        self._changed()

    def row_name(self, i: int) -> str:
        return self._row(i).name

    def set_col_name(self, j: int, name: str):
        self._col(j).name = _check_name(name)
        self._changed()

    def col_name(self, j: int) -> str:
        return self._col(j).name

    def find_row(self, name: str) -> int:
        """Number of the first row named ``name``, 0 if there is none or ``name`` is empty"""
        return self._live_data().find_row(name)

    def find_col(self, name: str) -> int:
        """Number of the first column named ``name``, 0 if there is none or ``name`` is empty"""
        return self._live_data().find_col(name)

    def set_row_bnds(self, i: int, type_: BoundsType, lb: float, ub: float):
        """
        Set the bounds of row i.

        ``lb`` is used by LO, DB and FX rows, ``ub`` by UP and DB rows;
        the unused input is discarded. A missing bound reads back as
        -DBL_MAX or +DBL_MAX.
        """
        self._row(i).set_bounds(type_, lb, ub)
        self._changed()

    def row_bounds(self, i: int) -> BoundsSpec:
        return self._row(i).bounds

    def row_type(self, i: int) -> BoundsType:
        return self._row(i).bounds.type

    def row_lb(self, i: int) -> float:
        return self._row(i).bounds.lb

    def row_ub(self, i: int) -> float:
        return self._row(i).bounds.ub

    def set_col_bnds(self, j: int, type_: BoundsType, lb: float, ub: float):
        """Set the bounds of column j, see set_row_bnds"""
        self._col(j).set_bounds(type_, lb, ub)
        self._changed()

    def col_bounds(self, j: int) -> BoundsSpec:
        return self._col(j).bounds

    def col_type(self, j: int) -> BoundsType:
        return self._col(j).bounds.type

    def col_lb(self, j: int) -> float:
        return self._col(j).bounds.lb

    def col_ub(self, j: int) -> float:
        return self._col(j).bounds.ub

    def set_col_kind(self, j: int, kind: VarKind):
        """
        Set the kind of column j.

        VarKind.BV makes the column integer and double bounded in [0, 1].
        """
        self._col(j).set_kind(kind)
        self._changed()

    def col_kind(self, j: int) -> VarKind:
        return self._col(j).kind

    def set_obj_coef(self, j: int, coef: float):
        """Set the objective coefficient of column j; j = 0 sets the constant term"""
        if j == 0:
            self.obj_const = coef
            return
        self._col(j).coef = float(coef)
        self._changed()

    def obj_coef(self, j: int) -> float:
        if j == 0:
            return self.obj_const
        return self._col(j).coef

    # Constraint matrix

    def set_mat_row(self, i: int, ind: Sequence[int], val: Sequence[float]):
        """
        Replace row i of the constraint matrix.

        Sets matrix[i, ind[k]] = val[k] for every k and clears the other
        entries of the row. Requires len(ind) == len(val), column numbers
        in 1..num_cols and no duplicates.
        """
        self._row(i)
        self._data.matrix.set_row(i, ind, val)
        self._changed()

    def set_mat_col(self, j: int, ind: Sequence[int], val: Sequence[float]):
        """
        Replace column j of the constraint matrix.

        Sets matrix[ind[k], j] = val[k], see set_mat_row.
        """
        self._col(j)
        self._data.matrix.set_col(j, ind, val)
        self._changed()

    def mat_row(self, i: int) -> SparseVector:
        """Nonzero elements of row i, indices are column numbers"""
        self._row(i)
        return self._data.matrix.row(i)

    def mat_col(self, j: int) -> SparseVector:
        """Nonzero elements of column j, indices are row numbers"""
        self._col(j)
        return self._data.matrix.col(j)

    def load_matrix(self, ia: Sequence[int], ja: Sequence[int], ar: Sequence[float]):
        """
        Replace the whole constraint matrix.

        Sets matrix[ia[k], ja[k]] = ar[k] for every k; all previous
        entries are removed. Requires len(ia) == len(ja) == len(ar).
        """
        self._live_data().matrix.load(ia, ja, ar)
        self._changed()

    def load_sparse(self, A: Union[np.ndarray, sparse.spmatrix]):
        """Replace the constraint matrix with a dense or scipy sparse matrix"""
        data = self._live_data()
        if not (sparse.issparse(A) or isinstance(A, np.ndarray)):
            raise TypeError("A must be a numpy array or scipy sparse matrix")
        if tuple(A.shape) != (data.num_rows, data.num_cols):
            raise InvalidArgumentError(
                f"matrix shape {tuple(A.shape)} does not match problem "
                f"({data.num_rows}, {data.num_cols})"
            )
        self.load_matrix(*triplets_from(A))

    def matrix(self) -> sparse.csr_matrix:
        """Constraint matrix as a scipy CSR matrix (num_rows x num_cols)"""
        return self._live_data().matrix.to_scipy()

    # Basis

    def set_row_stat(self, i: int, stat: VarStatus):
        """
        Set the basis status of row i.

        Non-basic statuses are fitted to the row bounds, e.g. NL on a free
        row is stored as NF.
        """
        self._row(i).set_stat(stat)
        self._changed()

    def row_stat(self, i: int) -> VarStatus:
        return self._row(i).stat

    def set_col_stat(self, j: int, stat: VarStatus):
        """Set the basis status of column j, see set_row_stat"""
        self._col(j).set_stat(stat)
        self._changed()

    def col_stat(self, j: int) -> VarStatus:
        return self._col(j).stat

    def std_basis(self):
        """Build the trivial basis: all rows basic, all columns non-basic"""
        data = self._changed()
        for row in data.rows:
            row.stat = VarStatus.BS
        for col in data.cols:
            # double-bounded columns go to the bound of smaller magnitude
            col.stat = status_after_bounds(col.bounds, VarStatus.NF)

    # Solving

    def simplex(self, params: Optional[SimplexParameters] = None) -> BasicSolution:
        """
        Solve the LP (relaxation) with the simplex method.

        Parameters
        ----------
        params : SimplexParameters, optional
            Solver parameters. If None, default parameters are used.

        Returns
        -------
        BasicSolution
            Snapshot of the basic solution. A return means the solver
            reached a defined state, which need not be optimal: check
            ``status``.

        Raises
        ------
        SolverError
            The solver could not reach a defined state
        """
        return run_solver(self, SolveMethod.SIMPLEX, params)

    def exact(self, params: Optional[SimplexParameters] = None) -> BasicSolution:
        """Solve the LP with the simplex method in exact arithmetic, see simplex"""
        return run_solver(self, SolveMethod.EXACT, params)

    def intopt(self, params: Optional[IntoptParameters] = None) -> MipSolution:
        """
        Solve the MIP with the branch-and-cut method.

        Unless ``params.presolve`` is set, the LP relaxation must have been
        solved to optimality after the last change to the problem.

        Parameters
        ----------
        params : IntoptParameters, optional
            Solver parameters. If None, default parameters are used.

        Returns
        -------
        MipSolution
            Snapshot of the MIP solution, status OPT or FEAS

        Raises
        ------
        SolverError
            The solver failed, or no integer feasible solution exists
        """
        return run_solver(self, SolveMethod.INTOPT, params)

    @property
    def status(self) -> SolStatus:
        """Status of the basic solution"""
        return self._live_data().status

    @property
    def prim_stat(self) -> SolStatus:
        """Status of the primal basic solution"""
        return self._live_data().prim_stat

    @property
    def dual_stat(self) -> SolStatus:
        """Status of the dual basic solution"""
        return self._live_data().dual_stat

    @property
    def obj_val(self) -> float:
        """Objective value of the basic solution"""
        return self._live_data().obj_val

    def row_prim(self, i: int) -> float:
        return self._row(i).prim

    def row_dual(self, i: int) -> float:
        return self._row(i).dual

    def col_prim(self, j: int) -> float:
        return self._col(j).prim

    def col_dual(self, j: int) -> float:
        return self._col(j).dual

    @property
    def mip_status(self) -> SolStatus:
        """Status of the MIP solution"""
        return self._live_data().mip_status

    @property
    def mip_obj_val(self) -> float:
        """Objective value of the MIP solution"""
        return self._live_data().mip_obj_val

    def mip_row_val(self, i: int) -> float:
        return self._row(i).mip

    def mip_col_val(self, j: int) -> float:
        return self._col(j).mip

    def solution(self) -> BasicSolution:
        """Snapshot of the current basic solution"""
        return basic_solution_of(self._live_data())

    def mip_solution(self) -> MipSolution:
        """Snapshot of the current MIP solution"""
        return mip_solution_of(self._live_data())

    # File formats

    def read(self, fmt: FileFormat, filename: PathLike, params=None):
        """Read the problem from a file in any supported format"""
        read_problem(self, FileFormat(fmt), params, filename)

    def write(self, fmt: FileFormat, filename: PathLike, params=None):
        """Write the problem to a file in any supported format"""
        write_problem(self, FileFormat(fmt), params, filename)

    def read_mps(self, fmt: MPSFormat, params: Optional[MPSParameters], filename: PathLike):
        """
        Read the problem from an MPS file.

        MPS does not specify the objective direction; the problem is read
        as a minimization, set ``obj_dir`` afterwards if needed.
        On failure ReadError is raised and the problem is left unchanged.
        """
        self.read(_mps_format(fmt), filename, params)

    def write_mps(self, fmt: MPSFormat, params: Optional[MPSParameters], filename: PathLike):
        """Write the problem to an MPS file; the direction is not written"""
        self.write(_mps_format(fmt), filename, params)

    def read_lp(self, params: Optional[CPXParameters], filename: PathLike):
        """Read the problem from a CPLEX LP file"""
        self.read(FileFormat.CPLEX_LP, filename, params)

    def write_lp(self, params: Optional[CPXParameters], filename: PathLike):
        """Write the problem to a CPLEX LP file"""
        self.write(FileFormat.CPLEX_LP, filename, params)

    def read_prob(self, flags: int, filename: PathLike):
        """Read the problem from a GLPK LP/MIP file; flags are reserved, use 0"""
        self.read(FileFormat.GLPK_PROB, filename, flags)

    def write_prob(self, flags: int, filename: PathLike):
        """Write the problem to a GLPK LP/MIP file; flags are reserved, use 0"""
        self.write(FileFormat.GLPK_PROB, filename, flags)


def _mps_format(fmt: MPSFormat) -> FileFormat:
    if MPSFormat(fmt) == MPSFormat.DECK:
        return FileFormat.MPS_DECK
    return FileFormat.MPS_FILE
