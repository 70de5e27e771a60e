"""
In-memory model: rows, columns and the problem data they belong to
"""
from typing import List

from .bounds import FREE_BOUNDS, ZERO_BOUNDS, BoundsSpec, fit_status, status_after_bounds
from .constants import BoundsType, ObjDir, SolStatus, VarKind, VarStatus
from .sparse import SparseMatrix


class Row:
    """
    A constraint, i.e. an auxiliary variable bounded by ``bounds``.

    New rows are free and basic.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.bounds: BoundsSpec = FREE_BOUNDS
        self.stat: VarStatus = VarStatus.BS
        self.prim: float = 0.0
        self.dual: float = 0.0
        self.mip: float = 0.0

    def set_bounds(self, type_, lb: float, ub: float):
        self.bounds = BoundsSpec.resolve(type_, lb, ub)
        self.stat = status_after_bounds(self.bounds, self.stat)

    def set_stat(self, stat):
        self.stat = fit_status(self.bounds, stat)

    def clear_solution(self):
        self.prim = self.dual = self.mip = 0.0

    def copy(self, names: bool = True) -> 'Row':
        row = Row(self.name if names else "")
        row.bounds = self.bounds
        row.stat = self.stat
        return row

    def __repr__(self):
        return f"Row(name={self.name!r}, bounds={tuple(self.bounds)!r})"


class Column(Row):
    """
    A structural variable.

    New columns are continuous, fixed at zero, non-basic and have a zero
    objective coefficient.
    """

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.bounds = ZERO_BOUNDS
        self.stat = VarStatus.NS
        self.integer = False
        self.coef = 0.0

    @property
    def kind(self) -> VarKind:
        """BV for an integer column bounded to [0, 1], else IV or CV"""
        if not self.integer:
            return VarKind.CV
        if self.bounds == (BoundsType.DB, 0.0, 1.0):
            return VarKind.BV
        return VarKind.IV

    def set_kind(self, kind):
        kind = VarKind(kind)
        self.integer = kind != VarKind.CV
        if kind == VarKind.BV:
            self.set_bounds(BoundsType.DB, 0.0, 1.0)

    def copy(self, names: bool = True) -> 'Column':
        col = Column(self.name if names else "")
        col.bounds = self.bounds
        col.stat = self.stat
        col.integer = self.integer
        col.coef = self.coef
        return col

    def __repr__(self):
        return (f"Column(name={self.name!r}, bounds={tuple(self.bounds)!r}, "
                f"kind={self.kind.name}, coef={self.coef!r})")


class ProblemData:
    """
    Complete state of an LP/MIP: model and last solutions.

    This is what travels between a Problem and its engine. Rows and
    columns are kept in 1-based order; ``rows[i - 1]`` is row ``i``.
    """

    def __init__(self):
        self.name = ""
        self.obj_name = ""
        self.obj_dir = ObjDir.MIN
        self.obj_const = 0.0
        self.rows: List[Row] = []
        self.cols: List[Column] = []
        self.matrix = SparseMatrix()
        self.clear_basic()
        self.clear_mip()

    def clear_basic(self):
        self.status = SolStatus.UNDEF
        self.prim_stat = SolStatus.UNDEF
        self.dual_stat = SolStatus.UNDEF
        self.obj_val = 0.0

    def clear_mip(self):
        self.mip_status = SolStatus.UNDEF
        self.mip_obj_val = 0.0

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        return len(self.cols)

    def add_rows(self, n: int) -> int:
        first = len(self.rows) + 1
        self.rows.extend(Row() for _ in range(n))
        self.matrix.add_rows(n)
        return first

    def add_cols(self, n: int) -> int:
        first = len(self.cols) + 1
        self.cols.extend(Column() for _ in range(n))
        self.matrix.add_cols(n)
        return first

    def find_row(self, name: str) -> int:
        if not name:
            return 0
        for i, row in enumerate(self.rows, start=1):
            if row.name == name:
                return i
        return 0

    def find_col(self, name: str) -> int:
        if not name:
            return 0
        for j, col in enumerate(self.cols, start=1):
            if col.name == name:
                return j
        return 0

    def copy(self, names: bool = True) -> 'ProblemData':
        """Copy of the model; solutions of the copy are undefined"""
        data = ProblemData()
        if names:
            data.name = self.name
            data.obj_name = self.obj_name
        data.obj_dir = self.obj_dir
        data.obj_const = self.obj_const
        data.rows = [row.copy(names) for row in self.rows]
        data.cols = [col.copy(names) for col in self.cols]
        data.matrix = self.matrix.copy()
        return data

    def __repr__(self):
        return (f"<ProblemData {self.name!r} rows={self.num_rows} "
                f"cols={self.num_cols} nnz={self.matrix.nnz}>")
