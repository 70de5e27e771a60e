"""
In-memory engine used to test the orchestration without GLPK
"""
from glpkit.constants import ObjDir, SolStatus
from glpkit.data import ProblemData
from glpkit.engine import Engine, FileFormat
from glpkit.results import BasicSolution, MipSolution


class FakeHandle:
    def __init__(self, number):
        self.number = number
        self.alive = True
        self.data = ProblemData()
        self.loads = 0

    def __repr__(self):
        return f"<FakeHandle {self.number}>"


class FakeEngine(Engine):
    """
    Engine storing models in memory and returning scripted results.

    ``codes`` is consumed by successive solve calls (0 once empty);
    ``basic`` and ``mip`` are returned by the solution getters when set,
    otherwise an UNDEF solution sized to the loaded model is returned.
    Files are kept in ``files`` keyed by path.
    """

    def __init__(self):
        self.handles = []
        self.released = []
        self.calls = []
        self.codes = []
        self.basic = None
        self.mip = None
        self.files = {}
        self.fail_writes = False

    def _check(self, handle):
        assert handle.alive, "engine called with a released handle"

    def create(self):
        handle = FakeHandle(len(self.handles))
        self.handles.append(handle)
        return handle

    def release(self, handle):
        self._check(handle)
        handle.alive = False
        self.released.append(handle)

    def load(self, handle, data):
        self._check(handle)
        handle.data = data.copy(names=True)
        handle.loads += 1

    def extract(self, handle):
        self._check(handle)
        return handle.data.copy(names=True)

    def solve(self, handle, method, params):
        self._check(handle)
        self.calls.append((method, params))
        return self.codes.pop(0) if self.codes else 0

    def basic_solution(self, handle):
        self._check(handle)
        if self.basic is not None:
            return self.basic
        solution = BasicSolution()
        solution.row_prim = solution.row_dual = [0.0] * handle.data.num_rows
        solution.col_prim = solution.col_dual = [0.0] * handle.data.num_cols
        solution.row_stat = [r.stat for r in handle.data.rows]
        solution.col_stat = [c.stat for c in handle.data.cols]
        return solution

    def mip_solution(self, handle):
        self._check(handle)
        if self.mip is not None:
            return self.mip
        solution = MipSolution()
        solution.row_val = [0.0] * handle.data.num_rows
        solution.col_val = [0.0] * handle.data.num_cols
        return solution

    def read(self, handle, fmt, params, path):
        self._check(handle)
        if path not in self.files:
            # a real codec may leave a half-read model behind
            handle.data = ProblemData()
            handle.data.add_rows(1)
            return 1
        handle.data = self.files[path].copy(names=True)
        return 0

    def write(self, handle, fmt, params, path):
        self._check(handle)
        if self.fail_writes:
            return 1
        data = handle.data.copy(names=True)
        if fmt in (FileFormat.MPS_DECK, FileFormat.MPS_FILE):
            data.obj_dir = ObjDir.MIN
        self.files[path] = data
        return 0


def optimal_basic(col_prim, row_prim, obj_val):
    """Scripted optimal basic solution"""
    solution = BasicSolution()
    solution.status = SolStatus.OPT
    solution.prim_stat = SolStatus.FEAS
    solution.dual_stat = SolStatus.FEAS
    solution.obj_val = obj_val
    solution.col_prim = list(col_prim)
    solution.col_dual = [0.0] * len(col_prim)
    solution.row_prim = list(row_prim)
    solution.row_dual = [0.0] * len(row_prim)
    return solution
