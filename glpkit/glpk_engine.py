"""
Engine backed by the GNU Linear Programming Kit through swiglpk
"""
import logging
from typing import Optional

from .bounds import BoundsSpec
from .constants import ObjDir, SolStatus, VarKind, VarStatus
from .data import ProblemData
from .engine import Engine, FileFormat, SolveMethod
from .parameters import CPXParameters, IntoptParameters, MPSParameters, SimplexParameters
from .results import BasicSolution, MipSolution, _as_array

try:
    import swiglpk as glpk
except ImportError as e:
    raise ImportError(
        f"Failed to import the GLPK bindings: {e}\n\n"
        f"Please install them with:\n"
        f"  python -m pip install swiglpk\n"
    ) from e

logger = logging.getLogger(__name__)


def _int_array(values):
    """1-based native int array, slot 0 is left unused"""
    arr = glpk.intArray(len(values) + 1)
    for k, v in enumerate(values, start=1):
        arr[k] = int(v)
    return arr


def _double_array(values):
    """1-based native double array, slot 0 is left unused"""
    arr = glpk.doubleArray(len(values) + 1)
    for k, v in enumerate(values, start=1):
        arr[k] = float(v)
    return arr


def _flag(value: bool) -> int:
    return glpk.GLP_ON if value else glpk.GLP_OFF


def _smcp(params: Optional[SimplexParameters]):
    parm = glpk.glp_smcp()
    glpk.glp_init_smcp(parm)
    if params is None:
        return parm
    parm.msg_lev = int(params.msg_lev)
    parm.meth = int(params.meth)
    parm.pricing = int(params.pricing)
    parm.r_test = int(params.r_test)
    parm.tol_bnd = float(params.tol_bnd)
    parm.tol_dj = float(params.tol_dj)
    parm.tol_piv = float(params.tol_piv)
    parm.obj_ll = float(params.obj_ll)
    parm.obj_ul = float(params.obj_ul)
    parm.it_lim = int(params.it_lim)
    parm.tm_lim = int(params.tm_lim)
    parm.out_frq = int(params.out_frq)
    parm.out_dly = int(params.out_dly)
    parm.presolve = _flag(params.presolve)
    return parm


def _iocp(params: Optional[IntoptParameters]):
    parm = glpk.glp_iocp()
    glpk.glp_init_iocp(parm)
    if params is None:
        return parm
    parm.msg_lev = int(params.msg_lev)
    parm.br_tech = int(params.br_tech)
    parm.bt_tech = int(params.bt_tech)
    parm.pp_tech = int(params.pp_tech)
    parm.tol_int = float(params.tol_int)
    parm.tol_obj = float(params.tol_obj)
    parm.mip_gap = float(params.mip_gap)
    parm.tm_lim = int(params.tm_lim)
    parm.out_frq = int(params.out_frq)
    parm.out_dly = int(params.out_dly)
    parm.mir_cuts = _flag(params.mir_cuts)
    parm.gmi_cuts = _flag(params.gmi_cuts)
    parm.cov_cuts = _flag(params.cov_cuts)
    parm.clq_cuts = _flag(params.clq_cuts)
    parm.presolve = _flag(params.presolve)
    parm.binarize = _flag(params.binarize)
    parm.fp_heur = _flag(params.fp_heur)
    return parm


def _mpscp(params: Optional[MPSParameters]):
    parm = glpk.glp_mpscp()
    glpk.glp_init_mpscp(parm)
    if params is None:
        return parm
    parm.blank = int(params.blank)
    parm.tol_mps = float(params.tol_mps)
    return parm


def _cpxcp(params: Optional[CPXParameters]):
    parm = glpk.glp_cpxcp()
    glpk.glp_init_cpxcp(parm)
    return parm


class GlpkEngine(Engine):
    """
    Engine running the GLPK solvers and file codecs.

    A handle is a native ``glp_prob`` pointer.
    """

    def create(self):
        handle = glpk.glp_create_prob()
        logger.debug("created GLPK problem %s", handle)
        return handle

    def release(self, handle):
        glpk.glp_delete_prob(handle)
        logger.debug("deleted GLPK problem %s", handle)

    def load(self, handle, data: ProblemData):
        lp = handle
        glpk.glp_erase_prob(lp)
        glpk.glp_set_prob_name(lp, data.name)
        glpk.glp_set_obj_name(lp, data.obj_name)
        glpk.glp_set_obj_dir(lp, int(data.obj_dir))
        glpk.glp_set_obj_coef(lp, 0, data.obj_const)

        if data.num_rows:
            glpk.glp_add_rows(lp, data.num_rows)
        for i, row in enumerate(data.rows, start=1):
            if row.name:
                glpk.glp_set_row_name(lp, i, row.name)
            glpk.glp_set_row_bnds(lp, i, int(row.bounds.type), row.bounds.lb, row.bounds.ub)
            glpk.glp_set_row_stat(lp, i, int(row.stat))

        if data.num_cols:
            glpk.glp_add_cols(lp, data.num_cols)
        for j, col in enumerate(data.cols, start=1):
            if col.name:
                glpk.glp_set_col_name(lp, j, col.name)
            glpk.glp_set_col_bnds(lp, j, int(col.bounds.type), col.bounds.lb, col.bounds.ub)
            if col.integer:
                glpk.glp_set_col_kind(lp, j, glpk.GLP_IV)
            glpk.glp_set_obj_coef(lp, j, col.coef)
            glpk.glp_set_col_stat(lp, j, int(col.stat))

        ia, ja, ar = data.matrix.triplets()
        if len(ia):
            glpk.glp_load_matrix(lp, len(ia), _int_array(ia), _int_array(ja), _double_array(ar))
        logger.debug("loaded %d rows, %d columns, %d nonzeros into GLPK",
                     data.num_rows, data.num_cols, len(ia))

    def extract(self, handle) -> ProblemData:
        lp = handle
        data = ProblemData()
        data.name = glpk.glp_get_prob_name(lp) or ""
        data.obj_name = glpk.glp_get_obj_name(lp) or ""
        data.obj_dir = ObjDir(glpk.glp_get_obj_dir(lp))
        data.obj_const = glpk.glp_get_obj_coef(lp, 0)
        data.add_rows(glpk.glp_get_num_rows(lp))
        data.add_cols(glpk.glp_get_num_cols(lp))

        for i, row in enumerate(data.rows, start=1):
            row.name = glpk.glp_get_row_name(lp, i) or ""
            row.bounds = BoundsSpec.resolve(glpk.glp_get_row_type(lp, i),
                                            glpk.glp_get_row_lb(lp, i),
                                            glpk.glp_get_row_ub(lp, i))
            row.stat = VarStatus(glpk.glp_get_row_stat(lp, i))

        for j, col in enumerate(data.cols, start=1):
            col.name = glpk.glp_get_col_name(lp, j) or ""
            col.bounds = BoundsSpec.resolve(glpk.glp_get_col_type(lp, j),
                                            glpk.glp_get_col_lb(lp, j),
                                            glpk.glp_get_col_ub(lp, j))
            col.integer = glpk.glp_get_col_kind(lp, j) != VarKind.CV
            col.coef = glpk.glp_get_obj_coef(lp, j)
            col.stat = VarStatus(glpk.glp_get_col_stat(lp, j))

        for i in range(1, data.num_rows + 1):
            length = glpk.glp_get_mat_row(lp, i, None, None)
            if not length:
                continue
            ind = glpk.intArray(length + 1)
            val = glpk.doubleArray(length + 1)
            glpk.glp_get_mat_row(lp, i, ind, val)
            data.matrix.set_row(i, [ind[k] for k in range(1, length + 1)],
                                [val[k] for k in range(1, length + 1)])
        return data

    def solve(self, handle, method: SolveMethod, params) -> int:
        if method == SolveMethod.SIMPLEX:
            return glpk.glp_simplex(handle, _smcp(params))
        if method == SolveMethod.EXACT:
            return glpk.glp_exact(handle, _smcp(params))
        if method == SolveMethod.INTOPT:
            return glpk.glp_intopt(handle, _iocp(params))
        raise ValueError(f"Unknown solve method: {method!r}")

    def basic_solution(self, handle) -> BasicSolution:
        lp = handle
        m = glpk.glp_get_num_rows(lp)
        n = glpk.glp_get_num_cols(lp)
        solution = BasicSolution()
        solution.status = SolStatus(glpk.glp_get_status(lp))
        solution.prim_stat = SolStatus(glpk.glp_get_prim_stat(lp))
        solution.dual_stat = SolStatus(glpk.glp_get_dual_stat(lp))
        solution.obj_val = glpk.glp_get_obj_val(lp)
        solution.row_prim = _as_array([glpk.glp_get_row_prim(lp, i) for i in range(1, m + 1)])
        solution.row_dual = _as_array([glpk.glp_get_row_dual(lp, i) for i in range(1, m + 1)])
        solution.col_prim = _as_array([glpk.glp_get_col_prim(lp, j) for j in range(1, n + 1)])
        solution.col_dual = _as_array([glpk.glp_get_col_dual(lp, j) for j in range(1, n + 1)])
        solution.row_stat = [VarStatus(glpk.glp_get_row_stat(lp, i)) for i in range(1, m + 1)]
        solution.col_stat = [VarStatus(glpk.glp_get_col_stat(lp, j)) for j in range(1, n + 1)]
        return solution

    def mip_solution(self, handle) -> MipSolution:
        lp = handle
        m = glpk.glp_get_num_rows(lp)
        n = glpk.glp_get_num_cols(lp)
        solution = MipSolution()
        solution.status = SolStatus(glpk.glp_mip_status(lp))
        solution.obj_val = glpk.glp_mip_obj_val(lp)
        solution.row_val = _as_array([glpk.glp_mip_row_val(lp, i) for i in range(1, m + 1)])
        solution.col_val = _as_array([glpk.glp_mip_col_val(lp, j) for j in range(1, n + 1)])
        return solution

    def read(self, handle, fmt: FileFormat, params, path: str) -> int:
        if fmt == FileFormat.MPS_DECK:
            return glpk.glp_read_mps(handle, glpk.GLP_MPS_DECK, _mpscp(params), path)
        if fmt == FileFormat.MPS_FILE:
            return glpk.glp_read_mps(handle, glpk.GLP_MPS_FILE, _mpscp(params), path)
        if fmt == FileFormat.CPLEX_LP:
            return glpk.glp_read_lp(handle, _cpxcp(params), path)
        if fmt == FileFormat.GLPK_PROB:
            return glpk.glp_read_prob(handle, int(params or 0), path)
        raise ValueError(f"Unknown file format: {fmt!r}")

    def write(self, handle, fmt: FileFormat, params, path: str) -> int:
        if fmt == FileFormat.MPS_DECK:
            return glpk.glp_write_mps(handle, glpk.GLP_MPS_DECK, _mpscp(params), path)
        if fmt == FileFormat.MPS_FILE:
            return glpk.glp_write_mps(handle, glpk.GLP_MPS_FILE, _mpscp(params), path)
        if fmt == FileFormat.CPLEX_LP:
            return glpk.glp_write_lp(handle, _cpxcp(params), path)
        if fmt == FileFormat.GLPK_PROB:
            return glpk.glp_write_prob(handle, int(params or 0), path)
        raise ValueError(f"Unknown file format: {fmt!r}")

    def __repr__(self):
        return f"<GlpkEngine GLPK {glpk.glp_version()}>"
