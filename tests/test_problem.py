import gc
import math

import numpy as np
import pytest
from scipy import sparse

from glpkit import (
    DBL_MAX, BoundsType, InvalidArgumentError, ObjDir, Problem,
    ProblemDeletedError, SolStatus, SparseVector, VarKind, VarStatus,
)

from fake_engine import FakeEngine
from sample_problems import build_sample


def test_new_problem_is_empty(fake_lp):
    assert fake_lp.name == ""
    assert fake_lp.obj_name == ""
    assert fake_lp.obj_dir == ObjDir.MIN
    assert fake_lp.obj_const == 0.0
    assert fake_lp.num_rows == 0
    assert fake_lp.num_cols == 0
    assert fake_lp.num_nz == 0
    assert fake_lp.status == SolStatus.UNDEF
    assert fake_lp.mip_status == SolStatus.UNDEF
    assert fake_lp.is_valid()


def test_names(fake_lp):
    fake_lp.name = "plan"
    fake_lp.obj_name = "cost"
    fake_lp.add_rows(2)
    fake_lp.add_cols(1)
    assert fake_lp.row_name(1) == ""
    assert fake_lp.col_name(1) == ""

    fake_lp.set_row_name(2, "demand")
    fake_lp.set_col_name(1, "x")
    assert fake_lp.name == "plan"
    assert fake_lp.obj_name == "cost"
    assert fake_lp.row_name(2) == "demand"
    assert fake_lp.col_name(1) == "x"
    assert fake_lp.find_row("demand") == 2
    assert fake_lp.find_col("x") == 1
    assert fake_lp.find_col("y") == 0
    assert fake_lp.find_row("") == 0
    assert fake_lp.find_col("") == 0


def test_name_length_counts_encoded_bytes(fake_lp):
    fake_lp.add_cols(1)
    fake_lp.set_col_name(1, "\u00e9" * 127 + "x")
    assert len(fake_lp.col_name(1)) == 128


@pytest.mark.parametrize("name", ["x" * 256, "e\u0301" * 100, "\u00e9" * 128, "bad\nname"])
def test_invalid_names_are_rejected(fake_lp, name):
    fake_lp.add_rows(1)
    with pytest.raises(InvalidArgumentError):
        fake_lp.set_row_name(1, name)
    with pytest.raises(InvalidArgumentError):
        fake_lp.name = name
    assert fake_lp.row_name(1) == ""


def test_add_rows_and_cols_return_first_number(fake_lp):
    assert fake_lp.add_rows(2) == 1
    assert fake_lp.add_rows(3) == 3
    assert fake_lp.num_rows == 5
    assert fake_lp.add_cols(4) == 1
    assert fake_lp.add_cols(1) == 5
    assert fake_lp.num_cols == 5


@pytest.mark.parametrize("n", [0, -1])
def test_add_nothing_is_rejected(fake_lp, n):
    with pytest.raises(InvalidArgumentError):
        fake_lp.add_rows(n)
    with pytest.raises(InvalidArgumentError):
        fake_lp.add_cols(n)


def test_entity_numbers_are_checked(fake_lp):
    fake_lp.add_rows(1)
    fake_lp.add_cols(1)
    with pytest.raises(IndexError):
        fake_lp.row_name(0)
    with pytest.raises(IndexError):
        fake_lp.set_row_bnds(2, BoundsType.FR, 0, 0)
    with pytest.raises(IndexError):
        fake_lp.col_prim(2)
    with pytest.raises(IndexError):
        fake_lp.set_mat_col(3, [1], [1.0])


def test_default_row_and_column(fake_lp):
    fake_lp.add_rows(1)
    fake_lp.add_cols(1)
    assert fake_lp.row_bounds(1) == (BoundsType.FR, -DBL_MAX, DBL_MAX)
    assert fake_lp.row_stat(1) == VarStatus.BS
    assert fake_lp.col_bounds(1) == (BoundsType.FX, 0.0, 0.0)
    assert fake_lp.col_stat(1) == VarStatus.NS
    assert fake_lp.col_kind(1) == VarKind.CV
    assert fake_lp.obj_coef(1) == 0.0


@pytest.mark.parametrize(
    "type_, lb, ub",
    [
        (BoundsType.FR, -DBL_MAX, DBL_MAX),
        (BoundsType.LO, 1.5, DBL_MAX),
        (BoundsType.UP, -DBL_MAX, 9.0),
        (BoundsType.DB, 1.5, 9.0),
        (BoundsType.FX, 1.5, 1.5),
    ],
)
def test_bounds(fake_lp, type_, lb, ub):
    fake_lp.add_rows(1)
    fake_lp.add_cols(1)
    fake_lp.set_row_bnds(1, type_, 1.5, 9.0)
    fake_lp.set_col_bnds(1, type_, 1.5, 9.0)
    for getter in ("row", "col"):
        assert getattr(fake_lp, f"{getter}_type")(1) == type_
        assert getattr(fake_lp, f"{getter}_lb")(1) == lb
        assert getattr(fake_lp, f"{getter}_ub")(1) == ub


def test_statuses_are_fitted_to_bounds(fake_lp):
    fake_lp.add_rows(1)
    fake_lp.add_cols(1)

    fake_lp.set_row_stat(1, VarStatus.NF)
    assert fake_lp.row_stat(1) == VarStatus.NF
    fake_lp.set_row_stat(1, VarStatus.BS)
    assert fake_lp.row_stat(1) == VarStatus.BS

    fake_lp.set_col_stat(1, VarStatus.BS)
    assert fake_lp.col_stat(1) == VarStatus.BS
    fake_lp.set_col_stat(1, VarStatus.NL)
    assert fake_lp.col_stat(1) == VarStatus.NS

    fake_lp.set_col_bnds(1, BoundsType.LO, 0.0, 0.0)
    assert fake_lp.col_stat(1) == VarStatus.NL


def test_column_kinds(fake_lp):
    fake_lp.add_cols(3)
    fake_lp.set_col_kind(1, VarKind.CV)
    fake_lp.set_col_kind(2, VarKind.IV)
    fake_lp.set_col_kind(3, VarKind.BV)

    assert fake_lp.col_kind(1) == VarKind.CV
    assert fake_lp.col_kind(2) == VarKind.IV
    assert fake_lp.col_kind(3) == VarKind.BV
    assert fake_lp.col_bounds(3) == (BoundsType.DB, 0.0, 1.0)
    assert fake_lp.num_int == 2

    fake_lp.set_col_bnds(3, BoundsType.DB, 0.0, 5.0)
    assert fake_lp.col_kind(3) == VarKind.IV
    fake_lp.set_col_kind(3, VarKind.CV)
    assert fake_lp.col_kind(3) == VarKind.CV


def test_objective(fake_lp):
    fake_lp.add_cols(2)
    fake_lp.obj_dir = ObjDir.MAX
    fake_lp.set_obj_coef(2, -3.5)
    fake_lp.set_obj_coef(0, 12.0)

    assert fake_lp.obj_dir == ObjDir.MAX
    assert fake_lp.obj_coef(1) == 0.0
    assert fake_lp.obj_coef(2) == -3.5
    assert fake_lp.obj_coef(0) == 12.0
    assert fake_lp.obj_const == 12.0


def test_matrix_rows_and_columns(fake_lp):
    build_sample(fake_lp)
    assert fake_lp.num_nz == 9
    assert fake_lp.mat_row(2) == SparseVector([1, 2, 3], [10.0, 4.0, 5.0])
    assert fake_lp.mat_col(3) == SparseVector([1, 2, 3], [1.0, 5.0, 6.0])

    fake_lp.set_mat_col(1, [2], [7.0])
    assert fake_lp.mat_row(1).to_dict() == {2: 1.0, 3: 1.0}
    assert fake_lp.mat_row(2).to_dict() == {1: 7.0, 2: 4.0, 3: 5.0}
    assert fake_lp.num_nz == 7


def test_bad_matrix_update_is_rejected(fake_lp):
    fake_lp.add_rows(1)
    fake_lp.add_cols(2)
    with pytest.raises(InvalidArgumentError):
        fake_lp.set_mat_row(1, [1, 1], [1.0, 1.0])
    with pytest.raises(InvalidArgumentError):
        fake_lp.set_mat_row(1, [3], [1.0])
    with pytest.raises(InvalidArgumentError):
        fake_lp.load_matrix([1, 1], [1], [1.0, 2.0])


def test_fractional_indices_are_rejected(fake_lp):
    fake_lp.add_rows(2)
    fake_lp.add_cols(2)
    fake_lp.set_mat_row(1, [2], [4.0])
    with pytest.raises(InvalidArgumentError):
        fake_lp.set_mat_row(1, [1.9], [1.0])
    with pytest.raises(InvalidArgumentError):
        fake_lp.set_mat_col(1, [np.nan], [1.0])
    with pytest.raises(InvalidArgumentError):
        fake_lp.load_matrix([1.5], [1], [1.0])
    assert fake_lp.mat_row(1).to_dict() == {2: 4.0}

    fake_lp.set_mat_row(2, np.array([1.0, 2.0]), [3.0, 5.0])
    assert fake_lp.mat_row(2).to_dict() == {1: 3.0, 2: 5.0}


def test_load_sparse_and_matrix(fake_lp):
    fake_lp.add_rows(2)
    fake_lp.add_cols(3)
    A = sparse.csr_matrix(np.array([[1.0, 0.0, 2.0], [0.0, -1.0, 0.0]]))
    fake_lp.load_sparse(A)
    assert fake_lp.num_nz == 3
    assert fake_lp.mat_row(1).to_dict() == {1: 1.0, 3: 2.0}
    np.testing.assert_array_equal(fake_lp.matrix().toarray(), A.toarray())

    with pytest.raises(InvalidArgumentError):
        fake_lp.load_sparse(np.ones((3, 3)))


def test_from_arrays(fake_engine):
    A = np.array([[1.0, 1.0], [1.0, -1.0]])
    lp = Problem.from_arrays(
        A,
        row_lb=[-math.inf, 1.0],
        row_ub=[4.0, 1.0],
        col_lb=[0.0, 0.0],
        col_ub=[math.inf, 3.0],
        c=[1.0, 2.0],
        obj_dir=ObjDir.MAX,
        integrality=[False, True],
        engine=fake_engine,
    )
    try:
        assert lp.obj_dir == ObjDir.MAX
        assert lp.row_type(1) == BoundsType.UP
        assert lp.row_type(2) == BoundsType.FX
        assert lp.col_type(1) == BoundsType.LO
        assert lp.col_bounds(2) == (BoundsType.DB, 0.0, 3.0)
        assert lp.col_kind(2) == VarKind.IV
        assert lp.obj_coef(2) == 2.0
        assert lp.num_nz == 4
    finally:
        lp.delete()


def test_from_arrays_checks_lengths(fake_engine):
    with pytest.raises(InvalidArgumentError):
        Problem.from_arrays(np.eye(2), [0, 0], [1, 1], [0], [1], [1, 1], engine=fake_engine)


def test_std_basis(fake_lp):
    fake_lp.add_rows(2)
    fake_lp.add_cols(4)
    fake_lp.set_row_stat(1, VarStatus.NF)
    fake_lp.set_col_bnds(1, BoundsType.LO, 0.0, 0.0)
    fake_lp.set_col_bnds(2, BoundsType.DB, -10.0, 1.0)
    fake_lp.set_col_bnds(3, BoundsType.FR, 0.0, 0.0)
    fake_lp.set_col_stat(4, VarStatus.BS)

    fake_lp.std_basis()
    assert [fake_lp.row_stat(i) for i in (1, 2)] == [VarStatus.BS, VarStatus.BS]
    assert [fake_lp.col_stat(j) for j in range(1, 5)] == [
        VarStatus.NL, VarStatus.NU, VarStatus.NF, VarStatus.NS,
    ]


def test_copy(fake_lp):
    build_sample(fake_lp)
    fake_lp.set_col_kind(1, VarKind.IV)

    plain = fake_lp.copy()
    named = fake_lp.copy(names=True)
    try:
        assert plain.name == ""
        assert plain.row_name(1) == ""
        assert plain.col_name(1) == ""
        assert named.name == "sample"
        assert named.obj_name == "Z"
        assert named.row_name(1) == "p"
        assert named.col_name(3) == "x2"
        for other in (plain, named):
            assert other.obj_dir == ObjDir.MAX
            assert other.row_bounds(2) == fake_lp.row_bounds(2)
            assert other.col_kind(1) == VarKind.IV
            assert other.mat_row(3) == fake_lp.mat_row(3)
            assert other.status == SolStatus.UNDEF

        named.set_mat_row(1, [1], [5.0])
        assert fake_lp.mat_row(1).to_dict() == {1: 1.0, 2: 1.0, 3: 1.0}
    finally:
        plain.delete()
        named.delete()


def test_erase(fake_lp):
    build_sample(fake_lp)
    fake_lp.erase()
    assert fake_lp.name == ""
    assert fake_lp.obj_dir == ObjDir.MIN
    assert fake_lp.num_rows == 0
    assert fake_lp.num_cols == 0
    assert fake_lp.num_nz == 0
    assert fake_lp.add_rows(1) == 1


def test_delete_is_idempotent(fake_engine):
    lp = Problem(engine=fake_engine)
    lp.delete()
    lp.delete()
    assert not lp.is_valid()
    assert len(fake_engine.released) == 1
    assert "deleted" in repr(lp)


@pytest.mark.parametrize(
    "call",
    [
        lambda lp: lp.name,
        lambda lp: lp.num_rows,
        lambda lp: lp.add_rows(1),
        lambda lp: setattr(lp, "obj_dir", ObjDir.MAX),
        lambda lp: lp.simplex(),
        lambda lp: lp.intopt(),
        lambda lp: lp.copy(),
        lambda lp: lp.erase(),
        lambda lp: lp.solution(),
        lambda lp: lp.write_prob(0, "out.glpk"),
    ],
)
def test_deleted_problem_raises(fake_engine, call):
    lp = Problem(engine=fake_engine)
    lp.delete()
    with pytest.raises(ProblemDeletedError):
        call(lp)
    assert fake_engine.calls == []


def test_context_manager(fake_engine):
    with Problem(engine=fake_engine) as lp:
        lp.add_rows(1)
    assert not lp.is_valid()
    assert fake_engine.released == fake_engine.handles


def test_garbage_collection_releases_handle():
    engine = FakeEngine()
    for _ in range(50):
        lp = Problem(engine=engine)
        lp.add_cols(1)
    del lp
    gc.collect()
    assert len(engine.released) == 50
    assert all(not handle.alive for handle in engine.handles)
