import pathlib

import pytest

from glpkit import (
    FileFormat, MPSFormat, MPSParameters, ObjDir, PathError, ReadError,
    VarKind, WriteError,
)

from sample_problems import build_mip, build_sample


def test_failed_read_leaves_problem_unchanged(fake_engine, fake_lp):
    build_sample(fake_lp)
    fake_lp.simplex()

    with pytest.raises(ReadError) as excinfo:
        fake_lp.read_mps(MPSFormat.FILE, None, "missing.mps")
    assert isinstance(excinfo.value, PathError)
    assert excinfo.value.op == "read"
    assert excinfo.value.path == "missing.mps"
    assert excinfo.value.message == "MPS reading error"
    assert str(excinfo.value) == "read missing.mps: MPS reading error"

    assert fake_lp.name == "sample"
    assert fake_lp.num_rows == 3
    assert fake_lp.obj_dir == ObjDir.MAX
    assert fake_lp.mat_row(2).to_dict() == {1: 10.0, 2: 4.0, 3: 5.0}


def test_model_is_reloaded_after_failed_read(fake_engine, fake_lp):
    build_sample(fake_lp)
    handle = fake_engine.handles[-1]
    with pytest.raises(ReadError):
        fake_lp.read_lp(None, "missing.lp")
    fake_lp.simplex()
    assert handle.data.num_rows == 3
    assert handle.data.num_cols == 3


@pytest.mark.parametrize(
    "reader, label",
    [
        (lambda lp, path: lp.read_lp(None, path), "CPLEX LP"),
        (lambda lp, path: lp.read_prob(0, path), "GLPK LP/MIP"),
    ],
)
def test_read_error_labels(fake_lp, reader, label):
    with pytest.raises(ReadError, match=label):
        reader(fake_lp, "nothing")


def test_write_failure(fake_engine, fake_lp):
    build_sample(fake_lp)
    fake_engine.fail_writes = True
    with pytest.raises(WriteError) as excinfo:
        fake_lp.write_lp(None, "out.lp")
    assert excinfo.value.op == "write"
    assert excinfo.value.path == "out.lp"
    assert excinfo.value.message == "CPLEX LP writing error"


def test_round_trip_replaces_model(fake_engine, fake_lp):
    build_mip(fake_lp)
    fake_lp.write_prob(0, "mip.glpk")

    fake_lp.erase()
    fake_lp.read_prob(0, "mip.glpk")
    assert fake_lp.num_rows == 3
    assert fake_lp.num_cols == 4
    assert fake_lp.obj_dir == ObjDir.MAX
    assert fake_lp.col_kind(4) == VarKind.IV
    assert fake_lp.row_name(3) == "c3"
    assert fake_lp.mat_row(3).to_dict() == {2: 1.0, 4: -3.5}


def test_mps_does_not_keep_direction(fake_lp):
    build_sample(fake_lp)
    params = MPSParameters()
    fake_lp.write_mps(MPSFormat.DECK, params, "sample.mps")
    fake_lp.read_mps(MPSFormat.DECK, params, "sample.mps")
    assert fake_lp.obj_dir == ObjDir.MIN
    assert fake_lp.col_name(1) == "x0"


def test_paths_are_accepted(fake_engine, fake_lp):
    build_sample(fake_lp)
    fake_lp.write(FileFormat.GLPK_PROB, pathlib.Path("model.glpk"))
    assert "model.glpk" in fake_engine.files
    fake_lp.read(FileFormat.GLPK_PROB, pathlib.Path("model.glpk"))
    assert fake_lp.num_nz == 9
