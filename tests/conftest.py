import pytest

from glpkit import MsgLevel, Problem, SimplexParameters

from fake_engine import FakeEngine
from sample_problems import build_mip, build_sample


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def fake_lp(fake_engine):
    lp = Problem(engine=fake_engine)
    yield lp
    lp.delete()


@pytest.fixture
def lp():
    lp = Problem()
    yield lp
    lp.delete()


@pytest.fixture
def sample_lp(lp):
    return build_sample(lp)


@pytest.fixture
def mip_lp(lp):
    return build_mip(lp)


@pytest.fixture
def quiet():
    smcp = SimplexParameters()
    smcp.msg_lev = MsgLevel.ERR
    return smcp
