"""
Interface between a Problem and the native optimization engine.

The engine owns the numerical algorithms and the file format grammars.
A Problem only ever talks to it through the methods below, which lets the
tests run the orchestration logic against a fake engine.
"""
import abc
from enum import Enum
from typing import Any, Optional

from .data import ProblemData
from .results import BasicSolution, MipSolution


class SolveMethod(Enum):
    SIMPLEX = 'simplex'
    EXACT = 'exact'
    INTOPT = 'intopt'


class FileFormat(Enum):
    MPS_DECK = 'fixed MPS'
    MPS_FILE = 'free MPS'
    CPLEX_LP = 'CPLEX LP'
    GLPK_PROB = 'GLPK LP/MIP'


class Engine(abc.ABC):
    """
    Capabilities a Problem needs from an optimization engine.

    Handles are opaque to the caller. Every method except ``create`` takes
    a live handle previously returned by ``create`` and not yet passed to
    ``release``.
    """

    @abc.abstractmethod
    def create(self) -> Any:
        """Allocate a new empty problem handle"""

    @abc.abstractmethod
    def release(self, handle: Any) -> None:
        """Free a handle"""

    @abc.abstractmethod
    def load(self, handle: Any, data: ProblemData) -> None:
        """Replace the content of the handle with the model in ``data``"""

    @abc.abstractmethod
    def extract(self, handle: Any) -> ProblemData:
        """Build the model currently held by the handle"""

    @abc.abstractmethod
    def solve(self, handle: Any, method: SolveMethod, params: Optional[Any]) -> int:
        """
        Run a solver on the handle.

        Returns 0 when the solver reached a defined stopping state and an
        OptError code otherwise. ``params`` is a SimplexParameters (for
        SIMPLEX and EXACT) or an IntoptParameters (for INTOPT), None means
        engine defaults.
        """

    @abc.abstractmethod
    def basic_solution(self, handle: Any) -> BasicSolution:
        """Basic solution held by the handle"""

    @abc.abstractmethod
    def mip_solution(self, handle: Any) -> MipSolution:
        """MIP solution held by the handle"""

    @abc.abstractmethod
    def read(self, handle: Any, fmt: FileFormat, params: Optional[Any], path: str) -> int:
        """Read a problem file into the handle, 0 on success"""

    @abc.abstractmethod
    def write(self, handle: Any, fmt: FileFormat, params: Optional[Any], path: str) -> int:
        """Write the handle to a problem file, 0 on success"""


_default_engine: Optional[Engine] = None


def get_default_engine() -> Engine:
    """Engine used by Problem() when none is given, GlpkEngine unless replaced"""
    global _default_engine
    if _default_engine is None:
        from .glpk_engine import GlpkEngine
        _default_engine = GlpkEngine()
    return _default_engine


def set_default_engine(engine: Optional[Engine]) -> None:
    """Replace the default engine, None restores GlpkEngine"""
    global _default_engine
    _default_engine = engine
