"""
Exceptions raised by glpkit
"""
from enum import IntEnum
from typing import Optional, Union


class OptError(IntEnum):
    """
    Return codes of the optimization routines.

    A nonzero code means the engine could not bring the problem to a
    defined stopping state. Every code is final: nothing is retried.
    """
    EBADB = 0x01    # invalid basis
    ESING = 0x02    # singular matrix
    ECOND = 0x03    # ill-conditioned matrix
    EBOUND = 0x04   # invalid bounds
    EFAIL = 0x05    # solver failed
    EOBJLL = 0x06   # objective lower limit reached
    EOBJUL = 0x07   # objective upper limit reached
    EITLIM = 0x08   # iteration limit exceeded
    ETMLIM = 0x09   # time limit exceeded
    ENOPFS = 0x0A   # no primal feasible solution
    ENODFS = 0x0B   # no dual feasible solution
    EROOT = 0x0C    # root LP optimum not provided
    ESTOP = 0x0D    # search terminated by application
    EMIPGAP = 0x0E  # relative mip gap tolerance reached
    ENOFEAS = 0x0F  # no primal/dual feasible solution
    ENOCVG = 0x10   # no convergence
    EINSTAB = 0x11  # numerical instability
    EDATA = 0x12    # invalid data
    ERANGE = 0x13   # result out of range

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    OptError.EBADB: "invalid basis",
    OptError.ESING: "singular matrix",
    OptError.ECOND: "ill-conditioned matrix",
    OptError.EBOUND: "invalid bounds",
    OptError.EFAIL: "solver failed",
    OptError.EOBJLL: "objective lower limit reached",
    OptError.EOBJUL: "objective upper limit reached",
    OptError.EITLIM: "iteration limit exceeded",
    OptError.ETMLIM: "time limit exceeded",
    OptError.ENOPFS: "no primal feasible solution",
    OptError.ENODFS: "no dual feasible solution",
    OptError.EROOT: "root LP optimum not provided",
    OptError.ESTOP: "search terminated by application",
    OptError.EMIPGAP: "relative mip gap tolerance reached",
    OptError.ENOFEAS: "no primal/dual feasible solution",
    OptError.ENOCVG: "no convergence",
    OptError.EINSTAB: "numerical instability",
    OptError.EDATA: "invalid data",
    OptError.ERANGE: "result out of range",
}


def describe(code: int) -> str:
    """Human readable description of an optimization return code"""
    try:
        return OptError(code).description
    except ValueError:
        return "unknown error"


class GlpkitError(Exception):
    """Base class of all glpkit errors"""


class SolverError(GlpkitError):
    """
    A solve call returned a nonzero code.

    Attributes
    ----------
    code : OptError or int
        Return code of the engine. Codes outside the known set are kept
        as plain integers.
    method : str
        Name of the solve routine ('simplex', 'exact' or 'intopt').
    """

    def __init__(self, code: int, method: Optional[str] = None):
        try:
            code = OptError(code)
        except ValueError:
            pass
        self.code: Union[OptError, int] = code
        self.method = method
        super().__init__(describe(code))

    @property
    def description(self) -> str:
        return describe(self.code)

    def __repr__(self):
        return f"SolverError(code={self.code!r}, method={self.method!r})"


class PathError(GlpkitError):
    """
    Reading or writing a problem file failed.

    Attributes
    ----------
    op : str
        Either 'read' or 'write'
    path : str
        File on which the operation was performed
    message : str
        Short description of the problem
    """

    def __init__(self, op: str, path: str, message: str):
        self.op = op
        self.path = path
        self.message = message
        super().__init__(f"{op} {path}: {message}")


class ReadError(PathError):
    def __init__(self, path: str, message: str):
        super().__init__("read", path, message)


class WriteError(PathError):
    def __init__(self, path: str, message: str):
        super().__init__("write", path, message)


class ProblemDeletedError(GlpkitError, RuntimeError):
    """A method was called on a problem after delete()"""

    def __init__(self, message: str = "Problem method called on a deleted problem"):
        super().__init__(message)


class InvalidArgumentError(GlpkitError, ValueError):
    """Malformed arguments, detected before anything reaches the engine"""
