"""
Reading and writing problem files through the engine codecs
"""
import logging
import os

from .engine import FileFormat
from .errors import ReadError, WriteError

logger = logging.getLogger(__name__)

_LABELS = {
    FileFormat.MPS_DECK: "MPS",
    FileFormat.MPS_FILE: "MPS",
    FileFormat.CPLEX_LP: "CPLEX LP",
    FileFormat.GLPK_PROB: "GLPK LP/MIP",
}


def read_problem(problem, fmt: FileFormat, params, path) -> None:
    """
    Replace the model of ``problem`` with the content of a file.

    The file is read into the native handle first; the model is only
    replaced when the codec succeeds, so a failed read leaves the problem
    as it was.
    """
    handle = problem._live_handle()
    path = os.fspath(path)
    logger.debug("reading %s file %s", fmt.value, path)
    rc = problem._engine.read(handle, fmt, params, path)
    if rc != 0:
        # the codec may have left a partial model in the handle
        problem._changed()
        logger.warning("failed to read %s file %s (code %d)", fmt.value, path, rc)
        raise ReadError(path, f"{_LABELS[fmt]} reading error")
    problem._data = problem._engine.extract(handle)
    problem._synced = True


def write_problem(problem, fmt: FileFormat, params, path) -> None:
    """Write the model of ``problem`` to a file"""
    handle = problem._live_handle()
    path = os.fspath(path)
    problem._sync()
    logger.debug("writing %s file %s", fmt.value, path)
    rc = problem._engine.write(handle, fmt, params, path)
    if rc != 0:
        logger.warning("failed to write %s file %s (code %d)", fmt.value, path, rc)
        raise WriteError(path, f"{_LABELS[fmt]} writing error")
