"""
Sparse vectors and the constraint matrix
"""
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np
from scipy import sparse

from .errors import InvalidArgumentError


def _ensure_contiguous_int32(arr):
    """Ensure array is contiguous int32"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.int32)
    if arr.dtype != np.int32:
        arr = arr.astype(np.int32)
    return np.ascontiguousarray(arr).reshape(-1)


def _ensure_contiguous_float64(arr):
    """Ensure array is contiguous float64"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.float64)
    if arr.dtype != np.float64:
        arr = arr.astype(np.float64)
    return np.ascontiguousarray(arr).reshape(-1)


class SparseVector:
    """
    Nonzero entries of one row or one column of the constraint matrix.

    ``indices`` holds 1-based column numbers (for a row) or row numbers
    (for a column) and ``values`` the matching coefficients. Both are
    plain 0-based numpy arrays of the same length; the order of the
    entries carries no meaning.

    Examples
    --------
    >>> vec = SparseVector([3, 7], [7.5, 11.0])
    >>> vec.to_dict()
    {3: 7.5, 7: 11.0}
    >>> vec == SparseVector([7, 3], [11.0, 7.5])
    True
    """

    def __init__(self, indices: Sequence[int] = (), values: Sequence[float] = ()):
        self.indices = _ensure_contiguous_int32(indices)
        self.values = _ensure_contiguous_float64(values)
        if len(self.indices) != len(self.values):
            raise InvalidArgumentError(
                f"indices and values should have equal length "
                f"(got {len(self.indices)} and {len(self.values)})"
            )

    @classmethod
    def from_dict(cls, entries: Dict[int, float]) -> 'SparseVector':
        return cls(list(entries.keys()), list(entries.values()))

    def to_dict(self) -> Dict[int, float]:
        return {int(i): float(v) for i, v in zip(self.indices, self.values)}

    def __len__(self):
        return len(self.indices)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        for i, v in zip(self.indices, self.values):
            yield int(i), float(v)

    def __eq__(self, other):
        if not isinstance(other, SparseVector):
            return NotImplemented
        return len(self) == len(other) and self.to_dict() == other.to_dict()

    def __repr__(self):
        entries = ", ".join(f"{i}: {v:g}" for i, v in self)
        return f"SparseVector({{{entries}}})"


def check_sparse_args(ind, val, size: int, what: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate one sparse update before it is stored.

    Parameters
    ----------
    ind, val : array-like
        Indices and values, same length
    size : int
        Largest valid index
    what : str
        'column' or 'row', used in error messages

    Returns
    -------
    tuple of np.ndarray
        Indices as int32 and values as float64
    """
    if len(ind) != len(val):
        raise InvalidArgumentError(
            f"len(ind) and len(val) should be equal (got {len(ind)} and {len(val)})"
        )
    ind = _check_range(ind, size, what)
    val = _ensure_contiguous_float64(val)
    if len(np.unique(ind)) != len(ind):
        raise InvalidArgumentError(f"duplicate {what} indices not allowed")
    return ind, val


def _check_range(ind, size: int, what: str) -> np.ndarray:
    raw = np.asarray(ind)
    if raw.dtype.kind not in "iuf" and len(raw):
        raise InvalidArgumentError(f"{what} indices must be integers")
    if raw.dtype.kind == "f" and not np.all(np.isfinite(raw) & (raw == np.floor(raw))):
        raise InvalidArgumentError(f"{what} indices must be integers")
    ind = _ensure_contiguous_int32(raw)
    if len(ind) and (ind.min() < 1 or ind.max() > size):
        bad = int(ind[(ind < 1) | (ind > size)][0])
        raise InvalidArgumentError(f"{what} index {bad} out of range 1..{size}")
    return ind


class SparseMatrix:
    """
    Constraint matrix stored both row-wise and column-wise.

    Rows and columns are numbered from 1. Zero coefficients are never
    stored.
    """

    def __init__(self, num_rows: int = 0, num_cols: int = 0):
        self._rows: List[Dict[int, float]] = [dict() for _ in range(num_rows)]
        self._cols: List[Dict[int, float]] = [dict() for _ in range(num_cols)]

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    @property
    def num_cols(self) -> int:
        return len(self._cols)

    @property
    def nnz(self) -> int:
        return sum(len(r) for r in self._rows)

    def add_rows(self, n: int):
        self._rows.extend(dict() for _ in range(n))

    def add_cols(self, n: int):
        self._cols.extend(dict() for _ in range(n))

    def clear(self):
        for r in self._rows:
            r.clear()
        for c in self._cols:
            c.clear()

    def _clear_row(self, i: int):
        for j in self._rows[i - 1]:
            del self._cols[j - 1][i]
        self._rows[i - 1].clear()

    def _clear_col(self, j: int):
        for i in self._cols[j - 1]:
            del self._rows[i - 1][j]
        self._cols[j - 1].clear()

    def _store(self, i: int, j: int, value: float):
        if value != 0.0:
            self._rows[i - 1][j] = value
            self._cols[j - 1][i] = value

    def set_row(self, i: int, ind, val):
        """Replace row i with the entries matrix[i, ind[k]] = val[k]"""
        ind, val = check_sparse_args(ind, val, self.num_cols, "column")
        self._clear_row(i)
        for j, v in zip(ind.tolist(), val.tolist()):
            self._store(i, j, v)

    def set_col(self, j: int, ind, val):
        """Replace column j with the entries matrix[ind[k], j] = val[k]"""
        ind, val = check_sparse_args(ind, val, self.num_rows, "row")
        self._clear_col(j)
        for i, v in zip(ind.tolist(), val.tolist()):
            self._store(i, j, v)

    def row(self, i: int) -> SparseVector:
        return SparseVector.from_dict(self._rows[i - 1])

    def col(self, j: int) -> SparseVector:
        return SparseVector.from_dict(self._cols[j - 1])

    def load(self, ia, ja, ar):
        """
        Replace the whole matrix with matrix[ia[k], ja[k]] = ar[k].

        The triplets are validated before the current content is dropped,
        so a rejected load leaves the matrix untouched.
        """
        if not (len(ia) == len(ja) == len(ar)):
            raise InvalidArgumentError(
                f"len(ia), len(ja) and len(ar) should be equal "
                f"(got {len(ia)}, {len(ja)} and {len(ar)})"
            )
        ia = _check_range(ia, self.num_rows, "row")
        ja = _check_range(ja, self.num_cols, "column")
        ar = _ensure_contiguous_float64(ar)
        pairs = set(zip(ia.tolist(), ja.tolist()))
        if len(pairs) != len(ia):
            raise InvalidArgumentError("duplicate elements not allowed")
        self.clear()
        for i, j, v in zip(ia.tolist(), ja.tolist(), ar.tolist()):
            self._store(i, j, v)

    def triplets(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Row indices, column indices and values of all nonzeros"""
        ia, ja, ar = [], [], []
        for i, row in enumerate(self._rows, start=1):
            for j, v in row.items():
                ia.append(i)
                ja.append(j)
                ar.append(v)
        return (_ensure_contiguous_int32(ia), _ensure_contiguous_int32(ja),
                _ensure_contiguous_float64(ar))

    def to_scipy(self) -> sparse.csr_matrix:
        """Matrix as a scipy CSR matrix of shape (num_rows, num_cols)"""
        ia, ja, ar = self.triplets()
        return sparse.csr_matrix(
            (ar, (ia - 1, ja - 1)), shape=(self.num_rows, self.num_cols)
        )

    def copy(self) -> 'SparseMatrix':
        other = SparseMatrix()
        other._rows = [dict(r) for r in self._rows]
        other._cols = [dict(c) for c in self._cols]
        return other

    def __repr__(self):
        return f"<SparseMatrix {self.num_rows}x{self.num_cols} nnz={self.nnz}>"


def triplets_from(A) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    1-based triplets of a dense array or scipy sparse matrix.

    Parameters
    ----------
    A : np.ndarray or scipy.sparse matrix

    Returns
    -------
    tuple of np.ndarray
        (ia, ja, ar) ready for SparseMatrix.load
    """
    if not (sparse.issparse(A) or isinstance(A, np.ndarray)):
        raise TypeError("A must be a numpy array or scipy sparse matrix")
    coo = sparse.coo_matrix(A)
    coo.sum_duplicates()
    coo.eliminate_zeros()
    return (_ensure_contiguous_int32(coo.row + 1), _ensure_contiguous_int32(coo.col + 1),
            _ensure_contiguous_float64(coo.data))
