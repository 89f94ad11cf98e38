"""Dense Gaussian elimination without row exchanges.

The solver is aimed at the diagonally dominant tridiagonal systems produced
by natural cubic splines, for which elimination without pivoting is stable.
General matrices are accepted, but a pivot that falls below ``tol`` is
rejected (``strict=True``) or handled by the tolerance policy below
(``strict=False``):

- forward phase: no elimination is performed beneath a small pivot;
- back-substitution: an unknown whose pivot is small is left at its
  accumulated value instead of being divided by the pivot.
"""

from __future__ import annotations

import warnings

import numpy as np

from pyinterp.exceptions import InvalidInputError, SingularSystemError

DEFAULT_TOL = 1e-12


def _as_system(A, b) -> tuple[np.ndarray, np.ndarray]:
    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise InvalidInputError(f"A must be a square matrix, got shape {A.shape}")
    if b.ndim != 1 or b.shape[0] != A.shape[0]:
        raise InvalidInputError(
            f"b must be a vector of length {A.shape[0]}, got shape {b.shape}"
        )
    if A.shape[0] == 0:
        raise InvalidInputError("Cannot solve an empty system")
    if not (np.all(np.isfinite(A)) and np.all(np.isfinite(b))):
        raise InvalidInputError("A and b must be finite")
    return A, b


def solve(A, b, tol: float = DEFAULT_TOL, strict: bool = True) -> np.ndarray:
    """Solve ``A @ x = b`` by forward elimination and back-substitution.

    ``A`` and ``b`` are copied; the caller's arrays are never modified.

    Parameters
    ----------
    A : array_like of shape (n, n)
        Coefficient matrix.
    b : array_like of shape (n,)
        Right-hand side.
    tol : float, optional
        Pivot magnitude below which a pivot counts as singular.
        Default 1e-12.
    strict : bool, optional
        If True (default), raise on the first singular pivot.  If False,
        apply the tolerance policy and warn once.

    Returns
    -------
    ndarray of shape (n,)
        Solution vector.

    Raises
    ------
    InvalidInputError
        If the shapes do not describe a square system or contain NaN/Inf.
    SingularSystemError
        If ``strict`` and a pivot has ``|A[i, i]| < tol``.

    Warns
    -----
    RuntimeWarning
        If not ``strict`` and singular pivots were skipped.

    Examples
    --------
    >>> solve([[4.0, 1.0], [1.0, 3.0]], [1.0, 2.0]).round(6).tolist()
    [0.090909, 0.636364]
    """
    A, b = _as_system(A, b)
    n = A.shape[0]
    singular_rows: list[int] = []

    # Forward elimination
    for i in range(n):
        pivot = A[i, i]
        if abs(pivot) < tol:
            if strict:
                raise SingularSystemError(i, float(pivot), tol)
            singular_rows.append(i)
            continue
        if i + 1 < n:
            factors = A[i + 1:, i] / pivot
            A[i + 1:, i:] -= np.outer(factors, A[i, i:])
            b[i + 1:] -= factors * b[i]

    # Back-substitution
    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        acc = b[i] - A[i, i + 1:] @ x[i + 1:]
        if abs(A[i, i]) > tol:
            x[i] = acc / A[i, i]
        else:
            x[i] = acc

    if singular_rows:
        warnings.warn(
            f"Singular pivot(s) below {tol:.1e} in rows {singular_rows}; "
            f"the corresponding unknowns are not normalized and the "
            f"solution may be inaccurate.",
            RuntimeWarning,
            stacklevel=2,
        )
    return x


def is_diagonally_dominant(A) -> bool:
    """Return True if ``A`` is row diagonally dominant.

    Every row must satisfy ``|A[i, i]| >= sum_{j != i} |A[i, j]|`` and at
    least one row must satisfy it strictly.
    """
    A = np.asarray(A, dtype=float)
    diag = np.abs(np.diag(A))
    off = np.abs(A).sum(axis=1) - diag
    return bool(np.all(diag >= off) and np.any(diag > off))


def residual(A, x, b) -> float:
    """Max-norm residual ``max |A @ x - b|``."""
    return float(np.max(np.abs(np.asarray(A, dtype=float) @ np.asarray(x) - np.asarray(b))))
