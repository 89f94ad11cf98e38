"""Natural cubic spline interpolation.

A natural cubic spline is the piecewise cubic ``S`` that interpolates every
node, has continuous first and second derivatives, and satisfies
``S''(x_0) = S''(x_n) = 0``.  Writing ``g_i = S''(x_i)`` and
``h_i = x_{i+1} - x_i``, continuity of ``S'`` at interior nodes gives the
tridiagonal system

    h_{i-1} g_{i-1} + 2 (h_{i-1} + h_i) g_i + h_i g_{i+1}
        = 6 [(y_{i+1} - y_i) / h_i - (y_i - y_{i-1}) / h_{i-1}]

for ``i = 1..n-1``, closed by ``g_0 = g_n = 0``.  The matrix is strictly
diagonally dominant for positive widths, so it is solved by Gaussian
elimination without row exchanges.  On segment ``[x_i, x_{i+1}]``

    S(x) = y_i (x_{i+1} - x) / h_i + y_{i+1} (x - x_i) / h_i
         + g_i     [(x_{i+1} - x)^3 - h_i^2 (x_{i+1} - x)] / (6 h_i)
         + g_{i+1} [(x - x_i)^3     - h_i^2 (x - x_i)]     / (6 h_i)

Only ``g`` and ``h`` are stored; no per-segment polynomial coefficients.

References
----------
- Burden & Faires (2010), "Numerical Analysis", 9th ed., Section 3.5.
- de Boor (1978), "A Practical Guide to Splines", Chapter IV.
"""

from __future__ import annotations

import os
import pickle
import time
import warnings

import numpy as np

from pyinterp.grid import SampleSet
from pyinterp.linalg import DEFAULT_TOL, is_diagonally_dominant, solve


def spline_system(x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Assemble the ``(n+1) x (n+1)`` system for the second derivatives.

    Parameters
    ----------
    x : ndarray of shape (n+1,)
        Strictly increasing nodes.
    y : ndarray of shape (n+1,)
        Values at the nodes.

    Returns
    -------
    A : ndarray of shape (n+1, n+1)
        Tridiagonal matrix; rows 0 and n encode the natural boundary.
    rhs : ndarray of shape (n+1,)
    """
    n = len(x) - 1
    h = np.diff(x)
    A = np.zeros((n + 1, n + 1))
    rhs = np.zeros(n + 1)

    A[0, 0] = 1.0
    A[n, n] = 1.0
    for i in range(1, n):
        A[i, i - 1] = h[i - 1]
        A[i, i] = 2.0 * (h[i - 1] + h[i])
        A[i, i + 1] = h[i]
        rhs[i] = 6.0 * ((y[i + 1] - y[i]) / h[i] - (y[i] - y[i - 1]) / h[i - 1])
    return A, rhs


class CubicSpline:
    """Natural cubic spline through a :class:`~pyinterp.grid.SampleSet`.

    The spline is built on construction and is read-only afterwards.
    Evaluation outside ``[x_0, x_n]`` extends the nearest boundary
    segment's cubic (``x < x_0`` uses segment 0, ``x > x_n`` uses segment
    ``n - 1``).

    Parameters
    ----------
    sample_set : SampleSet
        Interpolation nodes, strictly increasing.
    tol : float, optional
        Pivot tolerance passed to the linear solver.  Default 1e-12.
    verbose : bool, optional
        If True, print build progress.  Default False.

    Examples
    --------
    >>> from pyinterp.grid import uniform_grid
    >>> sp = CubicSpline(uniform_grid(0.0, 3.0, 3, lambda x: x))
    >>> round(sp.eval(1.25), 12)
    1.25
    >>> sp.gammas.tolist()
    [0.0, 0.0, 0.0, 0.0]
    """

    def __init__(self, sample_set: SampleSet, tol: float = DEFAULT_TOL,
                 verbose: bool = False):
        self.sample_set = sample_set
        self.tol = tol

        start = time.time()
        x = sample_set.x
        y = sample_set.y
        n = sample_set.n
        if verbose:
            print(f"Building natural cubic spline ({n + 1} nodes, "
                  f"{n + 1}x{n + 1} system)...")

        self.h = np.diff(x)
        A, rhs = spline_system(x, y)
        if verbose:
            print(f"  Diagonally dominant: {is_diagonally_dominant(A)}")
        self.gammas = solve(A, rhs, tol=tol, strict=True)
        self.h.setflags(write=False)
        self.gammas.setflags(write=False)

        self._build_time = time.time() - start
        if verbose:
            print(f"  Built in {self._build_time:.6f}s")

    @classmethod
    def from_values(cls, x, y, tol: float = DEFAULT_TOL) -> "CubicSpline":
        """Build a spline directly from node and value arrays.

        Raises
        ------
        InvalidInputError
            If the data do not form a valid :class:`SampleSet`.
        """
        return cls(SampleSet(x, y), tol=tol)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def x(self) -> np.ndarray:
        return self.sample_set.x

    @property
    def y(self) -> np.ndarray:
        return self.sample_set.y

    @property
    def num_segments(self) -> int:
        return len(self.h)

    @property
    def build_time(self) -> float:
        """Wall-clock time (seconds) spent assembling and solving the system."""
        return self._build_time

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def segment_index(self, x: float) -> int:
        """Index ``i`` of the segment ``[x_i, x_{i+1}]`` used for ``x``.

        Scans from ``i = 0`` and returns the first segment containing
        ``x``, so an interior node belongs to the segment on its left.
        Points below ``x_0`` map to 0, points above ``x_n`` to ``n - 1``.
        """
        nodes = self.sample_set.x
        last = len(nodes) - 2
        if x < nodes[0]:
            return 0
        if x > nodes[-1]:
            return last
        for i in range(last + 1):
            if nodes[i] <= x <= nodes[i + 1]:
                return i
        # NaN compares false everywhere
        return last

    def _segment_value(self, i, x, derivative_order: int):
        # Works elementwise when i and x are arrays.
        xs = self.sample_set.x
        ys = self.sample_set.y
        g = self.gammas
        h = self.h[i]
        right = xs[i + 1] - x
        left = x - xs[i]

        if derivative_order == 0:
            return (
                ys[i] * right / h
                + ys[i + 1] * left / h
                + g[i] * (right ** 3 - h * h * right) / (6.0 * h)
                + g[i + 1] * (left ** 3 - h * h * left) / (6.0 * h)
            )
        if derivative_order == 1:
            return (
                (ys[i + 1] - ys[i]) / h
                - g[i] * (3.0 * right ** 2 - h * h) / (6.0 * h)
                + g[i + 1] * (3.0 * left ** 2 - h * h) / (6.0 * h)
            )
        if derivative_order == 2:
            return (g[i] * right + g[i + 1] * left) / h
        raise ValueError(
            f"Derivative order {derivative_order} not supported (use 0, 1 or 2)"
        )

    def eval(self, x: float, derivative_order: int = 0) -> float:
        """Evaluate the spline or one of its derivatives at ``x``.

        Parameters
        ----------
        x : float
            Evaluation point.
        derivative_order : int, optional
            0 for the value, 1 or 2 for the first or second derivative.

        Returns
        -------
        float

        Raises
        ------
        ValueError
            If ``derivative_order`` is not 0, 1 or 2.
        """
        x = float(x)
        i = self.segment_index(x)
        return float(self._segment_value(i, x, derivative_order))

    def __call__(self, x: float) -> float:
        return self.eval(x)

    def eval_batch(self, points, derivative_order: int = 0) -> np.ndarray:
        """Evaluate at many points, locating segments with ``np.searchsorted``.

        Segment selection matches :meth:`segment_index` exactly.

        Parameters
        ----------
        points : array_like of shape (N,)
            Evaluation points.
        derivative_order : int, optional
            0, 1 or 2.

        Returns
        -------
        ndarray of shape (N,)
        """
        points = np.atleast_1d(np.asarray(points, dtype=float))
        # side='left' puts an interior node in the segment on its left.
        idx = np.searchsorted(self.sample_set.x, points, side="left") - 1
        np.clip(idx, 0, self.num_segments - 1, out=idx)
        return np.asarray(
            self._segment_value(idx, points, derivative_order), dtype=float
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict:
        """Return picklable state tagged with the package version."""
        from pyinterp._version import __version__

        state = self.__dict__.copy()
        state["_pyinterp_version"] = __version__
        return state

    def __setstate__(self, state: dict) -> None:
        from pyinterp._version import __version__

        saved_version = state.pop("_pyinterp_version", None)
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This spline was saved with pyinterp {saved_version}, "
                f"but you are loading it with {__version__}. "
                f"Evaluation results may differ if internal data layout "
                f"changed.",
                UserWarning,
                stacklevel=2,
            )
        self.__dict__.update(state)

    def save(self, path: str | os.PathLike) -> None:
        """Save the spline to a file.

        Parameters
        ----------
        path : str or path-like
            Destination file path.
        """
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "CubicSpline":
        """Load a spline written by :meth:`save`.

        Parameters
        ----------
        path : str or path-like
            Path to the saved file.

        Returns
        -------
        CubicSpline

        Raises
        ------
        TypeError
            If the file does not contain a :class:`CubicSpline`.

        Warns
        -----
        UserWarning
            If the file was saved with a different pyinterp version.

        .. warning::

            This method uses :mod:`pickle` internally.  **Only load files
            you trust.**
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"Expected a {cls.__name__} instance, "
                f"got {type(obj).__name__}"
            )
        return obj

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        s = self.sample_set
        return (
            f"CubicSpline("
            f"nodes={len(s)}, "
            f"segments={self.num_segments}, "
            f"interval=[{s.a}, {s.b}])"
        )

    def __str__(self) -> str:
        s = self.sample_set
        max_display = 6

        if len(s) > max_display:
            nodes_str = (
                "["
                + ", ".join(f"{v:.4g}" for v in s.x[:max_display])
                + ", ...]"
            )
        else:
            nodes_str = "[" + ", ".join(f"{v:.4g}" for v in s.x) + "]"

        lines = [
            f"CubicSpline (natural, {self.num_segments} segments)",
            f"  Nodes:     {nodes_str}",
            f"  Interval:  [{s.a}, {s.b}]",
            f"  Max |S''|: {float(np.max(np.abs(self.gammas))):.4e}",
            f"  Build:     {self._build_time:.6f}s",
        ]
        return "\n".join(lines)
