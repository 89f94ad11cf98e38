"""Global Lagrange polynomial interpolation.

The interpolant of degree ``n`` through ``n + 1`` nodes is evaluated in the
classical Lagrange form

    p(x) = sum_i y_i * L_i(x),   L_i(x) = prod_{j != i} (x - x_j) / (x_i - x_j)

at ``O(n^2)`` cost per point.  The formula is valid for any ``x``; outside
the node interval it extrapolates, with rapidly growing error.

References
----------
- Berrut & Trefethen (2004), "Barycentric Lagrange Interpolation",
  SIAM Review 46(3):501-517, Section 3.
"""

from __future__ import annotations

import numpy as np

from pyinterp.exceptions import InvalidInputError
from pyinterp.grid import SampleSet


def lagrange_basis(x: float, nodes: np.ndarray, i: int) -> float:
    """Value of the ``i``-th Lagrange basis polynomial ``L_i`` at ``x``.

    ``L_i`` is 1 at ``nodes[i]`` and 0 at every other node.
    """
    li = 1.0
    xi = nodes[i]
    for j in range(len(nodes)):
        if j != i:
            li *= (x - nodes[j]) / (xi - nodes[j])
    return float(li)


def lagrange_interpolate(x: float, nodes, values) -> float:
    """Evaluate the Lagrange interpolant through ``(nodes, values)`` at ``x``.

    Parameters
    ----------
    x : float
        Evaluation point.
    nodes : array_like
        Distinct interpolation abscissas (any order).
    values : array_like
        Function values at ``nodes``.

    Returns
    -------
    float
        Interpolated value ``p(x)``.

    Raises
    ------
    InvalidInputError
        If ``nodes`` and ``values`` differ in length, are empty, or
        ``nodes`` contains duplicates.
    """
    nodes = np.asarray(nodes, dtype=float)
    values = np.asarray(values, dtype=float)
    if nodes.shape != values.shape or nodes.ndim != 1 or len(nodes) == 0:
        raise InvalidInputError(
            f"nodes and values must be non-empty 1-D arrays of equal length, "
            f"got shapes {nodes.shape} and {values.shape}"
        )
    if len(np.unique(nodes)) != len(nodes):
        raise InvalidInputError("Lagrange nodes must have distinct abscissas")

    result = 0.0
    for i in range(len(nodes)):
        result += values[i] * lagrange_basis(x, nodes, i)
    return float(result)


def lagrange(sample_set: SampleSet, x: float) -> float:
    """Evaluate the global Lagrange interpolant of ``sample_set`` at ``x``.

    Examples
    --------
    >>> from pyinterp.grid import uniform_grid
    >>> s = uniform_grid(0.0, 2.0, 2, lambda t: t ** 2)
    >>> lagrange(s, 1.5)
    2.25
    """
    xs = sample_set.x
    ys = sample_set.y
    result = 0.0
    for i in range(len(xs)):
        result += ys[i] * lagrange_basis(x, xs, i)
    return float(result)


def lagrange_batch(sample_set: SampleSet, points) -> np.ndarray:
    """Evaluate the Lagrange interpolant at many points at once.

    Builds the ``(N, n+1)`` matrix of basis values with one product per
    node, so the cost stays ``O(N n^2)`` but runs in NumPy.

    Parameters
    ----------
    sample_set : SampleSet
        Interpolation nodes.
    points : array_like of shape (N,)
        Evaluation points.

    Returns
    -------
    ndarray of shape (N,)
    """
    xs = sample_set.x
    ys = sample_set.y
    points = np.atleast_1d(np.asarray(points, dtype=float))
    m = len(xs)

    basis = np.empty((len(points), m))
    diff = points[:, np.newaxis] - xs            # (N, m): x - x_j
    denom = xs[:, np.newaxis] - xs               # (m, m): x_i - x_j
    np.fill_diagonal(denom, 1.0)
    for i in range(m):
        ratio = diff / denom[i]
        ratio[:, i] = 1.0
        basis[:, i] = np.prod(ratio, axis=1)
    return basis @ ys
