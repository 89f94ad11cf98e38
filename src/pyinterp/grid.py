"""Sample grids for one-dimensional interpolation.

Two node families are provided: uniformly spaced nodes, on which global
polynomial interpolation suffers from the Runge phenomenon, and Chebyshev
nodes (roots of T_{n+1}), which cluster towards the interval ends and keep
the Lagrange interpolant well behaved.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 2 and 13.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator, NamedTuple

import numpy as np

from pyinterp.exceptions import InvalidInputError


class SamplePoint(NamedTuple):
    """A single interpolation node ``(x, f(x))``."""

    x: float
    y: float


class SampleSet:
    """Ordered interpolation nodes with their function values.

    Nodes are stored as read-only arrays, strictly increasing in ``x``.
    There are ``n + 1`` nodes, where ``n`` is the number of segments.

    Parameters
    ----------
    x : array_like
        Node abscissas, strictly increasing.
    y : array_like
        Function values at the nodes.
    a, b : float, optional
        Originating interval.  Defaults to the first and last node.  Every
        node must lie inside ``[a, b]``.

    Raises
    ------
    InvalidInputError
        If fewer than two nodes are given, the arrays differ in shape, any
        value is non-finite, abscissas are not strictly increasing, or the
        interval is empty or does not contain the nodes.

    Examples
    --------
    >>> s = SampleSet([0.0, 1.0, 2.0], [0.0, 1.0, 4.0])
    >>> s.n
    2
    >>> s[1]
    SamplePoint(x=1.0, y=1.0)
    """

    def __init__(self, x, y, a: float | None = None, b: float | None = None):
        x = np.array(x, dtype=float)
        y = np.array(y, dtype=float)

        if x.ndim != 1 or y.ndim != 1:
            raise InvalidInputError(
                f"Nodes and values must be 1-D, got shapes {x.shape} and {y.shape}"
            )
        if x.shape != y.shape:
            raise InvalidInputError(
                f"Got {len(x)} abscissas but {len(y)} values"
            )
        if len(x) < 2:
            raise InvalidInputError(
                f"At least 2 nodes (n >= 1) are required, got {len(x)}"
            )
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            raise InvalidInputError("Nodes and values must be finite")

        steps = np.diff(x)
        if np.any(steps <= 0):
            i = int(np.argmax(steps <= 0))
            if steps[i] == 0:
                raise InvalidInputError(
                    f"Duplicate abscissa x={x[i]} at positions {i} and {i + 1}"
                )
            raise InvalidInputError(
                f"Abscissas must be strictly increasing: x[{i}]={x[i]} > "
                f"x[{i + 1}]={x[i + 1]}"
            )

        a = float(x[0]) if a is None else float(a)
        b = float(x[-1]) if b is None else float(b)
        if not a < b:
            raise InvalidInputError(
                f"Interval [{a}, {b}] must satisfy a < b"
            )
        if x[0] < a or x[-1] > b:
            raise InvalidInputError(
                f"Nodes span [{x[0]}, {x[-1]}], outside interval [{a}, {b}]"
            )

        x.setflags(write=False)
        y.setflags(write=False)
        self._x = x
        self._y = y
        self._a = a
        self._b = b

    @property
    def x(self) -> np.ndarray:
        """Node abscissas (read-only)."""
        return self._x

    @property
    def y(self) -> np.ndarray:
        """Function values at the nodes (read-only)."""
        return self._y

    @property
    def a(self) -> float:
        return self._a

    @property
    def b(self) -> float:
        return self._b

    @property
    def n(self) -> int:
        """Number of segments; the set holds ``n + 1`` points."""
        return len(self._x) - 1

    @property
    def points(self) -> list[SamplePoint]:
        return [SamplePoint(float(x), float(y)) for x, y in zip(self._x, self._y)]

    def __len__(self) -> int:
        return len(self._x)

    def __getitem__(self, i: int) -> SamplePoint:
        return SamplePoint(float(self._x[i]), float(self._y[i]))

    def __iter__(self) -> Iterator[SamplePoint]:
        return iter(self.points)

    def __repr__(self) -> str:
        return (
            f"SampleSet(n={self.n}, interval=[{self._a}, {self._b}], "
            f"x=[{self._x[0]:.6g} .. {self._x[-1]:.6g}])"
        )


def _check_grid_params(a: float, b: float, n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidInputError(f"n must be an int, got {type(n).__name__}")
    if n < 1:
        raise InvalidInputError(f"n must be >= 1, got {n}")
    if not (math.isfinite(a) and math.isfinite(b)):
        raise InvalidInputError(f"Interval [{a}, {b}] must be finite")
    if not a < b:
        raise InvalidInputError(f"Interval [{a}, {b}] must satisfy a < b")


def _sample(function: Callable[[float], float], nodes: np.ndarray) -> np.ndarray:
    values = np.empty(len(nodes))
    for i, x in enumerate(nodes):
        y = float(function(float(x)))
        if not math.isfinite(y):
            raise InvalidInputError(f"f({x}) = {y} is not finite")
        values[i] = y
    return values


def uniform_grid(a: float, b: float, n: int,
                 function: Callable[[float], float]) -> SampleSet:
    """Sample ``function`` at ``n + 1`` equally spaced nodes on ``[a, b]``.

    Parameters
    ----------
    a, b : float
        Interval bounds, ``a < b``.
    n : int
        Number of segments (``n >= 1``).
    function : callable
        ``f(x) -> float``.

    Returns
    -------
    SampleSet
        Nodes ``x_i = a + i * (b - a) / n`` for ``i = 0..n``.

    Examples
    --------
    >>> s = uniform_grid(1.0, 6.0, 5, lambda x: x * x)
    >>> s.x.tolist()
    [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    """
    a, b = float(a), float(b)
    _check_grid_params(a, b, n)
    h = (b - a) / n
    x = a + h * np.arange(n + 1)
    x[-1] = b  # pin the end node against round-off in a + n*h
    return SampleSet(x, _sample(function, x), a, b)


def chebyshev_nodes(n: int) -> np.ndarray:
    """Chebyshev nodes of the first kind on [-1, 1], in index order.

    ``t_i = cos(pi * (2i + 1) / (2(n + 1)))`` for ``i = 0..n``.  Cosine is
    decreasing on ``[0, pi]``, so the result is **descending**.  The set is
    symmetric about 0 and every ``|t_i| < 1``.

    Parameters
    ----------
    n : int
        Highest index; ``n + 1`` nodes are returned.

    Returns
    -------
    ndarray of shape (n + 1,)
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise InvalidInputError(f"n must be an int >= 1, got {n!r}")
    i = np.arange(n + 1)
    return np.cos(np.pi * (2 * i + 1) / (2 * (n + 1)))


def chebyshev_grid(a: float, b: float, n: int,
                   function: Callable[[float], float]) -> SampleSet:
    """Sample ``function`` at ``n + 1`` Chebyshev nodes mapped to ``[a, b]``.

    Nodes ``x_i = (a + b)/2 + (b - a)/2 * t_i`` come out in descending order
    (see :func:`chebyshev_nodes`); they are sorted ascending before the
    :class:`SampleSet` is built.  All nodes lie strictly inside ``(a, b)``;
    the returned set still reports ``[a, b]`` as its interval.

    Parameters
    ----------
    a, b : float
        Interval bounds, ``a < b``.
    n : int
        Number of segments (``n >= 1``).
    function : callable
        ``f(x) -> float``.

    Returns
    -------
    SampleSet
    """
    a, b = float(a), float(b)
    _check_grid_params(a, b, n)
    x = 0.5 * (a + b) + 0.5 * (b - a) * chebyshev_nodes(n)
    x = np.sort(x)
    return SampleSet(x, _sample(function, x), a, b)
