"""pyinterp: Lagrange vs. natural cubic spline interpolation of 1-D functions.

Provides uniform and Chebyshev sample grids (:func:`uniform_grid`,
:func:`chebyshev_grid`), the global Lagrange interpolant
(:func:`lagrange`), the :class:`CubicSpline` class for natural cubic
splines built with a dense Gaussian elimination solver (:func:`solve`),
and helpers in :mod:`pyinterp.compare` for error tables and charts.

Example
-------
>>> import math
>>> from pyinterp import CubicSpline, lagrange, uniform_grid
>>> def f(x):
...     return x * math.log10(x + 1) - 1
>>> data = uniform_grid(1.0, 6.0, 5, f)
>>> sp = CubicSpline(data)
>>> abs(sp.eval(3.5) - f(3.5)) < 1e-1
True
>>> abs(lagrange(data, 3.5) - f(3.5)) < 1e-1
True
"""

from pyinterp._version import __version__
from pyinterp.exceptions import InvalidInputError, SingularSystemError
from pyinterp.grid import SamplePoint, SampleSet, chebyshev_grid, chebyshev_nodes, uniform_grid
from pyinterp.lagrange import lagrange, lagrange_batch, lagrange_interpolate
from pyinterp.linalg import solve
from pyinterp.spline import CubicSpline

__all__ = [
    "CubicSpline",
    "InvalidInputError",
    "SamplePoint",
    "SampleSet",
    "SingularSystemError",
    "chebyshev_grid",
    "chebyshev_nodes",
    "lagrange",
    "lagrange_batch",
    "lagrange_interpolate",
    "solve",
    "uniform_grid",
    "__version__",
]
