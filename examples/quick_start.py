"""Quick start example: interpolate a 1D function two ways and compare."""

import math

from pyinterp import CubicSpline, lagrange, uniform_grid


def f(x):
    """A smooth test function: x * log10(x + 1) - 1."""
    return x * math.log10(x + 1) - 1


# Sample 6 equally spaced nodes on [1, 6]
data = uniform_grid(1.0, 6.0, 5, f)
spline = CubicSpline(data)

# Evaluate at a test point between nodes
x = 3.5
exact = f(x)
lag = lagrange(data, x)
spl = spline.eval(x)

print(f"Exact:    {exact:.10f}")
print(f"Lagrange: {lag:.10f}  (error {abs(lag - exact):.2e})")
print(f"Spline:   {spl:.10f}  (error {abs(spl - exact):.2e})")

# Spline derivatives come from the same closed form
print(f"\nS'(x)  = {spline.eval(x, 1):.10f}")
print(f"S''(x) = {spline.eval(x, 2):.10f}")
