"""Runge phenomenon: uniform vs. Chebyshev nodes for |x| and the spline."""

from pyinterp import chebyshev_grid, uniform_grid
from pyinterp.compare import max_errors, plot_comparison

n = 9
uniform = uniform_grid(-3.0, 3.0, n, abs)
cheb = chebyshev_grid(-3.0, 3.0, n, abs)

errs_u = max_errors(uniform, abs)
errs_c = max_errors(cheb, abs)
print(f"Lagrange, uniform nodes:   {errs_u['lagrange']:.3e}")
print(f"Lagrange, Chebyshev nodes: {errs_c['lagrange']:.3e}")
print(f"Natural cubic spline:      {errs_u['spline']:.3e}")

plot_comparison(uniform, cheb, abs, "runge_abs.png")
