"""
Compare global Lagrange interpolation with the natural cubic spline.

Tests:
1. Smooth function f(x) = x * log10(x + 1) - 1 on [1, 6]: sample table,
   20-point comparison table, max errors on 100 points
2. Kinked function f(x) = |x| on [-3, 3]: Runge-like growth of the uniform
   Lagrange error near the ends vs. a bounded spline error
3. Runge function 1 / (1 + 25 x^2): uniform vs. Chebyshev nodes for
   increasing n
4. Charts: one PNG per scenario (curves, nodes, log-scale errors)

Usage:
    python compare_interpolation.py
"""

import math
import os
import time

from pyinterp import CubicSpline, chebyshev_grid, uniform_grid
from pyinterp.compare import (
    compare_methods,
    max_errors,
    plot_comparison,
    print_comparison,
    print_sample_table,
)

# ============================================================================
# Configuration
# ============================================================================

SMOOTH_INTERVAL = (1.0, 6.0)
SMOOTH_N_VALUES = [5]

ABS_INTERVAL = (-3.0, 3.0)
ABS_N = 9

RUNGE_INTERVAL = (-1.0, 1.0)
RUNGE_N_VALUES = [4, 8, 12, 16, 20]

OUTPUT_DIR = os.path.dirname(os.path.abspath(__file__))
MAKE_PLOTS = True


# ============================================================================
# Test functions
# ============================================================================

def x_log10(x):
    """x * log10(x + 1) - 1"""
    return x * math.log10(x + 1) - 1


def abs_x(x):
    """|x|"""
    return abs(x)


def runge(x):
    """1 / (1 + 25 x^2)"""
    return 1.0 / (1.0 + 25.0 * x * x)


# ============================================================================
# Tests
# ============================================================================

def test_smooth():
    """Smooth function: both methods should be accurate."""
    print(f"\n{'=' * 78}")
    print(f"  TEST 1: f(x) = x * log10(x + 1) - 1 on {list(SMOOTH_INTERVAL)}")
    print(f"{'=' * 78}")

    a, b = SMOOTH_INTERVAL
    for n in SMOOTH_N_VALUES:
        print(f"\n  --- n = {n} ({n + 1} nodes) ---\n")
        data = uniform_grid(a, b, n, x_log10)
        print_sample_table(data)

        start = time.perf_counter()
        spline = CubicSpline(data, verbose=True)
        print(f"  Spline built in {time.perf_counter() - start:.6f}s\n")

        print_comparison(compare_methods(data, x_log10, spline=spline))
        errs = max_errors(data, x_log10)
        print(f"  100-point max error: Lagrange {errs['lagrange']:.3e}, "
              f"Spline {errs['spline']:.3e}")

        if MAKE_PLOTS:
            cheb = chebyshev_grid(a, b, n, x_log10)
            path = os.path.join(OUTPUT_DIR, f"interpolation_xlog10_n{n}.png")
            plot_comparison(data, cheb, x_log10, path)
            print(f"  Saved {path}")


def test_abs():
    """|x| with uniform nodes: Lagrange oscillates, spline stays bounded."""
    print(f"\n{'=' * 78}")
    print(f"  TEST 2: f(x) = |x| on {list(ABS_INTERVAL)}, n = {ABS_N}")
    print(f"{'=' * 78}\n")

    a, b = ABS_INTERVAL
    data = uniform_grid(a, b, ABS_N, abs_x)
    cheb = chebyshev_grid(a, b, ABS_N, abs_x)
    print_comparison(compare_methods(data, abs_x))

    errs_u = max_errors(data, abs_x)
    errs_c = max_errors(cheb, abs_x)
    print(f"  {'Method':<28s} {'max |err|':>12s}")
    print(f"  {'─' * 41}")
    print(f"  {'Lagrange (uniform)':<28s} {errs_u['lagrange']:>12.3e}")
    print(f"  {'Lagrange (Chebyshev)':<28s} {errs_c['lagrange']:>12.3e}")
    print(f"  {'Spline (uniform)':<28s} {errs_u['spline']:>12.3e}")

    if MAKE_PLOTS:
        path = os.path.join(OUTPUT_DIR, f"interpolation_abs_n{ABS_N}.png")
        plot_comparison(data, cheb, abs_x, path)
        print(f"\n  Saved {path}")


def test_runge():
    """Max error vs n for the Runge function on both node families."""
    print(f"\n{'=' * 78}")
    print(f"  TEST 3: Runge function 1/(1+25x^2) on {list(RUNGE_INTERVAL)}")
    print(f"{'=' * 78}\n")

    a, b = RUNGE_INTERVAL
    print(f"  {'n':>4s} {'Lagr uniform':>14s} {'Lagr Chebyshev':>16s} {'Spline':>12s}")
    print(f"  {'─' * 49}")
    for n in RUNGE_N_VALUES:
        errs_u = max_errors(uniform_grid(a, b, n, runge), runge)
        errs_c = max_errors(chebyshev_grid(a, b, n, runge), runge)
        print(f"  {n:>4d} {errs_u['lagrange']:>14.3e} "
              f"{errs_c['lagrange']:>16.3e} {errs_u['spline']:>12.3e}")


if __name__ == "__main__":
    print("=== Interpolation: Lagrange vs. natural cubic spline ===")
    test_smooth()
    test_abs()
    test_runge()
