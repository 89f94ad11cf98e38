"""Side-by-side comparison of Lagrange and cubic spline interpolation.

Drives the interpolation core for a test function: pointwise error tables
on a coarse display grid, maximum errors on a finer grid, and dense arrays
(plus an optional matplotlib chart) for visual comparison of uniform-node
Lagrange, Chebyshev-node Lagrange and the natural cubic spline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from pyinterp.grid import SampleSet
from pyinterp.lagrange import lagrange_batch
from pyinterp.spline import CubicSpline

DISPLAY_POINTS = 20
ERROR_POINTS = 100
PLOT_INTERVALS = 200


def evaluation_points(a: float, b: float, num_points: int) -> np.ndarray:
    """``num_points`` evenly spaced points on ``[a, b]``, both ends included."""
    if num_points < 2:
        raise ValueError(f"num_points must be >= 2, got {num_points}")
    return np.linspace(a, b, num_points)


def _exact_values(function: Callable[[float], float], x: np.ndarray) -> np.ndarray:
    exact = np.empty(len(x))
    for i, xi in enumerate(x):
        exact[i] = function(float(xi))
    return exact


@dataclass
class Comparison:
    """Pointwise results of both interpolation methods on one grid."""

    x: np.ndarray
    exact: np.ndarray
    lagrange: np.ndarray
    lagrange_error: np.ndarray
    spline: np.ndarray
    spline_error: np.ndarray

    @property
    def max_lagrange_error(self) -> float:
        return float(np.max(self.lagrange_error))

    @property
    def max_spline_error(self) -> float:
        return float(np.max(self.spline_error))

    def __len__(self) -> int:
        return len(self.x)


def compare_methods(
    sample_set: SampleSet,
    function: Callable[[float], float],
    num_points: int = DISPLAY_POINTS,
    spline: CubicSpline | None = None,
) -> Comparison:
    """Evaluate both interpolants and their errors on ``[a, b]``.

    Parameters
    ----------
    sample_set : SampleSet
        Interpolation nodes (the interval is taken from it).
    function : callable
        The true function ``f(x) -> float``.
    num_points : int, optional
        Number of evenly spaced evaluation points.  Default 20.
    spline : CubicSpline, optional
        Pre-built spline for ``sample_set``; built here if omitted.

    Returns
    -------
    Comparison
    """
    if spline is None:
        spline = CubicSpline(sample_set)
    x = evaluation_points(sample_set.a, sample_set.b, num_points)
    exact = _exact_values(function, x)
    lag = lagrange_batch(sample_set, x)
    spl = spline.eval_batch(x)
    return Comparison(
        x=x,
        exact=exact,
        lagrange=lag,
        lagrange_error=np.abs(exact - lag),
        spline=spl,
        spline_error=np.abs(exact - spl),
    )


def max_errors(
    sample_set: SampleSet,
    function: Callable[[float], float],
    num_points: int = ERROR_POINTS,
) -> Dict[str, float]:
    """Maximum absolute error of each method over ``num_points`` points.

    Returns
    -------
    dict
        ``{'lagrange': float, 'spline': float}``
    """
    cmp = compare_methods(sample_set, function, num_points)
    return {
        "lagrange": cmp.max_lagrange_error,
        "spline": cmp.max_spline_error,
    }


# ----------------------------------------------------------------------
# Console tables
# ----------------------------------------------------------------------

def format_sample_table(sample_set: SampleSet) -> str:
    lines = [
        f"{'xi':<10s} {'f(xi)':<15s}",
        "-" * 25,
    ]
    for p in sample_set:
        lines.append(f"{p.x:<10.4f} {p.y:<15.6f}")
    return "\n".join(lines)


def format_comparison(cmp: Comparison) -> str:
    header = (
        f"{'x':<10s} {'f(x)':<15s} {'Lagrange':<15s} {'Lagrange err':<15s} "
        f"{'Spline':<15s} {'Spline err':<15s}"
    )
    lines = [header, "-" * 90]
    for i in range(len(cmp)):
        lines.append(
            f"{cmp.x[i]:<10.4f} {cmp.exact[i]:<15.6f} {cmp.lagrange[i]:<15.6f} "
            f"{cmp.lagrange_error[i]:<15.6e} {cmp.spline[i]:<15.6f} "
            f"{cmp.spline_error[i]:<15.6e}"
        )
    return "\n".join(lines)


def print_sample_table(sample_set: SampleSet) -> None:
    print("Sample table:")
    print(format_sample_table(sample_set))
    print()


def print_comparison(cmp: Comparison) -> None:
    print("Interpolation comparison:")
    print(format_comparison(cmp))
    print(f"\n  max |Lagrange err| = {cmp.max_lagrange_error:.3e}")
    print(f"  max |Spline err|   = {cmp.max_spline_error:.3e}\n")


# ----------------------------------------------------------------------
# Visualization
# ----------------------------------------------------------------------

def plot_data(
    uniform: SampleSet,
    chebyshev: SampleSet,
    function: Callable[[float], float],
    num_points: int = PLOT_INTERVALS,
) -> Dict[str, np.ndarray]:
    """Dense arrays for plotting the three interpolants against ``function``.

    The spline is built on the uniform nodes.  The grid spans the uniform
    set's interval with ``num_points`` intervals (``num_points + 1``
    points).

    Returns
    -------
    dict
        Keys ``x``, ``exact``, ``lagrange_uniform``, ``lagrange_chebyshev``,
        ``spline``, ``error_lagrange_uniform``, ``error_lagrange_chebyshev``,
        ``error_spline``, ``uniform_nodes_x``, ``uniform_nodes_y``,
        ``chebyshev_nodes_x``, ``chebyshev_nodes_y``.
    """
    spline = CubicSpline(uniform)
    x = evaluation_points(uniform.a, uniform.b, num_points + 1)
    exact = _exact_values(function, x)
    lag_u = lagrange_batch(uniform, x)
    lag_c = lagrange_batch(chebyshev, x)
    spl = spline.eval_batch(x)
    return {
        "x": x,
        "exact": exact,
        "lagrange_uniform": lag_u,
        "lagrange_chebyshev": lag_c,
        "spline": spl,
        "error_lagrange_uniform": np.abs(exact - lag_u),
        "error_lagrange_chebyshev": np.abs(exact - lag_c),
        "error_spline": np.abs(exact - spl),
        "uniform_nodes_x": np.array(uniform.x),
        "uniform_nodes_y": np.array(uniform.y),
        "chebyshev_nodes_x": np.array(chebyshev.x),
        "chebyshev_nodes_y": np.array(chebyshev.y),
    }


def plot_comparison(
    uniform: SampleSet,
    chebyshev: SampleSet,
    function: Callable[[float], float],
    filename: str | os.PathLike,
    num_points: int = PLOT_INTERVALS,
    title: str | None = None,
) -> None:
    """Save a four-panel comparison chart to ``filename``.

    Panels: the interpolants over the true function, the uniform nodes,
    the Chebyshev nodes, and the absolute errors on a log scale.
    """
    import matplotlib.pyplot as plt

    data = plot_data(uniform, chebyshev, function, num_points)
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    ax_curves, ax_uniform, ax_cheb, ax_err = axes.ravel()

    ax_curves.plot(data["x"], data["exact"], color="tab:cyan", linewidth=3,
                   label="f(x)")
    ax_curves.plot(data["x"], data["lagrange_uniform"], "--", color="tab:red",
                   label="Lagrange (uniform nodes)")
    ax_curves.plot(data["x"], data["lagrange_chebyshev"], "-.",
                   color="tab:purple", label="Lagrange (Chebyshev nodes)")
    ax_curves.plot(data["x"], data["spline"], ":", color="tab:blue",
                   label="Natural cubic spline")
    ax_curves.set_title("Interpolation methods")

    ax_uniform.scatter(data["uniform_nodes_x"], data["uniform_nodes_y"],
                       color="tab:red", label="Uniform nodes")
    ax_uniform.set_title("Uniform nodes")

    ax_cheb.scatter(data["chebyshev_nodes_x"], data["chebyshev_nodes_y"],
                    color="tab:purple", label="Chebyshev nodes")
    ax_cheb.set_title("Chebyshev nodes")

    # Exact hits at nodes would be -inf on a log axis.
    floor = 1e-17
    ax_err.semilogy(data["x"], np.maximum(data["error_lagrange_uniform"], floor),
                    color="tab:red", label="Lagrange (uniform)")
    ax_err.semilogy(data["x"], np.maximum(data["error_lagrange_chebyshev"], floor),
                    color="tab:purple", label="Lagrange (Chebyshev)")
    ax_err.semilogy(data["x"], np.maximum(data["error_spline"], floor),
                    color="tab:blue", label="Spline")
    ax_err.set_title("Absolute error (log)")

    for ax in axes.ravel():
        ax.set_xlabel("x")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="best")
    ax_curves.set_ylabel("f(x)")
    ax_err.set_ylabel("|error|")

    fig.suptitle(title or f"Interpolation results (n = {uniform.n})")
    plt.tight_layout(rect=[0, 0, 1, 0.96])
    plt.savefig(os.fspath(filename), dpi=150, bbox_inches="tight")
    plt.close(fig)
