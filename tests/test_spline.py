"""Tests for CubicSpline (natural cubic spline interpolation)."""

import math
import pickle

import numpy as np
import pytest

from pyinterp import CubicSpline, InvalidInputError, SampleSet, lagrange, uniform_grid
from pyinterp.compare import evaluation_points
from conftest import abs_x, x_log10


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_model_shapes(self, smooth_spline):
        """One gamma per node and one width per segment."""
        assert len(smooth_spline.gammas) == len(smooth_spline.x) == 6
        assert len(smooth_spline.h) == 5
        assert smooth_spline.num_segments == 5

    def test_widths(self, nonuniform_spline, nonuniform_data):
        np.testing.assert_allclose(nonuniform_spline.h, np.diff(nonuniform_data.x))

    def test_natural_boundary_gammas(self, nonuniform_spline):
        assert nonuniform_spline.gammas[0] == 0.0
        assert nonuniform_spline.gammas[-1] == 0.0

    def test_interior_equations_hold(self, nonuniform_spline):
        """gamma satisfies the continuity equations at interior nodes."""
        x, y = nonuniform_spline.x, nonuniform_spline.y
        g, h = nonuniform_spline.gammas, nonuniform_spline.h
        for i in range(1, len(x) - 1):
            lhs = h[i - 1] * g[i - 1] + 2 * (h[i - 1] + h[i]) * g[i] + h[i] * g[i + 1]
            rhs = 6 * ((y[i + 1] - y[i]) / h[i] - (y[i] - y[i - 1]) / h[i - 1])
            assert lhs == pytest.approx(rhs, abs=1e-12)

    def test_two_nodes_is_linear(self):
        sp = CubicSpline.from_values([0.0, 2.0], [1.0, 5.0])
        assert sp.gammas.tolist() == [0.0, 0.0]
        assert sp.eval(0.5) == pytest.approx(2.0)
        assert sp.eval(3.0) == pytest.approx(7.0)

    def test_from_values_validates(self):
        with pytest.raises(InvalidInputError):
            CubicSpline.from_values([0.0, 2.0, 1.0], [0.0, 1.0, 2.0])
        with pytest.raises(InvalidInputError):
            CubicSpline.from_values([1.0], [1.0])

    def test_model_is_read_only(self, smooth_spline):
        with pytest.raises(ValueError):
            smooth_spline.gammas[1] = 0.0
        with pytest.raises(ValueError):
            smooth_spline.h[0] = 0.0

    def test_verbose_prints_progress(self, smooth_data, capsys):
        CubicSpline(smooth_data, verbose=True)
        out = capsys.readouterr().out
        assert "Building natural cubic spline (6 nodes" in out
        assert "Diagonally dominant: True" in out
        assert "Built in" in out

    def test_quiet_by_default(self, smooth_data, capsys):
        CubicSpline(smooth_data)
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Interpolation and smoothness
# ---------------------------------------------------------------------------

class TestInterpolation:
    @pytest.mark.parametrize("fixture", ["smooth_spline", "abs_spline", "nonuniform_spline"])
    def test_reproduces_nodes(self, fixture, request):
        sp = request.getfixturevalue(fixture)
        for x, y in zip(sp.x, sp.y):
            assert abs(sp.eval(x) - y) < 1e-9

    def test_value_continuous_at_nodes(self, nonuniform_spline):
        eps = 1e-9
        for x in nonuniform_spline.x[1:-1]:
            left = nonuniform_spline.eval(x - eps)
            right = nonuniform_spline.eval(x + eps)
            assert abs(left - right) < 1e-6

    @pytest.mark.parametrize("order", [0, 1, 2])
    def test_adjacent_segments_agree_at_nodes(self, nonuniform_spline, order):
        """S, S' and S'' from both neighbouring segments match at each node."""
        sp = nonuniform_spline
        for i in range(1, len(sp.x) - 1):
            left = sp._segment_value(i - 1, sp.x[i], order)
            right = sp._segment_value(i, sp.x[i], order)
            assert left == pytest.approx(right, abs=1e-10)

    def test_second_derivative_equals_gamma(self, nonuniform_spline):
        for x, g in zip(nonuniform_spline.x, nonuniform_spline.gammas):
            assert nonuniform_spline.eval(x, 2) == pytest.approx(g, abs=1e-12)

    def test_natural_boundary_finite_difference(self, nonuniform_spline):
        """One-sided FD estimate of S'' vanishes at both ends."""
        sp = nonuniform_spline
        d = 1e-4
        x0, xn = sp.x[0], sp.x[-1]
        d2_left = (sp.eval(x0) - 2 * sp.eval(x0 + d) + sp.eval(x0 + 2 * d)) / d ** 2
        d2_right = (sp.eval(xn) - 2 * sp.eval(xn - d) + sp.eval(xn - 2 * d)) / d ** 2
        assert abs(d2_left) < 1e-2
        assert abs(d2_right) < 1e-2
        assert sp.eval(x0, 2) == 0.0
        assert sp.eval(xn, 2) == 0.0

    def test_first_derivative_matches_fd(self, nonuniform_spline):
        x, h = 2.2, 1e-6
        fd = (nonuniform_spline.eval(x + h) - nonuniform_spline.eval(x - h)) / (2 * h)
        assert nonuniform_spline.eval(x, 1) == pytest.approx(fd, abs=1e-6)

    def test_unsupported_derivative_raises(self, smooth_spline):
        with pytest.raises(ValueError, match="not supported"):
            smooth_spline.eval(2.0, 3)

    def test_reproduces_linear_functions(self):
        s = uniform_grid(-2.0, 2.0, 7, lambda x: 3.0 * x - 1.0)
        sp = CubicSpline(s)
        np.testing.assert_allclose(sp.gammas, 0.0, atol=1e-12)
        for x in [-3.0, -1.1, 0.0, 0.4, 2.0, 2.5]:
            assert sp.eval(x) == pytest.approx(3.0 * x - 1.0, abs=1e-12)


# ---------------------------------------------------------------------------
# Agreement with SciPy
# ---------------------------------------------------------------------------

class TestAgainstScipy:
    @pytest.mark.parametrize("fixture", ["smooth_spline", "abs_spline", "nonuniform_spline"])
    def test_values_and_second_derivatives(self, fixture, request):
        from scipy.interpolate import CubicSpline as ScipyCubicSpline

        sp = request.getfixturevalue(fixture)
        ref = ScipyCubicSpline(sp.x, sp.y, bc_type="natural")
        xs = np.linspace(sp.x[0], sp.x[-1], 97)
        np.testing.assert_allclose(sp.eval_batch(xs), ref(xs), atol=1e-10)
        np.testing.assert_allclose(sp.eval_batch(xs, 1), ref(xs, 1), atol=1e-9)
        np.testing.assert_allclose(sp.gammas, ref(sp.x, 2), atol=1e-9)


# ---------------------------------------------------------------------------
# Segment search and out-of-range policy
# ---------------------------------------------------------------------------

class TestSegments:
    def test_interior_point(self, smooth_spline):
        assert smooth_spline.segment_index(2.5) == 1

    def test_node_belongs_to_left_segment(self, smooth_spline):
        assert smooth_spline.segment_index(3.0) == 1

    def test_end_nodes(self, smooth_spline):
        assert smooth_spline.segment_index(1.0) == 0
        assert smooth_spline.segment_index(6.0) == 4

    def test_below_range_clamps_to_first(self, smooth_spline):
        assert smooth_spline.segment_index(-100.0) == 0

    def test_above_range_clamps_to_last(self, smooth_spline):
        assert smooth_spline.segment_index(100.0) == 4

    def test_extrapolation_uses_boundary_cubic(self, smooth_spline):
        for x, i in [(0.5, 0), (7.0, 4)]:
            assert smooth_spline.eval(x) == pytest.approx(
                smooth_spline._segment_value(i, x, 0), abs=0
            )

    def test_extrapolation_continuous_at_ends(self, smooth_spline):
        eps = 1e-9
        for x in (1.0, 6.0):
            assert smooth_spline.eval(x - eps) == pytest.approx(
                smooth_spline.eval(x + eps), abs=1e-6
            )


# ---------------------------------------------------------------------------
# Batch evaluation
# ---------------------------------------------------------------------------

class TestBatchEval:
    @pytest.mark.parametrize("order", [0, 1, 2])
    def test_batch_matches_loop(self, nonuniform_spline, order):
        """eval_batch equals eval pointwise, including nodes and extrapolation."""
        pts = np.concatenate([[-1.0, 4.5], nonuniform_spline.x,
                              np.linspace(0.0, 4.0, 23)])
        batch = nonuniform_spline.eval_batch(pts, order)
        loop = [nonuniform_spline.eval(x, order) for x in pts]
        np.testing.assert_allclose(batch, loop, atol=1e-12)

    def test_batch_shape(self, smooth_spline):
        assert smooth_spline.eval_batch(np.linspace(1, 6, 13)).shape == (13,)
        assert smooth_spline.eval_batch(2.0).shape == (1,)

    def test_callable(self, smooth_spline):
        assert smooth_spline(2.5) == smooth_spline.eval(2.5)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_smooth_mid_interval(self, smooth_data, smooth_spline):
        """x*log10(x+1)-1 on [1,6], n=5: both methods within 0.1 at x=3.5."""
        exact = x_log10(3.5)
        assert abs(smooth_spline.eval(3.5) - exact) < 1e-1
        assert abs(lagrange(smooth_data, 3.5) - exact) < 1e-1

    def test_smooth_convergence(self):
        """Max error drops when the grid is refined."""
        xs = evaluation_points(1.0, 6.0, 100)
        errs = []
        for n in [5, 20]:
            sp = CubicSpline(uniform_grid(1.0, 6.0, n, x_log10))
            errs.append(max(abs(sp.eval(x) - x_log10(x)) for x in xs))
        assert errs[1] < errs[0] / 5

    def test_abs_runge_like_behaviour(self, abs_uniform, abs_spline):
        """|x| on [-3,3], n=9: Lagrange error near the ends dwarfs the spline's."""
        ends = np.concatenate([np.linspace(-3.0, -7.0 / 3.0, 50),
                               np.linspace(7.0 / 3.0, 3.0, 50)])
        lag_err = max(abs(lagrange(abs_uniform, x) - abs_x(x)) for x in ends)
        spl_err = max(abs(abs_spline.eval(x) - abs_x(x)) for x in ends)
        assert lag_err > 0.1
        assert lag_err > 10 * spl_err

    def test_abs_spline_error_bounded(self, abs_spline):
        xs = evaluation_points(-3.0, 3.0, 601)
        err = max(abs(abs_spline.eval(x) - abs(x)) for x in xs)
        assert err < 0.35


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestSerialization:
    def test_save_load_roundtrip(self, nonuniform_spline, tmp_path):
        path = tmp_path / "spline.pkl"
        nonuniform_spline.save(path)
        loaded = CubicSpline.load(path)

        for x in [-0.5, 0.3, 1.7, 3.3, 4.2]:
            np.testing.assert_allclose(
                loaded.eval(x), nonuniform_spline.eval(x), atol=0, rtol=0
            )
        np.testing.assert_array_equal(loaded.gammas, nonuniform_spline.gammas)

    def test_wrong_type_raises(self, tmp_path):
        path = tmp_path / "not_spline.pkl"
        with open(path, "wb") as fh:
            pickle.dump({"not": "a spline"}, fh)

        with pytest.raises(TypeError, match="CubicSpline"):
            CubicSpline.load(path)

    def test_version_mismatch_warns(self, smooth_spline):
        state = smooth_spline.__getstate__()
        state["_pyinterp_version"] = "0.0.0-old"
        obj = object.__new__(CubicSpline)
        with pytest.warns(UserWarning, match="0.0.0-old"):
            obj.__setstate__(state)
        assert obj.eval(2.0) == smooth_spline.eval(2.0)


# ---------------------------------------------------------------------------
# Repr / Str
# ---------------------------------------------------------------------------

class TestReprStr:
    def test_repr_contains_key_info(self, smooth_spline):
        r = repr(smooth_spline)
        assert "nodes=6" in r
        assert "segments=5" in r
        assert "interval=[1.0, 6.0]" in r

    def test_str_contains_sections(self, smooth_spline):
        s = str(smooth_spline)
        assert "natural, 5 segments" in s
        assert "Nodes:" in s
        assert "Interval:" in s

    def test_str_truncates_many_nodes(self):
        sp = CubicSpline(uniform_grid(0.0, 1.0, 10, math.sin))
        assert ", ...]" in str(sp)

    def test_sample_set_kept(self, smooth_spline, smooth_data):
        assert isinstance(smooth_spline.sample_set, SampleSet)
        assert smooth_spline.sample_set is smooth_data
