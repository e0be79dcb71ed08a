import numpy as np
import pytest

from moody.core.hydraulics.smooth import smooth_max, smooth_min, smooth_step


def test_step_is_half_at_origin():
    assert smooth_step(0.0, 0.3) == pytest.approx(0.5)


def test_step_tends_to_hard_step_for_small_width():
    assert smooth_step(1.0, 1e-6) == pytest.approx(1.0, abs=1e-9)
    assert smooth_step(-1.0, 1e-6) == pytest.approx(0.0, abs=1e-9)


def test_step_is_antisymmetric_about_half():
    x = np.linspace(-3.0, 3.0, 13)
    np.testing.assert_allclose(smooth_step(x, 0.4) + smooth_step(-x, 0.4), 1.0)


def test_step_widens_with_e():
    # a wider blend is further from the hard step at the same x
    assert smooth_step(0.1, 1.0) < smooth_step(0.1, 0.01)


def test_min_max_pick_the_right_value():
    assert smooth_min(1.0, 5.0, 1e-6) == pytest.approx(1.0)
    assert smooth_max(1.0, 5.0, 1e-6) == pytest.approx(5.0)
    assert smooth_min(5.0, 1.0, 1e-6) == pytest.approx(1.0)
    assert smooth_max(5.0, 1.0, 1e-6) == pytest.approx(5.0)


def test_min_max_of_equal_values():
    assert smooth_min(2.5, 2.5, 0.1) == pytest.approx(2.5)
    assert smooth_max(2.5, 2.5, 0.1) == pytest.approx(2.5)


def test_min_plus_max_is_sum():
    a = np.array([0.0, 0.3, 1.0, 4.0])
    b = np.array([1.0, 0.2, 1.5, -2.0])
    np.testing.assert_allclose(smooth_min(a, b, 0.4) + smooth_max(a, b, 0.4), a + b)


def test_results_stay_between_inputs():
    a = np.linspace(-2.0, 2.0, 21)
    b = 0.0
    lo = np.minimum(a, b)
    hi = np.maximum(a, b)
    for y in (smooth_min(a, b, 0.5), smooth_max(a, b, 0.5)):
        assert np.all(y >= lo - 1e-15)
        assert np.all(y <= hi + 1e-15)


def test_elementwise_broadcasting():
    out = smooth_max(0.0, np.array([[-1.0], [1.0]]), np.array([0.1, 0.2, 0.3]))
    assert out.shape == (2, 3)
