import numpy as np
import pytest

from moody.core.build.config import FrictionConfig, SolverOptions
from moody.core.build.validate import ValidationError
from moody.core.hydraulics.friction import (
    friction_components,
    friction_factor,
    laminar_f,
    swamee_jain_f,
    transition_factor,
)
from moody.core.solver.colebrook import SolveError, colebrook_residual


# ============================================================
# Correlations
# ============================================================

def test_swamee_jain_closed_form():
    re, rr = 1e5, 0.001
    expected = 0.25 / np.log10(rr / 3.7 + 5.74 / re**0.9) ** 2
    assert swamee_jain_f(re, rr) == pytest.approx(expected, rel=1e-12)
    assert expected == pytest.approx(0.0223, rel=0.01)


def test_laminar_is_hagen_poiseuille():
    np.testing.assert_allclose(laminar_f([64.0, 1000.0]), [1.0, 0.064])


def test_transition_factor_limits():
    t = transition_factor([100.0, 3000.0, 1e6])
    assert abs(t[0]) < 0.1
    assert t[1] == pytest.approx(0.5, abs=0.1)
    assert t[2] == pytest.approx(1.0, abs=1e-3)


# ============================================================
# Regimes
# ============================================================

def test_concrete_scenario_explicit_and_implicit():
    f_sj = friction_factor(1e5, 0.001, implicit=False)
    f_cb = friction_factor(1e5, 0.001, implicit=True)
    assert f_sj == pytest.approx(swamee_jain_f(1e5, 0.001), rel=2e-3)
    assert f_cb == pytest.approx(f_sj, rel=0.02)


@pytest.mark.parametrize("re", [1e5, 1e6, 1e7])
def test_explicit_turbulent_matches_swamee_jain(re):
    comp = friction_components(re, 0.0, implicit=False)
    assert comp.f_turbulent == pytest.approx(swamee_jain_f(re, 0.0), rel=1e-12)
    assert comp.f == pytest.approx(swamee_jain_f(re, 0.0), rel=2e-3)


def test_implicit_smooth_pipe_converges_to_colebrook():
    re = np.array([5e3, 1e4, 1e5, 1e6, 1e7])
    comp = friction_components(re, 0.0)
    for re_i, f_i in zip(re, comp.f_turbulent):
        assert colebrook_residual(f_i, re_i, 0.0) == pytest.approx(0.0, abs=1e-6)
    # the blend only adds the smoothing tail of the upper transition edge
    np.testing.assert_allclose(comp.f[2:], comp.f_turbulent[2:], rtol=2e-3)


@pytest.mark.parametrize("implicit", [True, False])
@pytest.mark.parametrize("rr", [0.0, 0.01, 0.05])
def test_laminar_region_is_64_over_re(implicit, rr):
    re = np.array([100.0, 500.0, 1000.0, 1500.0])
    comp = friction_components(re, rr, implicit=implicit)
    np.testing.assert_allclose(comp.f, 64.0 / re, rtol=0.02)
    assert np.all(np.abs(comp.transition) < 0.1)


def test_forcing_turbulent_with_transition_band():
    f = friction_factor(1000.0, 0.001, implicit=False, re_transition=(0.0, 1.0))
    assert f == pytest.approx(swamee_jain_f(1000.0, 0.001), rel=1e-3)


def test_forcing_laminar_with_transition_band():
    f = friction_factor(1e5, 0.001, implicit=False, re_transition=(1e9, 1e9 + 1e3))
    assert f == pytest.approx(64.0 / 1e5, rel=1e-3)


# ============================================================
# Properties
# ============================================================

def test_idempotent():
    re = np.logspace(3, 7, 25)
    a = friction_factor(re, 0.002)
    b = friction_factor(re, 0.002)
    np.testing.assert_array_equal(a, b)


@pytest.mark.parametrize("implicit", [True, False])
def test_monotonic_in_turbulent_region(implicit):
    re = np.logspace(4.5, 8, 60)
    f = friction_factor(re, 0.001, implicit=implicit)
    assert np.all(np.diff(f) <= 0)


@pytest.mark.parametrize("implicit", [True, False])
@pytest.mark.parametrize("edge", [2000.0, 4000.0])
def test_continuous_at_transition_edges(implicit, edge):
    re = np.linspace(edge - 10.0, edge + 10.0, 201)
    f = friction_factor(re, 0.001, implicit=implicit)
    assert np.all(np.isfinite(f))
    assert np.max(np.abs(np.diff(f))) < 1e-4


def test_non_negative_everywhere():
    rr = np.array([0.0, 1e-4, 0.05])[None, :]
    f_sj = friction_factor(np.logspace(1, 8, 200)[:, None], rr, implicit=False)
    f_cb = friction_factor(np.logspace(2.7, 8, 100)[:, None], rr)
    assert np.all(f_sj >= 0)
    assert np.all(f_cb >= 0)


@pytest.mark.parametrize("implicit", [True, False])
def test_nan_propagation(implicit):
    assert np.isnan(friction_factor(np.nan, 0.01, implicit=implicit))
    assert np.isnan(friction_factor(10000.0, np.nan, implicit=implicit))


def test_nan_propagates_positionally():
    f = friction_factor(np.array([1e4, np.nan, 1e5]), np.array([0.001, 0.001, np.nan]))
    assert np.isfinite(f[0])
    assert np.isnan(f[1]) and np.isnan(f[2])


@pytest.mark.parametrize("implicit", [True, False])
def test_l_qd_scaling(implicit):
    re = np.array([800.0, 3000.0, 5e4, 2e6])
    f1 = friction_factor(re, 0.001, 1.0, implicit=implicit)
    f2 = friction_factor(re, 0.001, 2.0, implicit=implicit)
    np.testing.assert_array_equal(f2, 2.0 * f1)


def test_k_factor_broadcasts_l_qd():
    k = friction_factor(1e5, 0.001, np.array([10.0, 100.0]), implicit=False)
    assert k.shape == (2,)
    assert k[1] == pytest.approx(10.0 * k[0])


# ============================================================
# Shapes / config
# ============================================================

def test_scalar_call_returns_scalar():
    f = friction_factor(1e5, 0.001)
    assert np.ndim(f) == 0
    assert isinstance(f, float)


def test_broadcast_shapes():
    assert friction_factor(np.logspace(3, 6, 5), 0.001, implicit=False).shape == (5,)
    re = np.logspace(3, 6, 3)[:, None]
    rr = np.array([0.0, 1e-4, 1e-3, 1e-2])[None, :]
    assert friction_factor(re, rr, implicit=False).shape == (3, 4)


def test_config_object_and_override():
    cfg = FrictionConfig(implicit=False)
    assert friction_factor(1e5, 0.001, config=cfg) == friction_factor(1e5, 0.001, implicit=False)
    f = friction_factor(1e5, 0.001, config=cfg, implicit=True)
    assert f == friction_factor(1e5, 0.001)


def test_components_meta():
    comp = friction_components(1e5, 0.001, implicit=False)
    assert comp.meta["method"] == "Swamee-Jain (explicit)"
    assert comp.meta["solver_method"] is None
    assert comp.meta["re_transition"] == (2000.0, 4000.0)


# ============================================================
# Errors
# ============================================================

@pytest.mark.parametrize("args", [
    (-1.0, 0.01),
    (0.0, 0.01),
    (10000.0, -0.01),
    (10000.0, 0.01, 0.0),
    (10000.0, 0.01, -3.0),
])
def test_validation_errors(args):
    with pytest.raises(ValidationError):
        friction_factor(*args)


def test_validation_happens_before_solving():
    # one bad element rejects the whole call
    with pytest.raises(ValidationError, match="re"):
        friction_factor(np.array([1e4, 1e5, -2.0]), 0.001, solver=SolverOptions(method="newton", maxiter=1))


def test_solver_failure_is_raised_not_downgraded():
    with pytest.raises(SolveError):
        friction_factor(1e5, 0.001, solver=SolverOptions(method="newton", maxiter=1))


def test_solver_failure_suppressed_gives_nan():
    f = friction_factor(1e5, 0.001, solver={"method": "newton", "maxiter": 1, "raise_on_failure": False})
    assert np.isnan(f)


@pytest.mark.parametrize("rr", [0.0, 1e-3, 0.01, 0.05])
def test_deep_laminar_region_implicit(rr):
    re = np.logspace(0, 3.2, 120)
    f = friction_factor(re, rr)
    assert np.all(np.isfinite(f))
    np.testing.assert_allclose(f, 64.0 / re, rtol=0.02)


@pytest.mark.parametrize("args", [(np.inf, 0.0), (1e4, np.inf)])
def test_infinite_inputs_rejected(args):
    with pytest.raises(ValidationError, match="finite"):
        friction_factor(*args, implicit=False)


def test_inputs_validated_once(monkeypatch):
    import moody.core.hydraulics.friction as friction

    calls = []
    original = friction.checked_arrays

    def counting(*args):
        calls.append(args)
        return original(*args)

    monkeypatch.setattr(friction, "checked_arrays", counting)
    friction.friction_factor(np.array([1e3, 1e5]), 0.001, 2.0, implicit=False)
    assert len(calls) == 1
