import math

import numpy as np
import pytest

from tephigram.calculations import thermo
from tephigram.config import GraphGeometry, ThermoBounds
from tephigram.exceptions import ProjectionError
from tephigram.geometry import (
    intersect,
    phi_from_screen,
    shear_basis,
    temperature_from_screen,
    to_screen,
    y_from_x_and_pressure,
)

T_BOUNDS = ThermoBounds(-40.0, 15.0)
PHI_BOUNDS = ThermoBounds(250.0, 330.0)
ANGLES = [0.0, 0.1, 0.25 * math.pi, 0.35 * math.pi, 0.449 * math.pi]


@pytest.mark.parametrize("angle", ANGLES)
@pytest.mark.parametrize("temperature, phi_k", [(-40.0, 250.0), (-12.5, 290.0), (15.0, 330.0), (30.0, 240.0)])
def test_screen_round_trip(geometry, angle, temperature, phi_k):
    offset = to_screen(temperature, phi_k, T_BOUNDS, PHI_BOUNDS, geometry, angle)

    assert temperature_from_screen(offset, T_BOUNDS, geometry, angle) == pytest.approx(temperature, abs=1e-3)
    assert phi_from_screen(offset, PHI_BOUNDS, geometry, angle) == pytest.approx(phi_k, abs=1e-3)


def test_unsheared_mapping_is_rectangular(geometry):
    temperatures = np.linspace(-40.0, 15.0, 12)
    phis = np.linspace(250.0, 330.0, 12)
    x, y = to_screen(temperatures, phis, T_BOUNDS, PHI_BOUNDS, geometry, 0.0)

    np.testing.assert_array_equal(x, T_BOUNDS.normalize(temperatures, geometry.width))
    np.testing.assert_array_equal(y, PHI_BOUNDS.normalize(phis, geometry.height))


def test_scalar_input_returns_floats(geometry):
    x, y = to_screen(0.0, 290.0, T_BOUNDS, PHI_BOUNDS, geometry, 0.3)
    assert isinstance(x, float)
    assert isinstance(y, float)


def test_bounds_corners_unsheared(geometry):
    assert to_screen(-40.0, 250.0, T_BOUNDS, PHI_BOUNDS, geometry, 0.0) == (0.0, 0.0)
    assert to_screen(15.0, 330.0, T_BOUNDS, PHI_BOUNDS, geometry, 0.0) == (500.0, 500.0)


def test_plot_center_is_fixed_under_shear(geometry):
    # Mid-range temperature and phi anchor at the center for any angle
    for angle in ANGLES:
        x, y = to_screen(-12.5, 290.0, T_BOUNDS, PHI_BOUNDS, geometry, angle)
        assert x == pytest.approx(250.0)
        assert y == pytest.approx(250.0)


@pytest.mark.parametrize("angle", ANGLES)
def test_x_increases_with_temperature_at_fixed_phi(geometry, angle):
    temperatures = np.linspace(-60.0, 40.0, 50)
    x, _ = to_screen(temperatures, 290.0, T_BOUNDS, PHI_BOUNDS, geometry, angle)
    assert np.all(np.diff(x) > 0)


def test_isotherms_tilt_right_going_down(geometry):
    angle = 0.25 * math.pi
    top = to_screen(0.0, 320.0, T_BOUNDS, PHI_BOUNDS, geometry, angle)
    bottom = to_screen(0.0, 260.0, T_BOUNDS, PHI_BOUNDS, geometry, angle)
    assert bottom[0] > top[0]
    assert bottom[1] < top[1]


def test_shear_basis_at_zero():
    basis = shear_basis(0.0)
    assert basis.alpha_t == 0.0
    assert basis.beta_t == -1.0
    assert basis.alpha_phi == 1.0
    assert basis.beta_phi == 0.0


def test_intersect_unsheared_shortcut():
    x, y = intersect(*shear_basis(0.0), anchor_t=(120.0, 250.0), anchor_phi=(250.0, 40.0))
    assert float(x) == 120.0
    assert float(y) == 40.0


def test_intersect_general_case_lies_on_both_lines():
    basis = shear_basis(0.6)
    anchor_t = (100.0, 250.0)
    anchor_phi = (250.0, 80.0)
    x, y = intersect(*basis, anchor_t=anchor_t, anchor_phi=anchor_phi)

    # Cross product with each direction vanishes on the line
    assert (x - anchor_t[0]) * basis.beta_t - (y - anchor_t[1]) * basis.alpha_t == pytest.approx(0.0, abs=1e-9)
    assert (x - anchor_phi[0]) * basis.beta_phi - (y - anchor_phi[1]) * basis.alpha_phi == pytest.approx(0.0, abs=1e-9)


def test_intersect_broadcasts_over_anchors():
    u = np.array([0.0, 100.0, 200.0])
    x, y = intersect(*shear_basis(0.4), anchor_t=(u, 250.0), anchor_phi=(250.0, 300.0))
    assert x.shape == (3,)
    assert y.shape == (3,)


def test_intersect_parallel_directions_raise():
    with pytest.raises(ProjectionError):
        intersect(0.5, 0.5, 1.0, 1.0, anchor_t=(0.0, 0.0), anchor_phi=(1.0, 0.0))


@pytest.mark.parametrize("angle", [0.0, 0.3, 0.25 * math.pi])
@pytest.mark.parametrize("p", [100.0, 85.0, 60.0])
def test_y_from_x_and_pressure_lies_on_isobar(geometry, angle, p):
    x = 125.0
    y = y_from_x_and_pressure(x, p, T_BOUNDS, PHI_BOUNDS, geometry, angle)

    temperature = temperature_from_screen((x, y), T_BOUNDS, geometry, angle)
    phi_k = phi_from_screen((x, y), PHI_BOUNDS, geometry, angle)
    assert thermo.pressure(temperature, phi_k) == pytest.approx(p, rel=1e-9)


@pytest.mark.parametrize("angle", [0.2, 0.25 * math.pi])
def test_y_from_x_and_pressure_matches_root_finder(geometry, angle):
    optimize = pytest.importorskip("scipy.optimize")
    x, p = 180.0, 70.0

    def residual(y):
        temperature = temperature_from_screen((x, y), T_BOUNDS, geometry, angle)
        return phi_from_screen((x, y), PHI_BOUNDS, geometry, angle) - thermo.phi(temperature, p)

    expected = optimize.brentq(residual, -5000.0, 5000.0, xtol=1e-10)
    assert y_from_x_and_pressure(x, p, T_BOUNDS, PHI_BOUNDS, geometry, angle) == pytest.approx(expected, abs=1e-6)


def test_y_from_x_and_pressure_vectorized(geometry):
    xs = np.linspace(0.0, 500.0, 6)
    ys = y_from_x_and_pressure(xs, 80.0, T_BOUNDS, PHI_BOUNDS, geometry, 0.3)
    assert ys.shape == (6,)


def test_y_from_x_and_pressure_rejects_vertical_isobar():
    # Pick a geometry where kphi == c * kT * tan(a) for P = 100 kPa (c == 1)
    geometry = GraphGeometry(500.0, 500.0)
    angle = math.atan(PHI_BOUNDS.span / T_BOUNDS.span)
    with pytest.raises(ProjectionError):
        y_from_x_and_pressure(10.0, 100.0, T_BOUNDS, PHI_BOUNDS, geometry, angle)
