"""
Skew transform between thermodynamic coordinates and screen offsets.

Temperature and phi are first mapped linearly into graph-local rectangular
coordinates ``u`` in ``[0, width]`` and ``v`` in ``[0, height]`` (Y up from
the plot origin). The shear then tilts both line families by the same angle:

* the isotherm for ``u`` passes through ``(u, height / 2)`` with direction
  ``(sin a, -cos a)``;
* the isophi for ``v`` passes through ``(width / 2, v)`` with direction
  ``(cos a, sin a)``.

A point on screen is the intersection of its isotherm and its isophi. All
three curve families and the cursor query go through :func:`intersect`, so
there is exactly one implementation of that solve.

All functions accept floats or numpy arrays and broadcast element-wise.
"""

import logging
import math
from typing import NamedTuple, Tuple

import numpy as np

from ..config import GraphGeometry, ThermoBounds
from ..constants import KAPPA, REFERENCE_PRESSURE, SHEAR_EPSILON, ZERO_CELSIUS
from ..exceptions import ProjectionError

logger = logging.getLogger("tephigram.geometry.transform")


class ShearBasis(NamedTuple):
    """Direction coefficients of the isotherm and isophi line families."""

    alpha_t: float
    beta_t: float
    alpha_phi: float
    beta_phi: float


def shear_basis(angle: float) -> ShearBasis:
    """Decompose a shear angle into the two line directions."""
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    return ShearBasis(sin_a, -cos_a, cos_a, sin_a)


def _scalar_or_array(value):
    value = np.asarray(value, dtype=float)
    return float(value) if value.ndim == 0 else value


def intersect(
    alpha_t: float,
    beta_t: float,
    alpha_phi: float,
    beta_phi: float,
    anchor_t: Tuple,
    anchor_phi: Tuple
) -> Tuple:
    """
    Intersect a temperature-direction line with a phi-direction line.

    Solves ``anchor_t + s * (alpha_t, beta_t) = anchor_phi + r * (alpha_phi, beta_phi)``.
    When ``|alpha_t|`` is below ``SHEAR_EPSILON`` the grid is unsheared and
    the result is the axis-aligned pair ``(anchor_t.x, anchor_phi.y)``.

    Args:
        alpha_t: X component of the isotherm direction
        beta_t: Y component of the isotherm direction
        alpha_phi: X component of the isophi direction
        beta_phi: Y component of the isophi direction
        anchor_t: ``(x, y)`` point on the isotherm; components may be arrays
        anchor_phi: ``(x, y)`` point on the isophi; components may be arrays

    Returns:
        ``(x, y)`` of the intersection, broadcast over the anchors

    Raises:
        ProjectionError: If the two directions are parallel
    """
    tx = np.asarray(anchor_t[0], dtype=float)
    ty = np.asarray(anchor_t[1], dtype=float)
    px = np.asarray(anchor_phi[0], dtype=float)
    py = np.asarray(anchor_phi[1], dtype=float)

    if abs(alpha_t) < SHEAR_EPSILON:
        x, y = np.broadcast_arrays(tx, py)
        return np.array(x), np.array(y)

    det = alpha_t * beta_phi - beta_t * alpha_phi
    if abs(det) < SHEAR_EPSILON:
        logger.error(f"Parallel shear basis: alpha_t={alpha_t}, beta_t={beta_t}, "
                     f"alpha_phi={alpha_phi}, beta_phi={beta_phi}")
        raise ProjectionError("Isotherm and isophi directions are parallel")

    # Cramer's rule on s*d_t - r*d_phi = anchor_phi - anchor_t
    s = ((px - tx) * beta_phi - (py - ty) * alpha_phi) / det
    return tx + s * alpha_t, ty + s * beta_t


def project_local(u, v, geometry: GraphGeometry, angle: float) -> Tuple:
    """
    Shear graph-local rectangular coordinates into a screen offset.

    Args:
        u: Rectangular temperature position in ``[0, width]``
        v: Rectangular phi position in ``[0, height]``
        geometry: Plot area geometry
        angle: Shear angle in radians

    Returns:
        ``(x, y)`` offset from the plot origin, Y up
    """
    basis = shear_basis(angle)
    x, y = intersect(
        *basis,
        anchor_t=(u, geometry.half_height),
        anchor_phi=(geometry.half_width, v),
    )
    return _scalar_or_array(x), _scalar_or_array(y)


def to_screen(
    temperature_c,
    phi_k,
    temperature_bounds: ThermoBounds,
    phi_bounds: ThermoBounds,
    geometry: GraphGeometry,
    angle: float
) -> Tuple:
    """
    Map a (temperature, phi) coordinate to a screen offset.

    Args:
        temperature_c: Temperature in degC
        phi_k: Potential temperature in K
        temperature_bounds: Temperature axis bounds
        phi_bounds: Phi axis bounds
        geometry: Plot area geometry
        angle: Shear angle in radians

    Returns:
        ``(x, y)`` offset from the plot origin, Y up

    Example:
        >>> bounds_t = ThermoBounds(-40.0, 15.0)
        >>> bounds_phi = ThermoBounds(250.0, 330.0)
        >>> to_screen(-40.0, 250.0, bounds_t, bounds_phi, GraphGeometry(500, 500), 0.0)
        (0.0, 0.0)
    """
    u = temperature_bounds.normalize(temperature_c, geometry.width)
    v = phi_bounds.normalize(phi_k, geometry.height)
    return project_local(u, v, geometry, angle)


def temperature_from_screen(
    offset,
    temperature_bounds: ThermoBounds,
    geometry: GraphGeometry,
    angle: float
):
    """
    Temperature of the isotherm passing through a screen offset.

    Removes the phi-induced horizontal skew, measured from graph mid-height,
    before the linear unmap.

    Args:
        offset: ``(x, y)`` offset from the plot origin, Y up
        temperature_bounds: Temperature axis bounds
        geometry: Plot area geometry
        angle: Shear angle in radians

    Returns:
        Temperature in degC
    """
    x = np.asarray(offset[0], dtype=float)
    y = np.asarray(offset[1], dtype=float)
    u = x + (y - geometry.half_height) * math.tan(angle)
    return _scalar_or_array(temperature_bounds.denormalize(u, geometry.width))


def phi_from_screen(
    offset,
    phi_bounds: ThermoBounds,
    geometry: GraphGeometry,
    angle: float
):
    """
    Potential temperature of the isophi passing through a screen offset.

    Args:
        offset: ``(x, y)`` offset from the plot origin, Y up
        phi_bounds: Phi axis bounds
        geometry: Plot area geometry
        angle: Shear angle in radians

    Returns:
        Potential temperature in K
    """
    x = np.asarray(offset[0], dtype=float)
    y = np.asarray(offset[1], dtype=float)
    v = y - (x - geometry.half_width) * math.tan(angle)
    return _scalar_or_array(phi_bounds.denormalize(v, geometry.height))


def y_from_x_and_pressure(
    x,
    pressure_kpa: float,
    temperature_bounds: ThermoBounds,
    phi_bounds: ThermoBounds,
    geometry: GraphGeometry,
    angle: float
):
    """
    Screen Y at which the isobar ``pressure_kpa`` crosses the vertical ``x``.

    Along an isobar ``phi = c * (T + 273.15)`` with ``c = (100 / P) ** 0.286``.
    Substituting the inverse shear relations

        T = Tmin + kT * (x + (y - H/2) * tan a)
        phi = phimin + kphi * (y - (x - W/2) * tan a)

    leaves an equation linear in ``y``, solved here in closed form.

    Args:
        x: Offset X from the plot origin (float or array)
        pressure_kpa: Isobar pressure in kPa
        temperature_bounds: Temperature axis bounds
        phi_bounds: Phi axis bounds
        geometry: Plot area geometry
        angle: Shear angle in radians

    Returns:
        Offset Y from the plot origin, Y up

    Raises:
        ProjectionError: If the isobar is parallel to the screen Y axis
    """
    x = np.asarray(x, dtype=float)
    tan_a = math.tan(angle)
    k_t = temperature_bounds.span / geometry.width
    k_phi = phi_bounds.span / geometry.height
    c = (REFERENCE_PRESSURE / pressure_kpa) ** KAPPA

    denominator = k_phi - c * k_t * tan_a
    if abs(denominator) < SHEAR_EPSILON:
        logger.error(f"Isobar {pressure_kpa} kPa is parallel to the screen Y axis")
        raise ProjectionError(f"Isobar {pressure_kpa} kPa has no unique crossing at a given x")

    numerator = (
        c * (temperature_bounds.min + ZERO_CELSIUS + k_t * (x - tan_a * geometry.half_height))
        - phi_bounds.min
        + k_phi * tan_a * (x - geometry.half_width)
    )
    return _scalar_or_array(numerator / denominator)
