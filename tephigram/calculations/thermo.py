"""
Thermodynamic formulas for the tephigram.

These are the only physics in the package: conversions among temperature,
potential temperature (phi), pressure and saturation mixing ratio. Every
curve on the diagram is built by sampling them.

All functions accept floats or numpy arrays and broadcast element-wise.
Inputs are assumed physically valid (pressure > 0, mixing ratio > 0); the
configuration layer clamps parameters before they reach this module.
"""

import numpy as np

from ..constants import (
    ZERO_CELSIUS,
    REFERENCE_PRESSURE,
    KAPPA,
    EPSILON,
    ES_COEFFICIENT,
    ES_SLOPE,
    ES_OFFSET,
)


def phi(temperature_c, pressure_kpa):
    """
    Potential temperature from temperature and pressure (Poisson equation).

    Args:
        temperature_c: Temperature in degrees Celsius
        pressure_kpa: Pressure in kPa

    Returns:
        Potential temperature in Kelvin

    Example:
        >>> round(float(phi(20.0, 100.0)), 2)
        293.15
    """
    return (np.asarray(temperature_c, dtype=float) + ZERO_CELSIUS) * np.power(
        REFERENCE_PRESSURE / np.asarray(pressure_kpa, dtype=float), KAPPA
    )


def pressure(temperature_c, phi_k):
    """
    Pressure at which an air parcel at ``temperature_c`` has potential
    temperature ``phi_k``. Inverse of :func:`phi`.

    Args:
        temperature_c: Temperature in degrees Celsius
        phi_k: Potential temperature in Kelvin

    Returns:
        Pressure in kPa
    """
    ratio = np.asarray(phi_k, dtype=float) / (np.asarray(temperature_c, dtype=float) + ZERO_CELSIUS)
    return REFERENCE_PRESSURE / np.power(ratio, 1.0 / KAPPA)


def saturation_vapor_pressure(temperature_c):
    """Saturation vapor pressure in hPa over liquid water."""
    t = np.asarray(temperature_c, dtype=float)
    return ES_COEFFICIENT * np.exp(ES_SLOPE * t / (t + ES_OFFSET))


def pressure_from_mixing_ratio_and_temperature(mixing_ratio_g_kg, temperature_c):
    """
    Total pressure at which air at ``temperature_c`` is saturated with the
    given mixing ratio.

    Inverse of :func:`mixing_ratio_from_temperature_and_pressure`; solving
    ``ws = 1000 eps es / (10 P - es)`` for ``P`` gives
    ``P = es (1000 eps + ws) / (10 ws)``.

    Args:
        mixing_ratio_g_kg: Saturation mixing ratio in g/kg (must be > 0)
        temperature_c: Temperature in degrees Celsius

    Returns:
        Pressure in kPa
    """
    ws = np.asarray(mixing_ratio_g_kg, dtype=float)
    es = saturation_vapor_pressure(temperature_c)
    return (1000.0 * EPSILON + ws) / (10.0 * ws) * es


def mixing_ratio_from_temperature_and_pressure(temperature_c, pressure_kpa):
    """
    Saturation mixing ratio at a temperature and pressure.

    Args:
        temperature_c: Temperature in degrees Celsius
        pressure_kpa: Pressure in kPa

    Returns:
        Saturation mixing ratio in g/kg
    """
    es = saturation_vapor_pressure(temperature_c)
    return 1000.0 * EPSILON * es / (10.0 * np.asarray(pressure_kpa, dtype=float) - es)
