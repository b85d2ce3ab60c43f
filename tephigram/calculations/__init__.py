"""
Thermodynamic calculations for the tephigram package.

This module provides the pure functions that convert among temperature,
potential temperature (phi), pressure and saturation mixing ratio:

Main Functions:
    - phi: Potential temperature from temperature and pressure
    - pressure: Pressure from temperature and potential temperature
    - saturation_vapor_pressure: Saturation vapor pressure over water
    - pressure_from_mixing_ratio_and_temperature: Pressure of a saturation
      mixing-ratio line at a temperature
    - mixing_ratio_from_temperature_and_pressure: Saturation mixing ratio

Example:
    >>> from tephigram.calculations import phi, pressure
    >>> theta = phi(20.0, 85.0)
    >>> round(float(pressure(20.0, theta)), 6)
    85.0
"""

from .thermo import (
    phi,
    pressure,
    saturation_vapor_pressure,
    pressure_from_mixing_ratio_and_temperature,
    mixing_ratio_from_temperature_and_pressure,
)

__all__ = [
    "phi",
    "pressure",
    "saturation_vapor_pressure",
    "pressure_from_mixing_ratio_and_temperature",
    "mixing_ratio_from_temperature_and_pressure",
]
