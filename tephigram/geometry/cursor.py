"""
Cursor read-out for the tephigram.

Maps a screen position back to temperature and phi through the inverse skew
transform, then derives pressure and saturation mixing ratio from them.
Values outside the plot rectangle are extrapolated, not clamped.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from ..calculations import thermo
from ..config import GraphGeometry, GridSpec
from .transform import phi_from_screen, temperature_from_screen

logger = logging.getLogger("tephigram.geometry.cursor")


@dataclass(frozen=True)
class CursorReading:
    """Thermodynamic state under the cursor.

    Attributes:
        temperature: Temperature in degC.
        phi: Potential temperature in K.
        pressure: Pressure in kPa.
        mixing_ratio: Saturation mixing ratio in g/kg.
    """

    temperature: float
    phi: float
    pressure: float
    mixing_ratio: float

    def format(self) -> str:
        """Multi-line text for on-screen display."""
        return (
            f"T: {self.temperature:.1f} °C\n"
            f"phi: {self.phi:.1f} K\n"
            f"P: {self.pressure:.1f} kPa\n"
            f"ws: {self.mixing_ratio:.2f} g/kg"
        )


def query_cursor(offset: Tuple[float, float], grid: GridSpec, geometry: GraphGeometry) -> CursorReading:
    """
    Read the thermodynamic state at a graph-local offset.

    Args:
        offset: ``(x, y)`` relative to the plot origin with Y up
        grid: Grid parameters (bounds and shear angle)
        geometry: Plot area geometry

    Returns:
        CursorReading for the offset

    Example:
        >>> reading = query_cursor((0.0, 0.0), GridSpec(angle=0.0), GraphGeometry())
        >>> reading.temperature, reading.phi
        (-40.0, 250.0)
    """
    temperature = temperature_from_screen(offset, grid.temperature, geometry, grid.angle)
    phi = phi_from_screen(offset, grid.phi, geometry, grid.angle)
    pressure = float(thermo.pressure(temperature, phi))
    mixing_ratio = float(thermo.mixing_ratio_from_temperature_and_pressure(temperature, pressure))
    return CursorReading(float(temperature), float(phi), pressure, mixing_ratio)


def query_screen_point(point: Tuple[float, float], grid: GridSpec, geometry: GraphGeometry) -> CursorReading:
    """
    Read the thermodynamic state at an absolute screen point (Y down).

    Args:
        point: Screen coordinates, e.g. a mouse position
        grid: Grid parameters
        geometry: Plot area geometry

    Returns:
        CursorReading for the point
    """
    offset = geometry.to_offset(point)
    logger.debug(f"Cursor at screen {tuple(point)} -> offset ({offset[0]:.1f}, {offset[1]:.1f})")
    return query_cursor((float(offset[0]), float(offset[1])), grid, geometry)
