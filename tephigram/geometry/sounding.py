"""
Sounding overlay for the tephigram.

Projects an atmospheric profile (pressure, temperature and optionally
dewpoint per level) onto the diagram. Each level is placed at its
temperature and at the potential temperature it has at that pressure, so a
temperature trace and a dewpoint trace come out as two polylines in screen
coordinates, ready for the same draw layer as the background curves.
"""

import logging
from typing import List, Optional

import numpy as np

from ..calculations import thermo
from ..config import GraphGeometry, GridSpec
from ..constants import SOUNDING_DEWPOINT, SOUNDING_TEMPERATURE
from ..exceptions import InvalidParameterError
from .curves import Polyline
from .transform import to_screen

logger = logging.getLogger("tephigram.geometry.sounding")


def _as_profile(values, name: str, levels: Optional[int] = None) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 1:
        raise InvalidParameterError(f"{name} must be one-dimensional, got shape {array.shape}")
    if levels is not None and array.size != levels:
        raise InvalidParameterError(
            f"{name} has {array.size} levels but pressure has {levels}"
        )
    return array


def _trace(
    pressure: np.ndarray,
    temperature: np.ndarray,
    grid: GridSpec,
    geometry: GraphGeometry,
    style: str
) -> Polyline:
    valid = np.isfinite(temperature)
    phis = thermo.phi(temperature[valid], pressure[valid])
    x, y = to_screen(temperature[valid], phis, grid.temperature, grid.phi, geometry, grid.angle)
    return Polyline(geometry.to_screen(np.column_stack([x, y])), style)


def generate_sounding(
    pressure,
    temperature,
    grid: GridSpec,
    geometry: GraphGeometry,
    dewpoint=None
) -> List[Polyline]:
    """
    Project a sounding onto the diagram.

    Levels with a missing (NaN) temperature or dewpoint are skipped in the
    corresponding trace.

    Args:
        pressure: Pressure per level in kPa
        temperature: Temperature per level in degC
        grid: Grid parameters
        geometry: Plot area geometry
        dewpoint: Optional dewpoint per level in degC

    Returns:
        List with the temperature trace, followed by the dewpoint trace when
        a dewpoint profile is given

    Raises:
        InvalidParameterError: If the profiles are malformed

    Example:
        >>> traces = generate_sounding(
        ...     [100.0, 85.0, 70.0], [15.0, 8.0, -2.0],
        ...     GridSpec(), GraphGeometry(), dewpoint=[10.0, 2.0, -12.0]
        ... )
        >>> [len(trace) for trace in traces]
        [3, 3]
    """
    pressure = _as_profile(pressure, "pressure")
    if pressure.size < 2:
        raise InvalidParameterError("A sounding needs at least two levels")
    if np.any(~np.isfinite(pressure)) or np.any(pressure <= 0):
        raise InvalidParameterError("Sounding pressures must be finite and positive")

    temperature = _as_profile(temperature, "temperature", pressure.size)
    traces = [_trace(pressure, temperature, grid, geometry, SOUNDING_TEMPERATURE)]

    if dewpoint is not None:
        dewpoint = _as_profile(dewpoint, "dewpoint", pressure.size)
        traces.append(_trace(pressure, dewpoint, grid, geometry, SOUNDING_DEWPOINT))

    logger.debug(f"Projected sounding with {pressure.size} levels into {len(traces)} traces")
    return traces
