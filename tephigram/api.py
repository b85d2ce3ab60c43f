"""
Main API module for the tephigram package.

This module assembles one frame of the diagram from the current
configuration: it snapshots the parameters, regenerates every enabled curve
family, projects an optional sounding, and runs the cursor query. The draw
layer and the interactive viewer both consume the resulting
:class:`DiagramFrame`.

Example:
    >>> from tephigram import Config, build_frame
    >>>
    >>> frame = build_frame(Config(), cursor=(300.0, 300.0))
    >>> len(frame.isobars)
    5
    >>> frame.cursor_reading.pressure > 0
    True
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import Config
from .exceptions import InvalidParameterError, TephigramError
from .geometry import (
    CursorReading,
    Label,
    Polyline,
    generate_grid_lines,
    generate_isobars,
    generate_sounding,
    generate_vapor_lines,
    query_screen_point,
)

logger = logging.getLogger(__name__)


@dataclass
class Sounding:
    """Atmospheric profile to overlay on the diagram.

    Attributes:
        pressure: Pressure per level in kPa.
        temperature: Temperature per level in degC.
        dewpoint: Optional dewpoint per level in degC.
    """

    pressure: Sequence[float]
    temperature: Sequence[float]
    dewpoint: Optional[Sequence[float]] = None


@dataclass
class DiagramFrame:
    """Everything the draw layer needs for one frame.

    Attributes:
        config: The clamped parameter snapshot the frame was built from.
        grid_lines: Isotherm and isophi polylines.
        isobars: Isobar polylines.
        vapor_lines: Saturation mixing-ratio polylines.
        sounding: Sounding traces (temperature, then dewpoint).
        labels: Axis, isobar and vapor line labels.
        cursor_reading: Read-out at the cursor, if a cursor was given.
    """

    config: Config
    grid_lines: List[Polyline] = field(default_factory=list)
    isobars: List[Polyline] = field(default_factory=list)
    vapor_lines: List[Polyline] = field(default_factory=list)
    sounding: List[Polyline] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    cursor_reading: Optional[CursorReading] = None

    def polylines(self) -> List[Polyline]:
        """All polylines in draw order."""
        return self.grid_lines + self.isobars + self.vapor_lines + self.sounding


def build_frame(
    config: Config,
    cursor: Optional[Tuple[float, float]] = None,
    sounding: Optional[Sounding] = None
) -> DiagramFrame:
    """
    Build one frame of the diagram from the current configuration.

    The configuration is copied and clamped first, so the UI may keep editing
    ``config`` while the frame is in use.

    Args:
        config: Current diagram configuration
        cursor: Optional cursor position in screen coordinates (Y down)
        sounding: Optional profile to overlay

    Returns:
        DiagramFrame with every enabled curve family

    Raises:
        InvalidParameterError: If the sounding is malformed or the
            configuration cannot be projected
    """
    snapshot = config.clamped()
    grid = snapshot.grid
    geometry = snapshot.geometry
    frame = DiagramFrame(config=snapshot)

    try:
        if snapshot.show_grid:
            lines, labels = generate_grid_lines(grid, geometry)
            frame.grid_lines = lines
            frame.labels.extend(labels)

        if snapshot.show_isobars:
            lines, labels = generate_isobars(grid, snapshot.pressure_lines, geometry)
            frame.isobars = lines
            frame.labels.extend(labels)

        if snapshot.show_vapor_lines:
            lines, labels = generate_vapor_lines(grid, snapshot.vapor_lines, geometry)
            frame.vapor_lines = lines
            frame.labels.extend(labels)

        if sounding is not None:
            frame.sounding = generate_sounding(
                sounding.pressure,
                sounding.temperature,
                grid,
                geometry,
                dewpoint=sounding.dewpoint,
            )

        if cursor is not None:
            frame.cursor_reading = query_screen_point(cursor, grid, geometry)
    except InvalidParameterError:
        raise
    except TephigramError as e:
        raise InvalidParameterError(f"Failed to project diagram: {e}") from e

    logger.debug(
        f"Built frame: {len(frame.grid_lines)} grid, {len(frame.isobars)} isobars, "
        f"{len(frame.vapor_lines)} vapor, {len(frame.sounding)} sounding traces, "
        f"{len(frame.labels)} labels"
    )
    return frame


def read_cursor(config: Config, point: Tuple[float, float]) -> CursorReading:
    """
    Read the thermodynamic state at a screen point without building curves.

    Args:
        config: Current diagram configuration
        point: Screen coordinates (Y down)

    Returns:
        CursorReading at the point
    """
    snapshot = config.clamped()
    reading = query_screen_point(point, snapshot.grid, snapshot.geometry)
    logger.info(
        f"Cursor ({point[0]:.1f}, {point[1]:.1f}): T={reading.temperature:.2f} degC, "
        f"phi={reading.phi:.2f} K, P={reading.pressure:.2f} kPa, ws={reading.mixing_ratio:.3f} g/kg"
    )
    return reading
