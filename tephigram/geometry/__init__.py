"""
Projection engine for the tephigram.

This subpackage maps between thermodynamic space and the skewed screen
space of the diagram and builds the curve families drawn on it:

Main Components:
    From transform module:
        - intersect: The shared shear-intersection solve
        - to_screen: (temperature, phi) -> screen offset
        - temperature_from_screen / phi_from_screen: Inverse mapping
        - y_from_x_and_pressure: Isobar crossing for label placement

    From curves module:
        - generate_grid_lines, generate_isobars, generate_vapor_lines
        - Polyline, Label: Immutable draw primitives
        - visible_pieces: Clip a polyline to the plot area

    From cursor module:
        - query_cursor, query_screen_point, CursorReading

    From sounding module:
        - generate_sounding: Temperature/dewpoint profile overlay

Coordinate System:
    Offsets are measured from the bottom-left corner of the plot area with
    Y up. ``GraphGeometry.to_screen`` converts them to screen coordinates
    (Y down); polylines and labels are always in screen coordinates.
"""

from .transform import (
    ShearBasis,
    shear_basis,
    intersect,
    project_local,
    to_screen,
    temperature_from_screen,
    phi_from_screen,
    y_from_x_and_pressure,
)
from .curves import (
    Polyline,
    Label,
    GridLayout,
    extra_lines,
    grid_layout,
    visible_pieces,
    temperature_samples,
    generate_grid_lines,
    generate_isobars,
    generate_vapor_lines,
)
from .cursor import CursorReading, query_cursor, query_screen_point
from .sounding import generate_sounding

__all__ = [
    "ShearBasis",
    "shear_basis",
    "intersect",
    "project_local",
    "to_screen",
    "temperature_from_screen",
    "phi_from_screen",
    "y_from_x_and_pressure",
    "Polyline",
    "Label",
    "GridLayout",
    "extra_lines",
    "grid_layout",
    "visible_pieces",
    "temperature_samples",
    "generate_grid_lines",
    "generate_isobars",
    "generate_vapor_lines",
    "CursorReading",
    "query_cursor",
    "query_screen_point",
    "generate_sounding",
]
