"""
Curve generation for the tephigram.

This module builds the three line families drawn on the diagram, all as
polylines in screen coordinates:

* the isotherm/isophi grid, extended past the nominal rectangle by the
  ``extra`` lines the shear exposes;
* isobars, sampled along the temperature axis;
* saturation mixing-ratio (vapor) lines, sampled the same way.

Everything is recomputed from the current parameters each frame. Clipping to
the plot rectangle is left to the draw layer so that every polyline keeps its
full sample count.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from ..calculations import thermo
from ..config import GraphGeometry, GridSpec, PressureLineSpec, VaporLineSpec
from ..constants import GRID, ISOBAR, VAPOR, LABEL_POSITION_FRACTION
from .transform import intersect, shear_basis, y_from_x_and_pressure

logger = logging.getLogger("tephigram.geometry.curves")

# Tolerance used when deciding whether a label sits on the plot area
_EDGE_TOLERANCE = 1e-6


@dataclass(frozen=True, eq=False)
class Polyline:
    """Ordered screen points of one curve.

    Attributes:
        points: Read-only array of shape ``(n, 2)`` in screen coordinates.
        style: Curve family used by the draw layer to pick color and opacity.
    """

    points: np.ndarray
    style: str

    def __post_init__(self):
        points = np.array(self.points, dtype=float).reshape(-1, 2)
        points.setflags(write=False)
        object.__setattr__(self, "points", points)

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class Label:
    """Text placed at a screen position.

    ``ha`` and ``va`` are matplotlib alignment hints for the draw layer.
    """

    position: Tuple[float, float]
    text: str
    style: str
    ha: str = "center"
    va: str = "center"


class GridLayout(NamedTuple):
    """Grid step sizes and shear overrun for both axes."""

    temperature_step: float
    temperature_extra: int
    phi_step: float
    phi_extra: int


def extra_lines(angle: float, half_extent: float, step: float) -> int:
    """
    Number of additional grid lines needed on each side of an axis.

    A sheared line anchored outside the nominal range still crosses the plot
    area when its horizontal drift over half the other extent,
    ``tan(angle) * half_extent``, exceeds its distance from the edge.

    Args:
        angle: Shear angle in radians
        half_extent: Half of the perpendicular plot dimension
        step: Spacing between adjacent grid lines

    Returns:
        Non-negative count of extra lines
    """
    return max(0, int(math.floor(math.tan(angle) * half_extent / step)))


def grid_layout(grid: GridSpec, geometry: GraphGeometry) -> GridLayout:
    """Grid step and extra line count for both axes of ``grid``."""
    temperature_step = geometry.width / (grid.temperature_divisions + 1)
    phi_step = geometry.height / (grid.phi_divisions + 1)
    return GridLayout(
        temperature_step=temperature_step,
        temperature_extra=extra_lines(grid.angle, geometry.half_height, temperature_step),
        phi_step=phi_step,
        phi_extra=extra_lines(grid.angle, geometry.half_width, phi_step),
    )


def _on_edge(value: float, extent: float) -> bool:
    return -_EDGE_TOLERANCE <= value <= extent + _EDGE_TOLERANCE


def _inside(x: float, y: float, geometry: GraphGeometry) -> bool:
    return _on_edge(x, geometry.width) and _on_edge(y, geometry.height)


def _screen_position(geometry: GraphGeometry, x: float, y: float) -> Tuple[float, float]:
    sx, sy = geometry.to_screen((x, y))
    return float(sx), float(sy)


def _clip_segment(start, end, geometry: GraphGeometry) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Liang-Barsky clip of one segment to the plot area; None when it misses."""
    start = np.asarray(start, dtype=float)
    delta = np.asarray(end, dtype=float) - start
    t_enter, t_exit = 0.0, 1.0
    for p, q in ((-delta[0], start[0]), (delta[0], geometry.width - start[0]),
                 (-delta[1], start[1]), (delta[1], geometry.height - start[1])):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        t = q / p
        if p < 0.0:
            t_enter = max(t_enter, t)
        else:
            t_exit = min(t_exit, t)
        if t_enter > t_exit:
            return None
    return start + t_enter * delta, start + t_exit * delta


def visible_pieces(offsets: np.ndarray, geometry: GraphGeometry) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Parts of a polyline that fall on the plot area.

    Args:
        offsets: Graph-local points of shape ``(n, 2)``
        geometry: Plot area geometry

    Returns:
        Clipped segments in polyline order, as ``(start, end)`` pairs;
        segments with non-finite points are skipped
    """
    pieces = []
    for start, end in zip(offsets[:-1], offsets[1:]):
        if not (np.all(np.isfinite(start)) and np.all(np.isfinite(end))):
            continue
        piece = _clip_segment(start, end, geometry)
        if piece is not None:
            pieces.append(piece)
    return pieces


def generate_grid_lines(
    grid: GridSpec,
    geometry: GraphGeometry
) -> Tuple[List[Polyline], List[Label]]:
    """
    Build the isotherm and isophi grid.

    Isotherms span the full plot height and isophis the full plot width.
    Both are built straight from the shear basis: each line is the segment
    through its mid-plot anchor along its family direction. Labels carry the
    integer-rounded value and sit where the line crosses its axis (bottom
    edge for isotherms, left edge for isophis); lines that cross the axis
    outside the plot area get no label.

    Args:
        grid: Grid parameters
        geometry: Plot area geometry

    Returns:
        Tuple of (polylines, labels); isotherms come before isophis
    """
    layout = grid_layout(grid, geometry)
    alpha_t, beta_t, alpha_phi, beta_phi = shear_basis(grid.angle)
    lines: List[Polyline] = []
    labels: List[Label] = []

    # Isotherms: anchor (u, H/2), reach y = 0 and y = H
    reach_t = geometry.half_height / -beta_t
    temperature_interval = grid.temperature.span / (grid.temperature_divisions + 1)
    for k in range(-layout.temperature_extra, grid.temperature_divisions + layout.temperature_extra + 1):
        u = k * layout.temperature_step
        bottom = (u + reach_t * alpha_t, geometry.half_height + reach_t * beta_t)
        top = (u - reach_t * alpha_t, geometry.half_height - reach_t * beta_t)
        lines.append(Polyline(geometry.to_screen([bottom, top]), GRID))

        if _on_edge(bottom[0], geometry.width):
            value = grid.temperature.min + k * temperature_interval
            labels.append(Label(
                _screen_position(geometry, bottom[0], 0.0),
                str(int(round(value))),
                GRID,
                ha="center",
                va="top",
            ))

    # Isophis: anchor (W/2, v), reach x = 0 and x = W
    reach_phi = geometry.half_width / alpha_phi
    phi_interval = grid.phi.span / (grid.phi_divisions + 1)
    for k in range(-layout.phi_extra, grid.phi_divisions + layout.phi_extra + 1):
        v = k * layout.phi_step
        left = (geometry.half_width - reach_phi * alpha_phi, v - reach_phi * beta_phi)
        right = (geometry.half_width + reach_phi * alpha_phi, v + reach_phi * beta_phi)
        lines.append(Polyline(geometry.to_screen([left, right]), GRID))

        if _on_edge(left[1], geometry.height):
            value = grid.phi.min + k * phi_interval
            labels.append(Label(
                _screen_position(geometry, 0.0, left[1]),
                str(int(round(value))),
                GRID,
                ha="right",
                va="center",
            ))

    logger.debug(
        f"Generated {len(lines)} grid lines "
        f"(extra_t={layout.temperature_extra}, extra_phi={layout.phi_extra})"
    )
    return lines, labels


def temperature_samples(grid: GridSpec, geometry: GraphGeometry) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Temperature sample positions shared by isobars and vapor lines.

    Indices run over ``[-extra, divisions + extra + 1]``, so a polyline has
    ``divisions + 2 * extra + 2`` points.

    Returns:
        Tuple of (indices, temperatures in degC, rectangular u positions)
    """
    layout = grid_layout(grid, geometry)
    indices = np.arange(
        -layout.temperature_extra,
        grid.temperature_divisions + layout.temperature_extra + 2,
    )
    temperatures = grid.temperature.min + indices * (grid.temperature.span / (grid.temperature_divisions + 1))
    return indices, temperatures, indices * layout.temperature_step


def label_index(grid: GridSpec) -> int:
    """Temperature index at which isobar and vapor labels are placed."""
    return int((grid.temperature_divisions + 1) * LABEL_POSITION_FRACTION)


def _project_samples(u: np.ndarray, phis: np.ndarray, grid: GridSpec, geometry: GraphGeometry) -> np.ndarray:
    """Shear rectangular ``u`` and phi samples into graph-local offsets of shape ``(n, 2)``."""
    v = grid.phi.normalize(phis, geometry.height)
    x, y = intersect(
        *shear_basis(grid.angle),
        anchor_t=(u, geometry.half_height),
        anchor_phi=(geometry.half_width, v),
    )
    return np.column_stack([x, y])


def generate_isobars(
    grid: GridSpec,
    pressure_lines: PressureLineSpec,
    geometry: GraphGeometry
) -> Tuple[List[Polyline], List[Label]]:
    """
    Build one polyline per configured isobar.

    Each temperature sample is paired with ``phi(T, P)`` and resolved with
    the shared shear intersection. The label sits on the isobar at the
    screen X a quarter of the way across, found with
    :func:`~tephigram.geometry.transform.y_from_x_and_pressure`. When that
    point is off the plot area the label moves to the middle of the visible
    run of the isobar; isobars that never cross the plot area get no label.

    Args:
        grid: Grid parameters
        pressure_lines: Isobar parameters
        geometry: Plot area geometry

    Returns:
        Tuple of (polylines, labels)
    """
    _, temperatures, u = temperature_samples(grid, geometry)
    label_x = label_index(grid) * geometry.width / (grid.temperature_divisions + 1)

    lines: List[Polyline] = []
    labels: List[Label] = []
    for p in pressure_lines.pressures():
        offsets = _project_samples(u, thermo.phi(temperatures, p), grid, geometry)
        lines.append(Polyline(geometry.to_screen(offsets), ISOBAR))

        x = label_x
        y = y_from_x_and_pressure(x, p, grid.temperature, grid.phi, geometry, grid.angle)
        if not _inside(x, y, geometry):
            pieces = visible_pieces(offsets, geometry)
            if not pieces:
                continue
            # Isobars are straight, so any x in the visible run stays on the plot
            xs = [point[0] for piece in pieces for point in piece]
            x = 0.5 * (min(xs) + max(xs))
            y = y_from_x_and_pressure(x, p, grid.temperature, grid.phi, geometry, grid.angle)
        labels.append(Label(_screen_position(geometry, x, y), f"{p:g} kPa", ISOBAR))

    logger.debug(f"Generated {len(lines)} isobars with {len(u)} samples each")
    return lines, labels


def _vapor_label_point(offsets: np.ndarray, sample: int, geometry: GraphGeometry):
    inside = np.array([_inside(x, y, geometry) for x, y in offsets])
    if inside.any():
        visible = np.flatnonzero(inside)
        nearest = visible[np.argmin(np.abs(visible - sample))]
        return tuple(offsets[nearest])

    pieces = visible_pieces(offsets, geometry)
    if not pieces:
        return None
    start, end = pieces[0]
    return tuple(0.5 * (start + end))


def generate_vapor_lines(
    grid: GridSpec,
    vapor_lines: VaporLineSpec,
    geometry: GraphGeometry
) -> Tuple[List[Polyline], List[Label]]:
    """
    Build one polyline per saturation mixing ratio.

    Identical to :func:`generate_isobars` except that the pressure at each
    temperature sample comes from the mixing ratio. The label is placed on
    the sample at :func:`label_index`, or on the visible sample closest to
    it when that one is off the plot area. A line whose samples are all
    outside but which still crosses the plot is labelled at the middle of
    its first visible segment.

    Args:
        grid: Grid parameters
        vapor_lines: Mixing ratio parameters
        geometry: Plot area geometry

    Returns:
        Tuple of (polylines, labels)
    """
    indices, temperatures, u = temperature_samples(grid, geometry)
    sample = int(np.searchsorted(indices, label_index(grid)))

    lines: List[Polyline] = []
    labels: List[Label] = []
    for ws in vapor_lines.mixing_ratios:
        pressures = thermo.pressure_from_mixing_ratio_and_temperature(ws, temperatures)
        offsets = _project_samples(u, thermo.phi(temperatures, pressures), grid, geometry)
        lines.append(Polyline(geometry.to_screen(offsets), VAPOR))

        position = _vapor_label_point(offsets, sample, geometry)
        if position is not None:
            labels.append(Label(_screen_position(geometry, *position), f"{ws:g} g/kg", VAPOR))

    logger.debug(f"Generated {len(lines)} vapor lines with {len(u)} samples each")
    return lines, labels
