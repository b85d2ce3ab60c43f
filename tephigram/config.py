"""
Configuration management for the tephigram package.

This module holds the diagram parameters as explicit value types
(``ThermoBounds``, ``GraphGeometry``, ``GridSpec``, ``PressureLineSpec``,
``VaporLineSpec``) and the ``Config`` object that groups them with display
settings. The UI layer mutates ``Config`` between frames; the geometry core
only ever sees a clamped snapshot taken with :meth:`Config.clamped`.
"""

import json
import logging
import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np
import yaml

from .constants import (
    MIN_SUBDIVISIONS,
    MAX_SUBDIVISIONS,
    MIN_LINE_COUNT,
    MAX_LINE_COUNT,
    MIN_SHEAR_ANGLE,
    MAX_SHEAR_ANGLE,
    MIN_BOUNDS_SPAN,
    MIN_PRESSURE_LIMIT,
    MAX_PRESSURE_LIMIT,
    MIN_TOP_PRESSURE,
    MIN_PRESSURE_STEP,
    MIN_MIXING_RATIO,
    MAX_MIXING_RATIO,
    DEFAULT_TEMPERATURE_BOUNDS,
    DEFAULT_PHI_BOUNDS,
    DEFAULT_TEMPERATURE_DIVISIONS,
    DEFAULT_PHI_DIVISIONS,
    DEFAULT_SHEAR_ANGLE,
    DEFAULT_PRESSURE_LINE_COUNT,
    DEFAULT_MAX_PRESSURE,
    DEFAULT_PRESSURE_STEP,
    DEFAULT_MIXING_RATIO,
    DEFAULT_MIXING_RATIOS,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_GRAPH_SIZE,
    DEFAULT_GRAPH_ORIGIN,
)

logger = logging.getLogger("tephigram.config")


def _clip(value, lower, upper):
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class ThermoBounds:
    """Closed range of a thermodynamic axis.

    Attributes:
        min: Lower bound (degC for temperature, K for phi).
        max: Upper bound; must be greater than ``min``.
    """

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def normalize(self, value, extent: float):
        """Map a thermodynamic value to a position in ``[0, extent]``."""
        return (np.asarray(value, dtype=float) - self.min) / self.span * extent

    def denormalize(self, position, extent: float):
        """Map a position in ``[0, extent]`` back to a thermodynamic value."""
        return self.min + np.asarray(position, dtype=float) / extent * self.span

    def clamped(self) -> "ThermoBounds":
        """Return bounds with at least ``MIN_BOUNDS_SPAN`` between min and max."""
        if self.max - self.min < MIN_BOUNDS_SPAN:
            return ThermoBounds(self.min, self.min + MIN_BOUNDS_SPAN)
        return self


@dataclass(frozen=True)
class GraphGeometry:
    """Size and placement of the plot area in screen units.

    Screen Y grows downward while phi grows upward, so ``origin`` is the
    bottom-left corner of the plot area. Graph-local offsets measured from
    the origin use Y-up.

    Attributes:
        width: Plot area width.
        height: Plot area height.
        origin: Screen position of the bottom-left corner.
    """

    width: float = DEFAULT_GRAPH_SIZE[0]
    height: float = DEFAULT_GRAPH_SIZE[1]
    origin: Tuple[float, float] = DEFAULT_GRAPH_ORIGIN

    def __post_init__(self):
        object.__setattr__(self, "origin", tuple(float(v) for v in self.origin))

    @property
    def half_width(self) -> float:
        return 0.5 * self.width

    @property
    def half_height(self) -> float:
        return 0.5 * self.height

    def to_screen(self, offsets) -> np.ndarray:
        """Convert graph-local offsets (Y-up) to screen points (Y-down).

        Args:
            offsets: Array-like of shape ``(..., 2)``.

        Returns:
            Array of the same shape in screen coordinates.
        """
        offsets = np.asarray(offsets, dtype=float)
        screen = np.empty_like(offsets)
        screen[..., 0] = self.origin[0] + offsets[..., 0]
        screen[..., 1] = self.origin[1] - offsets[..., 1]
        return screen

    def to_offset(self, points) -> np.ndarray:
        """Convert screen points (Y-down) to graph-local offsets (Y-up)."""
        points = np.asarray(points, dtype=float)
        offsets = np.empty_like(points)
        offsets[..., 0] = points[..., 0] - self.origin[0]
        offsets[..., 1] = self.origin[1] - points[..., 1]
        return offsets


def _coerce_bounds(value: Union[ThermoBounds, Dict[str, float], Sequence[float]]) -> ThermoBounds:
    if isinstance(value, ThermoBounds):
        return value
    try:
        if isinstance(value, dict):
            return ThermoBounds(float(value["min"]), float(value["max"]))
        lower, upper = value
        return ThermoBounds(float(lower), float(upper))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Bounds need a min and a max, got {value!r}") from e


@dataclass(frozen=True)
class GridSpec:
    """Isotherm/isophi grid parameters.

    Attributes:
        temperature: Temperature bounds in degC.
        temperature_divisions: Number of temperature subdivisions.
        phi: Potential temperature bounds in K.
        phi_divisions: Number of phi subdivisions.
        angle: Shear angle in radians.
    """

    temperature: ThermoBounds = field(
        default_factory=lambda: ThermoBounds(*DEFAULT_TEMPERATURE_BOUNDS)
    )
    temperature_divisions: int = DEFAULT_TEMPERATURE_DIVISIONS
    phi: ThermoBounds = field(default_factory=lambda: ThermoBounds(*DEFAULT_PHI_BOUNDS))
    phi_divisions: int = DEFAULT_PHI_DIVISIONS
    angle: float = DEFAULT_SHEAR_ANGLE

    def __post_init__(self):
        object.__setattr__(self, "temperature", _coerce_bounds(self.temperature))
        object.__setattr__(self, "phi", _coerce_bounds(self.phi))

    def clamped(self) -> "GridSpec":
        return GridSpec(
            temperature=self.temperature.clamped(),
            temperature_divisions=int(_clip(self.temperature_divisions, MIN_SUBDIVISIONS, MAX_SUBDIVISIONS)),
            phi=self.phi.clamped(),
            phi_divisions=int(_clip(self.phi_divisions, MIN_SUBDIVISIONS, MAX_SUBDIVISIONS)),
            angle=float(_clip(self.angle, MIN_SHEAR_ANGLE, MAX_SHEAR_ANGLE)),
        )


@dataclass(frozen=True)
class PressureLineSpec:
    """Isobar parameters.

    Attributes:
        count: Number of isobars.
        max_pressure: Pressure of the first isobar in kPa.
        step: Pressure decrement between consecutive isobars in kPa.
    """

    count: int = DEFAULT_PRESSURE_LINE_COUNT
    max_pressure: float = DEFAULT_MAX_PRESSURE
    step: float = DEFAULT_PRESSURE_STEP

    def pressures(self) -> Tuple[float, ...]:
        """Pressure of each isobar, ``max_pressure - k * step``."""
        return tuple(self.max_pressure - k * self.step for k in range(self.count))

    def clamped(self) -> "PressureLineSpec":
        count = int(_clip(self.count, MIN_LINE_COUNT, MAX_LINE_COUNT))
        max_pressure = float(_clip(self.max_pressure, MIN_TOP_PRESSURE, MAX_PRESSURE_LIMIT))
        step = max(float(self.step), MIN_PRESSURE_STEP)
        if count > 1:
            # Keep the last isobar above the lowest allowed pressure
            step = min(step, (max_pressure - MIN_PRESSURE_LIMIT) / (count - 1))
        return PressureLineSpec(count=count, max_pressure=max_pressure, step=step)


@dataclass(frozen=True)
class VaporLineSpec:
    """Saturation mixing-ratio line parameters.

    Attributes:
        mixing_ratios: Ordered mixing ratios in g/kg, one per line.
    """

    mixing_ratios: Tuple[float, ...] = DEFAULT_MIXING_RATIOS

    def __post_init__(self):
        object.__setattr__(self, "mixing_ratios", tuple(float(v) for v in self.mixing_ratios))

    @property
    def count(self) -> int:
        return len(self.mixing_ratios)

    def resize(self, count: int) -> "VaporLineSpec":
        """Truncate or pad the mixing ratio list to ``count`` entries.

        New entries take the default value of 1.0 g/kg.
        """
        count = int(_clip(count, MIN_LINE_COUNT, MAX_LINE_COUNT))
        ratios = self.mixing_ratios[:count]
        ratios += (DEFAULT_MIXING_RATIO,) * (count - len(ratios))
        return VaporLineSpec(ratios)

    def clamped(self) -> "VaporLineSpec":
        resized = self.resize(self.count)
        return VaporLineSpec(
            tuple(_clip(ws, MIN_MIXING_RATIO, MAX_MIXING_RATIO) for ws in resized.mixing_ratios)
        )


def _coerce_spec(value: Any, cls):
    if isinstance(value, cls):
        return value
    if isinstance(value, dict):
        unknown = set(value) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
        return cls(**value)
    raise ValueError(f"Cannot build {cls.__name__} from {type(value).__name__}")


@dataclass
class Config:
    """Configuration for tephigram rendering.

    Attributes:
        grid: Isotherm/isophi grid parameters.
        pressure_lines: Isobar parameters.
        vapor_lines: Saturation mixing-ratio line parameters.
        geometry: Plot area size and origin in canvas units.
        show_grid: Whether to draw the isotherm/isophi grid.
        show_isobars: Whether to draw isobars.
        show_vapor_lines: Whether to draw saturation mixing-ratio lines.
        canvas_width: Width of the drawing canvas in screen units.
        canvas_height: Height of the drawing canvas in screen units.
        figure_width: Width of the matplotlib figure in inches.
        figure_height: Height of the matplotlib figure in inches.
        default_dpi: Figure resolution (dots per inch).
        background_color: Figure background color (any Matplotlib color spec).
    """

    grid: GridSpec = field(default_factory=GridSpec)
    pressure_lines: PressureLineSpec = field(default_factory=PressureLineSpec)
    vapor_lines: VaporLineSpec = field(default_factory=VaporLineSpec)
    geometry: GraphGeometry = field(default_factory=GraphGeometry)
    show_grid: bool = True
    show_isobars: bool = True
    show_vapor_lines: bool = True
    canvas_width: float = DEFAULT_CANVAS_SIZE[0]
    canvas_height: float = DEFAULT_CANVAS_SIZE[1]
    figure_width: float = 6.0
    figure_height: float = 6.0
    default_dpi: int = 100
    # Dark default so the pale grid stays readable.
    background_color: str = "#1f2328"

    def __post_init__(self):
        """Rebuild nested specs when they arrive as plain dictionaries."""
        self.grid = _coerce_spec(self.grid, GridSpec)
        self.pressure_lines = _coerce_spec(self.pressure_lines, PressureLineSpec)
        self.vapor_lines = _coerce_spec(self.vapor_lines, VaporLineSpec)
        self.geometry = _coerce_spec(self.geometry, GraphGeometry)

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML or JSON file.

        Nested sections (``grid``, ``pressure_lines``, ``vapor_lines``,
        ``geometry``) are given as mappings of their field names. Bounds may
        be written as ``{min: .., max: ..}`` or as a two-item list.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            Config instance with loaded settings.

        Raises:
            ValueError: If file format is not supported or a key is unknown.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        data = data or {}
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown configuration keys in {path}: {sorted(unknown)}")

        logger.debug(f"Loaded configuration keys from {path}: {sorted(data)}")
        return cls(**data)

    def validate(self) -> bool:
        """Validate configuration parameters.

        Returns:
            True if configuration is valid.

        Raises:
            ValueError: If any configuration parameter is invalid.
        """
        grid = self.grid
        if not grid.temperature.min < grid.temperature.max:
            raise ValueError("temperature bounds must satisfy min < max")

        if not grid.phi.min < grid.phi.max:
            raise ValueError("phi bounds must satisfy min < max")

        if grid.phi.min <= 0:
            raise ValueError("phi bounds must be positive (Kelvin)")

        for name, divisions in (("temperature_divisions", grid.temperature_divisions),
                                ("phi_divisions", grid.phi_divisions)):
            if not isinstance(divisions, int) or not MIN_SUBDIVISIONS <= divisions <= MAX_SUBDIVISIONS:
                raise ValueError(
                    f"{name} must be an integer in [{MIN_SUBDIVISIONS}, {MAX_SUBDIVISIONS}]"
                )

        if not MIN_SHEAR_ANGLE <= grid.angle <= MAX_SHEAR_ANGLE:
            raise ValueError(
                f"angle must be in [0, {MAX_SHEAR_ANGLE / math.pi:.2f}*pi] radians"
            )

        pressure_lines = self.pressure_lines
        if not MIN_LINE_COUNT <= pressure_lines.count <= MAX_LINE_COUNT:
            raise ValueError(f"pressure line count must be in [{MIN_LINE_COUNT}, {MAX_LINE_COUNT}]")

        if not 0 < pressure_lines.max_pressure <= MAX_PRESSURE_LIMIT:
            raise ValueError(f"max_pressure must be in (0, {MAX_PRESSURE_LIMIT}] kPa")

        if pressure_lines.step <= 0:
            raise ValueError("pressure step must be positive")

        if min(pressure_lines.pressures()) <= 0:
            raise ValueError("all isobar pressures must be positive")

        if not MIN_LINE_COUNT <= self.vapor_lines.count <= MAX_LINE_COUNT:
            raise ValueError(f"vapor line count must be in [{MIN_LINE_COUNT}, {MAX_LINE_COUNT}]")

        if any(ws <= 0 for ws in self.vapor_lines.mixing_ratios):
            raise ValueError("mixing ratios must be positive")

        if self.geometry.width <= 0 or self.geometry.height <= 0:
            raise ValueError("Graph dimensions must be positive")

        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("Canvas dimensions must be positive")

        if self.figure_width <= 0 or self.figure_height <= 0:
            raise ValueError("Figure dimensions must be positive")

        if self.default_dpi <= 0:
            raise ValueError("default_dpi must be positive")

        if not isinstance(self.background_color, str) or not self.background_color:
            raise ValueError("background_color must be a non-empty string")

        return True

    def clamped(self) -> "Config":
        """Return a copy with every diagram parameter forced into range.

        The returned object shares nothing mutable with ``self``, so it can
        be used as a per-frame snapshot while the UI keeps editing ``self``.
        """
        return replace(
            self,
            grid=self.grid.clamped(),
            pressure_lines=self.pressure_lines.clamped(),
            vapor_lines=self.vapor_lines.clamped(),
        )

    def set_vapor_line_count(self, count: int) -> None:
        """Resize the mixing ratio list, padding new entries with 1.0 g/kg."""
        self.vapor_lines = self.vapor_lines.resize(count)


def get_default_config() -> Config:
    """
    Get a Config instance with default settings.

    Returns:
        Config instance initialized with default values.
    """
    return Config()
