"""
tephigram - Python package for drawing and querying tephigrams.

A tephigram plots temperature against potential temperature (phi) on a
sheared grid, overlaid with isobars and saturation mixing-ratio lines. This
package provides the projection engine between thermodynamic and screen
space, the curve generators built on it, a cursor read-out, and a
matplotlib front end.

Quick Start:
    >>> from tephigram import Config, build_frame
    >>>
    >>> frame = build_frame(Config(), cursor=(300.0, 300.0))
    >>> print(frame.cursor_reading.format())  # doctest: +SKIP

    >>> # Interactive window
    >>> from tephigram import TephigramViewer
    >>> TephigramViewer(Config()).show()  # doctest: +SKIP

Advanced Usage:
    >>> # Direct access to the projection engine
    >>> from tephigram.config import GridSpec, GraphGeometry
    >>> from tephigram.geometry import to_screen, temperature_from_screen
    >>>
    >>> grid = GridSpec(angle=0.6)
    >>> geometry = GraphGeometry(500, 500)
    >>> offset = to_screen(0.0, 290.0, grid.temperature, grid.phi, geometry, grid.angle)
    >>> round(temperature_from_screen(offset, grid.temperature, geometry, grid.angle), 6)
    0.0
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Configuration
from .config import (
    Config,
    ThermoBounds,
    GraphGeometry,
    GridSpec,
    PressureLineSpec,
    VaporLineSpec,
)

# Thermodynamics and projection
from . import calculations
from . import geometry
from .geometry import CursorReading, Polyline, Label

# User-facing API
from .api import DiagramFrame, Sounding, build_frame, read_cursor

# Rendering components
from .rendering import TephigramChart, TephigramViewer

# Exceptions
from .exceptions import (
    TephigramError,
    InvalidParameterError,
    ProjectionError,
    RenderError,
)

__all__ = [
    # Version info
    "__version__",

    # Configuration
    "Config",
    "ThermoBounds",
    "GraphGeometry",
    "GridSpec",
    "PressureLineSpec",
    "VaporLineSpec",

    # Core components
    "calculations",
    "geometry",
    "CursorReading",
    "Polyline",
    "Label",

    # User-facing API
    "DiagramFrame",
    "Sounding",
    "build_frame",
    "read_cursor",
    "TephigramChart",
    "TephigramViewer",

    # Exceptions
    "TephigramError",
    "InvalidParameterError",
    "ProjectionError",
    "RenderError",
]
