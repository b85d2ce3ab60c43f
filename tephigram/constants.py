"""
Constants and fixed parameters for the tephigram package.

This module defines physical constants used by the thermodynamic formulas,
the configuration range limits enforced by the UI layer, default diagram
parameters, and the styling applied to each curve family.
"""

import math

# ============================================================================
# Physical Constants
# ============================================================================

ZERO_CELSIUS = 273.15  # K
REFERENCE_PRESSURE = 100.0  # kPa, reference level for potential temperature
KAPPA = 0.286  # R/cp for dry air
EPSILON = 0.622  # Rd/Rv

# Saturation vapor pressure approximation (hPa, degC)
ES_COEFFICIENT = 6.112
ES_SLOPE = 17.67
ES_OFFSET = 243.5

# ============================================================================
# Numerical Tolerances
# ============================================================================

# Below this |sin(angle)| the grid is treated as unsheared.
SHEAR_EPSILON = 1e-9

# ============================================================================
# Configuration Ranges
# ============================================================================

MIN_SUBDIVISIONS = 1
MAX_SUBDIVISIONS = 20
MIN_LINE_COUNT = 1
MAX_LINE_COUNT = 10
MIN_SHEAR_ANGLE = 0.0
MAX_SHEAR_ANGLE = 0.45 * math.pi
MIN_BOUNDS_SPAN = 1.0
MIN_PRESSURE_LIMIT = 1.0  # kPa, lowest isobar allowed
MAX_PRESSURE_LIMIT = 110.0  # kPa
MIN_TOP_PRESSURE = 10.0  # kPa, lower bound for the first isobar
MIN_PRESSURE_STEP = 0.1  # kPa
MAX_PRESSURE_STEP = 20.0  # kPa, upper end of the viewer step slider
MIN_MIXING_RATIO = 0.01  # g/kg
MAX_MIXING_RATIO = 40.0  # g/kg

# ============================================================================
# Diagram Defaults
# ============================================================================

DEFAULT_TEMPERATURE_BOUNDS = (-40.0, 15.0)  # degC
DEFAULT_PHI_BOUNDS = (250.0, 330.0)  # K
DEFAULT_TEMPERATURE_DIVISIONS = 5
DEFAULT_PHI_DIVISIONS = 7
DEFAULT_SHEAR_ANGLE = 0.25 * math.pi

DEFAULT_PRESSURE_LINE_COUNT = 5
DEFAULT_MAX_PRESSURE = 100.0  # kPa
DEFAULT_PRESSURE_STEP = 10.0  # kPa

DEFAULT_MIXING_RATIO = 1.0  # g/kg, used when padding the vapor line list
DEFAULT_MIXING_RATIOS = (1.0, 4.0, 10.0)  # g/kg

# Plot area inside a 600x600 canvas, origin at the bottom-left corner
DEFAULT_CANVAS_SIZE = (600.0, 600.0)
DEFAULT_GRAPH_SIZE = (500.0, 500.0)
DEFAULT_GRAPH_ORIGIN = (50.0, 550.0)

# Fraction of the temperature samples at which isobar/vapor labels sit
LABEL_POSITION_FRACTION = 0.25

# ============================================================================
# Curve Styling
# ============================================================================

GRID = "grid"
ISOBAR = "isobar"
VAPOR = "vapor"
SOUNDING_TEMPERATURE = "sounding_temperature"
SOUNDING_DEWPOINT = "sounding_dewpoint"

CURVE_STYLES = {
    GRID: {
        "color": "#8b949e",
        "alpha": 0.6,
        "linewidth": 0.8,
        "linestyle": "-",
        "zorder": 2,
    },
    ISOBAR: {
        "color": "#3fb950",
        "alpha": 0.9,
        "linewidth": 1.0,
        "linestyle": "-",
        "zorder": 3,
    },
    VAPOR: {
        "color": "#58a6ff",
        "alpha": 0.8,
        "linewidth": 1.0,
        "linestyle": "--",
        "zorder": 3,
    },
    SOUNDING_TEMPERATURE: {
        "color": "#f85149",
        "alpha": 1.0,
        "linewidth": 2.0,
        "linestyle": "-",
        "zorder": 6,
    },
    SOUNDING_DEWPOINT: {
        "color": "#2ea043",
        "alpha": 1.0,
        "linewidth": 2.0,
        "linestyle": "-",
        "zorder": 6,
    },
}

FRAME_COLOR = "#c9d1d9"
FRAME_LINEWIDTH = 1.2

# Font Sizes
LABEL_FONT_SIZE = 7
READOUT_FONT_SIZE = 9
TITLE_FONT_SIZE = 11

# Read-out position in canvas coordinates (top-left corner)
READOUT_POSITION = (8.0, 8.0)
