"""
Rendering subsystem for the tephigram package.

This module draws diagram frames with matplotlib. It is the draw layer and
UI layer around the projection engine: it consumes polylines, labels and
cursor readings, and never computes geometry itself.

Main Classes:
    TephigramChart: Draws a frame and refreshes the cursor read-out
    TephigramViewer: Interactive window with sliders and family toggles

Coordinate System:
    - Axes span the canvas in screen units with Y pointing down
    - Polyline points from the geometry package are plotted unchanged
    - Curves are clipped to the plot area outline

Example:
    >>> from tephigram.rendering import TephigramChart
    >>> from tephigram import Config
    >>>
    >>> chart = TephigramChart(Config())
    >>> fig, ax = chart.render()
"""

from .layers import (
    is_dark_background,
    render_plot_frame,
    render_polylines,
    render_labels,
)
from .annotations import (
    add_title_annotation,
    add_cursor_readout,
    update_cursor_readout,
)
from .chart import TephigramChart
from .viewer import TephigramViewer

__all__ = [
    "is_dark_background",
    "render_plot_frame",
    "render_polylines",
    "render_labels",
    "add_title_annotation",
    "add_cursor_readout",
    "update_cursor_readout",
    "TephigramChart",
    "TephigramViewer",
]
