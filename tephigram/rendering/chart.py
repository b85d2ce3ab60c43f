"""
Orchestration module for complete tephigram rendering.

This module provides the TephigramChart class that turns the current
configuration into a drawn diagram: it builds a frame through
:func:`tephigram.api.build_frame`, draws each curve family in z-order, and
keeps a cursor read-out that can be refreshed without redrawing the curves.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from ..api import DiagramFrame, Sounding, build_frame
from ..config import Config
from ..exceptions import RenderError
from ..geometry import CursorReading, query_screen_point
from .annotations import add_cursor_readout, add_title_annotation, update_cursor_readout
from .layers import render_labels, render_plot_frame, render_polylines

logger = logging.getLogger("tephigram.rendering.chart")


class TephigramChart:
    """
    Draw a tephigram with matplotlib.

    The axes use screen coordinates: X to the right, Y down, spanning
    ``canvas_width`` by ``canvas_height``. Every call to :meth:`render`
    rebuilds the frame from the current ``config``, which is how parameter
    changes from the UI reach the diagram.

    The rendering workflow:
    1. Draw the plot area outline (its rectangle is the curves' clip box)
    2. Draw grid lines (zorder=2)
    3. Draw isobars and vapor lines (zorder=3)
    4. Draw the sounding (zorder=6)
    5. Draw labels and the read-out (zorder=9/10)

    Attributes:
        config: Configuration object with diagram and display settings
        fig: Matplotlib Figure (None until setup_figure or render is called)
        ax: Matplotlib Axes (None until setup_figure or render is called)
        frame: The DiagramFrame drawn by the last render call

    Example:
        >>> from tephigram import Config
        >>> from tephigram.rendering import TephigramChart
        >>>
        >>> chart = TephigramChart(Config())
        >>> fig, ax = chart.render(cursor=(300.0, 300.0))
        >>> chart.update_cursor((120.0, 480.0)).temperature < 0
        True
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize TephigramChart.

        Args:
            config: Configuration object (default: creates new Config instance)
        """
        self.config = config if config is not None else Config()
        self.fig = None
        self.ax = None
        self.frame: Optional[DiagramFrame] = None
        self.sounding: Optional[Sounding] = None

        self._rendered_layers: Dict[str, Any] = {}
        self._readout = None

        logger.info("Initialized TephigramChart")

    def setup_figure(
        self,
        rect: Sequence[float] = (0.0, 0.0, 1.0, 1.0)
    ) -> Tuple[plt.Figure, plt.Axes]:
        """
        Create the figure and the screen-coordinate axes.

        Args:
            rect: Axes position in figure coordinates (left, bottom, width, height)

        Returns:
            Tuple of (figure, axes)
        """
        self.fig = plt.figure(
            figsize=(self.config.figure_width, self.config.figure_height),
            dpi=self.config.default_dpi,
            facecolor=self.config.background_color,
        )
        self.ax = self.fig.add_axes(list(rect))
        self._prepare_axes()
        logger.debug(f"Figure created: {self.config.figure_width}x{self.config.figure_height} in")
        return self.fig, self.ax

    def _prepare_axes(self) -> None:
        self.ax.set_xlim(0.0, self.config.canvas_width)
        self.ax.set_ylim(self.config.canvas_height, 0.0)
        self.ax.set_aspect('equal', adjustable='box')
        self.ax.set_facecolor(self.config.background_color)
        self.ax.set_axis_off()

    def render(
        self,
        cursor: Optional[Tuple[float, float]] = None,
        sounding: Optional[Sounding] = None,
        annotate: bool = True
    ) -> Tuple[plt.Figure, plt.Axes]:
        """
        Draw the diagram for the current configuration.

        Calling render again clears the axes and redraws from scratch.

        Args:
            cursor: Optional cursor position in screen coordinates
            sounding: Optional profile to overlay; kept for later renders
            annotate: If True, add title and cursor read-out (default: True)

        Returns:
            Tuple of (figure, axes) with rendered diagram

        Raises:
            RenderError: If drawing fails
        """
        if sounding is not None:
            self.sounding = sounding

        if self.fig is None:
            self.setup_figure()
        else:
            self.ax.clear()
            self._prepare_axes()
            self._rendered_layers = {}
            self._readout = None

        self.frame = build_frame(self.config, cursor=cursor, sounding=self.sounding)
        snapshot = self.frame.config

        try:
            clip = render_plot_frame(self.ax, snapshot.geometry, snapshot)
            self._rendered_layers['frame'] = clip
            self._rendered_layers.update(render_polylines(self.ax, self.frame.polylines(), clip))
            self._rendered_layers['labels'] = render_labels(self.ax, self.frame.labels, snapshot)

            if annotate:
                self._rendered_layers['title'] = add_title_annotation(self.ax, snapshot)
                self._readout = add_cursor_readout(self.ax, snapshot, self.frame.cursor_reading)
        except RenderError:
            raise
        except (ValueError, TypeError) as e:
            logger.error(f"Error during tephigram rendering: {e}", exc_info=True)
            raise RenderError(f"Failed to render tephigram: {e}") from e

        logger.info(
            f"Rendered tephigram: {len(self.frame.polylines())} polylines, "
            f"{len(self.frame.labels)} labels"
        )
        return self.fig, self.ax

    def update_cursor(self, point: Optional[Tuple[float, float]]) -> Optional[CursorReading]:
        """
        Refresh the read-out for a new cursor position.

        Args:
            point: Screen coordinates, or None when the cursor left the axes

        Returns:
            The new reading, or None

        Raises:
            ValueError: If the chart has not been rendered yet
        """
        if self.frame is None:
            raise ValueError("Chart has not been rendered yet. Call render() first.")

        snapshot = self.frame.config
        reading = None if point is None else query_screen_point(point, snapshot.grid, snapshot.geometry)
        self.frame.cursor_reading = reading
        if self._readout is not None:
            update_cursor_readout(self._readout, reading)
        return reading

    def get_rendered_layers(self) -> Dict[str, Any]:
        """
        Get the artists created by the last render.

        Keys are ``'frame'``, the curve style classes that were drawn
        (``'grid'``, ``'isobar'``, ``'vapor'``, ``'sounding_temperature'``,
        ``'sounding_dewpoint'``), ``'labels'`` and ``'title'``.
        """
        return self._rendered_layers.copy()

    def get_labels(self) -> List[plt.Text]:
        return list(self._rendered_layers.get('labels', []))
