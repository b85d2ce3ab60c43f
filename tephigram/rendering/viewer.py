"""
Interactive tephigram viewer.

Wraps :class:`TephigramChart` in a matplotlib window with sliders for the
shear angle, the grid subdivisions, the isobar set and the number of vapor
lines, plus check boxes for the curve families.
Every widget change writes the new value into ``config`` and redraws the
whole diagram; mouse motion only refreshes the cursor read-out.
"""

import logging
from dataclasses import replace
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.widgets import CheckButtons, Slider

from ..api import Sounding
from ..config import Config
from ..constants import (
    MAX_LINE_COUNT,
    MAX_PRESSURE_LIMIT,
    MAX_PRESSURE_STEP,
    MAX_SHEAR_ANGLE,
    MAX_SUBDIVISIONS,
    MIN_LINE_COUNT,
    MIN_PRESSURE_STEP,
    MIN_SHEAR_ANGLE,
    MIN_SUBDIVISIONS,
    MIN_TOP_PRESSURE,
)
from .chart import TephigramChart

logger = logging.getLogger("tephigram.rendering.viewer")

# Figure layout: diagram on top, widgets in the bottom band
_CHART_RECT = (0.0, 0.36, 1.0, 0.64)
_ANGLE_RECT = (0.28, 0.31, 0.5, 0.025)
_TEMPERATURE_DIVISIONS_RECT = (0.28, 0.27, 0.5, 0.025)
_PHI_DIVISIONS_RECT = (0.28, 0.23, 0.5, 0.025)
_PRESSURE_COUNT_RECT = (0.28, 0.19, 0.5, 0.025)
_MAX_PRESSURE_RECT = (0.28, 0.15, 0.5, 0.025)
_PRESSURE_STEP_RECT = (0.28, 0.11, 0.5, 0.025)
_VAPOR_COUNT_RECT = (0.28, 0.07, 0.5, 0.025)
_TOGGLES_RECT = (0.02, 0.05, 0.16, 0.2)

_FAMILIES = ("grid", "isobars", "vapor")


class TephigramViewer:
    """
    Matplotlib window for exploring the diagram.

    Attributes:
        config: Configuration mutated by the widgets
        chart: Chart that draws each frame

    Example:
        >>> viewer = TephigramViewer(Config())
        >>> viewer.show()  # doctest: +SKIP
    """

    def __init__(self, config: Optional[Config] = None, sounding: Optional[Sounding] = None):
        self.config = config if config is not None else Config()
        self.chart = TephigramChart(self.config)
        self.chart.setup_figure(rect=_CHART_RECT)
        self.chart.render(sounding=sounding)

        fig = self.chart.fig
        grid = self.config.grid
        self.angle_slider = Slider(
            fig.add_axes(_ANGLE_RECT), "Shear (rad)",
            MIN_SHEAR_ANGLE, MAX_SHEAR_ANGLE, valinit=grid.angle,
        )
        self.temperature_slider = Slider(
            fig.add_axes(_TEMPERATURE_DIVISIONS_RECT), "T divisions",
            MIN_SUBDIVISIONS, MAX_SUBDIVISIONS, valinit=grid.temperature_divisions, valstep=1,
        )
        self.phi_slider = Slider(
            fig.add_axes(_PHI_DIVISIONS_RECT), "phi divisions",
            MIN_SUBDIVISIONS, MAX_SUBDIVISIONS, valinit=grid.phi_divisions, valstep=1,
        )
        isobars = self.config.pressure_lines
        self.pressure_count_slider = Slider(
            fig.add_axes(_PRESSURE_COUNT_RECT), "Isobars",
            MIN_LINE_COUNT, MAX_LINE_COUNT, valinit=isobars.count, valstep=1,
        )
        self.max_pressure_slider = Slider(
            fig.add_axes(_MAX_PRESSURE_RECT), "Max P (kPa)",
            MIN_TOP_PRESSURE, MAX_PRESSURE_LIMIT, valinit=isobars.max_pressure,
        )
        self.pressure_step_slider = Slider(
            fig.add_axes(_PRESSURE_STEP_RECT), "P step (kPa)",
            MIN_PRESSURE_STEP, MAX_PRESSURE_STEP, valinit=isobars.step,
        )
        self.vapor_count_slider = Slider(
            fig.add_axes(_VAPOR_COUNT_RECT), "Vapor lines",
            MIN_LINE_COUNT, MAX_LINE_COUNT, valinit=self.config.vapor_lines.count, valstep=1,
        )
        self.toggles = CheckButtons(
            fig.add_axes(_TOGGLES_RECT),
            _FAMILIES,
            (self.config.show_grid, self.config.show_isobars, self.config.show_vapor_lines),
        )

        self.angle_slider.on_changed(self._on_angle)
        self.temperature_slider.on_changed(self._on_temperature_divisions)
        self.phi_slider.on_changed(self._on_phi_divisions)
        self.pressure_count_slider.on_changed(self._on_pressure_count)
        self.max_pressure_slider.on_changed(self._on_max_pressure)
        self.pressure_step_slider.on_changed(self._on_pressure_step)
        self.vapor_count_slider.on_changed(self._on_vapor_count)
        self.toggles.on_clicked(self._on_toggle)
        self._motion_cid = fig.canvas.mpl_connect('motion_notify_event', self._on_mouse_move)

        logger.info("Interactive viewer ready")

    def _redraw(self) -> None:
        self.chart.render()
        self.chart.fig.canvas.draw_idle()

    def _on_angle(self, value: float) -> None:
        self.config.grid = replace(self.config.grid, angle=float(value))
        logger.debug(f"Shear angle set to {value:.3f} rad")
        self._redraw()

    def _on_temperature_divisions(self, value: float) -> None:
        self.config.grid = replace(self.config.grid, temperature_divisions=int(value))
        self._redraw()

    def _on_phi_divisions(self, value: float) -> None:
        self.config.grid = replace(self.config.grid, phi_divisions=int(value))
        self._redraw()

    def _on_pressure_count(self, value: float) -> None:
        self.config.pressure_lines = replace(self.config.pressure_lines, count=int(value))
        self._redraw()

    def _on_max_pressure(self, value: float) -> None:
        self.config.pressure_lines = replace(self.config.pressure_lines, max_pressure=float(value))
        self._redraw()

    def _on_pressure_step(self, value: float) -> None:
        self.config.pressure_lines = replace(self.config.pressure_lines, step=float(value))
        self._redraw()

    def _on_vapor_count(self, value: float) -> None:
        # New lines start at 1 g/kg
        self.config.set_vapor_line_count(int(value))
        logger.debug(f"Vapor lines: {self.config.vapor_lines.mixing_ratios}")
        self._redraw()

    def _on_toggle(self, label: str) -> None:
        if label == "grid":
            self.config.show_grid = not self.config.show_grid
        elif label == "isobars":
            self.config.show_isobars = not self.config.show_isobars
        elif label == "vapor":
            self.config.show_vapor_lines = not self.config.show_vapor_lines
        self._redraw()

    def _on_mouse_move(self, event) -> None:
        if event.inaxes is not self.chart.ax or event.xdata is None or event.ydata is None:
            self.chart.update_cursor(None)
        else:
            self.chart.update_cursor((event.xdata, event.ydata))
        self.chart.fig.canvas.draw_idle()

    def show(self) -> None:
        """Open the window and block until it is closed."""
        plt.show()
