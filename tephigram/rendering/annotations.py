"""
Annotation module for tephigram text overlays.

Adds the title block and the cursor read-out. The read-out text artist is
created once and updated in place on every mouse move, so the curves do not
have to be redrawn for a cursor change.
"""

import logging
import math
from typing import Optional

import matplotlib.pyplot as plt

from ..config import Config
from ..constants import READOUT_FONT_SIZE, READOUT_POSITION, TITLE_FONT_SIZE
from ..geometry import CursorReading
from .layers import is_dark_background

logger = logging.getLogger("tephigram.rendering.annotations")

_EMPTY_READOUT = "T: --\nphi: --\nP: --\nws: --"


def _annotation_color(config: Config) -> str:
    return "white" if is_dark_background(config) else "black"


def add_title_annotation(ax: plt.Axes, config: Config) -> plt.Text:
    """
    Add top-right title with the current shear angle.

    Args:
        ax: Matplotlib axes in screen coordinates
        config: Configuration with grid and display settings

    Returns:
        Text artist object
    """
    angle_deg = math.degrees(config.grid.angle)
    return ax.text(
        config.canvas_width - READOUT_POSITION[0],
        READOUT_POSITION[1],
        f"Tephigram\nshear {angle_deg:.1f}°",
        ha='right',
        va='top',
        fontsize=TITLE_FONT_SIZE,
        weight='bold',
        family='sans-serif',
        color=_annotation_color(config),
        zorder=10,
    )


def add_cursor_readout(
    ax: plt.Axes,
    config: Config,
    reading: Optional[CursorReading] = None
) -> plt.Text:
    """
    Add the cursor read-out block in the top-left corner.

    Args:
        ax: Matplotlib axes in screen coordinates
        config: Configuration with background color
        reading: Initial reading, or None for an empty read-out

    Returns:
        Text artist to pass to :func:`update_cursor_readout`
    """
    text = ax.text(
        READOUT_POSITION[0],
        READOUT_POSITION[1],
        _EMPTY_READOUT,
        ha='left',
        va='top',
        fontsize=READOUT_FONT_SIZE,
        family='monospace',
        color=_annotation_color(config),
        zorder=10,
    )
    update_cursor_readout(text, reading)
    return text


def update_cursor_readout(text: plt.Text, reading: Optional[CursorReading]) -> None:
    """Replace the read-out text; ``None`` clears it."""
    text.set_text(_EMPTY_READOUT if reading is None else reading.format())
