"""
Individual rendering functions for tephigram layers.

This module provides low-level drawing functions that turn the polylines and
labels of a :class:`~tephigram.api.DiagramFrame` into matplotlib artists.
Axes are set up in screen coordinates (Y down), so polyline points are
plotted as-is. Curves are clipped to the plot rectangle, which matplotlib
applies as a display-space clip box, because the generator extends them
past it.
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Sequence

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Rectangle

from ..config import Config, GraphGeometry
from ..constants import (
    CURVE_STYLES,
    GRID,
    FRAME_COLOR,
    FRAME_LINEWIDTH,
    LABEL_FONT_SIZE,
)
from ..exceptions import RenderError
from ..geometry import Label, Polyline

logger = logging.getLogger("tephigram.rendering.layers")


def is_dark_background(config: Config) -> bool:
    bg = getattr(config, "background_color", None)
    if not bg:
        return False
    try:
        r, g, b = mcolors.to_rgb(bg)
    except ValueError:
        return False
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return luminance < 0.35


def render_plot_frame(ax: plt.Axes, geometry: GraphGeometry, config: Config) -> Rectangle:
    """
    Draw the outline of the plot area.

    Args:
        ax: Matplotlib axes in screen coordinates
        geometry: Plot area geometry
        config: Configuration with background color

    Returns:
        The Rectangle patch, whose extent becomes the clip box of curve layers
    """
    edge_color = FRAME_COLOR if is_dark_background(config) else "black"
    left, bottom = geometry.origin
    # In screen coordinates the top-left corner has the smallest y
    frame = Rectangle(
        (left, bottom - geometry.height),
        geometry.width,
        geometry.height,
        fill=False,
        edgecolor=edge_color,
        linewidth=FRAME_LINEWIDTH,
        zorder=8,
    )
    ax.add_patch(frame)
    return frame


def render_polylines(
    ax: plt.Axes,
    polylines: Sequence[Polyline],
    clip_patch: Rectangle
) -> Dict[str, LineCollection]:
    """
    Draw polylines grouped by style class, one LineCollection per class.

    Args:
        ax: Matplotlib axes in screen coordinates
        polylines: Polylines to draw
        clip_patch: Plot rectangle; each collection gets its extent as clip box

    Returns:
        Dictionary mapping style class to its LineCollection

    Raises:
        RenderError: If a polyline has an unknown style class
    """
    grouped: "OrderedDict[str, List[Polyline]]" = OrderedDict()
    for line in polylines:
        if line.style not in CURVE_STYLES:
            raise RenderError(f"Unknown curve style '{line.style}'")
        grouped.setdefault(line.style, []).append(line)

    collections = {}
    for style, lines in grouped.items():
        segments = [line.points for line in lines if len(line) >= 2]
        if not segments:
            logger.debug(f"No drawable {style} polylines")
            continue
        collection = LineCollection(segments, **CURVE_STYLES[style])
        ax.add_collection(collection)
        collection.set_clip_path(clip_patch)
        collections[style] = collection
        logger.debug(f"Rendered {len(segments)} {style} polylines")

    return collections


def render_labels(ax: plt.Axes, labels: Sequence[Label], config: Config) -> List[plt.Text]:
    """
    Draw curve labels.

    Grid labels sit outside the plot area and use the annotation color;
    isobar and vapor labels take the color of their curve family.

    Args:
        ax: Matplotlib axes in screen coordinates
        labels: Labels to draw
        config: Configuration with background color

    Returns:
        List of text artists
    """
    text_color = "white" if is_dark_background(config) else "black"
    halo_color = config.background_color

    artists = []
    for label in labels:
        style = CURVE_STYLES.get(label.style, {})
        color = text_color if label.style == GRID else style.get("color", text_color)
        artist = ax.text(
            label.position[0],
            label.position[1],
            label.text,
            ha=label.ha,
            va=label.va,
            fontsize=LABEL_FONT_SIZE,
            color=color,
            zorder=9,
            clip_on=False,
            bbox=dict(boxstyle="square,pad=0.1", facecolor=halo_color, edgecolor="none", alpha=0.7)
            if label.style != GRID else None,
        )
        artists.append(artist)

    logger.debug(f"Rendered {len(artists)} labels")
    return artists
