from pathlib import Path as FilePath

import pytest
from matplotlib.path import Path
from matplotlib.transforms import Bbox

from tephigram import Config, GridSpec, Sounding, build_frame, read_cursor
from tephigram.constants import GRID, ISOBAR, VAPOR
from tephigram.exceptions import InvalidParameterError

EXAMPLE_CONFIG = FilePath(__file__).resolve().parent.parent / "examples" / "diagram.yaml"


def test_default_frame_has_every_family(config):
    frame = build_frame(config)

    assert frame.grid_lines
    assert len(frame.isobars) == 5
    assert len(frame.vapor_lines) == 3
    assert frame.sounding == []
    assert frame.cursor_reading is None
    assert {line.style for line in frame.grid_lines} == {GRID}
    assert frame.polylines() == frame.grid_lines + frame.isobars + frame.vapor_lines


@pytest.mark.parametrize("toggle, attribute", [
    ("show_grid", "grid_lines"),
    ("show_isobars", "isobars"),
    ("show_vapor_lines", "vapor_lines"),
])
def test_family_toggles(config, toggle, attribute):
    setattr(config, toggle, False)
    frame = build_frame(config)
    assert getattr(frame, attribute) == []


def test_hidden_family_drops_its_labels():
    config = Config(grid=GridSpec(angle=0.0), show_grid=False)
    frame = build_frame(config)
    assert frame.labels
    assert all(label.style in (ISOBAR, VAPOR) for label in frame.labels)


def test_frame_uses_clamped_snapshot(config):
    config.grid = GridSpec(temperature_divisions=99, angle=5.0)
    frame = build_frame(config)

    assert frame.config is not config
    assert frame.config.grid.temperature_divisions == 20
    assert config.grid.temperature_divisions == 99


def test_frame_cursor_reading(config):
    frame = build_frame(config, cursor=(300.0, 300.0))
    assert frame.cursor_reading == read_cursor(config, (300.0, 300.0))
    assert frame.cursor_reading.pressure > 0


def test_frame_with_sounding(config):
    sounding = Sounding(
        pressure=[100.0, 85.0, 70.0, 50.0],
        temperature=[15.0, 7.0, -1.0, -18.0],
        dewpoint=[11.0, 0.0, -10.0, -30.0],
    )
    frame = build_frame(config, sounding=sounding)
    assert len(frame.sounding) == 2
    assert frame.polylines()[-2:] == frame.sounding


def test_malformed_sounding_raises(config):
    with pytest.raises(InvalidParameterError):
        build_frame(config, sounding=Sounding(pressure=[100.0], temperature=[15.0]))


def _crosses_plot(line, geometry):
    left, bottom = geometry.origin
    plot = Bbox.from_extents(left, bottom - geometry.height, left + geometry.width, bottom)
    return Path(line.points).intersects_bbox(plot, filled=False)


@pytest.mark.parametrize("source", ["defaults", "example"])
def test_every_visible_curve_is_labelled(source):
    if source == "defaults":
        config = Config()
    else:
        config = Config.load_from_file(EXAMPLE_CONFIG)
    frame = build_frame(config)
    geometry = frame.config.geometry

    labelled = 0
    for lines, style in ((frame.isobars, ISOBAR), (frame.vapor_lines, VAPOR)):
        visible = [line for line in lines if _crosses_plot(line, geometry)]
        labels = [label for label in frame.labels if label.style == style]
        assert len(labels) == len(visible)
        labelled += len(labels)
        for label in labels:
            x, y = geometry.to_offset(label.position)
            assert -1e-6 <= x <= geometry.width + 1e-6
            assert -1e-6 <= y <= geometry.height + 1e-6
    assert labelled > 0
