import json
import math

import numpy as np
import pytest
import yaml

from tephigram.config import (
    Config,
    GraphGeometry,
    GridSpec,
    PressureLineSpec,
    ThermoBounds,
    VaporLineSpec,
    get_default_config,
)


def test_default_config_is_valid():
    assert get_default_config().validate() is True


def test_thermo_bounds_normalize_and_denormalize():
    bounds = ThermoBounds(-40.0, 15.0)
    assert bounds.span == 55.0
    assert bounds.normalize(-40.0, 500.0) == 0.0
    assert bounds.normalize(15.0, 500.0) == 500.0
    assert bounds.denormalize(250.0, 500.0) == pytest.approx(-12.5)


def test_thermo_bounds_clamped_widens_degenerate_range():
    assert ThermoBounds(10.0, 10.0).clamped() == ThermoBounds(10.0, 11.0)
    bounds = ThermoBounds(-40.0, 15.0)
    assert bounds.clamped() is bounds


def test_graph_geometry_flips_y():
    geometry = GraphGeometry(500.0, 400.0, (50.0, 450.0))
    np.testing.assert_array_equal(geometry.to_screen((0.0, 0.0)), [50.0, 450.0])
    np.testing.assert_array_equal(geometry.to_screen((500.0, 400.0)), [550.0, 50.0])
    np.testing.assert_array_equal(geometry.to_offset((550.0, 50.0)), [500.0, 400.0])
    assert geometry.half_width == 250.0
    assert geometry.half_height == 200.0


def test_grid_spec_accepts_plain_bounds():
    grid = GridSpec(temperature=[-30, 20], phi={"min": 260, "max": 320})
    assert grid.temperature == ThermoBounds(-30.0, 20.0)
    assert grid.phi == ThermoBounds(260.0, 320.0)


def test_grid_spec_clamped():
    grid = GridSpec(temperature_divisions=0, phi_divisions=50, angle=2.0).clamped()
    assert grid.temperature_divisions == 1
    assert grid.phi_divisions == 20
    assert grid.angle == pytest.approx(0.45 * math.pi)
    assert GridSpec(angle=-0.3).clamped().angle == 0.0


def test_pressure_line_pressures():
    assert PressureLineSpec(count=3, max_pressure=100.0, step=15.0).pressures() == (100.0, 85.0, 70.0)


def test_pressure_line_clamped_keeps_pressures_positive():
    spec = PressureLineSpec(count=10, max_pressure=50.0, step=20.0).clamped()
    assert spec.count == 10
    assert min(spec.pressures()) >= 1.0 - 1e-9

    spec = PressureLineSpec(count=99, max_pressure=500.0, step=-1.0).clamped()
    assert spec.count == 10
    assert spec.max_pressure == 110.0
    assert spec.step > 0


def test_vapor_line_resize_pads_with_default():
    spec = VaporLineSpec((2.0, 5.0))
    assert spec.resize(4).mixing_ratios == (2.0, 5.0, 1.0, 1.0)
    assert spec.resize(1).mixing_ratios == (2.0,)
    assert spec.resize(0).count == 1
    assert spec.resize(50).count == 10


def test_vapor_line_clamped_limits_ratios():
    spec = VaporLineSpec((0.0, 100.0)).clamped()
    assert spec.mixing_ratios == (0.01, 40.0)


def test_set_vapor_line_count():
    config = Config()
    config.set_vapor_line_count(5)
    assert config.vapor_lines.mixing_ratios == (1.0, 4.0, 10.0, 1.0, 1.0)


def test_clamped_returns_independent_snapshot():
    config = Config(grid=GridSpec(temperature_divisions=40))
    snapshot = config.clamped()
    assert snapshot is not config
    assert snapshot.grid.temperature_divisions == 20

    config.grid = GridSpec(temperature_divisions=3)
    assert snapshot.grid.temperature_divisions == 20


@pytest.mark.parametrize("kwargs, match", [
    ({"grid": GridSpec(temperature=(15.0, -40.0))}, "temperature bounds"),
    ({"grid": GridSpec(phi=(300.0, 300.0))}, "phi bounds"),
    ({"grid": GridSpec(phi=(-10.0, 300.0))}, "positive"),
    ({"grid": GridSpec(temperature_divisions=0)}, "temperature_divisions"),
    ({"grid": GridSpec(phi_divisions=21)}, "phi_divisions"),
    ({"grid": GridSpec(angle=1.5)}, "angle"),
    ({"pressure_lines": PressureLineSpec(count=11)}, "pressure line count"),
    ({"pressure_lines": PressureLineSpec(step=0.0)}, "step"),
    ({"pressure_lines": PressureLineSpec(count=10, max_pressure=50.0, step=10.0)}, "positive"),
    ({"vapor_lines": VaporLineSpec(())}, "vapor line count"),
    ({"vapor_lines": VaporLineSpec((1.0, -2.0))}, "mixing ratios"),
    ({"geometry": GraphGeometry(0.0, 500.0)}, "Graph dimensions"),
    ({"canvas_width": 0.0}, "Canvas"),
    ({"default_dpi": 0}, "dpi"),
])
def test_validate_rejects_invalid_values(kwargs, match):
    with pytest.raises(ValueError, match=match):
        Config(**kwargs).validate()


def test_config_accepts_nested_dicts():
    config = Config(
        grid={"temperature": [-30, 20], "angle": 0.5},
        pressure_lines={"count": 4},
        vapor_lines={"mixing_ratios": [2, 8]},
        geometry={"width": 400, "height": 300, "origin": [20, 320]},
    )
    assert config.grid.angle == 0.5
    assert config.pressure_lines.count == 4
    assert config.vapor_lines.mixing_ratios == (2.0, 8.0)
    assert config.geometry.origin == (20.0, 320.0)


def test_config_rejects_unknown_spec_type():
    with pytest.raises(ValueError, match="GridSpec"):
        Config(grid="sheared")


@pytest.mark.parametrize("section, settings, key", [
    ("grid", {"angel": 0.3}, "angel"),
    ("pressure_lines", {"count": 3, "steps": 5}, "steps"),
    ("vapor_lines", {"ratios": [1, 2]}, "ratios"),
    ("geometry", {"size": 400}, "size"),
])
def test_config_rejects_unknown_nested_keys(section, settings, key):
    with pytest.raises(ValueError, match=key):
        Config(**{section: settings})


@pytest.mark.parametrize("bounds", [{"min": -40}, [1.0], "warm", {"min": "cold", "max": 30}])
def test_malformed_bounds_raise_value_error(bounds):
    with pytest.raises(ValueError, match="Bounds"):
        GridSpec(temperature=bounds)


def _diagram_settings():
    return {
        "grid": {
            "temperature": {"min": -50, "max": 20},
            "temperature_divisions": 7,
            "phi": [240, 340],
            "angle": 0.6,
        },
        "pressure_lines": {"count": 6, "max_pressure": 105, "step": 12.5},
        "vapor_lines": {"mixing_ratios": [0.5, 2, 8]},
        "show_vapor_lines": False,
        "background_color": "white",
    }


def _assert_loaded(config):
    assert config.grid.temperature == ThermoBounds(-50.0, 20.0)
    assert config.grid.temperature_divisions == 7
    assert config.grid.phi == ThermoBounds(240.0, 340.0)
    assert config.grid.angle == 0.6
    assert config.pressure_lines.pressures()[-1] == pytest.approx(42.5)
    assert config.vapor_lines.mixing_ratios == (0.5, 2.0, 8.0)
    assert config.show_vapor_lines is False
    assert config.background_color == "white"
    assert config.validate()


def test_load_yaml(tmp_path):
    path = tmp_path / "diagram.yaml"
    path.write_text(yaml.safe_dump(_diagram_settings()))
    _assert_loaded(Config.load_from_file(path))


def test_load_json(tmp_path):
    path = tmp_path / "diagram.json"
    path.write_text(json.dumps(_diagram_settings()))
    _assert_loaded(Config.load_from_file(path))


def test_load_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert Config.load_from_file(path) == Config()


def test_load_rejects_unknown_format(tmp_path):
    path = tmp_path / "diagram.toml"
    path.write_text("")
    with pytest.raises(ValueError, match="Unsupported"):
        Config.load_from_file(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(tmp_path / "missing.yaml")


def test_load_rejects_unknown_keys(tmp_path):
    path = tmp_path / "diagram.yaml"
    path.write_text("shear: 0.5\n")
    with pytest.raises(ValueError, match="shear"):
        Config.load_from_file(path)
