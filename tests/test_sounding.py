import numpy as np
import pytest

from tephigram.constants import SOUNDING_DEWPOINT, SOUNDING_TEMPERATURE
from tephigram.exceptions import InvalidParameterError
from tephigram.geometry import generate_sounding, temperature_from_screen

PRESSURE = [100.0, 92.5, 85.0, 70.0, 50.0]
TEMPERATURE = [14.0, 10.0, 6.0, -3.0, -20.0]
DEWPOINT = [9.0, 6.0, 0.0, -12.0, -35.0]


def test_temperature_trace_only(grid, geometry):
    traces = generate_sounding(PRESSURE, TEMPERATURE, grid, geometry)
    assert len(traces) == 1
    assert traces[0].style == SOUNDING_TEMPERATURE
    assert len(traces[0]) == len(PRESSURE)


def test_dewpoint_trace_follows_temperature(grid, geometry):
    traces = generate_sounding(PRESSURE, TEMPERATURE, grid, geometry, dewpoint=DEWPOINT)
    assert [trace.style for trace in traces] == [SOUNDING_TEMPERATURE, SOUNDING_DEWPOINT]

    offsets = geometry.to_offset(traces[1].points)
    recovered = temperature_from_screen(offsets.T, grid.temperature, geometry, grid.angle)
    np.testing.assert_allclose(recovered, DEWPOINT, atol=1e-9)


def test_missing_levels_are_skipped(grid, geometry):
    dewpoint = [9.0, float("nan"), 0.0, float("nan"), -35.0]
    traces = generate_sounding(PRESSURE, TEMPERATURE, grid, geometry, dewpoint=dewpoint)
    assert len(traces[0]) == 5
    assert len(traces[1]) == 3


@pytest.mark.parametrize("pressure, temperature, match", [
    ([100.0], [10.0], "at least two"),
    ([100.0, 0.0], [10.0, 5.0], "finite and positive"),
    ([100.0, float("nan")], [10.0, 5.0], "finite and positive"),
    ([100.0, 90.0, 80.0], [10.0, 5.0], "levels"),
    ([[100.0, 90.0]], [[10.0, 5.0]], "one-dimensional"),
])
def test_malformed_profiles_raise(grid, geometry, pressure, temperature, match):
    with pytest.raises(InvalidParameterError, match=match):
        generate_sounding(pressure, temperature, grid, geometry)


def test_dewpoint_length_mismatch_raises(grid, geometry):
    with pytest.raises(InvalidParameterError, match="dewpoint"):
        generate_sounding(PRESSURE, TEMPERATURE, grid, geometry, dewpoint=DEWPOINT[:-1])
