import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from tephigram.config import Config, GraphGeometry, GridSpec


@pytest.fixture
def geometry():
    return GraphGeometry(500.0, 500.0, (50.0, 550.0))


@pytest.fixture
def grid():
    return GridSpec()


@pytest.fixture
def flat_grid():
    """Unsheared grid with the default bounds."""
    return GridSpec(angle=0.0)


@pytest.fixture
def config():
    return Config()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
