import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from ebola_seird.parameters import NIGERIA_2014_INITIAL_STATE, EbolaParameters, default_times
from ebola_seird.seird import simulate


@pytest.fixture
def params() -> EbolaParameters:
    """Nigeria 2014 parameter set."""
    return EbolaParameters()


@pytest.fixture
def times() -> np.ndarray:
    return default_times()


@pytest.fixture(scope="session")
def constant_run():
    return simulate(EbolaParameters(), y0=NIGERIA_2014_INITIAL_STATE, beta="constant")


@pytest.fixture(scope="session")
def decaying_run():
    return simulate(EbolaParameters(), y0=NIGERIA_2014_INITIAL_STATE, beta="time-decaying")
