"""Tests for ebola_seird.trajectory: output table and reshaping."""

import numpy as np
import pandas as pd
import pytest

from ebola_seird.errors import InvalidInputError
from ebola_seird.trajectory import COMPARTMENTS, TIME, Trajectory, TrajectoryRecord


@pytest.fixture
def small() -> Trajectory:
    time = np.array([0.0, 1.0, 2.0])
    states = np.array([
        [100.0, 0.0, 1.0, 0.0, 0.0],
        [98.0, 2.0, 1.0, 0.0, 0.0],
        [95.0, 3.0, 2.0, 0.6, 0.4],
    ])
    return Trajectory(time=time, states=states, variant="constant")


class TestConstruction:

    def test_shape_mismatch(self):
        with pytest.raises(InvalidInputError, match="shape"):
            Trajectory(time=[0.0, 1.0], states=np.zeros((3, 5)))

    def test_wrong_number_of_compartments(self):
        with pytest.raises(InvalidInputError):
            Trajectory(time=[0.0], states=np.zeros((1, 4)))

    def test_arrays_read_only(self, small):
        with pytest.raises(ValueError):
            small.states[0, 0] = 1.0
        with pytest.raises(ValueError):
            small.time[0] = 5.0

    def test_copies_inputs(self):
        states = np.ones((1, 5))
        traj = Trajectory(time=[0.0], states=states)
        states[0, 0] = 42.0
        assert traj.states[0, 0] == 1.0


class TestAccess:

    def test_len_and_iter(self, small):
        records = list(small)
        assert len(small) == 3
        assert records[1] == TrajectoryRecord(1.0, 98.0, 2.0, 1.0, 0.0, 0.0)
        assert records[2].dead == 0.4

    def test_column_lookup(self, small):
        np.testing.assert_array_equal(small["exposed"], [0.0, 2.0, 3.0])
        np.testing.assert_array_equal(small[TIME], [0.0, 1.0, 2.0])
        with pytest.raises(KeyError):
            small["vaccinated"]

    def test_at(self, small):
        assert small.at(2.0).recovered == 0.6
        with pytest.raises(KeyError):
            small.at(1.5)

    def test_totals(self, small):
        np.testing.assert_allclose(small.totals(), [101.0, 101.0, 101.0])
        assert small.conservation_error() == pytest.approx(0.0)


class TestReshaping:

    def test_to_frame_columns(self, small):
        df = small.to_frame()
        assert list(df.columns) == [TIME, *COMPARTMENTS]
        assert len(df) == 3
        assert df.loc[1, "susceptible"] == 98.0

    def test_to_long(self, small):
        long = small.to_long()
        assert list(long.columns) == [TIME, "group", "people"]
        assert len(long) == 3 * 5
        row = long[(long["group"] == "dead") & (long[TIME] == 2.0)]
        assert row["people"].item() == 0.4

    def test_to_long_excludes_series(self, small):
        long = small.to_long(exclude=["susceptible"])
        assert set(long["group"]) == {"exposed", "infectious", "recovered", "dead"}
        # the trajectory itself still holds the excluded series
        assert "susceptible" in small.to_frame()

    def test_to_long_single_name(self, small):
        long = small.to_long(exclude="susceptible")
        assert "susceptible" not in set(long["group"])
        assert len(long) == 3 * 4

    def test_to_long_unknown_series(self, small):
        with pytest.raises(KeyError):
            small.to_long(exclude=["vaccinated"])

    def test_frame_is_independent_copy(self, small):
        df = small.to_frame()
        df.loc[0, "susceptible"] = -1.0
        assert small.states[0, 0] == 100.0


class TestSummary:

    def test_summary_values(self, small):
        s = small.summary()
        assert s["peak_day"] == 2.0
        assert s["peak_infectious"] == 2.0
        assert s["final_dead"] == 0.4
        assert s["final_susceptible"] == 95.0
        assert s["attack_rate"] == pytest.approx(5 / 101)
        assert s["case_fatality"] == pytest.approx(0.4)

    def test_case_fatality_undefined_without_exits(self):
        traj = Trajectory(time=[0.0], states=[[10.0, 0.0, 1.0, 0.0, 0.0]])
        assert np.isnan(traj.summary()["case_fatality"])

    def test_nominal_run(self, constant_run):
        s = constant_run.summary()
        assert 0 < s["peak_day"] < 100
        assert s["case_fatality"] == pytest.approx(0.39, rel=1e-6)
        assert isinstance(constant_run.to_frame(), pd.DataFrame)
