"""Smoke tests for chart output files."""

import pytest
from life_plan_jp import HouseholdState, run_scenarios, sweep_investment_rates
from life_plan_jp.charts import plot_rate_band, plot_trajectory


class TestCharts:
    def setup_method(self):
        self.state = HouseholdState(age=60, retirement_age=65, cash=500, monthly_expenses=20)

    def test_trajectory(self, tmp_path):
        path = plot_trajectory(run_scenarios(self.state), tmp_path, name="60")
        assert path == tmp_path / "trajectory-60.png"
        assert path.exists()

    def test_rate_band(self, tmp_path):
        sweep = sweep_investment_rates(self.state, 1.0, rates=[0.0, 3.0, 6.0])
        path = plot_rate_band(sweep, tmp_path)
        assert path.name == "rate_band.png"
        assert path.exists()

    def test_empty_results(self, tmp_path):
        with pytest.raises(ValueError):
            plot_trajectory({}, tmp_path)
        with pytest.raises(ValueError):
            plot_rate_band([], tmp_path)
