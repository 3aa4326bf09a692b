"""Tests for scenario presets and investment-rate sweeps."""

import pytest
from life_plan_jp import HouseholdState, SCENARIOS, project, run_scenarios, sweep_investment_rates
from life_plan_jp.params import SimulationParams
from life_plan_jp.scenarios import slider_rates


class TestSliderRates:
    def test_default_grid(self):
        rates = slider_rates()
        assert len(rates) == 21
        assert rates[0] == 0.0
        assert rates[-1] == 10.0
        assert 2.5 in rates
        assert 0.3 not in rates

    def test_custom_grid(self):
        assert slider_rates(1.0, 2.0, 0.25) == [1.0, 1.25, 1.5, 1.75, 2.0]

    def test_degenerate(self):
        assert slider_rates(3.0, 1.0) == [3.0]
        assert slider_rates(3.0, 5.0, 0) == [3.0]


class TestRunScenarios:
    def setup_method(self):
        self.state = HouseholdState(age=40, investments=1000)

    def test_all_presets(self):
        results = run_scenarios(self.state)
        assert list(results) == list(SCENARIOS)

    def test_standard_matches_default_params(self):
        assert run_scenarios(self.state)["標準"] == project(self.state, SimulationParams())

    def test_ordering(self):
        results = run_scenarios(self.state)
        low, mid, high = (results[k].assets_at_80 for k in ("低成長", "標準", "高成長"))
        assert low < mid < high

    def test_custom_presets(self):
        results = run_scenarios(self.state, {"ゼロ": {"investment_rate": 0.0, "inflation_rate": 0.0}})
        assert results["ゼロ"].assets_at_80 == 1000


class TestSweep:
    def test_monotonic_in_rate(self):
        state = HouseholdState(age=40, investments=1000)
        sweep = sweep_investment_rates(state, inflation_rate=1.0, rates=[0.0, 2.0, 4.0])
        assert [rate for rate, _ in sweep] == [0.0, 2.0, 4.0]
        values = [r.assets_at_80 for _, r in sweep]
        assert values == sorted(values)
        assert values[2] == pytest.approx(1000 * 1.04 ** 40, abs=0.5)

    def test_default_rates(self):
        sweep = sweep_investment_rates(HouseholdState(age=90), inflation_rate=1.0)
        assert len(sweep) == 21
