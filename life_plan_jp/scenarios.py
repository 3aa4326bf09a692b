"""Macro scenario presets and rate-sensitivity sweeps."""

from life_plan_jp.household import HouseholdState
from life_plan_jp.params import SimulationParams
from life_plan_jp.simulation import SimulationResult, project

SCENARIOS = {
    "低成長": {"investment_rate": 1.0, "inflation_rate": 0.5},
    "標準": {"investment_rate": 3.0, "inflation_rate": 1.0},
    "高成長": {"investment_rate": 5.0, "inflation_rate": 2.0},
}

# 利回りスライダーの刻み（0〜10%、0.5%刻み）
RATE_SLIDER_MIN = 0.0
RATE_SLIDER_MAX = 10.0
RATE_SLIDER_STEP = 0.5


def slider_rates(
    lo: float = RATE_SLIDER_MIN, hi: float = RATE_SLIDER_MAX, step: float = RATE_SLIDER_STEP,
) -> list[float]:
    """Grid of rates from lo to hi inclusive (computed by index, no float drift)."""
    if step <= 0 or hi < lo:
        return [lo]
    n = int(round((hi - lo) / step))
    return [round(lo + i * step, 10) for i in range(n + 1)]


def run_scenarios(
    state: HouseholdState, scenarios: dict[str, dict[str, float]] | None = None,
) -> dict[str, SimulationResult]:
    """Project the household under each named preset."""
    if scenarios is None:
        scenarios = SCENARIOS
    return {
        name: project(state, SimulationParams(**overrides))
        for name, overrides in scenarios.items()
    }


def sweep_investment_rates(
    state: HouseholdState,
    inflation_rate: float,
    rates: list[float] | None = None,
) -> list[tuple[float, SimulationResult]]:
    """Re-run the full projection for each investment rate (no incremental reuse)."""
    if rates is None:
        rates = slider_rates()
    return [
        (rate, project(state, SimulationParams(investment_rate=rate, inflation_rate=inflation_rate)))
        for rate in rates
    ]
