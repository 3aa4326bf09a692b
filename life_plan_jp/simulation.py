"""Core projection engine: yearly total assets from today's age to END_AGE."""

import math
import sys
from dataclasses import dataclass

from life_plan_jp.cashflows import Balances, Year, build_rules
from life_plan_jp.events import build_event_calendar
from life_plan_jp.household import HouseholdState
from life_plan_jp.params import END_AGE, REFERENCE_AGE, SimulationParams
from life_plan_jp.tax import net_income
from life_plan_jp.timeline import resolve_timeline

LOCKED_UNLOCK_AGE = 60  # 確定拠出年金の受給開始年齢（取り崩し解禁）


@dataclass(frozen=True)
class YearlyDataPoint:
    age: int
    assets: int  # 資産残高（万円、マイナスあり）
    events: tuple[str, ...] = ()
    is_retirement: bool = False


@dataclass(frozen=True)
class SimulationResult:
    yearly_data: tuple[YearlyDataPoint, ...]
    current_age: int
    retirement_age: int
    assets_at_retirement: int
    assets_at_80: int
    # 世帯手取り月収（現時点・収入カーブ適用）− 生活費。積立額は含まない
    monthly_balance: float
    depletion_age: int | None = None  # None = 100歳まで持つ

    def point_at(self, age: int) -> YearlyDataPoint | None:
        idx = age - self.current_age
        if 0 <= idx < len(self.yearly_data):
            return self.yearly_data[idx]
        return None


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves up toward +inf, as the chart display does."""
    scale = 10 ** digits
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / scale


def _to_assets(value: float) -> int:
    """Rounded integer total; overflowed totals saturate at the float range, NaN counts as 0."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        value = math.copysign(sys.float_info.max, value)
    return int(round_half_up(value))


def _apply_growth(bal: Balances, rate: float) -> None:
    """Compound both investment tiers at the same return."""
    bal.liquid *= 1 + rate
    bal.locked *= 1 + rate


def _withdraw_shortfall(bal: Balances, age: int) -> None:
    """Cover negative cash from liquid investments, then locked once unlocked.

    Each withdrawal is capped at the shortfall and the tier's balance; any
    remainder stays as negative cash.
    """
    if bal.cash < 0 and bal.liquid > 0:
        withdrawal = min(-bal.cash, bal.liquid)
        bal.liquid -= withdrawal
        bal.cash += withdrawal
    if bal.cash < 0 and age >= LOCKED_UNLOCK_AGE and bal.locked > 0:
        withdrawal = min(-bal.cash, bal.locked)
        bal.locked -= withdrawal
        bal.cash += withdrawal


def _monthly_balance(state: HouseholdState, current_age: int) -> float:
    head = net_income(max(0.0, state.gross_income)) * state.income_curve.rate_at(current_age)
    spouse = 0.0
    if state.spouse is not None:
        spouse = net_income(max(0.0, state.spouse.gross_income))
    monthly = head / 12 + spouse / 12 - max(0.0, state.monthly_expenses)
    return round_half_up(monthly, 1)


def project(state: HouseholdState, params: SimulationParams | None = None) -> SimulationResult:
    """Project total assets for every age from the current age to END_AGE.

    The first data point is today's snapshot; each later year applies growth,
    the cash-flow rules in order, then the withdrawal waterfall. Pure: the
    state is never mutated and repeated calls give identical results.
    """
    if params is None:
        params = SimulationParams()

    timeline = resolve_timeline(state)
    current_age = timeline.current_age
    retirement_age = timeline.retirement_age

    calendar = build_event_calendar(state, timeline)
    rules = build_rules(state, timeline, calendar)

    cash = max(0.0, state.cash)
    investments = max(0.0, state.investments)
    locked = max(0.0, state.locked)
    bal = Balances(cash=cash, liquid=max(0.0, investments - locked), locked=locked)

    rate = params.investment_return
    depletion_age = None
    assets_at_retirement = cash + investments
    assets_at_80 = cash + investments

    yearly_data = [YearlyDataPoint(age=current_age, assets=_to_assets(bal.total))]

    for age in range(current_age + 1, END_AGE + 1):
        years = age - current_age
        year = Year(age=age, years_elapsed=years, inflation=params.inflation_factor(years))

        _apply_growth(bal, rate)
        for rule in rules:
            rule.apply(year, bal)
        _withdraw_shortfall(bal, age)

        total = bal.total
        if total < 0 and depletion_age is None:
            depletion_age = age

        yearly_data.append(YearlyDataPoint(
            age=age,
            assets=_to_assets(total),
            events=tuple(calendar.labels_at(age)),
            is_retirement=age == retirement_age,
        ))

        if age == retirement_age:
            assets_at_retirement = total
        if age == REFERENCE_AGE:
            assets_at_80 = total

    return SimulationResult(
        yearly_data=tuple(yearly_data),
        current_age=current_age,
        retirement_age=retirement_age,
        assets_at_retirement=_to_assets(assets_at_retirement),
        assets_at_80=_to_assets(assets_at_80),
        monthly_balance=_monthly_balance(state, current_age),
        depletion_age=depletion_age,
    )
