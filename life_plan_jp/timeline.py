"""Setup-time resolution of the ages that drive a projection."""

import dataclasses
from dataclasses import dataclass

from life_plan_jp.household import (
    ExistingLoan,
    HomeSale,
    HouseholdState,
    PlannedPurchase,
)
from life_plan_jp.params import END_AGE

MIN_AGE = 18


@dataclass(frozen=True)
class Timeline:
    current_age: int
    retirement_age: int
    contribution_end_age: int
    sale: HomeSale | None = None
    parent_care_age: int | None = None
    self_care_age: int | None = None

    def is_future(self, age: int) -> bool:
        """True if `age` falls inside the simulated years (after today, up to END_AGE)."""
        return self.current_age < age <= END_AGE


def planned_purchase_valid(housing: PlannedPurchase) -> bool:
    # 購入年齢が現在以前でも「購入済み・ローン継続中」として扱う。0は未入力
    return 0 < housing.purchase_age <= END_AGE


def _contribution_end_age(state: HouseholdState, current_age: int, retirement_age: int) -> int:
    """Last age at which the monthly contribution is transferred.

    auto_stop: earlier of retirement and the first income decline (if it lies
    in the future). Otherwise the custom end age, defaulting to retirement.
    """
    plan = state.contribution
    if not plan.auto_stop:
        return plan.custom_end_age or retirement_age
    candidates = [retirement_age]
    curve = state.income_curve
    if curve.enabled and current_age < curve.age1 <= END_AGE:
        candidates.append(curve.age1)
    return min(candidates)


def resolve_timeline(state: HouseholdState) -> Timeline:
    current_age = max(MIN_AGE, state.age)
    retirement_age = max(current_age + 1, state.retirement_age)

    sale = None
    if isinstance(state.housing, (PlannedPurchase, ExistingLoan)) and state.housing.sale is not None:
        sale = state.housing.sale
        sale = dataclasses.replace(
            sale,
            age=max(current_age + 1, sale.age),
            price=max(0.0, sale.price),
            relocation_cost=max(0.0, sale.relocation_cost),
            monthly_rent=max(0.0, sale.monthly_rent),
        )

    parent_care_age = None
    if state.parent_care is not None:
        parent_care_age = max(current_age, state.parent_care.onset_age)
    self_care_age = None
    if state.self_care is not None:
        self_care_age = max(current_age, state.self_care.onset_age)

    return Timeline(
        current_age=current_age,
        retirement_age=retirement_age,
        contribution_end_age=_contribution_end_age(state, current_age, retirement_age),
        sale=sale,
        parent_care_age=parent_care_age,
        self_care_age=self_care_age,
    )
