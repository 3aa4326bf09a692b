"""Household state snapshot, income curve and defensive input parsing.

A HouseholdState is an immutable snapshot taken by the caller before each
projection. Everything here is plain data: clamping and derivation happen
in simulation.project(), so a state built directly in code behaves the same
as one parsed from text by household_from_dict().
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping

from life_plan_jp.education import CUSTOM_TRACK, EDUCATION_TRACKS

DEFAULT_AGE = 30
DEFAULT_RETIREMENT_AGE = 65
DEFAULT_SPOUSE_RETIREMENT_AGE = 65
DEFAULT_LOAN_YEARS = 35
DEFAULT_LOAN_RATE = 1.5
DEFAULT_SELL_AGE = 75
DEFAULT_POST_WORK_END_AGE = 70
DEFAULT_PARENT_CARE_AGE = 55
DEFAULT_SELF_CARE_AGE = 80

# 役職定年・再雇用による段階的減収の既定値（年齢, 収入維持率%）
DEFAULT_DECLINE_STAGE1 = (55, 85.0)
DEFAULT_DECLINE_STAGE2 = (60, 60.0)

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_TRUE_STRINGS = {"true", "1", "yes", "on"}


def parse_int(value: Any, fallback: Any = 0) -> Any:
    """Parse a leading integer ("35歳" → 35, "3.9" → 3). Never raises."""
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return fallback
        return int(value)
    m = _INT_RE.match(str(value))
    return int(m.group(1)) if m else fallback


def parse_float(value: Any, fallback: float = 0.0) -> float:
    """Parse a leading decimal number. Never raises."""
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return fallback
        return value if math.isfinite(value) else fallback
    m = _FLOAT_RE.match(str(value))
    if not m:
        return fallback
    parsed = float(m.group(1))
    return parsed if math.isfinite(parsed) else fallback


def parse_flag(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _int_or(value: Any, fallback: int) -> int:
    """Zero or unparseable means "unset" → fallback."""
    return parse_int(value) or fallback


def _float_or(value: Any, fallback: float) -> float:
    return parse_float(value) or fallback


@dataclass(frozen=True)
class IncomeCurve:
    """Two-stage income decline (役職定年 → 再雇用).

    Retention fractions are stored as given; rate_at() clamps them to [0, 1].
    """

    enabled: bool = False
    age1: int = DEFAULT_DECLINE_STAGE1[0]
    rate1: float = DEFAULT_DECLINE_STAGE1[1] / 100
    age2: int = DEFAULT_DECLINE_STAGE2[0]
    rate2: float = DEFAULT_DECLINE_STAGE2[1] / 100

    def rate_at(self, age: int) -> float:
        """Fraction of base net income applicable at `age`."""
        if not self.enabled:
            return 1.0
        if age >= self.age2:
            return min(1.0, max(0.0, self.rate2))
        if age >= self.age1:
            return min(1.0, max(0.0, self.rate1))
        return 1.0


@dataclass(frozen=True)
class Spouse:
    age: int
    gross_income: float = 0.0
    retirement_age: int = DEFAULT_SPOUSE_RETIREMENT_AGE


@dataclass(frozen=True)
class Child:
    age: int
    education_track: str = "all-public"
    custom_annual_amount: float = 0.0  # track == "custom" のときのみ使用


@dataclass(frozen=True)
class ContributionPlan:
    """Monthly transfer from cash to investments.

    The iDeCo / NISA amounts are components of monthly_amount, not extra
    transfers. iDeCo only adds its tax benefit; NISA is informational.
    """

    monthly_amount: float = 0.0
    auto_stop: bool = True
    custom_end_age: int | None = None
    ideco_enabled: bool = False
    ideco_monthly: float = 0.0
    nisa_enabled: bool = False
    nisa_annual: float = 0.0


@dataclass(frozen=True)
class HomeSale:
    """Sell the home and move into a rental (住み替え)."""

    age: int = DEFAULT_SELL_AGE
    price: float = 0.0
    relocation_cost: float = 0.0
    monthly_rent: float = 0.0


@dataclass(frozen=True)
class NoHousing:
    pass


@dataclass(frozen=True)
class PlannedPurchase:
    """Future (or already made) purchase financed by a new loan.

    purchase_age 0 means "not entered": no housing cash flows.
    """

    purchase_age: int
    price: float = 0.0
    down_payment: float = 0.0
    loan_years: int = DEFAULT_LOAN_YEARS
    loan_rate: float = DEFAULT_LOAN_RATE
    sale: HomeSale | None = None

    @property
    def loan_amount(self) -> float:
        return max(0.0, self.price - self.down_payment)

    @property
    def loan_end_age(self) -> int:
        return self.purchase_age + self.loan_years


@dataclass(frozen=True)
class ExistingLoan:
    balance: float = 0.0
    remaining_years: int = 0
    rate: float = 0.0
    sale: HomeSale | None = None


Housing = NoHousing | PlannedPurchase | ExistingLoan


@dataclass(frozen=True)
class PostRetirementWork:
    end_age: int = DEFAULT_POST_WORK_END_AGE
    monthly_income: float = 0.0


@dataclass(frozen=True)
class CareEvent:
    """Care cost spread evenly over several years from onset_age."""

    onset_age: int
    total_cost: float = 0.0


@dataclass(frozen=True)
class MajorExpense:
    label: str
    amount: float = 0.0
    target_age: int | None = None  # None = 未入力/不正値
    enabled: bool = True


@dataclass(frozen=True)
class HouseholdState:
    age: int = DEFAULT_AGE
    retirement_age: int = DEFAULT_RETIREMENT_AGE
    spouse: Spouse | None = None
    children: tuple[Child, ...] = ()

    # Balances (万円)
    cash: float = 0.0            # 現金預金（利回り0%）
    investments: float = 0.0     # 運用資産総額（locked・tax_free を内数として含む）
    locked: float = 0.0          # 確定拠出年金残高（60歳まで取り崩し不可）
    tax_free_balance: float = 0.0  # NISA残高（内訳表示・検証用）

    gross_income: float = 0.0    # 本人の額面年収
    monthly_expenses: float = 0.0
    contribution: ContributionPlan = ContributionPlan()
    severance_pay: float = 0.0
    monthly_pension: float = 0.0  # 公的年金（世帯月額・名目）

    housing: Housing = NoHousing()
    income_curve: IncomeCurve = IncomeCurve()
    post_retirement_work: PostRetirementWork | None = None
    parent_care: CareEvent | None = None
    self_care: CareEvent | None = None
    major_expenses: tuple[MajorExpense, ...] = ()


def _parse_children(items: Any) -> tuple[Child, ...]:
    children = []
    for item in items or ():
        if not isinstance(item, Mapping):
            continue
        track = str(item.get("education_course") or "all-public")
        children.append(Child(
            age=parse_int(item.get("current_age")),
            education_track=track,
            custom_annual_amount=parse_float(item.get("custom_annual_amount")),
        ))
    return tuple(children)


def _parse_major_expenses(items: Any) -> tuple[MajorExpense, ...]:
    expenses = []
    for item in items or ():
        if not isinstance(item, Mapping):
            continue
        expenses.append(MajorExpense(
            label=str(item.get("label") or ""),
            amount=parse_float(item.get("amount")),
            target_age=parse_int(item.get("target_age"), fallback=None),
            enabled=parse_flag(item.get("enabled"), default=True),
        ))
    return tuple(expenses)


def _parse_housing(d: Mapping[str, Any]) -> Housing:
    status = str(d.get("housing_status") or "none")
    sale = None
    if parse_flag(d.get("will_sell_house")):
        sale = HomeSale(
            age=_int_or(d.get("sell_house_age"), DEFAULT_SELL_AGE),
            price=parse_float(d.get("sell_house_price")),
            relocation_cost=parse_float(d.get("relocation_cost")),
            monthly_rent=parse_float(d.get("post_sell_monthly_rent")),
        )
    if status == "planning":
        return PlannedPurchase(
            purchase_age=parse_int(d.get("housing_purchase_age")),
            price=parse_float(d.get("housing_cost")),
            down_payment=parse_float(d.get("housing_down_payment")),
            loan_years=_int_or(d.get("housing_loan_years"), DEFAULT_LOAN_YEARS),
            loan_rate=_float_or(d.get("housing_loan_rate"), DEFAULT_LOAN_RATE),
            sale=sale,
        )
    if status == "existing":
        return ExistingLoan(
            balance=parse_float(d.get("existing_loan_balance")),
            remaining_years=parse_int(d.get("existing_loan_remaining_years")),
            rate=parse_float(d.get("existing_loan_rate")),
            sale=sale,
        )
    return NoHousing()


def household_from_dict(d: Mapping[str, Any]) -> HouseholdState:
    """Build a HouseholdState from wizard/config values that may arrive as text.

    Unparseable or missing numbers become zero, or the field's documented
    default where zero means "not entered".
    """
    spouse = None
    if parse_flag(d.get("has_spouse")):
        spouse = Spouse(
            age=parse_int(d.get("spouse_age")),
            gross_income=parse_float(d.get("spouse_annual_income")),
            retirement_age=_int_or(d.get("spouse_retirement_age"), DEFAULT_SPOUSE_RETIREMENT_AGE),
        )

    contribution = ContributionPlan(
        monthly_amount=parse_float(d.get("monthly_investment_amount")),
        auto_stop=parse_flag(d.get("auto_stop_investment"), default=True),
        custom_end_age=parse_int(d.get("custom_investment_end_age")) or None,
        ideco_enabled=parse_flag(d.get("ideco_enabled")),
        ideco_monthly=parse_float(d.get("ideco_monthly_amount")),
        nisa_enabled=parse_flag(d.get("nisa_enabled")),
        nisa_annual=parse_float(d.get("nisa_annual_amount")),
    )

    income_curve = IncomeCurve(
        enabled=parse_flag(d.get("apply_income_decline")),
        age1=_int_or(d.get("income_decrease_age1"), DEFAULT_DECLINE_STAGE1[0]),
        rate1=_float_or(d.get("income_decrease_rate1"), DEFAULT_DECLINE_STAGE1[1]) / 100,
        age2=_int_or(d.get("income_decrease_age2"), DEFAULT_DECLINE_STAGE2[0]),
        rate2=_float_or(d.get("income_decrease_rate2"), DEFAULT_DECLINE_STAGE2[1]) / 100,
    )

    post_work = None
    if parse_flag(d.get("post_retirement_work")):
        post_work = PostRetirementWork(
            end_age=_int_or(d.get("post_retirement_working_age"), DEFAULT_POST_WORK_END_AGE),
            monthly_income=parse_float(d.get("post_retirement_monthly_income")),
        )

    parent_care = None
    if parse_flag(d.get("expect_parent_care")):
        parent_care = CareEvent(
            onset_age=_int_or(d.get("parent_care_age"), DEFAULT_PARENT_CARE_AGE),
            total_cost=parse_float(d.get("parent_care_cost")),
        )
    self_care = None
    if parse_flag(d.get("expect_self_care")):
        self_care = CareEvent(
            onset_age=_int_or(d.get("self_care_age"), DEFAULT_SELF_CARE_AGE),
            total_cost=parse_float(d.get("self_care_cost")),
        )

    return HouseholdState(
        age=_int_or(d.get("age"), DEFAULT_AGE),
        retirement_age=_int_or(d.get("retirement_age"), DEFAULT_RETIREMENT_AGE),
        spouse=spouse,
        children=_parse_children(d.get("children")),
        cash=parse_float(d.get("current_cash")),
        investments=parse_float(d.get("current_investments")),
        locked=parse_float(d.get("current_dc")),
        tax_free_balance=parse_float(d.get("current_nisa_balance")),
        gross_income=parse_float(d.get("annual_income")),
        monthly_expenses=parse_float(d.get("monthly_expenses")),
        contribution=contribution,
        severance_pay=parse_float(d.get("severance_pay")),
        monthly_pension=parse_float(d.get("monthly_pension")),
        housing=_parse_housing(d),
        income_curve=income_curve,
        post_retirement_work=post_work,
        parent_care=parent_care,
        self_care=self_care,
        major_expenses=_parse_major_expenses(d.get("major_expenses")),
    )


def validate_household(state: HouseholdState) -> list[str]:
    """Check for inconsistencies the projection does not act on. Returns warnings."""
    warnings = []

    breakdown = state.locked + state.tax_free_balance
    if state.investments > 0 and breakdown > state.investments:
        warnings.append(
            f"運用資産の内訳（DC{state.locked:.0f}万 + NISA{state.tax_free_balance:.0f}万）が"
            f"総額{state.investments:.0f}万円を超えています"
        )

    plan = state.contribution
    components = 0.0
    if plan.ideco_enabled:
        components += plan.ideco_monthly
    if plan.nisa_enabled:
        components += plan.nisa_annual / 12
    if components > plan.monthly_amount:
        warnings.append(
            f"iDeCo・NISAの掛金（月{components:.1f}万）が"
            f"積立総額（月{plan.monthly_amount:.1f}万）を超えています"
        )

    housing = state.housing
    if isinstance(housing, PlannedPurchase) and housing.down_payment > housing.price:
        warnings.append(
            f"頭金{housing.down_payment:.0f}万円が物件価格{housing.price:.0f}万円を超えています"
        )
    sale = getattr(housing, "sale", None)
    if sale is not None and sale.age <= state.age:
        warnings.append(
            f"売却年齢{sale.age}歳は現在年齢{state.age}歳以前のため、翌年の売却として扱います"
        )

    for i, child in enumerate(state.children, 1):
        if child.education_track not in EDUCATION_TRACKS:
            warnings.append(f"子{i}の教育プラン「{child.education_track}」は未対応です（教育費0として計算）")
        elif child.education_track == CUSTOM_TRACK and child.custom_annual_amount <= 0:
            warnings.append(f"子{i}の教育費（カスタム）が未入力です")

    return warnings
