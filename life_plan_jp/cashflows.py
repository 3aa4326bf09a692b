"""Yearly cash-flow rules applied in a fixed order by the projection loop.

Each rule is built once per projection from the household snapshot and then
applied to the running Balances for every simulated year. Rules only touch
cash, except ContributionTransfer which moves cash into liquid investments.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from life_plan_jp.education import annual_education_cost, child_living_surcharge
from life_plan_jp.events import EventCalendar
from life_plan_jp.household import (
    Child,
    ExistingLoan,
    HomeSale,
    HouseholdState,
    IncomeCurve,
    PlannedPurchase,
)
from life_plan_jp.params import END_AGE, annual_payment
from life_plan_jp.tax import contribution_tax_benefit, net_income
from life_plan_jp.timeline import Timeline, planned_purchase_valid

PENSION_START_AGE = 65          # 公的年金受給開始
CONTRIBUTION_LEGAL_MAX_AGE = 65  # iDeCo 掛金の拠出上限年齢
HOUSING_MAINTENANCE_ANNUAL = 30  # 固定資産税＋修繕費等（万円/年・名目）
CARE_SPREAD_YEARS = 5            # 介護費用を均等計上する年数


@dataclass
class Balances:
    """Running balances for one projection (万円)."""

    cash: float = 0.0
    liquid: float = 0.0   # 取り崩し自由な運用資産
    locked: float = 0.0   # 確定拠出年金（アンロック年齢まで取り崩し不可）

    @property
    def total(self) -> float:
        return self.cash + self.liquid + self.locked


@dataclass(frozen=True)
class Year:
    age: int
    years_elapsed: int
    inflation: float  # 累積インフレ倍率


@dataclass(frozen=True)
class CashFlowRule:
    """Base class for a yearly cash-flow rule."""

    name: ClassVar[str] = ""

    def apply(self, year: Year, bal: Balances) -> None:
        raise NotImplementedError


# --- Inflows ---------------------------------------------------------------


@dataclass(frozen=True)
class WorkIncome(CashFlowRule):
    """Head's take-home income scaled by the income curve, up to retirement."""

    name: ClassVar[str] = "本人収入"
    net_annual: float
    retirement_age: int
    curve: IncomeCurve = IncomeCurve()

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age <= self.retirement_age:
            bal.cash += self.net_annual * self.curve.rate_at(year.age) * year.inflation


@dataclass(frozen=True)
class PostRetirementIncome(CashFlowRule):
    name: ClassVar[str] = "リタイア後の労働収入"
    retirement_age: int
    end_age: int
    annual: float

    def apply(self, year: Year, bal: Balances) -> None:
        if self.retirement_age < year.age <= self.end_age:
            bal.cash += self.annual


@dataclass(frozen=True)
class SpouseIncome(CashFlowRule):
    name: ClassVar[str] = "配偶者収入"
    net_annual: float
    start_age: int
    retirement_age: int

    def apply(self, year: Year, bal: Balances) -> None:
        if self.start_age + year.years_elapsed <= self.retirement_age:
            bal.cash += self.net_annual * year.inflation


@dataclass(frozen=True)
class PublicPension(CashFlowRule):
    name: ClassVar[str] = "公的年金"
    annual: float
    start_age: int = PENSION_START_AGE

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age >= self.start_age:
            bal.cash += self.annual


@dataclass(frozen=True)
class Severance(CashFlowRule):
    name: ClassVar[str] = "退職金"
    retirement_age: int
    amount: float

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age == self.retirement_age and self.amount > 0:
            bal.cash += self.amount


@dataclass(frozen=True)
class ContributionTaxBenefit(CashFlowRule):
    """iDeCo deduction credit while contributing (名目額固定)."""

    name: ClassVar[str] = "iDeCo税メリット"
    end_age: int
    annual: float

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age <= self.end_age and self.annual > 0:
            bal.cash += self.annual


# --- Outflows --------------------------------------------------------------


@dataclass(frozen=True)
class LivingExpenses(CashFlowRule):
    """Base living cost plus per-child surcharge, both inflation-adjusted."""

    name: ClassVar[str] = "生活費"
    annual: float
    child_ages: tuple[int, ...] = ()

    def apply(self, year: Year, bal: Balances) -> None:
        bal.cash -= self.annual * year.inflation
        extra = sum(child_living_surcharge(a + year.years_elapsed) for a in self.child_ages)
        if extra > 0:
            bal.cash -= extra * year.inflation


@dataclass(frozen=True)
class ContributionTransfer(CashFlowRule):
    name: ClassVar[str] = "積立"
    end_age: int
    annual: float

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age <= self.end_age and self.annual > 0:
            bal.cash -= self.annual
            bal.liquid += self.annual


@dataclass(frozen=True)
class OneOffExpenses(CashFlowRule):
    name: ClassVar[str] = "大きな支出"
    calendar: EventCalendar = field(default_factory=EventCalendar, hash=False, compare=False)

    def apply(self, year: Year, bal: Balances) -> None:
        bal.cash -= self.calendar.amount_at(year.age)


@dataclass(frozen=True)
class HousingRule(CashFlowRule):
    """Loan and maintenance charges, suppressed from stop_age (the sale year) on."""

    name: ClassVar[str] = "住宅"
    stop_age: int = END_AGE + 1

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age < self.stop_age:
            bal.cash -= self.charges(year.age)

    def charges(self, age: int) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class PlannedPurchaseCosts(HousingRule):
    """Down payment in the purchase year, then loan payments and maintenance.

    A purchase age at or before today is treated as already bought: the down
    payment counts as paid and charges start next year, with the loan still
    maturing at purchase_age + loan_years.
    """

    purchase_age: int = 0
    down_payment: float = 0.0
    payment: float = 0.0
    loan_start_age: int = 0  # 将来購入→購入年、過去購入→シミュレーション初年度
    loan_end_age: int = 0

    @property
    def is_future(self) -> bool:
        return self.loan_start_age == self.purchase_age

    def charges(self, age: int) -> float:
        total = 0.0
        if self.is_future and age == self.purchase_age:
            total += self.down_payment
        if self.loan_start_age <= age < self.loan_end_age:
            total += self.payment
        if age >= self.loan_start_age:
            total += HOUSING_MAINTENANCE_ANNUAL
        return total


@dataclass(frozen=True)
class ExistingLoanCosts(HousingRule):
    payment: float = 0.0
    loan_end_age: int = 0

    def charges(self, age: int) -> float:
        total = HOUSING_MAINTENANCE_ANNUAL
        if age <= self.loan_end_age:
            total += self.payment
        return total


@dataclass(frozen=True)
class HomeSaleFlows(CashFlowRule):
    """Sale proceeds and relocation cost in the sale year, rent afterwards."""

    name: ClassVar[str] = "住宅売却"
    sale: HomeSale = HomeSale()

    def apply(self, year: Year, bal: Balances) -> None:
        if year.age == self.sale.age:
            bal.cash += self.sale.price
            bal.cash -= self.sale.relocation_cost
        elif year.age > self.sale.age and self.sale.monthly_rent > 0:
            bal.cash -= self.sale.monthly_rent * 12


@dataclass(frozen=True)
class CareCost(CashFlowRule):
    name: ClassVar[str] = "介護費用"
    onset_age: int
    annual: float

    def apply(self, year: Year, bal: Balances) -> None:
        if self.onset_age <= year.age < self.onset_age + CARE_SPREAD_YEARS:
            bal.cash -= self.annual


@dataclass(frozen=True)
class EducationCosts(CashFlowRule):
    name: ClassVar[str] = "教育費"
    children: tuple[Child, ...] = ()

    def apply(self, year: Year, bal: Balances) -> None:
        for child in self.children:
            bal.cash -= annual_education_cost(
                child.education_track,
                child.age + year.years_elapsed,
                child.custom_annual_amount,
            )


def _housing_rules(state: HouseholdState, timeline: Timeline) -> list[CashFlowRule]:
    housing = state.housing
    stop_age = timeline.sale.age if timeline.sale is not None else END_AGE + 1
    rules: list[CashFlowRule] = []
    if timeline.sale is not None:
        rules.append(HomeSaleFlows(sale=timeline.sale))

    if isinstance(housing, PlannedPurchase) and planned_purchase_valid(housing):
        if housing.purchase_age > timeline.current_age:
            loan_start_age = housing.purchase_age
        else:
            loan_start_age = timeline.current_age + 1
        rules.append(PlannedPurchaseCosts(
            stop_age=stop_age,
            purchase_age=housing.purchase_age,
            down_payment=housing.down_payment,
            payment=annual_payment(housing.loan_amount, housing.loan_years, housing.loan_rate),
            loan_start_age=loan_start_age,
            loan_end_age=housing.loan_end_age,
        ))
    elif isinstance(housing, ExistingLoan):
        remaining = max(0, housing.remaining_years)
        rules.append(ExistingLoanCosts(
            stop_age=stop_age,
            payment=annual_payment(max(0.0, housing.balance), remaining, housing.rate),
            loan_end_age=timeline.current_age + remaining,
        ))
    return rules


def build_rules(
    state: HouseholdState, timeline: Timeline, calendar: EventCalendar,
) -> list[CashFlowRule]:
    """Return the rules in application order (inflows, outflows, transfer, events, housing, care, education)."""
    gross = max(0.0, state.gross_income)
    rules: list[CashFlowRule] = [
        WorkIncome(net_income(gross), timeline.retirement_age, state.income_curve),
    ]

    work = state.post_retirement_work
    if work is not None:
        rules.append(PostRetirementIncome(
            timeline.retirement_age, work.end_age, max(0.0, work.monthly_income) * 12,
        ))

    spouse = state.spouse
    if spouse is not None and spouse.age > 0:
        rules.append(SpouseIncome(
            net_income(max(0.0, spouse.gross_income)), spouse.age, max(1, spouse.retirement_age),
        ))

    rules.append(PublicPension(max(0.0, state.monthly_pension) * 12))
    rules.append(Severance(timeline.retirement_age, max(0.0, state.severance_pay)))

    plan = state.contribution
    if plan.ideco_enabled:
        ideco_annual = max(0.0, plan.ideco_monthly) * 12
        rules.append(ContributionTaxBenefit(
            min(timeline.contribution_end_age, CONTRIBUTION_LEGAL_MAX_AGE),
            contribution_tax_benefit(gross, ideco_annual),
        ))

    rules.append(LivingExpenses(
        max(0.0, state.monthly_expenses) * 12,
        tuple(child.age for child in state.children),
    ))
    rules.append(ContributionTransfer(
        timeline.contribution_end_age, max(0.0, plan.monthly_amount) * 12,
    ))
    rules.append(OneOffExpenses(calendar))
    rules.extend(_housing_rules(state, timeline))

    for care, onset in ((state.parent_care, timeline.parent_care_age),
                        (state.self_care, timeline.self_care_age)):
        if care is not None and onset is not None:
            rules.append(CareCost(onset, max(0.0, care.total_cost) / CARE_SPREAD_YEARS))

    if state.children:
        rules.append(EducationCosts(state.children))
    return rules
