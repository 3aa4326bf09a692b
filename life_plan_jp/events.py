"""Life event calendar: chart labels and one-off expense amounts by age."""

from dataclasses import dataclass, field

from life_plan_jp.household import HouseholdState, PlannedPurchase
from life_plan_jp.params import END_AGE
from life_plan_jp.timeline import Timeline, planned_purchase_valid

LABEL_RETIREMENT = "リタイア"
LABEL_SEVERANCE = "退職金"
LABEL_PURCHASE = "住宅購入"
LABEL_SALE = "住宅売却"
LABEL_DECLINE_1 = "収入減少①"
LABEL_DECLINE_2 = "収入減少②"
LABEL_CONTRIBUTION_END = "積立終了"
LABEL_WORK_END = "就労終了"
LABEL_PARENT_CARE = "親の介護"
LABEL_SELF_CARE = "自身の介護"


@dataclass
class EventCalendar:
    """Pre-computed event calendar for a single projection run."""

    labels: dict[int, list[str]] = field(default_factory=dict)
    amounts: dict[int, float] = field(default_factory=dict)

    def add_label(self, age: int, label: str) -> None:
        self.labels.setdefault(age, []).append(label)

    def add_amount(self, age: int, amount: float) -> None:
        self.amounts[age] = self.amounts.get(age, 0.0) + amount

    def labels_at(self, age: int) -> list[str]:
        return list(self.labels.get(age, ()))

    def amount_at(self, age: int) -> float:
        return self.amounts.get(age, 0.0)


def build_event_calendar(state: HouseholdState, timeline: Timeline) -> EventCalendar:
    """Collect labels (multiple events at one age accumulate) and one-off expenses."""
    cal = EventCalendar()

    cal.add_label(timeline.retirement_age, LABEL_RETIREMENT)
    if state.severance_pay > 0:
        cal.add_label(timeline.retirement_age, LABEL_SEVERANCE)

    housing = state.housing
    if (isinstance(housing, PlannedPurchase) and planned_purchase_valid(housing)
            and housing.purchase_age > timeline.current_age):
        cal.add_label(housing.purchase_age, LABEL_PURCHASE)

    if timeline.sale is not None and timeline.sale.age <= END_AGE:
        cal.add_label(timeline.sale.age, LABEL_SALE)

    curve = state.income_curve
    if curve.enabled and timeline.is_future(curve.age1):
        cal.add_label(curve.age1, LABEL_DECLINE_1)

    # 積立終了はリタイアより早く止まる場合のみ表示
    end_age = timeline.contribution_end_age
    if end_age < timeline.retirement_age and timeline.is_future(end_age):
        cal.add_label(end_age, LABEL_CONTRIBUTION_END)

    if curve.enabled and timeline.is_future(curve.age2):
        cal.add_label(curve.age2, LABEL_DECLINE_2)

    work = state.post_retirement_work
    if work is not None and timeline.retirement_age < work.end_age <= END_AGE:
        cal.add_label(work.end_age, LABEL_WORK_END)

    if timeline.parent_care_age is not None and timeline.parent_care_age <= END_AGE:
        cal.add_label(timeline.parent_care_age, LABEL_PARENT_CARE)
    if timeline.self_care_age is not None and timeline.self_care_age <= END_AGE:
        cal.add_label(timeline.self_care_age, LABEL_SELF_CARE)

    for expense in state.major_expenses:
        if not expense.enabled or expense.target_age is None:
            continue
        if not timeline.is_future(expense.target_age):
            continue
        # 金額が設定されている場合のみラベル表示
        if expense.amount > 0:
            cal.add_label(expense.target_age, expense.label)
        cal.add_amount(expense.target_age, expense.amount)

    return cal
