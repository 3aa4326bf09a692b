"""Tests for the life event calendar and setup-time timeline."""

from life_plan_jp import (
    CareEvent,
    ContributionPlan,
    ExistingLoan,
    HomeSale,
    HouseholdState,
    IncomeCurve,
    MajorExpense,
    PlannedPurchase,
    PostRetirementWork,
    build_event_calendar,
)
from life_plan_jp.timeline import resolve_timeline


def _calendar(state):
    return build_event_calendar(state, resolve_timeline(state))


class TestResolveTimeline:
    def test_age_floor(self):
        assert resolve_timeline(HouseholdState(age=10)).current_age == 18

    def test_retirement_after_current(self):
        t = resolve_timeline(HouseholdState(age=70, retirement_age=65))
        assert t.retirement_age == 71

    def test_sale_age_clamped_to_next_year(self):
        sale = HomeSale(age=40, price=-100)
        state = HouseholdState(age=50, housing=ExistingLoan(1000, 10, 1.0, sale=sale))
        t = resolve_timeline(state)
        assert t.sale.age == 51
        assert t.sale.price == 0

    def test_sale_ignored_without_home(self):
        assert resolve_timeline(HouseholdState()).sale is None

    def test_care_onset_not_before_today(self):
        state = HouseholdState(age=50, parent_care=CareEvent(45, 500), self_care=CareEvent(85, 500))
        t = resolve_timeline(state)
        assert t.parent_care_age == 50
        assert t.self_care_age == 85

    def test_contribution_auto_stop_at_retirement(self):
        assert resolve_timeline(HouseholdState(retirement_age=60)).contribution_end_age == 60

    def test_contribution_auto_stop_at_income_decline(self):
        curve = IncomeCurve(enabled=True, age1=55)
        state = HouseholdState(retirement_age=65, income_curve=curve)
        assert resolve_timeline(state).contribution_end_age == 55

    def test_contribution_past_decline_ignored(self):
        curve = IncomeCurve(enabled=True, age1=55)
        state = HouseholdState(age=57, retirement_age=65, income_curve=curve)
        assert resolve_timeline(state).contribution_end_age == 65

    def test_contribution_custom_end(self):
        plan = ContributionPlan(monthly_amount=5, auto_stop=False, custom_end_age=50)
        assert resolve_timeline(HouseholdState(contribution=plan)).contribution_end_age == 50

    def test_contribution_custom_end_unset(self):
        plan = ContributionPlan(monthly_amount=5, auto_stop=False)
        state = HouseholdState(retirement_age=62, contribution=plan)
        assert resolve_timeline(state).contribution_end_age == 62


class TestEventCalendar:
    def setup_method(self):
        self.state = HouseholdState(
            age=30,
            retirement_age=65,
            severance_pay=1500,
            housing=PlannedPurchase(
                purchase_age=35, price=3000, down_payment=600,
                sale=HomeSale(age=75, price=1500),
            ),
            income_curve=IncomeCurve(enabled=True, age1=55, rate1=0.85, age2=60, rate2=0.6),
            post_retirement_work=PostRetirementWork(end_age=70, monthly_income=10),
            parent_care=CareEvent(55, 300),
            self_care=CareEvent(80, 500),
            major_expenses=(
                MajorExpense("旅行", 200, 65),
                MajorExpense("車の購入", 100, 45),
                MajorExpense("車検", 200, 45),
            ),
        )
        self.cal = _calendar(self.state)

    def test_retirement_labels_in_order(self):
        assert self.cal.labels_at(65) == ["リタイア", "退職金", "旅行"]

    def test_housing_labels(self):
        assert self.cal.labels_at(35) == ["住宅購入"]
        assert self.cal.labels_at(75) == ["住宅売却"]

    def test_multiple_events_same_age(self):
        assert self.cal.labels_at(55) == ["収入減少①", "積立終了", "親の介護"]

    def test_other_labels(self):
        assert self.cal.labels_at(60) == ["収入減少②"]
        assert self.cal.labels_at(70) == ["就労終了"]
        assert self.cal.labels_at(80) == ["自身の介護"]

    def test_amounts_accumulate(self):
        assert self.cal.amount_at(45) == 300
        assert self.cal.amount_at(65) == 200
        assert self.cal.amount_at(50) == 0

    def test_labels_at_returns_copy(self):
        self.cal.labels_at(35).append("x")
        assert self.cal.labels_at(35) == ["住宅購入"]

    def test_no_severance_label_when_zero(self):
        cal = _calendar(HouseholdState(retirement_age=60))
        assert cal.labels_at(60) == ["リタイア"]


class TestMajorExpenseFiltering:
    def test_zero_amount_has_no_label(self):
        cal = _calendar(HouseholdState(major_expenses=(MajorExpense("その他", 0, 40),)))
        assert cal.labels_at(40) == []
        assert cal.amount_at(40) == 0

    def test_disabled_skipped(self):
        expense = MajorExpense("旅行", 100, 40, enabled=False)
        cal = _calendar(HouseholdState(major_expenses=(expense,)))
        assert cal.labels_at(40) == []
        assert cal.amount_at(40) == 0

    def test_missing_age_skipped(self):
        cal = _calendar(HouseholdState(major_expenses=(MajorExpense("旅行", 100, None),)))
        assert cal.amounts == {}

    def test_past_or_current_age_skipped(self):
        expenses = (MajorExpense("過去", 100, 25), MajorExpense("今年", 100, 30))
        cal = _calendar(HouseholdState(age=30, major_expenses=expenses))
        assert cal.amounts == {}

    def test_beyond_horizon_skipped(self):
        cal = _calendar(HouseholdState(major_expenses=(MajorExpense("遠い将来", 100, 101),)))
        assert cal.amounts == {}


class TestPurchaseLabel:
    def test_past_purchase_has_no_label(self):
        cal = _calendar(HouseholdState(age=40, housing=PlannedPurchase(purchase_age=35, price=3000)))
        assert "住宅購入" not in sum(cal.labels.values(), [])

    def test_unset_purchase_age(self):
        cal = _calendar(HouseholdState(housing=PlannedPurchase(purchase_age=0, price=3000)))
        assert "住宅購入" not in sum(cal.labels.values(), [])
