"""Tests for individual yearly cash-flow rules."""

import pytest
from life_plan_jp import Child, HomeSale, IncomeCurve
from life_plan_jp.cashflows import (
    Balances,
    CareCost,
    ContributionTaxBenefit,
    ContributionTransfer,
    EducationCosts,
    ExistingLoanCosts,
    HomeSaleFlows,
    LivingExpenses,
    PlannedPurchaseCosts,
    PostRetirementIncome,
    PublicPension,
    Severance,
    SpouseIncome,
    WorkIncome,
    Year,
)


def _year(age, years_elapsed=1, inflation=1.0):
    return Year(age=age, years_elapsed=years_elapsed, inflation=inflation)


def _apply(rule, age, years_elapsed=1, inflation=1.0):
    bal = Balances()
    rule.apply(_year(age, years_elapsed, inflation), bal)
    return bal


class TestBalances:
    def test_total(self):
        assert Balances(cash=-50, liquid=100, locked=30).total == 80


class TestIncomeRules:
    def test_work_income_through_retirement_year(self):
        rule = WorkIncome(400, 65)
        assert _apply(rule, 65).cash == 400
        assert _apply(rule, 66).cash == 0

    def test_work_income_inflated(self):
        assert _apply(WorkIncome(400, 65), 40, 10, 1.1).cash == pytest.approx(440)

    def test_work_income_curve(self):
        rule = WorkIncome(400, 65, IncomeCurve(enabled=True, age1=55, rate1=0.85, age2=60, rate2=0.6))
        assert _apply(rule, 57).cash == pytest.approx(340)
        assert _apply(rule, 61).cash == pytest.approx(240)

    def test_post_retirement_income_window(self):
        rule = PostRetirementIncome(retirement_age=65, end_age=70, annual=120)
        assert _apply(rule, 65).cash == 0
        assert _apply(rule, 66).cash == 120
        assert _apply(rule, 70).cash == 120
        assert _apply(rule, 71).cash == 0

    def test_spouse_income_uses_spouse_age(self):
        rule = SpouseIncome(net_annual=240, start_age=60, retirement_age=62)
        assert _apply(rule, 40, years_elapsed=2).cash == 240
        assert _apply(rule, 41, years_elapsed=3).cash == 0

    def test_pension_from_65_nominal(self):
        rule = PublicPension(annual=180)
        assert _apply(rule, 64).cash == 0
        assert _apply(rule, 65, 30, 1.5).cash == 180

    def test_severance_once(self):
        rule = Severance(retirement_age=60, amount=1000)
        assert _apply(rule, 60).cash == 1000
        assert _apply(rule, 61).cash == 0

    def test_tax_benefit_until_end(self):
        rule = ContributionTaxBenefit(end_age=65, annual=4.8)
        assert _apply(rule, 65).cash == pytest.approx(4.8)
        assert _apply(rule, 66).cash == 0


class TestOutflowRules:
    def test_living_expenses_inflated(self):
        assert _apply(LivingExpenses(216), 31, 1, 1.01).cash == pytest.approx(-218.16)

    def test_living_expenses_child_surcharge(self):
        # 子12歳 → 1年後13歳（+36）、子15歳 → 16歳（+60）
        rule = LivingExpenses(0, child_ages=(12, 15))
        assert _apply(rule, 41).cash == pytest.approx(-96)

    def test_contribution_transfer_moves_cash(self):
        bal = _apply(ContributionTransfer(end_age=65, annual=36), 65)
        assert bal.cash == -36
        assert bal.liquid == 36
        assert bal.total == 0

    def test_contribution_transfer_stops(self):
        bal = _apply(ContributionTransfer(end_age=65, annual=36), 66)
        assert bal.liquid == 0

    def test_care_cost_spread(self):
        rule = CareCost(onset_age=55, annual=60)
        charged = [age for age in range(50, 65) if _apply(rule, age).cash < 0]
        assert charged == [55, 56, 57, 58, 59]

    def test_education_costs(self):
        rule = EducationCosts((Child(5, "all-public"), Child(2, "custom", 80)))
        # 1年後: 6歳（小学校35）+ 3歳（カスタム80）
        assert _apply(rule, 31).cash == -115


class TestHousingRules:
    def test_future_purchase(self):
        rule = PlannedPurchaseCosts(
            purchase_age=35, down_payment=600, payment=88,
            loan_start_age=35, loan_end_age=70,
        )
        assert rule.charges(34) == 0
        assert rule.charges(35) == 600 + 88 + 30
        assert rule.charges(69) == 88 + 30
        assert rule.charges(70) == 30

    def test_past_purchase_skips_down_payment(self):
        rule = PlannedPurchaseCosts(
            purchase_age=35, down_payment=600, payment=88,
            loan_start_age=41, loan_end_age=70,
        )
        assert not rule.is_future
        assert rule.charges(41) == 88 + 30
        assert rule.charges(70) == 30

    def test_existing_loan(self):
        rule = ExistingLoanCosts(payment=100, loan_end_age=60)
        assert rule.charges(60) == 130
        assert rule.charges(61) == 30

    def test_stop_age_suppresses_charges(self):
        rule = ExistingLoanCosts(stop_age=55, payment=100, loan_end_age=60)
        assert _apply(rule, 54).cash == -130
        assert _apply(rule, 55).cash == 0

    def test_sale_flows(self):
        rule = HomeSaleFlows(sale=HomeSale(age=75, price=2000, relocation_cost=500, monthly_rent=10))
        assert _apply(rule, 74).cash == 0
        assert _apply(rule, 75).cash == 1500
        assert _apply(rule, 76).cash == -120
