"""Household Lifetime Asset Projection Package."""

from life_plan_jp.params import (
    SimulationParams,
    annual_payment,
    END_AGE,
    REFERENCE_AGE,
)
from life_plan_jp.household import (
    HouseholdState,
    Spouse,
    Child,
    ContributionPlan,
    IncomeCurve,
    NoHousing,
    PlannedPurchase,
    ExistingLoan,
    HomeSale,
    PostRetirementWork,
    CareEvent,
    MajorExpense,
    household_from_dict,
    validate_household,
)
from life_plan_jp.simulation import (
    project,
    SimulationResult,
    YearlyDataPoint,
    LOCKED_UNLOCK_AGE,
)
from life_plan_jp.events import EventCalendar, build_event_calendar
from life_plan_jp.education import annual_education_cost
from life_plan_jp.tax import net_income, contribution_tax_benefit
from life_plan_jp.formatting import format_currency, format_axis_label, diagnose
from life_plan_jp.scenarios import SCENARIOS, run_scenarios, sweep_investment_rates

__all__ = [
    "SimulationParams",
    "annual_payment",
    "END_AGE",
    "REFERENCE_AGE",
    "HouseholdState",
    "Spouse",
    "Child",
    "ContributionPlan",
    "IncomeCurve",
    "NoHousing",
    "PlannedPurchase",
    "ExistingLoan",
    "HomeSale",
    "PostRetirementWork",
    "CareEvent",
    "MajorExpense",
    "household_from_dict",
    "validate_household",
    "project",
    "SimulationResult",
    "YearlyDataPoint",
    "LOCKED_UNLOCK_AGE",
    "EventCalendar",
    "build_event_calendar",
    "annual_education_cost",
    "net_income",
    "contribution_tax_benefit",
    "format_currency",
    "format_axis_label",
    "diagnose",
    "SCENARIOS",
    "run_scenarios",
    "sweep_investment_rates",
]
