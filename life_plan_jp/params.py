"""Simulation parameters and financial calculation helpers."""

from dataclasses import dataclass

# Projection horizon
END_AGE = 100
REFERENCE_AGE = 80  # サマリー表示用の基準年齢

DEFAULT_INVESTMENT_RATE = 3.0  # %/年
DEFAULT_INFLATION_RATE = 1.0   # %/年


@dataclass(frozen=True)
class SimulationParams:
    """Macro-economic assumptions, both in percent per year (3.0 = 3%)."""

    investment_rate: float = DEFAULT_INVESTMENT_RATE
    inflation_rate: float = DEFAULT_INFLATION_RATE

    @property
    def investment_return(self) -> float:
        return self.investment_rate / 100

    def inflation_factor(self, years: int) -> float:
        """Cumulative price level after `years` of compounding inflation."""
        return (1 + self.inflation_rate / 100) ** years


def annual_payment(principal: float, years: int, annual_rate_pct: float) -> float:
    """Annual repayment of a fixed-rate loan (元利均等返済).

    The installment is computed monthly (rate / 12, years × 12 payments) and
    returned as the yearly total. A zero rate degrades to principal / years.
    """
    if principal <= 0 or years <= 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    n = years * 12
    if r == 0:
        return principal / years
    try:
        growth = (1 + r) ** n
    except OverflowError:
        # 複利が発散する極端な入力では利息のみの返済額に収束
        return principal * r * 12
    monthly = principal * r * growth / (growth - 1)
    return monthly * 12
