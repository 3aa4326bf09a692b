"""Take-home income and retirement-contribution tax benefit estimates."""

# 額面→手取り 概算掛け率（上限額面年収・万円, 手取り率）
_NET_INCOME_BRACKETS: tuple[tuple[float, float], ...] = (
    (500, 0.80),
    (1000, 0.75),
    (float("inf"), 0.70),
)

# iDeCo 掛金の所得控除による実効節税率（所得税 + 住民税10%）
_CONTRIBUTION_DEDUCTION_BRACKETS: tuple[tuple[float, float], ...] = (
    (500, 0.20),    # 所得税10% + 住民税10%
    (1000, 0.28),   # 所得税18% + 住民税10%
    (float("inf"), 0.33),  # 所得税23% + 住民税10%
)


def _bracket_rate(gross_annual: float, brackets: tuple[tuple[float, float], ...]) -> float:
    for upper, rate in brackets:
        if gross_annual <= upper:
            return rate
    return brackets[-1][1]  # pragma: no cover


def net_income(gross_annual: float) -> float:
    """Estimate take-home annual income (万円) from gross annual income.

    〜500万: 80%, 501〜1000万: 75%, 1001万〜: 70%. Just above a bracket
    boundary the result is held at the lower bracket's maximum, so a raise
    never lowers take-home pay.
    """
    if gross_annual <= 0:
        return 0.0
    floor = 0.0
    for upper, rate in _NET_INCOME_BRACKETS:
        if gross_annual <= upper:
            return max(floor, gross_annual * rate)
        floor = upper * rate
    return floor  # pragma: no cover


def contribution_tax_benefit(gross_annual: float, contribution_annual: float) -> float:
    """Annual tax saving (万円) from a fully deductible iDeCo contribution.

    The effective deduction rate depends on the contributor's gross income band.
    """
    if gross_annual <= 0 or contribution_annual <= 0:
        return 0.0
    return contribution_annual * _bracket_rate(gross_annual, _CONTRIBUTION_DEDUCTION_BRACKETS)
