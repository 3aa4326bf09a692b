"""Display helpers for chart axes, summary cards and the diagnosis banner."""

from dataclasses import dataclass

from life_plan_jp.simulation import SimulationResult

OKU = 10000  # 1億円 = 10,000万円
DEPLETION_WARNING_AGE = 75  # これ以降の枯渇は「注意」扱い


def _plain_number(value: float, thousands: bool = False) -> str:
    """Integers without decimals, others with up to 3 significant decimals."""
    sep = "," if thousands else ""
    if value == int(value):
        return format(int(value), sep + "d")
    return format(value, sep + ".3f").rstrip("0").rstrip(".")


def format_currency(value: float, decimals: int = 1) -> str:
    """Format 万円 amount: 12345 → "1.2億円", 3200 → "3,200万円"."""
    sign = "-" if value < 0 else ""
    v = abs(value)
    if v >= OKU:
        return f"{sign}{v / OKU:.{decimals}f}億円"
    return f"{sign}{_plain_number(v, thousands=True)}万円"


def format_axis_label(value: float) -> str:
    """Short Y-axis tick label: 0, 500万, 3千万, 1.5億."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    v = abs(value)
    if v >= OKU:
        return f"{sign}{v / OKU:.1f}億"
    if v >= 1000:
        return f"{sign}{v / 1000:.0f}千万"
    return f"{sign}{_plain_number(v)}万"


@dataclass(frozen=True)
class Diagnosis:
    level: str  # "healthy" | "warning" | "danger"
    title: str
    subtitle: str


def diagnose(result: SimulationResult) -> Diagnosis:
    if result.depletion_age is None:
        return Diagnosis(
            level="healthy",
            title="100 歳まで資産は維持できる見込みです",
            subtitle=f"80 歳時点の予想資産: {format_currency(result.assets_at_80)}",
        )
    level = "warning" if result.depletion_age >= DEPLETION_WARNING_AGE else "danger"
    return Diagnosis(
        level=level,
        title=f"{result.depletion_age} 歳頃に資産が枯渇する見込みです",
        subtitle="利回りを上げるか、積立額を見直してプランを改善しましょう",
    )
