"""Education cost table and age-banded living cost for dependents."""

EDUCATION_AGE_START = 3   # 幼稚園入園
EDUCATION_AGE_END = 21    # 大学卒業

CUSTOM_TRACK = "custom"

# 文部科学省「子供の学習費調査」ベースの概算（子の年齢帯 from〜to, 万円/年）
_EDUCATION_COSTS: dict[str, tuple[tuple[int, int, float], ...]] = {
    "all-public": (
        (3, 5, 20),     # 幼稚園（公立）
        (6, 11, 35),    # 小学校（公立）
        (12, 14, 50),   # 中学校（公立）
        (15, 17, 50),   # 高校（公立）
        (18, 21, 60),   # 大学（国公立）
    ),
    "high-private": (
        (3, 5, 20),
        (6, 11, 35),
        (12, 14, 50),
        (15, 17, 80),   # 高校（私立）
        (18, 21, 120),  # 大学（私立）
    ),
    "middle-private": (
        (3, 5, 20),
        (6, 11, 35),
        (12, 14, 120),  # 中学校（私立）
        (15, 17, 100),  # 高校（私立）
        (18, 21, 150),  # 大学（私立）
    ),
}

EDUCATION_TRACKS = (*_EDUCATION_COSTS, CUSTOM_TRACK)

# 子どもの成長に伴う追加生活費（子の年齢帯 from〜to, 万円/年）
CHILD_LIVING_SURCHARGE: tuple[tuple[int, int, float], ...] = (
    (13, 15, 36),  # 中学生（月+3万）
    (16, 22, 60),  # 高校生以上（月+5万）
)


def annual_education_cost(track: str, child_age: int, manual_amount: float = 0.0) -> float:
    """Return annual education cost (万円/年) for a child at given age."""
    if child_age < EDUCATION_AGE_START or child_age > EDUCATION_AGE_END:
        return 0.0
    if track == CUSTOM_TRACK:
        return manual_amount
    for lo, hi, annual in _EDUCATION_COSTS.get(track, ()):
        if lo <= child_age <= hi:
            return float(annual)
    return 0.0


def child_living_surcharge(child_age: int) -> float:
    """Extra annual living cost (万円/年, 現在価値) for one child at given age."""
    for lo, hi, annual in CHILD_LIVING_SURCHARGE:
        if lo <= child_age <= hi:
            return float(annual)
    return 0.0
